"""API routers."""

from account_recovery.presentation.routers.password_resets import (
    password_reset_tokens_router,
    password_resets_router,
)

__all__ = ["password_reset_tokens_router", "password_resets_router"]
