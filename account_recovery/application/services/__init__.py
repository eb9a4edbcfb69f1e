"""Application services package."""

from account_recovery.application.services.password_reset_service import (
    PasswordResetService,
)

__all__ = ["PasswordResetService"]
