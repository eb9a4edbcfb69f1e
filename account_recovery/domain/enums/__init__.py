"""Domain enums package."""

from account_recovery.domain.enums.token_state import TokenState

__all__ = ["TokenState"]
