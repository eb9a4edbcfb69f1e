"""Domain entities for business logic.

Pure business logic entities with no framework dependencies.
"""

from account_recovery.domain.entities.password_reset_token import ResetToken
from account_recovery.domain.entities.user import User

__all__ = [
    "ResetToken",
    "User",
]
