"""Repository implementations (SQLAlchemy adapters for domain protocols)."""

from account_recovery.infrastructure.persistence.repositories.password_reset_token_repository import (
    PasswordResetTokenRepository,
)
from account_recovery.infrastructure.persistence.repositories.user_repository import (
    UserRepository,
)

__all__ = ["PasswordResetTokenRepository", "UserRepository"]
