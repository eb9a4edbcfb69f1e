"""Database models.

Importing this package registers every table on BaseModel.metadata
(needed by Alembic autogenerate and Database.create_all).
"""

from account_recovery.infrastructure.persistence.models.password_reset_token import (
    PasswordResetTokenModel,
)
from account_recovery.infrastructure.persistence.models.user import UserModel

__all__ = ["PasswordResetTokenModel", "UserModel"]
