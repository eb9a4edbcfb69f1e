"""Security adapters (hashing, token codec)."""

from account_recovery.infrastructure.security.bcrypt_password_service import (
    BcryptPasswordService,
)
from account_recovery.infrastructure.security.reset_token_codec import ResetTokenCodec

__all__ = ["BcryptPasswordService", "ResetTokenCodec"]
