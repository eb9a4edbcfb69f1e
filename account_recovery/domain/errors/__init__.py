"""Domain errors package.

Usage:
    from account_recovery.domain.errors import InvalidResetTokenError
"""

from account_recovery.domain.errors.password_reset_error import (
    INVALID_RESET_TOKEN_MESSAGE,
    STORAGE_UNAVAILABLE_MESSAGE,
    InvalidResetTokenError,
    NotificationDeliveryError,
    StorageUnavailableError,
    TokenRejectionReason,
    TransientStorageError,
)

__all__ = [
    "INVALID_RESET_TOKEN_MESSAGE",
    "STORAGE_UNAVAILABLE_MESSAGE",
    "InvalidResetTokenError",
    "NotificationDeliveryError",
    "StorageUnavailableError",
    "TokenRejectionReason",
    "TransientStorageError",
]
