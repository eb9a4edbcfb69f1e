"""Password reset domain errors.

Two families live here:

- Result errors (DomainError dataclasses, returned in Failure, never raised):
    InvalidResetTokenError, StorageUnavailableError
- Adapter exceptions (raised at infrastructure seams, caught by the service):
    TransientStorageError, NotificationDeliveryError

TokenRejectionReason keeps the precise reason a redemption was refused.
It is written to logs only; every reason maps to the same public
InvalidResetTokenError so callers cannot probe token state.
"""

from dataclasses import dataclass
from enum import Enum

from account_recovery.core.enums import ErrorCode
from account_recovery.core.errors import DomainError

INVALID_RESET_TOKEN_MESSAGE = "Password reset link is invalid or has expired."
STORAGE_UNAVAILABLE_MESSAGE = "Password reset is temporarily unavailable. Please try again later."


class TokenRejectionReason(str, Enum):
    """Internal reasons a reset token was refused (log-only)."""

    NOT_FOUND = "token_not_found"
    ALREADY_USED = "token_already_used"
    EXPIRED = "token_expired"
    USER_NOT_FOUND = "user_not_found"
    CLAIM_LOST = "token_claim_lost"


@dataclass(frozen=True, slots=True, kw_only=True)
class InvalidResetTokenError(DomainError):
    """Unified failure for not-found, used and expired reset tokens."""

    code: ErrorCode = ErrorCode.TOKEN_INVALID
    message: str = INVALID_RESET_TOKEN_MESSAGE


@dataclass(frozen=True, slots=True, kw_only=True)
class StorageUnavailableError(DomainError):
    """Token or credential storage could not be reached."""

    code: ErrorCode = ErrorCode.STORAGE_UNAVAILABLE
    message: str = STORAGE_UNAVAILABLE_MESSAGE


class TransientStorageError(Exception):
    """Raised by storage adapters when the backing store fails.

    Callers may retry; the service maps it to StorageUnavailableError.
    """


class NotificationDeliveryError(Exception):
    """Raised by notification gateways when a message cannot be sent."""
