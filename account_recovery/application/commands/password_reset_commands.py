"""Password reset commands (write operations).

Commands represent user intent to change system state.
All commands are immutable (frozen=True) and use keyword-only arguments.

Pattern:
- Commands are data containers (no logic)
- The service executes business logic and returns Result types
- Optional timestamps let callers pin "now" (tests, replays); None means
  the current UTC time
"""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, kw_only=True)
class RequestPasswordReset:
    """Request a password reset link for an email address.

    Attributes:
        email: Address typed by the requester (matched case-insensitively).
        request_ip: Requester IP address (audit only).
        request_agent: Requester User-Agent header (audit only).
        locale: Locale for the outgoing email, None for the default.
        requested_at: Request timestamp, None for now.

    Example:
        >>> command = RequestPasswordReset(
        ...     email="alice@example.com",
        ...     request_ip="203.0.113.7",
        ...     request_agent="Mozilla/5.0",
        ... )
        >>> result = await service.request_reset(command)
    """

    email: str
    request_ip: str | None = None
    request_agent: str | None = None
    locale: str | None = None
    requested_at: datetime | None = None


@dataclass(frozen=True, kw_only=True)
class ConfirmPasswordReset:
    """Redeem a reset token and set a new password.

    Attributes:
        token: Raw token from the reset link.
        new_password: New plaintext password (hashed before storage).
        redeemed_at: Redemption timestamp, None for now.
    """

    token: str
    new_password: str | None
    redeemed_at: datetime | None = None


@dataclass(frozen=True, kw_only=True)
class PasswordResetRequested:
    """Uniform response to a reset request.

    Identical whether or not the email belongs to an account.
    """

    message: str = (
        "If an account with that email exists, a password reset link has been sent."
    )


@dataclass(frozen=True, kw_only=True)
class PasswordResetCompleted:
    """Response data for a successful reset redemption."""

    message: str = (
        "Password has been reset successfully. Please sign in with your new password."
    )
