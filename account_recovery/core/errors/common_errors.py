"""Common error classes used across layers.

Usage:
    from account_recovery.core.errors import ValidationError
    from account_recovery.core.enums import ErrorCode
    from account_recovery.core.result import Failure

    return Failure(error=ValidationError(
        code=ErrorCode.INVALID_PASSWORD,
        message="New password must not be empty",
        field="new_password",
    ))
"""

from dataclasses import dataclass

from account_recovery.core.errors.domain_error import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class ValidationError(DomainError):
    """Input validation failure.

    Attributes:
        code: ErrorCode enum.
        message: Human-readable message.
        field: Field name that failed validation.
        details: Additional context.
    """

    field: str | None = None
