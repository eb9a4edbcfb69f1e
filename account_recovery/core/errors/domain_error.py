"""Base domain error class for Railway-Oriented Programming.

DomainError is the base class for every error that travels inside a
Result. It does NOT inherit from Exception: these errors are returned as
data, never raised.

Usage:
    from account_recovery.core.errors import DomainError

    @dataclass(frozen=True, slots=True, kw_only=True)
    class MyError(DomainError):
        pass  # Inherits code, message, details
"""

from dataclasses import dataclass

from account_recovery.core.enums import ErrorCode


@dataclass(frozen=True, slots=True, kw_only=True)
class DomainError:
    """Base domain error (does NOT inherit from Exception).

    Attributes:
        code: Machine-readable error code (enum).
        message: Human-readable error message.
        details: Optional context for debugging.
    """

    code: ErrorCode
    message: str
    details: dict[str, str] | None = None

    def __str__(self) -> str:
        """String representation of error."""
        return f"{self.code.value}: {self.message}"
