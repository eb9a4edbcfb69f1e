"""Core errors package.

Usage:
    from account_recovery.core.errors import DomainError, ValidationError
"""

from account_recovery.core.errors.common_errors import ValidationError
from account_recovery.core.errors.domain_error import DomainError

__all__ = [
    "DomainError",
    "ValidationError",
]
