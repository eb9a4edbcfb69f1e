"""Core shared kernel.

Foundational utilities used across all architectural layers:
- Result types for railway-oriented programming
- Base error classes for domain-level error handling
- Settings and internal constants

The core module has NO dependencies on other application layers.
"""

from account_recovery.core.enums import ErrorCode
from account_recovery.core.errors import DomainError, ValidationError
from account_recovery.core.result import Failure, Result, Success

__all__ = [
    "DomainError",
    "ErrorCode",
    "Failure",
    "Result",
    "Success",
    "ValidationError",
]
