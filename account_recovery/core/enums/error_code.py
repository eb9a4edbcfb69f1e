"""Domain-level error codes (machine-readable).

Error codes follow ENTITY_ACTION_REASON naming convention.
Used with Result types for railway-oriented programming.
"""

from enum import Enum


class ErrorCode(Enum):
    """Domain-level error codes (machine-readable)."""

    # Validation errors
    INVALID_PASSWORD = "invalid_password"

    # Authentication errors
    TOKEN_INVALID = "token_invalid"

    # Infrastructure failures surfaced to callers
    STORAGE_UNAVAILABLE = "storage_unavailable"
