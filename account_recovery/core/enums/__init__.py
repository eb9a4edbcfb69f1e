"""Core enums package.

Usage:
    from account_recovery.core.enums import ErrorCode, Environment
"""

from account_recovery.core.enums.environment import Environment
from account_recovery.core.enums.error_code import ErrorCode

__all__ = ["ErrorCode", "Environment"]
