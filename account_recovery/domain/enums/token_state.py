"""Lifecycle states of a password reset token.

LIVE -> USED is the only explicit transition. EXPIRED is reached implicitly
by time and is never written. USED and EXPIRED are terminal.
"""

from enum import Enum


class TokenState(str, Enum):
    """Password reset token state at a given instant."""

    LIVE = "live"
    USED = "used"
    EXPIRED = "expired"
