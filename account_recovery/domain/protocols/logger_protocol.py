"""LoggerProtocol definition for structured logging.

Standardizes structured logging across the codebase while remaining
backend-agnostic. Implementations MUST keep logs structured (message plus
key-value context).

Log Levels:
    - DEBUG: Detailed diagnostic info (dev only)
    - INFO: Normal operational events
    - WARNING: Refused or degraded operations
    - ERROR: Operation failed, system continues
    - CRITICAL: Integrity at risk, immediate attention

Security:
    - NEVER log passwords, raw reset tokens or token digests
    - Log user ids rather than email addresses

Usage:
    from account_recovery.core.container import get_logger

    logger = get_logger()
    reset_logger = logger.bind(operation="password_reset_redeem")
    reset_logger.warning("Reset token rejected", reason="token_expired")
"""

from __future__ import annotations

from typing import Any, Protocol


class LoggerProtocol(Protocol):
    """Protocol for structured logging adapters.

    Implementations may enrich logs with timestamp and level.
    """

    def debug(self, message: str, /, **context: Any) -> None:
        """Log a debug-level message."""
        ...

    def info(self, message: str, /, **context: Any) -> None:
        """Log an info-level message."""
        ...

    def warning(self, message: str, /, **context: Any) -> None:
        """Log a warning-level message."""
        ...

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log an error-level message with optional exception details.

        Args:
            message: Human-readable message (avoid f-strings; use context).
            error: Optional exception instance; implementation may include
                error_type and error_message fields.
            **context: Structured key-value context fields.
        """
        ...

    def critical(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log a critical-level message.

        Reserved for states that need a human: a reset token consumed without
        the matching credential change, for example.

        Args:
            message: Human-readable message (avoid f-strings; use context).
            error: Optional exception instance.
            **context: Structured key-value context fields.
        """
        ...

    def bind(self, **context: Any) -> "LoggerProtocol":
        """Return new logger with permanently bound context.

        Original logger instance remains unchanged (immutable pattern).

        Args:
            **context: Context to bind to all future logs.

        Returns:
            New logger instance with bound context.
        """
        ...

    def with_context(self, **context: Any) -> "LoggerProtocol":
        """Alias for bind()."""
        ...
