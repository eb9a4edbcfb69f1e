"""Logging adapters."""

from account_recovery.infrastructure.logging.console_adapter import ConsoleAdapter

__all__ = ["ConsoleAdapter"]
