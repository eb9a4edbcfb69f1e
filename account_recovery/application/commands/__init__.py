"""Application commands package."""

from account_recovery.application.commands.password_reset_commands import (
    ConfirmPasswordReset,
    PasswordResetCompleted,
    PasswordResetRequested,
    RequestPasswordReset,
)

__all__ = [
    "ConfirmPasswordReset",
    "PasswordResetCompleted",
    "PasswordResetRequested",
    "RequestPasswordReset",
]
