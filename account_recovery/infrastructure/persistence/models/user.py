"""User database model.

Only the columns password recovery reads or writes. The user
administration screens own the rest of the account lifecycle.

Security:
    - password_hash: NEVER stores plaintext passwords (bcrypt hashed)
    - account_non_locked / failed_login_attempts: cleared by a reset
"""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from account_recovery.infrastructure.persistence.base import BaseMutableModel


class UserModel(BaseMutableModel):
    """User model for credentials and account state.

    Indexes:
        - username (unique)
        - email (unique; looked up case-insensitively)
    """

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        unique=True,
        index=True,
        comment="Login name",
    )

    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
        comment="User email address (unique)",
    )

    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Bcrypt hashed password",
    )

    is_active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        comment="Account active status",
    )

    account_non_locked: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        comment="False while the account is locked",
    )

    failed_login_attempts: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        comment="Counter for failed login attempts",
    )

    must_change_password: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        comment="Force a password change at next sign-in",
    )

    email_verified: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        comment="Email verification status",
    )

    last_password_change: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=None,
        comment="When the password was last set",
    )

    password_expires_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=None,
        comment="When the current password expires",
    )

    def __repr__(self) -> str:
        return (
            f"<UserModel("
            f"id={self.id}, "
            f"username={self.username!r}, "
            f"is_active={self.is_active}"
            f")>"
        )
