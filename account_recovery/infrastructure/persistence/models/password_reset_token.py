"""Password reset token database model.

Security:
    - token_hash: SHA-256 hex digest of the emailed token; the raw token is
      never stored
    - expires_at: creation time plus the configured TTL
    - used_at: set exactly once (redemption or invalidation)
    - request_ip/request_agent: who asked for the reset (audit)
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import DateTime, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from account_recovery.core.constants import (
    AUDIT_FIELD_MAX_LENGTH,
    REQUEST_IP_MAX_LENGTH,
    TOKEN_DIGEST_LENGTH,
)
from account_recovery.infrastructure.persistence.base import BaseModel


class PasswordResetTokenModel(BaseModel):
    """Password reset token row.

    Indexes:
        - token_hash (unique) for redemption lookup
        - user_id for invalidation of a user's live tokens
        - idx_password_reset_cleanup: (expires_at, used_at) for purges

    Foreign Keys:
        - user_id: References users(id) ON DELETE CASCADE
    """

    __tablename__ = "password_reset_tokens"

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="User who requested the reset",
    )

    token_hash: Mapped[str] = mapped_column(
        String(TOKEN_DIGEST_LENGTH),
        nullable=False,
        unique=True,
        index=True,
        comment="SHA-256 hex digest of the reset token",
    )

    expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        comment="Timestamp when token expires",
    )

    used_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=None,
        comment="Timestamp when token was used or invalidated",
    )

    request_ip: Mapped[str | None] = mapped_column(
        String(REQUEST_IP_MAX_LENGTH),
        nullable=True,
        comment="IP address of requester",
    )

    request_agent: Mapped[str | None] = mapped_column(
        String(AUDIT_FIELD_MAX_LENGTH),
        nullable=True,
        comment="User agent of requester",
    )

    __table_args__ = (Index("idx_password_reset_cleanup", "expires_at", "used_at"),)

    def __repr__(self) -> str:
        return (
            f"<PasswordResetTokenModel("
            f"id={self.id}, "
            f"user_id={self.user_id}, "
            f"expires_at={self.expires_at}, "
            f"used={self.used_at is not None}"
            f")>"
        )
