"""ResetToken domain entity.

A reset token record never holds the raw token sent to the user; only its
one-way digest is kept and used as the lookup key.

Token Lifecycle:
    1. Issued on reset request (LIVE, expires_at = created_at + TTL)
    2. Looked up by digest on redemption
    3. Marked used exactly once (USED, terminal)
    4. Or left alone until expires_at passes (EXPIRED, terminal, implicit)
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from uuid import UUID

from uuid_extensions import uuid7

from account_recovery.core.constants import AUDIT_FIELD_MAX_LENGTH, REQUEST_IP_MAX_LENGTH
from account_recovery.domain.enums import TokenState


def truncate_audit_field(value: str | None, max_length: int = AUDIT_FIELD_MAX_LENGTH) -> str | None:
    """Clip audit metadata to the stored column length."""
    if value is None:
        return None
    return value[:max_length]


@dataclass
class ResetToken:
    """Single-use, time-limited password reset token.

    Attributes:
        id: Token identifier (UUIDv7).
        user_id: Owning user (back-reference only).
        token_hash: Hex SHA-256 digest of the raw token.
        created_at: Issue timestamp (UTC).
        expires_at: created_at + TTL.
        used_at: Set once on successful redemption or invalidation.
        request_ip: Requester IP (audit only).
        request_agent: Requester user agent (audit only).
    """

    user_id: UUID
    token_hash: str
    created_at: datetime
    expires_at: datetime
    used_at: datetime | None = None
    request_ip: str | None = None
    request_agent: str | None = None
    id: UUID = field(default_factory=uuid7)

    @classmethod
    def issue(
        cls,
        *,
        user_id: UUID,
        token_hash: str,
        now: datetime,
        ttl_minutes: int,
        request_ip: str | None = None,
        request_agent: str | None = None,
    ) -> "ResetToken":
        """Create a fresh LIVE token expiring ttl_minutes after now.

        Audit metadata is truncated to the column limits.
        """
        return cls(
            user_id=user_id,
            token_hash=token_hash,
            created_at=now,
            expires_at=now + timedelta(minutes=ttl_minutes),
            request_ip=truncate_audit_field(request_ip, REQUEST_IP_MAX_LENGTH),
            request_agent=truncate_audit_field(request_agent),
        )

    def is_used(self) -> bool:
        return self.used_at is not None

    def is_expired(self, now: datetime) -> bool:
        """Expiry is inclusive: a token is dead at exactly expires_at."""
        return now >= self.expires_at

    def state(self, now: datetime) -> TokenState:
        """Current lifecycle state. USED takes precedence over EXPIRED."""
        if self.is_used():
            return TokenState.USED
        if self.is_expired(now):
            return TokenState.EXPIRED
        return TokenState.LIVE

    def is_live(self, now: datetime) -> bool:
        return self.state(now) is TokenState.LIVE
