"""PasswordResetTokenRepository protocol (port) for domain layer.

Defines the interface for reset token persistence that the application
layer needs. Infrastructure provides concrete implementations.

Tokens are keyed by digest. The raw token never reaches this port.
"""

from contextlib import AbstractAsyncContextManager
from datetime import datetime
from typing import Protocol
from uuid import UUID

from account_recovery.domain.entities.password_reset_token import ResetToken


class PasswordResetTokenRepository(Protocol):
    """Protocol for password reset token persistence operations.

    Token Lifecycle:
        1. Prior live tokens invalidated, new token saved (one transaction)
        2. Looked up by digest during redemption
        3. Claimed with a conditional update (exactly one winner)
        4. Purged once used or long expired

    Failure Mode:
        Storage failures raise TransientStorageError. They are never
        swallowed by implementations.

    Implementations:
        - PasswordResetTokenRepository (SQLAlchemy):
          account_recovery/infrastructure/persistence/repositories/
    """

    def atomic(self) -> AbstractAsyncContextManager[None]:
        """Group the calls made inside the block into one transaction.

        Commits on normal exit, rolls back when the block raises. A
        CredentialStore sharing the same transaction joins the block, so a
        claim and the credential write it guards commit together.

        Example:
            >>> async with repo.atomic():
            ...     await repo.invalidate_all_live_for_user(user_id, now)
            ...     await repo.save(token)
        """
        ...

    async def save(self, token: ResetToken) -> None:
        """Insert or update a reset token (upsert by id).

        Args:
            token: Token entity carrying the digest, never the raw value.
        """
        ...

    async def find_by_digest(self, token_hash: str) -> ResetToken | None:
        """Find a reset token by its stored digest.

        Returns used and expired tokens too; validity is the caller's call.

        Args:
            token_hash: Hex digest of the presented raw token.

        Returns:
            ResetToken if a row has this digest, None otherwise.
        """
        ...

    async def invalidate_all_live_for_user(self, user_id: UUID, now: datetime) -> int:
        """Retire every live token of a user by setting used_at = now.

        Args:
            user_id: Owning user.
            now: Invalidation timestamp (UTC).

        Returns:
            Number of tokens invalidated.
        """
        ...

    async def mark_used(self, token_id: UUID, used_at: datetime) -> bool:
        """Consume a token if, and only if, it is still live.

        Conditional update: succeeds when the row is unused and
        used_at < expires_at. Two concurrent callers cannot both win.

        Args:
            token_id: Token identifier.
            used_at: Redemption timestamp (UTC).

        Returns:
            True when this call consumed the token, False otherwise.
        """
        ...

    async def purge_inert(self, before: datetime) -> int:
        """Delete tokens that are used or expired before the given time.

        Storage hygiene only; correctness never depends on it.

        Returns:
            Number of tokens deleted.
        """
        ...
