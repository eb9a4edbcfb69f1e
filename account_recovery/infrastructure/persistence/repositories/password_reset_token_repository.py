"""PasswordResetTokenRepository - SQLAlchemy implementation for reset token persistence.

Tokens are keyed by digest. Single use is enforced in the database with a
conditional UPDATE, so two sessions racing on the same token cannot both
consume it.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime
from uuid import UUID

from sqlalchemy import delete, or_, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from account_recovery.domain.entities.password_reset_token import ResetToken
from account_recovery.domain.errors import TransientStorageError
from account_recovery.infrastructure.persistence.base import (
    ATOMIC_SESSION_KEY,
    as_utc,
    in_atomic_block,
)
from account_recovery.infrastructure.persistence.models.password_reset_token import (
    PasswordResetTokenModel,
)


def _to_domain(model: PasswordResetTokenModel) -> ResetToken:
    """Convert database model to domain entity."""
    return ResetToken(
        id=model.id,
        user_id=model.user_id,
        token_hash=model.token_hash,
        created_at=as_utc(model.created_at),
        expires_at=as_utc(model.expires_at),
        used_at=as_utc(model.used_at),
        request_ip=model.request_ip,
        request_agent=model.request_agent,
    )


def _to_model(token: ResetToken) -> PasswordResetTokenModel:
    return PasswordResetTokenModel(
        id=token.id,
        user_id=token.user_id,
        token_hash=token.token_hash,
        created_at=token.created_at,
        expires_at=token.expires_at,
        used_at=token.used_at,
        request_ip=token.request_ip,
        request_agent=token.request_agent,
    )


class PasswordResetTokenRepository:
    """SQLAlchemy implementation of the PasswordResetTokenRepository protocol.

    Every write commits on its own unless it runs inside ``atomic()``, in
    which case it is only flushed and the block commits once on exit.
    SQLAlchemy errors roll the session back and surface as
    TransientStorageError.

    Attributes:
        session: SQLAlchemy async session for database operations.

    Example:
        >>> async with database.get_session() as session:
        ...     repo = PasswordResetTokenRepository(session)
        ...     token = await repo.find_by_digest(codec.digest(raw))
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    @asynccontextmanager
    async def atomic(self) -> AsyncIterator[None]:
        """Run the enclosed repository calls as one transaction.

        The flag lives on the session, so other repositories bound to the
        same session (UserRepository) defer their commits too.
        """
        if in_atomic_block(self.session):
            yield
            return

        self.session.info[ATOMIC_SESSION_KEY] = True
        try:
            yield
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise TransientStorageError("Reset token transaction failed") from e
        except BaseException:
            await self.session.rollback()
            raise
        finally:
            self.session.info.pop(ATOMIC_SESSION_KEY, None)

    async def save(self, token: ResetToken) -> None:
        """Insert or update a reset token (merge by id)."""
        try:
            await self.session.merge(_to_model(token))
            await self._commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise TransientStorageError("Failed to save reset token") from e

    async def find_by_digest(self, token_hash: str) -> ResetToken | None:
        """Find a reset token by digest, whatever its state."""
        stmt = (
            select(PasswordResetTokenModel)
            .where(PasswordResetTokenModel.token_hash == token_hash)
            .execution_options(populate_existing=True)
        )
        try:
            result = await self.session.execute(stmt)
            model = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise TransientStorageError("Failed to look up reset token") from e

        return _to_domain(model) if model else None

    async def invalidate_all_live_for_user(self, user_id: UUID, now: datetime) -> int:
        """Set used_at = now on every live token of the user.

        Returns:
            Number of tokens invalidated.
        """
        stmt = (
            update(PasswordResetTokenModel)
            .where(PasswordResetTokenModel.user_id == user_id)
            .where(PasswordResetTokenModel.used_at.is_(None))
            .where(PasswordResetTokenModel.expires_at > now)
            .values(used_at=now)
            .execution_options(synchronize_session=False)
        )
        try:
            result = await self.session.execute(stmt)
            await self._commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise TransientStorageError("Failed to invalidate reset tokens") from e

        return result.rowcount

    async def mark_used(self, token_id: UUID, used_at: datetime) -> bool:
        """Consume the token if it is still live at used_at.

        Returns:
            True when exactly this call flipped used_at, False otherwise.
        """
        stmt = (
            update(PasswordResetTokenModel)
            .where(PasswordResetTokenModel.id == token_id)
            .where(PasswordResetTokenModel.used_at.is_(None))
            .where(PasswordResetTokenModel.expires_at > used_at)
            .values(used_at=used_at)
            .execution_options(synchronize_session=False)
        )
        try:
            result = await self.session.execute(stmt)
            await self._commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise TransientStorageError("Failed to mark reset token used") from e

        return result.rowcount == 1

    async def purge_inert(self, before: datetime) -> int:
        """Delete used tokens and tokens already expired at `before`.

        Returns:
            Number of tokens deleted.
        """
        stmt = (
            delete(PasswordResetTokenModel)
            .where(
                or_(
                    PasswordResetTokenModel.used_at.is_not(None),
                    PasswordResetTokenModel.expires_at <= before,
                )
            )
            .execution_options(synchronize_session=False)
        )
        try:
            result = await self.session.execute(stmt)
            await self._commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise TransientStorageError("Failed to purge reset tokens") from e

        return result.rowcount

    async def _commit(self) -> None:
        if in_atomic_block(self.session):
            await self.session.flush()
        else:
            await self.session.commit()
