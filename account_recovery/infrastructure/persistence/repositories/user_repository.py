"""UserRepository - SQLAlchemy implementation of the CredentialStore protocol.

Adapter for hexagonal architecture.
Maps between domain User entities and database UserModel.
"""

from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from account_recovery.domain.entities.user import User
from account_recovery.domain.errors import TransientStorageError
from account_recovery.infrastructure.persistence.base import as_utc, in_atomic_block
from account_recovery.infrastructure.persistence.models.user import UserModel


class UserRepository:
    """SQLAlchemy implementation of CredentialStore.

    This class does NOT inherit from CredentialStore (Protocol uses
    structural typing).

    Attributes:
        session: SQLAlchemy async session for database operations.

    Example:
        >>> async with database.get_session() as session:
        ...     repo = UserRepository(session)
        ...     user = await repo.find_by_email("Alice@Example.com")
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def find_by_id(self, user_id: UUID) -> User | None:
        """Find user by ID.

        Returns:
            Domain User entity if found, None otherwise.
        """
        stmt = (
            select(UserModel)
            .where(UserModel.id == user_id)
            .execution_options(populate_existing=True)
        )
        return await self._fetch_one(stmt)

    async def find_by_email(self, email: str) -> User | None:
        """Find user by email address.

        Compared with lower() on both sides rather than ILIKE so that `_`
        and `%` in addresses are matched literally.

        Returns:
            Domain User entity if found, None otherwise.
        """
        stmt = (
            select(UserModel)
            .where(func.lower(UserModel.email) == email.lower())
            .execution_options(populate_existing=True)
        )
        return await self._fetch_one(stmt)

    async def update_credential(self, user: User) -> None:
        """Persist password and lockout fields of an existing user.

        Inside a PasswordResetTokenRepository.atomic() block on the same
        session the change is flushed and committed with the block.

        Raises:
            TransientStorageError: If the write fails or the user row is gone.
        """
        stmt = select(UserModel).where(UserModel.id == user.id)
        try:
            result = await self.session.execute(stmt)
            user_model = result.scalar_one()

            user_model.password_hash = user.password_hash
            user_model.last_password_change = user.last_password_change
            user_model.password_expires_at = user.password_expires_at
            user_model.must_change_password = user.must_change_password
            user_model.failed_login_attempts = user.failed_login_attempts
            user_model.account_non_locked = user.account_non_locked

            if in_atomic_block(self.session):
                await self.session.flush()
            else:
                await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise TransientStorageError("Failed to update user credential") from e

    async def _fetch_one(self, stmt) -> User | None:
        try:
            result = await self.session.execute(stmt)
            user_model = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise TransientStorageError("Failed to look up user") from e

        if user_model is None:
            return None

        return self._to_domain(user_model)

    def _to_domain(self, user_model: UserModel) -> User:
        """Convert database model to domain entity."""
        return User(
            id=user_model.id,
            username=user_model.username,
            email=user_model.email,
            password_hash=user_model.password_hash,
            is_active=user_model.is_active,
            account_non_locked=user_model.account_non_locked,
            failed_login_attempts=user_model.failed_login_attempts,
            must_change_password=user_model.must_change_password,
            email_verified=user_model.email_verified,
            last_password_change=as_utc(user_model.last_password_change),
            password_expires_at=as_utc(user_model.password_expires_at),
        )
