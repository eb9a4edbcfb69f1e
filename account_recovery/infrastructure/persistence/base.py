"""Base model and mixins for all database entities.

- BaseModel: Base class for ALL models (provides id, created_at)
- TimestampMixin: Adds updated_at
- BaseMutableModel: Base for mutable models (combines the two)

Domain entities do NOT inherit from these; repositories map between them.

Architecture:
    BaseModel (id, created_at)
        ├── BaseMutableModel (+ updated_at)
        │   └── UserModel
        └── PasswordResetTokenModel (only used_at changes, once)

The models stay database-agnostic (generic Uuid, String instead of INET) so
the same schema runs on PostgreSQL and SQLite.
"""

from datetime import UTC, datetime
from uuid import UUID as PythonUUID

from sqlalchemy import DateTime, Uuid, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from uuid_extensions import uuid7


class BaseModel(DeclarativeBase):
    """Base class for all database models.

    Provides:
    - id: UUID primary key (UUIDv7, time-ordered)
    - created_at: Timestamp when record was created (UTC)
    """

    __abstract__ = True

    id: Mapped[PythonUUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid7,
        nullable=False,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(id={self.id})>"


class TimestampMixin:
    """Mixin for mutable models that track updates."""

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )


class BaseMutableModel(TimestampMixin, BaseModel):
    """Base class for mutable database models (id, created_at, updated_at)."""

    __abstract__ = True


def as_utc(value: datetime | None) -> datetime | None:
    """Attach UTC to naive datetimes read back from SQLite.

    PostgreSQL returns aware values already; SQLite drops the offset but
    every value written by this package is UTC.
    """
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=UTC)


ATOMIC_SESSION_KEY = "account_recovery.atomic"
"""Session.info flag set while a repository ``atomic()`` block is open."""


def in_atomic_block(session: AsyncSession) -> bool:
    """True while any repository sharing this session holds an open atomic block."""
    return bool(session.info.get(ATOMIC_SESSION_KEY))
