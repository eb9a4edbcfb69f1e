# mypy: disable-error-code="arg-type"
"""Dependency container (composition root).

Application-scoped singletons:
- Logging (structlog console adapter)
- Database (SQLAlchemy async engine)
- Password hashing (bcrypt)
- Reset token codec
- Email (stub/AWS SES)
- Reset URL builder

Request-scoped:
- Database session
- PasswordResetService (repositories bound to the request session)

Adapter choice lives here and nowhere else. Tests clear the caches with
``clear_container_cache()`` after changing settings.
"""

from collections.abc import AsyncGenerator
from functools import lru_cache
from typing import TYPE_CHECKING

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from account_recovery.core.config import get_settings
from account_recovery.infrastructure.persistence.database import Database

if TYPE_CHECKING:
    from account_recovery.application.services import PasswordResetService
    from account_recovery.domain.protocols import (
        LoggerProtocol,
        NotificationGatewayProtocol,
        PasswordHashingProtocol,
        ResetUrlBuilderProtocol,
        TokenCodecProtocol,
    )


# ============================================================================
# Application-Scoped Dependencies (Singletons)
# ============================================================================


@lru_cache()
def get_logger() -> "LoggerProtocol":
    """Return the application-scoped logger singleton.

    - development: ConsoleAdapter (human-readable)
    - testing/ci/production: ConsoleAdapter (JSON)
    """
    from account_recovery.infrastructure.logging.console_adapter import ConsoleAdapter

    settings = get_settings()
    use_json = not settings.is_development
    return ConsoleAdapter(use_json=use_json, level=settings.log_level)


@lru_cache()
def get_database() -> Database:
    """Get database manager singleton (app-scoped).

    Use get_db_session() for per-request sessions.
    """
    settings = get_settings()
    return Database(
        database_url=settings.database_url,
        echo=settings.db_echo,
    )


@lru_cache()
def get_password_hasher() -> "PasswordHashingProtocol":
    """Get bcrypt password hashing service singleton (app-scoped)."""
    from account_recovery.infrastructure.security import BcryptPasswordService

    return BcryptPasswordService(cost_factor=get_settings().bcrypt_rounds)


@lru_cache()
def get_token_codec() -> "TokenCodecProtocol":
    """Get reset token codec singleton (app-scoped)."""
    from account_recovery.infrastructure.security import ResetTokenCodec

    return ResetTokenCodec()


@lru_cache()
def get_notification_gateway() -> "NotificationGatewayProtocol":
    """Get email gateway singleton (app-scoped).

    Returns correct adapter based on EMAIL_BACKEND:
        - stub: StubNotificationGateway (logs, sends nothing)
        - ses: SESNotificationGateway (AWS SES)
    """
    settings = get_settings()

    if settings.email_backend == "ses":
        import boto3

        from account_recovery.infrastructure.email import SESNotificationGateway

        return SESNotificationGateway(
            ses_client=boto3.client("ses", region_name=settings.aws_region),
            from_email=settings.email_from_address,
            from_name=settings.email_from_name,
            logger=get_logger(),
        )

    from account_recovery.infrastructure.email import StubNotificationGateway

    return StubNotificationGateway(logger=get_logger())


@lru_cache()
def get_url_builder() -> "ResetUrlBuilderProtocol":
    """Get application URL builder singleton (app-scoped)."""
    from account_recovery.infrastructure.links import AppUrlBuilder

    settings = get_settings()
    return AppUrlBuilder(
        base_url=settings.app_base_url,
        reset_path=settings.reset_password_path,
    )


# ============================================================================
# Request-Scoped Dependencies (Per-Request)
# ============================================================================


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Get database session (request-scoped).

    Commits on success, rolls back on exception, always closes.
    """
    db = get_database()
    async with db.get_session() as session:
        yield session


async def get_password_reset_service(
    session: AsyncSession = Depends(get_db_session),
) -> "PasswordResetService":
    """Get PasswordResetService bound to the request session.

    Returns:
        PasswordResetService instance.
    """
    from account_recovery.application.services import PasswordResetService
    from account_recovery.infrastructure.persistence.repositories import (
        PasswordResetTokenRepository,
        UserRepository,
    )

    settings = get_settings()

    return PasswordResetService(
        token_codec=get_token_codec(),
        token_store=PasswordResetTokenRepository(session=session),
        credential_store=UserRepository(session=session),
        password_hasher=get_password_hasher(),
        notifications=get_notification_gateway(),
        url_builder=get_url_builder(),
        logger=get_logger(),
        token_ttl_minutes=settings.reset_token_ttl_minutes,
        password_expiry_days=settings.password_expiry_days,
        default_locale=settings.default_locale,
    )


def clear_container_cache() -> None:
    """Drop every cached singleton (settings included)."""
    for factory in (
        get_settings,
        get_logger,
        get_database,
        get_password_hasher,
        get_token_codec,
        get_notification_gateway,
        get_url_builder,
    ):
        factory.cache_clear()
