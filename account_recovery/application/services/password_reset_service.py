"""Password reset service for account recovery.

Request flow:
1. Look up user by email
2. If user not found: log, return Success (no user enumeration)
3. Mint raw token, digest it
4. Invalidate prior live tokens and save the new one (one transaction)
5. Email the reset link (raw token in the query string)
6. Return Success(message)

Redeem flow:
1. Reject blank passwords (ValidationError)
2. Digest the presented token, look it up
3. Refuse unknown, used or expired tokens and orphaned owners
4. Hash the new password
5. Claim the token with a conditional update (one winner per token)
6. Apply the credential change and persist it in the same transaction
7. Send a password changed notice
8. Return Success(message)

Security:
- The raw token exists only in memory and in the emailed link
- Every token refusal collapses into InvalidResetTokenError; the precise
  TokenRejectionReason is logged, never returned
- The claim happens before the credential write, so a replayed token can
  never change a password twice; both commit or roll back together

Architecture:
- Application layer ONLY imports from domain and core
- Collaborators are passed to the constructor (no container lookups)
"""

from __future__ import annotations

from datetime import UTC, datetime

from account_recovery.application.commands.password_reset_commands import (
    ConfirmPasswordReset,
    PasswordResetCompleted,
    PasswordResetRequested,
    RequestPasswordReset,
)
from account_recovery.core.constants import (
    DEFAULT_LOCALE,
    PASSWORD_CHANGED_SUBJECT_KEY,
    PASSWORD_CHANGED_TEMPLATE,
    PASSWORD_EXPIRY_DAYS_DEFAULT,
    PASSWORD_RESET_SUBJECT_KEY,
    PASSWORD_RESET_TEMPLATE,
    RESET_TOKEN_TTL_MINUTES_DEFAULT,
)
from account_recovery.core.enums import ErrorCode
from account_recovery.core.errors import ValidationError
from account_recovery.core.result import Failure, Result, Success
from account_recovery.domain.entities import ResetToken, User
from account_recovery.domain.errors import (
    InvalidResetTokenError,
    NotificationDeliveryError,
    StorageUnavailableError,
    TokenRejectionReason,
    TransientStorageError,
)
from account_recovery.domain.protocols import (
    CredentialStore,
    LoggerProtocol,
    NotificationGatewayProtocol,
    PasswordHashingProtocol,
    PasswordResetTokenRepository,
    ResetUrlBuilderProtocol,
    TokenCodecProtocol,
)

type RedeemError = InvalidResetTokenError | ValidationError | StorageUnavailableError


def _as_utc(moment: datetime | None) -> datetime:
    """Normalize a timestamp to aware UTC; None means now."""
    if moment is None:
        return datetime.now(UTC)
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC)


class PasswordResetService:
    """Issues and redeems single-use password reset tokens.

    Follows hexagonal architecture:
    - Application layer (this service)
    - Domain layer (entities, protocols, errors)
    - Infrastructure layer (adapters injected through the constructor)
    """

    def __init__(
        self,
        *,
        token_codec: TokenCodecProtocol,
        token_store: PasswordResetTokenRepository,
        credential_store: CredentialStore,
        password_hasher: PasswordHashingProtocol,
        notifications: NotificationGatewayProtocol,
        url_builder: ResetUrlBuilderProtocol,
        logger: LoggerProtocol,
        token_ttl_minutes: int = RESET_TOKEN_TTL_MINUTES_DEFAULT,
        password_expiry_days: int = PASSWORD_EXPIRY_DAYS_DEFAULT,
        default_locale: str = DEFAULT_LOCALE,
    ) -> None:
        """Initialize password reset service with dependencies.

        Args:
            token_codec: Raw token generator and digester.
            token_store: Reset token repository.
            credential_store: User lookup and credential persistence.
            password_hasher: Hashes the new password.
            notifications: Outbound templated email.
            url_builder: Builds the emailed reset link.
            logger: Structured logger.
            token_ttl_minutes: Lifetime of issued tokens.
            password_expiry_days: Expiry policy for passwords set by a reset.
            default_locale: Email locale when the request carries none.
        """
        self._token_codec = token_codec
        self._token_store = token_store
        self._credential_store = credential_store
        self._password_hasher = password_hasher
        self._notifications = notifications
        self._url_builder = url_builder
        self._logger = logger
        self._token_ttl_minutes = token_ttl_minutes
        self._password_expiry_days = password_expiry_days
        self._default_locale = default_locale

    async def request_reset(
        self, cmd: RequestPasswordReset
    ) -> Result[PasswordResetRequested, StorageUnavailableError]:
        """Handle a password reset request.

        Args:
            cmd: RequestPasswordReset command with the requester's email.

        Returns:
            Success(PasswordResetRequested) whether or not the email exists.
            Failure(StorageUnavailableError) only when the user lookup itself
            fails, which says nothing about whether the email exists.

        Side Effects:
            - Invalidates the user's live tokens and saves a new one.
            - Sends the reset email (failures are logged, not returned).
        """
        now = _as_utc(cmd.requested_at)
        log = self._logger.bind(operation="password_reset_request")

        try:
            user = await self._credential_store.find_by_email(cmd.email.strip())
        except TransientStorageError as e:
            log.error("User lookup failed", error=e)
            return Failure(error=StorageUnavailableError())

        if user is None:
            log.info("Password reset requested for unknown email")
            return Success(value=PasswordResetRequested())

        log = log.bind(user_id=str(user.id))

        raw_token = self._token_codec.generate_raw_token()
        token = ResetToken.issue(
            user_id=user.id,
            token_hash=self._token_codec.digest(raw_token),
            now=now,
            ttl_minutes=self._token_ttl_minutes,
            request_ip=cmd.request_ip,
            request_agent=cmd.request_agent,
        )

        try:
            async with self._token_store.atomic():
                invalidated = await self._token_store.invalidate_all_live_for_user(
                    user.id, now
                )
                await self._token_store.save(token)
        except TransientStorageError as e:
            # Response stays uniform; nothing was sent, so no token is usable.
            log.critical("Reset token issuance aborted", error=e)
            return Success(value=PasswordResetRequested())

        log.info(
            "Password reset token issued",
            token_id=str(token.id),
            expires_at=token.expires_at.isoformat(),
            invalidated_tokens=invalidated,
        )

        reset_url = self._url_builder.build_reset_url(raw_token)
        try:
            await self._notifications.send_template(
                user.email,
                PASSWORD_RESET_SUBJECT_KEY,
                PASSWORD_RESET_TEMPLATE,
                {"reset_url": reset_url, "ttl_minutes": self._token_ttl_minutes},
                cmd.locale or self._default_locale,
            )
        except NotificationDeliveryError as e:
            log.error(
                "Password reset email delivery failed",
                error=e,
                token_id=str(token.id),
            )

        return Success(value=PasswordResetRequested())

    async def redeem_reset(
        self, cmd: ConfirmPasswordReset
    ) -> Result[PasswordResetCompleted, RedeemError]:
        """Handle a password reset redemption.

        Args:
            cmd: ConfirmPasswordReset command with raw token and new password.

        Returns:
            Success(PasswordResetCompleted) when the password was changed.
            Failure(ValidationError) for a blank new password.
            Failure(InvalidResetTokenError) for any token problem.
            Failure(StorageUnavailableError) when storage fails.
        """
        now = _as_utc(cmd.redeemed_at)
        log = self._logger.bind(operation="password_reset_redeem")

        if cmd.new_password is None or not cmd.new_password.strip():
            log.warning("Password reset rejected", reason="empty_password")
            return Failure(
                error=ValidationError(
                    code=ErrorCode.INVALID_PASSWORD,
                    message="New password must not be empty.",
                    field="new_password",
                )
            )

        if not cmd.token:
            return self._reject(log, TokenRejectionReason.NOT_FOUND)

        try:
            token = await self._token_store.find_by_digest(
                self._token_codec.digest(cmd.token)
            )
            if token is None:
                return self._reject(log, TokenRejectionReason.NOT_FOUND)

            log = log.bind(token_id=str(token.id), user_id=str(token.user_id))

            if token.is_used():
                return self._reject(log, TokenRejectionReason.ALREADY_USED)
            if token.is_expired(now):
                return self._reject(log, TokenRejectionReason.EXPIRED)

            user = await self._credential_store.find_by_id(token.user_id)
            if user is None:
                return self._reject(log, TokenRejectionReason.USER_NOT_FOUND)

            password_hash = self._password_hasher.hash_password(cmd.new_password)

            # Claim and credential write commit together; a failed write
            # releases the claim so the same link can be retried.
            async with self._token_store.atomic():
                if not await self._token_store.mark_used(token.id, now):
                    return self._reject(log, TokenRejectionReason.CLAIM_LOST)
                user.apply_password_reset(
                    password_hash, now, self._password_expiry_days
                )
                await self._credential_store.update_credential(user)
        except TransientStorageError as e:
            log.error("Password reset storage failure", error=e)
            return Failure(error=StorageUnavailableError())

        log.info("Password reset completed")
        await self._notify_password_changed(user, log)
        return Success(value=PasswordResetCompleted())

    async def purge_inert_tokens(
        self, now: datetime | None = None
    ) -> Result[int, StorageUnavailableError]:
        """Delete used and expired tokens (storage hygiene).

        Returns:
            Success(number of deleted tokens) or Failure on storage errors.
        """
        log = self._logger.bind(operation="password_reset_purge")
        try:
            deleted = await self._token_store.purge_inert(_as_utc(now))
        except TransientStorageError as e:
            log.error("Reset token purge failed", error=e)
            return Failure(error=StorageUnavailableError())

        log.info("Reset tokens purged", deleted=deleted)
        return Success(value=deleted)

    def _reject(
        self, log: LoggerProtocol, reason: TokenRejectionReason
    ) -> Failure[InvalidResetTokenError]:
        log.warning("Reset token rejected", reason=reason.value)
        return Failure(error=InvalidResetTokenError())

    async def _notify_password_changed(self, user: User, log: LoggerProtocol) -> None:
        try:
            await self._notifications.send_template(
                user.email,
                PASSWORD_CHANGED_SUBJECT_KEY,
                PASSWORD_CHANGED_TEMPLATE,
                {"username": user.username},
                self._default_locale,
            )
        except NotificationDeliveryError as e:
            log.error("Password changed notice delivery failed", error=e)
