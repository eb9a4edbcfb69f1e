"""Unit tests for PasswordResetService.

Tests cover:
- request_reset: anti-enumeration, digest-only storage, invalidation of
  earlier tokens, audit truncation, failure policy
- redeem_reset: happy path, single use, inclusive expiry, concurrent
  redemption, uniform rejection, claim released when the credential
  write fails
- purge_inert_tokens: hygiene sweep

Architecture:
- In-memory fakes for stores and gateways (tests/utils/fakes.py)
- AsyncMock where a collaborator only needs to fail
- Real ResetTokenCodec and AppUrlBuilder (pure functions)
"""

import asyncio
from dataclasses import replace
from datetime import timedelta
from unittest.mock import AsyncMock
from urllib.parse import parse_qs, urlsplit

import pytest
from uuid_extensions import uuid7

from account_recovery.application.commands import (
    ConfirmPasswordReset,
    PasswordResetCompleted,
    PasswordResetRequested,
    RequestPasswordReset,
)
from account_recovery.application.services import PasswordResetService
from account_recovery.core.enums import ErrorCode
from account_recovery.core.errors import ValidationError
from account_recovery.core.result import Failure, Success
from account_recovery.domain.entities import User
from account_recovery.domain.errors import (
    INVALID_RESET_TOKEN_MESSAGE,
    InvalidResetTokenError,
    StorageUnavailableError,
    TransientStorageError,
)
from account_recovery.infrastructure.links import AppUrlBuilder
from account_recovery.infrastructure.security import ResetTokenCodec
from tests.utils.fakes import (
    FakePasswordHasher,
    InMemoryCredentialStore,
    InMemoryTokenStore,
    RecordingLogger,
    RecordingNotifications,
)


# =============================================================================
# Test Helpers
# =============================================================================


def create_alice() -> User:
    """Locked-out user with a pending forced password change."""
    return User(
        id=uuid7(),
        username="alice",
        email="alice@example.com",
        password_hash="hashed::old-password",
        account_non_locked=False,
        failed_login_attempts=3,
        must_change_password=True,
        email_verified=True,
    )


def raw_token_from(url: str) -> str:
    return parse_qs(urlsplit(url).query)["token"][0]


class Harness:
    """Service wired to in-memory collaborators."""

    def __init__(self, *users: User, logger: RecordingLogger | None = None) -> None:
        self.codec = ResetTokenCodec()
        self.token_store = InMemoryTokenStore()
        self.credential_store = InMemoryCredentialStore(*users)
        self.notifications = RecordingNotifications()
        self.logger = logger or RecordingLogger()
        self.service = self.build()

    def build(self, **overrides) -> PasswordResetService:
        deps = {
            "token_codec": self.codec,
            "token_store": self.token_store,
            "credential_store": self.credential_store,
            "password_hasher": FakePasswordHasher(),
            "notifications": self.notifications,
            "url_builder": AppUrlBuilder("https://tickets.example.com"),
            "logger": self.logger,
        }
        deps.update(overrides)
        return PasswordResetService(**deps)

    async def issue(self, email: str, at) -> str:
        """Request a reset and return the raw token from the emailed link."""
        result = await self.service.request_reset(
            RequestPasswordReset(email=email, requested_at=at)
        )
        assert isinstance(result, Success)
        return raw_token_from(self.notifications.reset_links()[-1])


@pytest.fixture
def alice() -> User:
    return create_alice()


@pytest.fixture
def harness(alice, logger) -> Harness:
    return Harness(alice, logger=logger)


# =============================================================================
# request_reset
# =============================================================================


@pytest.mark.unit
class TestRequestReset:
    """Issuance of reset tokens."""

    async def test_unknown_email_returns_generic_success_without_side_effects(
        self, harness, now
    ):
        # Act
        result = await harness.service.request_reset(
            RequestPasswordReset(email="nobody@example.com", requested_at=now)
        )

        # Assert
        assert result == Success(value=PasswordResetRequested())
        assert harness.token_store.save_calls == 0
        assert harness.notifications.sent == []

    async def test_known_and_unknown_email_get_identical_results(
        self, harness, now
    ):
        known = await harness.service.request_reset(
            RequestPasswordReset(email="alice@example.com", requested_at=now)
        )
        unknown = await harness.service.request_reset(
            RequestPasswordReset(email="bob@example.com", requested_at=now)
        )

        assert known == unknown

    async def test_stores_only_the_digest_of_the_emailed_token(
        self, harness, alice, now
    ):
        # Act
        raw = await harness.issue("alice@example.com", now)

        # Assert
        [token] = harness.token_store.tokens.values()
        assert token.user_id == alice.id
        assert token.token_hash == harness.codec.digest(raw)
        assert token.token_hash != raw
        assert token.expires_at == now + timedelta(minutes=45)
        assert token.used_at is None

    async def test_email_sent_with_reset_template(self, harness, now):
        await harness.service.request_reset(
            RequestPasswordReset(
                email="alice@example.com", requested_at=now, locale="en-GB"
            )
        )

        [message] = harness.notifications.sent
        assert message["to"] == "alice@example.com"
        assert message["subject_key"] == "mail.passwordreset.subject"
        assert message["template_name"] == "mail/password-reset"
        assert message["variables"]["ttl_minutes"] == 45
        assert message["variables"]["reset_url"].startswith(
            "https://tickets.example.com/auth/reset-password?token="
        )
        assert message["locale"] == "en-GB"

    async def test_default_locale_used_when_request_has_none(self, harness, now):
        await harness.issue("alice@example.com", now)

        assert harness.notifications.sent[0]["locale"] == "en"

    async def test_email_lookup_ignores_case_and_whitespace(self, harness, now):
        await harness.service.request_reset(
            RequestPasswordReset(email="  ALICE@Example.COM ", requested_at=now)
        )

        assert len(harness.token_store.tokens) == 1

    async def test_second_request_invalidates_first_token(self, harness, alice, now):
        # Arrange
        first = await harness.issue("alice@example.com", now)
        later = now + timedelta(minutes=5)

        # Act
        second = await harness.issue("alice@example.com", later)

        # Assert
        live = harness.token_store.live_tokens(alice.id, later)
        assert [token.token_hash for token in live] == [harness.codec.digest(second)]

        result = await harness.service.redeem_reset(
            ConfirmPasswordReset(
                token=first, new_password="N3w-Secret!", redeemed_at=later
            )
        )
        assert result == Failure(error=InvalidResetTokenError())

    async def test_audit_fields_truncated(self, harness, now):
        await harness.service.request_reset(
            RequestPasswordReset(
                email="alice@example.com",
                request_ip="203.0.113.7",
                request_agent="A" * 300,
                requested_at=now,
            )
        )

        [token] = harness.token_store.tokens.values()
        assert token.request_ip == "203.0.113.7"
        assert token.request_agent == "A" * 255

    async def test_notification_failure_keeps_success_and_token(self, harness, now):
        harness.notifications.fail = True

        result = await harness.service.request_reset(
            RequestPasswordReset(email="alice@example.com", requested_at=now)
        )

        assert result == Success(value=PasswordResetRequested())
        assert len(harness.token_store.tokens) == 1
        assert "error" in harness.logger.levels()

    async def test_lookup_outage_returns_storage_unavailable(self, harness, now):
        # Arrange
        credential_store = AsyncMock()
        credential_store.find_by_email.side_effect = TransientStorageError("down")
        service = harness.build(credential_store=credential_store)

        # Act
        result = await service.request_reset(
            RequestPasswordReset(email="alice@example.com", requested_at=now)
        )

        # Assert
        assert result == Failure(error=StorageUnavailableError())

    async def test_save_failure_is_masked_and_rolls_back_invalidation(
        self, harness, alice, now
    ):
        # Arrange
        first = await harness.issue("alice@example.com", now)
        harness.notifications.sent.clear()

        async def failing_save(token):
            raise TransientStorageError("disk full")

        harness.token_store.save = failing_save
        later = now + timedelta(minutes=1)

        # Act
        result = await harness.service.request_reset(
            RequestPasswordReset(email="alice@example.com", requested_at=later)
        )

        # Assert
        assert result == Success(value=PasswordResetRequested())
        assert harness.notifications.sent == []
        assert "critical" in harness.logger.levels()
        [live] = harness.token_store.live_tokens(alice.id, later)
        assert live.token_hash == harness.codec.digest(first)

    async def test_secrets_never_logged(self, harness, now):
        raw = await harness.issue("alice@example.com", now)
        await harness.service.redeem_reset(
            ConfirmPasswordReset(
                token=raw, new_password="N3w-Secret!", redeemed_at=now
            )
        )

        logged = harness.logger.text()
        assert raw not in logged
        assert harness.codec.digest(raw) not in logged
        assert "N3w-Secret!" not in logged
        assert "alice@example.com" not in logged


# =============================================================================
# redeem_reset
# =============================================================================


@pytest.mark.unit
class TestRedeemReset:
    """Redemption of reset tokens."""

    async def test_alice_end_to_end(self, harness, alice, now):
        # Arrange
        raw = await harness.issue("alice@example.com", now)
        redeemed_at = now + timedelta(minutes=10)

        # Act
        result = await harness.service.redeem_reset(
            ConfirmPasswordReset(
                token=raw, new_password="N3w-Secret!", redeemed_at=redeemed_at
            )
        )

        # Assert
        assert result == Success(value=PasswordResetCompleted())

        user = harness.credential_store.users[alice.id]
        assert user.password_hash == "hashed::N3w-Secret!"
        assert user.last_password_change == redeemed_at
        assert user.password_expires_at == redeemed_at + timedelta(days=90)
        assert user.must_change_password is False
        assert user.failed_login_attempts == 0
        assert user.account_non_locked is True

        [token] = harness.token_store.tokens.values()
        assert token.used_at == redeemed_at

        notice = harness.notifications.sent[-1]
        assert notice["template_name"] == "mail/password-changed"
        assert notice["variables"] == {"username": "alice"}

    async def test_token_cannot_be_redeemed_twice(self, harness, now):
        raw = await harness.issue("alice@example.com", now)
        command = ConfirmPasswordReset(
            token=raw, new_password="N3w-Secret!", redeemed_at=now
        )

        first = await harness.service.redeem_reset(command)
        second = await harness.service.redeem_reset(
            replace(command, new_password="Other-Secret!")
        )

        assert isinstance(first, Success)
        assert second == Failure(error=InvalidResetTokenError())
        assert harness.credential_store.update_calls == 1

    async def test_token_rejected_at_exact_expiry(self, harness, alice, now):
        raw = await harness.issue("alice@example.com", now)

        result = await harness.service.redeem_reset(
            ConfirmPasswordReset(
                token=raw,
                new_password="N3w-Secret!",
                redeemed_at=now + timedelta(minutes=45),
            )
        )

        assert result == Failure(error=InvalidResetTokenError())
        assert harness.credential_store.users[alice.id].password_hash == (
            "hashed::old-password"
        )

    async def test_token_accepted_just_before_expiry(self, harness, now):
        raw = await harness.issue("alice@example.com", now)

        result = await harness.service.redeem_reset(
            ConfirmPasswordReset(
                token=raw,
                new_password="N3w-Secret!",
                redeemed_at=now + timedelta(minutes=45) - timedelta(microseconds=1),
            )
        )

        assert isinstance(result, Success)

    async def test_unknown_token_rejected_with_public_message(self, harness, now):
        result = await harness.service.redeem_reset(
            ConfirmPasswordReset(
                token="not-a-real-token", new_password="N3w-Secret!", redeemed_at=now
            )
        )

        assert isinstance(result, Failure)
        assert result.error.message == INVALID_RESET_TOKEN_MESSAGE
        assert result.error.code == ErrorCode.TOKEN_INVALID

    async def test_empty_token_rejected(self, harness, now):
        result = await harness.service.redeem_reset(
            ConfirmPasswordReset(token="", new_password="N3w-Secret!", redeemed_at=now)
        )

        assert result == Failure(error=InvalidResetTokenError())

    @pytest.mark.parametrize("password", [None, "", "   "])
    async def test_blank_password_is_validation_error(self, harness, now, password):
        # Arrange
        raw = await harness.issue("alice@example.com", now)

        # Act
        result = await harness.service.redeem_reset(
            ConfirmPasswordReset(token=raw, new_password=password, redeemed_at=now)
        )

        # Assert
        assert isinstance(result, Failure)
        assert isinstance(result.error, ValidationError)
        assert result.error.field == "new_password"
        [token] = harness.token_store.tokens.values()
        assert token.used_at is None

    async def test_deleted_owner_rejected(self, harness, alice, now):
        raw = await harness.issue("alice@example.com", now)
        del harness.credential_store.users[alice.id]

        result = await harness.service.redeem_reset(
            ConfirmPasswordReset(token=raw, new_password="N3w-Secret!", redeemed_at=now)
        )

        assert result == Failure(error=InvalidResetTokenError())

    async def test_rejection_reasons_logged_but_not_returned(self, harness, now):
        # Arrange
        used = await harness.issue("alice@example.com", now)
        await harness.service.redeem_reset(
            ConfirmPasswordReset(token=used, new_password="N3w-Secret!", redeemed_at=now)
        )
        expired = await harness.issue("alice@example.com", now)
        late = now + timedelta(hours=1)

        # Act
        results = [
            await harness.service.redeem_reset(
                ConfirmPasswordReset(token=token, new_password="x-Secret!", redeemed_at=late)
            )
            for token in (used, expired, "unknown")
        ]

        # Assert
        assert results == [Failure(error=InvalidResetTokenError())] * 3
        reasons = [
            context["reason"]
            for level, message, context in harness.logger.records
            if message == "Reset token rejected"
        ]
        assert reasons == ["token_already_used", "token_expired", "token_not_found"]

    async def test_concurrent_redemptions_have_exactly_one_winner(
        self, harness, alice, now
    ):
        # Arrange
        raw = await harness.issue("alice@example.com", now)

        # Act
        results = await asyncio.gather(
            *(
                harness.service.redeem_reset(
                    ConfirmPasswordReset(
                        token=raw, new_password=f"Secret-{i}!", redeemed_at=now
                    )
                )
                for i in range(5)
            )
        )

        # Assert
        winners = [result for result in results if isinstance(result, Success)]
        assert len(winners) == 1
        assert results.count(Failure(error=InvalidResetTokenError())) == 4
        assert harness.credential_store.update_calls == 1

    async def test_credential_write_failure_releases_claim_for_retry(
        self, harness, alice, now
    ):
        # Arrange
        raw = await harness.issue("alice@example.com", now)

        async def failing_update(user):
            raise TransientStorageError("connection reset")

        harness.credential_store.update_credential = failing_update
        command = ConfirmPasswordReset(
            token=raw, new_password="N3w-Secret!", redeemed_at=now
        )

        # Act
        failed = await harness.service.redeem_reset(command)
        token_after_failure = harness.token_store.live_tokens(alice.id, now)
        del harness.credential_store.update_credential
        retried = await harness.service.redeem_reset(command)

        # Assert
        assert failed == Failure(error=StorageUnavailableError())
        assert len(token_after_failure) == 1
        assert isinstance(retried, Success)
        stored = harness.credential_store.users[alice.id]
        assert stored.password_hash == "hashed::N3w-Secret!"
        assert harness.token_store.live_tokens(alice.id, now) == []

    async def test_token_lookup_outage_returns_storage_unavailable(self, harness, now):
        token_store = AsyncMock()
        token_store.find_by_digest.side_effect = TransientStorageError("down")
        service = harness.build(token_store=token_store)

        result = await service.redeem_reset(
            ConfirmPasswordReset(token="abc", new_password="N3w-Secret!", redeemed_at=now)
        )

        assert result == Failure(error=StorageUnavailableError())

    async def test_changed_notice_failure_keeps_success(self, harness, now):
        raw = await harness.issue("alice@example.com", now)
        harness.notifications.fail = True

        result = await harness.service.redeem_reset(
            ConfirmPasswordReset(token=raw, new_password="N3w-Secret!", redeemed_at=now)
        )

        assert isinstance(result, Success)
        assert "error" in harness.logger.levels()

    async def test_naive_timestamps_treated_as_utc(self, harness, alice, now):
        raw = await harness.issue("alice@example.com", now.replace(tzinfo=None))

        result = await harness.service.redeem_reset(
            ConfirmPasswordReset(
                token=raw,
                new_password="N3w-Secret!",
                redeemed_at=(now + timedelta(minutes=1)).replace(tzinfo=None),
            )
        )

        assert isinstance(result, Success)
        assert harness.credential_store.users[alice.id].last_password_change == (
            now + timedelta(minutes=1)
        )


# =============================================================================
# purge_inert_tokens
# =============================================================================


@pytest.mark.unit
class TestPurgeInertTokens:
    """Storage hygiene."""

    async def test_purge_removes_only_inert_tokens(self, now):
        # Arrange
        bob = replace(create_alice(), id=uuid7(), username="bob", email="bob@example.com")
        harness = Harness(create_alice(), bob)
        used = await harness.issue("alice@example.com", now - timedelta(minutes=30))
        await harness.service.redeem_reset(
            ConfirmPasswordReset(
                token=used,
                new_password="N3w-Secret!",
                redeemed_at=now - timedelta(minutes=20),
            )
        )
        await harness.issue("alice@example.com", now - timedelta(hours=2))
        live = await harness.issue("bob@example.com", now)

        # Act
        result = await harness.service.purge_inert_tokens(now)

        # Assert
        assert result == Success(value=2)
        [remaining] = harness.token_store.tokens.values()
        assert remaining.token_hash == harness.codec.digest(live)

    async def test_purge_failure_returns_storage_unavailable(self, harness, now):
        token_store = AsyncMock()
        token_store.purge_inert.side_effect = TransientStorageError("down")

        result = await harness.build(token_store=token_store).purge_inert_tokens(now)

        assert result == Failure(error=StorageUnavailableError())
