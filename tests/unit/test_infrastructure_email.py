"""Unit tests for email templates and notification gateways.

Tests cover:
- Template rendering and subject catalog
- StubNotificationGateway (logs a summary, keeps nothing)
- SESNotificationGateway (boto3 client mocked, errors mapped)
"""

from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError

from account_recovery.domain.errors import NotificationDeliveryError
from account_recovery.infrastructure.email import (
    SESNotificationGateway,
    StubNotificationGateway,
    render_template,
)
from account_recovery.infrastructure.email.templates import resolve_subject
from tests.utils.fakes import CapturingStubGateway

RESET_URL = "https://tickets.example.com/auth/reset-password?token=abc&x=<y>"


@pytest.mark.unit
class TestTemplates:
    def test_password_reset_renders_link_and_ttl(self):
        message = render_template(
            "mail/password-reset",
            "mail.passwordreset.subject",
            {"reset_url": RESET_URL, "ttl_minutes": 45},
        )

        assert message.subject == "Reset your Ticket Logger password"
        assert RESET_URL in message.text_body
        assert "45 minutes" in message.text_body
        assert "&amp;x=&lt;y&gt;" in message.html_body
        assert "<y>" not in message.html_body

    def test_password_changed_greets_user(self):
        message = render_template(
            "mail/password-changed",
            "mail.passwordchanged.subject",
            {"username": "alice"},
        )

        assert message.subject == "Your Ticket Logger password was changed"
        assert "Hi alice," in message.text_body

    def test_unknown_locale_falls_back_to_english(self):
        assert resolve_subject("mail.passwordreset.subject", "it-IT") == (
            "Reset your Ticket Logger password"
        )

    def test_unknown_template_raises(self):
        with pytest.raises(NotificationDeliveryError):
            render_template("mail/nope", "mail.passwordreset.subject", {})

    def test_missing_variable_raises(self):
        with pytest.raises(NotificationDeliveryError):
            render_template("mail/password-reset", "mail.passwordreset.subject", {})

    def test_unknown_subject_key_raises(self):
        with pytest.raises(NotificationDeliveryError):
            resolve_subject("mail.unknown", "en")


@pytest.mark.unit
class TestStubNotificationGateway:
    async def test_logs_summary_without_link(self, logger):
        gateway = StubNotificationGateway(logger=logger)

        await gateway.send_template(
            "alice@example.com",
            "mail.passwordreset.subject",
            "mail/password-reset",
            {"reset_url": RESET_URL, "ttl_minutes": 45},
            "en",
        )

        [(level, message, context)] = logger.records
        assert message == "Email not sent (stub backend)"
        assert context["template"] == "mail/password-reset"
        assert "token=abc" not in logger.text()

    async def test_keeps_nothing_after_sending(self, logger):
        gateway = StubNotificationGateway(logger=logger)

        for _ in range(50):
            await gateway.send_template(
                "alice@example.com",
                "mail.passwordreset.subject",
                "mail/password-reset",
                {"reset_url": RESET_URL, "ttl_minutes": 45},
                "en",
            )

        assert "token=abc" not in repr(vars(gateway))
        assert not hasattr(gateway, "sent")

    async def test_capturing_subclass_sees_rendered_message(self, logger):
        gateway = CapturingStubGateway(logger=logger)

        await gateway.send_template(
            "alice@example.com",
            "mail.passwordreset.subject",
            "mail/password-reset",
            {"reset_url": RESET_URL, "ttl_minutes": 45},
            "en",
        )

        [(to, message)] = gateway.sent
        assert to == "alice@example.com"
        assert RESET_URL in message.text_body


@pytest.mark.unit
class TestSESNotificationGateway:
    def build(self, logger, client):
        return SESNotificationGateway(
            ses_client=client,
            from_email="no-reply@example.com",
            from_name="Ticket Logger",
            logger=logger,
        )

    async def test_sends_html_and_text(self, logger):
        client = MagicMock()
        client.send_email.return_value = {"MessageId": "m-1"}

        await self.build(logger, client).send_template(
            "alice@example.com",
            "mail.passwordchanged.subject",
            "mail/password-changed",
            {"username": "alice"},
            "en",
        )

        kwargs = client.send_email.call_args.kwargs
        assert kwargs["Source"] == "Ticket Logger <no-reply@example.com>"
        assert kwargs["Destination"] == {"ToAddresses": ["alice@example.com"]}
        body = kwargs["Message"]["Body"]
        assert "Hi alice," in body["Text"]["Data"]
        assert "Password Changed" in body["Html"]["Data"]

    async def test_client_error_becomes_delivery_error(self, logger):
        client = MagicMock()
        client.send_email.side_effect = ClientError(
            {"Error": {"Code": "MessageRejected", "Message": "nope"}}, "SendEmail"
        )

        with pytest.raises(NotificationDeliveryError, match="MessageRejected"):
            await self.build(logger, client).send_template(
                "alice@example.com",
                "mail.passwordchanged.subject",
                "mail/password-changed",
                {"username": "alice"},
                "en",
            )

    async def test_transport_error_becomes_delivery_error(self, logger):
        client = MagicMock()
        client.send_email.side_effect = EndpointConnectionError(
            endpoint_url="https://email.us-east-1.amazonaws.com"
        )

        with pytest.raises(NotificationDeliveryError):
            await self.build(logger, client).send_template(
                "alice@example.com",
                "mail.passwordchanged.subject",
                "mail/password-changed",
                {"username": "alice"},
                "en",
            )
