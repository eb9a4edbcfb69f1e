"""Stub notification gateway for development and testing.

Renders the template exactly like the SES gateway, then logs a summary
instead of sending. Nothing is kept after the call and the body is not
logged: reset emails carry the raw token.
"""

from typing import Any

from account_recovery.domain.protocols.logger_protocol import LoggerProtocol
from account_recovery.infrastructure.email.templates import RenderedEmail, render_template


class StubNotificationGateway:
    """Implements NotificationGatewayProtocol without any transport."""

    def __init__(self, logger: LoggerProtocol) -> None:
        self._logger = logger

    async def send_template(
        self,
        to: str,
        subject_key: str,
        template_name: str,
        variables: dict[str, Any],
        locale: str,
    ) -> None:
        message = render_template(template_name, subject_key, variables, locale)
        self._deliver(to, message, template_name, locale)

    def _deliver(
        self, to: str, message: RenderedEmail, template_name: str, locale: str
    ) -> None:
        self._logger.info(
            "Email not sent (stub backend)",
            template=template_name,
            subject=message.subject,
            locale=locale,
        )
