"""NotificationGatewayProtocol - Port for outbound templated email.

Infrastructure provides concrete implementations (StubNotificationGateway,
SESNotificationGateway).
"""

from typing import Any, Protocol


class NotificationGatewayProtocol(Protocol):
    """Templated message delivery (port).

    This is a Protocol (not ABC) for structural typing.

    Failure Mode:
        Delivery failures raise NotificationDeliveryError. The password
        reset service logs them and carries on.
    """

    async def send_template(
        self,
        to: str,
        subject_key: str,
        template_name: str,
        variables: dict[str, Any],
        locale: str,
    ) -> None:
        """Render a template and send it to one recipient.

        Args:
            to: Recipient email address.
            subject_key: Message key of the subject line.
            template_name: Template identifier (e.g. "mail/password-reset").
            variables: Values the template interpolates.
            locale: Locale tag of the recipient (e.g. "en").

        Example:
            >>> await gateway.send_template(
            ...     "user@example.com",
            ...     "mail.passwordreset.subject",
            ...     "mail/password-reset",
            ...     {"reset_url": url, "ttl_minutes": 45},
            ...     "en",
            ... )
        """
        ...
