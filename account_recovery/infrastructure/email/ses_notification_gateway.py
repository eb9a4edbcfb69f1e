"""AWS SES notification gateway.

Sends rendered templates through boto3's SES client. boto3 is blocking, so
each call runs in a worker thread to keep the event loop free.
"""

import asyncio
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from account_recovery.domain.errors import NotificationDeliveryError
from account_recovery.domain.protocols.logger_protocol import LoggerProtocol
from account_recovery.infrastructure.email.templates import render_template


class SESNotificationGateway:
    """Implements NotificationGatewayProtocol on AWS SES.

    Args:
        ses_client: boto3 SES client (``boto3.client("ses", region_name=...)``).
        from_email: Sender address (must be verified in SES).
        from_name: Sender display name.
        logger: Structured logger.

    Example:
        >>> gateway = SESNotificationGateway(
        ...     ses_client=boto3.client("ses", region_name="us-east-1"),
        ...     from_email="no-reply@tickets.example.com",
        ...     from_name="Ticket Logger",
        ...     logger=logger,
        ... )
    """

    def __init__(
        self,
        *,
        ses_client: Any,
        from_email: str,
        from_name: str,
        logger: LoggerProtocol,
    ) -> None:
        self._ses_client = ses_client
        self._source = f"{from_name} <{from_email}>"
        self._logger = logger

    async def send_template(
        self,
        to: str,
        subject_key: str,
        template_name: str,
        variables: dict[str, Any],
        locale: str,
    ) -> None:
        """Render and send one email.

        Raises:
            NotificationDeliveryError: Rendering failed or SES refused the
                message.
        """
        message = render_template(template_name, subject_key, variables, locale)

        try:
            response = await asyncio.to_thread(
                self._ses_client.send_email,
                Source=self._source,
                Destination={"ToAddresses": [to]},
                Message={
                    "Subject": {"Charset": "UTF-8", "Data": message.subject},
                    "Body": {
                        "Html": {"Charset": "UTF-8", "Data": message.html_body},
                        "Text": {"Charset": "UTF-8", "Data": message.text_body},
                    },
                },
            )
        except ClientError as e:
            error_code = e.response.get("Error", {}).get("Code", "Unknown")
            raise NotificationDeliveryError(f"SES rejected message: {error_code}") from e
        except BotoCoreError as e:
            raise NotificationDeliveryError("SES transport failure") from e

        self._logger.info(
            "Email sent",
            template=template_name,
            message_id=response.get("MessageId", "unknown"),
        )
