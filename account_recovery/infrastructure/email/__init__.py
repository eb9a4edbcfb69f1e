"""Email notification adapters."""

from account_recovery.infrastructure.email.ses_notification_gateway import (
    SESNotificationGateway,
)
from account_recovery.infrastructure.email.stub_notification_gateway import (
    StubNotificationGateway,
)
from account_recovery.infrastructure.email.templates import (
    RenderedEmail,
    render_template,
)

__all__ = [
    "RenderedEmail",
    "SESNotificationGateway",
    "StubNotificationGateway",
    "render_template",
]
