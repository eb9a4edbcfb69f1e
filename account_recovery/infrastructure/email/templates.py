"""Email templates and subject catalog.

Each template renders an HTML body with a plain text fallback. Subjects are
resolved from message keys against an English catalog; other locales fall
back to English.

Template variables are HTML-escaped before interpolation.
"""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from html import escape
from typing import Any

from account_recovery.core.constants import (
    DEFAULT_LOCALE,
    PASSWORD_CHANGED_SUBJECT_KEY,
    PASSWORD_CHANGED_TEMPLATE,
    PASSWORD_RESET_SUBJECT_KEY,
    PASSWORD_RESET_TEMPLATE,
)
from account_recovery.domain.errors import NotificationDeliveryError

APP_DISPLAY_NAME = "Ticket Logger"

SUBJECTS: dict[str, dict[str, str]] = {
    DEFAULT_LOCALE: {
        PASSWORD_RESET_SUBJECT_KEY: f"Reset your {APP_DISPLAY_NAME} password",
        PASSWORD_CHANGED_SUBJECT_KEY: f"Your {APP_DISPLAY_NAME} password was changed",
    },
}


@dataclass(frozen=True, slots=True)
class RenderedEmail:
    """Email content ready to hand to a transport."""

    subject: str
    html_body: str
    text_body: str


def resolve_subject(subject_key: str, locale: str) -> str:
    """Look up a subject line, falling back to the default locale.

    Raises:
        NotificationDeliveryError: If the key is unknown.
    """
    catalog = SUBJECTS.get(locale.split("-")[0].lower(), SUBJECTS[DEFAULT_LOCALE])
    subject = catalog.get(subject_key) or SUBJECTS[DEFAULT_LOCALE].get(subject_key)
    if subject is None:
        raise NotificationDeliveryError(f"Unknown subject key: {subject_key}")
    return subject


def _layout(heading: str, content: str) -> str:
    year = datetime.now(UTC).year
    return f"""
<!DOCTYPE html>
<html>
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
</head>
<body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333;">
    <div style="max-width: 600px; margin: 0 auto; padding: 20px;">
        <h2 style="color: #4A90E2;">{heading}</h2>
        {content}
        <hr style="border: none; border-top: 1px solid #eee; margin: 30px 0;">
        <p style="color: #999; font-size: 12px; text-align: center;">
            &copy; {year} {APP_DISPLAY_NAME}
        </p>
    </div>
</body>
</html>
"""


def _password_reset(variables: dict[str, Any]) -> tuple[str, str]:
    reset_url = str(variables["reset_url"])
    ttl_minutes = int(variables["ttl_minutes"])
    safe_url = escape(reset_url, quote=True)

    html_body = _layout(
        "Password Reset Request",
        f"""
        <p>We received a request to reset the password for your account.</p>
        <p>To choose a new password, click the button below:</p>
        <div style="text-align: center; margin: 30px 0;">
            <a href="{safe_url}"
               style="background-color: #4A90E2;
                      color: white;
                      padding: 12px 30px;
                      text-decoration: none;
                      border-radius: 5px;
                      display: inline-block;">
                Reset Password
            </a>
        </div>
        <p>Or copy and paste this link into your browser:</p>
        <p style="word-break: break-all; color: #4A90E2;">{safe_url}</p>
        <p style="margin-top: 30px; color: #666; font-size: 14px;">
            This link expires in {ttl_minutes} minutes and can be used once.
        </p>
        <p style="color: #666; font-size: 14px;">
            If you didn't request a password reset, you can ignore this email.
        </p>
""",
    )

    text_body = f"""
We received a request to reset the password for your account.

To choose a new password, visit:
{reset_url}

This link expires in {ttl_minutes} minutes and can be used once.

If you didn't request a password reset, you can ignore this email.
"""
    return html_body, text_body


def _password_changed(variables: dict[str, Any]) -> tuple[str, str]:
    username = str(variables.get("username") or "")
    greeting = f"Hi {username}," if username else "Hello,"

    html_body = _layout(
        "Password Changed",
        f"""
        <p>{escape(greeting)}</p>
        <p>The password for your account was just changed using a reset link.</p>
        <p style="color: #666; font-size: 14px;">
            If this wasn't you, contact your administrator immediately.
        </p>
""",
    )

    text_body = f"""
{greeting}

The password for your account was just changed using a reset link.

If this wasn't you, contact your administrator immediately.
"""
    return html_body, text_body


TEMPLATES: dict[str, Callable[[dict[str, Any]], tuple[str, str]]] = {
    PASSWORD_RESET_TEMPLATE: _password_reset,
    PASSWORD_CHANGED_TEMPLATE: _password_changed,
}


def render_template(
    template_name: str,
    subject_key: str,
    variables: dict[str, Any],
    locale: str = DEFAULT_LOCALE,
) -> RenderedEmail:
    """Render subject, HTML and text bodies for a named template.

    Raises:
        NotificationDeliveryError: Unknown template or subject key, or a
            required template variable is missing.
    """
    renderer = TEMPLATES.get(template_name)
    if renderer is None:
        raise NotificationDeliveryError(f"Unknown template: {template_name}")

    try:
        html_body, text_body = renderer(variables)
    except (KeyError, TypeError, ValueError) as e:
        raise NotificationDeliveryError(
            f"Template {template_name} is missing variables"
        ) from e

    return RenderedEmail(
        subject=resolve_subject(subject_key, locale),
        html_body=html_body,
        text_body=text_body,
    )
