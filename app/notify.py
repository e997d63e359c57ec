"""
Confirmation email for a completed registration.

Sending is best effort: the registration row is already on disk when this
runs, so failures are logged and never raised to the request.
"""

from __future__ import annotations

import logging
import smtplib
from email.message import EmailMessage
from html import escape
from typing import Any, Mapping

from .config import Settings
from .normalize import RecordIndex

logger = logging.getLogger(__name__)


def _text(record: Mapping[str, Any], *keys: str, default: str = "") -> str:
    value = RecordIndex(record).first_filled(keys)
    return escape(default if value is None else str(value))


def build_confirmation_html(event_name: str, record: Mapping[str, Any], signature: str) -> str:
    event = escape(event_name)
    return (
        "<div>"
        f"<h2>Registration Confirmed: {event}</h2>"
        f"<p>Hello {_text(record, 'name1', 'teamName')},</p>"
        f"<p>Your registration for <b>{event}</b> is successful.</p>"
        f"<p><b>Team / Participant:</b> {_text(record, 'teamName', 'name1')}</p>"
        f"<p><b>UTR ID:</b> {_text(record, 'utrId', default='N/A')}</p>"
        f"<p><b>Screenshot:</b> {_text(record, 'screenshot', default='N/A')}</p>"
        "<p>Keep this email for your records.</p>"
        f"<br/><p>- {escape(signature)}</p>"
        "</div>"
    )


def build_confirmation_message(
    settings: Settings, to: str, event_name: str, record: Mapping[str, Any]
) -> EmailMessage:
    msg = EmailMessage()
    msg["Subject"] = f"{settings.email_from_name} Registration - {event_name}"
    msg["From"] = f'"{settings.email_from_name}" <{settings.email_user}>'
    msg["To"] = to
    msg.set_content(f"Your registration for {event_name} is successful.")
    msg.add_alternative(build_confirmation_html(event_name, record, settings.email_signature), subtype="html")
    return msg


def send_confirmation_email(
    settings: Settings, to: str, event_name: str, record: Mapping[str, Any]
) -> bool:
    """Send the confirmation; returns False when email is not configured."""
    if not settings.email_enabled:
        logger.warning("EMAIL_USER or EMAIL_PASS not set - skipping email send")
        return False

    msg = build_confirmation_message(settings, to, event_name, record)
    with smtplib.SMTP_SSL(settings.smtp_host, settings.smtp_port) as smtp:
        smtp.login(settings.email_user, settings.email_pass)
        smtp.send_message(msg)

    logger.info("Confirmation email sent for %s", event_name)
    return True


def send_confirmation_safely(
    settings: Settings, to: str, event_name: str, record: Mapping[str, Any]
) -> None:
    try:
        send_confirmation_email(settings, to, event_name, record)
    except Exception:
        logger.exception("Email error for %s", event_name)
