"""Email delivery through SendGrid."""

from __future__ import annotations

import json
import logging
from typing import Any

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

from notifyhub.config import get_settings
from notifyhub.domain.errors import EmailDeliveryError

logger = logging.getLogger(__name__)

MOCK_BODY_PREVIEW_LENGTH = 1000


def _extract_sendgrid_error_details(body: Any) -> str | None:
    """Return a human readable description for a SendGrid error payload."""

    if body in (None, ""):
        return None

    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError:
            return None

    if isinstance(body, str):
        body = body.strip()
        if not body:
            return None
        try:
            parsed = json.loads(body)
        except json.JSONDecodeError:
            return body
    else:
        parsed = body

    if isinstance(parsed, dict):
        errors = parsed.get("errors")
        if isinstance(errors, list):
            messages = [
                str(item["message"])
                for item in errors
                if isinstance(item, dict) and item.get("message")
            ]
            if messages:
                return "; ".join(messages)
        try:
            return json.dumps(parsed)
        except (TypeError, ValueError):
            return None

    if isinstance(parsed, list):
        return "; ".join(str(item) for item in parsed)

    return None


def _describe_failure(status_code: Any, body: Any, fallback: str) -> str:
    details = _extract_sendgrid_error_details(body)
    if status_code and details:
        return f"SendGrid responded with status {status_code}: {details}"
    if status_code:
        return f"SendGrid responded with status {status_code}"
    if details:
        return f"SendGrid request failed: {details}"
    return f"SendGrid request failed: {fallback}"


def send_email(subject: str, content: str, recipient: str) -> None:
    """Send ``content`` as an HTML email to ``recipient``.

    Raises :class:`EmailDeliveryError` when SendGrid is not configured, the
    request cannot be made or the API answers with a non-2xx status. With
    ``EMAIL_MOCK_MODE`` enabled the message is only logged.
    """

    settings = get_settings()
    if settings.email_mock_mode:
        logger.info(
            "[mock email] to=%s subject=%s body=%s",
            recipient,
            subject,
            content[:MOCK_BODY_PREVIEW_LENGTH],
        )
        return

    if not (settings.sendgrid_api_key and settings.sendgrid_sender):
        raise EmailDeliveryError("SendGrid configuration incomplete")

    message = Mail(
        from_email=settings.sendgrid_sender,
        to_emails=recipient,
        subject=subject,
        html_content=content,
    )

    try:
        client = SendGridAPIClient(settings.sendgrid_api_key)
        response = client.send(message)
    except Exception as exc:
        status_code = getattr(exc, "status_code", None)
        description = _describe_failure(status_code, getattr(exc, "body", None), str(exc))
        logger.error("Error sending email to %s: %s", recipient, description)
        raise EmailDeliveryError(description, status_code=status_code) from exc

    status_code = getattr(response, "status_code", None)
    if not isinstance(status_code, int) or not 200 <= status_code < 300:
        description = _describe_failure(status_code, getattr(response, "body", None), "")
        logger.error("Error sending email to %s: %s", recipient, description)
        raise EmailDeliveryError(
            description,
            status_code=status_code if isinstance(status_code, int) else None,
        )

    logger.info("Email sent to %s", recipient)


__all__ = ["send_email"]
