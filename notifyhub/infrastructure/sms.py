"""SMS delivery through Twilio."""

from __future__ import annotations

import logging

from twilio.base.exceptions import TwilioException
from twilio.rest import Client

from notifyhub.config import get_settings
from notifyhub.domain.errors import SmsDeliveryError

logger = logging.getLogger(__name__)


def _build_client() -> Client | None:
    settings = get_settings()
    if not (settings.twilio_account_sid and settings.twilio_auth_token):
        return None
    return Client(settings.twilio_account_sid, settings.twilio_auth_token)


def send_sms(body: str, recipient: str) -> None:
    """Send ``body`` as a text message to ``recipient``.

    Raises :class:`SmsDeliveryError` when Twilio is not configured or rejects
    the message. With ``SMS_MOCK_MODE`` enabled the message is only logged.
    """

    settings = get_settings()
    if settings.sms_mock_mode:
        logger.info("[mock sms] to=%s body=%s", recipient, body)
        return

    client = _build_client()
    if client is None or not settings.twilio_phone_number:
        raise SmsDeliveryError("Twilio client not configured")

    try:
        message = client.messages.create(
            body=body,
            from_=settings.twilio_phone_number,
            to=recipient,
        )
    except TwilioException as exc:
        status_code = getattr(exc, "status", None)
        logger.error("Error sending SMS to %s: %s", recipient, exc)
        raise SmsDeliveryError(
            f"Failed to send SMS: {exc}",
            status_code=status_code if isinstance(status_code, int) else None,
        ) from exc

    logger.info("SMS sent to %s (sid %s)", recipient, getattr(message, "sid", None))


__all__ = ["send_sms"]
