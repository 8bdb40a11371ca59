"""Builders for the channel delivery jobs produced by the fan-out."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime

from notifyhub.domain.entities import (
    CHANNEL_EMAIL,
    CHANNEL_SMS,
    DeliveryJob,
    Notification,
)


def email_subject(notification: Notification) -> str:
    return f"[{notification.type}] {notification.title}"


def email_body(notification: Notification) -> str:
    if notification.action_url:
        return f"{notification.message}\n\n{notification.action_url}"
    return notification.message


def sms_message(notification: Notification) -> str:
    text = f"{notification.title}: {notification.message}"
    if notification.action_url:
        return f"{text} {notification.action_url}"
    return text


def build_email_job(
    notification: Notification,
    *,
    to: str,
    template_id: int | None = None,
    variables: Mapping[str, str] | None = None,
    not_before: datetime | None = None,
) -> DeliveryJob:
    """Email job carrying literal content and an optional template reference."""

    return DeliveryJob(
        channel=CHANNEL_EMAIL,
        notification_id=notification.id,
        to=to,
        subject=email_subject(notification),
        body=email_body(notification),
        template_id=template_id,
        variables=dict(variables or {}),
        not_before=not_before,
    )


def build_sms_job(
    notification: Notification,
    *,
    to: str,
    template_id: int | None = None,
    variables: Mapping[str, str] | None = None,
    not_before: datetime | None = None,
) -> DeliveryJob:
    """SMS job carrying the literal message and an optional template reference."""

    return DeliveryJob(
        channel=CHANNEL_SMS,
        notification_id=notification.id,
        to=to,
        body=sms_message(notification),
        template_id=template_id,
        variables=dict(variables or {}),
        not_before=not_before,
    )


__all__ = [
    "build_email_job",
    "build_sms_job",
    "email_body",
    "email_subject",
    "sms_message",
]
