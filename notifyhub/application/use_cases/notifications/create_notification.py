"""Fan-out of a new notification to storage, delivery queues and live clients."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any

from sqlalchemy.orm import Session

from notifyhub.application.use_cases.deliveries.jobs import build_email_job, build_sms_job
from notifyhub.application.use_cases.preferences.get_preferences import get_preferences
from notifyhub.application.use_cases.preferences.quiet_hours import (
    compute_quiet_hours_delay,
)
from notifyhub.domain.entities import (
    NOTIFICATION_PRIORITIES,
    NOTIFICATION_TYPES,
    PRIORITY_MEDIUM,
    DeliveryJob,
    Notification,
    Recipient,
)
from notifyhub.domain.errors import (
    AuthorizationError,
    NotFoundError,
    QueueUnavailableError,
    ValidationError,
)
from notifyhub.infrastructure.notifications import RealtimeEventPublisher
from notifyhub.infrastructure.queues import DeliveryQueue, delivery_queue
from notifyhub.infrastructure.repositories import (
    NotificationRepository,
    RecipientRepository,
)
from notifyhub.utils import ensure_app_timezone, now_in_app_timezone

from .events import broadcast_new_notification

logger = logging.getLogger(__name__)


@dataclass
class NewNotificationData:
    """Request to create a notification and fan it out."""

    title: str
    message: str
    type: str = "INFO"
    priority: str = PRIORITY_MEDIUM
    recipient_id: int | None = None
    action_url: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
    scheduled_at: datetime | None = None
    email_template_id: int | None = None
    sms_template_id: int | None = None
    template_variables: Mapping[str, str] = field(default_factory=dict)


def _validate(data: NewNotificationData) -> None:
    if not data.title or not data.title.strip():
        raise ValidationError("Title is required")
    if not data.message or not data.message.strip():
        raise ValidationError("Message is required")
    if data.type not in NOTIFICATION_TYPES:
        raise ValidationError(f"Invalid notification type: {data.type}")
    if data.priority not in NOTIFICATION_PRIORITIES:
        raise ValidationError(f"Invalid notification priority: {data.priority}")


def _resolve_target(
    session: Session, data: NewNotificationData, acting_recipient: Recipient
) -> Recipient:
    target_id = data.recipient_id or acting_recipient.id
    if target_id != acting_recipient.id and not acting_recipient.is_admin:
        raise AuthorizationError("Not allowed to notify other recipients")
    if target_id == acting_recipient.id:
        return acting_recipient

    recipient = RecipientRepository(session).get(target_id)
    if recipient is None or not recipient.is_active:
        raise NotFoundError("Recipient not found")
    return recipient


def _enqueue(queue: DeliveryQueue, job: DeliveryJob, delay: timedelta) -> None:
    try:
        queue.enqueue(job, delay)
    except QueueUnavailableError as exc:
        logger.error(
            "Dropping %s delivery for notification %s: %s",
            job.channel,
            job.notification_id,
            exc,
        )


def create_notification(
    session: Session,
    data: NewNotificationData,
    *,
    acting_recipient: Recipient,
    queue: DeliveryQueue | None = None,
    publisher: RealtimeEventPublisher | None = None,
    now: datetime | None = None,
) -> Notification:
    """Persist a notification and dispatch it on every eligible channel.

    The notification row is always written. Email and SMS jobs are queued
    only when the channel is enabled in the recipient preferences and the
    matching contact point is verified; both share the same quiet-hours
    delay. Queue outages are logged and never reach the caller.

    Raises:
        ValidationError: If the request data is invalid.
        AuthorizationError: If a non-admin targets another recipient.
        NotFoundError: If the target recipient does not exist.
    """

    _validate(data)
    recipient = _resolve_target(session, data, acting_recipient)
    preferences = get_preferences(session, recipient.id)
    current_time = ensure_app_timezone(now) if now is not None else now_in_app_timezone()

    notification = NotificationRepository(session).create(
        Notification(
            id=None,
            recipient_id=recipient.id,
            type=data.type,
            priority=data.priority,
            title=data.title.strip(),
            message=data.message,
            action_url=data.action_url,
            metadata=dict(data.metadata or {}),
            scheduled_at=data.scheduled_at,
            created_at=current_time,
        )
    )

    delay = compute_quiet_hours_delay(
        current_time, preferences.quiet_hours_start, preferences.quiet_hours_end
    )
    not_before = current_time + delay if delay else None
    queue = queue or delivery_queue

    if preferences.email_enabled and recipient.can_receive_email():
        _enqueue(
            queue,
            build_email_job(
                notification,
                to=recipient.email,
                template_id=data.email_template_id,
                variables=data.template_variables,
                not_before=not_before,
            ),
            delay,
        )

    if preferences.sms_enabled and recipient.can_receive_sms():
        _enqueue(
            queue,
            build_sms_job(
                notification,
                to=recipient.phone,
                template_id=data.sms_template_id,
                variables=data.template_variables,
                not_before=not_before,
            ),
            delay,
        )

    broadcast_new_notification(session, notification, publisher=publisher)
    return notification


__all__ = ["NewNotificationData", "create_notification"]
