"""Use cases for flagging notifications as read."""

from sqlalchemy.orm import Session

from notifyhub.domain.entities import Notification
from notifyhub.domain.errors import NotFoundError
from notifyhub.infrastructure.notifications import RealtimeEventPublisher
from notifyhub.infrastructure.repositories import NotificationRepository

from .events import broadcast_all_read, broadcast_notification_read


def mark_as_read(
    session: Session,
    notification_id: int,
    *,
    recipient_id: int,
    publisher: RealtimeEventPublisher | None = None,
) -> Notification:
    """Mark one notification as read and notify the recipient's room.

    Repeated calls succeed and keep the original ``read_at``; ownership is
    checked on every call.
    """

    notification = NotificationRepository(session).mark_as_read(
        notification_id, recipient_id=recipient_id
    )
    if notification is None:
        raise NotFoundError("Notification not found")

    broadcast_notification_read(
        session,
        recipient_id=recipient_id,
        notification_id=notification.id,
        publisher=publisher,
    )
    return notification


def mark_all_as_read(
    session: Session,
    recipient_id: int,
    *,
    publisher: RealtimeEventPublisher | None = None,
) -> int:
    """Mark every unread notification of ``recipient_id`` as read.

    Returns the number of notifications that changed.
    """

    updated = NotificationRepository(session).mark_all_as_read(recipient_id)
    broadcast_all_read(recipient_id, publisher=publisher)
    return updated
