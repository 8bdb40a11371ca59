"""Use cases for reading single notifications and their counters."""

from sqlalchemy.orm import Session

from notifyhub.domain.entities import Notification
from notifyhub.domain.errors import NotFoundError
from notifyhub.infrastructure.repositories import NotificationRepository


def get_notification(
    session: Session, notification_id: int, *, recipient_id: int
) -> Notification:
    """Return a notification owned by ``recipient_id`` or raise an error."""

    notification = NotificationRepository(session).get_for_recipient(
        notification_id, recipient_id=recipient_id
    )
    if notification is None:
        raise NotFoundError("Notification not found")
    return notification


def get_unread_count(session: Session, recipient_id: int) -> int:
    return NotificationRepository(session).count_unread(recipient_id)
