"""Use cases for deleting notifications."""

from sqlalchemy.orm import Session

from notifyhub.domain.errors import NotFoundError
from notifyhub.infrastructure.notifications import RealtimeEventPublisher
from notifyhub.infrastructure.repositories import NotificationRepository

from .events import broadcast_all_deleted, broadcast_unread_count


def delete_notification(
    session: Session,
    notification_id: int,
    *,
    recipient_id: int,
    publisher: RealtimeEventPublisher | None = None,
) -> None:
    """Delete a notification owned by ``recipient_id``.

    A notification of another recipient is reported as missing and left
    untouched.
    """

    repository = NotificationRepository(session)
    if not repository.delete(notification_id, recipient_id=recipient_id):
        raise NotFoundError("Notification not found")
    broadcast_unread_count(session, recipient_id, publisher=publisher)


def delete_all_notifications(
    session: Session,
    recipient_id: int,
    *,
    publisher: RealtimeEventPublisher | None = None,
) -> int:
    deleted = NotificationRepository(session).delete_all(recipient_id)
    broadcast_all_deleted(recipient_id, publisher=publisher)
    return deleted
