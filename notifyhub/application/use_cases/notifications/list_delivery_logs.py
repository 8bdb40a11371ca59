"""Use case for inspecting the delivery attempts of a notification."""

from collections.abc import Sequence

from sqlalchemy.orm import Session

from notifyhub.domain.entities import DeliveryLog
from notifyhub.infrastructure.repositories import DeliveryLogRepository

from .get_notification import get_notification


def list_delivery_logs(
    session: Session, notification_id: int, *, recipient_id: int
) -> Sequence[DeliveryLog]:
    """Return every delivery attempt of an owned notification, oldest first."""

    get_notification(session, notification_id, recipient_id=recipient_id)
    return DeliveryLogRepository(session).list_for_notification(notification_id)
