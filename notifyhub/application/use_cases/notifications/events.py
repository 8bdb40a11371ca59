"""Realtime event sequences emitted after notification state changes.

Each helper sends its events as a single ordered sequence, so the
state-change event always reaches the room before the unread count.
"""

from __future__ import annotations

from sqlalchemy.orm import Session

from notifyhub.domain.entities import Notification
from notifyhub.infrastructure.notifications import (
    RealtimeEvent,
    RealtimeEventPublisher,
    realtime_event_publisher,
    serialize_notification,
)
from notifyhub.infrastructure.repositories import NotificationRepository

EVENT_NEW = "notification:new"
EVENT_READ = "notification:read"
EVENT_READ_ALL = "notification:read-all"
EVENT_DELETE_ALL = "notification:delete-all"
EVENT_UNREAD_COUNT = "unread-count:update"


def unread_count_event(count: int) -> RealtimeEvent:
    return EVENT_UNREAD_COUNT, {"unreadCount": count}


def _publisher(publisher: RealtimeEventPublisher | None) -> RealtimeEventPublisher:
    return publisher or realtime_event_publisher


def _count(session: Session, recipient_id: int) -> int:
    return NotificationRepository(session).count_unread(recipient_id)


def broadcast_new_notification(
    session: Session,
    notification: Notification,
    *,
    publisher: RealtimeEventPublisher | None = None,
) -> None:
    recipient_id = notification.recipient_id
    _publisher(publisher).dispatch(
        recipient_id,
        [
            (EVENT_NEW, {"notification": serialize_notification(notification)}),
            unread_count_event(_count(session, recipient_id)),
        ],
    )


def broadcast_notification_read(
    session: Session,
    *,
    recipient_id: int,
    notification_id: int,
    publisher: RealtimeEventPublisher | None = None,
) -> None:
    _publisher(publisher).dispatch(
        recipient_id,
        [
            (EVENT_READ, {"id": notification_id}),
            unread_count_event(_count(session, recipient_id)),
        ],
    )


def broadcast_all_read(
    recipient_id: int, *, publisher: RealtimeEventPublisher | None = None
) -> None:
    _publisher(publisher).dispatch(
        recipient_id, [(EVENT_READ_ALL, {}), unread_count_event(0)]
    )


def broadcast_unread_count(
    session: Session,
    recipient_id: int,
    *,
    publisher: RealtimeEventPublisher | None = None,
) -> None:
    _publisher(publisher).dispatch(
        recipient_id, [unread_count_event(_count(session, recipient_id))]
    )


def broadcast_all_deleted(
    recipient_id: int, *, publisher: RealtimeEventPublisher | None = None
) -> None:
    _publisher(publisher).dispatch(
        recipient_id, [(EVENT_DELETE_ALL, {}), unread_count_event(0)]
    )


__all__ = [
    "EVENT_DELETE_ALL",
    "EVENT_NEW",
    "EVENT_READ",
    "EVENT_READ_ALL",
    "EVENT_UNREAD_COUNT",
    "broadcast_all_deleted",
    "broadcast_all_read",
    "broadcast_new_notification",
    "broadcast_notification_read",
    "broadcast_unread_count",
    "unread_count_event",
]
