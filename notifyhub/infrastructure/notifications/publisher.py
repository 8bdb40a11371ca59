"""Utility helpers to push realtime events to websocket subscribers."""

from __future__ import annotations

import asyncio
import copy
import logging
from typing import Any, Sequence, Tuple

from anyio import from_thread

from notifyhub.domain.entities import Notification
from notifyhub.utils import isoformat_or_none

from .manager import NotificationConnectionManager, notification_manager

logger = logging.getLogger(__name__)

RealtimeEvent = Tuple[str, dict[str, Any]]


class RealtimeEventPublisher:
    """Wrap events in the websocket envelope and schedule their delivery.

    Every call delivers its events as one ordered sequence to the room of a
    single recipient.
    """

    def __init__(self, manager: NotificationConnectionManager) -> None:
        self._manager = manager
        self._pending: set[asyncio.Task] = set()

    def dispatch(self, recipient_id: int, events: Sequence[RealtimeEvent]) -> None:
        """Schedule ``events`` for ``recipient_id`` from synchronous code."""

        if not recipient_id or not events:
            return

        messages = self._build_messages(events)
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            try:
                from_thread.run(self._manager.send_sequence, recipient_id, messages)
            except RuntimeError:
                # Outside the web process (e.g. a worker) there are no sockets.
                logger.debug(
                    "No event loop available; dropped %s realtime event(s) for recipient %s",
                    len(messages),
                    recipient_id,
                )
        else:
            task = loop.create_task(self._manager.send_sequence(recipient_id, messages))
            self._pending.add(task)
            task.add_done_callback(self._finish)

    async def emit(self, recipient_id: int, events: Sequence[RealtimeEvent]) -> None:
        """Deliver ``events`` for ``recipient_id`` from asynchronous code."""

        if not recipient_id or not events:
            return
        await self._manager.send_sequence(recipient_id, self._build_messages(events))

    def _finish(self, task: asyncio.Task) -> None:
        self._pending.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error("Realtime event delivery failed: %s", error)

    @staticmethod
    def _build_messages(events: Sequence[RealtimeEvent]) -> list[dict[str, Any]]:
        return [
            {"type": event_type, "data": copy.deepcopy(payload)}
            for event_type, payload in events
        ]


def serialize_notification(notification: Notification) -> dict[str, Any]:
    """Return the websocket payload representation for ``notification``."""

    return {
        "id": notification.id,
        "recipient_id": notification.recipient_id,
        "type": notification.type,
        "priority": notification.priority,
        "title": notification.title,
        "message": notification.message,
        "action_url": notification.action_url,
        "metadata": notification.metadata or {},
        "is_read": notification.is_read,
        "read_at": isoformat_or_none(notification.read_at),
        "scheduled_at": isoformat_or_none(notification.scheduled_at),
        "created_at": isoformat_or_none(notification.created_at),
    }


realtime_event_publisher = RealtimeEventPublisher(notification_manager)


__all__ = [
    "RealtimeEvent",
    "RealtimeEventPublisher",
    "realtime_event_publisher",
    "serialize_notification",
]
