"""Connection management helpers for notification websockets."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, DefaultDict, Iterable, Set

from fastapi import WebSocket, status

logger = logging.getLogger(__name__)


class NotificationConnectionManager:
    """Manage active websocket connections grouped by recipient.

    Each recipient owns one room; every connection in the room receives the
    events addressed to that recipient and nothing else.
    """

    def __init__(self) -> None:
        self._connections: DefaultDict[int, Set[WebSocket]] = defaultdict(set)

    async def connect(self, recipient_id: int, websocket: WebSocket) -> None:
        """Accept the websocket connection and join the room of ``recipient_id``."""

        await websocket.accept()
        self._connections[recipient_id].add(websocket)
        logger.info("Recipient %s connected (%s open)", recipient_id, self.connection_count())

    def disconnect(self, recipient_id: int, websocket: WebSocket) -> None:
        """Remove ``websocket`` from the room of ``recipient_id``."""

        connections = self._connections.get(recipient_id)
        if connections is None:
            return
        connections.discard(websocket)
        if not connections:
            self._connections.pop(recipient_id, None)

    def connection_count(self, recipient_id: int | None = None) -> int:
        if recipient_id is not None:
            return len(self._connections.get(recipient_id, ()))
        return sum(len(connections) for connections in self._connections.values())

    async def send_to_user(self, recipient_id: int, message: dict[str, Any]) -> None:
        """Send ``message`` to every active connection of ``recipient_id``."""

        await self.send_sequence(recipient_id, (message,))

    async def send_sequence(
        self, recipient_id: int, messages: Iterable[dict[str, Any]]
    ) -> None:
        """Send ``messages`` in order to every connection of ``recipient_id``.

        Messages are written one after the other on each connection, so a
        client never sees a later message before an earlier one.
        """

        connections = list(self._connections.get(recipient_id, set()))
        if not connections:
            return
        pending = list(messages)
        for connection in connections:
            try:
                for message in pending:
                    await connection.send_json(message)
            except Exception:  # pragma: no cover - socket closed mid-send
                logger.debug("Dropping stale websocket for recipient %s", recipient_id)
                self.disconnect(recipient_id, connection)

    async def close_all(self, code: int = status.WS_1001_GOING_AWAY) -> None:
        """Close every open connection, used during application shutdown."""

        rooms = list(self._connections.items())
        self._connections.clear()
        for recipient_id, connections in rooms:
            for connection in connections:
                try:
                    await connection.close(code=code)
                except Exception:  # pragma: no cover - already closed by the peer
                    logger.debug("Websocket for recipient %s already closed", recipient_id)


notification_manager = NotificationConnectionManager()


__all__ = ["NotificationConnectionManager", "notification_manager"]
