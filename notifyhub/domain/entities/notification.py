"""Domain entity representing a recipient notification."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

NOTIFICATION_TYPE_INFO = "INFO"
NOTIFICATION_TYPE_SUCCESS = "SUCCESS"
NOTIFICATION_TYPE_WARNING = "WARNING"
NOTIFICATION_TYPE_ERROR = "ERROR"
NOTIFICATION_TYPE_SYSTEM = "SYSTEM"

NOTIFICATION_TYPES = (
    NOTIFICATION_TYPE_INFO,
    NOTIFICATION_TYPE_SUCCESS,
    NOTIFICATION_TYPE_WARNING,
    NOTIFICATION_TYPE_ERROR,
    NOTIFICATION_TYPE_SYSTEM,
)

PRIORITY_LOW = "LOW"
PRIORITY_MEDIUM = "MEDIUM"
PRIORITY_HIGH = "HIGH"

# Ordered from least to most urgent; the index is the sort rank.
NOTIFICATION_PRIORITIES = (PRIORITY_LOW, PRIORITY_MEDIUM, PRIORITY_HIGH)


@dataclass
class Notification:
    """Addressable event delivered to exactly one recipient."""

    id: int | None
    recipient_id: int
    type: str
    priority: str
    title: str
    message: str
    action_url: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
    is_read: bool = False
    read_at: datetime | None = None
    scheduled_at: datetime | None = None
    created_at: datetime | None = None

    def mark_read(self, when: datetime) -> bool:
        """Flag the notification as read.

        Returns ``False`` when it was already read; ``read_at`` keeps the time
        of the first read.
        """

        if self.is_read:
            return False
        self.is_read = True
        self.read_at = when
        return True


@dataclass(frozen=True)
class NotificationPage:
    """A page of notifications plus pagination details."""

    items: list[Notification]
    page: int
    limit: int
    total: int

    @property
    def total_pages(self) -> int:
        if self.limit <= 0:
            return 0
        return (self.total + self.limit - 1) // self.limit

    @property
    def has_more(self) -> bool:
        return (self.page - 1) * self.limit + len(self.items) < self.total


__all__ = [
    "NOTIFICATION_PRIORITIES",
    "NOTIFICATION_TYPES",
    "NOTIFICATION_TYPE_ERROR",
    "NOTIFICATION_TYPE_INFO",
    "NOTIFICATION_TYPE_SUCCESS",
    "NOTIFICATION_TYPE_SYSTEM",
    "NOTIFICATION_TYPE_WARNING",
    "Notification",
    "NotificationPage",
    "PRIORITY_HIGH",
    "PRIORITY_LOW",
    "PRIORITY_MEDIUM",
]
