"""Notification use cases: fan-out, queries and read-state mutations."""

from .create_notification import NewNotificationData, create_notification
from .delete_notification import delete_all_notifications, delete_notification
from .get_notification import get_notification, get_unread_count
from .list_delivery_logs import list_delivery_logs
from .list_notifications import list_notifications
from .mark_as_read import mark_all_as_read, mark_as_read

__all__ = [
    "NewNotificationData",
    "create_notification",
    "delete_all_notifications",
    "delete_notification",
    "get_notification",
    "get_unread_count",
    "list_delivery_logs",
    "list_notifications",
    "mark_all_as_read",
    "mark_as_read",
]
