"""Domain entities exposed by the application."""

from .channel import CHANNEL_EMAIL, CHANNEL_SMS, DELIVERY_CHANNELS
from .delivery_job import DeliveryJob
from .delivery_log import (
    DELIVERY_STATUS_FAILED,
    DELIVERY_STATUS_PENDING,
    DELIVERY_STATUS_SENT,
    DeliveryLog,
)
from .notification import (
    NOTIFICATION_PRIORITIES,
    NOTIFICATION_TYPES,
    PRIORITY_HIGH,
    PRIORITY_LOW,
    PRIORITY_MEDIUM,
    Notification,
    NotificationPage,
)
from .preferences import EMAIL_FREQUENCIES, RecipientPreferences
from .recipient import Recipient
from .template import Template, TemplatePreview

__all__ = [
    "CHANNEL_EMAIL",
    "CHANNEL_SMS",
    "DELIVERY_CHANNELS",
    "DELIVERY_STATUS_FAILED",
    "DELIVERY_STATUS_PENDING",
    "DELIVERY_STATUS_SENT",
    "DeliveryJob",
    "DeliveryLog",
    "EMAIL_FREQUENCIES",
    "NOTIFICATION_PRIORITIES",
    "NOTIFICATION_TYPES",
    "Notification",
    "NotificationPage",
    "PRIORITY_HIGH",
    "PRIORITY_LOW",
    "PRIORITY_MEDIUM",
    "Recipient",
    "RecipientPreferences",
    "Template",
    "TemplatePreview",
]
