"""Repository implementations for infrastructure layer."""

from .delivery_log_repository import DeliveryLogRepository
from .notification_repository import NotificationRepository
from .preference_repository import PreferenceRepository
from .recipient_repository import RecipientRepository
from .template_repository import TemplateRepository

__all__ = [
    "DeliveryLogRepository",
    "NotificationRepository",
    "PreferenceRepository",
    "RecipientRepository",
    "TemplateRepository",
]
