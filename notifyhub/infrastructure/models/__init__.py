"""ORM models used by the application infrastructure."""

from .delivery_log import DeliveryLogModel
from .notification import NotificationModel
from .preferences import RecipientPreferencesModel
from .recipient import RecipientModel
from .template import TemplateModel

__all__ = [
    "DeliveryLogModel",
    "NotificationModel",
    "RecipientModel",
    "RecipientPreferencesModel",
    "TemplateModel",
]
