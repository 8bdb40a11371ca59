from .delivery import DeliveryLogRead, FailedJobRead
from .notification import (
    CountResponse,
    NotificationCreate,
    NotificationListResponse,
    NotificationRead,
    PaginationRead,
    UnreadCountResponse,
)
from .preferences import PreferencesRead, PreferencesUpdate
from .template import (
    TemplateCreate,
    TemplatePreviewRead,
    TemplatePreviewRequest,
    TemplateRead,
    TemplateUpdate,
)

__all__ = [
    "CountResponse",
    "DeliveryLogRead",
    "FailedJobRead",
    "NotificationCreate",
    "NotificationListResponse",
    "NotificationRead",
    "PaginationRead",
    "PreferencesRead",
    "PreferencesUpdate",
    "TemplateCreate",
    "TemplatePreviewRead",
    "TemplatePreviewRequest",
    "TemplateRead",
    "TemplateUpdate",
    "UnreadCountResponse",
]
