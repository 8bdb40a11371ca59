"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, HttpUrl

NotificationType = Literal["INFO", "SUCCESS", "WARNING", "ERROR", "SYSTEM"]
NotificationPriority = Literal["LOW", "MEDIUM", "HIGH"]


class NotificationCreate(BaseModel):
    """Payload used to create a notification and fan it out."""

    model_config = ConfigDict(extra="forbid")

    recipient_id: int | None = Field(
        default=None,
        gt=0,
        description="Target recipient; defaults to the authenticated recipient",
    )
    type: NotificationType = "INFO"
    priority: NotificationPriority = "MEDIUM"
    title: str = Field(..., min_length=1, max_length=255)
    message: str = Field(..., min_length=1)
    action_url: HttpUrl | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    scheduled_at: datetime | None = None
    email_template_id: int | None = Field(default=None, gt=0)
    sms_template_id: int | None = Field(default=None, gt=0)
    template_variables: dict[str, str] = Field(default_factory=dict)


class NotificationRead(BaseModel):
    """Representation of a notification delivered to the client."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    recipient_id: int
    type: NotificationType
    priority: NotificationPriority
    title: str
    message: str
    action_url: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    is_read: bool
    read_at: datetime | None = None
    scheduled_at: datetime | None = None
    created_at: datetime


class PaginationRead(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int
    has_more: bool


class NotificationListResponse(BaseModel):
    notifications: list[NotificationRead]
    pagination: PaginationRead


class UnreadCountResponse(BaseModel):
    unread_count: int


class CountResponse(BaseModel):
    count: int


__all__ = [
    "CountResponse",
    "NotificationCreate",
    "NotificationListResponse",
    "NotificationRead",
    "PaginationRead",
    "UnreadCountResponse",
]
