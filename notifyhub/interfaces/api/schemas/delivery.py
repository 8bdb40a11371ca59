"""Schemas describing delivery attempts and dead-lettered jobs."""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict

DeliveryChannel = Literal["EMAIL", "SMS"]
DeliveryStatus = Literal["PENDING", "SENT", "FAILED"]


class DeliveryLogRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    notification_id: int
    channel: DeliveryChannel
    recipient: str
    status: DeliveryStatus
    attempt: int
    job_id: str | None
    sent_at: datetime | None
    error_message: str | None
    created_at: datetime | None


class FailedJobRead(BaseModel):
    job: dict[str, Any]
    attempts: int
    error: str | None
    finished_at: datetime | None
