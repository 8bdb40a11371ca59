"""Domain entity recording one delivery attempt."""

from dataclasses import dataclass
from datetime import datetime

DELIVERY_STATUS_PENDING = "PENDING"
DELIVERY_STATUS_SENT = "SENT"
DELIVERY_STATUS_FAILED = "FAILED"


@dataclass
class DeliveryLog:
    """Outcome of a single worker invocation for one channel job.

    Status moves from ``PENDING`` to either ``SENT`` or ``FAILED`` and never
    back.
    """

    id: int | None
    notification_id: int
    channel: str
    recipient: str
    status: str
    attempt: int = 1
    job_id: str | None = None
    sent_at: datetime | None = None
    error_message: str | None = None
    created_at: datetime | None = None

    @property
    def is_terminal(self) -> bool:
        return self.status in (DELIVERY_STATUS_SENT, DELIVERY_STATUS_FAILED)


__all__ = [
    "DELIVERY_STATUS_FAILED",
    "DELIVERY_STATUS_PENDING",
    "DELIVERY_STATUS_SENT",
    "DeliveryLog",
]
