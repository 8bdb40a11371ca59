"""Use case for inspecting dead-lettered delivery jobs."""

from typing import Any

from notifyhub.domain.entities import DELIVERY_CHANNELS
from notifyhub.domain.errors import ValidationError
from notifyhub.infrastructure.queues import JobRecordStore


def list_failed_jobs(
    *, channel: str, store: JobRecordStore | None = None
) -> list[dict[str, Any]]:
    """Return the most recent jobs of ``channel`` that exhausted their attempts."""

    normalized = channel.strip().upper()
    if normalized not in DELIVERY_CHANNELS:
        raise ValidationError(f"Unsupported delivery channel: {channel}")
    store = store or JobRecordStore.from_settings()
    return store.list_failed(normalized)
