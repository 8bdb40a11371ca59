"""Bounded records of finished delivery jobs kept in Redis."""

from __future__ import annotations

import json
import logging
from typing import Any

import redis

from notifyhub.config import get_settings
from notifyhub.domain.entities import DeliveryJob
from notifyhub.utils import now_in_app_timezone

logger = logging.getLogger(__name__)

_KEY_PREFIX = "notifyhub:jobs"
COMPLETED = "completed"
FAILED = "failed"


class JobRecordStore:
    """Keep the most recent completed and dead-lettered jobs per channel.

    Each outcome is a Redis list trimmed after every push so it never holds
    more than ``keep_completed``/``keep_failed`` entries.
    """

    def __init__(
        self,
        client: Any,
        *,
        keep_completed: int = 100,
        keep_failed: int = 50,
    ) -> None:
        self._client = client
        self.keep_completed = keep_completed
        self.keep_failed = keep_failed

    @classmethod
    def from_settings(cls) -> "JobRecordStore":
        settings = get_settings()
        client = redis.Redis.from_url(settings.redis_url, decode_responses=True)
        return cls(
            client,
            keep_completed=settings.queue_keep_completed,
            keep_failed=settings.queue_keep_failed,
        )

    def record_completed(self, job: DeliveryJob, *, attempts: int) -> None:
        record = self._build_record(job, attempts=attempts)
        self._push(self._key(job.channel, COMPLETED), record, self.keep_completed)

    def record_failed(self, job: DeliveryJob, *, attempts: int, error: str) -> None:
        record = self._build_record(job, attempts=attempts, error=error)
        self._push(self._key(job.channel, FAILED), record, self.keep_failed)

    def list_completed(self, channel: str) -> list[dict[str, Any]]:
        return self._read(self._key(channel, COMPLETED))

    def list_failed(self, channel: str) -> list[dict[str, Any]]:
        return self._read(self._key(channel, FAILED))

    def _push(self, key: str, record: dict[str, Any], keep: int) -> None:
        if keep <= 0:
            return
        pipeline = self._client.pipeline()
        pipeline.lpush(key, json.dumps(record))
        pipeline.ltrim(key, 0, keep - 1)
        pipeline.execute()

    def _read(self, key: str) -> list[dict[str, Any]]:
        records = []
        for raw in self._client.lrange(key, 0, -1):
            try:
                records.append(json.loads(raw))
            except (TypeError, json.JSONDecodeError):
                logger.warning("Skipping malformed job record under %s", key)
        return records

    @staticmethod
    def _key(channel: str, outcome: str) -> str:
        return f"{_KEY_PREFIX}:{channel.lower()}:{outcome}"

    @staticmethod
    def _build_record(
        job: DeliveryJob, *, attempts: int, error: str | None = None
    ) -> dict[str, Any]:
        return {
            "job": job.to_payload(),
            "attempts": attempts,
            "error": error,
            "finished_at": now_in_app_timezone().isoformat(),
        }


__all__ = ["JobRecordStore"]
