"""Queue payload describing a single channel delivery."""

from __future__ import annotations

import uuid
from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any


def _new_job_id() -> str:
    return uuid.uuid4().hex


@dataclass
class DeliveryJob:
    """Work item consumed by the channel workers.

    ``subject``/``body`` always hold literal content; when ``template_id`` is
    set the worker renders the template instead and only falls back to the
    literal content if rendering is impossible.
    """

    channel: str
    notification_id: int
    to: str
    body: str
    subject: str | None = None
    template_id: int | None = None
    variables: dict[str, str] = field(default_factory=dict)
    not_before: datetime | None = None
    id: str = field(default_factory=_new_job_id)

    def to_payload(self) -> dict[str, Any]:
        """Return a JSON-serializable representation for the broker."""

        payload = asdict(self)
        payload["not_before"] = (
            self.not_before.isoformat() if self.not_before is not None else None
        )
        return payload

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "DeliveryJob":
        """Rebuild a job from :meth:`to_payload` output."""

        data = dict(payload)
        not_before = data.get("not_before")
        if isinstance(not_before, str):
            data["not_before"] = datetime.fromisoformat(not_before)
        data["variables"] = {
            str(key): str(value) for key, value in (data.get("variables") or {}).items()
        }
        known = set(cls.__dataclass_fields__)
        return cls(**{key: value for key, value in data.items() if key in known})


__all__ = ["DeliveryJob"]
