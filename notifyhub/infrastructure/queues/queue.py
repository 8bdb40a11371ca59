"""Producer side of the channel delivery queues."""

from __future__ import annotations

import logging
from datetime import timedelta

from kombu.exceptions import OperationalError

from notifyhub.domain.entities import CHANNEL_EMAIL, CHANNEL_SMS, DeliveryJob
from notifyhub.domain.errors import QueueUnavailableError

from .celery_app import (
    EMAIL_QUEUE,
    EMAIL_TASK_NAME,
    SMS_QUEUE,
    SMS_TASK_NAME,
    celery_app,
)

logger = logging.getLogger(__name__)

_ROUTES = {
    CHANNEL_EMAIL: (EMAIL_TASK_NAME, EMAIL_QUEUE),
    CHANNEL_SMS: (SMS_TASK_NAME, SMS_QUEUE),
}


class DeliveryQueue:
    """Publish :class:`DeliveryJob` payloads to the queue of their channel."""

    def __init__(self, app=celery_app) -> None:
        self._app = app

    def enqueue(self, job: DeliveryJob, delay: timedelta | float = 0) -> str:
        """Publish ``job`` so it becomes visible to workers after ``delay``.

        Returns the job identifier. Raises :class:`QueueUnavailableError`
        when the broker refuses the message.
        """

        try:
            task_name, queue_name = _ROUTES[job.channel]
        except KeyError as exc:
            msg = f"Unsupported delivery channel: {job.channel}"
            raise ValueError(msg) from exc

        countdown = delay.total_seconds() if isinstance(delay, timedelta) else float(delay)
        try:
            self._app.send_task(
                task_name,
                args=[job.to_payload()],
                task_id=job.id,
                queue=queue_name,
                countdown=countdown if countdown > 0 else None,
                retry=False,
            )
        except OperationalError as exc:
            raise QueueUnavailableError(f"Could not enqueue {job.channel} job: {exc}") from exc

        logger.info(
            "Enqueued %s job %s for notification %s (delay %.0fs)",
            job.channel,
            job.id,
            job.notification_id,
            max(countdown, 0),
        )
        return job.id


delivery_queue = DeliveryQueue()


__all__ = ["DeliveryQueue", "delivery_queue"]
