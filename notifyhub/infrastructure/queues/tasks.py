"""Celery tasks that consume the email and SMS delivery queues."""

from __future__ import annotations

import logging
from typing import Any, Callable

import redis
from celery import Task

from notifyhub.application.use_cases.deliveries import process_email_job, process_sms_job
from notifyhub.domain.entities import DeliveryJob
from notifyhub.domain.errors import ProviderError
from notifyhub.infrastructure.database import SessionLocal
from notifyhub.infrastructure.email import send_email
from notifyhub.infrastructure.sms import send_sms

from .celery_app import EMAIL_TASK_NAME, SMS_TASK_NAME, celery_app
from .job_store import JobRecordStore
from .retry import RetryPolicy

logger = logging.getLogger(__name__)

_job_store: JobRecordStore | None = None


def get_job_store() -> JobRecordStore:
    global _job_store
    if _job_store is None:
        _job_store = JobRecordStore.from_settings()
    return _job_store


def _run_delivery(
    task: Task,
    payload: dict[str, Any],
    *,
    process: Callable[..., Any],
    sender: Callable[..., None],
) -> dict[str, Any]:
    """Run one attempt of a delivery job and apply the retry policy.

    Provider failures are retried with exponential backoff until the attempt
    cap; the last failure is recorded in the dead-letter list and re-raised
    so Celery marks the task as failed. Any other error is not retried but
    is dead-lettered the same way.
    """

    job = DeliveryJob.from_payload(payload)
    attempt = task.request.retries + 1
    policy = RetryPolicy.from_settings()

    session = SessionLocal()
    try:
        process(session, job, attempt=attempt, sender=sender)
    except ProviderError as exc:
        if policy.should_retry(attempt):
            delay = policy.calculate_delay(attempt)
            logger.warning(
                "%s job %s failed on attempt %s/%s, retrying in %.1fs: %s",
                job.channel,
                job.id,
                attempt,
                policy.max_attempts,
                delay,
                exc,
            )
            raise task.retry(exc=exc, countdown=delay, max_retries=policy.max_attempts - 1)

        logger.error(
            "%s job %s for notification %s failed after %s attempts: %s",
            job.channel,
            job.id,
            job.notification_id,
            attempt,
            exc,
        )
        _record(lambda store: store.record_failed(job, attempts=attempt, error=str(exc)))
        raise
    except Exception as exc:
        logger.exception(
            "%s job %s for notification %s aborted on attempt %s",
            job.channel,
            job.id,
            job.notification_id,
            attempt,
        )
        _record(
            lambda store: store.record_failed(
                job, attempts=attempt, error=str(exc) or exc.__class__.__name__
            )
        )
        raise
    finally:
        session.close()

    _record(lambda store: store.record_completed(job, attempts=attempt))
    return {"job_id": job.id, "attempts": attempt}


def _record(write: Callable[[JobRecordStore], None]) -> None:
    try:
        write(get_job_store())
    except redis.RedisError as exc:
        logger.warning("Could not persist delivery job record: %s", exc)


@celery_app.task(bind=True, name=EMAIL_TASK_NAME)
def deliver_email(self: Task, payload: dict[str, Any]) -> dict[str, Any]:
    return _run_delivery(self, payload, process=process_email_job, sender=send_email)


@celery_app.task(bind=True, name=SMS_TASK_NAME)
def deliver_sms(self: Task, payload: dict[str, Any]) -> dict[str, Any]:
    return _run_delivery(self, payload, process=process_sms_job, sender=send_sms)


__all__ = ["deliver_email", "deliver_sms", "get_job_store"]
