"""Celery application used to run channel delivery jobs."""

import logging

from celery import Celery
from celery.signals import setup_logging

from notifyhub.config import LOG_FORMAT, get_settings

EMAIL_QUEUE = "email"
SMS_QUEUE = "sms"
EMAIL_TASK_NAME = "notifyhub.deliver_email"
SMS_TASK_NAME = "notifyhub.deliver_sms"

# Quiet-hours delays can approach a full day; Redis must not redeliver
# a countdown task before it becomes due.
VISIBILITY_TIMEOUT_SECONDS = 25 * 60 * 60

settings = get_settings()

celery_app = Celery(
    "notifyhub",
    broker=settings.redis_url,
    include=["notifyhub.infrastructure.queues.tasks"],
)

celery_app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    timezone="UTC",
    enable_utc=True,
    task_ignore_result=True,
    task_acks_late=True,
    task_reject_on_worker_lost=True,
    worker_prefetch_multiplier=1,
    worker_hijack_root_logger=False,
    task_routes={
        EMAIL_TASK_NAME: {"queue": EMAIL_QUEUE},
        SMS_TASK_NAME: {"queue": SMS_QUEUE},
    },
    broker_transport_options={"visibility_timeout": VISIBILITY_TIMEOUT_SECONDS},
)


@setup_logging.connect
def _configure_worker_logging(**_kwargs) -> None:
    logging.basicConfig(level=settings.log_level.upper(), format=LOG_FORMAT)


__all__ = [
    "EMAIL_QUEUE",
    "EMAIL_TASK_NAME",
    "SMS_QUEUE",
    "SMS_TASK_NAME",
    "celery_app",
]
