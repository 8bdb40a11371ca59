"""Delivery queue infrastructure backed by Celery and Redis."""

from .celery_app import celery_app
from .job_store import JobRecordStore
from .queue import DeliveryQueue, delivery_queue
from .retry import RetryPolicy

__all__ = [
    "DeliveryQueue",
    "JobRecordStore",
    "RetryPolicy",
    "celery_app",
    "delivery_queue",
]
