"""Delivery job use cases executed by the channel workers."""

from .jobs import build_email_job, build_sms_job
from .list_failed_jobs import list_failed_jobs
from .process_job import process_email_job, process_sms_job

__all__ = [
    "build_email_job",
    "build_sms_job",
    "list_failed_jobs",
    "process_email_job",
    "process_sms_job",
]
