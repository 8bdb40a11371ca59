"""Tests for the bounded job record lists and the queue producer."""

from __future__ import annotations

from datetime import timedelta

import pytest
from kombu.exceptions import OperationalError

from notifyhub.application.use_cases.deliveries import list_failed_jobs
from notifyhub.domain.entities import DeliveryJob
from notifyhub.domain.errors import QueueUnavailableError, ValidationError
from notifyhub.infrastructure.queues import DeliveryQueue, JobRecordStore


def _job(channel: str = "EMAIL", index: int = 0) -> DeliveryJob:
    return DeliveryJob(
        channel=channel,
        notification_id=index,
        to="someone@example.com" if channel == "EMAIL" else "+15550003333",
        body=f"message {index}",
    )


def test_completed_records_are_capped_newest_first(fake_redis) -> None:
    store = JobRecordStore(fake_redis, keep_completed=3)

    for index in range(5):
        store.record_completed(_job(index=index), attempts=1)

    records = store.list_completed("EMAIL")
    assert [record["job"]["notification_id"] for record in records] == [4, 3, 2]


def test_failed_records_are_kept_per_channel(fake_redis) -> None:
    store = JobRecordStore(fake_redis, keep_failed=2)

    store.record_failed(_job("SMS", 1), attempts=3, error="carrier down")
    store.record_failed(_job("EMAIL", 2), attempts=3, error="bounced")

    [sms_record] = store.list_failed("SMS")
    assert sms_record["error"] == "carrier down"
    assert sms_record["attempts"] == 3
    assert DeliveryJob.from_payload(sms_record["job"]).channel == "SMS"
    assert len(store.list_failed("EMAIL")) == 1


def test_zero_capacity_keeps_nothing(fake_redis) -> None:
    store = JobRecordStore(fake_redis, keep_completed=0)

    store.record_completed(_job(), attempts=1)

    assert store.list_completed("EMAIL") == []


def test_list_failed_jobs_validates_the_channel(fake_redis) -> None:
    store = JobRecordStore(fake_redis)
    store.record_failed(_job("SMS"), attempts=3, error="nope")

    assert len(list_failed_jobs(channel="sms", store=store)) == 1
    with pytest.raises(ValidationError):
        list_failed_jobs(channel="PUSH", store=store)


class RecordingCeleryApp:
    def __init__(self, error: Exception | None = None) -> None:
        self.sent = []
        self.error = error

    def send_task(self, name, **options):
        if self.error is not None:
            raise self.error
        self.sent.append((name, options))


def test_enqueue_routes_by_channel_and_applies_the_delay() -> None:
    app = RecordingCeleryApp()
    queue = DeliveryQueue(app=app)
    job = _job("SMS")

    job_id = queue.enqueue(job, timedelta(minutes=90))

    assert job_id == job.id
    [(name, options)] = app.sent
    assert name == "notifyhub.deliver_sms"
    assert options["queue"] == "sms"
    assert options["countdown"] == 5400
    assert options["task_id"] == job.id
    assert options["args"] == [job.to_payload()]


def test_enqueue_without_delay_sends_immediately() -> None:
    app = RecordingCeleryApp()

    DeliveryQueue(app=app).enqueue(_job("EMAIL"))

    assert app.sent[0][0] == "notifyhub.deliver_email"
    assert app.sent[0][1]["countdown"] is None


def test_broker_errors_become_queue_unavailable() -> None:
    queue = DeliveryQueue(app=RecordingCeleryApp(OperationalError("connection refused")))

    with pytest.raises(QueueUnavailableError):
        queue.enqueue(_job())


def test_unknown_channel_is_rejected() -> None:
    with pytest.raises(ValueError):
        DeliveryQueue(app=RecordingCeleryApp()).enqueue(_job("PUSH"))
