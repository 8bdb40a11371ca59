"""Tests for the Celery delivery tasks and their retry policy."""

from __future__ import annotations

import pytest
from celery.exceptions import Retry

from notifyhub.application.use_cases.deliveries import build_email_job
from notifyhub.application.use_cases.notifications import (
    NewNotificationData,
    create_notification,
    list_delivery_logs,
)
from notifyhub.domain.errors import EmailDeliveryError
from notifyhub.infrastructure.queues import JobRecordStore, RetryPolicy
from notifyhub.infrastructure.queues import tasks


@pytest.fixture()
def job_store(fake_redis, monkeypatch) -> JobRecordStore:
    store = JobRecordStore(fake_redis)
    monkeypatch.setattr(tasks, "get_job_store", lambda: store)
    return store


@pytest.fixture()
def retry_calls(monkeypatch):
    calls = []

    def _retry(exc=None, countdown=None, max_retries=None):
        calls.append({"countdown": countdown, "max_retries": max_retries})
        return Retry(exc=exc, when=countdown)

    monkeypatch.setattr(tasks.deliver_email, "retry", _retry)
    return calls


@pytest.fixture()
def email_payload(session, make_recipient, recording_queue, recording_publisher):
    recipient = make_recipient()
    notification = create_notification(
        session,
        NewNotificationData(title="Payment failed", message="Update your card"),
        acting_recipient=recipient,
        queue=recording_queue,
        publisher=recording_publisher,
    )
    job = build_email_job(notification, to=recipient.email)
    return recipient, notification, job.to_payload()


def _run_attempt(task, payload, retries):
    task.push_request(retries=retries)
    try:
        return task.run(payload)
    finally:
        task.pop_request()


def test_retry_policy_backs_off_exponentially() -> None:
    policy = RetryPolicy(max_attempts=3, initial_delay=1.0)

    assert [policy.calculate_delay(attempt) for attempt in (1, 2, 3)] == [1.0, 2.0, 4.0]
    assert policy.should_retry(2) is True
    assert policy.should_retry(3) is False
    assert RetryPolicy(initial_delay=10, max_delay=15).calculate_delay(4) == 15


def test_successful_delivery_is_recorded_as_completed(
    session, email_payload, job_store, retry_calls, monkeypatch
) -> None:
    recipient, notification, payload = email_payload
    sent = []
    monkeypatch.setattr(tasks, "send_email", lambda *args: sent.append(args))

    result = _run_attempt(tasks.deliver_email, payload, retries=0)

    assert result == {"job_id": payload["id"], "attempts": 1}
    assert len(sent) == 1
    assert retry_calls == []
    [record] = job_store.list_completed("EMAIL")
    assert record["job"]["id"] == payload["id"]
    assert record["attempts"] == 1


def test_failing_provider_is_retried_then_dead_lettered(
    session, email_payload, job_store, retry_calls, monkeypatch
) -> None:
    recipient, notification, payload = email_payload

    def _fail(*_args):
        raise EmailDeliveryError("SendGrid responded with status 503")

    monkeypatch.setattr(tasks, "send_email", _fail)

    for retries in (0, 1):
        with pytest.raises(Retry):
            _run_attempt(tasks.deliver_email, payload, retries=retries)

    with pytest.raises(EmailDeliveryError):
        _run_attempt(tasks.deliver_email, payload, retries=2)

    assert [call["countdown"] for call in retry_calls] == [1.0, 2.0]
    assert {call["max_retries"] for call in retry_calls} == {2}

    entries = list_delivery_logs(session, notification.id, recipient_id=recipient.id)
    assert [(entry.attempt, entry.status) for entry in entries] == [
        (1, "FAILED"),
        (2, "FAILED"),
        (3, "FAILED"),
    ]

    [dead_letter] = job_store.list_failed("EMAIL")
    assert dead_letter["attempts"] == 3
    assert "503" in dead_letter["error"]
    assert job_store.list_completed("EMAIL") == []


def test_unexpected_errors_are_dead_lettered_without_retry(
    session, email_payload, job_store, retry_calls, monkeypatch
) -> None:
    _, _, payload = email_payload

    def _crash(*_args):
        raise RuntimeError("bug")

    monkeypatch.setattr(tasks, "send_email", _crash)

    with pytest.raises(RuntimeError):
        _run_attempt(tasks.deliver_email, payload, retries=0)

    assert retry_calls == []
    [dead_letter] = job_store.list_failed("EMAIL")
    assert dead_letter["attempts"] == 1
    assert dead_letter["error"] == "bug"
    assert dead_letter["job"]["id"] == payload["id"]
    assert job_store.list_completed("EMAIL") == []
