"""Tests for the notification fan-out."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

import pytest

from notifyhub.application.use_cases.notifications import (
    NewNotificationData,
    create_notification,
    get_unread_count,
)
from notifyhub.application.use_cases.preferences import update_preferences
from notifyhub.domain.errors import (
    AuthorizationError,
    NotFoundError,
    QueueUnavailableError,
    ValidationError,
)
from notifyhub.infrastructure.repositories import NotificationRepository

NOON = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def _create(session, recipient, queue, publisher, **fields):
    values = {"title": "Build finished", "message": "All checks passed"}
    values.update(fields)
    return create_notification(
        session,
        NewNotificationData(**values),
        acting_recipient=recipient,
        queue=queue,
        publisher=publisher,
        now=NOON,
    )


def test_email_only_recipient_gets_one_email_job(
    session, make_recipient, recording_queue, recording_publisher
) -> None:
    recipient = make_recipient(email_verified=True)

    notification = _create(
        session,
        recipient,
        recording_queue,
        recording_publisher,
        type="SUCCESS",
        action_url="https://example.com/builds/1",
    )

    assert recording_queue.channels() == ["EMAIL"]
    job, delay = recording_queue.jobs[0]
    assert job.notification_id == notification.id
    assert job.to == recipient.email
    assert job.subject == "[SUCCESS] Build finished"
    assert job.body == "All checks passed\n\nhttps://example.com/builds/1"
    assert job.not_before is None
    assert delay == timedelta(0)


def test_verified_phone_with_sms_enabled_gets_an_sms_job(
    session, make_recipient, recording_queue, recording_publisher
) -> None:
    recipient = make_recipient(phone="+15550001111", phone_verified=True)
    update_preferences(session, recipient.id, {"sms_enabled": True})

    _create(session, recipient, recording_queue, recording_publisher)

    assert recording_queue.channels() == ["EMAIL", "SMS"]
    sms_job = recording_queue.jobs[1][0]
    assert sms_job.to == "+15550001111"
    assert sms_job.body == "Build finished: All checks passed"


@pytest.mark.parametrize(
    ("overrides", "preferences"),
    [
        ({"email_verified": False}, {}),
        ({}, {"email_enabled": False}),
    ],
)
def test_notification_is_stored_even_without_eligible_channels(
    session, make_recipient, recording_queue, recording_publisher, overrides, preferences
) -> None:
    recipient = make_recipient(**overrides)
    if preferences:
        update_preferences(session, recipient.id, preferences)

    notification = _create(session, recipient, recording_queue, recording_publisher)

    assert recording_queue.jobs == []
    stored = NotificationRepository(session).get_for_recipient(
        notification.id, recipient_id=recipient.id
    )
    assert stored is not None
    assert stored.is_read is False


def test_unverified_phone_never_gets_sms(
    session, make_recipient, recording_queue, recording_publisher
) -> None:
    recipient = make_recipient(phone="+15550001111", phone_verified=False)
    update_preferences(session, recipient.id, {"sms_enabled": True})

    _create(session, recipient, recording_queue, recording_publisher)

    assert recording_queue.channels() == ["EMAIL"]


def test_quiet_hours_delay_every_queued_job(
    session, make_recipient, recording_queue, recording_publisher
) -> None:
    recipient = make_recipient(phone="+15550001111", phone_verified=True)
    update_preferences(
        session,
        recipient.id,
        {"sms_enabled": True, "quiet_hours_start": "22:00", "quiet_hours_end": "07:00"},
    )
    late = datetime(2024, 5, 1, 23, 30, tzinfo=timezone.utc)

    create_notification(
        session,
        NewNotificationData(title="Late", message="Night message"),
        acting_recipient=recipient,
        queue=recording_queue,
        publisher=recording_publisher,
        now=late,
    )

    delays = [delay for _, delay in recording_queue.jobs]
    assert delays == [timedelta(hours=7, minutes=30)] * 2
    assert {job.not_before for job, _ in recording_queue.jobs} == {
        datetime(2024, 5, 2, 7, 0, tzinfo=timezone.utc)
    }


def test_new_notification_event_precedes_the_unread_count(
    session, make_recipient, recording_queue, recording_publisher
) -> None:
    recipient = make_recipient()
    _create(session, recipient, recording_queue, recording_publisher)

    notification = _create(session, recipient, recording_queue, recording_publisher)

    recipient_id, events = recording_publisher.dispatched[-1]
    assert recipient_id == recipient.id
    assert [event_type for event_type, _ in events] == [
        "notification:new",
        "unread-count:update",
    ]
    assert events[0][1]["notification"]["id"] == notification.id
    assert events[1][1] == {"unreadCount": 2}


def test_queue_outage_is_logged_and_not_raised(
    session, make_recipient, recording_publisher, caplog
) -> None:
    class BrokenQueue:
        def enqueue(self, job, delay=0):
            raise QueueUnavailableError("broker down")

    recipient = make_recipient()

    with caplog.at_level(logging.ERROR):
        notification = _create(session, recipient, BrokenQueue(), recording_publisher)

    assert notification.id is not None
    assert get_unread_count(session, recipient.id) == 1
    assert "broker down" in caplog.text


def test_template_references_travel_with_the_jobs(
    session, make_recipient, recording_queue, recording_publisher
) -> None:
    recipient = make_recipient()

    _create(
        session,
        recipient,
        recording_queue,
        recording_publisher,
        email_template_id=7,
        template_variables={"name": "Ada"},
    )

    job = recording_queue.jobs[0][0]
    assert job.template_id == 7
    assert job.variables == {"name": "Ada"}


def test_admin_can_notify_another_recipient(
    session, make_recipient, recording_queue, recording_publisher
) -> None:
    admin = make_recipient(is_admin=True)
    target = make_recipient()

    notification = _create(
        session, admin, recording_queue, recording_publisher, recipient_id=target.id
    )

    assert notification.recipient_id == target.id
    assert recording_queue.jobs[0][0].to == target.email
    assert recording_publisher.dispatched[0][0] == target.id


def test_non_admin_cannot_notify_another_recipient(
    session, make_recipient, recording_queue, recording_publisher
) -> None:
    sender = make_recipient()
    target = make_recipient()

    with pytest.raises(AuthorizationError):
        _create(session, sender, recording_queue, recording_publisher, recipient_id=target.id)

    assert get_unread_count(session, target.id) == 0
    assert recording_queue.jobs == []


def test_unknown_target_is_not_found(
    session, make_recipient, recording_queue, recording_publisher
) -> None:
    admin = make_recipient(is_admin=True)

    with pytest.raises(NotFoundError):
        _create(session, admin, recording_queue, recording_publisher, recipient_id=999)


@pytest.mark.parametrize(
    "fields",
    [{"title": "  "}, {"message": ""}, {"type": "URGENT"}, {"priority": "CRITICAL"}],
)
def test_invalid_requests_are_rejected(
    session, make_recipient, recording_queue, recording_publisher, fields
) -> None:
    recipient = make_recipient()

    with pytest.raises(ValidationError):
        _create(session, recipient, recording_queue, recording_publisher, **fields)

    assert recording_publisher.dispatched == []
