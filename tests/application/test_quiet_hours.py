"""Tests for quiet-hours arithmetic and preference updates."""

from __future__ import annotations

from datetime import datetime, time, timedelta, timezone

import pytest
from hypothesis import HealthCheck, given, settings
from hypothesis import strategies as st

from notifyhub.application.use_cases.preferences import (
    compute_quiet_hours_delay,
    get_preferences,
    is_quiet_hours,
    parse_clock_time,
    update_preferences,
)
from notifyhub.domain.entities import RecipientPreferences
from notifyhub.domain.errors import ValidationError
from notifyhub.infrastructure.repositories import PreferenceRepository

clock_times = st.times().map(lambda value: value.replace(microsecond=0))
bounds = st.tuples(st.integers(0, 23), st.integers(0, 59)).map(
    lambda pair: f"{pair[0]:02d}:{pair[1]:02d}"
)


@pytest.mark.parametrize(
    ("now", "start", "end", "expected"),
    [
        (time(23, 30), "22:00", "07:00", timedelta(hours=7, minutes=30)),
        (time(3, 0), "22:00", "07:00", timedelta(hours=4)),
        (time(12, 0), "22:00", "07:00", timedelta(0)),
        (time(7, 0), "22:00", "07:00", timedelta(0)),
        (time(22, 0), "22:00", "07:00", timedelta(hours=9)),
        (time(10, 0), "09:00", "17:00", timedelta(hours=7)),
        (time(8, 59), "09:00", "17:00", timedelta(0)),
        (time(17, 0), "09:00", "17:00", timedelta(0)),
        (time(10, 0), None, "17:00", timedelta(0)),
        (time(10, 0), "09:00", None, timedelta(0)),
    ],
)
def test_compute_quiet_hours_delay(now, start, end, expected) -> None:
    assert compute_quiet_hours_delay(now, start, end) == expected


def test_delay_keeps_seconds_of_the_current_time() -> None:
    now = datetime(2024, 5, 1, 23, 30, 15, tzinfo=timezone.utc)

    delay = compute_quiet_hours_delay(now, "22:00", "07:00")

    assert delay == timedelta(hours=7, minutes=29, seconds=45)
    assert (now + delay).time() == time(7, 0)


def test_equal_bounds_cover_the_whole_day() -> None:
    assert compute_quiet_hours_delay(time(12, 0), "08:00", "08:00") == timedelta(hours=20)
    assert is_quiet_hours(time(7, 59), "08:00", "08:00")


@settings(suppress_health_check=[HealthCheck.function_scoped_fixture])
@given(now=clock_times, start=bounds, end=bounds)
def test_delay_always_lands_on_the_window_end(now, start, end) -> None:
    delay = compute_quiet_hours_delay(now, start, end)

    assert timedelta(0) <= delay <= timedelta(days=1)
    if delay:
        reference = datetime.combine(datetime(2024, 1, 1), now)
        assert (reference + delay).time() == parse_clock_time(end)


@pytest.mark.parametrize("value", ["24:00", "7:00", "12:60", "noon", ""])
def test_parse_clock_time_rejects_invalid_values(value) -> None:
    with pytest.raises(ValidationError):
        parse_clock_time(value)


def test_new_recipients_get_default_preferences(session, make_recipient) -> None:
    recipient = make_recipient()

    preferences = get_preferences(session, recipient.id)

    assert preferences.email_enabled is True
    assert preferences.sms_enabled is False
    assert preferences.push_enabled is True
    assert preferences.email_frequency == "instant"
    assert preferences.quiet_hours_start is None


def test_a_second_preferences_insert_returns_the_stored_row(session, make_recipient) -> None:
    recipient = make_recipient()
    stored = get_preferences(session, recipient.id)

    duplicate = PreferenceRepository(session).create(
        RecipientPreferences(id=None, recipient_id=recipient.id, sms_enabled=True)
    )

    assert duplicate.id == stored.id
    assert duplicate.sms_enabled is False
    assert get_preferences(session, recipient.id).id == stored.id


def test_update_preferences_only_touches_given_fields(session, make_recipient) -> None:
    recipient = make_recipient()

    update_preferences(
        session,
        recipient.id,
        {"sms_enabled": True, "quiet_hours_start": "22:00", "quiet_hours_end": "07:00"},
    )
    updated = update_preferences(session, recipient.id, {"email_frequency": "daily"})

    assert updated.sms_enabled is True
    assert updated.email_enabled is True
    assert updated.email_frequency == "daily"
    assert (updated.quiet_hours_start, updated.quiet_hours_end) == ("22:00", "07:00")


def test_none_clears_a_quiet_hours_bound(session, make_recipient) -> None:
    recipient = make_recipient()
    update_preferences(
        session, recipient.id, {"quiet_hours_start": "22:00", "quiet_hours_end": "07:00"}
    )

    updated = update_preferences(session, recipient.id, {"quiet_hours_start": None})

    assert updated.quiet_hours_start is None
    assert updated.has_quiet_hours is False


@pytest.mark.parametrize(
    "changes",
    [
        {"quiet_hours_start": "25:00"},
        {"email_frequency": "hourly"},
        {"sms_enabled": "yes"},
        {"favourite_colour": "blue"},
    ],
)
def test_update_preferences_rejects_invalid_changes(session, make_recipient, changes) -> None:
    recipient = make_recipient()

    with pytest.raises(ValidationError):
        update_preferences(session, recipient.id, changes)

    assert get_preferences(session, recipient.id).quiet_hours_start is None
