"""Quiet-hours window arithmetic.

Windows are expressed as ``HH:MM`` wall-clock bounds without a timezone; the
caller evaluates them against the current time in the application timezone.
A window whose start is not before its end wraps around midnight.
"""

from __future__ import annotations

import re
from datetime import datetime, time, timedelta

from notifyhub.domain.errors import ValidationError

CLOCK_TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")

_DAY = timedelta(days=1)


def parse_clock_time(value: str) -> time:
    """Parse an ``HH:MM`` string (00:00-23:59) into a :class:`time`."""

    match = CLOCK_TIME_PATTERN.match(value or "")
    if match is None:
        raise ValidationError(f"Invalid time '{value}', expected HH:MM")
    return time(hour=int(match.group(1)), minute=int(match.group(2)))


def _since_midnight(value: time | datetime) -> timedelta:
    return timedelta(
        hours=value.hour,
        minutes=value.minute,
        seconds=value.second,
        microseconds=value.microsecond,
    )


def compute_quiet_hours_delay(
    now: time | datetime, start: str | None, end: str | None
) -> timedelta:
    """Return how long a delivery must wait for the quiet window to close.

    Zero when either bound is missing or ``now`` is outside the window.
    """

    if not start or not end:
        return timedelta(0)

    current = _since_midnight(now)
    window_start = _since_midnight(parse_clock_time(start))
    window_end = _since_midnight(parse_clock_time(end))

    if window_start < window_end:
        if window_start <= current < window_end:
            return window_end - current
        return timedelta(0)

    if current >= window_start:
        return (_DAY - current) + window_end
    if current < window_end:
        return window_end - current
    return timedelta(0)


def is_quiet_hours(now: time | datetime, start: str | None, end: str | None) -> bool:
    return compute_quiet_hours_delay(now, start, end) > timedelta(0)


__all__ = [
    "CLOCK_TIME_PATTERN",
    "compute_quiet_hours_delay",
    "is_quiet_hours",
    "parse_clock_time",
]
