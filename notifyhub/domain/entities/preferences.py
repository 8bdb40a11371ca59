"""Domain entity representing recipient delivery preferences."""

from dataclasses import dataclass
from datetime import datetime

EMAIL_FREQUENCY_INSTANT = "instant"
EMAIL_FREQUENCY_DAILY = "daily"
EMAIL_FREQUENCY_WEEKLY = "weekly"

EMAIL_FREQUENCIES = (
    EMAIL_FREQUENCY_INSTANT,
    EMAIL_FREQUENCY_DAILY,
    EMAIL_FREQUENCY_WEEKLY,
)


@dataclass
class RecipientPreferences:
    """Channel opt-ins and the quiet-hours window of one recipient."""

    id: int | None
    recipient_id: int
    email_enabled: bool = True
    sms_enabled: bool = False
    push_enabled: bool = True
    email_frequency: str = EMAIL_FREQUENCY_INSTANT
    quiet_hours_start: str | None = None
    quiet_hours_end: str | None = None
    updated_at: datetime | None = None

    @property
    def has_quiet_hours(self) -> bool:
        return bool(self.quiet_hours_start) and bool(self.quiet_hours_end)


__all__ = [
    "EMAIL_FREQUENCIES",
    "EMAIL_FREQUENCY_DAILY",
    "EMAIL_FREQUENCY_INSTANT",
    "EMAIL_FREQUENCY_WEEKLY",
    "RecipientPreferences",
]
