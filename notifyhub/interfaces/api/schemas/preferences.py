"""Schemas for recipient preference endpoints."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

EmailFrequency = Literal["instant", "daily", "weekly"]
CLOCK_TIME_REGEX = r"^([01]\d|2[0-3]):([0-5]\d)$"


class PreferencesRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    recipient_id: int
    email_enabled: bool
    sms_enabled: bool
    push_enabled: bool
    email_frequency: EmailFrequency
    quiet_hours_start: str | None
    quiet_hours_end: str | None
    updated_at: datetime | None = None


class PreferencesUpdate(BaseModel):
    """Partial update; send ``null`` for a quiet-hours bound to clear it."""

    model_config = ConfigDict(extra="forbid")

    email_enabled: bool | None = None
    sms_enabled: bool | None = None
    push_enabled: bool | None = None
    email_frequency: EmailFrequency | None = None
    quiet_hours_start: str | None = Field(default=None, pattern=CLOCK_TIME_REGEX)
    quiet_hours_end: str | None = Field(default=None, pattern=CLOCK_TIME_REGEX)

    def changes(self) -> dict[str, object]:
        """Return the fields explicitly sent by the client.

        ``null`` is only meaningful for the quiet-hours bounds; a ``null`` flag
        or frequency is treated as "leave unchanged".
        """

        sent = self.model_dump(exclude_unset=True)
        return {
            key: value
            for key, value in sent.items()
            if value is not None or key.startswith("quiet_hours_")
        }
