"""Domain entity representing a notification recipient."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Recipient:
    """Contact points and flags of an end-user who owns notifications."""

    id: int | None
    name: str
    email: str
    phone: str | None
    email_verified: bool
    phone_verified: bool
    is_admin: bool
    is_active: bool
    created_at: datetime | None

    def can_receive_email(self) -> bool:
        """Return ``True`` when the email address has been verified."""

        return bool(self.email) and self.email_verified

    def can_receive_sms(self) -> bool:
        """Return ``True`` when a verified phone number is on file."""

        return bool(self.phone) and self.phone_verified


__all__ = ["Recipient"]
