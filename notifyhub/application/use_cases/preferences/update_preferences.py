"""Use case for updating recipient preferences."""

from collections.abc import Mapping
from dataclasses import replace
from typing import Any

from sqlalchemy.orm import Session

from notifyhub.domain.entities import EMAIL_FREQUENCIES, RecipientPreferences
from notifyhub.domain.errors import ValidationError
from notifyhub.infrastructure.repositories import PreferenceRepository

from .quiet_hours import parse_clock_time

_BOOLEAN_FIELDS = ("email_enabled", "sms_enabled", "push_enabled")
_QUIET_HOURS_FIELDS = ("quiet_hours_start", "quiet_hours_end")
UPDATABLE_FIELDS = frozenset(
    (*_BOOLEAN_FIELDS, "email_frequency", *_QUIET_HOURS_FIELDS)
)


def update_preferences(
    session: Session, recipient_id: int, changes: Mapping[str, Any]
) -> RecipientPreferences:
    """Apply ``changes`` to the preferences of ``recipient_id``.

    Only the keys present in ``changes`` are touched; an explicit ``None``
    clears a quiet-hours bound. Concurrent updates are last-write-wins.
    """

    unknown = set(changes) - UPDATABLE_FIELDS
    if unknown:
        raise ValidationError(f"Unknown preference fields: {', '.join(sorted(unknown))}")

    cleaned: dict[str, Any] = {}
    for field_name in _BOOLEAN_FIELDS:
        if field_name in changes:
            value = changes[field_name]
            if not isinstance(value, bool):
                raise ValidationError(f"{field_name} must be a boolean")
            cleaned[field_name] = value

    if "email_frequency" in changes:
        frequency = changes["email_frequency"]
        if frequency not in EMAIL_FREQUENCIES:
            raise ValidationError(
                f"email_frequency must be one of: {', '.join(EMAIL_FREQUENCIES)}"
            )
        cleaned["email_frequency"] = frequency

    for field_name in _QUIET_HOURS_FIELDS:
        if field_name in changes:
            value = changes[field_name]
            if value is not None:
                parse_clock_time(value)
            cleaned[field_name] = value

    repository = PreferenceRepository(session)
    current = repository.get_by_recipient(recipient_id)
    if current is None:
        return repository.create(
            RecipientPreferences(id=None, recipient_id=recipient_id, **cleaned)
        )
    return repository.update(replace(current, **cleaned))
