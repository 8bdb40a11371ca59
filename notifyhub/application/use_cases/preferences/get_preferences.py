"""Use cases for reading recipient preferences."""

from sqlalchemy.orm import Session

from notifyhub.domain.entities import RecipientPreferences
from notifyhub.infrastructure.repositories import PreferenceRepository


def create_default_preferences(session: Session, recipient_id: int) -> RecipientPreferences:
    """Persist the default preferences row for a newly created recipient."""

    repository = PreferenceRepository(session)
    existing = repository.get_by_recipient(recipient_id)
    if existing is not None:
        return existing
    return repository.create(RecipientPreferences(id=None, recipient_id=recipient_id))


def get_preferences(session: Session, recipient_id: int) -> RecipientPreferences:
    """Return the preferences of ``recipient_id``, creating defaults on first access."""

    return create_default_preferences(session, recipient_id)
