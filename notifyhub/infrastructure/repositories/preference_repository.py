"""Persistence helpers for recipient preferences."""

from __future__ import annotations

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from notifyhub.domain.entities import RecipientPreferences
from notifyhub.infrastructure.models import RecipientPreferencesModel
from notifyhub.utils import ensure_app_timezone


class PreferenceRepository:
    """Provide get/create/update operations for :class:`RecipientPreferences`."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_by_recipient(self, recipient_id: int) -> RecipientPreferences | None:
        model = self._get_model(recipient_id)
        return self._to_entity(model) if model else None

    def create(self, preferences: RecipientPreferences) -> RecipientPreferences:
        """Insert ``preferences``, returning the stored row if one already exists."""

        model = RecipientPreferencesModel(recipient_id=preferences.recipient_id)
        self._apply_entity_to_model(model, preferences)
        self.session.add(model)
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            existing = self._get_model(preferences.recipient_id)
            if existing is None:
                raise
            return self._to_entity(existing)
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, preferences: RecipientPreferences) -> RecipientPreferences:
        model = self._get_model(preferences.recipient_id)
        if model is None:
            msg = f"Preferences for recipient {preferences.recipient_id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, preferences)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def _get_model(self, recipient_id: int) -> RecipientPreferencesModel | None:
        return (
            self.session.query(RecipientPreferencesModel)
            .filter(RecipientPreferencesModel.recipient_id == recipient_id)
            .first()
        )

    @staticmethod
    def _apply_entity_to_model(
        model: RecipientPreferencesModel, preferences: RecipientPreferences
    ) -> None:
        model.email_enabled = preferences.email_enabled
        model.sms_enabled = preferences.sms_enabled
        model.push_enabled = preferences.push_enabled
        model.email_frequency = preferences.email_frequency
        model.quiet_hours_start = preferences.quiet_hours_start
        model.quiet_hours_end = preferences.quiet_hours_end

    @staticmethod
    def _to_entity(model: RecipientPreferencesModel) -> RecipientPreferences:
        return RecipientPreferences(
            id=model.id,
            recipient_id=model.recipient_id,
            email_enabled=bool(model.email_enabled),
            sms_enabled=bool(model.sms_enabled),
            push_enabled=bool(model.push_enabled),
            email_frequency=model.email_frequency,
            quiet_hours_start=model.quiet_hours_start,
            quiet_hours_end=model.quiet_hours_end,
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["PreferenceRepository"]
