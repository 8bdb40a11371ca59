"""Read access to recipient records owned by the account system."""

from __future__ import annotations

from sqlalchemy import func
from sqlalchemy.orm import Session

from notifyhub.domain.entities import Recipient
from notifyhub.infrastructure.models import RecipientModel
from notifyhub.utils import ensure_app_timezone


class RecipientRepository:
    """Look up recipients and their contact points."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, recipient_id: int) -> Recipient | None:
        model = self.session.get(RecipientModel, recipient_id)
        return self._to_entity(model) if model else None

    def get_by_email(self, email: str) -> Recipient | None:
        model = (
            self.session.query(RecipientModel)
            .filter(func.lower(RecipientModel.email) == email.strip().lower())
            .first()
        )
        return self._to_entity(model) if model else None

    def create(self, recipient: Recipient) -> Recipient:
        model = RecipientModel(
            name=recipient.name,
            email=recipient.email,
            phone=recipient.phone,
            email_verified=recipient.email_verified,
            phone_verified=recipient.phone_verified,
            is_admin=recipient.is_admin,
            is_active=recipient.is_active,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: RecipientModel) -> Recipient:
        return Recipient(
            id=model.id,
            name=model.name,
            email=model.email,
            phone=model.phone,
            email_verified=bool(model.email_verified),
            phone_verified=bool(model.phone_verified),
            is_admin=bool(model.is_admin),
            is_active=bool(model.is_active),
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["RecipientRepository"]
