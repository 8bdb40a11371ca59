"""Persistence helpers for delivery attempt records."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy.orm import Session

from notifyhub.domain.entities import (
    DELIVERY_STATUS_FAILED,
    DELIVERY_STATUS_PENDING,
    DELIVERY_STATUS_SENT,
    DeliveryLog,
)
from notifyhub.infrastructure.models import DeliveryLogModel
from notifyhub.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)


class DeliveryLogRepository:
    """Create delivery log entries and move them to a terminal status."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, entry: DeliveryLog) -> DeliveryLog:
        model = DeliveryLogModel(
            notification_id=entry.notification_id,
            channel=entry.channel,
            recipient=entry.recipient,
            status=entry.status,
            attempt=entry.attempt,
            job_id=entry.job_id,
            created_at=ensure_app_naive_datetime(entry.created_at or now_in_app_timezone()),
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def mark_sent(self, entry_id: int, *, sent_at: datetime | None = None) -> DeliveryLog:
        model = self._get_pending_model(entry_id)
        model.status = DELIVERY_STATUS_SENT
        model.sent_at = ensure_app_naive_datetime(sent_at or now_in_app_timezone())
        return self._save(model)

    def mark_failed(self, entry_id: int, *, error_message: str) -> DeliveryLog:
        model = self._get_pending_model(entry_id)
        model.status = DELIVERY_STATUS_FAILED
        model.error_message = error_message
        return self._save(model)

    def list_for_notification(self, notification_id: int) -> Sequence[DeliveryLog]:
        query = (
            self.session.query(DeliveryLogModel)
            .filter(DeliveryLogModel.notification_id == notification_id)
            .order_by(DeliveryLogModel.created_at.asc(), DeliveryLogModel.id.asc())
        )
        return [self._to_entity(model) for model in query.all()]

    def _get_pending_model(self, entry_id: int) -> DeliveryLogModel:
        model = self.session.get(DeliveryLogModel, entry_id)
        if model is None:
            msg = f"Delivery log {entry_id} not found"
            raise ValueError(msg)
        if model.status != DELIVERY_STATUS_PENDING:
            msg = f"Delivery log {entry_id} is already {model.status}"
            raise ValueError(msg)
        return model

    def _save(self, model: DeliveryLogModel) -> DeliveryLog:
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: DeliveryLogModel) -> DeliveryLog:
        return DeliveryLog(
            id=model.id,
            notification_id=model.notification_id,
            channel=model.channel,
            recipient=model.recipient,
            status=model.status,
            attempt=model.attempt,
            job_id=model.job_id,
            sent_at=ensure_app_timezone(model.sent_at),
            error_message=model.error_message,
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["DeliveryLogRepository"]
