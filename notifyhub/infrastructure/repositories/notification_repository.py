"""Persistence helpers for notification entities."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import case, false
from sqlalchemy.orm import Query, Session

from notifyhub.domain.entities import NOTIFICATION_PRIORITIES, Notification
from notifyhub.infrastructure.models import NotificationModel
from notifyhub.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)

_PRIORITY_RANK = case(
    {priority: rank for rank, priority in enumerate(NOTIFICATION_PRIORITIES)},
    value=NotificationModel.priority,
    else_=len(NOTIFICATION_PRIORITIES),
)


class NotificationRepository:
    """Provide CRUD operations for :class:`Notification` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_for_recipient(
        self,
        recipient_id: int,
        *,
        offset: int = 0,
        limit: int | None = 20,
        is_read: bool | None = None,
        type: str | None = None,
        priority: str | None = None,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
        sort_by: str = "created_at",
        sort_order: str = "desc",
    ) -> tuple[Sequence[Notification], int]:
        """Return one page of notifications and the total matching count."""

        query = self._owned_by(recipient_id)
        if is_read is not None:
            query = query.filter(NotificationModel.is_read == is_read)
        if type:
            query = query.filter(NotificationModel.type == type)
        if priority:
            query = query.filter(NotificationModel.priority == priority)
        if start_date is not None:
            query = query.filter(
                NotificationModel.created_at >= ensure_app_naive_datetime(start_date)
            )
        if end_date is not None:
            query = query.filter(
                NotificationModel.created_at <= ensure_app_naive_datetime(end_date)
            )

        total = query.count()

        sort_column = _PRIORITY_RANK if sort_by == "priority" else NotificationModel.created_at
        if sort_order == "asc":
            query = query.order_by(sort_column.asc(), NotificationModel.id.asc())
        else:
            query = query.order_by(sort_column.desc(), NotificationModel.id.desc())
        if offset:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()], total

    def get_for_recipient(
        self, notification_id: int, *, recipient_id: int
    ) -> Notification | None:
        model = self._get_owned_model(notification_id, recipient_id=recipient_id)
        return self._to_entity(model) if model else None

    def count_unread(self, recipient_id: int) -> int:
        return (
            self._owned_by(recipient_id)
            .filter(NotificationModel.is_read == false())
            .count()
        )

    def create(self, notification: Notification) -> Notification:
        model = NotificationModel()
        self._apply_entity_to_model(model, notification, include_creation_fields=True)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def mark_as_read(
        self, notification_id: int, *, recipient_id: int, when: datetime | None = None
    ) -> Notification | None:
        """Flag one owned notification as read, keeping the first ``read_at``."""

        model = self._get_owned_model(notification_id, recipient_id=recipient_id)
        if model is None:
            return None
        notification = self._to_entity(model)
        if notification.mark_read(when or now_in_app_timezone()):
            model.is_read = True
            model.read_at = ensure_app_naive_datetime(notification.read_at)
            self.session.add(model)
            self.session.commit()
            self.session.refresh(model)
        return self._to_entity(model)

    def mark_all_as_read(self, recipient_id: int, *, when: datetime | None = None) -> int:
        read_at = ensure_app_naive_datetime(when or now_in_app_timezone())
        updated = (
            self._owned_by(recipient_id)
            .filter(NotificationModel.is_read == false())
            .update(
                {
                    NotificationModel.is_read: True,
                    NotificationModel.read_at: read_at,
                },
                synchronize_session=False,
            )
        )
        self.session.commit()
        return int(updated or 0)

    def delete(self, notification_id: int, *, recipient_id: int) -> bool:
        model = self._get_owned_model(notification_id, recipient_id=recipient_id)
        if model is None:
            return False
        self.session.delete(model)
        self.session.commit()
        return True

    def delete_all(self, recipient_id: int) -> int:
        deleted = self._owned_by(recipient_id).delete(synchronize_session=False)
        self.session.commit()
        return int(deleted or 0)

    def _owned_by(self, recipient_id: int) -> Query:
        return self.session.query(NotificationModel).filter(
            NotificationModel.recipient_id == recipient_id
        )

    def _get_owned_model(
        self, notification_id: int, *, recipient_id: int
    ) -> NotificationModel | None:
        return (
            self._owned_by(recipient_id)
            .filter(NotificationModel.id == notification_id)
            .first()
        )

    @staticmethod
    def _apply_entity_to_model(
        model: NotificationModel,
        notification: Notification,
        *,
        include_creation_fields: bool,
    ) -> None:
        if include_creation_fields:
            model.created_at = (
                ensure_app_naive_datetime(notification.created_at)
                or ensure_app_naive_datetime(now_in_app_timezone())
            )
        model.recipient_id = notification.recipient_id
        model.type = notification.type
        model.priority = notification.priority
        model.title = notification.title
        model.message = notification.message
        model.action_url = notification.action_url
        model.metadata_ = notification.metadata or {}
        model.is_read = notification.is_read
        model.read_at = ensure_app_naive_datetime(notification.read_at)
        model.scheduled_at = ensure_app_naive_datetime(notification.scheduled_at)

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            recipient_id=model.recipient_id,
            type=model.type,
            priority=model.priority,
            title=model.title,
            message=model.message,
            action_url=model.action_url,
            metadata=model.metadata_ or {},
            is_read=bool(model.is_read),
            read_at=ensure_app_timezone(model.read_at),
            scheduled_at=ensure_app_timezone(model.scheduled_at),
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["NotificationRepository"]
