"""Use case for listing a recipient's notifications."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Session

from notifyhub.domain.entities import (
    NOTIFICATION_PRIORITIES,
    NOTIFICATION_TYPES,
    NotificationPage,
)
from notifyhub.domain.errors import ValidationError
from notifyhub.infrastructure.repositories import NotificationRepository

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100
SORT_FIELDS = ("created_at", "priority")
SORT_ORDERS = ("asc", "desc")
READ_FILTERS = {"true": True, "false": False, "all": None}


def list_notifications(
    session: Session,
    *,
    recipient_id: int,
    page: int = 1,
    limit: int = DEFAULT_PAGE_SIZE,
    is_read: str = "all",
    type: str | None = None,
    priority: str | None = None,
    start_date: datetime | None = None,
    end_date: datetime | None = None,
    sort_by: str = "created_at",
    sort_order: str = "desc",
) -> NotificationPage:
    """Return one page of the recipient's notifications.

    ``priority`` sorting follows urgency (LOW < MEDIUM < HIGH), not the
    alphabetical order of the labels.
    """

    if page < 1:
        raise ValidationError("page must be greater than or equal to 1")
    if not 1 <= limit <= MAX_PAGE_SIZE:
        raise ValidationError(f"limit must be between 1 and {MAX_PAGE_SIZE}")
    if is_read not in READ_FILTERS:
        raise ValidationError("is_read must be one of: true, false, all")
    if type is not None and type not in NOTIFICATION_TYPES:
        raise ValidationError(f"Invalid notification type: {type}")
    if priority is not None and priority not in NOTIFICATION_PRIORITIES:
        raise ValidationError(f"Invalid notification priority: {priority}")
    if sort_by not in SORT_FIELDS:
        raise ValidationError(f"sort_by must be one of: {', '.join(SORT_FIELDS)}")
    if sort_order not in SORT_ORDERS:
        raise ValidationError("sort_order must be asc or desc")
    if start_date is not None and end_date is not None and start_date > end_date:
        raise ValidationError("start_date must not be after end_date")

    repository = NotificationRepository(session)
    items, total = repository.list_for_recipient(
        recipient_id,
        offset=(page - 1) * limit,
        limit=limit,
        is_read=READ_FILTERS[is_read],
        type=type,
        priority=priority,
        start_date=start_date,
        end_date=end_date,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    return NotificationPage(items=list(items), page=page, limit=limit, total=total)
