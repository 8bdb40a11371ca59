"""Endpoints and websocket handler for recipient notifications."""

from __future__ import annotations

import logging
from datetime import datetime
from functools import partial
from typing import Any, Literal

from anyio import to_thread
from fastapi import (
    APIRouter,
    Depends,
    HTTPException,
    Query,
    Response,
    WebSocket,
    WebSocketDisconnect,
    status,
)
from sqlalchemy.orm import Session

from notifyhub.application.use_cases.notifications import (
    NewNotificationData,
    create_notification as create_notification_uc,
    delete_all_notifications as delete_all_notifications_uc,
    delete_notification as delete_notification_uc,
    get_notification as get_notification_uc,
    get_unread_count as get_unread_count_uc,
    list_delivery_logs as list_delivery_logs_uc,
    list_notifications as list_notifications_uc,
    mark_all_as_read as mark_all_as_read_uc,
    mark_as_read as mark_as_read_uc,
)
from notifyhub.domain.entities import Notification, Recipient
from notifyhub.infrastructure.database import SessionLocal, get_db
from notifyhub.infrastructure.notifications import notification_manager
from notifyhub.interfaces.api.dependencies import (
    get_current_recipient,
    resolve_current_recipient,
)
from notifyhub.interfaces.api.routes_helpers import http_error_from
from notifyhub.interfaces.api.schemas import (
    CountResponse,
    DeliveryLogRead,
    NotificationCreate,
    NotificationListResponse,
    NotificationRead,
    PaginationRead,
    UnreadCountResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notifications", tags=["notifications"])

INBOUND_MARK_READ = "notification:mark-read"
INBOUND_MARK_ALL_READ = "notification:mark-all-read"


def _notification_to_schema(notification: Notification) -> NotificationRead:
    return NotificationRead.model_validate(notification)


@router.post("/", response_model=NotificationRead, status_code=status.HTTP_201_CREATED)
def create_notification(
    payload: NotificationCreate,
    db: Session = Depends(get_db),
    current_recipient: Recipient = Depends(get_current_recipient),
) -> NotificationRead:
    """Create a notification, queue its deliveries and push it to live clients."""

    data = NewNotificationData(
        recipient_id=payload.recipient_id,
        type=payload.type,
        priority=payload.priority,
        title=payload.title,
        message=payload.message,
        action_url=str(payload.action_url) if payload.action_url else None,
        metadata=payload.metadata,
        scheduled_at=payload.scheduled_at,
        email_template_id=payload.email_template_id,
        sms_template_id=payload.sms_template_id,
        template_variables=payload.template_variables,
    )
    try:
        notification = create_notification_uc(
            db, data, acting_recipient=current_recipient
        )
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return _notification_to_schema(notification)


@router.get("/", response_model=NotificationListResponse)
def list_notifications(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    is_read: Literal["true", "false", "all"] = Query("all"),
    type: Literal["INFO", "SUCCESS", "WARNING", "ERROR", "SYSTEM"] | None = Query(None),
    priority: Literal["LOW", "MEDIUM", "HIGH"] | None = Query(None),
    start_date: datetime | None = Query(None),
    end_date: datetime | None = Query(None),
    sort_by: Literal["created_at", "priority"] = Query("created_at"),
    sort_order: Literal["asc", "desc"] = Query("desc"),
    db: Session = Depends(get_db),
    current_recipient: Recipient = Depends(get_current_recipient),
) -> NotificationListResponse:
    """Return one filtered page of the authenticated recipient's notifications."""

    try:
        result = list_notifications_uc(
            db,
            recipient_id=current_recipient.id,
            page=page,
            limit=limit,
            is_read=is_read,
            type=type,
            priority=priority,
            start_date=start_date,
            end_date=end_date,
            sort_by=sort_by,
            sort_order=sort_order,
        )
    except ValueError as exc:
        raise http_error_from(exc) from exc

    return NotificationListResponse(
        notifications=[_notification_to_schema(item) for item in result.items],
        pagination=PaginationRead(
            page=result.page,
            limit=result.limit,
            total=result.total,
            total_pages=result.total_pages,
            has_more=result.has_more,
        ),
    )


@router.get("/unread-count", response_model=UnreadCountResponse)
def read_unread_count(
    db: Session = Depends(get_db),
    current_recipient: Recipient = Depends(get_current_recipient),
) -> UnreadCountResponse:
    return UnreadCountResponse(unread_count=get_unread_count_uc(db, current_recipient.id))


@router.patch("/read-all", response_model=CountResponse)
def mark_all_notifications_read(
    db: Session = Depends(get_db),
    current_recipient: Recipient = Depends(get_current_recipient),
) -> CountResponse:
    return CountResponse(count=mark_all_as_read_uc(db, current_recipient.id))


@router.delete("/", response_model=CountResponse)
def delete_all_notifications(
    db: Session = Depends(get_db),
    current_recipient: Recipient = Depends(get_current_recipient),
) -> CountResponse:
    return CountResponse(count=delete_all_notifications_uc(db, current_recipient.id))


@router.get("/{notification_id}", response_model=NotificationRead)
def read_notification(
    notification_id: int,
    db: Session = Depends(get_db),
    current_recipient: Recipient = Depends(get_current_recipient),
) -> NotificationRead:
    try:
        notification = get_notification_uc(
            db, notification_id, recipient_id=current_recipient.id
        )
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return _notification_to_schema(notification)


@router.get("/{notification_id}/deliveries", response_model=list[DeliveryLogRead])
def list_notification_deliveries(
    notification_id: int,
    db: Session = Depends(get_db),
    current_recipient: Recipient = Depends(get_current_recipient),
) -> list[DeliveryLogRead]:
    """Return every delivery attempt recorded for the notification."""

    try:
        entries = list_delivery_logs_uc(
            db, notification_id, recipient_id=current_recipient.id
        )
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return [DeliveryLogRead.model_validate(entry) for entry in entries]


@router.patch("/{notification_id}/read", response_model=NotificationRead)
def mark_notification_read(
    notification_id: int,
    db: Session = Depends(get_db),
    current_recipient: Recipient = Depends(get_current_recipient),
) -> NotificationRead:
    try:
        notification = mark_as_read_uc(
            db, notification_id, recipient_id=current_recipient.id
        )
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return _notification_to_schema(notification)


@router.delete("/{notification_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_notification(
    notification_id: int,
    db: Session = Depends(get_db),
    current_recipient: Recipient = Depends(get_current_recipient),
) -> Response:
    try:
        delete_notification_uc(db, notification_id, recipient_id=current_recipient.id)
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


def _websocket_token(websocket: WebSocket) -> str | None:
    token = websocket.query_params.get("token")
    if token:
        return token
    authorization = websocket.headers.get("authorization", "")
    scheme, _, credentials = authorization.partition(" ")
    if scheme.lower() == "bearer" and credentials:
        return credentials.strip()
    return None


def _authenticate(token: str | None) -> Recipient:
    session = SessionLocal()
    try:
        return resolve_current_recipient(token, session)
    finally:
        session.close()


def _run_mark_read(recipient_id: int, notification_id: int) -> None:
    session = SessionLocal()
    try:
        mark_as_read_uc(session, notification_id, recipient_id=recipient_id)
    finally:
        session.close()


def _run_mark_all_read(recipient_id: int) -> None:
    session = SessionLocal()
    try:
        mark_all_as_read_uc(session, recipient_id)
    finally:
        session.close()


async def _handle_inbound(recipient_id: int, websocket: WebSocket, message: Any) -> None:
    if not isinstance(message, dict):
        return

    message_type = message.get("type")
    if message_type == "ping":
        await websocket.send_json({"type": "pong"})
        return

    if message_type == INBOUND_MARK_READ:
        data = message.get("data")
        raw_id = data.get("notificationId") if isinstance(data, dict) else None
        try:
            notification_id = int(raw_id)
        except (TypeError, ValueError):
            logger.warning("Ignoring %s without a valid notificationId", INBOUND_MARK_READ)
            return
        try:
            await to_thread.run_sync(partial(_run_mark_read, recipient_id, notification_id))
        except ValueError as exc:
            logger.warning(
                "Failed to mark notification %s as read for recipient %s: %s",
                notification_id,
                recipient_id,
                exc,
            )
        return

    if message_type == INBOUND_MARK_ALL_READ:
        await to_thread.run_sync(partial(_run_mark_all_read, recipient_id))


@router.websocket("/ws")
async def notifications_websocket(websocket: WebSocket) -> None:
    """Websocket endpoint joining the authenticated recipient's room."""

    try:
        recipient = await to_thread.run_sync(partial(_authenticate, _websocket_token(websocket)))
    except HTTPException:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    await notification_manager.connect(recipient.id, websocket)
    try:
        while True:
            try:
                message = await websocket.receive_json()
            except ValueError:
                continue
            await _handle_inbound(recipient.id, websocket, message)
    except WebSocketDisconnect:
        logger.info("Recipient %s disconnected", recipient.id)
    finally:
        notification_manager.disconnect(recipient.id, websocket)
