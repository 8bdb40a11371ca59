"""Routes to read and update the authenticated recipient's preferences."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from notifyhub.application.use_cases.preferences import (
    get_preferences as get_preferences_uc,
    update_preferences as update_preferences_uc,
)
from notifyhub.domain.entities import Recipient
from notifyhub.infrastructure.database import get_db
from notifyhub.interfaces.api.dependencies import get_current_recipient
from notifyhub.interfaces.api.routes_helpers import http_error_from
from notifyhub.interfaces.api.schemas import PreferencesRead, PreferencesUpdate

router = APIRouter(prefix="/preferences", tags=["preferences"])


@router.get("/", response_model=PreferencesRead)
def read_preferences(
    db: Session = Depends(get_db),
    current_recipient: Recipient = Depends(get_current_recipient),
) -> PreferencesRead:
    return PreferencesRead.model_validate(get_preferences_uc(db, current_recipient.id))


@router.put("/", response_model=PreferencesRead)
def update_preferences(
    payload: PreferencesUpdate,
    db: Session = Depends(get_db),
    current_recipient: Recipient = Depends(get_current_recipient),
) -> PreferencesRead:
    try:
        preferences = update_preferences_uc(db, current_recipient.id, payload.changes())
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return PreferencesRead.model_validate(preferences)
