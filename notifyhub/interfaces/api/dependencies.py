"""FastAPI dependency utilities."""

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from notifyhub.domain.entities import Recipient
from notifyhub.infrastructure.database import get_db
from notifyhub.infrastructure.repositories import RecipientRepository
from notifyhub.infrastructure.security import verify_access_token

bearer_scheme = HTTPBearer(auto_error=False)


def _unauthorized(detail: str = "Invalid credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def resolve_current_recipient(token: str | None, db: Session) -> Recipient:
    """Resolve the active recipient identified by ``token``."""

    verification = verify_access_token(token)
    if not verification.valid or verification.recipient_id is None:
        raise _unauthorized()

    recipient = RecipientRepository(db).get(verification.recipient_id)
    if recipient is None:
        raise _unauthorized("Recipient not found")
    if not recipient.is_active:
        raise _unauthorized("Recipient is inactive")
    return recipient


def get_current_recipient(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> Recipient:
    """Return the authenticated recipient from the bearer token."""

    if credentials is None:
        raise _unauthorized("Not authenticated")
    return resolve_current_recipient(credentials.credentials, db)


def require_admin(current_recipient: Recipient = Depends(get_current_recipient)) -> Recipient:
    """Ensure the authenticated recipient has administrator privileges."""

    if not current_recipient.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized",
        )
    return current_recipient
