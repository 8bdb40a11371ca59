"""Security helpers for access token issuance and verification."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from notifyhub.config import get_settings

ALGORITHM = "HS256"


@dataclass(frozen=True)
class TokenVerification:
    """Outcome of validating a bearer token."""

    recipient_id: int | None
    valid: bool


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    settings = get_settings()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    return jwt.encode({**data, "exp": expire}, settings.secret_key, algorithm=ALGORITHM)


def create_recipient_token(recipient_id: int, expires_delta: timedelta | None = None) -> str:
    """Issue a token whose subject is ``recipient_id``."""

    return create_access_token({"sub": str(recipient_id)}, expires_delta)


def decode_access_token(token: str) -> dict:
    settings = get_settings()
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[ALGORITHM])
    except JWTError as exc:
        raise ValueError("Could not validate credentials") from exc


def verify_access_token(token: str | None) -> TokenVerification:
    """Validate ``token`` and extract the recipient identity it carries.

    Never raises: malformed, expired or subject-less tokens produce
    ``TokenVerification(None, False)``.
    """

    if not token:
        return TokenVerification(recipient_id=None, valid=False)
    try:
        payload = decode_access_token(token)
    except ValueError:
        return TokenVerification(recipient_id=None, valid=False)

    subject = payload.get("sub")
    try:
        recipient_id = int(subject)
    except (TypeError, ValueError):
        return TokenVerification(recipient_id=None, valid=False)
    return TokenVerification(recipient_id=recipient_id, valid=True)


__all__ = [
    "ALGORITHM",
    "TokenVerification",
    "create_access_token",
    "create_recipient_token",
    "decode_access_token",
    "verify_access_token",
]
