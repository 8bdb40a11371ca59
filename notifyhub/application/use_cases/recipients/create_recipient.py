"""Use case for registering a recipient mirrored from the account system."""

from sqlalchemy.orm import Session

from notifyhub.application.use_cases.preferences import create_default_preferences
from notifyhub.domain.entities import Recipient
from notifyhub.domain.errors import ValidationError
from notifyhub.infrastructure.repositories import RecipientRepository


def create_recipient(
    session: Session,
    *,
    name: str,
    email: str,
    phone: str | None = None,
    email_verified: bool = False,
    phone_verified: bool = False,
    is_admin: bool = False,
) -> Recipient:
    """Create a recipient together with its default preferences."""

    normalized_name = name.strip()
    if not normalized_name:
        raise ValidationError("Recipient name cannot be empty")
    normalized_email = email.strip().lower()
    if "@" not in normalized_email:
        raise ValidationError("Recipient email is not valid")

    repository = RecipientRepository(session)
    if repository.get_by_email(normalized_email) is not None:
        raise ValidationError("A recipient with this email already exists")

    recipient = repository.create(
        Recipient(
            id=None,
            name=normalized_name,
            email=normalized_email,
            phone=(phone or "").strip() or None,
            email_verified=email_verified,
            phone_verified=phone_verified and bool(phone),
            is_admin=is_admin,
            is_active=True,
            created_at=None,
        )
    )
    create_default_preferences(session, recipient.id)
    return recipient
