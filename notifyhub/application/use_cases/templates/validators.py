"""Validation helpers shared by the template use cases."""

from notifyhub.domain.entities import CHANNEL_SMS, DELIVERY_CHANNELS
from notifyhub.domain.errors import ValidationError
from notifyhub.infrastructure.repositories import TemplateRepository


def normalize_name(name: str) -> str:
    normalized = name.strip()
    if not normalized:
        raise ValidationError("Template name cannot be empty")
    return normalized


def ensure_channel(channel: str) -> str:
    normalized = channel.strip().upper()
    if normalized not in DELIVERY_CHANNELS:
        raise ValidationError(f"Unsupported template channel: {channel}")
    return normalized


def ensure_body(body: str) -> str:
    if not body or not body.strip():
        raise ValidationError("Template body cannot be empty")
    return body


def ensure_subject_allowed(channel: str, subject: str | None) -> None:
    if channel == CHANNEL_SMS and subject:
        raise ValidationError("SMS templates cannot define a subject")


def ensure_unique_name(
    repository: TemplateRepository, name: str, *, current_id: int | None = None
) -> None:
    existing = repository.get_by_name(name)
    if existing is not None and existing.id != current_id:
        raise ValidationError("Template with this name already exists")
