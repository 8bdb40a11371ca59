"""Use case for listing templates."""

from collections.abc import Sequence

from sqlalchemy.orm import Session

from notifyhub.domain.entities import Template
from notifyhub.infrastructure.repositories import TemplateRepository

from .validators import ensure_channel


def list_templates(
    session: Session,
    *,
    channel: str | None = None,
    skip: int = 0,
    limit: int = 100,
) -> Sequence[Template]:
    """Return templates newest first, optionally restricted to one channel."""

    repository = TemplateRepository(session)
    normalized_channel = ensure_channel(channel) if channel else None
    return repository.list(skip=skip, limit=limit, channel=normalized_channel)
