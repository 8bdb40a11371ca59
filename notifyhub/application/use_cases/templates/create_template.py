"""Use case for creating templates."""

from sqlalchemy.orm import Session

from notifyhub.domain.entities import Template
from notifyhub.infrastructure.repositories import TemplateRepository
from notifyhub.utils import now_in_app_timezone

from .rendering import merge_variables
from .validators import (
    ensure_body,
    ensure_channel,
    ensure_subject_allowed,
    ensure_unique_name,
    normalize_name,
)


def create_template(
    session: Session,
    *,
    name: str,
    channel: str,
    body: str,
    subject: str | None = None,
    variables: list[str] | None = None,
) -> Template:
    """Create a template whose variables include every token it references."""

    repository = TemplateRepository(session)

    normalized_name = normalize_name(name)
    normalized_channel = ensure_channel(channel)
    ensure_body(body)
    ensure_subject_allowed(normalized_channel, subject)
    ensure_unique_name(repository, normalized_name)

    template = Template(
        id=None,
        name=normalized_name,
        channel=normalized_channel,
        subject=subject or None,
        body=body,
        variables=merge_variables(variables, subject, body),
        created_at=now_in_app_timezone(),
    )
    return repository.create(template)
