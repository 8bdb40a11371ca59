"""Use case for updating templates."""

from dataclasses import replace

from sqlalchemy.orm import Session

from notifyhub.domain.entities import Template
from notifyhub.domain.errors import NotFoundError
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


def update_template(
    session: Session,
    *,
    template_id: int,
    name: str | None = None,
    channel: str | None = None,
    subject: str | None = None,
    body: str | None = None,
    variables: list[str] | None = None,
) -> Template:
    """Apply a partial update to a template.

    The variable list is recomputed from the resulting subject and body, so
    it keeps covering every token even when only the body changes.

    Raises:
        NotFoundError: If the template does not exist.
        ValidationError: If the new name is taken or the fields are invalid.
    """

    repository = TemplateRepository(session)
    current = repository.get(template_id)
    if current is None:
        raise NotFoundError("Template not found")

    new_name = current.name
    if name is not None:
        new_name = normalize_name(name)
        if new_name != current.name:
            ensure_unique_name(repository, new_name, current_id=template_id)

    new_channel = ensure_channel(channel) if channel is not None else current.channel
    new_subject = subject if subject is not None else current.subject
    new_body = ensure_body(body) if body is not None else current.body
    ensure_subject_allowed(new_channel, new_subject)

    declared = variables if variables is not None else current.variables
    updated_template = replace(
        current,
        name=new_name,
        channel=new_channel,
        subject=new_subject or None,
        body=new_body,
        variables=merge_variables(declared, new_subject, new_body),
        updated_at=now_in_app_timezone(),
    )
    return repository.update(updated_template)
