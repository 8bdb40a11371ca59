"""Use case for rendering a template with sample variables."""

from collections.abc import Mapping

from sqlalchemy.orm import Session

from notifyhub.domain.entities import TemplatePreview

from .get_template import get_template
from .rendering import render_template


def preview_template(
    session: Session, template_id: int, *, variables: Mapping[str, str]
) -> TemplatePreview:
    """Render the subject and body of a stored template without sending it."""

    template = get_template(session, template_id)
    rendered_subject = (
        render_template(template.subject, variables) if template.subject else None
    )
    return TemplatePreview(
        template=template,
        rendered_subject=rendered_subject,
        rendered_body=render_template(template.body, variables),
    )
