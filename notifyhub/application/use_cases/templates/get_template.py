"""Use case for retrieving a template."""

from sqlalchemy.orm import Session

from notifyhub.domain.entities import Template
from notifyhub.domain.errors import NotFoundError
from notifyhub.infrastructure.repositories import TemplateRepository


def get_template(session: Session, template_id: int) -> Template:
    """Return the template identified by ``template_id`` or raise an error."""

    repository = TemplateRepository(session)
    template = repository.get(template_id)
    if template is None:
        raise NotFoundError("Template not found")
    return template
