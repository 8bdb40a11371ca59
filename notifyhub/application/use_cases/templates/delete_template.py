"""Use case for deleting templates."""

from sqlalchemy.orm import Session

from notifyhub.domain.errors import NotFoundError
from notifyhub.infrastructure.repositories import TemplateRepository


def delete_template(session: Session, template_id: int) -> None:
    """Delete the template identified by ``template_id``."""

    repository = TemplateRepository(session)
    if not repository.delete(template_id):
        raise NotFoundError("Template not found")
