"""Persistence layer for message templates."""

from collections.abc import Sequence

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from notifyhub.domain.entities import Template
from notifyhub.domain.errors import ValidationError
from notifyhub.infrastructure.models import TemplateModel
from notifyhub.utils import ensure_app_naive_datetime, ensure_app_timezone


class TemplateRepository:
    """Provide CRUD operations for templates."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list(
        self,
        *,
        skip: int = 0,
        limit: int | None = 100,
        channel: str | None = None,
    ) -> Sequence[Template]:
        query = self.session.query(TemplateModel)
        if channel:
            query = query.filter(TemplateModel.channel == channel)
        query = query.order_by(TemplateModel.created_at.desc(), TemplateModel.id.desc())
        if skip:
            query = query.offset(skip)
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def get(self, template_id: int) -> Template | None:
        model = self.session.get(TemplateModel, template_id)
        return self._to_entity(model) if model else None

    def get_by_name(self, name: str) -> Template | None:
        normalized_name = name.strip().lower()
        model = (
            self.session.query(TemplateModel)
            .filter(func.lower(TemplateModel.name) == normalized_name)
            .first()
        )
        return self._to_entity(model) if model else None

    def create(self, template: Template) -> Template:
        model = TemplateModel()
        self._apply_entity_to_model(model, template)
        if template.created_at is not None:
            model.created_at = ensure_app_naive_datetime(template.created_at)
        self.session.add(model)
        self._commit_unique_name()
        self.session.refresh(model)
        return self._to_entity(model)

    def update(self, template: Template) -> Template:
        if template.id is None:
            raise ValueError("Template id is required for updates")
        model = self.session.get(TemplateModel, template.id)
        if model is None:
            msg = f"Template with id {template.id} not found"
            raise ValueError(msg)
        self._apply_entity_to_model(model, template)
        self.session.add(model)
        self._commit_unique_name()
        self.session.refresh(model)
        return self._to_entity(model)

    def _commit_unique_name(self) -> None:
        try:
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            raise ValidationError("Template with this name already exists") from exc

    def delete(self, template_id: int) -> bool:
        model = self.session.get(TemplateModel, template_id)
        if model is None:
            return False
        self.session.delete(model)
        self.session.commit()
        return True

    @staticmethod
    def _apply_entity_to_model(model: TemplateModel, template: Template) -> None:
        model.name = template.name
        model.channel = template.channel
        model.subject = template.subject
        model.body = template.body
        model.variables = list(template.variables)

    @staticmethod
    def _to_entity(model: TemplateModel) -> Template:
        return Template(
            id=model.id,
            name=model.name,
            channel=model.channel,
            subject=model.subject,
            body=model.body,
            variables=list(model.variables or []),
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["TemplateRepository"]
