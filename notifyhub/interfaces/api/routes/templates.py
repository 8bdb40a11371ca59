"""Routes to manage message templates."""

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from notifyhub.application.use_cases.templates import (
    create_template as create_template_uc,
    delete_template as delete_template_uc,
    get_template as get_template_uc,
    list_templates as list_templates_uc,
    preview_template as preview_template_uc,
    update_template as update_template_uc,
)
from notifyhub.domain.entities import Recipient
from notifyhub.infrastructure.database import get_db
from notifyhub.interfaces.api.dependencies import get_current_recipient, require_admin
from notifyhub.interfaces.api.routes_helpers import http_error_from
from notifyhub.interfaces.api.schemas import (
    TemplateCreate,
    TemplatePreviewRead,
    TemplatePreviewRequest,
    TemplateRead,
    TemplateUpdate,
)

router = APIRouter(prefix="/templates", tags=["templates"])


@router.get("/", response_model=list[TemplateRead])
def list_templates(
    channel: str | None = Query(None, description="EMAIL or SMS"),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    db: Session = Depends(get_db),
    _: Recipient = Depends(get_current_recipient),
) -> list[TemplateRead]:
    try:
        templates = list_templates_uc(db, channel=channel, skip=skip, limit=limit)
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return [TemplateRead.model_validate(template) for template in templates]


@router.post("/", response_model=TemplateRead, status_code=status.HTTP_201_CREATED)
def create_template(
    payload: TemplateCreate,
    db: Session = Depends(get_db),
    _: Recipient = Depends(require_admin),
) -> TemplateRead:
    try:
        template = create_template_uc(
            db,
            name=payload.name,
            channel=payload.channel,
            subject=payload.subject,
            body=payload.body,
            variables=payload.variables,
        )
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return TemplateRead.model_validate(template)


@router.get("/{template_id}", response_model=TemplateRead)
def read_template(
    template_id: int,
    db: Session = Depends(get_db),
    _: Recipient = Depends(get_current_recipient),
) -> TemplateRead:
    try:
        template = get_template_uc(db, template_id)
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return TemplateRead.model_validate(template)


@router.put("/{template_id}", response_model=TemplateRead)
def update_template(
    template_id: int,
    payload: TemplateUpdate,
    db: Session = Depends(get_db),
    _: Recipient = Depends(require_admin),
) -> TemplateRead:
    try:
        template = update_template_uc(
            db, template_id=template_id, **payload.model_dump(exclude_unset=True)
        )
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return TemplateRead.model_validate(template)


@router.delete("/{template_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_template(
    template_id: int,
    db: Session = Depends(get_db),
    _: Recipient = Depends(require_admin),
) -> Response:
    try:
        delete_template_uc(db, template_id)
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{template_id}/preview", response_model=TemplatePreviewRead)
def preview_template(
    template_id: int,
    payload: TemplatePreviewRequest,
    db: Session = Depends(get_db),
    _: Recipient = Depends(get_current_recipient),
) -> TemplatePreviewRead:
    """Render a stored template with sample variables."""

    try:
        preview = preview_template_uc(db, template_id, variables=payload.variables)
    except ValueError as exc:
        raise http_error_from(exc) from exc
    return TemplatePreviewRead.model_validate(preview)
