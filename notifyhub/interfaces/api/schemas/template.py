"""Schemas for template endpoints."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

TemplateChannel = Literal["EMAIL", "SMS"]


class TemplateCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    channel: TemplateChannel
    subject: str | None = Field(default=None, max_length=255)
    body: str = Field(..., min_length=1)
    variables: list[str] = Field(default_factory=list)


class TemplateUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(default=None, min_length=1, max_length=100)
    channel: TemplateChannel | None = None
    subject: str | None = Field(default=None, max_length=255)
    body: str | None = Field(default=None, min_length=1)
    variables: list[str] | None = None


class TemplateRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    channel: TemplateChannel
    subject: str | None
    body: str
    variables: list[str]
    created_at: datetime | None
    updated_at: datetime | None


class TemplatePreviewRequest(BaseModel):
    variables: dict[str, str] = Field(default_factory=dict)


class TemplatePreviewRead(BaseModel):
    """Stored template plus its rendering with the supplied variables."""

    model_config = ConfigDict(from_attributes=True)

    template: TemplateRead
    rendered_subject: str | None
    rendered_body: str
