"""Domain entity representing a message template."""

from dataclasses import dataclass, field
from datetime import datetime

from .channel import CHANNEL_EMAIL


@dataclass
class Template:
    """Named, reusable rendering source for the EMAIL or SMS channel."""

    id: int | None
    name: str
    channel: str
    subject: str | None
    body: str
    variables: list[str] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def supports_subject(self) -> bool:
        return self.channel == CHANNEL_EMAIL


@dataclass(frozen=True)
class TemplatePreview:
    """Result of rendering a template with a sample variable map."""

    template: Template
    rendered_subject: str | None
    rendered_body: str


__all__ = ["Template", "TemplatePreview"]
