"""SQLAlchemy model for message templates."""

from sqlalchemy import Column, DateTime, Integer, JSON, String, Text

from notifyhub.infrastructure.database import Base
from notifyhub.utils import now_in_app_naive_datetime


class TemplateModel(Base):
    """Database representation of an EMAIL or SMS template."""

    __tablename__ = "template"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, unique=True, index=True)
    channel = Column(String(10), nullable=False)
    subject = Column(String(255), nullable=True)
    body = Column(Text, nullable=False)
    variables = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(DateTime(), nullable=True, onupdate=now_in_app_naive_datetime)


__all__ = ["TemplateModel"]
