"""SQLAlchemy model for recipient delivery preferences."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.sql import expression

from notifyhub.infrastructure.database import Base
from notifyhub.utils import now_in_app_naive_datetime


class RecipientPreferencesModel(Base):
    """One row of channel opt-ins and quiet hours per recipient."""

    __tablename__ = "recipient_preferences"

    id = Column(Integer, primary_key=True, index=True)
    recipient_id = Column(
        Integer,
        ForeignKey("recipient.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True,
    )
    email_enabled = Column(
        Boolean, nullable=False, default=True, server_default=expression.true()
    )
    sms_enabled = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )
    push_enabled = Column(
        Boolean, nullable=False, default=True, server_default=expression.true()
    )
    email_frequency = Column(String(10), nullable=False, default="instant")
    quiet_hours_start = Column(String(5), nullable=True)
    quiet_hours_end = Column(String(5), nullable=True)
    updated_at = Column(
        DateTime(),
        nullable=False,
        default=now_in_app_naive_datetime,
        onupdate=now_in_app_naive_datetime,
    )


__all__ = ["RecipientPreferencesModel"]
