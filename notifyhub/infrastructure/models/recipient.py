"""SQLAlchemy model for the recipient table."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String, func
from sqlalchemy.sql import expression

from notifyhub.infrastructure.database import Base


class RecipientModel(Base):
    """Database representation of a notification recipient."""

    __tablename__ = "recipient"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    phone = Column(String(32), nullable=True, unique=True)
    email_verified = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )
    phone_verified = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )
    is_admin = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())


__all__ = ["RecipientModel"]
