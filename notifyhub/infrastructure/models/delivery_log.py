"""SQLAlchemy model for delivery attempts."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from notifyhub.infrastructure.database import Base
from notifyhub.utils import now_in_app_naive_datetime


class DeliveryLogModel(Base):
    """One row per worker invocation of a channel delivery job."""

    __tablename__ = "delivery_log"

    id = Column(Integer, primary_key=True, index=True)
    notification_id = Column(
        Integer,
        ForeignKey("notification.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    channel = Column(String(10), nullable=False)
    recipient = Column(String(255), nullable=False)
    status = Column(String(10), nullable=False, default="PENDING")
    attempt = Column(Integer, nullable=False, default=1)
    job_id = Column(String(64), nullable=True, index=True)
    sent_at = Column(DateTime(), nullable=True)
    error_message = Column(Text, nullable=True)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)

    notification = relationship("NotificationModel", back_populates="delivery_logs")


__all__ = ["DeliveryLogModel"]
