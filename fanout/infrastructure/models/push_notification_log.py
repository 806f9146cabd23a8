"""SQLAlchemy model for audit records of push notification dispatches."""

from sqlalchemy import Column, DateTime, Integer, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.types import JSON

from fanout.infrastructure.database import Base
from fanout.utils import now_utc_naive

_summary_json_type = JSON().with_variant(JSONB(), "postgresql")


class PushNotificationLogModel(Base):
    """Database representation of dispatch audit entries."""

    __tablename__ = "push_notification_logs"

    id = Column(Integer, primary_key=True, index=True)
    tenant_id = Column(String(36), nullable=False, index=True)
    notification_type = Column(String(50), nullable=False)
    recipient_count = Column(Integer, nullable=False, default=0)
    sent_count = Column(Integer, nullable=False, default=0)
    failed_count = Column(Integer, nullable=False, default=0)
    error_summary = Column(_summary_json_type, nullable=True)
    created_at = Column(DateTime(), nullable=False, default=now_utc_naive)


__all__ = ["PushNotificationLogModel"]
