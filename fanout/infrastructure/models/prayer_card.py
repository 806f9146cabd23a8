"""SQLAlchemy model for prayer cards."""

from sqlalchemy import Column, DateTime, String

from fanout.infrastructure.database import Base
from fanout.utils import now_utc_naive

from ._ids import generate_id


class PrayerCardModel(Base):
    __tablename__ = "prayer_cards"

    id = Column(String(36), primary_key=True, default=generate_id)
    tenant_id = Column(String(36), nullable=False, index=True)
    author_id = Column(String(36), nullable=False)
    title = Column(String(200), nullable=True)
    scope = Column(String(20), nullable=False, default="individual")
    small_group_id = Column(String(36), nullable=True)
    answered_at = Column(DateTime(), nullable=True)
    created_at = Column(DateTime(), nullable=False, default=now_utc_naive)


__all__ = ["PrayerCardModel"]
