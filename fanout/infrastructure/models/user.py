"""SQLAlchemy model for the user table."""

from sqlalchemy import JSON, Column, String

from fanout.domain.entities import DEFAULT_NOTIFICATION_PREFERENCES
from fanout.infrastructure.database import Base

from ._ids import generate_id


def _default_preferences() -> dict[str, bool]:
    return dict(DEFAULT_NOTIFICATION_PREFERENCES)


class UserModel(Base):
    """Profile data of a user, shared across tenants."""

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=generate_id)
    display_name = Column(String(120), nullable=True)
    locale = Column(String(10), nullable=False, default="en")
    notification_preferences = Column(JSON, nullable=False, default=_default_preferences)


__all__ = ["UserModel"]
