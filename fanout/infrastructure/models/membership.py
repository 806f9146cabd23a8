"""SQLAlchemy model for tenant memberships."""

from sqlalchemy import Column, ForeignKey, String
from sqlalchemy.orm import relationship

from fanout.infrastructure.database import Base

from ._ids import generate_id


class MembershipModel(Base):
    """Database representation of a user's membership in a tenant."""

    __tablename__ = "memberships"

    id = Column(String(36), primary_key=True, default=generate_id)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    tenant_id = Column(String(36), nullable=False, index=True)
    role = Column(String(30), nullable=False, default="member")
    status = Column(String(20), nullable=False, default="active")
    small_group_id = Column(String(36), nullable=True, index=True)

    user = relationship("UserModel", lazy="joined")


__all__ = ["MembershipModel"]
