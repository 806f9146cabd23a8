"""SQLAlchemy model for device push tokens."""

from sqlalchemy import Column, DateTime, Index, String

from fanout.infrastructure.database import Base
from fanout.utils import now_utc_naive

from ._ids import generate_id


class DeviceTokenModel(Base):
    """Database representation of a device registration.

    Rows are never deleted; revocation only stamps ``revoked_at``.
    """

    __tablename__ = "device_tokens"
    __table_args__ = (Index("ix_device_tokens_tenant_user", "tenant_id", "user_id"),)

    id = Column(String(36), primary_key=True, default=generate_id)
    tenant_id = Column(String(36), nullable=False)
    user_id = Column(String(36), nullable=False)
    token = Column(String(255), nullable=False, index=True)
    platform = Column(String(10), nullable=False)
    last_used_at = Column(DateTime(), nullable=False, default=now_utc_naive)
    revoked_at = Column(DateTime(), nullable=True)
    created_at = Column(DateTime(), nullable=False, default=now_utc_naive)


__all__ = ["DeviceTokenModel"]
