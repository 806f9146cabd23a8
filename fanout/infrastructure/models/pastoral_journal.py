"""SQLAlchemy models for pastoral journals, small groups and zones."""

from sqlalchemy import Column, String

from fanout.infrastructure.database import Base

from ._ids import generate_id


class ZoneModel(Base):
    __tablename__ = "zones"

    id = Column(String(36), primary_key=True, default=generate_id)
    tenant_id = Column(String(36), nullable=False, index=True)
    name = Column(String(120), nullable=False)
    zone_leader_id = Column(String(36), nullable=True)


class SmallGroupModel(Base):
    __tablename__ = "small_groups"

    id = Column(String(36), primary_key=True, default=generate_id)
    tenant_id = Column(String(36), nullable=False, index=True)
    zone_id = Column(String(36), nullable=True)
    name = Column(String(120), nullable=False)
    leader_id = Column(String(36), nullable=True)


class PastoralJournalModel(Base):
    __tablename__ = "pastoral_journals"

    id = Column(String(36), primary_key=True, default=generate_id)
    tenant_id = Column(String(36), nullable=False, index=True)
    small_group_id = Column(String(36), nullable=True)
    author_id = Column(String(36), nullable=False)
    status = Column(String(20), nullable=False, default="draft")


__all__ = ["PastoralJournalModel", "SmallGroupModel", "ZoneModel"]
