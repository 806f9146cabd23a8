"""Persistence helpers for pastoral journals and their small groups."""

from sqlalchemy.orm import Session

from fanout.domain.entities import PastoralJournal, SmallGroup
from fanout.infrastructure.models import PastoralJournalModel, SmallGroupModel, ZoneModel


class PastoralJournalRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, journal_id: str) -> PastoralJournal | None:
        model = self.session.get(PastoralJournalModel, journal_id)
        if model is None:
            return None
        return PastoralJournal(
            id=model.id,
            tenant_id=model.tenant_id,
            small_group_id=model.small_group_id,
            author_id=model.author_id,
            status=model.status,
        )

    def get_small_group(self, small_group_id: str) -> SmallGroup | None:
        model = self.session.get(SmallGroupModel, small_group_id)
        if model is None:
            return None
        return SmallGroup(
            id=model.id,
            tenant_id=model.tenant_id,
            name=model.name,
            leader_id=model.leader_id,
            zone_id=model.zone_id,
        )

    def get_zone_leader_id(self, zone_id: str) -> str | None:
        model = self.session.get(ZoneModel, zone_id)
        return model.zone_leader_id if model else None


__all__ = ["PastoralJournalRepository"]
