"""Persistence helpers for prayer cards."""

from sqlalchemy.orm import Session

from fanout.domain.entities import PrayerCard
from fanout.infrastructure.models import PrayerCardModel
from fanout.utils import ensure_utc


class PrayerCardRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, prayer_card_id: str) -> PrayerCard | None:
        model = self.session.get(PrayerCardModel, prayer_card_id)
        if model is None:
            return None
        return PrayerCard(
            id=model.id,
            tenant_id=model.tenant_id,
            author_id=model.author_id,
            scope=model.scope,
            title=model.title,
            small_group_id=model.small_group_id,
            answered_at=ensure_utc(model.answered_at),
        )


__all__ = ["PrayerCardRepository"]
