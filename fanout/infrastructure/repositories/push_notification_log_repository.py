"""Persistence layer for push notification audit records."""

from sqlalchemy.orm import Session

from fanout.domain.entities import PushNotificationLog
from fanout.infrastructure.models import PushNotificationLogModel
from fanout.utils import ensure_utc, ensure_utc_naive, now_utc


class PushNotificationLogRepository:
    """Append :class:`PushNotificationLog` entries."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, entry: PushNotificationLog) -> PushNotificationLog:
        model = PushNotificationLogModel(
            tenant_id=entry.tenant_id,
            notification_type=entry.notification_type,
            recipient_count=entry.recipient_count,
            sent_count=entry.sent_count,
            failed_count=entry.failed_count,
            error_summary=entry.error_summary,
            created_at=ensure_utc_naive(entry.created_at or now_utc()),
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def list_for_tenant(self, tenant_id: str) -> list[PushNotificationLog]:
        query = (
            self.session.query(PushNotificationLogModel)
            .filter(PushNotificationLogModel.tenant_id == tenant_id)
            .order_by(PushNotificationLogModel.id)
        )
        return [self._to_entity(model) for model in query.all()]

    @staticmethod
    def _to_entity(model: PushNotificationLogModel) -> PushNotificationLog:
        return PushNotificationLog(
            id=model.id,
            tenant_id=model.tenant_id,
            notification_type=model.notification_type,
            recipient_count=model.recipient_count,
            sent_count=model.sent_count,
            failed_count=model.failed_count,
            error_summary=model.error_summary,
            created_at=ensure_utc(model.created_at),
        )


__all__ = ["PushNotificationLogRepository"]
