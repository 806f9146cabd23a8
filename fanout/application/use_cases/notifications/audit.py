"""Fire-and-forget audit trail of dispatch calls."""

from __future__ import annotations

import logging
from typing import Any

from fanout.domain.entities import PushNotificationLog
from fanout.infrastructure.repositories import PushNotificationLogRepository
from fanout.utils import now_utc

logger = logging.getLogger(__name__)


def build_error_summary(
    errors: list[str], invalid_tokens: list[str]
) -> dict[str, Any] | None:
    if not errors and not invalid_tokens:
        return None
    return {"errors": list(errors), "invalid_tokens": list(invalid_tokens)}


class AuditLogger:
    """Append one :class:`PushNotificationLog` per dispatch call.

    A failure to write the entry is logged and swallowed; it never changes the
    outcome reported for the dispatch.
    """

    def __init__(self, repository: PushNotificationLogRepository) -> None:
        self.repository = repository

    def record(
        self,
        *,
        tenant_id: str,
        notification_type: str,
        recipient_count: int,
        sent_count: int,
        failed_count: int,
        error_summary: dict[str, Any] | None = None,
    ) -> PushNotificationLog | None:
        entry = PushNotificationLog(
            id=None,
            tenant_id=tenant_id,
            notification_type=notification_type,
            recipient_count=recipient_count,
            sent_count=sent_count,
            failed_count=failed_count,
            error_summary=error_summary,
            created_at=now_utc(),
        )
        try:
            return self.repository.create(entry)
        except Exception as exc:
            logger.error(
                "Failed to record push notification log for tenant %s: %s",
                tenant_id,
                exc,
            )
            try:
                self.repository.session.rollback()
            except Exception:
                logger.exception("Rollback after failed audit write also failed")
            return None


__all__ = ["AuditLogger", "build_error_summary"]
