"""Shared plumbing for the domain event handlers."""

from __future__ import annotations

import logging
import time
import uuid
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from fanout.domain.entities import (
    Membership,
    NotificationContent,
    NotificationOptions,
    NotificationPayload,
    NotificationRequest,
    NotificationType,
    RecipientSelector,
)
from fanout.domain.exceptions import FanoutError

from ..notifications import PushNotificationService

logger = logging.getLogger(__name__)


@dataclass
class EventHandlingResult:
    """Outcome reported back to the caller that raised the domain event."""

    success: bool
    notified: int = 0
    errors: list[str] = field(default_factory=list)

    @classmethod
    def failure(cls, error: str) -> "EventHandlingResult":
        return cls(success=False, notified=0, errors=[error])


@dataclass
class EventContext:
    """Per invocation tracking data written to the logs."""

    name: str
    request_id: str
    started_at: float
    fields: dict[str, Any] = field(default_factory=dict)

    @property
    def duration_ms(self) -> int:
        return round((time.perf_counter() - self.started_at) * 1000)


@contextmanager
def track_event(
    name: str, *, request_id: str | None = None, **fields: Any
) -> Iterator[EventContext]:
    """Log the start, completion and failure of one event invocation."""

    context = EventContext(
        name=name,
        request_id=request_id or uuid.uuid4().hex,
        started_at=time.perf_counter(),
        fields=fields,
    )
    extra = " ".join(f"{key}={value}" for key, value in fields.items())
    logger.info(
        "event=%s.started request_id=%s %s", name, context.request_id, extra
    )
    try:
        yield context
    except Exception:
        logger.exception(
            "event=%s.error request_id=%s duration_ms=%s",
            name,
            context.request_id,
            context.duration_ms,
        )
        raise
    logger.info(
        "event=%s.completed request_id=%s duration_ms=%s",
        name,
        context.request_id,
        context.duration_ms,
    )


def build_request(
    *,
    tenant_id: str,
    notification_type: NotificationType,
    user_ids: Sequence[str],
    content: NotificationContent,
    data: dict[str, Any],
    conversation_id: str | None = None,
    exclude_user_ids: Sequence[str] = (),
    sender_user_id: str | None = None,
    options: NotificationOptions | None = None,
) -> NotificationRequest:
    return NotificationRequest(
        tenant_id=tenant_id,
        notification_type=notification_type,
        recipients=RecipientSelector(
            user_ids=tuple(user_ids),
            conversation_id=conversation_id,
            exclude_user_ids=tuple(exclude_user_ids),
            sender_user_id=sender_user_id,
        ),
        payload=NotificationPayload(
            title=content.title, body=content.body, data=dict(data)
        ),
        options=options or NotificationOptions(),
    )


def dispatch_isolated(
    session: Session,
    push_service: PushNotificationService,
    request: NotificationRequest,
    errors: list[str],
) -> int:
    """Dispatch ``request``; on failure record the error and return ``0``.

    Returns the number of recipients the dispatch targeted.
    """

    try:
        outcome = push_service.dispatch(request)
    except FanoutError as exc:
        logger.warning(
            "Dispatch of %s for tenant %s failed: %s",
            request.notification_type.value,
            request.tenant_id,
            exc,
        )
        errors.append(str(exc))
        return 0
    except SQLAlchemyError as exc:
        session.rollback()
        logger.error(
            "Database error while dispatching %s for tenant %s: %s",
            request.notification_type.value,
            request.tenant_id,
            exc,
        )
        errors.append(f"Database error: {exc.__class__.__name__}")
        return 0
    return outcome.recipient_count


def database_failure(session: Session, exc: SQLAlchemyError) -> EventHandlingResult:
    """Roll back ``session`` and report a storage failure to the caller."""

    session.rollback()
    logger.error("Database error while handling event: %s", exc)
    return EventHandlingResult.failure(f"Database error: {exc.__class__.__name__}")


def user_ids_of(memberships: Sequence[Membership]) -> list[str]:
    return list(dict.fromkeys(membership.user_id for membership in memberships))


__all__ = [
    "EventContext",
    "EventHandlingResult",
    "build_request",
    "database_failure",
    "dispatch_isolated",
    "track_event",
    "user_ids_of",
]
