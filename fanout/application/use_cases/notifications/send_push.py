"""Dispatch pipeline shared by the push endpoint and the event handlers."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from sqlalchemy.orm import Session

from fanout.config import Settings, get_settings
from fanout.domain.entities import NotificationRequest, Recipient
from fanout.domain.exceptions import InvalidNotificationRequest
from fanout.infrastructure.push_gateway import PushGateway
from fanout.infrastructure.rate_limiter import RateLimiter
from fanout.infrastructure.repositories import (
    ConversationRepository,
    DeviceTokenRepository,
    MembershipRepository,
    PushNotificationLogRepository,
)

from .audit import AuditLogger, build_error_summary
from .dispatcher import BatchDispatcher
from .recipients import RecipientResolver

logger = logging.getLogger(__name__)


@dataclass
class PushDispatchOutcome:
    """Result of one dispatch call as reported to the caller."""

    success: bool
    sent: int = 0
    failed: int = 0
    errors: list[str] = field(default_factory=list)
    recipients: list[Recipient] = field(default_factory=list)

    @property
    def recipient_count(self) -> int:
        return len(self.recipients)

    @property
    def is_partial(self) -> bool:
        return self.failed > 0


class PushNotificationService:
    """Resolve, throttle, deliver and audit a :class:`NotificationRequest`."""

    def __init__(
        self,
        *,
        resolver: RecipientResolver,
        rate_limiter: RateLimiter,
        token_repository: DeviceTokenRepository,
        dispatcher: BatchDispatcher,
        audit_logger: AuditLogger,
    ) -> None:
        self.resolver = resolver
        self.rate_limiter = rate_limiter
        self.token_repository = token_repository
        self.dispatcher = dispatcher
        self.audit_logger = audit_logger

    @classmethod
    def from_session(
        cls,
        session: Session,
        *,
        rate_limiter: RateLimiter,
        gateway: PushGateway,
        settings: Settings | None = None,
    ) -> "PushNotificationService":
        settings = settings or get_settings()
        memberships = MembershipRepository(session)
        tokens = DeviceTokenRepository(
            session, freshness_days=settings.token_freshness_days
        )
        return cls(
            resolver=RecipientResolver(memberships, ConversationRepository(session)),
            rate_limiter=rate_limiter,
            token_repository=tokens,
            dispatcher=BatchDispatcher(
                gateway, tokens, batch_size=settings.push_batch_size
            ),
            audit_logger=AuditLogger(PushNotificationLogRepository(session)),
        )

    def dispatch(self, request: NotificationRequest) -> PushDispatchOutcome:
        """Run the full pipeline for ``request``.

        Raises :class:`RateLimitExceeded` before any token is contacted when the
        tenant is over budget. Gateway authentication or configuration failures
        and token lookup failures propagate; per batch delivery errors are
        folded into the outcome.
        """

        if not request.recipients.user_ids:
            raise InvalidNotificationRequest("At least one recipient user id is required")

        notification_type = request.notification_type
        recipients = list(
            self.resolver.resolve(
                request.tenant_id,
                request.recipients,
                preference_category=notification_type.preference_category,
            )
        )

        self.rate_limiter.enforce(request.tenant_id)

        if not recipients:
            logger.info(
                "No eligible recipients for %s in tenant %s",
                notification_type.value,
                request.tenant_id,
            )
            return PushDispatchOutcome(success=True)

        tokens = self.token_repository.get_eligible_tokens(
            request.tenant_id, [recipient.user_id for recipient in recipients]
        )
        if not tokens:
            logger.info(
                "No active device tokens for %s recipient(s) in tenant %s",
                len(recipients),
                request.tenant_id,
            )
            return PushDispatchOutcome(success=True, recipients=recipients)

        result = self.dispatcher.send(
            request.tenant_id, tokens, request.payload, request.options
        )

        self.audit_logger.record(
            tenant_id=request.tenant_id,
            notification_type=notification_type.value,
            recipient_count=len(recipients),
            sent_count=result.sent,
            failed_count=result.failed,
            error_summary=build_error_summary(result.errors, result.invalid_tokens),
        )

        return PushDispatchOutcome(
            success=True,
            sent=result.sent,
            failed=result.failed,
            errors=list(result.errors),
            recipients=recipients,
        )


__all__ = ["PushDispatchOutcome", "PushNotificationService"]
