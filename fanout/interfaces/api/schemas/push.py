"""Schemas for the push dispatch endpoint."""

from typing import Any, Literal

from pydantic import BaseModel, Field

from fanout.domain.entities import (
    PRIORITY_NORMAL,
    NotificationOptions,
    NotificationPayload,
    NotificationRequest,
    NotificationType,
    RecipientSelector,
)


class RecipientsIn(BaseModel):
    user_ids: list[str] = Field(min_length=1)
    conversation_id: str | None = None
    exclude_user_ids: list[str] = Field(default_factory=list)
    sender_user_id: str | None = None


class PayloadIn(BaseModel):
    title: str
    body: str
    data: dict[str, Any] = Field(default_factory=dict)


class OptionsIn(BaseModel):
    priority: Literal["normal", "high"] = PRIORITY_NORMAL
    sound: str | None = "default"
    badge: int | None = Field(default=None, ge=0)


class NotificationRequestIn(BaseModel):
    """Body accepted by ``POST /push/send``."""

    tenant_id: str = Field(min_length=1)
    notification_type: NotificationType
    recipients: RecipientsIn
    payload: PayloadIn
    options: OptionsIn = Field(default_factory=OptionsIn)

    def to_domain(self) -> NotificationRequest:
        return NotificationRequest(
            tenant_id=self.tenant_id,
            notification_type=self.notification_type,
            recipients=RecipientSelector(
                user_ids=tuple(self.recipients.user_ids),
                conversation_id=self.recipients.conversation_id,
                exclude_user_ids=tuple(self.recipients.exclude_user_ids),
                sender_user_id=self.recipients.sender_user_id,
            ),
            payload=NotificationPayload(
                title=self.payload.title,
                body=self.payload.body,
                data=dict(self.payload.data),
            ),
            options=NotificationOptions(
                priority=self.options.priority,
                sound=self.options.sound,
                badge=self.options.badge,
            ),
        )


class DispatchResponse(BaseModel):
    success: bool
    sent: int
    failed: int
    errors: list[str]


class RateLimitedResponse(BaseModel):
    detail: str
    retry_after: int


__all__ = [
    "DispatchResponse",
    "NotificationRequestIn",
    "OptionsIn",
    "PayloadIn",
    "RateLimitedResponse",
    "RecipientsIn",
]
