"""Value objects describing a push notification dispatch."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .membership import PREFERENCE_JOURNALS, PREFERENCE_MESSAGES, PREFERENCE_PRAYERS


class NotificationType(str, Enum):
    """Kinds of notification the dispatcher knows how to fan out."""

    NEW_MESSAGE = "new_message"
    MENTION = "mention"
    PRAYER_ANSWERED = "prayer_answered"
    PASTORAL_JOURNAL_SUBMITTED = "pastoral_journal_submitted"
    PASTORAL_JOURNAL_FORWARDED = "pastoral_journal_forwarded"
    PASTORAL_JOURNAL_CONFIRMED = "pastoral_journal_confirmed"

    @property
    def preference_category(self) -> str:
        """Return the user preference flag that governs this notification."""

        return _PREFERENCE_BY_TYPE[self]


_PREFERENCE_BY_TYPE = {
    NotificationType.NEW_MESSAGE: PREFERENCE_MESSAGES,
    NotificationType.MENTION: PREFERENCE_MESSAGES,
    NotificationType.PRAYER_ANSWERED: PREFERENCE_PRAYERS,
    NotificationType.PASTORAL_JOURNAL_SUBMITTED: PREFERENCE_JOURNALS,
    NotificationType.PASTORAL_JOURNAL_FORWARDED: PREFERENCE_JOURNALS,
    NotificationType.PASTORAL_JOURNAL_CONFIRMED: PREFERENCE_JOURNALS,
}

PRIORITY_NORMAL = "normal"
PRIORITY_HIGH = "high"
SOUND_DEFAULT = "default"
SOUND_DEFAULT_CRITICAL = "default_critical"


@dataclass(frozen=True)
class RecipientSelector:
    """Raw target description handed to the recipient resolver."""

    user_ids: tuple[str, ...]
    conversation_id: str | None = None
    exclude_user_ids: tuple[str, ...] = ()
    sender_user_id: str | None = None


@dataclass(frozen=True)
class NotificationPayload:
    """Content embedded in every gateway message of a dispatch."""

    title: str
    body: str
    data: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class NotificationOptions:
    """Delivery hints forwarded to the gateway."""

    priority: str = PRIORITY_NORMAL
    sound: str | None = SOUND_DEFAULT
    badge: int | None = None


@dataclass(frozen=True)
class NotificationRequest:
    """One dispatch call: who to notify, with what, and how."""

    tenant_id: str
    notification_type: NotificationType
    recipients: RecipientSelector
    payload: NotificationPayload
    options: NotificationOptions = field(default_factory=NotificationOptions)


@dataclass(frozen=True)
class NotificationContent:
    """Localized title/body pair produced by the content builder."""

    title: str
    body: str


@dataclass(frozen=True)
class Recipient:
    """Confirmed notifiable recipient."""

    membership_id: str
    user_id: str
    locale: str | None = None


__all__ = [
    "NotificationContent",
    "NotificationOptions",
    "NotificationPayload",
    "NotificationRequest",
    "NotificationType",
    "PRIORITY_HIGH",
    "PRIORITY_NORMAL",
    "Recipient",
    "RecipientSelector",
    "SOUND_DEFAULT",
    "SOUND_DEFAULT_CRITICAL",
]
