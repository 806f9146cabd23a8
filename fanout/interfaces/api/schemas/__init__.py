from .events import (
    EventHandlingResponse,
    MessageSentEvent,
    PastoralJournalChangedEvent,
    PrayerAnsweredEvent,
)
from .push import (
    DispatchResponse,
    NotificationRequestIn,
    OptionsIn,
    PayloadIn,
    RateLimitedResponse,
    RecipientsIn,
)

__all__ = [
    "DispatchResponse",
    "EventHandlingResponse",
    "MessageSentEvent",
    "NotificationRequestIn",
    "OptionsIn",
    "PastoralJournalChangedEvent",
    "PayloadIn",
    "PrayerAnsweredEvent",
    "RateLimitedResponse",
    "RecipientsIn",
]
