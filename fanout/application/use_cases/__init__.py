"""Aggregate application use cases."""

from .events import (
    EventHandlingResult,
    handle_message_sent,
    handle_pastoral_journal_change,
    handle_prayer_answered,
)
from .notifications import PushDispatchOutcome, PushNotificationService

__all__ = [
    "EventHandlingResult",
    "PushDispatchOutcome",
    "PushNotificationService",
    "handle_message_sent",
    "handle_pastoral_journal_change",
    "handle_prayer_answered",
]
