"""Handlers turning domain events into push notification dispatches."""

from .common import EventHandlingResult
from .message_sent import detect_mentions, handle_message_sent
from .pastoral_journal import handle_pastoral_journal_change
from .prayer_answered import handle_prayer_answered, prayer_audience

__all__ = [
    "EventHandlingResult",
    "detect_mentions",
    "handle_message_sent",
    "handle_pastoral_journal_change",
    "handle_prayer_answered",
    "prayer_audience",
]
