"""Push notification dispatch use cases."""

from .audit import AuditLogger, build_error_summary
from .content import (
    build_journal_content,
    build_message_content,
    build_prayer_answered_content,
    group_by_locale,
    normalize_locale,
)
from .dispatcher import BatchDispatcher, classify_ticket
from .recipients import RecipientResolver, select_recipients
from .send_push import PushDispatchOutcome, PushNotificationService

__all__ = [
    "AuditLogger",
    "BatchDispatcher",
    "PushDispatchOutcome",
    "PushNotificationService",
    "RecipientResolver",
    "build_error_summary",
    "build_journal_content",
    "build_message_content",
    "build_prayer_answered_content",
    "classify_ticket",
    "group_by_locale",
    "normalize_locale",
    "select_recipients",
]
