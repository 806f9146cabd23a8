"""Repository implementations for infrastructure layer."""

from .conversation_repository import ConversationRepository
from .device_token_repository import DEFAULT_FRESHNESS_DAYS, DeviceTokenRepository
from .membership_repository import MembershipRepository
from .pastoral_journal_repository import PastoralJournalRepository
from .prayer_card_repository import PrayerCardRepository
from .push_notification_log_repository import PushNotificationLogRepository

__all__ = [
    "ConversationRepository",
    "DEFAULT_FRESHNESS_DAYS",
    "DeviceTokenRepository",
    "MembershipRepository",
    "PastoralJournalRepository",
    "PrayerCardRepository",
    "PushNotificationLogRepository",
]
