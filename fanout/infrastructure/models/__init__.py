"""ORM models used by the application infrastructure."""

from .conversation import (
    ConversationModel,
    ConversationParticipantModel,
    EventChatExclusionModel,
    MentionModel,
    MessageModel,
)
from .device_token import DeviceTokenModel
from .membership import MembershipModel
from .pastoral_journal import PastoralJournalModel, SmallGroupModel, ZoneModel
from .prayer_card import PrayerCardModel
from .push_notification_log import PushNotificationLogModel
from .user import UserModel

__all__ = [
    "ConversationModel",
    "ConversationParticipantModel",
    "DeviceTokenModel",
    "EventChatExclusionModel",
    "MembershipModel",
    "MentionModel",
    "MessageModel",
    "PastoralJournalModel",
    "PrayerCardModel",
    "PushNotificationLogModel",
    "SmallGroupModel",
    "UserModel",
    "ZoneModel",
]
