"""Domain entities exposed by the application."""

from .device_token import PLATFORM_ANDROID, PLATFORM_IOS, PLATFORMS, DeviceToken
from .membership import (
    DEFAULT_NOTIFICATION_PREFERENCES,
    MEMBERSHIP_STATUS_ACTIVE,
    MEMBERSHIP_STATUS_INVITED,
    MEMBERSHIP_STATUS_REMOVED,
    MEMBERSHIP_STATUS_SUSPENDED,
    PREFERENCE_JOURNALS,
    PREFERENCE_MESSAGES,
    PREFERENCE_PRAYERS,
    PREFERENCE_SYSTEM,
    ROLE_ADMIN,
    ROLE_MEMBER,
    ROLE_PASTOR,
    ROLE_SMALL_GROUP_LEADER,
    ROLE_ZONE_LEADER,
    Membership,
    UserProfile,
)
from .message import (
    CONTENT_TYPE_IMAGE,
    CONTENT_TYPE_PRAYER_CARD,
    CONTENT_TYPE_SYSTEM,
    CONTENT_TYPE_TEXT,
    Conversation,
    Message,
)
from .notification import (
    PRIORITY_HIGH,
    PRIORITY_NORMAL,
    SOUND_DEFAULT,
    SOUND_DEFAULT_CRITICAL,
    NotificationContent,
    NotificationOptions,
    NotificationPayload,
    NotificationRequest,
    NotificationType,
    Recipient,
    RecipientSelector,
)
from .pastoral_journal import (
    JOURNAL_STATUS_ARCHIVED,
    JOURNAL_STATUS_DRAFT,
    JOURNAL_STATUS_PASTOR_CONFIRMED,
    JOURNAL_STATUS_SUBMITTED,
    JOURNAL_STATUS_ZONE_REVIEWED,
    PastoralJournal,
    SmallGroup,
)
from .prayer_card import (
    PRAYER_SCOPE_CHURCH_WIDE,
    PRAYER_SCOPE_INDIVIDUAL,
    PRAYER_SCOPE_SMALL_GROUP,
    PrayerCard,
)
from .push import (
    TICKET_STATUS_ERROR,
    TICKET_STATUS_OK,
    DispatchResult,
    PushMessage,
    PushTicket,
    PushTicketDetails,
    TokenInvalidity,
)
from .push_notification_log import PushNotificationLog

__all__ = [
    "CONTENT_TYPE_IMAGE",
    "CONTENT_TYPE_PRAYER_CARD",
    "CONTENT_TYPE_SYSTEM",
    "CONTENT_TYPE_TEXT",
    "Conversation",
    "DEFAULT_NOTIFICATION_PREFERENCES",
    "DeviceToken",
    "DispatchResult",
    "JOURNAL_STATUS_ARCHIVED",
    "JOURNAL_STATUS_DRAFT",
    "JOURNAL_STATUS_PASTOR_CONFIRMED",
    "JOURNAL_STATUS_SUBMITTED",
    "JOURNAL_STATUS_ZONE_REVIEWED",
    "MEMBERSHIP_STATUS_ACTIVE",
    "MEMBERSHIP_STATUS_INVITED",
    "MEMBERSHIP_STATUS_REMOVED",
    "MEMBERSHIP_STATUS_SUSPENDED",
    "Membership",
    "Message",
    "NotificationContent",
    "NotificationOptions",
    "NotificationPayload",
    "NotificationRequest",
    "NotificationType",
    "PLATFORMS",
    "PLATFORM_ANDROID",
    "PLATFORM_IOS",
    "PREFERENCE_JOURNALS",
    "PREFERENCE_MESSAGES",
    "PREFERENCE_PRAYERS",
    "PREFERENCE_SYSTEM",
    "PRAYER_SCOPE_CHURCH_WIDE",
    "PRAYER_SCOPE_INDIVIDUAL",
    "PRAYER_SCOPE_SMALL_GROUP",
    "PRIORITY_HIGH",
    "PRIORITY_NORMAL",
    "PastoralJournal",
    "PrayerCard",
    "PushMessage",
    "PushNotificationLog",
    "PushTicket",
    "PushTicketDetails",
    "ROLE_ADMIN",
    "ROLE_MEMBER",
    "ROLE_PASTOR",
    "ROLE_SMALL_GROUP_LEADER",
    "ROLE_ZONE_LEADER",
    "Recipient",
    "RecipientSelector",
    "SOUND_DEFAULT",
    "SOUND_DEFAULT_CRITICAL",
    "SmallGroup",
    "TICKET_STATUS_ERROR",
    "TICKET_STATUS_OK",
    "TokenInvalidity",
    "UserProfile",
]
