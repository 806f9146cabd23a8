"""Domain entities describing tenant memberships and their users."""

from __future__ import annotations

from dataclasses import dataclass, field

MEMBERSHIP_STATUS_INVITED = "invited"
MEMBERSHIP_STATUS_ACTIVE = "active"
MEMBERSHIP_STATUS_SUSPENDED = "suspended"
MEMBERSHIP_STATUS_REMOVED = "removed"

ROLE_MEMBER = "member"
ROLE_SMALL_GROUP_LEADER = "small_group_leader"
ROLE_ZONE_LEADER = "zone_leader"
ROLE_PASTOR = "pastor"
ROLE_ADMIN = "admin"

PREFERENCE_MESSAGES = "messages"
PREFERENCE_PRAYERS = "prayers"
PREFERENCE_JOURNALS = "journals"
PREFERENCE_SYSTEM = "system"

DEFAULT_NOTIFICATION_PREFERENCES = {
    PREFERENCE_MESSAGES: True,
    PREFERENCE_PRAYERS: True,
    PREFERENCE_JOURNALS: True,
    PREFERENCE_SYSTEM: True,
}


@dataclass
class UserProfile:
    """Subset of user attributes needed to address a notification."""

    id: str
    display_name: str | None
    locale: str | None
    notification_preferences: dict[str, bool] = field(
        default_factory=lambda: dict(DEFAULT_NOTIFICATION_PREFERENCES)
    )

    def allows(self, category: str | None) -> bool:
        """Return ``True`` unless the user switched ``category`` off."""

        if category is None:
            return True
        return bool(self.notification_preferences.get(category, True))


@dataclass
class Membership:
    """Binding of a user to a tenant with a role and status."""

    id: str
    user_id: str
    tenant_id: str
    role: str
    status: str
    small_group_id: str | None = None
    user: UserProfile | None = None

    @property
    def is_active(self) -> bool:
        return self.status == MEMBERSHIP_STATUS_ACTIVE

    @property
    def display_name(self) -> str | None:
        return self.user.display_name if self.user else None

    @property
    def locale(self) -> str | None:
        return self.user.locale if self.user else None


__all__ = [
    "DEFAULT_NOTIFICATION_PREFERENCES",
    "MEMBERSHIP_STATUS_ACTIVE",
    "MEMBERSHIP_STATUS_INVITED",
    "MEMBERSHIP_STATUS_REMOVED",
    "MEMBERSHIP_STATUS_SUSPENDED",
    "Membership",
    "PREFERENCE_JOURNALS",
    "PREFERENCE_MESSAGES",
    "PREFERENCE_PRAYERS",
    "PREFERENCE_SYSTEM",
    "ROLE_ADMIN",
    "ROLE_MEMBER",
    "ROLE_PASTOR",
    "ROLE_SMALL_GROUP_LEADER",
    "ROLE_ZONE_LEADER",
    "UserProfile",
]
