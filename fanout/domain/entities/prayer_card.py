"""Domain entity representing a prayer card."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

PRAYER_SCOPE_INDIVIDUAL = "individual"
PRAYER_SCOPE_SMALL_GROUP = "small_group"
PRAYER_SCOPE_CHURCH_WIDE = "church_wide"


@dataclass
class PrayerCard:
    """Prayer request shared with a scope of the congregation."""

    id: str
    tenant_id: str
    author_id: str
    scope: str
    title: str | None = None
    small_group_id: str | None = None
    answered_at: datetime | None = None

    @property
    def is_answered(self) -> bool:
        return self.answered_at is not None


__all__ = [
    "PRAYER_SCOPE_CHURCH_WIDE",
    "PRAYER_SCOPE_INDIVIDUAL",
    "PRAYER_SCOPE_SMALL_GROUP",
    "PrayerCard",
]
