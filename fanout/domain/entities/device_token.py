"""Domain entity representing a registered device push token."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

PLATFORM_IOS = "ios"
PLATFORM_ANDROID = "android"
PLATFORMS = (PLATFORM_IOS, PLATFORM_ANDROID)


@dataclass
class DeviceToken:
    """Push token registered by a user's device inside one tenant."""

    id: str
    tenant_id: str
    user_id: str
    token: str
    platform: str
    last_used_at: datetime | None
    revoked_at: datetime | None = None

    @property
    def is_revoked(self) -> bool:
        return self.revoked_at is not None


__all__ = ["DeviceToken", "PLATFORMS", "PLATFORM_ANDROID", "PLATFORM_IOS"]
