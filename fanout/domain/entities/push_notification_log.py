"""Domain entity representing an audit entry for a dispatch attempt."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass
class PushNotificationLog:
    """Summary of one dispatch call, written once and never read back."""

    id: int | None
    tenant_id: str
    notification_type: str
    recipient_count: int
    sent_count: int
    failed_count: int
    error_summary: dict[str, Any] | None = None
    created_at: datetime | None = None


__all__ = ["PushNotificationLog"]
