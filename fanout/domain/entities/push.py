"""Domain objects exchanged with the push gateway."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

TICKET_STATUS_OK = "ok"
TICKET_STATUS_ERROR = "error"


class TokenInvalidity(str, Enum):
    """Classification of a delivery error with respect to the device token."""

    NONE = "none"
    DEVICE_NOT_REGISTERED = "device_not_registered"
    INVALID_TOKEN = "invalid_token"

    @property
    def is_permanent(self) -> bool:
        return self is not TokenInvalidity.NONE


@dataclass(frozen=True)
class PushMessage:
    """Single message addressed to one device token."""

    to: str
    title: str
    body: str
    data: dict[str, Any] = field(default_factory=dict)
    sound: str | None = None
    priority: str = "normal"
    badge: int | None = None

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON body the gateway expects for this message."""

        return {
            "to": self.to,
            "title": self.title,
            "body": self.body,
            "data": dict(self.data),
            "sound": self.sound,
            "priority": self.priority,
            "badge": self.badge,
        }


@dataclass(frozen=True)
class PushTicketDetails:
    error: str | None = None
    device_not_registered: bool = False


@dataclass(frozen=True)
class PushTicket:
    """Delivery outcome reported by the gateway for one message."""

    status: str
    message: str = ""
    details: PushTicketDetails | None = None

    @property
    def ok(self) -> bool:
        return self.status == TICKET_STATUS_OK

    @property
    def error_text(self) -> str:
        if self.details is not None and self.details.error:
            return self.details.error
        return self.message or "Unknown push delivery error"


@dataclass
class DispatchResult:
    """Aggregate counters of a batch dispatch."""

    sent: int = 0
    failed: int = 0
    errors: list[str] = field(default_factory=list)
    invalid_tokens: list[str] = field(default_factory=list)

    def merge(self, other: "DispatchResult") -> None:
        self.sent += other.sent
        self.failed += other.failed
        self.errors.extend(other.errors)
        self.invalid_tokens.extend(other.invalid_tokens)


__all__ = [
    "DispatchResult",
    "PushMessage",
    "PushTicket",
    "PushTicketDetails",
    "TICKET_STATUS_ERROR",
    "TICKET_STATUS_OK",
    "TokenInvalidity",
]
