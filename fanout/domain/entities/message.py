"""Domain entities for chat messages and their conversations."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

CONTENT_TYPE_TEXT = "text"
CONTENT_TYPE_IMAGE = "image"
CONTENT_TYPE_PRAYER_CARD = "prayer_card"
CONTENT_TYPE_SYSTEM = "system"


@dataclass
class Message:
    """Chat message whose creation triggers notifications."""

    id: str
    tenant_id: str
    conversation_id: str
    sender_id: str
    content: str | None
    content_type: str = CONTENT_TYPE_TEXT
    is_event_chat: bool = False
    thread_id: str | None = None
    created_at: datetime | None = None


@dataclass
class Conversation:
    """Conversation a message belongs to."""

    id: str
    tenant_id: str
    type: str
    name: str | None = None


__all__ = [
    "CONTENT_TYPE_IMAGE",
    "CONTENT_TYPE_PRAYER_CARD",
    "CONTENT_TYPE_SYSTEM",
    "CONTENT_TYPE_TEXT",
    "Conversation",
    "Message",
]
