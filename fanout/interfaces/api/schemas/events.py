"""Schemas for the domain event trigger endpoints."""

from pydantic import BaseModel, Field


class MessageSentEvent(BaseModel):
    message_id: str = Field(min_length=1)


class PrayerAnsweredEvent(BaseModel):
    prayer_card_id: str = Field(min_length=1)


class PastoralJournalChangedEvent(BaseModel):
    journal_id: str = Field(min_length=1)
    old_status: str = Field(min_length=1)
    new_status: str = Field(min_length=1)


class EventHandlingResponse(BaseModel):
    """Representation of an event handling result returned by the API."""

    success: bool
    notified: int
    errors: list[str]


__all__ = [
    "EventHandlingResponse",
    "MessageSentEvent",
    "PastoralJournalChangedEvent",
    "PrayerAnsweredEvent",
]
