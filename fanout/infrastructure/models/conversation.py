"""SQLAlchemy models for conversations, messages and related rows."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import relationship

from fanout.infrastructure.database import Base
from fanout.utils import now_utc_naive

from ._ids import generate_id


class ConversationModel(Base):
    __tablename__ = "conversations"

    id = Column(String(36), primary_key=True, default=generate_id)
    tenant_id = Column(String(36), nullable=False, index=True)
    type = Column(String(20), nullable=False, default="small_group")
    name = Column(String(120), nullable=True)


class ConversationParticipantModel(Base):
    __tablename__ = "conversation_participants"

    id = Column(String(36), primary_key=True, default=generate_id)
    conversation_id = Column(
        String(36), ForeignKey("conversations.id"), nullable=False, index=True
    )
    membership_id = Column(String(36), ForeignKey("memberships.id"), nullable=False)

    membership = relationship("MembershipModel", lazy="joined")


class MessageModel(Base):
    __tablename__ = "messages"

    id = Column(String(36), primary_key=True, default=generate_id)
    tenant_id = Column(String(36), nullable=False, index=True)
    conversation_id = Column(
        String(36), ForeignKey("conversations.id"), nullable=False, index=True
    )
    sender_id = Column(String(36), nullable=False)
    thread_id = Column(String(36), nullable=True)
    content = Column(Text, nullable=True)
    content_type = Column(String(20), nullable=False, default="text")
    is_event_chat = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(), nullable=False, default=now_utc_naive)


class MentionModel(Base):
    __tablename__ = "mentions"

    id = Column(String(36), primary_key=True, default=generate_id)
    message_id = Column(String(36), ForeignKey("messages.id"), nullable=False, index=True)
    membership_id = Column(String(36), ForeignKey("memberships.id"), nullable=False)


class EventChatExclusionModel(Base):
    """Participant muted from the notifications of an event chat message."""

    __tablename__ = "event_chat_exclusions"

    id = Column(String(36), primary_key=True, default=generate_id)
    message_id = Column(String(36), ForeignKey("messages.id"), nullable=False, index=True)
    excluded_membership_id = Column(
        String(36), ForeignKey("memberships.id"), nullable=False
    )


__all__ = [
    "ConversationModel",
    "ConversationParticipantModel",
    "EventChatExclusionModel",
    "MentionModel",
    "MessageModel",
]
