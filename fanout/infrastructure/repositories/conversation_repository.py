"""Persistence helpers for messages, conversations and their participants."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session, joinedload

from fanout.domain.entities import Conversation, Membership, Message
from fanout.infrastructure.models import (
    ConversationModel,
    ConversationParticipantModel,
    EventChatExclusionModel,
    MembershipModel,
    MentionModel,
    MessageModel,
)
from fanout.utils import ensure_utc

from .membership_repository import MembershipRepository


class ConversationRepository:
    """Read the chat rows a message-sent event needs."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_message(self, message_id: str) -> Message | None:
        model = self.session.get(MessageModel, message_id)
        if model is None:
            return None
        return Message(
            id=model.id,
            tenant_id=model.tenant_id,
            conversation_id=model.conversation_id,
            sender_id=model.sender_id,
            content=model.content,
            content_type=model.content_type,
            is_event_chat=bool(model.is_event_chat),
            thread_id=model.thread_id,
            created_at=ensure_utc(model.created_at),
        )

    def get_conversation(self, conversation_id: str) -> Conversation | None:
        model = self.session.get(ConversationModel, conversation_id)
        if model is None:
            return None
        return Conversation(
            id=model.id, tenant_id=model.tenant_id, type=model.type, name=model.name
        )

    def list_participants(self, conversation_id: str) -> Sequence[Membership]:
        """Return the memberships of every participant, whatever their status."""

        query = (
            self.session.query(ConversationParticipantModel)
            .options(
                joinedload(ConversationParticipantModel.membership).joinedload(
                    MembershipModel.user
                )
            )
            .filter(ConversationParticipantModel.conversation_id == conversation_id)
            .order_by(ConversationParticipantModel.id)
        )
        return [
            MembershipRepository._to_entity(participant.membership)
            for participant in query.all()
            if participant.membership is not None
        ]

    def list_mentioned_membership_ids(self, message_id: str) -> set[str]:
        rows = (
            self.session.query(MentionModel.membership_id)
            .filter(MentionModel.message_id == message_id)
            .all()
        )
        return {membership_id for (membership_id,) in rows}

    def list_excluded_membership_ids(self, conversation_id: str) -> set[str]:
        """Return memberships muted by any event chat message of the conversation."""

        rows = (
            self.session.query(EventChatExclusionModel.excluded_membership_id)
            .join(MessageModel, MessageModel.id == EventChatExclusionModel.message_id)
            .filter(MessageModel.conversation_id == conversation_id)
            .all()
        )
        return {membership_id for (membership_id,) in rows}


__all__ = ["ConversationRepository"]
