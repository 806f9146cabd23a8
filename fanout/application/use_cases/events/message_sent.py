"""Fan a newly sent chat message out to the other participants."""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from fanout.domain.entities import (
    PRIORITY_HIGH,
    SOUND_DEFAULT,
    Membership,
    Message,
    NotificationOptions,
    NotificationType,
)
from fanout.domain.exceptions import NotFoundError
from fanout.infrastructure.repositories import ConversationRepository, MembershipRepository

from ..notifications import PushNotificationService
from ..notifications.content import (
    DEFAULT_LOCALE,
    build_message_content,
    group_by_locale,
    normalize_locale,
)
from .common import (
    EventHandlingResult,
    build_request,
    database_failure,
    dispatch_isolated,
    track_event,
    user_ids_of,
)

MENTION_OPTIONS = NotificationOptions(priority=PRIORITY_HIGH, sound=SOUND_DEFAULT)


def detect_mentions(text: str | None, participants: Iterable[Membership]) -> set[str]:
    """Return the membership ids whose display name follows an ``@`` in ``text``.

    Matching ignores case. Longer names are tried first and a matched span is
    consumed, so ``@Kim Lee`` never also mentions a participant named ``Kim``.
    """

    if not text or "@" not in text:
        return set()

    named = [
        (membership.display_name.strip(), membership.id)
        for membership in participants
        if membership.display_name and membership.display_name.strip()
    ]
    named.sort(key=lambda item: len(item[0]), reverse=True)

    remaining = text
    mentioned: set[str] = set()
    for name, membership_id in named:
        pattern = re.compile(r"@" + re.escape(name) + r"(?!\w)", re.IGNORECASE)
        if pattern.search(remaining):
            mentioned.add(membership_id)
            remaining = pattern.sub(" ", remaining)
    return mentioned


def _message_data(message: Message) -> dict[str, str]:
    data = {
        "conversation_id": message.conversation_id,
        "tenant_id": message.tenant_id,
        "message_id": message.id,
    }
    if message.thread_id:
        data["thread_id"] = message.thread_id
    return data


def _sender_name(
    message: Message,
    participants: Sequence[Membership],
    memberships: MembershipRepository,
) -> str | None:
    for participant in participants:
        if participant.user_id == message.sender_id:
            return participant.display_name
    sender = memberships.get_by_user(message.tenant_id, message.sender_id)
    return sender.display_name if sender else None


def handle_message_sent(
    session: Session,
    *,
    message_id: str,
    push_service: PushNotificationService,
    default_locale: str = DEFAULT_LOCALE,
    request_id: str | None = None,
) -> EventHandlingResult:
    """Notify every eligible participant of ``message_id`` exactly once.

    Mentioned participants receive an individual high priority push; the
    others are grouped by locale and receive one ordinary push per group.
    Members excluded from an event chat and the sender are never notified.
    """

    with track_event("message_sent", request_id=request_id, message_id=message_id):
        conversations = ConversationRepository(session)
        memberships = MembershipRepository(session)
        try:
            return _handle(
                session,
                conversations,
                memberships,
                message_id=message_id,
                push_service=push_service,
                default_locale=default_locale,
            )
        except NotFoundError as exc:
            return EventHandlingResult.failure(str(exc))
        except SQLAlchemyError as exc:
            return database_failure(session, exc)


def _handle(
    session: Session,
    conversations: ConversationRepository,
    memberships: MembershipRepository,
    *,
    message_id: str,
    push_service: PushNotificationService,
    default_locale: str,
) -> EventHandlingResult:
    message = conversations.get_message(message_id)
    if message is None:
        raise NotFoundError("Message not found")
    if conversations.get_conversation(message.conversation_id) is None:
        raise NotFoundError("Conversation not found")

    participants = conversations.list_participants(message.conversation_id)
    active = [participant for participant in participants if participant.is_active]
    if not active:
        return EventHandlingResult(success=True)

    excluded: set[str] = set()
    if message.is_event_chat:
        excluded = conversations.list_excluded_membership_ids(message.conversation_id)

    eligible = [
        participant
        for participant in active
        if participant.user_id != message.sender_id and participant.id not in excluded
    ]

    mentioned_ids = detect_mentions(message.content, active)
    mentioned_ids |= conversations.list_mentioned_membership_ids(message.id)

    mention_recipients = [p for p in eligible if p.id in mentioned_ids]
    ordinary_recipients = [p for p in eligible if p.id not in mentioned_ids]

    sender_name = _sender_name(message, participants, memberships)
    data = _message_data(message)
    errors: list[str] = []
    notified = 0

    for recipient in mention_recipients:
        content = build_message_content(
            message,
            sender_name,
            normalize_locale(recipient.locale, default_locale),
            is_mention=True,
        )
        request = build_request(
            tenant_id=message.tenant_id,
            notification_type=NotificationType.MENTION,
            user_ids=[recipient.user_id],
            content=content,
            data=data,
            conversation_id=message.conversation_id,
            sender_user_id=message.sender_id,
            options=MENTION_OPTIONS,
        )
        notified += dispatch_isolated(session, push_service, request, errors)

    mentioned_user_ids = user_ids_of(
        [p for p in active if p.id in mentioned_ids]
    )
    groups = group_by_locale(
        ordinary_recipients, lambda p: p.locale, default_locale
    )
    for locale, group in groups.items():
        content = build_message_content(message, sender_name, locale, is_mention=False)
        request = build_request(
            tenant_id=message.tenant_id,
            notification_type=NotificationType.NEW_MESSAGE,
            user_ids=user_ids_of(group),
            content=content,
            data=data,
            conversation_id=message.conversation_id,
            exclude_user_ids=mentioned_user_ids,
            sender_user_id=message.sender_id,
        )
        notified += dispatch_isolated(session, push_service, request, errors)

    return EventHandlingResult(success=True, notified=notified, errors=errors)


__all__ = ["MENTION_OPTIONS", "detect_mentions", "handle_message_sent"]
