"""Tests for the message-sent event handler."""

from __future__ import annotations

from conftest import TENANT

from fanout.application.use_cases.events import detect_mentions, handle_message_sent
from fanout.domain.entities import Membership
from fanout.infrastructure.repositories import PushNotificationLogRepository


def _handle(session, push_service, message):
    return handle_message_sent(session, message_id=message.id, push_service=push_service)


def test_single_participant_receives_the_message(session, seed, gateway, push_service):
    alice = seed.member("Alice")
    bob = seed.member("Bob")
    seed.token(bob, "ExponentPushToken[bob]")
    conversation = seed.conversation(alice, bob)
    message = seed.message(conversation, alice, "x" * 50)

    result = _handle(session, push_service, message)

    assert (result.success, result.notified, result.errors) == (True, 1, [])
    [pushed] = gateway.messages
    assert (pushed.to, pushed.title, pushed.body, pushed.priority) == (
        "ExponentPushToken[bob]",
        "Alice",
        "x" * 50,
        "normal",
    )
    assert pushed.data == {
        "conversation_id": conversation.id,
        "tenant_id": TENANT,
        "message_id": message.id,
    }


def test_lonely_author_notifies_nobody(session, seed, gateway, push_service):
    alice = seed.member("Alice")
    seed.token(alice, "ExponentPushToken[alice]")
    conversation = seed.conversation(alice)
    message = seed.message(conversation, alice)

    result = _handle(session, push_service, message)

    assert (result.success, result.notified) == (True, 0)
    assert gateway.messages == []


def test_mentioned_participant_gets_only_the_mention_push(session, seed, gateway, push_service):
    alice = seed.member("Alice")
    bob = seed.member("Bob Kim", locale="ko")
    carol = seed.member("Carol")
    seed.token(bob, "ExponentPushToken[bob]")
    seed.token(carol, "ExponentPushToken[carol]")
    conversation = seed.conversation(alice, bob, carol)
    message = seed.message(conversation, alice, "Thanks @bob kim for the help")

    result = _handle(session, push_service, message)

    assert result.notified == 2
    [to_bob] = gateway.messages_to("ExponentPushToken[bob]")
    [to_carol] = gateway.messages_to("ExponentPushToken[carol]")
    assert (to_bob.title, to_bob.priority, to_bob.sound) == ("Alice님이 멘션함", "high", "default")
    assert (to_carol.title, to_carol.priority) == ("Alice", "normal")
    types = [e.notification_type for e in PushNotificationLogRepository(session).list_for_tenant(TENANT)]
    assert sorted(types) == ["mention", "new_message"]


def test_stored_mentions_are_honoured(session, seed, gateway, push_service):
    alice = seed.member("Alice")
    bob = seed.member("Bob")
    seed.token(bob, "ExponentPushToken[bob]")
    conversation = seed.conversation(alice, bob)
    message = seed.message(conversation, alice, "see above")
    seed.mention(message, bob)

    _handle(session, push_service, message)

    [pushed] = gateway.messages_to("ExponentPushToken[bob]")
    assert pushed.title == "Mentioned by Alice"


def test_exclusion_wins_over_mention_in_event_chat(session, seed, gateway, push_service):
    alice = seed.member("Alice")
    bob = seed.member("Bob")
    carol = seed.member("Carol")
    seed.token(bob, "ExponentPushToken[bob]")
    seed.token(carol, "ExponentPushToken[carol]")
    conversation = seed.conversation(alice, bob, carol)
    message = seed.message(conversation, alice, "@Bob are you coming?", is_event_chat=True)
    seed.exclusion(message, bob)

    result = _handle(session, push_service, message)

    assert gateway.messages_to("ExponentPushToken[bob]") == []
    assert len(gateway.messages_to("ExponentPushToken[carol]")) == 1
    assert result.notified == 1


def test_recipients_are_grouped_by_locale(session, seed, gateway, push_service):
    alice = seed.member("Alice")
    members = [
        seed.member("En One", locale="en"),
        seed.member("Ko One", locale="ko"),
        seed.member("En Two", locale="en"),
    ]
    for index, member in enumerate(members):
        seed.token(member, f"ExponentPushToken[{index}]")
    conversation = seed.conversation(alice, *members)
    message = seed.message(conversation, alice, "photo", content_type="image")

    result = _handle(session, push_service, message)

    assert result.notified == 3
    assert len(gateway.batches) == 2
    bodies = sorted(message.body for message in gateway.messages)
    assert bodies == ["[Attachment]", "[Attachment]", "[첨부파일]"]


def test_inactive_participants_are_skipped(session, seed, gateway, push_service):
    alice = seed.member("Alice")
    gone = seed.member("Gone", status="removed")
    seed.token(gone, "ExponentPushToken[gone]")
    conversation = seed.conversation(alice, gone)
    message = seed.message(conversation, alice)

    result = _handle(session, push_service, message)

    assert result.notified == 0
    assert gateway.messages == []


def test_missing_message_is_reported(session, push_service):
    result = handle_message_sent(session, message_id="missing", push_service=push_service)

    assert (result.success, result.notified, result.errors) == (False, 0, ["Message not found"])


def test_group_failure_is_isolated(session, seed, gateway, push_service, monkeypatch):
    alice = seed.member("Alice")
    bob = seed.member("Bob", locale="en")
    dong = seed.member("Dong", locale="ko")
    seed.token(bob, "ExponentPushToken[bob]")
    seed.token(dong, "ExponentPushToken[dong]")
    conversation = seed.conversation(alice, bob, dong)
    message = seed.message(conversation, alice)

    from fanout.domain.exceptions import PushGatewayAuthError

    original = gateway.send

    def flaky(messages):
        if messages[0].to == "ExponentPushToken[bob]":
            raise PushGatewayAuthError("Push gateway rejected credentials with status 401")
        return original(messages)

    monkeypatch.setattr(gateway, "send", flaky)

    result = _handle(session, push_service, message)

    assert result.success is True
    assert result.notified == 1
    assert len(result.errors) == 1
    assert [m.to for m in gateway.messages] == ["ExponentPushToken[dong]"]


def _participant(membership_id: str, name: str | None) -> Membership:
    from fanout.domain.entities import UserProfile

    return Membership(
        id=membership_id,
        user_id=f"u-{membership_id}",
        tenant_id=TENANT,
        role="member",
        status="active",
        user=UserProfile(id=f"u-{membership_id}", display_name=name, locale="en"),
    )


def test_detect_mentions_prefers_longest_names():
    participants = [_participant("1", "Kim"), _participant("2", "Kim Lee"), _participant("3", None)]

    assert detect_mentions("hi @Kim Lee!", participants) == {"2"}
    assert detect_mentions("hi @kim and @KIM LEE", participants) == {"1", "2"}
    assert detect_mentions("email kim@example.com", participants) == set()
    assert detect_mentions(None, participants) == set()
    assert detect_mentions("@Kimberly", participants) == set()
