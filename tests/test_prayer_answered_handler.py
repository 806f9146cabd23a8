"""Tests for the prayer-answered event handler."""

from __future__ import annotations

from fanout.application.use_cases.events import handle_prayer_answered


def _handle(session, push_service, card):
    return handle_prayer_answered(session, prayer_card_id=card.id, push_service=push_service)


def test_individual_prayer_reaches_only_the_author(session, seed, gateway, push_service):
    author = seed.member("Grace", locale="ko")
    other = seed.member("Other")
    seed.token(author, "ExponentPushToken[author]")
    seed.token(other, "ExponentPushToken[other]")
    card = seed.prayer_card(author, scope="individual")

    result = _handle(session, push_service, card)

    assert (result.success, result.notified) == (True, 1)
    [pushed] = gateway.messages
    assert pushed.to == "ExponentPushToken[author]"
    assert (pushed.title, pushed.body) == ("기도 응답 🎉", "Grace님의 기도가 응답되었습니다")
    assert pushed.data["prayer_card_id"] == card.id


def test_small_group_prayer_reaches_members_and_author(session, seed, gateway, push_service):
    author = seed.member("Author")
    member = seed.member("Member", small_group_id="group-1")
    outsider = seed.member("Outsider", small_group_id="group-2")
    for membership, token in ((author, "a"), (member, "m"), (outsider, "o")):
        seed.token(membership, f"ExponentPushToken[{token}]")
    card = seed.prayer_card(author, scope="small_group", small_group_id="group-1")

    result = _handle(session, push_service, card)

    assert result.notified == 2
    assert sorted(message.to for message in gateway.messages) == [
        "ExponentPushToken[a]",
        "ExponentPushToken[m]",
    ]


def test_church_wide_prayer_reaches_every_active_member(session, seed, gateway, push_service):
    author = seed.member("Author")
    seed.member("Member", locale="ko")
    seed.member("Suspended", status="suspended")
    card = seed.prayer_card(author, scope="church_wide")

    result = _handle(session, push_service, card)

    assert result.notified == 2


def test_unanswered_prayer_is_ignored(session, seed, gateway, push_service):
    author = seed.member("Author")
    seed.token(author, "ExponentPushToken[a]")
    card = seed.prayer_card(author, answered=False)

    result = _handle(session, push_service, card)

    assert (result.success, result.notified) == (True, 0)
    assert gateway.messages == []


def test_missing_prayer_card_fails(session, push_service):
    result = handle_prayer_answered(session, prayer_card_id="missing", push_service=push_service)

    assert (result.success, result.errors) == (False, ["Prayer card not found"])


def test_prayer_opt_out_is_respected(session, seed, gateway, push_service):
    author = seed.member(
        "Author",
        preferences={"messages": True, "prayers": False, "journals": True, "system": True},
    )
    seed.token(author, "ExponentPushToken[a]")
    card = seed.prayer_card(author)

    result = _handle(session, push_service, card)

    assert result.notified == 0
    assert gateway.messages == []
