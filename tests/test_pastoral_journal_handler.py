"""Tests for the pastoral journal status change handler."""

from __future__ import annotations

from fanout.application.use_cases.events import handle_pastoral_journal_change


def _handle(session, push_service, journal, old_status, new_status):
    return handle_pastoral_journal_change(
        session,
        journal_id=journal.id,
        old_status=old_status,
        new_status=new_status,
        push_service=push_service,
    )


def test_submission_notifies_the_zone_leader(session, seed, gateway, push_service):
    zone_leader = seed.member("Zed", role="zone_leader", locale="ko")
    leader = seed.member("Lee", role="small_group_leader")
    seed.token(zone_leader, "ExponentPushToken[zone]")
    group = seed.small_group("Grace", zone=seed.zone(zone_leader), leader=leader)
    journal = seed.journal(leader, group, status="submitted")

    result = _handle(session, push_service, journal, "draft", "submitted")

    assert (result.success, result.notified) == (True, 1)
    [pushed] = gateway.messages
    assert pushed.to == "ExponentPushToken[zone]"
    assert pushed.title == "목양 일지 제출"
    assert pushed.body == "Grace Lee 목장이 목양 일지를 제출했습니다"
    assert pushed.data == {
        "journal_id": journal.id,
        "tenant_id": journal.tenant_id,
        "small_group_id": group.id,
    }


def test_forwarding_notifies_every_pastor(session, seed, gateway, push_service):
    zone_leader = seed.member("Zed", role="zone_leader")
    leader = seed.member("Lee", role="small_group_leader")
    first = seed.member("Pastor One", role="pastor")
    second = seed.member("Pastor Two", role="pastor")
    seed.token(first, "ExponentPushToken[p1]")
    seed.token(second, "ExponentPushToken[p2]")
    group = seed.small_group("Grace", zone=seed.zone(zone_leader), leader=leader)
    journal = seed.journal(leader, group)

    result = _handle(session, push_service, journal, "submitted", "zone_reviewed")

    assert result.notified == 2
    assert {message.body for message in gateway.messages} == {"Zed forwarded Grace's journal"}


def test_confirmation_notifies_the_author(session, seed, gateway, push_service):
    leader = seed.member("Lee", role="small_group_leader")
    seed.token(leader, "ExponentPushToken[lee]")
    journal = seed.journal(leader, seed.small_group("Grace"))

    result = _handle(session, push_service, journal, "zone_reviewed", "pastor_confirmed")

    assert result.notified == 1
    [pushed] = gateway.messages
    assert (pushed.title, pushed.body) == (
        "Pastoral Journal Confirmed ✝️",
        "Pastor has reviewed your journal",
    )


def test_other_transitions_are_a_no_op(session, seed, gateway, push_service):
    leader = seed.member("Lee")
    journal = seed.journal(leader, seed.small_group("Grace"))

    result = _handle(session, push_service, journal, "pastor_confirmed", "archived")

    assert (result.success, result.notified, result.errors) == (True, 0, [])
    assert gateway.messages == []


def test_missing_zone_leader_is_reported(session, seed, push_service):
    leader = seed.member("Lee")
    journal = seed.journal(leader, seed.small_group("Grace"))

    result = _handle(session, push_service, journal, "draft", "submitted")

    assert (result.success, result.errors) == (False, ["No zone leader found"])


def test_missing_pastors_and_groups_are_reported(session, seed, push_service):
    leader = seed.member("Lee")
    with_group = seed.journal(leader, seed.small_group("Grace"))
    without_group = seed.journal(leader, None)

    no_pastors = _handle(session, push_service, with_group, "submitted", "zone_reviewed")
    no_group = _handle(session, push_service, without_group, "draft", "submitted")

    assert no_pastors.errors == ["No pastors found"]
    assert no_group.errors == ["Small group not found"]


def test_missing_journal_is_reported(session, push_service):
    result = handle_pastoral_journal_change(
        session,
        journal_id="missing",
        old_status="draft",
        new_status="submitted",
        push_service=push_service,
    )

    assert (result.success, result.errors) == (False, ["Journal not found"])
