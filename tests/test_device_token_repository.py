"""Tests for device token lookups and revocation."""

from __future__ import annotations

from datetime import timedelta

from conftest import OTHER_TENANT

from fanout.infrastructure.repositories import DeviceTokenRepository
from fanout.utils import now_utc_naive


def test_eligible_tokens_skip_revoked_and_stale_rows(session, seed):
    alice = seed.member("Alice")
    seed.token(alice, "ExponentPushToken[fresh]")
    seed.token(alice, "ExponentPushToken[stale]", last_used_at=now_utc_naive() - timedelta(days=91))
    seed.token(alice, "ExponentPushToken[revoked]", revoked_at=now_utc_naive())

    tokens = DeviceTokenRepository(session).get_eligible_tokens(alice.tenant_id, [alice.user_id])

    assert [token.token for token in tokens] == ["ExponentPushToken[fresh]"]


def test_freshness_window_is_configurable(session, seed):
    alice = seed.member("Alice")
    seed.token(alice, "ExponentPushToken[week]", last_used_at=now_utc_naive() - timedelta(days=8))

    repository = DeviceTokenRepository(session, freshness_days=7)

    assert repository.get_eligible_tokens(alice.tenant_id, [alice.user_id]) == []


def test_tokens_are_scoped_to_the_requested_tenant(session, seed):
    alice = seed.member("Alice")
    alice_elsewhere = seed.member(None, tenant_id=OTHER_TENANT, user=alice.user)
    seed.token(alice_elsewhere, "ExponentPushToken[other]")

    repository = DeviceTokenRepository(session)

    assert repository.get_eligible_tokens(alice.tenant_id, [alice_elsewhere.user_id]) == []
    assert len(repository.get_eligible_tokens(OTHER_TENANT, [alice_elsewhere.user_id])) == 1


def test_revoke_is_idempotent(session, seed):
    alice = seed.member("Alice")
    seed.token(alice, "ExponentPushToken[dead]")
    repository = DeviceTokenRepository(session)

    assert repository.revoke("ExponentPushToken[dead]") == 1
    first = repository.get_by_token(alice.tenant_id, "ExponentPushToken[dead]")

    assert repository.revoke("ExponentPushToken[dead]") == 0
    second = repository.get_by_token(alice.tenant_id, "ExponentPushToken[dead]")

    assert first.revoked_at is not None
    assert second.revoked_at == first.revoked_at
    assert repository.get_eligible_tokens(alice.tenant_id, [alice.user_id]) == []


def test_empty_user_list_reads_nothing(session):
    assert DeviceTokenRepository(session).get_eligible_tokens("tenant", []) == []
