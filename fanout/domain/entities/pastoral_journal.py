"""Domain entities for pastoral journals and the groups that write them."""

from __future__ import annotations

from dataclasses import dataclass

JOURNAL_STATUS_DRAFT = "draft"
JOURNAL_STATUS_SUBMITTED = "submitted"
JOURNAL_STATUS_ZONE_REVIEWED = "zone_reviewed"
JOURNAL_STATUS_PASTOR_CONFIRMED = "pastor_confirmed"
JOURNAL_STATUS_ARCHIVED = "archived"


@dataclass
class PastoralJournal:
    """Journal written by a small group leader and reviewed upwards."""

    id: str
    tenant_id: str
    small_group_id: str | None
    author_id: str
    status: str


@dataclass
class SmallGroup:
    """Small group of members, optionally attached to a zone."""

    id: str
    tenant_id: str
    name: str
    leader_id: str | None = None
    zone_id: str | None = None


__all__ = [
    "JOURNAL_STATUS_ARCHIVED",
    "JOURNAL_STATUS_DRAFT",
    "JOURNAL_STATUS_PASTOR_CONFIRMED",
    "JOURNAL_STATUS_SUBMITTED",
    "JOURNAL_STATUS_ZONE_REVIEWED",
    "PastoralJournal",
    "SmallGroup",
]
