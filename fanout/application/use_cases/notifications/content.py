"""Localized title/body builders for every notification kind."""

from __future__ import annotations

import re
from collections import OrderedDict
from collections.abc import Iterable, Mapping
from typing import TypeVar

from fanout.domain.entities import (
    CONTENT_TYPE_IMAGE,
    CONTENT_TYPE_PRAYER_CARD,
    CONTENT_TYPE_SYSTEM,
    Message,
    NotificationContent,
)

DEFAULT_LOCALE = "en"
MAX_BODY_LENGTH = 100
ELLIPSIS = "..."

JOURNAL_SUBMITTED = "submitted"
JOURNAL_FORWARDED = "forwarded"
JOURNAL_CONFIRMED = "confirmed"

CATALOG: dict[str, dict[str, str]] = {
    "en": {
        "someone": "Someone",
        "a_leader": "A leader",
        "a_zone_leader": "A zone leader",
        "mention": "Mentioned by {sender_name}",
        "attachment": "[Attachment]",
        "prayer_card": "[Prayer Card]",
        "system": "[System]",
        "prayer_answered.title": "Prayer Answered 🎉",
        "prayer_answered.body": "{author_name}'s prayer has been answered",
        "journal.submitted.title": "Pastoral Journal Submitted",
        "journal.submitted.body": "{leader_name} submitted a journal for {group_name}",
        "journal.forwarded.title": "Journal Ready for Review",
        "journal.forwarded.body": "{zone_leader_name} forwarded {group_name}'s journal",
        "journal.confirmed.title": "Pastoral Journal Confirmed ✝️",
        "journal.confirmed.body": "Pastor has reviewed your journal",
    },
    "ko": {
        "someone": "누군가",
        "a_leader": "리더",
        "a_zone_leader": "지역 리더",
        "mention": "{sender_name}님이 멘션함",
        "attachment": "[첨부파일]",
        "prayer_card": "[기도 카드]",
        "system": "[시스템]",
        "prayer_answered.title": "기도 응답 🎉",
        "prayer_answered.body": "{author_name}님의 기도가 응답되었습니다",
        "journal.submitted.title": "목양 일지 제출",
        "journal.submitted.body": "{group_name} {leader_name} 목장이 목양 일지를 제출했습니다",
        "journal.forwarded.title": "목양 일지 검토 대기",
        "journal.forwarded.body": "{zone_leader_name} 지도자가 {group_name}의 일지를 전달했습니다",
        "journal.confirmed.title": "목양 일지 확정 ✝️",
        "journal.confirmed.body": "목사님이 목양 일지를 검토했습니다",
    },
}

SUPPORTED_LOCALES = tuple(CATALOG)

_PLACEHOLDER_PATTERN = re.compile(r"\{(\w+)\}")
_BODY_PLACEHOLDER_KEYS = {
    CONTENT_TYPE_IMAGE: "attachment",
    CONTENT_TYPE_PRAYER_CARD: "prayer_card",
    CONTENT_TYPE_SYSTEM: "system",
}

T = TypeVar("T")


def normalize_locale(locale: str | None, default: str = DEFAULT_LOCALE) -> str:
    """Map ``locale`` onto a supported catalog, falling back to ``default``.

    Region suffixes are ignored, so ``ko-KR`` resolves to ``ko``.
    """

    if locale:
        base = locale.strip().lower().replace("_", "-").split("-", 1)[0]
        if base in CATALOG:
            return base
    return default if default in CATALOG else DEFAULT_LOCALE


def translate(key: str, locale: str | None) -> str:
    catalog = CATALOG[normalize_locale(locale)]
    return catalog.get(key) or CATALOG[DEFAULT_LOCALE].get(key) or key


def interpolate(template: str, params: Mapping[str, str]) -> str:
    return _PLACEHOLDER_PATTERN.sub(lambda match: params.get(match.group(1), ""), template)


def truncate_body(text: str | None, limit: int = MAX_BODY_LENGTH) -> str:
    if not text:
        return ""
    if len(text) <= limit:
        return text
    return text[:limit] + ELLIPSIS


def _name_or(name: str | None, fallback_key: str, locale: str | None) -> str:
    name = (name or "").strip()
    return name or translate(fallback_key, locale)


def build_message_content(
    message: Message,
    sender_display_name: str | None,
    locale: str | None,
    *,
    is_mention: bool = False,
) -> NotificationContent:
    """Return the push title/body announcing ``message`` to one locale."""

    placeholder_key = _BODY_PLACEHOLDER_KEYS.get(message.content_type)
    if placeholder_key is not None:
        body = translate(placeholder_key, locale)
    else:
        body = truncate_body(message.content)

    sender_name = _name_or(sender_display_name, "someone", locale)
    if is_mention:
        title = interpolate(translate("mention", locale), {"sender_name": sender_name})
    else:
        title = sender_name
    return NotificationContent(title=title, body=body)


def build_prayer_answered_content(
    author_display_name: str | None, locale: str | None
) -> NotificationContent:
    author_name = _name_or(author_display_name, "someone", locale)
    return NotificationContent(
        title=translate("prayer_answered.title", locale),
        body=interpolate(
            translate("prayer_answered.body", locale), {"author_name": author_name}
        ),
    )


def build_journal_content(
    kind: str,
    locale: str | None,
    *,
    group_name: str = "",
    leader_name: str | None = None,
    zone_leader_name: str | None = None,
) -> NotificationContent:
    if kind not in (JOURNAL_SUBMITTED, JOURNAL_FORWARDED, JOURNAL_CONFIRMED):
        raise ValueError(f"Unknown journal notification kind: {kind}")
    params = {
        "group_name": group_name,
        "leader_name": _name_or(leader_name, "a_leader", locale),
        "zone_leader_name": _name_or(zone_leader_name, "a_zone_leader", locale),
    }
    return NotificationContent(
        title=translate(f"journal.{kind}.title", locale),
        body=interpolate(translate(f"journal.{kind}.body", locale), params),
    )


def group_by_locale(
    items: Iterable[T],
    locale_of,
    default_locale: str = DEFAULT_LOCALE,
) -> "OrderedDict[str, list[T]]":
    """Group ``items`` by their normalized locale, keeping first-seen order."""

    groups: OrderedDict[str, list[T]] = OrderedDict()
    for item in items:
        locale = normalize_locale(locale_of(item), default_locale)
        groups.setdefault(locale, []).append(item)
    return groups


__all__ = [
    "CATALOG",
    "DEFAULT_LOCALE",
    "JOURNAL_CONFIRMED",
    "JOURNAL_FORWARDED",
    "JOURNAL_SUBMITTED",
    "MAX_BODY_LENGTH",
    "SUPPORTED_LOCALES",
    "build_journal_content",
    "build_message_content",
    "build_prayer_answered_content",
    "group_by_locale",
    "interpolate",
    "normalize_locale",
    "translate",
    "truncate_body",
]
