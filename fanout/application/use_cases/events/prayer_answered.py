"""Tell the right audience that a prayer request was answered."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from fanout.domain.entities import (
    PRAYER_SCOPE_CHURCH_WIDE,
    PRAYER_SCOPE_INDIVIDUAL,
    PRAYER_SCOPE_SMALL_GROUP,
    SOUND_DEFAULT,
    Membership,
    NotificationOptions,
    NotificationType,
    PrayerCard,
)
from fanout.infrastructure.repositories import MembershipRepository, PrayerCardRepository

from ..notifications import PushNotificationService
from ..notifications.content import (
    DEFAULT_LOCALE,
    build_prayer_answered_content,
    group_by_locale,
)
from .common import (
    EventHandlingResult,
    build_request,
    database_failure,
    dispatch_isolated,
    track_event,
    user_ids_of,
)


def prayer_audience(
    prayer_card: PrayerCard, memberships: MembershipRepository
) -> Sequence[Membership]:
    """Return the active memberships that should hear about ``prayer_card``.

    ``individual`` reaches the author only, ``small_group`` the group members
    plus the author, and ``church_wide`` every active member of the tenant.
    """

    tenant_id = prayer_card.tenant_id
    if prayer_card.scope == PRAYER_SCOPE_CHURCH_WIDE:
        return memberships.list_active_by_tenant(tenant_id)

    audience: list[Membership] = []
    if prayer_card.scope == PRAYER_SCOPE_SMALL_GROUP and prayer_card.small_group_id:
        audience.extend(
            memberships.list_active_by_small_group(tenant_id, prayer_card.small_group_id)
        )
    if prayer_card.scope in (PRAYER_SCOPE_INDIVIDUAL, PRAYER_SCOPE_SMALL_GROUP):
        if all(member.user_id != prayer_card.author_id for member in audience):
            audience.extend(
                memberships.list_active_by_user_ids(tenant_id, [prayer_card.author_id])
            )
    return audience


def handle_prayer_answered(
    session: Session,
    *,
    prayer_card_id: str,
    push_service: PushNotificationService,
    default_locale: str = DEFAULT_LOCALE,
    request_id: str | None = None,
) -> EventHandlingResult:
    with track_event(
        "prayer_answered", request_id=request_id, prayer_card_id=prayer_card_id
    ):
        try:
            return _handle(
                session,
                prayer_card_id=prayer_card_id,
                push_service=push_service,
                default_locale=default_locale,
            )
        except SQLAlchemyError as exc:
            return database_failure(session, exc)


def _handle(
    session: Session,
    *,
    prayer_card_id: str,
    push_service: PushNotificationService,
    default_locale: str,
) -> EventHandlingResult:
    prayer_card = PrayerCardRepository(session).get(prayer_card_id)
    if prayer_card is None:
        return EventHandlingResult.failure("Prayer card not found")
    if not prayer_card.is_answered:
        return EventHandlingResult(success=True)

    memberships = MembershipRepository(session)
    audience = prayer_audience(prayer_card, memberships)
    if not audience:
        return EventHandlingResult(success=True)

    author = memberships.get_by_user(prayer_card.tenant_id, prayer_card.author_id)
    author_name = author.display_name if author else None
    data = {
        "prayer_card_id": prayer_card.id,
        "tenant_id": prayer_card.tenant_id,
    }

    errors: list[str] = []
    notified = 0
    for locale, group in group_by_locale(
        audience, lambda member: member.locale, default_locale
    ).items():
        request = build_request(
            tenant_id=prayer_card.tenant_id,
            notification_type=NotificationType.PRAYER_ANSWERED,
            user_ids=user_ids_of(group),
            content=build_prayer_answered_content(author_name, locale),
            data=data,
            options=NotificationOptions(sound=SOUND_DEFAULT),
        )
        notified += dispatch_isolated(session, push_service, request, errors)

    return EventHandlingResult(success=True, notified=notified, errors=errors)


__all__ = ["handle_prayer_answered", "prayer_audience"]
