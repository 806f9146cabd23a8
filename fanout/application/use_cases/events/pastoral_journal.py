"""Route pastoral journal status changes to the next reviewer."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from fanout.domain.entities import (
    JOURNAL_STATUS_DRAFT,
    JOURNAL_STATUS_PASTOR_CONFIRMED,
    JOURNAL_STATUS_SUBMITTED,
    JOURNAL_STATUS_ZONE_REVIEWED,
    ROLE_PASTOR,
    Membership,
    NotificationType,
    PastoralJournal,
    SmallGroup,
)
from fanout.infrastructure.repositories import MembershipRepository, PastoralJournalRepository

from ..notifications import PushNotificationService
from ..notifications.content import (
    DEFAULT_LOCALE,
    JOURNAL_CONFIRMED,
    JOURNAL_FORWARDED,
    JOURNAL_SUBMITTED,
    build_journal_content,
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

TRANSITIONS = {
    (JOURNAL_STATUS_DRAFT, JOURNAL_STATUS_SUBMITTED): JOURNAL_SUBMITTED,
    (JOURNAL_STATUS_SUBMITTED, JOURNAL_STATUS_ZONE_REVIEWED): JOURNAL_FORWARDED,
    (JOURNAL_STATUS_ZONE_REVIEWED, JOURNAL_STATUS_PASTOR_CONFIRMED): JOURNAL_CONFIRMED,
}

_NOTIFICATION_TYPES = {
    JOURNAL_SUBMITTED: NotificationType.PASTORAL_JOURNAL_SUBMITTED,
    JOURNAL_FORWARDED: NotificationType.PASTORAL_JOURNAL_FORWARDED,
    JOURNAL_CONFIRMED: NotificationType.PASTORAL_JOURNAL_CONFIRMED,
}


def _display_name(
    memberships: MembershipRepository, tenant_id: str, user_id: str | None
) -> str | None:
    if not user_id:
        return None
    membership = memberships.get_by_user(tenant_id, user_id)
    return membership.display_name if membership else None


def _zone_leader_id(
    journals: PastoralJournalRepository, small_group: SmallGroup
) -> str | None:
    if not small_group.zone_id:
        return None
    return journals.get_zone_leader_id(small_group.zone_id)


def handle_pastoral_journal_change(
    session: Session,
    *,
    journal_id: str,
    old_status: str,
    new_status: str,
    push_service: PushNotificationService,
    default_locale: str = DEFAULT_LOCALE,
    request_id: str | None = None,
) -> EventHandlingResult:
    """Notify the reviewer responsible for the journal's new status.

    ``draft -> submitted`` reaches the zone leader of the group's zone,
    ``submitted -> zone_reviewed`` every active pastor and
    ``zone_reviewed -> pastor_confirmed`` the author. Any other transition is
    a successful no-op.
    """

    with track_event(
        "pastoral_journal_changed",
        request_id=request_id,
        journal_id=journal_id,
        old_status=old_status,
        new_status=new_status,
    ):
        try:
            return _route(
                session,
                journal_id=journal_id,
                old_status=old_status,
                new_status=new_status,
                push_service=push_service,
                default_locale=default_locale,
            )
        except SQLAlchemyError as exc:
            return database_failure(session, exc)


def _route(
    session: Session,
    *,
    journal_id: str,
    old_status: str,
    new_status: str,
    push_service: PushNotificationService,
    default_locale: str,
) -> EventHandlingResult:
    journals = PastoralJournalRepository(session)
    journal = journals.get(journal_id)
    if journal is None:
        return EventHandlingResult.failure("Journal not found")

    kind = TRANSITIONS.get((old_status, new_status))
    if kind is None:
        return EventHandlingResult(success=True)

    memberships = MembershipRepository(session)
    small_group = (
        journals.get_small_group(journal.small_group_id)
        if journal.small_group_id
        else None
    )

    if kind == JOURNAL_CONFIRMED:
        recipients = memberships.list_active_by_user_ids(
            journal.tenant_id, [journal.author_id]
        )
        user_ids = [journal.author_id]
    elif small_group is None:
        return EventHandlingResult.failure("Small group not found")
    elif kind == JOURNAL_SUBMITTED:
        zone_leader_id = _zone_leader_id(journals, small_group)
        if not zone_leader_id:
            return EventHandlingResult.failure("No zone leader found")
        recipients = memberships.list_active_by_user_ids(
            journal.tenant_id, [zone_leader_id]
        )
        user_ids = [zone_leader_id]
    else:
        recipients = memberships.list_active_by_role(journal.tenant_id, ROLE_PASTOR)
        if not recipients:
            return EventHandlingResult.failure("No pastors found")
        user_ids = user_ids_of(recipients)

    leader_name = None
    zone_leader_name = None
    if kind == JOURNAL_SUBMITTED:
        leader_name = _display_name(memberships, journal.tenant_id, journal.author_id)
    elif kind == JOURNAL_FORWARDED:
        zone_leader_name = _display_name(
            memberships, journal.tenant_id, _zone_leader_id(journals, small_group)
        )

    return _dispatch(
        session,
        push_service,
        journal,
        kind,
        small_group,
        recipients=recipients,
        user_ids=user_ids,
        leader_name=leader_name,
        zone_leader_name=zone_leader_name,
        default_locale=default_locale,
    )


def _dispatch(
    session: Session,
    push_service: PushNotificationService,
    journal: PastoralJournal,
    kind: str,
    small_group: SmallGroup | None,
    *,
    recipients: Sequence[Membership],
    user_ids: list[str],
    leader_name: str | None,
    zone_leader_name: str | None,
    default_locale: str,
) -> EventHandlingResult:
    data = {"journal_id": journal.id, "tenant_id": journal.tenant_id}
    if small_group is not None and kind != JOURNAL_CONFIRMED:
        data["small_group_id"] = small_group.id

    # Recipients without an active membership get the default locale; the
    # resolver drops them before any token is read.
    locales = {member.user_id: member.locale for member in recipients}
    groups = group_by_locale(user_ids, locales.get, default_locale)

    errors: list[str] = []
    notified = 0
    for locale, group in groups.items():
        content = build_journal_content(
            kind,
            locale,
            group_name=small_group.name if small_group else "",
            leader_name=leader_name,
            zone_leader_name=zone_leader_name,
        )
        request = build_request(
            tenant_id=journal.tenant_id,
            notification_type=_NOTIFICATION_TYPES[kind],
            user_ids=group,
            content=content,
            data=data,
        )
        notified += dispatch_isolated(session, push_service, request, errors)

    return EventHandlingResult(success=True, notified=notified, errors=errors)


__all__ = ["TRANSITIONS", "handle_pastoral_journal_change"]
