"""Resolution of raw user identifiers into notifiable recipients."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from fanout.domain.entities import Membership, Recipient, RecipientSelector
from fanout.infrastructure.repositories import ConversationRepository, MembershipRepository


def select_recipients(
    active_memberships: Iterable[Membership],
    *,
    excluded_membership_ids: Iterable[str] = (),
    explicitly_excluded_ids: Iterable[str] = (),
    sender_membership_ids: Iterable[str] = (),
    preference_category: str | None = None,
) -> list[Recipient]:
    """Apply the exclusion rules to already loaded active memberships.

    Pure function: the order of the input is kept and duplicates are dropped.
    """

    blocked = set(excluded_membership_ids)
    blocked.update(explicitly_excluded_ids)
    blocked.update(sender_membership_ids)

    recipients: list[Recipient] = []
    seen: set[str] = set()
    for membership in active_memberships:
        if not membership.is_active:
            continue
        if membership.id in seen or membership.id in blocked:
            continue
        if membership.user is not None and not membership.user.allows(preference_category):
            continue
        seen.add(membership.id)
        recipients.append(
            Recipient(
                membership_id=membership.id,
                user_id=membership.user_id,
                locale=membership.locale,
            )
        )
    return recipients


class RecipientResolver:
    """Turn a :class:`RecipientSelector` into confirmed recipients.

    1. keep active memberships of the tenant only;
    2. drop members muted by an event chat message of the conversation;
    3. drop members resolved from ``exclude_user_ids``;
    4. drop the sender;
    5. drop users who switched the notification category off.

    The exclusion set is read on every call, never cached.
    """

    def __init__(
        self,
        memberships: MembershipRepository,
        conversations: ConversationRepository,
    ) -> None:
        self._memberships = memberships
        self._conversations = conversations

    def resolve(
        self,
        tenant_id: str,
        selector: RecipientSelector,
        *,
        preference_category: str | None = None,
    ) -> Sequence[Recipient]:
        active = self._memberships.list_active_by_user_ids(tenant_id, selector.user_ids)
        if not active:
            return []

        excluded: set[str] = set()
        if selector.conversation_id:
            excluded = self._conversations.list_excluded_membership_ids(
                selector.conversation_id
            )

        explicitly_excluded: set[str] = set()
        if selector.exclude_user_ids:
            explicitly_excluded = {
                membership.id
                for membership in self._memberships.list_active_by_user_ids(
                    tenant_id, selector.exclude_user_ids
                )
            }

        sender_ids: set[str] = set()
        if selector.sender_user_id:
            sender = self._memberships.get_by_user(tenant_id, selector.sender_user_id)
            if sender is not None:
                sender_ids.add(sender.id)

        return select_recipients(
            active,
            excluded_membership_ids=excluded,
            explicitly_excluded_ids=explicitly_excluded,
            sender_membership_ids=sender_ids,
            preference_category=preference_category,
        )


__all__ = ["RecipientResolver", "select_recipients"]
