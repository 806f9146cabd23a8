"""Read-only access to tenant memberships and user profiles."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from sqlalchemy.orm import Query, Session, joinedload

from fanout.domain.entities import (
    DEFAULT_NOTIFICATION_PREFERENCES,
    MEMBERSHIP_STATUS_ACTIVE,
    Membership,
    UserProfile,
)
from fanout.infrastructure.models import MembershipModel, UserModel


class MembershipRepository:
    """Query :class:`Membership` entities.

    Memberships are owned by another subsystem; this repository never writes.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_active_by_user_ids(
        self, tenant_id: str, user_ids: Iterable[str]
    ) -> Sequence[Membership]:
        ids = sorted({user_id for user_id in user_ids if user_id})
        if not ids:
            return []
        query = self._active(tenant_id).filter(MembershipModel.user_id.in_(ids))
        return [self._to_entity(model) for model in query.all()]

    def list_active_by_small_group(
        self, tenant_id: str, small_group_id: str
    ) -> Sequence[Membership]:
        query = self._active(tenant_id).filter(
            MembershipModel.small_group_id == small_group_id
        )
        return [self._to_entity(model) for model in query.all()]

    def list_active_by_tenant(self, tenant_id: str) -> Sequence[Membership]:
        return [self._to_entity(model) for model in self._active(tenant_id).all()]

    def list_active_by_role(self, tenant_id: str, role: str) -> Sequence[Membership]:
        query = self._active(tenant_id).filter(MembershipModel.role == role)
        return [self._to_entity(model) for model in query.all()]

    def get_by_user(self, tenant_id: str, user_id: str) -> Membership | None:
        model = (
            self.session.query(MembershipModel)
            .options(joinedload(MembershipModel.user))
            .filter(MembershipModel.tenant_id == tenant_id)
            .filter(MembershipModel.user_id == user_id)
            .first()
        )
        return self._to_entity(model) if model else None

    def _active(self, tenant_id: str) -> Query:
        return (
            self.session.query(MembershipModel)
            .options(joinedload(MembershipModel.user))
            .filter(MembershipModel.tenant_id == tenant_id)
            .filter(MembershipModel.status == MEMBERSHIP_STATUS_ACTIVE)
            .order_by(MembershipModel.id)
        )

    @staticmethod
    def _to_profile(model: UserModel | None) -> UserProfile | None:
        if model is None:
            return None
        preferences = dict(DEFAULT_NOTIFICATION_PREFERENCES)
        preferences.update(model.notification_preferences or {})
        return UserProfile(
            id=model.id,
            display_name=model.display_name,
            locale=model.locale,
            notification_preferences=preferences,
        )

    @classmethod
    def _to_entity(cls, model: MembershipModel) -> Membership:
        return Membership(
            id=model.id,
            user_id=model.user_id,
            tenant_id=model.tenant_id,
            role=model.role,
            status=model.status,
            small_group_id=model.small_group_id,
            user=cls._to_profile(model.user),
        )


__all__ = ["MembershipRepository"]
