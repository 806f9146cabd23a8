"""Persistence helpers for device push tokens."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from datetime import datetime, timedelta

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from fanout.domain.entities import DeviceToken
from fanout.infrastructure.models import DeviceTokenModel
from fanout.utils import ensure_utc, ensure_utc_naive, now_utc

logger = logging.getLogger(__name__)

DEFAULT_FRESHNESS_DAYS = 90


class DeviceTokenRepository:
    """Look up and revoke :class:`DeviceToken` rows.

    Every read is scoped to a single tenant: a physical device registered in
    two tenants owns two rows, and a request for one tenant never sees the
    other's row.
    """

    def __init__(
        self,
        session: Session,
        *,
        freshness_days: int = DEFAULT_FRESHNESS_DAYS,
        clock: Callable[[], datetime] = now_utc,
    ) -> None:
        self.session = session
        self.freshness = timedelta(days=freshness_days)
        self._clock = clock

    def get_eligible_tokens(
        self, tenant_id: str, user_ids: Iterable[str]
    ) -> Sequence[DeviceToken]:
        """Return unrevoked, recently used tokens of ``user_ids`` in ``tenant_id``."""

        ids = sorted({user_id for user_id in user_ids if user_id})
        if not ids:
            return []

        cutoff = ensure_utc_naive(self._clock() - self.freshness)
        query = (
            self.session.query(DeviceTokenModel)
            .filter(DeviceTokenModel.tenant_id == tenant_id)
            .filter(DeviceTokenModel.user_id.in_(ids))
            .filter(DeviceTokenModel.revoked_at.is_(None))
            .filter(DeviceTokenModel.last_used_at >= cutoff)
            .order_by(DeviceTokenModel.user_id, DeviceTokenModel.id)
        )
        return [self._to_entity(model) for model in query.all()]

    def revoke(self, token: str) -> int:
        """Stamp ``revoked_at`` on every live row holding ``token``.

        Rows that are already revoked keep their original timestamp, so
        revoking twice leaves the table exactly as revoking once. Returns the
        number of rows that changed.
        """

        revoked_at = ensure_utc_naive(self._clock())
        try:
            updated = (
                self.session.query(DeviceTokenModel)
                .filter(DeviceTokenModel.token == token)
                .filter(DeviceTokenModel.revoked_at.is_(None))
                .update(
                    {DeviceTokenModel.revoked_at: revoked_at}, synchronize_session=False
                )
            )
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise
        if updated:
            logger.info("Revoked %s device token row(s) for token %s", updated, _mask(token))
        return updated

    def get_by_token(self, tenant_id: str, token: str) -> DeviceToken | None:
        model = (
            self.session.query(DeviceTokenModel)
            .filter(DeviceTokenModel.tenant_id == tenant_id)
            .filter(DeviceTokenModel.token == token)
            .first()
        )
        return self._to_entity(model) if model else None

    @staticmethod
    def _to_entity(model: DeviceTokenModel) -> DeviceToken:
        return DeviceToken(
            id=model.id,
            tenant_id=model.tenant_id,
            user_id=model.user_id,
            token=model.token,
            platform=model.platform,
            last_used_at=ensure_utc(model.last_used_at),
            revoked_at=ensure_utc(model.revoked_at),
        )


def _mask(token: str) -> str:
    if len(token) <= 12:
        return "***"
    return f"{token[:8]}...{token[-4:]}"


__all__ = ["DEFAULT_FRESHNESS_DAYS", "DeviceTokenRepository"]
