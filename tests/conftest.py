"""Shared fixtures for the fan-out test suite."""

from __future__ import annotations

import os
import sys
from collections.abc import Callable, Sequence
from datetime import datetime, timedelta
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SERVICE_ROLE_KEY", "test-service-role-key")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from fanout.application.use_cases.notifications import PushNotificationService
from fanout.config import Settings
from fanout.domain.entities import PushMessage, PushTicket, PushTicketDetails
from fanout.domain.exceptions import PushGatewayResponseError
from fanout.infrastructure.database import Base
from fanout.infrastructure.models import (
    ConversationModel,
    ConversationParticipantModel,
    DeviceTokenModel,
    EventChatExclusionModel,
    MembershipModel,
    MentionModel,
    MessageModel,
    PastoralJournalModel,
    PrayerCardModel,
    SmallGroupModel,
    UserModel,
    ZoneModel,
)
from fanout.infrastructure.rate_limiter import RateLimiter
from fanout.utils import now_utc_naive

TENANT = "tenant-1"
OTHER_TENANT = "tenant-2"


def ok_ticket() -> PushTicket:
    return PushTicket(status="ok")


def error_ticket(
    message: str, *, error: str | None = None, device_not_registered: bool = False
) -> PushTicket:
    details = None
    if error is not None or device_not_registered:
        details = PushTicketDetails(error=error, device_not_registered=device_not_registered)
    return PushTicket(status="error", message=message, details=details)


class FakePushGateway:
    """In-memory gateway recording every batch it receives."""

    def __init__(self) -> None:
        self.batches: list[list[PushMessage]] = []
        self.tickets_by_token: dict[str, PushTicket] = {}
        self.failing_batches: set[int] = set()
        self.error: Exception | None = None
        self.closed = False

    @property
    def messages(self) -> list[PushMessage]:
        return [message for batch in self.batches for message in batch]

    def messages_to(self, token: str) -> list[PushMessage]:
        return [message for message in self.messages if message.to == token]

    def send(self, messages: Sequence[PushMessage]) -> list[PushTicket]:
        index = len(self.batches)
        self.batches.append(list(messages))
        if self.error is not None:
            raise self.error
        if index in self.failing_batches:
            raise PushGatewayResponseError("Push gateway error: 503", status_code=503)
        return [self.tickets_by_token.get(message.to, ok_ticket()) for message in messages]

    def close(self) -> None:
        self.closed = True


class Seeder:
    """Helpers inserting the rows the handlers read."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def _add(self, model):
        self.session.add(model)
        self.session.commit()
        return model

    def member(
        self,
        display_name: str | None,
        *,
        tenant_id: str = TENANT,
        locale: str = "en",
        status: str = "active",
        role: str = "member",
        small_group_id: str | None = None,
        preferences: dict[str, bool] | None = None,
        user: UserModel | None = None,
    ) -> MembershipModel:
        if user is None:
            user = UserModel(display_name=display_name, locale=locale)
            if preferences is not None:
                user.notification_preferences = preferences
            self._add(user)
        return self._add(
            MembershipModel(
                user_id=user.id,
                tenant_id=tenant_id,
                role=role,
                status=status,
                small_group_id=small_group_id,
            )
        )

    def token(
        self,
        membership: MembershipModel,
        token: str,
        *,
        last_used_at: datetime | None = None,
        revoked_at: datetime | None = None,
        platform: str = "ios",
    ) -> DeviceTokenModel:
        return self._add(
            DeviceTokenModel(
                tenant_id=membership.tenant_id,
                user_id=membership.user_id,
                token=token,
                platform=platform,
                last_used_at=last_used_at or now_utc_naive() - timedelta(days=1),
                revoked_at=revoked_at,
            )
        )

    def conversation(
        self, *members: MembershipModel, tenant_id: str = TENANT, type: str = "small_group"
    ) -> ConversationModel:
        conversation = self._add(ConversationModel(tenant_id=tenant_id, type=type))
        for member in members:
            self._add(
                ConversationParticipantModel(
                    conversation_id=conversation.id, membership_id=member.id
                )
            )
        return conversation

    def message(
        self,
        conversation: ConversationModel,
        sender: MembershipModel,
        content: str | None = "Hello everyone",
        *,
        content_type: str = "text",
        is_event_chat: bool = False,
        thread_id: str | None = None,
    ) -> MessageModel:
        return self._add(
            MessageModel(
                tenant_id=conversation.tenant_id,
                conversation_id=conversation.id,
                sender_id=sender.user_id,
                content=content,
                content_type=content_type,
                is_event_chat=is_event_chat,
                thread_id=thread_id,
            )
        )

    def exclusion(self, message: MessageModel, member: MembershipModel) -> EventChatExclusionModel:
        return self._add(
            EventChatExclusionModel(message_id=message.id, excluded_membership_id=member.id)
        )

    def mention(self, message: MessageModel, member: MembershipModel) -> MentionModel:
        return self._add(MentionModel(message_id=message.id, membership_id=member.id))

    def prayer_card(
        self,
        author: MembershipModel,
        *,
        scope: str = "individual",
        small_group_id: str | None = None,
        answered: bool = True,
    ) -> PrayerCardModel:
        return self._add(
            PrayerCardModel(
                tenant_id=author.tenant_id,
                author_id=author.user_id,
                title="Healing",
                scope=scope,
                small_group_id=small_group_id,
                answered_at=now_utc_naive() if answered else None,
            )
        )

    def zone(self, leader: MembershipModel | None, *, name: str = "North") -> ZoneModel:
        return self._add(
            ZoneModel(
                tenant_id=TENANT,
                name=name,
                zone_leader_id=leader.user_id if leader else None,
            )
        )

    def small_group(
        self,
        name: str = "Grace",
        *,
        zone: ZoneModel | None = None,
        leader: MembershipModel | None = None,
    ) -> SmallGroupModel:
        return self._add(
            SmallGroupModel(
                tenant_id=TENANT,
                name=name,
                zone_id=zone.id if zone else None,
                leader_id=leader.user_id if leader else None,
            )
        )

    def journal(
        self,
        author: MembershipModel,
        small_group: SmallGroupModel | None,
        *,
        status: str = "submitted",
    ) -> PastoralJournalModel:
        return self._add(
            PastoralJournalModel(
                tenant_id=author.tenant_id,
                small_group_id=small_group.id if small_group else None,
                author_id=author.user_id,
                status=status,
            )
        )


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        database_url="sqlite://",
        service_role_key="test-service-role-key",
        secret_key="test-secret-key",
    )


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def session_factory(engine) -> Callable[[], Session]:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def seed(session) -> Seeder:
    return Seeder(session)


@pytest.fixture()
def gateway() -> FakePushGateway:
    return FakePushGateway()


@pytest.fixture()
def rate_limiter() -> RateLimiter:
    return RateLimiter(max_calls=1000, window_seconds=60)


@pytest.fixture()
def push_service(session, rate_limiter, gateway, settings) -> PushNotificationService:
    return PushNotificationService.from_session(
        session, rate_limiter=rate_limiter, gateway=gateway, settings=settings
    )
