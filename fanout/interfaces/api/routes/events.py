"""Routes receiving domain events from the rest of the platform."""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from fanout.application.use_cases.events import (
    EventHandlingResult,
    handle_message_sent,
    handle_pastoral_journal_change,
    handle_prayer_answered,
)
from fanout.application.use_cases.notifications import PushNotificationService
from fanout.config import Settings
from fanout.infrastructure.database import get_db
from fanout.infrastructure.security import Principal
from fanout.interfaces.api.dependencies import (
    get_app_settings,
    get_push_service,
    require_principal,
)
from fanout.interfaces.api.schemas import (
    EventHandlingResponse,
    MessageSentEvent,
    PastoralJournalChangedEvent,
    PrayerAnsweredEvent,
)

router = APIRouter(prefix="/events", tags=["events"])


def _to_response(result: EventHandlingResult, response: Response) -> EventHandlingResponse:
    response.status_code = (
        status.HTTP_200_OK if result.success else status.HTTP_500_INTERNAL_SERVER_ERROR
    )
    return EventHandlingResponse(
        success=result.success, notified=result.notified, errors=result.errors
    )


@router.post("/message-sent", response_model=EventHandlingResponse)
def message_sent(
    event: MessageSentEvent,
    response: Response,
    _: Principal = Depends(require_principal),
    db: Session = Depends(get_db),
    push_service: PushNotificationService = Depends(get_push_service),
    settings: Settings = Depends(get_app_settings),
) -> EventHandlingResponse:
    """Notify the participants of a freshly sent chat message."""

    result = handle_message_sent(
        db,
        message_id=event.message_id,
        push_service=push_service,
        default_locale=settings.default_locale,
    )
    return _to_response(result, response)


@router.post("/prayer-answered", response_model=EventHandlingResponse)
def prayer_answered(
    event: PrayerAnsweredEvent,
    response: Response,
    _: Principal = Depends(require_principal),
    db: Session = Depends(get_db),
    push_service: PushNotificationService = Depends(get_push_service),
    settings: Settings = Depends(get_app_settings),
) -> EventHandlingResponse:
    result = handle_prayer_answered(
        db,
        prayer_card_id=event.prayer_card_id,
        push_service=push_service,
        default_locale=settings.default_locale,
    )
    return _to_response(result, response)


@router.post("/pastoral-journal-changed", response_model=EventHandlingResponse)
def pastoral_journal_changed(
    event: PastoralJournalChangedEvent,
    response: Response,
    _: Principal = Depends(require_principal),
    db: Session = Depends(get_db),
    push_service: PushNotificationService = Depends(get_push_service),
    settings: Settings = Depends(get_app_settings),
) -> EventHandlingResponse:
    result = handle_pastoral_journal_change(
        db,
        journal_id=event.journal_id,
        old_status=event.old_status,
        new_status=event.new_status,
        push_service=push_service,
        default_locale=settings.default_locale,
    )
    return _to_response(result, response)


__all__ = ["router"]
