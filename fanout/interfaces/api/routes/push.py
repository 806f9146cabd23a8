"""Routes for dispatching push notifications directly."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from fanout.application.use_cases.notifications import PushNotificationService
from fanout.domain.exceptions import PushGatewayError, RateLimitExceeded
from fanout.infrastructure.database import get_db
from fanout.infrastructure.security import Principal
from fanout.interfaces.api.dependencies import get_push_service, require_principal
from fanout.interfaces.api.schemas import (
    DispatchResponse,
    NotificationRequestIn,
    RateLimitedResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/push", tags=["push"])

HTTP_207_MULTI_STATUS = 207


@router.post(
    "/send",
    response_model=DispatchResponse,
    responses={
        HTTP_207_MULTI_STATUS: {"model": DispatchResponse},
        status.HTTP_429_TOO_MANY_REQUESTS: {"model": RateLimitedResponse},
    },
)
def send_push(
    payload: NotificationRequestIn,
    response: Response,
    _: Principal = Depends(require_principal),
    db: Session = Depends(get_db),
    service: PushNotificationService = Depends(get_push_service),
):
    """Fan ``payload`` out to the eligible devices of its recipients.

    Responds 207 when some deliveries failed and 429 when the tenant is over
    its dispatch budget.
    """

    try:
        outcome = service.dispatch(payload.to_domain())
    except RateLimitExceeded as exc:
        return JSONResponse(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            content={"detail": str(exc), "retry_after": exc.retry_after_seconds},
            headers={"Retry-After": str(exc.retry_after_seconds)},
        )
    except PushGatewayError as exc:
        logger.error("Push dispatch for tenant %s failed: %s", payload.tenant_id, exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)
        ) from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error("Database error during push dispatch: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Database error during push dispatch",
        ) from exc

    if outcome.is_partial:
        response.status_code = HTTP_207_MULTI_STATUS
    return DispatchResponse(
        success=outcome.success,
        sent=outcome.sent,
        failed=outcome.failed,
        errors=outcome.errors,
    )


__all__ = ["router"]
