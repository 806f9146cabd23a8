"""FastAPI dependency utilities."""

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from fanout.application.use_cases.notifications import PushNotificationService
from fanout.config import Settings
from fanout.infrastructure.database import get_db
from fanout.infrastructure.push_gateway import PushGateway
from fanout.infrastructure.rate_limiter import RateLimiter
from fanout.infrastructure.security import Principal, verify_bearer_credential

bearer_scheme = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_app_settings(request: Request) -> Settings:
    """Return the settings the running application was created with."""

    return request.app.state.settings


def get_rate_limiter(request: Request) -> RateLimiter:
    return request.app.state.rate_limiter


def get_push_gateway(request: Request) -> PushGateway:
    return request.app.state.push_gateway


def require_principal(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    settings: Settings = Depends(get_app_settings),
) -> Principal:
    """Authenticate the bearer credential before any domain logic runs."""

    if credentials is None or credentials.scheme.lower() != "bearer":
        raise _unauthorized("Unauthorized")
    try:
        return verify_bearer_credential(credentials.credentials, settings)
    except ValueError as exc:
        raise _unauthorized("Invalid authorization token") from exc


def get_push_service(
    db: Session = Depends(get_db),
    rate_limiter: RateLimiter = Depends(get_rate_limiter),
    gateway: PushGateway = Depends(get_push_gateway),
    settings: Settings = Depends(get_app_settings),
) -> PushNotificationService:
    """Return a :class:`PushNotificationService` bound to the request session."""

    return PushNotificationService.from_session(
        db, rate_limiter=rate_limiter, gateway=gateway, settings=settings
    )


__all__ = [
    "bearer_scheme",
    "get_app_settings",
    "get_push_gateway",
    "get_push_service",
    "get_rate_limiter",
    "require_principal",
]
