"""Exceptions raised by the fan-out domain and its infrastructure adapters."""

from __future__ import annotations


class FanoutError(Exception):
    """Base class for every error raised by the service."""


class NotFoundError(FanoutError):
    """Raised when the entity that triggered an event cannot be loaded."""


class InvalidNotificationRequest(FanoutError, ValueError):
    """Raised when a dispatch request fails boundary validation."""


class RateLimitExceeded(FanoutError):
    """Raised when a tenant exhausted its dispatch budget for the window."""

    def __init__(self, tenant_id: str, retry_after_seconds: int) -> None:
        self.tenant_id = tenant_id
        self.retry_after_seconds = retry_after_seconds
        super().__init__(
            f"Rate limit exceeded. Retry after {retry_after_seconds} seconds."
        )


class PushGatewayError(FanoutError):
    """Base class for failures talking to the upstream push gateway."""


class PushGatewayConfigurationError(PushGatewayError):
    """Raised when the gateway client is missing required configuration."""


class PushGatewayAuthError(PushGatewayError):
    """Raised when the gateway rejects our credentials.

    No batch can succeed in this situation, so the dispatch propagates it
    instead of counting messages as failed.
    """


class PushGatewayResponseError(PushGatewayError):
    """Raised when a gateway request fails or returns an unusable body."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


__all__ = [
    "FanoutError",
    "NotFoundError",
    "InvalidNotificationRequest",
    "RateLimitExceeded",
    "PushGatewayError",
    "PushGatewayConfigurationError",
    "PushGatewayAuthError",
    "PushGatewayResponseError",
]
