"""HTTP client for the upstream push gateway (Expo push API)."""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from typing import Any, Protocol

import httpx

from fanout.config import GATEWAY_MAX_BATCH_SIZE, Settings
from fanout.domain.entities import (
    TICKET_STATUS_ERROR,
    TICKET_STATUS_OK,
    PushMessage,
    PushTicket,
    PushTicketDetails,
)
from fanout.domain.exceptions import (
    PushGatewayAuthError,
    PushGatewayConfigurationError,
    PushGatewayResponseError,
)

logger = logging.getLogger(__name__)


class PushGateway(Protocol):
    """Anything able to deliver one batch and return positional tickets."""

    def send(self, messages: Sequence[PushMessage]) -> list[PushTicket]: ...


def _extract_gateway_error_details(body: Any) -> str | None:
    """Return a human readable description for a gateway error payload."""

    if body in (None, ""):
        return None

    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError:
            return None

    if isinstance(body, str):
        body = body.strip()
        if not body:
            return None
        try:
            parsed = json.loads(body)
        except json.JSONDecodeError:
            return body[:500]
    else:
        parsed = body

    if isinstance(parsed, dict):
        errors = parsed.get("errors")
        if isinstance(errors, list):
            messages: list[str] = []
            for item in errors:
                if not isinstance(item, dict):
                    continue
                code = item.get("code")
                message = item.get("message")
                if code and message:
                    messages.append(f"{code}: {message}")
                elif message:
                    messages.append(str(message))
            if messages:
                return "; ".join(messages)
        try:
            return json.dumps(parsed)[:500]
        except (TypeError, ValueError):
            return None

    return None


def parse_ticket(raw: Any) -> PushTicket:
    """Build a :class:`PushTicket` from one entry of the gateway response."""

    if not isinstance(raw, dict):
        return PushTicket(status=TICKET_STATUS_ERROR, message="Malformed push ticket")

    status = raw.get("status")
    if status not in (TICKET_STATUS_OK, TICKET_STATUS_ERROR):
        status = TICKET_STATUS_ERROR

    details = None
    raw_details = raw.get("details")
    if isinstance(raw_details, dict):
        error = raw_details.get("error")
        details = PushTicketDetails(
            error=str(error) if error else None,
            device_not_registered=bool(
                raw_details.get("deviceNotRegistered")
                or raw_details.get("device_not_registered")
            ),
        )

    return PushTicket(status=status, message=str(raw.get("message") or ""), details=details)


class ExpoPushGateway:
    """Send batches of :class:`PushMessage` through the Expo push endpoint.

    The response is an ordered list of tickets whose positions match the
    request array one-to-one; callers rely on that to map tickets to tokens.
    """

    def __init__(
        self,
        url: str,
        *,
        access_token: str | None = None,
        project_id: str | None = None,
        timeout: float = 30.0,
        client: httpx.Client | None = None,
    ) -> None:
        if not url:
            raise PushGatewayConfigurationError("Push gateway URL is not configured")
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if access_token:
            headers["Authorization"] = f"Bearer {access_token}"
        if project_id:
            headers["Expo-Project-ID"] = project_id
        self.url = url
        self._client = client or httpx.Client(timeout=timeout)
        self._headers = headers

    @classmethod
    def from_settings(cls, settings: Settings) -> "ExpoPushGateway":
        return cls(
            settings.push_gateway_url,
            access_token=settings.push_access_token,
            project_id=settings.push_project_id,
            timeout=settings.push_timeout_seconds,
        )

    def send(self, messages: Sequence[PushMessage]) -> list[PushTicket]:
        if not messages:
            return []
        if len(messages) > GATEWAY_MAX_BATCH_SIZE:
            raise ValueError(
                f"A gateway batch holds at most {GATEWAY_MAX_BATCH_SIZE} messages, got {len(messages)}"
            )

        try:
            response = self._client.post(
                self.url,
                json=[message.to_payload() for message in messages],
                headers=self._headers,
            )
        except httpx.HTTPError as exc:
            raise PushGatewayResponseError(f"Push gateway request failed: {exc}") from exc

        if response.status_code in (401, 403):
            details = _extract_gateway_error_details(response.content)
            raise PushGatewayAuthError(
                f"Push gateway rejected credentials with status {response.status_code}"
                + (f": {details}" if details else "")
            )
        if response.status_code >= 400:
            details = _extract_gateway_error_details(response.content)
            logger.error(
                "Push gateway responded with status %s: %s", response.status_code, details
            )
            raise PushGatewayResponseError(
                f"Push gateway error: {response.status_code}"
                + (f" - {details}" if details else ""),
                status_code=response.status_code,
            )

        try:
            body = response.json()
        except ValueError as exc:
            raise PushGatewayResponseError("Push gateway returned invalid JSON") from exc

        data = body.get("data") if isinstance(body, dict) else None
        if not isinstance(data, list):
            raise PushGatewayResponseError("Push gateway response is missing ticket data")
        return [parse_ticket(item) for item in data]

    def close(self) -> None:
        self._client.close()


__all__ = ["ExpoPushGateway", "PushGateway", "parse_ticket"]
