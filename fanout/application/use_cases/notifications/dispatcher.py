"""Batched delivery of a notification to device tokens."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from typing import TypeVar

from fanout.config import GATEWAY_MAX_BATCH_SIZE
from fanout.domain.entities import (
    DeviceToken,
    DispatchResult,
    NotificationOptions,
    NotificationPayload,
    PushMessage,
    PushTicket,
    TokenInvalidity,
)
from fanout.domain.exceptions import PushGatewayAuthError, PushGatewayConfigurationError
from fanout.infrastructure.push_gateway import PushGateway
from fanout.infrastructure.repositories import DeviceTokenRepository

logger = logging.getLogger(__name__)

DEVICE_NOT_REGISTERED_CODE = "DeviceNotRegistered"
INVALID_TOKEN_PHRASES = (
    "is not a registered push notification recipient",
    "is not a valid expo push token",
    "not a valid push token",
    "invalid push token",
)

T = TypeVar("T")


def classify_ticket(ticket: PushTicket) -> TokenInvalidity:
    """Decide whether ``ticket`` proves the device token is permanently dead."""

    if ticket.ok:
        return TokenInvalidity.NONE

    details = ticket.details
    if details is not None:
        if details.device_not_registered or details.error == DEVICE_NOT_REGISTERED_CODE:
            return TokenInvalidity.DEVICE_NOT_REGISTERED

    text = ticket.message.lower()
    if any(phrase in text for phrase in INVALID_TOKEN_PHRASES):
        return TokenInvalidity.INVALID_TOKEN
    return TokenInvalidity.NONE


def build_messages(
    tokens: Sequence[str],
    payload: NotificationPayload,
    options: NotificationOptions,
) -> list[PushMessage]:
    return [
        PushMessage(
            to=token,
            title=payload.title,
            body=payload.body,
            data=dict(payload.data),
            sound=options.sound,
            priority=options.priority,
            badge=options.badge,
        )
        for token in tokens
    ]


def chunked(items: Sequence[T], size: int) -> Iterator[Sequence[T]]:
    if size <= 0:
        raise ValueError("size must be positive")
    for start in range(0, len(items), size):
        yield items[start : start + size]


def _unique_token_strings(tokens: Sequence[DeviceToken]) -> list[str]:
    seen: set[str] = set()
    unique: list[str] = []
    for token in tokens:
        if token.token in seen:
            continue
        seen.add(token.token)
        unique.append(token.token)
    return unique


class BatchDispatcher:
    """Deliver one payload to many tokens in gateway sized batches.

    Batches run one after the other. A batch that raises is counted as
    entirely failed and does not stop the following batches. Tokens the
    gateway reports as permanently invalid are revoked once every batch
    has been attempted.
    """

    def __init__(
        self,
        gateway: PushGateway,
        token_repository: DeviceTokenRepository,
        *,
        batch_size: int = GATEWAY_MAX_BATCH_SIZE,
    ) -> None:
        if gateway is None:
            raise PushGatewayConfigurationError("Push gateway is not configured")
        self.gateway = gateway
        self.token_repository = token_repository
        self.batch_size = max(1, min(batch_size, GATEWAY_MAX_BATCH_SIZE))

    def send(
        self,
        tenant_id: str,
        tokens: Sequence[DeviceToken],
        payload: NotificationPayload,
        options: NotificationOptions,
    ) -> DispatchResult:
        result = DispatchResult()
        token_strings = _unique_token_strings(tokens)
        if not token_strings:
            return result

        messages = build_messages(token_strings, payload, options)
        for index, batch in enumerate(chunked(messages, self.batch_size)):
            result.merge(self._send_batch(tenant_id, index, batch))

        self._revoke(result.invalid_tokens)
        logger.info(
            "Dispatched push for tenant %s: sent=%s failed=%s revoked=%s",
            tenant_id,
            result.sent,
            result.failed,
            len(result.invalid_tokens),
        )
        return result

    def _send_batch(
        self, tenant_id: str, index: int, batch: Sequence[PushMessage]
    ) -> DispatchResult:
        result = DispatchResult()
        try:
            tickets = self.gateway.send(batch)
        except (PushGatewayAuthError, PushGatewayConfigurationError):
            raise
        except Exception as exc:
            logger.error(
                "Push batch %s for tenant %s failed: %s", index, tenant_id, exc
            )
            result.failed += len(batch)
            result.errors.append(f"Batch {index} failed: {exc}")
            return result

        for position, message in enumerate(batch):
            ticket = tickets[position] if position < len(tickets) else None
            if ticket is None:
                result.failed += 1
                result.errors.append("Missing push ticket")
                continue
            if ticket.ok:
                result.sent += 1
                continue
            result.failed += 1
            result.errors.append(ticket.error_text)
            if classify_ticket(ticket).is_permanent:
                result.invalid_tokens.append(message.to)
        return result

    def _revoke(self, tokens: Sequence[str]) -> None:
        for token in dict.fromkeys(tokens):
            try:
                self.token_repository.revoke(token)
            except Exception as exc:
                logger.error("Failed to revoke invalid device token: %s", exc)


__all__ = [
    "BatchDispatcher",
    "DEVICE_NOT_REGISTERED_CODE",
    "INVALID_TOKEN_PHRASES",
    "build_messages",
    "chunked",
    "classify_ticket",
]
