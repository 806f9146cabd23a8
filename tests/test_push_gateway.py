"""Unit tests for the Expo push gateway client."""

from __future__ import annotations

import json

import httpx
import pytest

from fanout.domain.entities import PushMessage
from fanout.domain.exceptions import (
    PushGatewayAuthError,
    PushGatewayConfigurationError,
    PushGatewayResponseError,
)
from fanout.infrastructure.push_gateway import ExpoPushGateway, parse_ticket

URL = "https://push.example.test/send"


def _messages(count: int) -> list[PushMessage]:
    return [
        PushMessage(to=f"ExponentPushToken[{index}]", title="Alice", body="Hello")
        for index in range(count)
    ]


def _gateway(handler, **kwargs) -> ExpoPushGateway:
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return ExpoPushGateway(URL, client=client, **kwargs)


def test_tickets_are_returned_in_request_order() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json={
                "data": [
                    {"status": "ok", "id": "t-0"},
                    {
                        "status": "error",
                        "message": "not registered",
                        "details": {"error": "DeviceNotRegistered", "deviceNotRegistered": True},
                    },
                ]
            },
        )

    tickets = _gateway(handler, access_token="secret", project_id="proj-1").send(
        _messages(2)
    )

    assert [ticket.status for ticket in tickets] == ["ok", "error"]
    assert tickets[1].details is not None
    assert tickets[1].details.device_not_registered is True
    assert tickets[1].details.error == "DeviceNotRegistered"

    request = seen[0]
    assert str(request.url) == URL
    assert request.headers["Authorization"] == "Bearer secret"
    assert request.headers["Expo-Project-ID"] == "proj-1"
    assert [item["to"] for item in json.loads(request.content)] == [
        "ExponentPushToken[0]",
        "ExponentPushToken[1]",
    ]


def test_optional_headers_are_omitted_without_credentials() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"data": [{"status": "ok"}]})

    _gateway(handler).send(_messages(1))

    assert "Authorization" not in seen[0].headers
    assert "Expo-Project-ID" not in seen[0].headers


@pytest.mark.parametrize("status_code", [401, 403])
def test_rejected_credentials_raise_auth_error(status_code: int) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            status_code, json={"errors": [{"code": "UNAUTHORIZED", "message": "bad token"}]}
        )

    with pytest.raises(PushGatewayAuthError) as exc_info:
        _gateway(handler).send(_messages(1))

    assert "UNAUTHORIZED: bad token" in str(exc_info.value)


def test_other_error_statuses_raise_response_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, text="upstream unavailable")

    with pytest.raises(PushGatewayResponseError) as exc_info:
        _gateway(handler).send(_messages(1))

    assert exc_info.value.status_code == 503
    assert "upstream unavailable" in str(exc_info.value)


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, text="not json"),
        httpx.Response(200, json={"errors": []}),
        httpx.Response(200, json=[{"status": "ok"}]),
    ],
)
def test_unusable_bodies_raise_response_error(response: httpx.Response) -> None:
    with pytest.raises(PushGatewayResponseError):
        _gateway(lambda request: response).send(_messages(1))


def test_transport_failures_raise_response_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(PushGatewayResponseError):
        _gateway(handler).send(_messages(1))


def test_oversized_batches_are_refused_before_any_request() -> None:
    calls: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json={"data": []})

    with pytest.raises(ValueError):
        _gateway(handler).send(_messages(101))

    assert calls == []


def test_empty_batch_sends_nothing() -> None:
    def handler(request: httpx.Request) -> httpx.Response:  # pragma: no cover
        raise AssertionError("no request expected")

    assert _gateway(handler).send([]) == []


def test_missing_url_is_a_configuration_error() -> None:
    with pytest.raises(PushGatewayConfigurationError):
        ExpoPushGateway("")


def test_parse_ticket_handles_malformed_entries() -> None:
    assert parse_ticket("garbage").status == "error"
    assert parse_ticket({"status": "weird"}).status == "error"

    ticket = parse_ticket({"status": "error", "details": {"device_not_registered": True}})
    assert ticket.details is not None
    assert ticket.details.device_not_registered is True
