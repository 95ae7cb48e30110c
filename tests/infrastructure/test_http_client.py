"""Tests for the shared HTTP client factory."""

from unittest.mock import MagicMock

import httpx
import pytest

from billing_admin.infrastructure.http_client import (
    build_async_client,
    extract_error_message,
)
from billing_admin.infrastructure.settings import ApiSettings


def _token_store(token: str | None) -> MagicMock:
    store = MagicMock()
    store.read.return_value = token
    return store


@pytest.mark.asyncio
async def test_client_sends_bearer_token() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=[])

    settings = ApiSettings(base_url="http://billing.test/api", timeout=3.0)
    client = build_async_client(
        settings,
        token_store=_token_store("secret"),
        transport=httpx.MockTransport(handler),
    )
    async with client:
        await client.get("/clients")

    assert seen[0].headers["Authorization"] == "Bearer secret"
    assert seen[0].headers["Accept"] == "application/json"
    assert str(seen[0].url) == "http://billing.test/api/clients"
    assert client.timeout.read == 3.0


def test_client_without_token_omits_authorization() -> None:
    client = build_async_client(ApiSettings(), token_store=_token_store(None))

    assert "Authorization" not in client.headers


def _status_error(response: httpx.Response) -> httpx.HTTPStatusError:
    request = httpx.Request("GET", "http://billing.test/api/clients")
    response.request = request
    return httpx.HTTPStatusError("boom", request=request, response=response)


@pytest.mark.parametrize(
    ("response", "expected"),
    [
        (httpx.Response(400, json={"message": "Invalid email"}), "Invalid email"),
        (httpx.Response(400, json={"message": "  "}), "fallback"),
        (httpx.Response(400, json=["unexpected"]), "fallback"),
        (httpx.Response(502, text="Bad gateway"), "fallback"),
    ],
)
def test_extract_error_message(response: httpx.Response, expected: str) -> None:
    assert extract_error_message(_status_error(response), "fallback") == expected


def test_extract_error_message_for_transport_errors() -> None:
    exc = httpx.ConnectError("refused")

    assert extract_error_message(exc, "fallback") == "fallback"
