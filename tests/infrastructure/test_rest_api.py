"""Tests for the httpx REST adapters."""

import json
from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

import httpx
import pytest

from billing_admin.domain.exceptions import InvalidRecordError, RemoteCallError
from billing_admin.domain.models import PaymentDraft
from billing_admin.infrastructure.rest_api import (
    HttpClientsApi,
    HttpInvoicesApi,
    HttpPaymentsApi,
    HttpProductsApi,
)

BASE_URL = "http://billing.test/api"

_CLIENT = {"_id": "c1", "name": "Acme", "email": "a@acme.test", "status": "ACTIVE"}
_PAYMENT = {
    "_id": "pay-1",
    "invoice": {
        "_id": "inv-1",
        "invoiceNumber": "INV-1",
        "client": {"_id": "c1", "name": "Acme"},
        "total": 100,
    },
    "amount": 40,
    "date": "2024-01-10",
    "method": "CASH",
}


def _build_client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        base_url=BASE_URL, transport=httpx.MockTransport(handler)
    )


@pytest.mark.asyncio
async def test_list_all_parses_documents() -> None:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json=[_CLIENT])

    async with _build_client(handler) as client:
        clients = await HttpClientsApi(client, logger=MagicMock()).list_all()

    assert [c.id for c in clients] == ["c1"]
    assert requests[0].method == "GET"
    assert requests[0].url.path == "/api/clients"


@pytest.mark.asyncio
async def test_error_status_surfaces_backend_message() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(409, json={"message": "Email already used"})

    logger = MagicMock()
    async with _build_client(handler) as client:
        api = HttpClientsApi(client, logger=logger)
        with pytest.raises(RemoteCallError) as excinfo:
            await api.update("c1", {"email": "dup@acme.test"})

    assert excinfo.value.message == "Email already used"
    assert excinfo.value.status_code == 409
    logger.warning.assert_called_once()


@pytest.mark.asyncio
async def test_error_status_without_message_uses_fallback() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, text="Internal Server Error")

    async with _build_client(handler) as client:
        api = HttpInvoicesApi(client, logger=MagicMock())
        with pytest.raises(RemoteCallError) as excinfo:
            await api.list_all()

    assert excinfo.value.message == "Failed to fetch invoices"
    assert excinfo.value.status_code == 500


@pytest.mark.asyncio
async def test_transport_error_uses_fallback() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    logger = MagicMock()
    async with _build_client(handler) as client:
        api = HttpProductsApi(client, logger=logger)
        with pytest.raises(RemoteCallError) as excinfo:
            await api.delete("p1")

    assert excinfo.value.message == "Failed to delete product"
    assert excinfo.value.status_code is None
    logger.error.assert_called_once()


@pytest.mark.asyncio
async def test_malformed_json_raises_invalid_record() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>")

    async with _build_client(handler) as client:
        api = HttpPaymentsApi(client, logger=MagicMock())
        with pytest.raises(InvalidRecordError, match="Malformed JSON"):
            await api.list_all()


@pytest.mark.asyncio
async def test_search_sends_query_parameter() -> None:
    seen: dict[str, str] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["q"] = request.url.params["q"]
        return httpx.Response(200, json=[_CLIENT])

    async with _build_client(handler) as client:
        await HttpClientsApi(client, logger=MagicMock()).search("acme corp")

    assert seen == {"path": "/api/clients/search", "q": "acme corp"}


@pytest.mark.asyncio
async def test_status_change_patches_status() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={**_CLIENT, "status": "BLOCKED"})

    async with _build_client(handler) as client:
        updated = await HttpClientsApi(client, logger=MagicMock()).update_status(
            "c1", "BLOCKED"
        )

    assert updated.status == "BLOCKED"
    assert seen[0].method == "PATCH"
    assert seen[0].url.path == "/api/clients/c1/status"
    assert json.loads(seen[0].content) == {"status": "BLOCKED"}


@pytest.mark.asyncio
async def test_download_pdf_returns_bytes() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.headers["Accept"] == "application/pdf"
        return httpx.Response(
            200,
            content=b"%PDF-1.7",
            headers={"Content-Type": "application/pdf"},
        )

    async with _build_client(handler) as client:
        content = await HttpInvoicesApi(client, logger=MagicMock()).download_pdf(
            "inv-1"
        )

    assert content == b"%PDF-1.7"


@pytest.mark.asyncio
async def test_record_payment_posts_draft() -> None:
    bodies: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/invoices/inv-1/payments"
        bodies.append(json.loads(request.content))
        return httpx.Response(201, json=_PAYMENT)

    draft = PaymentDraft(
        amount=Decimal("40"),
        date=date(2024, 1, 10),
        method="CASH",
        reference="R-1",
    )
    async with _build_client(handler) as client:
        payment = await HttpInvoicesApi(
            client, logger=MagicMock()
        ).record_payment("inv-1", draft)

    assert bodies == [
        {"amount": 40.0, "date": "2024-01-10", "method": "CASH", "reference": "R-1"}
    ]
    assert payment.invoice.id == "inv-1"
    assert payment.amount == Decimal("40")


@pytest.mark.asyncio
async def test_create_sends_camel_case_body() -> None:
    bodies: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        bodies.append(json.loads(request.content))
        return httpx.Response(201, json=_CLIENT)

    async with _build_client(handler) as client:
        await HttpClientsApi(client, logger=MagicMock()).create(
            {"name": "Acme", "payment_terms": 30}
        )

    assert bodies == [{"name": "Acme", "paymentTerms": 30}]


@pytest.mark.asyncio
async def test_payments_by_invoice_path() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/payments/invoice/inv-1"
        return httpx.Response(200, json=[_PAYMENT])

    async with _build_client(handler) as client:
        payments = await HttpPaymentsApi(
            client, logger=MagicMock()
        ).list_by_invoice("inv-1")

    assert [p.id for p in payments] == ["pay-1"]
