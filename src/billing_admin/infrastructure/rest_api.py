"""REST adapters implementing the billing API ports over httpx."""

from typing import Any

import httpx

from billing_admin.application.ports.billing_api import Fields
from billing_admin.domain.exceptions import InvalidRecordError, RemoteCallError
from billing_admin.domain.models.records import (
    Client,
    Invoice,
    Payment,
    PaymentDraft,
    Product,
)
from billing_admin.infrastructure.http_client import extract_error_message
from billing_admin.infrastructure.logging.logger import get_app_logger
from billing_admin.infrastructure.serialization import (
    client_from_wire,
    draft_to_wire,
    invoice_from_wire,
    many,
    one,
    payment_from_wire,
    product_from_wire,
    to_wire,
)


class _HttpResource:
    """Shared request handling for one REST collection."""

    def __init__(self, client: httpx.AsyncClient, logger=None) -> None:
        """Initialize the adapter.

        Args:
            client: Shared async HTTP client bound to the API base URL.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._client = client
        self._logger = logger or get_app_logger()

    async def _request(
        self,
        method: str,
        path: str,
        fallback: str,
        **kwargs: Any,
    ) -> httpx.Response:
        """Send a request and return the successful response.

        Raises:
            RemoteCallError: If the request fails or returns an error status.
        """
        try:
            response = await self._client.request(method, path, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            message = extract_error_message(exc, fallback)
            self._logger.warning(
                f"{method} {path} failed with "
                f"{exc.response.status_code}: {message}"
            )
            raise RemoteCallError(
                message, status_code=exc.response.status_code
            ) from exc
        except httpx.RequestError as exc:
            self._logger.error(f"{method} {path} failed: {exc}")
            raise RemoteCallError(fallback) from exc
        return response

    @staticmethod
    def _payload(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise InvalidRecordError(
                f"Malformed JSON from {response.request.url.path}"
            ) from exc


class HttpClientsApi(_HttpResource):
    """``ClientsApiPort`` over ``/clients``."""

    async def list_all(self) -> list[Client]:
        response = await self._request("GET", "/clients", "Failed to fetch clients")
        return many(client_from_wire, self._payload(response), "client")

    async def get(self, client_id: str) -> Client:
        response = await self._request(
            "GET", f"/clients/{client_id}", "Failed to fetch client"
        )
        return one(client_from_wire, self._payload(response), "client")

    async def create(self, fields: Fields) -> Client:
        response = await self._request(
            "POST", "/clients", "Failed to create client", json=to_wire(fields)
        )
        return one(client_from_wire, self._payload(response), "client")

    async def update(self, client_id: str, fields: Fields) -> Client:
        response = await self._request(
            "PUT",
            f"/clients/{client_id}",
            "Failed to update client",
            json=to_wire(fields),
        )
        return one(client_from_wire, self._payload(response), "client")

    async def delete(self, client_id: str) -> None:
        await self._request(
            "DELETE", f"/clients/{client_id}", "Failed to delete client"
        )

    async def list_invoices(self, client_id: str) -> list[Invoice]:
        response = await self._request(
            "GET",
            f"/clients/{client_id}/invoices",
            "Failed to fetch client invoices",
        )
        return many(invoice_from_wire, self._payload(response), "invoice")

    async def list_payments(self, client_id: str) -> list[Payment]:
        response = await self._request(
            "GET",
            f"/clients/{client_id}/payments",
            "Failed to fetch client payments",
        )
        return many(payment_from_wire, self._payload(response), "payment")

    async def search(self, query: str) -> list[Client]:
        response = await self._request(
            "GET",
            "/clients/search",
            "Failed to search clients",
            params={"q": query},
        )
        return many(client_from_wire, self._payload(response), "client")

    async def update_status(self, client_id: str, status: str) -> Client:
        response = await self._request(
            "PATCH",
            f"/clients/{client_id}/status",
            "Failed to update client status",
            json={"status": status},
        )
        return one(client_from_wire, self._payload(response), "client")


class HttpInvoicesApi(_HttpResource):
    """``InvoicesApiPort`` over ``/invoices``."""

    async def list_all(self) -> list[Invoice]:
        response = await self._request(
            "GET", "/invoices", "Failed to fetch invoices"
        )
        return many(invoice_from_wire, self._payload(response), "invoice")

    async def get(self, invoice_id: str) -> Invoice:
        response = await self._request(
            "GET", f"/invoices/{invoice_id}", "Failed to fetch invoice"
        )
        return one(invoice_from_wire, self._payload(response), "invoice")

    async def create(self, fields: Fields) -> Invoice:
        response = await self._request(
            "POST", "/invoices", "Failed to create invoice", json=to_wire(fields)
        )
        return one(invoice_from_wire, self._payload(response), "invoice")

    async def update(self, invoice_id: str, fields: Fields) -> Invoice:
        response = await self._request(
            "PUT",
            f"/invoices/{invoice_id}",
            "Failed to update invoice",
            json=to_wire(fields),
        )
        return one(invoice_from_wire, self._payload(response), "invoice")

    async def delete(self, invoice_id: str) -> None:
        await self._request(
            "DELETE", f"/invoices/{invoice_id}", "Failed to delete invoice"
        )

    async def update_status(self, invoice_id: str, status: str) -> Invoice:
        response = await self._request(
            "PATCH",
            f"/invoices/{invoice_id}/status",
            "Failed to update invoice status",
            json={"status": status},
        )
        return one(invoice_from_wire, self._payload(response), "invoice")

    async def download_pdf(self, invoice_id: str) -> bytes:
        response = await self._request(
            "GET",
            f"/invoices/{invoice_id}/pdf",
            "Failed to generate PDF",
            headers={"Accept": "application/pdf"},
        )
        return response.content

    async def record_payment(
        self,
        invoice_id: str,
        draft: PaymentDraft,
    ) -> Payment:
        response = await self._request(
            "POST",
            f"/invoices/{invoice_id}/payments",
            "Failed to record payment",
            json=draft_to_wire(draft),
        )
        return one(payment_from_wire, self._payload(response), "payment")


class HttpPaymentsApi(_HttpResource):
    """``PaymentsApiPort`` over ``/payments``."""

    async def list_all(self) -> list[Payment]:
        response = await self._request(
            "GET", "/payments", "Failed to fetch payments"
        )
        return many(payment_from_wire, self._payload(response), "payment")

    async def get(self, payment_id: str) -> Payment:
        response = await self._request(
            "GET", f"/payments/{payment_id}", "Failed to fetch payment"
        )
        return one(payment_from_wire, self._payload(response), "payment")

    async def create(self, fields: Fields) -> Payment:
        response = await self._request(
            "POST", "/payments", "Failed to create payment", json=to_wire(fields)
        )
        return one(payment_from_wire, self._payload(response), "payment")

    async def update(self, payment_id: str, fields: Fields) -> Payment:
        response = await self._request(
            "PUT",
            f"/payments/{payment_id}",
            "Failed to update payment",
            json=to_wire(fields),
        )
        return one(payment_from_wire, self._payload(response), "payment")

    async def delete(self, payment_id: str) -> None:
        await self._request(
            "DELETE", f"/payments/{payment_id}", "Failed to delete payment"
        )

    async def list_by_invoice(self, invoice_id: str) -> list[Payment]:
        response = await self._request(
            "GET",
            f"/payments/invoice/{invoice_id}",
            "Failed to fetch payments for invoice",
        )
        return many(payment_from_wire, self._payload(response), "payment")


class HttpProductsApi(_HttpResource):
    """``ProductsApiPort`` over ``/products``."""

    async def list_all(self) -> list[Product]:
        response = await self._request(
            "GET", "/products", "Failed to fetch products"
        )
        return many(product_from_wire, self._payload(response), "product")

    async def get(self, product_id: str) -> Product:
        response = await self._request(
            "GET", f"/products/{product_id}", "Failed to fetch product"
        )
        return one(product_from_wire, self._payload(response), "product")

    async def create(self, fields: Fields) -> Product:
        response = await self._request(
            "POST", "/products", "Failed to create product", json=to_wire(fields)
        )
        return one(product_from_wire, self._payload(response), "product")

    async def update(self, product_id: str, fields: Fields) -> Product:
        response = await self._request(
            "PUT",
            f"/products/{product_id}",
            "Failed to update product",
            json=to_wire(fields),
        )
        return one(product_from_wire, self._payload(response), "product")

    async def delete(self, product_id: str) -> None:
        await self._request(
            "DELETE", f"/products/{product_id}", "Failed to delete product"
        )


__all__ = [
    "HttpClientsApi",
    "HttpInvoicesApi",
    "HttpPaymentsApi",
    "HttpProductsApi",
]
