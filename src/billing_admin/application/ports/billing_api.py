"""Ports for the remote billing backend.

Every method is a coroutine. Implementations raise ``RemoteCallError`` when
the call fails and ``InvalidRecordError`` when the response cannot be mapped
to a record. Write payloads are mappings keyed by record field names.
"""

from collections.abc import Mapping
from typing import Any, Protocol

from billing_admin.domain.models.records import (
    Client,
    Invoice,
    Payment,
    PaymentDraft,
    Product,
)


Fields = Mapping[str, Any]


class ClientsApiPort(Protocol):
    """Port exposing the client resource."""

    async def list_all(self) -> list[Client]:
        """Return all clients."""

    async def get(self, client_id: str) -> Client:
        """Return one client."""

    async def create(self, fields: Fields) -> Client:
        """Create a client and return it as stored."""

    async def update(self, client_id: str, fields: Fields) -> Client:
        """Replace a client's fields and return it as stored."""

    async def delete(self, client_id: str) -> None:
        """Delete a client."""

    async def list_invoices(self, client_id: str) -> list[Invoice]:
        """Return the invoices billed to a client."""

    async def list_payments(self, client_id: str) -> list[Payment]:
        """Return the payments made by a client."""

    async def search(self, query: str) -> list[Client]:
        """Return the clients matching a free-text query."""

    async def update_status(self, client_id: str, status: str) -> Client:
        """Change a client's status and return it as stored."""


class InvoicesApiPort(Protocol):
    """Port exposing the invoice resource."""

    async def list_all(self) -> list[Invoice]:
        """Return all invoices."""

    async def get(self, invoice_id: str) -> Invoice:
        """Return one invoice, payments included."""

    async def create(self, fields: Fields) -> Invoice:
        """Create an invoice and return it as stored."""

    async def update(self, invoice_id: str, fields: Fields) -> Invoice:
        """Replace an invoice's fields and return it as stored."""

    async def delete(self, invoice_id: str) -> None:
        """Delete an invoice."""

    async def update_status(self, invoice_id: str, status: str) -> Invoice:
        """Change an invoice's status and return it as stored."""

    async def download_pdf(self, invoice_id: str) -> bytes:
        """Return the rendered PDF document of an invoice."""

    async def record_payment(
        self,
        invoice_id: str,
        draft: PaymentDraft,
    ) -> Payment:
        """Record a payment against an invoice and return it."""


class PaymentsApiPort(Protocol):
    """Port exposing the payment resource."""

    async def list_all(self) -> list[Payment]:
        """Return all payments."""

    async def get(self, payment_id: str) -> Payment:
        """Return one payment."""

    async def create(self, fields: Fields) -> Payment:
        """Create a payment and return it as stored."""

    async def update(self, payment_id: str, fields: Fields) -> Payment:
        """Replace a payment's fields and return it as stored."""

    async def delete(self, payment_id: str) -> None:
        """Delete a payment."""

    async def list_by_invoice(self, invoice_id: str) -> list[Payment]:
        """Return the payments recorded against an invoice."""


class ProductsApiPort(Protocol):
    """Port exposing the product resource."""

    async def list_all(self) -> list[Product]:
        """Return all products."""

    async def get(self, product_id: str) -> Product:
        """Return one product."""

    async def create(self, fields: Fields) -> Product:
        """Create a product and return it as stored."""

    async def update(self, product_id: str, fields: Fields) -> Product:
        """Replace a product's fields and return it as stored."""

    async def delete(self, product_id: str) -> None:
        """Delete a product."""


__all__ = [
    "Fields",
    "ClientsApiPort",
    "InvoicesApiPort",
    "PaymentsApiPort",
    "ProductsApiPort",
]
