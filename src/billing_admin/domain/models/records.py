"""Domain records received from the billing backend.

Records are immutable per fetch. ``ClientSnapshot``, ``PaymentSnapshot``
and ``InvoiceSnapshot`` are denormalized read-model copies embedded in other
records for display; they are replaced wholesale when the owning record is
re-fetched and are never the source of truth.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal


@dataclass(frozen=True)
class Address:
    """Postal address of a client."""

    street: str = ""
    city: str = ""
    state: str = ""
    zip_code: str = ""
    country: str = ""


@dataclass(frozen=True)
class CompanyInfo:
    """Company a client belongs to."""

    name: str
    tax_id: str | None = None
    registration_number: str | None = None


@dataclass(frozen=True)
class Client:
    """Billable client."""

    id: str
    name: str
    email: str
    status: str
    currency: str = "USD"
    phone: str | None = None
    company: CompanyInfo | None = None
    address: Address | None = None
    tax_id: str | None = None
    notes: str | None = None
    credit_limit: Decimal | None = None
    payment_terms: int | None = None
    tags: frozenset[str] = field(default_factory=frozenset)
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class Money:
    """Amount in a currency."""

    amount: Decimal
    currency: str


@dataclass(frozen=True)
class Inventory:
    """Stock level of a physical product."""

    quantity: int
    low_stock_alert: int

    @property
    def is_low(self) -> bool:
        """Return True when stock is at or below the alert threshold."""
        return self.quantity <= self.low_stock_alert


@dataclass(frozen=True)
class ProductImage:
    """Image attached to a product."""

    url: str
    alt: str = ""


@dataclass(frozen=True)
class Product:
    """Product or service that can be invoiced."""

    id: str
    name: str
    price: Money
    type: str
    status: str
    sku: str | None = None
    description: str | None = None
    unit: str | None = None
    tax_rate: Decimal | None = None
    inventory: Inventory | None = None
    category: str | None = None
    tags: frozenset[str] = field(default_factory=frozenset)
    images: tuple[ProductImage, ...] = ()


@dataclass(frozen=True)
class InvoiceItem:
    """Invoice line, owned by its invoice."""

    description: str
    quantity: int
    price: Decimal
    id: str | None = None
    product_id: str | None = None
    tax: Decimal | None = None
    discount: Decimal | None = None

    @property
    def line_total(self) -> Decimal:
        """Return quantity times unit price."""
        return self.quantity * self.price


@dataclass(frozen=True)
class ClientSnapshot:
    """Client fields copied into invoices and payments."""

    id: str
    name: str
    email: str = ""
    address: str = ""


@dataclass(frozen=True)
class PaymentSnapshot:
    """Payment fields copied into an invoice."""

    id: str
    amount: Decimal
    date: date | None = None
    method: str | None = None


@dataclass(frozen=True)
class Invoice:
    """Invoice with its lines and the payments recorded against it.

    ``subtotal``/``tax``/``discount``/``total`` are informational values
    reported by the backend; aggregates always recompute the total from
    ``items``.
    """

    id: str
    invoice_number: str
    client: ClientSnapshot
    status: str
    items: tuple[InvoiceItem, ...] = ()
    payments: tuple[PaymentSnapshot, ...] = ()
    invoice_date: date | None = None
    due_date: date | None = None
    created_at: datetime | None = None
    notes: str | None = None
    terms: str | None = None
    subtotal: Decimal | None = None
    tax: Decimal | None = None
    discount: Decimal | None = None
    total: Decimal | None = None


@dataclass(frozen=True)
class InvoiceSnapshot:
    """Invoice fields copied into a payment."""

    id: str
    invoice_number: str
    client: ClientSnapshot
    total: Decimal


@dataclass(frozen=True)
class Payment:
    """Payment recorded against an invoice."""

    id: str
    invoice: InvoiceSnapshot
    amount: Decimal
    date: date
    method: str
    status: str | None = None
    reference: str | None = None
    notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class PaymentDraft:
    """Payment data submitted when recording a payment on an invoice."""

    amount: Decimal
    date: date
    method: str
    reference: str | None = None
    notes: str | None = None


__all__ = [
    "Address",
    "CompanyInfo",
    "Client",
    "Money",
    "Inventory",
    "ProductImage",
    "Product",
    "InvoiceItem",
    "ClientSnapshot",
    "PaymentSnapshot",
    "Invoice",
    "InvoiceSnapshot",
    "Payment",
    "PaymentDraft",
]
