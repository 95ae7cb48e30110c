"""Filtering and sorting of record collections for display.

Filters are conjunctive: a record passes when it satisfies every active
predicate, and an unset predicate (``None`` or empty) imposes no
constraint. Sorting is single-field and stable in both directions, so
filtering then sorting yields the same sequence as sorting then filtering.
Sources are never mutated; results are new tuples.
"""

import unicodedata
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Literal, TypeVar

from billing_admin.domain.constants import SortDirection
from billing_admin.domain.models import Client, Invoice, Payment, Product
from billing_admin.domain.services.aggregation import (
    invoice_balance,
    invoice_paid,
    invoice_total,
)

T = TypeVar("T")

FieldKind = Literal["text", "number", "date"]
SortFields = Mapping[str, tuple[FieldKind, Callable[[Any], Any]]]


@dataclass(frozen=True)
class SortSpec:
    """Sort field and direction. ``field=None`` keeps input order."""

    field: str | None = None
    direction: SortDirection = "asc"


@dataclass(frozen=True)
class InvoiceFilters:
    status: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    client_id: str | None = None
    search: str | None = None


@dataclass(frozen=True)
class ClientFilters:
    status: str | None = None
    search: str | None = None
    tags: frozenset[str] = field(default_factory=frozenset)


@dataclass(frozen=True)
class PaymentFilters:
    start_date: date | None = None
    end_date: date | None = None
    method: str | None = None
    status: str | None = None
    search: str | None = None


@dataclass(frozen=True)
class ProductFilters:
    search: str | None = None
    type: str | None = None
    category: str | None = None
    status: str | None = None


def _as_date(value: date | datetime | None) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    return value


def within_date_range(
    value: date | datetime | None,
    start: date | None,
    end: date | None,
) -> bool:
    """Return True when value lies in ``[start, end]``.

    Both bounds are inclusive and compared on calendar dates. A missing
    bound is open on that side. A missing value fails any active bound.
    """
    if start is None and end is None:
        return True
    day = _as_date(value)
    if day is None:
        return False
    if start is not None and day < start:
        return False
    if end is not None and day > end:
        return False
    return True


def contains_text(values: Iterable[str | None], query: str | None) -> bool:
    """Return True when any value contains query, case-insensitively."""
    if not query:
        return True
    needle = query.casefold()
    return any(value and needle in value.casefold() for value in values)


def shares_tag(tags: Iterable[str] | None, wanted: frozenset[str]) -> bool:
    """Return True when no tags are requested or at least one matches."""
    if not wanted:
        return True
    return bool(wanted.intersection(tags or ()))


def _matches(value: Any, expected: Any) -> bool:
    return expected is None or value == expected


def _invoice_date(invoice: Invoice) -> date | datetime | None:
    return invoice.created_at or invoice.invoice_date


def filter_invoices(
    invoices: Iterable[Invoice],
    filters: InvoiceFilters,
) -> tuple[Invoice, ...]:
    """Return invoices matching every active invoice filter.

    The date range applies to the creation date.
    """
    return tuple(
        invoice
        for invoice in invoices
        if _matches(invoice.status, filters.status)
        and _matches(invoice.client.id, filters.client_id)
        and within_date_range(
            _invoice_date(invoice), filters.start_date, filters.end_date
        )
        and contains_text(
            (invoice.invoice_number, invoice.client.name), filters.search
        )
    )


def filter_clients(
    clients: Iterable[Client],
    filters: ClientFilters,
) -> tuple[Client, ...]:
    """Return clients matching status, search text and tag filters."""
    return tuple(
        client
        for client in clients
        if _matches(client.status, filters.status)
        and contains_text(
            (
                client.name,
                client.email,
                client.company.name if client.company else None,
            ),
            filters.search,
        )
        and shares_tag(client.tags, filters.tags)
    )


def filter_payments(
    payments: Iterable[Payment],
    filters: PaymentFilters,
) -> tuple[Payment, ...]:
    """Return payments matching every active payment filter."""
    return tuple(
        payment
        for payment in payments
        if within_date_range(payment.date, filters.start_date, filters.end_date)
        and _matches(payment.method, filters.method)
        and _matches(payment.status, filters.status)
        and contains_text(
            (
                payment.invoice.invoice_number,
                payment.invoice.client.name,
                payment.reference,
            ),
            filters.search,
        )
    )


def filter_products(
    products: Iterable[Product],
    filters: ProductFilters,
) -> tuple[Product, ...]:
    """Return products matching every active product filter.

    Type and status compare exactly; the two product schemas are not
    case-folded into one another.
    """
    return tuple(
        product
        for product in products
        if _matches(product.type, filters.type)
        and _matches(product.category, filters.category)
        and _matches(product.status, filters.status)
        and contains_text(
            (product.name, product.sku, product.description), filters.search
        )
    )


def _text_key(value: str) -> tuple[str, str, str]:
    """Collate accents and case together, ties broken by case-folded then raw text."""
    folded = value.casefold()
    base = "".join(
        char
        for char in unicodedata.normalize("NFKD", folded)
        if not unicodedata.combining(char)
    )
    return (base, folded, value)


def _date_key(value: date | datetime) -> tuple:
    if isinstance(value, datetime):
        return (value.date(), value.time())
    return (value, datetime.min.time())


_KEY_BUILDERS: dict[str, Callable[[Any], Any]] = {
    "text": _text_key,
    "number": lambda value: value,
    "date": _date_key,
}


INVOICE_SORT_FIELDS: SortFields = {
    "invoice_number": ("text", lambda i: i.invoice_number),
    "client_name": ("text", lambda i: i.client.name),
    "status": ("text", lambda i: i.status),
    "total": ("number", invoice_total),
    "paid": ("number", invoice_paid),
    "balance": ("number", invoice_balance),
    "invoice_date": ("date", lambda i: i.invoice_date),
    "due_date": ("date", lambda i: i.due_date),
    "created_at": ("date", lambda i: i.created_at),
}

CLIENT_SORT_FIELDS: SortFields = {
    "name": ("text", lambda c: c.name),
    "email": ("text", lambda c: c.email),
    "status": ("text", lambda c: c.status),
    "currency": ("text", lambda c: c.currency),
    "credit_limit": ("number", lambda c: c.credit_limit),
    "payment_terms": ("number", lambda c: c.payment_terms),
    "created_at": ("date", lambda c: c.created_at),
}

PAYMENT_SORT_FIELDS: SortFields = {
    "date": ("date", lambda p: p.date),
    "created_at": ("date", lambda p: p.created_at),
    "updated_at": ("date", lambda p: p.updated_at),
    "amount": ("number", lambda p: p.amount),
    "method": ("text", lambda p: p.method),
    "status": ("text", lambda p: p.status),
    "reference": ("text", lambda p: p.reference),
    "invoice_number": ("text", lambda p: p.invoice.invoice_number),
}

PRODUCT_SORT_FIELDS: SortFields = {
    "name": ("text", lambda p: p.name),
    "sku": ("text", lambda p: p.sku),
    "category": ("text", lambda p: p.category),
    "price": ("number", lambda p: p.price.amount),
    "quantity": (
        "number",
        lambda p: p.inventory.quantity if p.inventory else None,
    ),
}


def sort_records(
    records: Iterable[T],
    sort: SortSpec | None,
    fields: SortFields,
) -> tuple[T, ...]:
    """Return records ordered by ``sort``.

    Args:
        records: Records to order.
        sort: Field and direction; ``None`` or an unset field keeps input
            order.
        fields: Dispatch table mapping sortable field names to their kind
            and accessor. Fields missing from the table keep input order.

    Returns:
        tuple: Stably sorted records. Records whose key is ``None`` follow
        the keyed ones, in input order, for both directions.
    """
    items = tuple(records)
    if sort is None or sort.field is None:
        return items
    entry = fields.get(sort.field)
    if entry is None:
        return items
    kind, accessor = entry
    build_key = _KEY_BUILDERS[kind]

    keyed: list[tuple[Any, T]] = []
    unkeyed: list[T] = []
    for record in items:
        value = accessor(record)
        if value is None:
            unkeyed.append(record)
        else:
            keyed.append((build_key(value), record))

    keyed.sort(key=lambda pair: pair[0], reverse=sort.direction == "desc")
    return tuple(record for _, record in keyed) + tuple(unkeyed)


def select_invoices(
    invoices: Iterable[Invoice],
    filters: InvoiceFilters,
    sort: SortSpec | None,
) -> tuple[Invoice, ...]:
    return sort_records(filter_invoices(invoices, filters), sort, INVOICE_SORT_FIELDS)


def select_clients(
    clients: Iterable[Client],
    filters: ClientFilters,
    sort: SortSpec | None,
) -> tuple[Client, ...]:
    return sort_records(filter_clients(clients, filters), sort, CLIENT_SORT_FIELDS)


def select_payments(
    payments: Iterable[Payment],
    filters: PaymentFilters,
    sort: SortSpec | None,
) -> tuple[Payment, ...]:
    return sort_records(filter_payments(payments, filters), sort, PAYMENT_SORT_FIELDS)


def select_products(
    products: Iterable[Product],
    filters: ProductFilters,
    sort: SortSpec | None,
) -> tuple[Product, ...]:
    return sort_records(filter_products(products, filters), sort, PRODUCT_SORT_FIELDS)


__all__ = [
    "SortSpec",
    "InvoiceFilters",
    "ClientFilters",
    "PaymentFilters",
    "ProductFilters",
    "within_date_range",
    "contains_text",
    "shares_tag",
    "filter_invoices",
    "filter_clients",
    "filter_payments",
    "filter_products",
    "INVOICE_SORT_FIELDS",
    "CLIENT_SORT_FIELDS",
    "PAYMENT_SORT_FIELDS",
    "PRODUCT_SORT_FIELDS",
    "sort_records",
    "select_invoices",
    "select_clients",
    "select_payments",
    "select_products",
]
