"""Tests for the filter/sort pipeline."""

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from billing_admin.domain.models import (
    Client,
    ClientSnapshot,
    CompanyInfo,
    Invoice,
    InvoiceItem,
    InvoiceSnapshot,
    Money,
    Payment,
    Product,
)
from billing_admin.domain.services.aggregation import invoice_total
from billing_admin.domain.services.filtering import (
    CLIENT_SORT_FIELDS,
    INVOICE_SORT_FIELDS,
    ClientFilters,
    InvoiceFilters,
    PaymentFilters,
    ProductFilters,
    SortSpec,
    contains_text,
    filter_clients,
    filter_invoices,
    filter_payments,
    filter_products,
    select_invoices,
    select_payments,
    shares_tag,
    sort_records,
    within_date_range,
)


def _invoice(
    invoice_id: str,
    status: str,
    total: str,
    client_name: str,
    created: date,
) -> Invoice:
    return Invoice(
        id=invoice_id,
        invoice_number=f"INV-{invoice_id}",
        client=ClientSnapshot(id=f"c-{client_name}", name=client_name),
        status=status,
        items=(InvoiceItem("line", 1, Decimal(total)),),
        created_at=datetime(
            created.year, created.month, created.day, 15, 30, tzinfo=timezone.utc
        ),
    )


def _invoices() -> list[Invoice]:
    return [
        _invoice("1", "PAID", "100", "acme", date(2024, 1, 5)),
        _invoice("2", "PENDING", "50", "Beta", date(2024, 1, 20)),
        _invoice("3", "PAID", "100", "Acme", date(2024, 2, 1)),
        _invoice("4", "OVERDUE", "75", "delta", date(2024, 2, 15)),
        _invoice("5", "PAID", "50", "beta", date(2024, 3, 1)),
    ]


def _client(client_id: str, name: str, **kwargs) -> Client:
    return Client(
        id=client_id,
        name=name,
        email=f"{client_id}@example.com",
        status=kwargs.pop("status", "ACTIVE"),
        **kwargs,
    )


def test_within_date_range_is_inclusive_on_both_bounds() -> None:
    start = date(2024, 1, 1)
    end = date(2024, 1, 31)

    assert within_date_range(date(2024, 1, 1), start, end)
    assert within_date_range(
        datetime(2024, 1, 31, 23, 59, tzinfo=timezone.utc), start, end
    )
    assert not within_date_range(date(2024, 2, 1), start, end)
    assert within_date_range(date(1999, 1, 1), None, end)
    assert within_date_range(None, None, None)
    assert not within_date_range(None, start, None)


def test_contains_text_is_case_insensitive() -> None:
    assert contains_text(["ACME Corp", None], "acme")
    assert contains_text([None], None)
    assert not contains_text(["Beta"], "acme")


def test_shares_tag_requires_intersection() -> None:
    assert shares_tag({"vip"}, frozenset())
    assert shares_tag({"vip", "eu"}, frozenset({"eu", "us"}))
    assert not shares_tag(None, frozenset({"eu"}))


def test_filter_invoices_is_conjunctive() -> None:
    filters = InvoiceFilters(
        status="PAID",
        start_date=date(2024, 1, 5),
        end_date=date(2024, 2, 1),
        search="acme",
    )

    result = filter_invoices(_invoices(), filters)

    assert [invoice.id for invoice in result] == ["1", "3"]


def test_filter_invoices_without_filters_keeps_everything() -> None:
    invoices = _invoices()

    assert filter_invoices(invoices, InvoiceFilters()) == tuple(invoices)


def test_filter_invoices_does_not_mutate_source() -> None:
    invoices = _invoices()
    snapshot = list(invoices)

    filter_invoices(invoices, InvoiceFilters(status="PAID"))
    sort_records(invoices, SortSpec("total", "desc"), INVOICE_SORT_FIELDS)

    assert invoices == snapshot


def test_filter_clients_matches_company_and_tags() -> None:
    clients = [
        _client("1", "Alpha", company=CompanyInfo(name="Globex"), tags=frozenset({"vip"})),
        _client("2", "Bravo", tags=frozenset({"vip"})),
        _client("3", "Charlie", company=CompanyInfo(name="Globex"), status="BLOCKED"),
    ]

    result = filter_clients(
        clients, ClientFilters(search="globex", tags=frozenset({"vip"}))
    )

    assert [client.id for client in result] == ["1"]


def test_filter_payments_by_method_and_range() -> None:
    def payment(payment_id: str, method: str, paid_on: date) -> Payment:
        return Payment(
            id=payment_id,
            invoice=InvoiceSnapshot(
                id="i1",
                invoice_number="INV-1",
                client=ClientSnapshot(id="c1", name="Acme"),
                total=Decimal("10"),
            ),
            amount=Decimal("10"),
            date=paid_on,
            method=method,
        )

    payments = [
        payment("p1", "CASH", date(2024, 1, 1)),
        payment("p2", "CHECK", date(2024, 1, 2)),
        payment("p3", "CASH", date(2024, 2, 1)),
    ]

    result = filter_payments(
        payments,
        PaymentFilters(method="CASH", end_date=date(2024, 1, 31)),
    )

    assert [p.id for p in result] == ["p1"]


def test_filter_products_compares_schemas_exactly() -> None:
    def product(product_id: str, product_type: str) -> Product:
        return Product(
            id=product_id,
            name=product_id,
            price=Money(Decimal("1"), "USD"),
            type=product_type,
            status="ACTIVE",
        )

    products = [product("a", "PRODUCT"), product("b", "product")]

    result = filter_products(products, ProductFilters(type="product"))

    assert [p.id for p in result] == ["b"]


@pytest.mark.parametrize("direction", ["asc", "desc"])
def test_sort_is_stable_for_equal_keys(direction: str) -> None:
    invoices = _invoices()

    result = sort_records(invoices, SortSpec("total", direction), INVOICE_SORT_FIELDS)

    hundreds = [invoice.id for invoice in result if invoice_total(invoice) == 100]
    fifties = [invoice.id for invoice in result if invoice_total(invoice) == 50]
    assert hundreds == ["1", "3"]
    assert fifties == ["2", "5"]


def test_sort_numeric_directions() -> None:
    invoices = _invoices()

    ascending = sort_records(invoices, SortSpec("total", "asc"), INVOICE_SORT_FIELDS)
    descending = sort_records(invoices, SortSpec("total", "desc"), INVOICE_SORT_FIELDS)

    assert [i.id for i in ascending] == ["2", "5", "4", "1", "3"]
    assert [i.id for i in descending] == ["1", "3", "4", "2", "5"]


def test_sort_text_ignores_case() -> None:
    clients = [
        _client("1", "beta"),
        _client("2", "Alpha"),
        _client("3", "charlie"),
    ]

    result = sort_records(clients, SortSpec("name", "asc"), CLIENT_SORT_FIELDS)

    assert [c.name for c in result] == ["Alpha", "beta", "charlie"]


def test_sort_text_places_accented_names_by_base_letter() -> None:
    clients = [
        _client("1", "Zoe"),
        _client("2", "Émile"),
        _client("3", "Adam"),
        _client("4", "emma"),
    ]

    ascending = sort_records(clients, SortSpec("name", "asc"), CLIENT_SORT_FIELDS)
    descending = sort_records(clients, SortSpec("name", "desc"), CLIENT_SORT_FIELDS)

    assert [c.name for c in ascending] == ["Adam", "Émile", "emma", "Zoe"]
    assert [c.name for c in descending] == ["Zoe", "emma", "Émile", "Adam"]


def test_sort_unknown_field_keeps_input_order() -> None:
    invoices = _invoices()

    result = sort_records(invoices, SortSpec("colour", "desc"), INVOICE_SORT_FIELDS)

    assert result == tuple(invoices)


def test_sort_places_missing_keys_last() -> None:
    clients = [
        _client("1", "A", credit_limit=None),
        _client("2", "B", credit_limit=Decimal("10")),
        _client("3", "C", credit_limit=Decimal("5")),
    ]

    for direction in ("asc", "desc"):
        result = sort_records(
            clients, SortSpec("credit_limit", direction), CLIENT_SORT_FIELDS
        )
        assert result[-1].id == "1"


@pytest.mark.parametrize(
    "sort",
    [
        SortSpec("total", "asc"),
        SortSpec("total", "desc"),
        SortSpec("client_name", "asc"),
        SortSpec("created_at", "desc"),
        SortSpec("status", "desc"),
    ],
)
@pytest.mark.parametrize(
    "filters",
    [
        InvoiceFilters(status="PAID"),
        InvoiceFilters(search="beta"),
        InvoiceFilters(start_date=date(2024, 1, 20), end_date=date(2024, 3, 1)),
        InvoiceFilters(status="PAID", search="acme"),
    ],
)
def test_filter_then_sort_equals_sort_then_filter(
    sort: SortSpec,
    filters: InvoiceFilters,
) -> None:
    invoices = _invoices()

    filtered_first = sort_records(
        filter_invoices(invoices, filters), sort, INVOICE_SORT_FIELDS
    )
    sorted_first = filter_invoices(
        sort_records(invoices, sort, INVOICE_SORT_FIELDS), filters
    )

    assert filtered_first == sorted_first
    assert select_invoices(invoices, filters, sort) == filtered_first


def test_select_payments_without_sort_keeps_order() -> None:
    assert select_payments([], PaymentFilters(), None) == ()
