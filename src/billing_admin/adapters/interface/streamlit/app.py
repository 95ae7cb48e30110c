"""Streamlit billing dashboard entry point."""

import asyncio
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date

import altair as alt
import streamlit as st

from billing_admin.application.state.events import Fulfilled
from billing_admin.application.use_cases.get_dashboard_summary import (
    DashboardView,
)
from billing_admin.domain.constants import (
    CLIENT_STATUSES,
    INVOICE_STATUSES,
    PAYMENT_METHODS,
)
from billing_admin.domain.models.finance import MethodStats, MonthlyAmount
from billing_admin.domain.models.records import Client, Invoice, Payment, Product
from billing_admin.domain.services.aggregation import (
    invoice_balance,
    invoice_paid,
    invoice_total,
    low_stock_products,
)
from billing_admin.domain.services.filtering import (
    CLIENT_SORT_FIELDS,
    INVOICE_SORT_FIELDS,
    ClientFilters,
    InvoiceFilters,
    SortSpec,
    select_clients,
    select_invoices,
)
from billing_admin.infrastructure.container import (
    BillingStores,
    build_apis,
    build_dashboard_use_case,
    build_http_client,
    build_stores,
    build_sync,
)
from billing_admin.infrastructure.settings import ApiSettings
from billing_admin.utils.formatting import (
    format_currency,
    format_date,
    format_method_label,
    format_month_label,
)

MISSING = "-"
NO_SORT = "None"


@dataclass(frozen=True)
class LoadedRecords:
    """Records fetched for one Streamlit session, with fetch errors."""

    clients: tuple[Client, ...]
    invoices: tuple[Invoice, ...]
    payments: tuple[Payment, ...]
    products: tuple[Product, ...]
    errors: tuple[str, ...] = ()


async def _fetch_all(settings: ApiSettings) -> BillingStores:
    """Fetch every collection into fresh stores."""
    stores = build_stores()
    async with build_http_client(settings) as client:
        sync = build_sync(build_apis(client), stores)
        await asyncio.gather(
            sync.clients.fetch_all(),
            sync.invoices.fetch_all(),
            sync.payments.fetch_all(),
            sync.products.fetch_all(),
        )
    return stores


def _fetch_records() -> LoadedRecords:
    """Fetch records from the configured backend."""
    stores = asyncio.run(_fetch_all(ApiSettings.from_env()))
    errors = tuple(
        store.state.error
        for store in (
            stores.clients,
            stores.invoices,
            stores.payments,
            stores.products,
        )
        if store.state.error
    )
    return LoadedRecords(
        clients=stores.clients.state.items,
        invoices=stores.invoices.state.items,
        payments=stores.payments.state.items,
        products=stores.products.state.items,
        errors=errors,
    )


@st.cache_data(show_spinner=False, ttl=60)
def _load_records(schema_version: int = 1) -> LoadedRecords:
    """Cached wrapper around _fetch_records for Streamlit sessions."""
    _ = schema_version
    return _fetch_records()


def _stores_from_records(records: LoadedRecords) -> BillingStores:
    """Seed stores with cached records so use cases can read them."""
    stores = build_stores()
    stores.clients.dispatch(Fulfilled("FETCH_ALL", records.clients))
    stores.invoices.dispatch(Fulfilled("FETCH_ALL", records.invoices))
    stores.payments.dispatch(Fulfilled("FETCH_ALL", records.payments))
    stores.products.dispatch(Fulfilled("FETCH_ALL", records.products))
    return stores


def _invoice_rows(
    invoices: Sequence[Invoice],
    currency: str,
    date_format: str,
) -> list[dict[str, str]]:
    return [
        {
            "Number": invoice.invoice_number,
            "Client": invoice.client.name,
            "Status": invoice.status,
            "Total": format_currency(invoice_total(invoice), currency),
            "Paid": format_currency(invoice_paid(invoice), currency),
            "Balance": format_currency(invoice_balance(invoice), currency),
            "Due": format_date(invoice.due_date, date_format),
        }
        for invoice in invoices
    ]


def _payment_rows(
    payments: Sequence[Payment],
    currency: str,
    date_format: str,
) -> list[dict[str, str]]:
    return [
        {
            "Date": format_date(payment.date, date_format),
            "Invoice": payment.invoice.invoice_number,
            "Client": payment.invoice.client.name,
            "Amount": format_currency(payment.amount, currency),
            "Method": format_method_label(payment.method),
            "Status": payment.status or MISSING,
        }
        for payment in payments
    ]


def _client_rows(clients: Sequence[Client]) -> list[dict[str, str]]:
    return [
        {
            "Name": client.name,
            "Email": client.email,
            "Company": client.company.name if client.company else MISSING,
            "Status": client.status,
            "Tags": ", ".join(sorted(client.tags)),
        }
        for client in clients
    ]


def _revenue_chart_data(
    revenue: Sequence[MonthlyAmount],
    currency: str,
) -> list[dict[str, str | float]]:
    """Prepare Altair-ready points for the revenue line chart."""
    return [
        {
            "month": format_month_label(point.month),
            "order": index,
            "amount": float(point.amount),
            "amount_label": format_currency(point.amount, currency),
        }
        for index, point in enumerate(revenue)
    ]


def _method_rows(
    stats: dict[str, MethodStats],
    currency: str,
) -> list[dict[str, str | int]]:
    return [
        {
            "Method": format_method_label(method),
            "Count": stats[method].count,
            "Total": format_currency(stats[method].total, currency),
        }
        for method in PAYMENT_METHODS
        if method in stats
    ]


def _render_revenue_chart(
    revenue: Sequence[MonthlyAmount],
    currency: str,
) -> None:
    """Render monthly revenue as a line chart."""
    st.subheader("Revenue")
    if not revenue:
        st.info("No invoices available for the revenue chart.")
        return
    data = _revenue_chart_data(revenue, currency)
    chart = alt.Chart(alt.Data(values=data)).mark_line(
        point=True,
        color="#1b9aaa",
    ).encode(
        x=alt.X("month:N", sort=alt.SortField("order"), title=None),
        y=alt.Y("amount:Q", title=None),
        tooltip=[
            alt.Tooltip("month:N"),
            alt.Tooltip("amount_label:N"),
        ],
    ).properties(height=300)
    st.altair_chart(chart, width="stretch")


def _render_dashboard(
    view: DashboardView,
    settings: ApiSettings,
) -> None:
    currency = settings.currency
    revenue_col, paid_col, outstanding_col, clients_col = st.columns(4)
    revenue_col.metric(
        "Total Revenue", format_currency(view.metrics.total_revenue, currency)
    )
    paid_col.metric(
        "Total Paid", format_currency(view.metrics.total_paid, currency)
    )
    outstanding_col.metric(
        "Outstanding",
        format_currency(view.metrics.total_outstanding, currency),
    )
    clients_col.metric("Clients", str(view.metrics.total_clients))

    _render_revenue_chart(view.revenue, currency)

    invoices_col, payments_col = st.columns(2)
    with invoices_col:
        st.subheader("Recent Invoices")
        st.dataframe(
            _invoice_rows(view.recent_invoices, currency, settings.date_format),
            width="stretch",
            hide_index=True,
        )
    with payments_col:
        st.subheader("Recent Payments")
        st.dataframe(
            _payment_rows(view.recent_payments, currency, settings.date_format),
            width="stretch",
            hide_index=True,
        )


def _sort_controls(fields: Sequence[str], key: str) -> SortSpec:
    """Render sort widgets and return the chosen sort."""
    field_col, direction_col = st.columns(2)
    field = field_col.selectbox(
        "Sort by", options=[NO_SORT, *fields], index=0, key=f"{key}_sort"
    )
    direction = direction_col.radio(
        "Direction",
        options=["asc", "desc"],
        horizontal=True,
        key=f"{key}_direction",
    )
    return SortSpec(None if field == NO_SORT else field, direction)


def _render_invoices(invoices: Sequence[Invoice], settings: ApiSettings) -> None:
    st.subheader("Invoices")
    status = st.selectbox("Status", options=["All", *INVOICE_STATUSES])
    search = st.text_input("Search", placeholder="Number or client name")
    start_col, end_col = st.columns(2)
    start_date = start_col.date_input("From", value=None)
    end_date = end_col.date_input("To", value=None)
    sort = _sort_controls(sorted(INVOICE_SORT_FIELDS), "invoices")

    filters = InvoiceFilters(
        status=None if status == "All" else status,
        start_date=start_date,
        end_date=end_date,
        search=search.strip() or None,
    )
    selected = select_invoices(invoices, filters, sort)
    st.caption(f"{len(selected)} of {len(invoices)} invoices shown")
    st.dataframe(
        _invoice_rows(selected, settings.currency, settings.date_format),
        width="stretch",
        hide_index=True,
        height=420,
    )


def _render_clients(clients: Sequence[Client]) -> None:
    st.subheader("Clients")
    search = st.text_input("Search by name, email or company")
    status = st.selectbox("Status", options=["All", *CLIENT_STATUSES])
    tags = sorted({tag for client in clients for tag in client.tags})
    chosen_tags = st.multiselect("Tags", options=tags)
    sort = _sort_controls(sorted(CLIENT_SORT_FIELDS), "clients")

    filters = ClientFilters(
        status=None if status == "All" else status,
        search=search.strip() or None,
        tags=frozenset(chosen_tags),
    )
    selected = select_clients(clients, filters, sort)
    st.caption(f"{len(selected)} of {len(clients)} clients shown")
    st.dataframe(_client_rows(selected), width="stretch", hide_index=True)


def _render_payments(
    view: DashboardView,
    payments: Sequence[Payment],
    settings: ApiSettings,
) -> None:
    st.subheader("Payments by Method")
    st.dataframe(
        _method_rows(view.method_stats, settings.currency),
        width="stretch",
        hide_index=True,
    )
    st.subheader("All Payments")
    st.dataframe(
        _payment_rows(payments, settings.currency, settings.date_format),
        width="stretch",
        hide_index=True,
        height=420,
    )


def _render_products(products: Sequence[Product], settings: ApiSettings) -> None:
    st.subheader("Products")
    low_stock = low_stock_products(products)
    if low_stock:
        names = ", ".join(product.name for product in low_stock)
        st.warning(f"Low stock: {names}")
    st.dataframe(
        [
            {
                "Name": product.name,
                "SKU": product.sku or MISSING,
                "Type": product.type,
                "Price": format_currency(
                    product.price.amount, product.price.currency
                ),
                "Stock": (
                    product.inventory.quantity if product.inventory else MISSING
                ),
                "Status": product.status,
            }
            for product in products
        ],
        width="stretch",
        hide_index=True,
    )


def main() -> None:
    """Render the Streamlit app."""
    st.set_page_config(page_title="Billing Admin", layout="wide")
    st.title("Billing Admin")

    page = st.sidebar.selectbox(
        "Page", ["Dashboard", "Invoices", "Clients", "Payments", "Products"]
    )
    if st.sidebar.button("Refresh"):
        _load_records.clear()

    settings = ApiSettings.from_env()
    records = _load_records(schema_version=1)
    for message in records.errors:
        st.error(message)

    stores = _stores_from_records(records)
    view = build_dashboard_use_case(stores, settings).execute(date.today())

    if page == "Dashboard":
        _render_dashboard(view, settings)
    elif page == "Invoices":
        _render_invoices(records.invoices, settings)
    elif page == "Clients":
        _render_clients(records.clients)
    elif page == "Payments":
        _render_payments(view, records.payments, settings)
    else:
        _render_products(records.products, settings)


if __name__ == "__main__":  # pragma: no cover
    main()
