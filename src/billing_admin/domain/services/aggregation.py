"""Domain services computing derived financial figures.

Every function is pure: inputs are point-in-time snapshots of records and
are never mutated. Missing nested collections (``items``, ``payments``) are
treated as empty so partially populated payloads still aggregate.
"""

from collections.abc import Iterable
from datetime import date, timedelta
from decimal import Decimal

from billing_admin.domain.constants import (
    CLIENT_STATUSES,
    PAYMENT_METHODS,
    PAYMENT_STATUSES,
)
from billing_admin.domain.models import (
    AccountSummary,
    Client,
    ClientAnalytics,
    ClientRollup,
    Invoice,
    InvoiceStats,
    MethodStats,
    MonthlyAmount,
    MonthlyTrend,
    OverpaymentEntry,
    Payment,
    PortfolioMetrics,
    Product,
    ProductRollup,
)
from billing_admin.utils.decimal_utils import ZERO, coerce_decimal, sum_decimals


def invoice_total(invoice: Invoice) -> Decimal:
    """Return the sum of ``quantity × price`` over the invoice items."""
    return sum_decimals(
        item.quantity * coerce_decimal(item.price)
        for item in (invoice.items or ())
    )


def invoice_paid(invoice: Invoice) -> Decimal:
    """Return the sum of the payments embedded in the invoice."""
    return sum_decimals(
        coerce_decimal(payment.amount) for payment in (invoice.payments or ())
    )


def invoice_balance(invoice: Invoice) -> Decimal:
    """Return total minus paid. Negative values denote an overpayment."""
    return invoice_total(invoice) - invoice_paid(invoice)


def portfolio_metrics(
    invoices: Iterable[Invoice],
    payments: Iterable[Payment],
    clients: Iterable[Client],
) -> PortfolioMetrics:
    """Compute the dashboard headline figures.

    Args:
        invoices: Invoices in the working set.
        payments: Payments collection. Summed as a whole, independently of
            the invoices, since payments may reference invoices outside the
            working set.
        clients: Client records.

    Returns:
        PortfolioMetrics: Revenue, paid, outstanding and client count.
    """
    total_revenue = ZERO
    total_outstanding = ZERO
    for invoice in invoices:
        total = invoice_total(invoice)
        total_revenue += total
        total_outstanding += total - invoice_paid(invoice)

    total_paid = sum_decimals(coerce_decimal(p.amount) for p in payments)
    total_clients = sum(1 for _ in clients)

    return PortfolioMetrics(
        total_revenue=total_revenue,
        total_paid=total_paid,
        total_outstanding=total_outstanding,
        total_clients=total_clients,
    )


def invoice_month_key(invoice: Invoice) -> str | None:
    """Return the ``YYYY-MM`` bucket of an invoice.

    The creation timestamp is used; ``invoice_date`` is the fallback for
    payloads that omit it.
    """
    stamp = invoice.created_at or invoice.invoice_date
    if stamp is None:
        return None
    return f"{stamp.year:04d}-{stamp.month:02d}"


def revenue_by_month(invoices: Iterable[Invoice]) -> list[MonthlyAmount]:
    """Return invoice totals per month, ascending, omitting empty months."""
    totals: dict[str, Decimal] = {}
    for invoice in invoices:
        month = invoice_month_key(invoice)
        if month is None:
            continue
        totals[month] = totals.get(month, ZERO) + invoice_total(invoice)
    return [
        MonthlyAmount(month=month, amount=amount)
        for month, amount in sorted(totals.items())
    ]


def client_rollup(invoices: Iterable[Invoice]) -> dict[str, ClientRollup]:
    """Aggregate invoices per client id.

    ``paid_amount`` counts the full total of PAID invoices and
    ``overdue_amount`` the full total of OVERDUE invoices; recorded payments
    are not consulted. Use ``client_account_summary`` for payment sums.
    """
    names: dict[str, str] = {}
    counts: dict[str, int] = {}
    totals: dict[str, Decimal] = {}
    paid: dict[str, Decimal] = {}
    overdue: dict[str, Decimal] = {}
    for invoice in invoices:
        client_id = invoice.client.id
        if client_id not in names:
            names[client_id] = invoice.client.name
            counts[client_id] = 0
            totals[client_id] = ZERO
            paid[client_id] = ZERO
            overdue[client_id] = ZERO
        total = invoice_total(invoice)
        counts[client_id] += 1
        totals[client_id] += total
        if invoice.status == "PAID":
            paid[client_id] += total
        elif invoice.status == "OVERDUE":
            overdue[client_id] += total

    return {
        client_id: ClientRollup(
            client_name=names[client_id],
            invoice_count=counts[client_id],
            total_amount=totals[client_id],
            paid_amount=paid[client_id],
            overdue_amount=overdue[client_id],
        )
        for client_id in names
    }


def _seeded_stats(
    keys: Iterable[str],
    payments: Iterable[Payment],
    attribute: str,
) -> dict[str, MethodStats]:
    counts = {key: 0 for key in keys}
    totals = {key: ZERO for key in counts}
    for payment in payments:
        key = getattr(payment, attribute)
        if key is None:
            continue
        counts[key] = counts.get(key, 0) + 1
        totals[key] = totals.get(key, ZERO) + coerce_decimal(payment.amount)
    return {
        key: MethodStats(count=counts[key], total=totals[key])
        for key in counts
    }


def payment_method_stats(payments: Iterable[Payment]) -> dict[str, MethodStats]:
    """Return count and total per payment method.

    Every method in ``PAYMENT_METHODS`` is present, at zero when unused.
    """
    return _seeded_stats(PAYMENT_METHODS, payments, "method")


def payment_status_stats(payments: Iterable[Payment]) -> dict[str, MethodStats]:
    """Return count and total per payment status.

    Every status in ``PAYMENT_STATUSES`` is present. Payments without a
    status are not counted.
    """
    return _seeded_stats(PAYMENT_STATUSES, payments, "status")


def invoice_stats(invoices: Iterable[Invoice]) -> InvoiceStats:
    """Return invoice counts per status and status-based amounts."""
    counts = {"DRAFT": 0, "PENDING": 0, "PAID": 0, "OVERDUE": 0}
    amounts = {"PENDING": ZERO, "PAID": ZERO, "OVERDUE": ZERO}
    total_count = 0
    total_amount = ZERO
    for invoice in invoices:
        total = invoice_total(invoice)
        total_count += 1
        total_amount += total
        if invoice.status in counts:
            counts[invoice.status] += 1
        if invoice.status in amounts:
            amounts[invoice.status] += total

    return InvoiceStats(
        total=total_count,
        draft=counts["DRAFT"],
        pending=counts["PENDING"],
        paid=counts["PAID"],
        overdue=counts["OVERDUE"],
        total_amount=total_amount,
        pending_amount=amounts["PENDING"],
        paid_amount=amounts["PAID"],
        overdue_amount=amounts["OVERDUE"],
    )


def payment_trends_by_month(payments: Iterable[Payment]) -> list[MonthlyTrend]:
    """Return payment count and total per month, newest month first."""
    counts: dict[str, int] = {}
    totals: dict[str, Decimal] = {}
    for payment in payments:
        month = f"{payment.date.year:04d}-{payment.date.month:02d}"
        counts[month] = counts.get(month, 0) + 1
        totals[month] = totals.get(month, ZERO) + coerce_decimal(payment.amount)
    return [
        MonthlyTrend(month=month, count=counts[month], total=totals[month])
        for month in sorted(counts, reverse=True)
    ]


def total_paid_for_invoice(payments: Iterable[Payment], invoice_id: str) -> Decimal:
    """Return the sum of payments referencing ``invoice_id``."""
    return sum_decimals(
        coerce_decimal(p.amount) for p in payments if p.invoice.id == invoice_id
    )


def total_paid_for_client(payments: Iterable[Payment], client_id: str) -> Decimal:
    """Return the sum of payments whose invoice belongs to ``client_id``."""
    return sum_decimals(
        coerce_decimal(p.amount)
        for p in payments
        if p.invoice.client.id == client_id
    )


def recent_payments(
    payments: Iterable[Payment],
    today: date,
    days: int = 30,
) -> list[Payment]:
    """Return payments dated within ``days`` of ``today``, newest first.

    Payments sharing a date keep their input order.
    """
    cutoff = today - timedelta(days=days)
    selected = [p for p in payments if p.date >= cutoff]
    return sorted(selected, key=lambda p: p.date, reverse=True)


def overpayment_report(payments: Iterable[Payment]) -> dict[str, OverpaymentEntry]:
    """Compare payments received per invoice with the invoice total.

    The total comes from the invoice snapshot embedded in the payments.
    """
    numbers: dict[str, str] = {}
    invoice_totals: dict[str, Decimal] = {}
    paid: dict[str, Decimal] = {}
    for payment in payments:
        invoice_id = payment.invoice.id
        if invoice_id not in numbers:
            numbers[invoice_id] = payment.invoice.invoice_number
            invoice_totals[invoice_id] = coerce_decimal(payment.invoice.total)
            paid[invoice_id] = ZERO
        paid[invoice_id] += coerce_decimal(payment.amount)
    return {
        invoice_id: OverpaymentEntry(
            invoice_number=numbers[invoice_id],
            invoice_total=invoice_totals[invoice_id],
            total_paid=paid[invoice_id],
        )
        for invoice_id in numbers
    }


def client_account_summary(invoices: Iterable[Invoice]) -> AccountSummary:
    """Return billed and paid totals using recorded payment sums."""
    billed = ZERO
    paid = ZERO
    for invoice in invoices:
        billed += invoice_total(invoice)
        paid += invoice_paid(invoice)
    return AccountSummary(total_billed=billed, total_paid=paid)


def product_rollups(invoices: Iterable[Invoice]) -> dict[str, ProductRollup]:
    """Return revenue and quantity sold per product id.

    Items without a ``product_id`` (free-text lines) are skipped.
    """
    revenue: dict[str, Decimal] = {}
    quantity: dict[str, int] = {}
    for invoice in invoices:
        for item in invoice.items or ():
            if item.product_id is None:
                continue
            revenue[item.product_id] = (
                revenue.get(item.product_id, ZERO)
                + item.quantity * coerce_decimal(item.price)
            )
            quantity[item.product_id] = (
                quantity.get(item.product_id, 0) + item.quantity
            )
    return {
        product_id: ProductRollup(
            product_id=product_id,
            revenue=revenue[product_id],
            quantity_sold=quantity[product_id],
        )
        for product_id in revenue
    }


def product_rollup(invoices: Iterable[Invoice], product_id: str) -> ProductRollup:
    """Return the rollup of a single product, zeroed when never invoiced."""
    rollup = product_rollups(invoices).get(product_id)
    if rollup is None:
        return ProductRollup(product_id=product_id, revenue=ZERO, quantity_sold=0)
    return rollup


def client_analytics(clients: Iterable[Client]) -> ClientAnalytics:
    """Summarize clients by status and country and their credit limits.

    Clients without a credit limit (or with a zero limit) are excluded from
    the average.
    """
    by_status = {status: 0 for status in CLIENT_STATUSES}
    by_country: dict[str, int] = {}
    total_clients = 0
    total_credit = ZERO
    with_credit = 0
    for client in clients:
        total_clients += 1
        by_status[client.status] = by_status.get(client.status, 0) + 1
        country = client.address.country if client.address else ""
        country = country or "Unknown"
        by_country[country] = by_country.get(country, 0) + 1
        if client.credit_limit:
            total_credit += coerce_decimal(client.credit_limit)
            with_credit += 1

    average = total_credit / with_credit if with_credit else ZERO
    return ClientAnalytics(
        total_clients=total_clients,
        clients_by_status=by_status,
        clients_by_country=by_country,
        total_credit_limit=total_credit,
        average_credit_limit=average,
    )


def low_stock_products(products: Iterable[Product]) -> list[Product]:
    """Return products whose inventory is at or below the alert level."""
    return [
        product
        for product in products
        if product.inventory is not None and product.inventory.is_low
    ]


__all__ = [
    "invoice_total",
    "invoice_paid",
    "invoice_balance",
    "portfolio_metrics",
    "invoice_month_key",
    "revenue_by_month",
    "client_rollup",
    "payment_method_stats",
    "payment_status_stats",
    "invoice_stats",
    "payment_trends_by_month",
    "total_paid_for_invoice",
    "total_paid_for_client",
    "recent_payments",
    "overpayment_report",
    "client_account_summary",
    "product_rollups",
    "product_rollup",
    "client_analytics",
    "low_stock_products",
]
