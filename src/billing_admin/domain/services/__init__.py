"""Domain services package."""

from .aggregation import (
    client_rollup,
    invoice_balance,
    invoice_paid,
    invoice_total,
    payment_method_stats,
    portfolio_metrics,
    revenue_by_month,
)
from .filtering import (
    ClientFilters,
    InvoiceFilters,
    PaymentFilters,
    ProductFilters,
    SortSpec,
    select_clients,
    select_invoices,
    select_payments,
    select_products,
    sort_records,
)
from .validation import validate_payment_amount, warn_on_overpayment

__all__ = [
    "client_rollup",
    "invoice_balance",
    "invoice_paid",
    "invoice_total",
    "payment_method_stats",
    "portfolio_metrics",
    "revenue_by_month",
    "ClientFilters",
    "InvoiceFilters",
    "PaymentFilters",
    "ProductFilters",
    "SortSpec",
    "select_clients",
    "select_invoices",
    "select_payments",
    "select_products",
    "sort_records",
    "validate_payment_amount",
    "warn_on_overpayment",
]
