"""Domain models for financial aggregates."""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class PortfolioMetrics:
    """Headline figures for the dashboard.

    Attributes:
        total_revenue: Sum of invoice totals.
        total_paid: Sum of every payment in the payments collection.
        total_outstanding: Sum of invoice balances.
        total_clients: Number of client records.
    """

    total_revenue: Decimal
    total_paid: Decimal
    total_outstanding: Decimal
    total_clients: int


@dataclass(frozen=True)
class MonthlyAmount:
    """Amount aggregated for a ``YYYY-MM`` month."""

    month: str
    amount: Decimal


@dataclass(frozen=True)
class MonthlyTrend:
    """Payment count and total for a ``YYYY-MM`` month."""

    month: str
    count: int
    total: Decimal


@dataclass(frozen=True)
class ClientRollup:
    """Per-client invoice aggregate.

    ``paid_amount`` and ``overdue_amount`` are status-based: a PAID invoice
    contributes its full total regardless of recorded payments.
    """

    client_name: str
    invoice_count: int
    total_amount: Decimal
    paid_amount: Decimal
    overdue_amount: Decimal


@dataclass(frozen=True)
class MethodStats:
    """Count and total of payments sharing a method or status."""

    count: int
    total: Decimal


@dataclass(frozen=True)
class InvoiceStats:
    """Invoice counts and status-based amounts."""

    total: int
    draft: int
    pending: int
    paid: int
    overdue: int
    total_amount: Decimal
    pending_amount: Decimal
    paid_amount: Decimal
    overdue_amount: Decimal


@dataclass(frozen=True)
class OverpaymentEntry:
    """Payments received for one invoice compared to its total."""

    invoice_number: str
    invoice_total: Decimal
    total_paid: Decimal

    @property
    def is_overpaid(self) -> bool:
        """Return True when payments exceed the invoice total."""
        return self.total_paid > self.invoice_total


@dataclass(frozen=True)
class AccountSummary:
    """Billed, paid and outstanding amounts computed from payments."""

    total_billed: Decimal
    total_paid: Decimal

    @property
    def total_outstanding(self) -> Decimal:
        """Return total_billed minus total_paid."""
        return self.total_billed - self.total_paid


@dataclass(frozen=True)
class ProductRollup:
    """Revenue and quantity sold for a single product."""

    product_id: str
    revenue: Decimal
    quantity_sold: int


@dataclass(frozen=True)
class ClientAnalytics:
    """Client portfolio composition."""

    total_clients: int
    clients_by_status: dict[str, int]
    clients_by_country: dict[str, int]
    total_credit_limit: Decimal
    average_credit_limit: Decimal


__all__ = [
    "PortfolioMetrics",
    "MonthlyAmount",
    "MonthlyTrend",
    "ClientRollup",
    "MethodStats",
    "InvoiceStats",
    "OverpaymentEntry",
    "AccountSummary",
    "ProductRollup",
    "ClientAnalytics",
]
