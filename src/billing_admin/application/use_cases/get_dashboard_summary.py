"""Use case assembling the dashboard view from the entity stores."""

from dataclasses import dataclass
from datetime import date

from billing_admin.application.state.store import Store
from billing_admin.domain.models.finance import (
    InvoiceStats,
    MethodStats,
    MonthlyAmount,
    PortfolioMetrics,
)
from billing_admin.domain.models.records import Invoice, Payment
from billing_admin.domain.services.aggregation import (
    invoice_stats,
    payment_method_stats,
    portfolio_metrics,
    recent_payments,
    revenue_by_month,
)
from billing_admin.domain.services.filtering import (
    INVOICE_SORT_FIELDS,
    SortSpec,
    sort_records,
)
from billing_admin.infrastructure.logging.logger import get_app_logger


DEFAULT_RECENT_LIMIT = 5


@dataclass(frozen=True)
class DashboardView:
    """Figures shown on the dashboard page.

    Attributes:
        metrics: Headline revenue, paid, outstanding and client count.
        revenue: Monthly revenue, oldest month first.
        invoice_stats: Counts and amounts per invoice status.
        method_stats: Payment count and total per payment method.
        recent_invoices: Latest invoices by creation time.
        recent_payments: Payments of the recent window, newest first.
    """

    metrics: PortfolioMetrics
    revenue: list[MonthlyAmount]
    invoice_stats: InvoiceStats
    method_stats: dict[str, MethodStats]
    recent_invoices: tuple[Invoice, ...]
    recent_payments: tuple[Payment, ...]


class GetDashboardSummaryUseCase:
    """Compute the dashboard view from current store snapshots."""

    def __init__(
        self,
        invoices: Store,
        payments: Store,
        clients: Store,
        logger=None,
        recent_days: int = 30,
        recent_limit: int = DEFAULT_RECENT_LIMIT,
    ) -> None:
        """Initialize the use case.

        Args:
            invoices: Invoices store.
            payments: Payments store.
            clients: Clients store.
            logger: Optional logger compatible with logging.Logger-like API.
            recent_days: Window, in days, for recent payments.
            recent_limit: Maximum number of recent rows per list.
        """
        self._invoices = invoices
        self._payments = payments
        self._clients = clients
        self._logger = logger or get_app_logger()
        self._recent_days = recent_days
        self._recent_limit = recent_limit

    def execute(self, today: date | None = None) -> DashboardView:
        """Return the dashboard view.

        Args:
            today: Reference date for the recent payments window; defaults
                to the current date.

        Returns:
            DashboardView: Aggregated figures for display.
        """
        invoices = self._invoices.state.items
        payments = self._payments.state.items
        clients = self._clients.state.items
        reference = today or date.today()

        latest = sort_records(
            invoices, SortSpec("created_at", "desc"), INVOICE_SORT_FIELDS
        )
        recent = recent_payments(payments, reference, self._recent_days)
        view = DashboardView(
            metrics=portfolio_metrics(invoices, payments, clients),
            revenue=revenue_by_month(invoices),
            invoice_stats=invoice_stats(invoices),
            method_stats=payment_method_stats(payments),
            recent_invoices=latest[: self._recent_limit],
            recent_payments=tuple(recent[: self._recent_limit]),
        )
        self._logger.info(
            f"Dashboard computed from {len(invoices)} invoices, "
            f"{len(payments)} payments and {len(clients)} clients"
        )
        return view


__all__ = ["DashboardView", "GetDashboardSummaryUseCase"]
