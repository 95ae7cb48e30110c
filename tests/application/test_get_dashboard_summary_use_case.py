from datetime import date, datetime, timezone
from decimal import Decimal
from unittest.mock import MagicMock

from billing_admin.application.state.events import Fulfilled
from billing_admin.application.state.reducers import reduce_clients, reduce_entity
from billing_admin.application.state.state import (
    initial_clients_state,
    initial_invoices_state,
    initial_payments_state,
)
from billing_admin.application.state.store import Store
from billing_admin.application.use_cases.get_dashboard_summary import (
    GetDashboardSummaryUseCase,
)
from billing_admin.domain.models import (
    Client,
    ClientSnapshot,
    Invoice,
    InvoiceItem,
    InvoiceSnapshot,
    MonthlyAmount,
    Payment,
    PaymentSnapshot,
)


def _seeded(reducer, state, items) -> Store:
    store = Store(reducer, state, logger=MagicMock())
    store.dispatch(Fulfilled("FETCH_ALL", tuple(items)))
    return store


def _invoice(invoice_id: str, month: int, amount: str, paid: str = "0") -> Invoice:
    return Invoice(
        id=invoice_id,
        invoice_number=f"INV-{invoice_id}",
        client=ClientSnapshot(id="c1", name="Acme"),
        status="PENDING",
        items=(InvoiceItem("line", 2, Decimal(amount)),),
        payments=(PaymentSnapshot(id=f"s-{invoice_id}", amount=Decimal(paid)),),
        invoice_date=date(2024, month, 1),
        created_at=datetime(2024, month, 1, tzinfo=timezone.utc),
    )


def _payment(payment_id: str, paid_on: date, amount: str, method: str) -> Payment:
    return Payment(
        id=payment_id,
        invoice=InvoiceSnapshot(
            id="1",
            invoice_number="INV-1",
            client=ClientSnapshot(id="c1", name="Acme"),
            total=Decimal("100"),
        ),
        amount=Decimal(amount),
        date=paid_on,
        method=method,
    )


def _build_use_case(limit: int = 5) -> tuple[GetDashboardSummaryUseCase, MagicMock]:
    invoices = _seeded(
        reduce_entity,
        initial_invoices_state(),
        [
            _invoice("1", 1, "50", paid="100"),
            _invoice("2", 3, "25"),
            _invoice("3", 2, "10", paid="5"),
        ],
    )
    payments = _seeded(
        reduce_entity,
        initial_payments_state(),
        [
            _payment("p1", date(2024, 1, 10), "60", "CASH"),
            _payment("p2", date(2024, 3, 20), "40", "BANK_TRANSFER"),
            _payment("p3", date(2024, 3, 25), "5", "CASH"),
        ],
    )
    clients = _seeded(
        reduce_clients,
        initial_clients_state(),
        [Client(id="c1", name="Acme", email="a@example.com", status="ACTIVE")],
    )
    logger = MagicMock()
    use_case = GetDashboardSummaryUseCase(
        invoices,
        payments,
        clients,
        logger=logger,
        recent_days=30,
        recent_limit=limit,
    )
    return use_case, logger


def test_dashboard_metrics_and_revenue() -> None:
    use_case, logger = _build_use_case()

    view = use_case.execute(date(2024, 3, 31))

    assert view.metrics.total_revenue == Decimal("170")
    assert view.metrics.total_paid == Decimal("105")
    assert view.metrics.total_outstanding == Decimal("65")
    assert view.metrics.total_clients == 1
    assert view.revenue == [
        MonthlyAmount("2024-01", Decimal("100")),
        MonthlyAmount("2024-02", Decimal("20")),
        MonthlyAmount("2024-03", Decimal("50")),
    ]
    assert view.method_stats["CASH"].count == 2
    assert view.method_stats["CASH"].total == Decimal("65")
    assert view.method_stats["CHECK"].count == 0
    logger.info.assert_called_once()


def test_dashboard_recent_lists_are_newest_first_and_limited() -> None:
    use_case, _ = _build_use_case(limit=2)

    view = use_case.execute(date(2024, 3, 31))

    assert [invoice.id for invoice in view.recent_invoices] == ["2", "3"]
    assert [payment.id for payment in view.recent_payments] == ["p3", "p2"]


def test_dashboard_recent_payments_window() -> None:
    use_case, _ = _build_use_case()

    view = use_case.execute(date(2024, 4, 22))

    assert [payment.id for payment in view.recent_payments] == ["p3"]
