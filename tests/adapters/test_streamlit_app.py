"""Tests for the Streamlit app module."""

from datetime import date, datetime, timezone
from decimal import Decimal
from unittest.mock import MagicMock

from billing_admin.adapters.interface.streamlit import app
from billing_admin.domain.models import (
    Client,
    ClientSnapshot,
    CompanyInfo,
    Inventory,
    Invoice,
    InvoiceItem,
    InvoiceSnapshot,
    MethodStats,
    Money,
    MonthlyAmount,
    Payment,
    PaymentSnapshot,
    Product,
)
from billing_admin.infrastructure.logging import logger as logger_module
from billing_admin.infrastructure.settings import ApiSettings


def _invoice() -> Invoice:
    return Invoice(
        id="i1",
        invoice_number="INV-1",
        client=ClientSnapshot(id="c1", name="Acme"),
        status="PENDING",
        items=(InvoiceItem("Consulting", 2, Decimal("600")),),
        payments=(PaymentSnapshot(id="s1", amount=Decimal("200")),),
        due_date=date(2024, 2, 1),
        created_at=datetime(2024, 1, 5, tzinfo=timezone.utc),
    )


def _payment() -> Payment:
    return Payment(
        id="p1",
        invoice=InvoiceSnapshot(
            id="i1",
            invoice_number="INV-1",
            client=ClientSnapshot(id="c1", name="Acme"),
            total=Decimal("1200"),
        ),
        amount=Decimal("200"),
        date=date(2024, 1, 10),
        method="BANK_TRANSFER",
    )


def _product(quantity: int) -> Product:
    return Product(
        id="prod-1",
        name="Widget",
        price=Money(Decimal("9.5"), "EUR"),
        type="PRODUCT",
        status="ACTIVE",
        inventory=Inventory(quantity=quantity, low_stock_alert=5),
    )


def _records() -> app.LoadedRecords:
    return app.LoadedRecords(
        clients=(
            Client(
                id="c1",
                name="Acme",
                email="a@acme.test",
                status="ACTIVE",
                company=CompanyInfo(name="Acme Holdings"),
                tags=frozenset({"vip", "eu"}),
            ),
        ),
        invoices=(_invoice(),),
        payments=(_payment(),),
        products=(_product(3),),
    )


def test_invoice_rows_show_computed_amounts() -> None:
    rows = app._invoice_rows([_invoice()], "USD", "%Y-%m-%d")

    assert rows == [
        {
            "Number": "INV-1",
            "Client": "Acme",
            "Status": "PENDING",
            "Total": "1,200.00 $",
            "Paid": "200.00 $",
            "Balance": "1,000.00 $",
            "Due": "2024-02-01",
        }
    ]


def test_payment_and_client_rows() -> None:
    payment_rows = app._payment_rows([_payment()], "EUR", "%d/%m/%Y")
    client_rows = app._client_rows(_records().clients)

    assert payment_rows[0]["Date"] == "10/01/2024"
    assert payment_rows[0]["Method"] == "Bank Transfer"
    assert payment_rows[0]["Amount"] == "200.00 €"
    assert payment_rows[0]["Status"] == "-"
    assert client_rows[0]["Company"] == "Acme Holdings"
    assert client_rows[0]["Tags"] == "eu, vip"


def test_revenue_chart_data_keeps_month_order() -> None:
    data = app._revenue_chart_data(
        [
            MonthlyAmount("2023-12", Decimal("10")),
            MonthlyAmount("2024-01", Decimal("1234.5")),
        ],
        "USD",
    )

    assert [point["month"] for point in data] == ["12/23", "01/24"]
    assert [point["order"] for point in data] == [0, 1]
    assert data[1]["amount"] == 1234.5
    assert data[1]["amount_label"] == "1,234.50 $"


def test_method_rows_follow_method_order() -> None:
    stats = {
        "OTHER": MethodStats(count=1, total=Decimal("5")),
        "CASH": MethodStats(count=0, total=Decimal("0")),
    }

    rows = app._method_rows(stats, "USD")

    assert [row["Method"] for row in rows] == ["Cash", "Other"]


def test_load_records_uses_fetch(monkeypatch) -> None:
    """The cached loader should delegate to _fetch_records."""
    records = _records()
    monkeypatch.setattr(app, "_fetch_records", lambda: records)
    app._load_records.clear()

    assert app._load_records(schema_version=99) == records


def test_stores_from_records_seed_every_store(monkeypatch) -> None:
    monkeypatch.setattr(logger_module.AppLogger, "_instance", MagicMock())
    records = _records()

    stores = app._stores_from_records(records)

    assert stores.clients.state.items == records.clients
    assert stores.invoices.state.items == records.invoices
    assert stores.payments.state.items == records.payments
    assert stores.products.state.items == records.products
    assert stores.invoices.state.loading is False


class _FakeColumn:
    def __init__(self, owner: "_FakeStreamlit") -> None:
        self._owner = owner

    def __enter__(self) -> "_FakeColumn":
        return self

    def __exit__(self, *exc) -> None:
        return None

    def metric(self, label: str, value: str) -> None:
        self._owner.metrics[label] = value


class _FakeSidebar:
    def __init__(self, page: str) -> None:
        self.page = page

    def selectbox(self, label, options):
        return self.page

    def button(self, label) -> bool:
        return False


class _FakeStreamlit:
    def __init__(self, page: str) -> None:
        self.sidebar = _FakeSidebar(page)
        self.metrics: dict[str, str] = {}
        self.errors: list[str] = []
        self.warnings: list[str] = []
        self.subheaders: list[str] = []
        self.dataframes: list[list[dict]] = []
        self.charts: list = []

    def set_page_config(self, **kwargs) -> None:
        self.config_kwargs = kwargs

    def title(self, text: str) -> None:
        self.title_text = text

    def columns(self, count: int) -> list[_FakeColumn]:
        return [_FakeColumn(self) for _ in range(count)]

    def subheader(self, text: str) -> None:
        self.subheaders.append(text)

    def error(self, text: str) -> None:
        self.errors.append(text)

    def warning(self, text: str) -> None:
        self.warnings.append(text)

    def info(self, text: str) -> None:
        self.warnings.append(text)

    def dataframe(self, data, **_kwargs) -> None:
        self.dataframes.append(data)

    def altair_chart(self, chart, **_kwargs) -> None:
        self.charts.append(chart)


def _patch_app(monkeypatch, fake_st: _FakeStreamlit, records) -> None:
    monkeypatch.setattr(logger_module.AppLogger, "_instance", MagicMock())
    monkeypatch.setattr(app, "st", fake_st)
    monkeypatch.setattr(app, "_load_records", lambda schema_version=1: records)
    monkeypatch.setattr(
        app.ApiSettings,
        "from_env",
        classmethod(lambda cls: ApiSettings(currency="USD")),
    )


def test_main_renders_dashboard(monkeypatch) -> None:
    """main should render metrics, the revenue chart and recent tables."""
    fake_st = _FakeStreamlit("Dashboard")
    _patch_app(monkeypatch, fake_st, _records())

    app.main()

    assert fake_st.title_text == "Billing Admin"
    assert fake_st.metrics == {
        "Total Revenue": "1,200.00 $",
        "Total Paid": "200.00 $",
        "Outstanding": "1,000.00 $",
        "Clients": "1",
    }
    assert len(fake_st.charts) == 1
    assert "Recent Invoices" in fake_st.subheaders
    assert fake_st.dataframes[0][0]["Number"] == "INV-1"
    assert fake_st.errors == []


def test_main_surfaces_fetch_errors(monkeypatch) -> None:
    fake_st = _FakeStreamlit("Dashboard")
    records = app.LoadedRecords(
        clients=(),
        invoices=(),
        payments=(),
        products=(),
        errors=("Failed to fetch invoices",),
    )
    _patch_app(monkeypatch, fake_st, records)

    app.main()

    assert fake_st.errors == ["Failed to fetch invoices"]
    assert fake_st.charts == []
    assert "No invoices available for the revenue chart." in fake_st.warnings


def test_main_products_page_warns_on_low_stock(monkeypatch) -> None:
    fake_st = _FakeStreamlit("Products")
    _patch_app(monkeypatch, fake_st, _records())

    app.main()

    assert fake_st.warnings == ["Low stock: Widget"]
    row = fake_st.dataframes[0][0]
    assert row["Price"] == "9.50 €"
    assert row["Stock"] == 3


class _SortColumn:
    def __init__(self, choice: str) -> None:
        self.choice = choice
        self.options: list[str] = []

    def selectbox(self, label, options, index=0, key=None) -> str:
        self.options = list(options)
        return self.choice

    def radio(self, label, options, horizontal=False, key=None) -> str:
        self.options = list(options)
        return self.choice


class _SortStreamlit:
    def __init__(self, field: str, direction: str) -> None:
        self.field_col = _SortColumn(field)
        self.direction_col = _SortColumn(direction)

    def columns(self, count: int) -> list[_SortColumn]:
        return [self.field_col, self.direction_col]


def test_sort_controls_none_option_disables_sorting(monkeypatch) -> None:
    fake_st = _SortStreamlit("None", "desc")
    monkeypatch.setattr(app, "st", fake_st)

    sort = app._sort_controls(["total", "status"], "invoices")

    assert fake_st.field_col.options == ["None", "total", "status"]
    assert sort == app.SortSpec(None, "desc")


def test_sort_controls_returns_chosen_field(monkeypatch) -> None:
    monkeypatch.setattr(app, "st", _SortStreamlit("total", "asc"))

    assert app._sort_controls(["total"], "invoices") == app.SortSpec("total", "asc")
