"""Composition root for wiring infrastructure adapters."""

from dataclasses import dataclass

import httpx

from billing_admin.application.ports.billing_api import (
    ClientsApiPort,
    InvoicesApiPort,
    PaymentsApiPort,
    ProductsApiPort,
)
from billing_admin.application.ports.token_store import TokenStorePort
from billing_admin.application.state.reducers import (
    reduce_clients,
    reduce_entity,
)
from billing_admin.application.state.state import (
    initial_clients_state,
    initial_invoices_state,
    initial_payments_state,
    initial_products_state,
)
from billing_admin.application.state.store import Store
from billing_admin.application.use_cases.client_sync import ClientSync
from billing_admin.application.use_cases.get_dashboard_summary import (
    GetDashboardSummaryUseCase,
)
from billing_admin.application.use_cases.invoice_sync import InvoiceSync
from billing_admin.application.use_cases.payment_sync import PaymentSync
from billing_admin.application.use_cases.product_sync import ProductSync
from billing_admin.infrastructure.http_client import build_async_client
from billing_admin.infrastructure.logging.logger import get_app_logger
from billing_admin.infrastructure.rest_api import (
    HttpClientsApi,
    HttpInvoicesApi,
    HttpPaymentsApi,
    HttpProductsApi,
)
from billing_admin.infrastructure.settings import ApiSettings
from billing_admin.infrastructure.token_store import FileTokenStore


@dataclass(frozen=True)
class BillingApis:
    """The four REST adapters sharing one HTTP client."""

    clients: ClientsApiPort
    invoices: InvoicesApiPort
    payments: PaymentsApiPort
    products: ProductsApiPort


@dataclass(frozen=True)
class BillingStores:
    """One store per entity."""

    clients: Store
    invoices: Store
    payments: Store
    products: Store


@dataclass(frozen=True)
class BillingSync:
    """Sync operations bound to the stores."""

    clients: ClientSync
    invoices: InvoiceSync
    payments: PaymentSync
    products: ProductSync


def build_token_store(settings: ApiSettings | None = None) -> TokenStorePort:
    """Return the token store configured by the settings."""
    resolved = settings or ApiSettings.from_env()
    if resolved.token_file is None:
        raise RuntimeError("Token storage requires a BILLING_TOKEN_FILE value.")
    return FileTokenStore(resolved.token_file)


def build_http_client(
    settings: ApiSettings | None = None,
    token_store: TokenStorePort | None = None,
) -> httpx.AsyncClient:
    """Return the shared HTTP client for the configured backend."""
    resolved = settings or ApiSettings.from_env()
    if not resolved.base_url:
        raise RuntimeError("Billing backend requires a BILLING_API_URL value.")
    return build_async_client(
        resolved,
        token_store=token_store or build_token_store(resolved),
    )


def build_apis(client: httpx.AsyncClient) -> BillingApis:
    """Return the REST adapters bound to ``client``."""
    logger = get_app_logger()
    return BillingApis(
        clients=HttpClientsApi(client, logger=logger),
        invoices=HttpInvoicesApi(client, logger=logger),
        payments=HttpPaymentsApi(client, logger=logger),
        products=HttpProductsApi(client, logger=logger),
    )


def build_stores() -> BillingStores:
    """Return empty stores with their default filters and sort order."""
    return BillingStores(
        clients=Store(reduce_clients, initial_clients_state(), name="clients"),
        invoices=Store(reduce_entity, initial_invoices_state(), name="invoices"),
        payments=Store(reduce_entity, initial_payments_state(), name="payments"),
        products=Store(reduce_entity, initial_products_state(), name="products"),
    )


def build_sync(apis: BillingApis, stores: BillingStores) -> BillingSync:
    """Return the sync operations wired to ``apis`` and ``stores``."""
    return BillingSync(
        clients=ClientSync(apis.clients, stores.clients),
        invoices=InvoiceSync(
            apis.invoices,
            stores.invoices,
            payments_store=stores.payments,
        ),
        payments=PaymentSync(
            apis.payments,
            stores.payments,
            invoices_api=apis.invoices,
            invoices_store=stores.invoices,
        ),
        products=ProductSync(apis.products, stores.products),
    )


def build_dashboard_use_case(
    stores: BillingStores,
    settings: ApiSettings | None = None,
) -> GetDashboardSummaryUseCase:
    """Return the dashboard use case reading from ``stores``."""
    resolved = settings or ApiSettings.from_env()
    return GetDashboardSummaryUseCase(
        stores.invoices,
        stores.payments,
        stores.clients,
        recent_days=resolved.recent_days,
    )


__all__ = [
    "BillingApis",
    "BillingStores",
    "BillingSync",
    "build_token_store",
    "build_http_client",
    "build_apis",
    "build_stores",
    "build_sync",
    "build_dashboard_use_case",
]
