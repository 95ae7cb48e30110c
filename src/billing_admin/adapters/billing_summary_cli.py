"""CLI adapter printing the portfolio summary of the billing backend.

This module fetches invoices, payments and clients through the sync
operations and prints the headline figures and the monthly revenue series.
"""

import asyncio
from datetime import date

from billing_admin.domain.services.aggregation import overpayment_report
from billing_admin.infrastructure.container import (
    BillingStores,
    build_apis,
    build_dashboard_use_case,
    build_http_client,
    build_stores,
    build_sync,
)
from billing_admin.infrastructure.logging.logger import get_app_logger
from billing_admin.infrastructure.settings import ApiSettings
from billing_admin.utils.formatting import format_currency


async def _fetch(settings: ApiSettings) -> BillingStores:
    stores = build_stores()
    async with build_http_client(settings) as client:
        sync = build_sync(build_apis(client), stores)
        await asyncio.gather(
            sync.clients.fetch_all(),
            sync.invoices.fetch_all(),
            sync.payments.fetch_all(),
        )
    return stores


def main() -> None:
    """Fetch the billing records and print the portfolio summary."""
    logger = get_app_logger()
    settings = ApiSettings.from_env()
    stores = asyncio.run(_fetch(settings))

    failed = False
    for store in (stores.clients, stores.invoices, stores.payments):
        if store.state.error:
            logger.error(store.state.error)
            failed = True
    if failed:
        print("Billing summary unavailable; see the application log.")
        return

    view = build_dashboard_use_case(stores, settings).execute(date.today())
    currency = settings.currency
    metrics = view.metrics
    print(f"Billing summary ({settings.base_url})")
    print(
        f"revenue={format_currency(metrics.total_revenue, currency)}, "
        f"paid={format_currency(metrics.total_paid, currency)}, "
        f"outstanding={format_currency(metrics.total_outstanding, currency)}, "
        f"clients={metrics.total_clients}"
    )
    for point in view.revenue:
        print(f"{point.month}: {format_currency(point.amount, currency)}")

    for entry in overpayment_report(stores.payments.state.items).values():
        if entry.is_overpaid:
            print(
                f"Overpaid invoice {entry.invoice_number}: "
                f"total={format_currency(entry.invoice_total, currency)}, "
                f"paid={format_currency(entry.total_paid, currency)}"
            )


if __name__ == "__main__":  # pragma: no cover
    main()
