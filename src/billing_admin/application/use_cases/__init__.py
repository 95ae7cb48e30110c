"""Application use cases package."""

from .client_sync import ClientSync
from .entity_sync import EntitySync
from .get_dashboard_summary import DashboardView, GetDashboardSummaryUseCase
from .invoice_sync import InvoiceSync
from .payment_sync import PaymentSync
from .product_sync import ProductSync

__all__ = [
    "ClientSync",
    "EntitySync",
    "DashboardView",
    "GetDashboardSummaryUseCase",
    "InvoiceSync",
    "PaymentSync",
    "ProductSync",
]
