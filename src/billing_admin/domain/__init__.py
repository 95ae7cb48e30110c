"""Domain package for billing records and financial rules."""

from .constants import (
    CLIENT_STATUSES,
    INVOICE_STATUSES,
    PAYMENT_METHODS,
    PAYMENT_STATUSES,
)
from .exceptions import BillingError, InvalidRecordError, RemoteCallError
from .models import (
    Client,
    Invoice,
    InvoiceItem,
    Payment,
    PortfolioMetrics,
    Product,
)

__all__ = [
    "CLIENT_STATUSES",
    "INVOICE_STATUSES",
    "PAYMENT_METHODS",
    "PAYMENT_STATUSES",
    "BillingError",
    "InvalidRecordError",
    "RemoteCallError",
    "Client",
    "Invoice",
    "InvoiceItem",
    "Payment",
    "PortfolioMetrics",
    "Product",
]
