"""Domain models package."""

from .finance import (
    AccountSummary,
    ClientAnalytics,
    ClientRollup,
    InvoiceStats,
    MethodStats,
    MonthlyAmount,
    MonthlyTrend,
    OverpaymentEntry,
    PortfolioMetrics,
    ProductRollup,
)
from .records import (
    Address,
    Client,
    ClientSnapshot,
    CompanyInfo,
    Inventory,
    Invoice,
    InvoiceItem,
    InvoiceSnapshot,
    Money,
    Payment,
    PaymentDraft,
    PaymentSnapshot,
    Product,
    ProductImage,
)

__all__ = [
    "AccountSummary",
    "ClientAnalytics",
    "ClientRollup",
    "InvoiceStats",
    "MethodStats",
    "MonthlyAmount",
    "MonthlyTrend",
    "OverpaymentEntry",
    "PortfolioMetrics",
    "ProductRollup",
    "Address",
    "Client",
    "ClientSnapshot",
    "CompanyInfo",
    "Inventory",
    "Invoice",
    "InvoiceItem",
    "InvoiceSnapshot",
    "Money",
    "Payment",
    "PaymentDraft",
    "PaymentSnapshot",
    "Product",
    "ProductImage",
]
