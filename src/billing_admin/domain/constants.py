"""Domain constants for billing records."""

from typing import Literal


CLIENT_STATUSES = ("ACTIVE", "INACTIVE", "BLOCKED")

INVOICE_STATUSES = ("DRAFT", "PENDING", "PAID", "OVERDUE")

PAYMENT_METHODS = (
    "CASH",
    "CHECK",
    "BANK_TRANSFER",
    "CREDIT_CARD",
    "OTHER",
)

PAYMENT_STATUSES = ("PENDING", "COMPLETED", "FAILED", "REFUNDED")

# Two product schemas coexist on the backend; values are kept as received.
PRODUCT_TYPES = ("PRODUCT", "SERVICE")
LEGACY_PRODUCT_TYPES = ("product", "service")

PRODUCT_STATUSES = ("ACTIVE", "INACTIVE", "DISCONTINUED")
LEGACY_PRODUCT_STATUSES = ("active", "inactive", "discontinued")

SORT_DIRECTIONS = ("asc", "desc")

ClientStatus = Literal["ACTIVE", "INACTIVE", "BLOCKED"]
InvoiceStatus = Literal["DRAFT", "PENDING", "PAID", "OVERDUE"]
PaymentMethod = Literal["CASH", "CHECK", "BANK_TRANSFER", "CREDIT_CARD", "OTHER"]
PaymentStatus = Literal["PENDING", "COMPLETED", "FAILED", "REFUNDED"]
SortDirection = Literal["asc", "desc"]


__all__ = [
    "CLIENT_STATUSES",
    "INVOICE_STATUSES",
    "PAYMENT_METHODS",
    "PAYMENT_STATUSES",
    "PRODUCT_TYPES",
    "LEGACY_PRODUCT_TYPES",
    "PRODUCT_STATUSES",
    "LEGACY_PRODUCT_STATUSES",
    "SORT_DIRECTIONS",
    "ClientStatus",
    "InvoiceStatus",
    "PaymentMethod",
    "PaymentStatus",
    "SortDirection",
]
