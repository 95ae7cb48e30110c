"""Domain validation helpers."""

from decimal import Decimal
from logging import Logger

from billing_admin.domain.constants import (
    CLIENT_STATUSES,
    INVOICE_STATUSES,
    LEGACY_PRODUCT_STATUSES,
    LEGACY_PRODUCT_TYPES,
    PAYMENT_METHODS,
    PAYMENT_STATUSES,
    PRODUCT_STATUSES,
    PRODUCT_TYPES,
)
from billing_admin.domain.exceptions import InvalidRecordError


def is_valid_client_status(status: str) -> bool:
    return status in CLIENT_STATUSES


def is_valid_invoice_status(status: str) -> bool:
    return status in INVOICE_STATUSES


def is_valid_payment_method(method: str) -> bool:
    return method in PAYMENT_METHODS


def is_valid_payment_status(status: str) -> bool:
    return status in PAYMENT_STATUSES


def is_valid_product_type(product_type: str) -> bool:
    """Return True for either the upper-case or the legacy lower-case type."""
    return product_type in PRODUCT_TYPES or product_type in LEGACY_PRODUCT_TYPES


def is_valid_product_status(status: str) -> bool:
    """Return True for either the upper-case or the legacy lower-case status."""
    return status in PRODUCT_STATUSES or status in LEGACY_PRODUCT_STATUSES


def validate_payment_amount(amount: Decimal) -> Decimal:
    """Return the amount when strictly positive.

    Args:
        amount: Payment amount.

    Returns:
        Decimal: The unchanged amount.

    Raises:
        InvalidRecordError: If the amount is zero, negative or not finite.
    """
    if not amount.is_finite() or amount <= 0:
        raise InvalidRecordError(
            f"Payment amount must be a positive number, got {amount}",
            details={"amount": str(amount)},
        )
    return amount


def warn_on_overpayment(
    invoice_number: str,
    balance: Decimal,
    logger: Logger,
) -> None:
    """Warn when an invoice balance is negative.

    Args:
        invoice_number: Display identifier of the invoice.
        balance: Computed invoice balance.
        logger: Logger used for warnings.
    """
    if balance < 0:
        logger.warning(
            f"Invoice {invoice_number} is overpaid by {abs(balance)}"
        )


__all__ = [
    "is_valid_client_status",
    "is_valid_invoice_status",
    "is_valid_payment_method",
    "is_valid_payment_status",
    "is_valid_product_type",
    "is_valid_product_status",
    "validate_payment_amount",
    "warn_on_overpayment",
]
