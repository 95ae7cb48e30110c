"""Display formatting for amounts, dates and enumeration labels."""

from datetime import date, datetime
from decimal import Decimal

from billing_admin.utils.decimal_utils import coerce_decimal


CURRENCY_SYMBOLS = {
    "EUR": "€",
    "USD": "$",
    "GBP": "£",
    "JPY": "¥",
}

DEFAULT_DATE_FORMAT = "%m/%d/%Y"


def format_currency(value: Decimal | int | float | None, currency_code: str = "USD") -> str:
    """Format an amount with two decimals, thousands separators and symbol.

    Args:
        value: Amount to format; ``None`` renders as zero.
        currency_code: ISO currency code. Unknown codes are shown verbatim.

    Returns:
        str: Display string such as ``"1,234.50 $"`` or ``"-20.00 €"``.
    """
    amount = coerce_decimal(value)
    symbol = CURRENCY_SYMBOLS.get(currency_code.upper(), currency_code)
    return f"{amount:,.2f} {symbol}"


def format_delta(value: Decimal) -> str:
    """Format a signed delta, prefixing positives with ``+``."""
    sign = "+" if value >= 0 else ""
    return f"{sign}{value:,.2f}"


def format_date(
    value: date | datetime | str | None,
    date_format: str = DEFAULT_DATE_FORMAT,
) -> str:
    """Format a date for display.

    Args:
        value: Date, datetime or ISO-8601 string. ``None`` renders as ``"-"``.
        date_format: ``strftime`` pattern.

    Returns:
        str: Formatted date, or the raw string when it cannot be parsed.
    """
    if value is None:
        return "-"
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return value
    return value.strftime(date_format)


def format_month_label(month_key: str) -> str:
    """Turn a ``YYYY-MM`` key into a short ``MM/YY`` axis label."""
    year, _, month = month_key.partition("-")
    if not month:
        return month_key
    return f"{month}/{year[2:]}"


def format_method_label(method: str) -> str:
    """Turn ``BANK_TRANSFER`` into ``Bank Transfer``."""
    return " ".join(word.capitalize() for word in method.split("_") if word)


__all__ = [
    "CURRENCY_SYMBOLS",
    "DEFAULT_DATE_FORMAT",
    "format_currency",
    "format_delta",
    "format_date",
    "format_month_label",
    "format_method_label",
]
