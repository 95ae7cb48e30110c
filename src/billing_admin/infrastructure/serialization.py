"""Mapping between backend JSON documents and domain records.

The backend speaks camelCase and may identify documents with either ``id``
or ``_id``. Amounts arrive as JSON numbers and are normalized to Decimal;
timestamps are normalized to timezone-aware UTC so that they stay
comparable when sorting.
"""

from collections.abc import Callable, Mapping
from dataclasses import asdict, is_dataclass
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any

from billing_admin.domain.exceptions import InvalidRecordError
from billing_admin.domain.models.records import (
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
from billing_admin.domain.services.validation import (
    is_valid_client_status,
    is_valid_invoice_status,
    is_valid_payment_method,
    is_valid_payment_status,
    is_valid_product_status,
    is_valid_product_type,
)
from billing_admin.utils.decimal_utils import coerce_decimal


Document = Mapping[str, Any]


def to_camel(name: str) -> str:
    """Return ``name`` converted from snake_case to camelCase."""
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def to_wire(value: Any) -> Any:
    """Convert record fields into a JSON-serializable wire value.

    Mapping keys are converted to camelCase, dataclasses are expanded,
    Decimals become floats and dates become ISO strings.
    """
    if is_dataclass(value) and not isinstance(value, type):
        return to_wire(asdict(value))
    if isinstance(value, Mapping):
        return {to_camel(str(key)): to_wire(item) for key, item in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        items = sorted(value) if isinstance(value, (set, frozenset)) else value
        return [to_wire(item) for item in items]
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return value


def draft_to_wire(draft: PaymentDraft) -> dict[str, Any]:
    """Return the request body used to record a payment."""
    body = to_wire(draft)
    return {key: item for key, item in body.items() if item is not None}


def client_from_wire(data: Document) -> Client:
    """Build a ``Client`` from a backend document.

    Raises:
        InvalidRecordError: If required fields are missing or the status is
            not a known client status.
    """
    status = _require(data, "status", "client")
    if not is_valid_client_status(status):
        raise _invalid("client", "status", status)
    credit_limit = data.get("creditLimit")
    return Client(
        id=_record_id(data, "client"),
        name=_require(data, "name", "client"),
        email=data.get("email") or "",
        status=status,
        currency=data.get("currency") or "USD",
        phone=data.get("phone"),
        company=_company_from_wire(data.get("company")),
        address=_address_from_wire(data.get("address")),
        tax_id=data.get("taxId"),
        notes=data.get("notes"),
        credit_limit=(
            None
            if credit_limit is None
            else _decimal(credit_limit, "client", "creditLimit")
        ),
        payment_terms=data.get("paymentTerms"),
        tags=frozenset(data.get("tags") or ()),
        created_at=_datetime(data.get("createdAt"), "client", "createdAt"),
        updated_at=_datetime(data.get("updatedAt"), "client", "updatedAt"),
    )


def product_from_wire(data: Document) -> Product:
    """Build a ``Product`` from a backend document.

    Both the upper-case and the legacy lower-case enumerations are accepted
    and kept as received.
    """
    product_type = _require(data, "type", "product")
    if not is_valid_product_type(product_type):
        raise _invalid("product", "type", product_type)
    status = _require(data, "status", "product")
    if not is_valid_product_status(status):
        raise _invalid("product", "status", status)
    price = data.get("price")
    if not isinstance(price, Mapping):
        raise InvalidRecordError(
            "Product price must be an object with amount and currency",
            details={"field": "price"},
        )
    inventory = data.get("inventory")
    tax_rate = data.get("taxRate")
    return Product(
        id=_record_id(data, "product"),
        name=_require(data, "name", "product"),
        price=Money(
            amount=_decimal(price.get("amount"), "product", "price.amount"),
            currency=price.get("currency") or "USD",
        ),
        type=product_type,
        status=status,
        sku=data.get("sku"),
        description=data.get("description"),
        unit=data.get("unit"),
        tax_rate=(
            None if tax_rate is None else _decimal(tax_rate, "product", "taxRate")
        ),
        inventory=(
            Inventory(
                quantity=int(inventory.get("quantity") or 0),
                low_stock_alert=int(inventory.get("lowStockAlert") or 0),
            )
            if isinstance(inventory, Mapping)
            else None
        ),
        category=data.get("category"),
        tags=frozenset(data.get("tags") or ()),
        images=tuple(
            ProductImage(url=image.get("url", ""), alt=image.get("alt") or "")
            for image in data.get("images") or ()
        ),
    )


def invoice_from_wire(data: Document) -> Invoice:
    """Build an ``Invoice`` from a backend document, payments included."""
    status = _require(data, "status", "invoice")
    if not is_valid_invoice_status(status):
        raise _invalid("invoice", "status", status)
    return Invoice(
        id=_record_id(data, "invoice"),
        invoice_number=_require(data, "invoiceNumber", "invoice"),
        client=_client_snapshot(data.get("client"), "invoice"),
        status=status,
        items=tuple(_item_from_wire(item) for item in data.get("items") or ()),
        payments=tuple(
            _payment_snapshot(payment) for payment in data.get("payments") or ()
        ),
        invoice_date=_date(data.get("invoiceDate"), "invoice", "invoiceDate"),
        due_date=_date(data.get("dueDate"), "invoice", "dueDate"),
        created_at=_datetime(data.get("createdAt"), "invoice", "createdAt"),
        notes=data.get("notes"),
        terms=data.get("terms"),
        subtotal=_optional_decimal(data, "subtotal", "invoice"),
        tax=_optional_decimal(data, "tax", "invoice"),
        discount=_optional_decimal(data, "discount", "invoice"),
        total=_optional_decimal(data, "total", "invoice"),
    )


def payment_from_wire(data: Document) -> Payment:
    """Build a ``Payment`` from a backend document."""
    method = _require(data, "method", "payment")
    if not is_valid_payment_method(method):
        raise _invalid("payment", "method", method)
    status = data.get("status")
    if status is not None and not is_valid_payment_status(status):
        raise _invalid("payment", "status", status)
    paid_on = _date(_require(data, "date", "payment"), "payment", "date")
    return Payment(
        id=_record_id(data, "payment"),
        invoice=_invoice_snapshot(data.get("invoice")),
        amount=_decimal(_require(data, "amount", "payment"), "payment", "amount"),
        date=paid_on,
        method=method,
        status=status,
        reference=data.get("reference"),
        notes=data.get("notes"),
        created_at=_datetime(data.get("createdAt"), "payment", "createdAt"),
        updated_at=_datetime(data.get("updatedAt"), "payment", "updatedAt"),
    )


def many(parse: Callable[[Document], Any], payload: Any, record: str) -> list:
    """Parse a JSON array with ``parse``.

    Raises:
        InvalidRecordError: If the payload is not a list of objects.
    """
    if not isinstance(payload, list):
        raise InvalidRecordError(
            f"Expected a list of {record} documents",
            details={"received": type(payload).__name__},
        )
    return [parse(_document(item, record)) for item in payload]


def one(parse: Callable[[Document], Any], payload: Any, record: str) -> Any:
    """Parse a single JSON object with ``parse``."""
    return parse(_document(payload, record))


def _document(payload: Any, record: str) -> Document:
    if not isinstance(payload, Mapping):
        raise InvalidRecordError(
            f"Expected a {record} document",
            details={"received": type(payload).__name__},
        )
    return payload


def _record_id(data: Document, record: str) -> str:
    value = data.get("id", data.get("_id"))
    if value is None or value == "":
        raise InvalidRecordError(
            f"Missing id in {record} document", details={"field": "id"}
        )
    return str(value)


def _require(data: Document, key: str, record: str) -> Any:
    value = data.get(key)
    if value is None:
        raise InvalidRecordError(
            f"Missing {key} in {record} document", details={"field": key}
        )
    return value


def _invalid(record: str, key: str, value: Any) -> InvalidRecordError:
    return InvalidRecordError(
        f"Unknown {record} {key}: {value!r}",
        details={"field": key, "value": value},
    )


def _decimal(value: Any, record: str, key: str) -> Decimal:
    try:
        return coerce_decimal(value)
    except ValueError as exc:
        raise InvalidRecordError(
            f"Invalid {key} in {record} document: {value!r}",
            details={"field": key},
        ) from exc


def _optional_decimal(data: Document, key: str, record: str) -> Decimal | None:
    value = data.get(key)
    return None if value is None else _decimal(value, record, key)


def _datetime(value: Any, record: str, key: str) -> datetime | None:
    if value is None or value == "":
        return None
    try:
        parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    except ValueError as exc:
        raise InvalidRecordError(
            f"Invalid {key} in {record} document: {value!r}",
            details={"field": key},
        ) from exc
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _date(value: Any, record: str, key: str) -> date | None:
    """Parse a calendar date; full timestamps keep their UTC date."""
    if value is None or value == "":
        return None
    text = str(value)
    if len(text) == 10:
        try:
            return date.fromisoformat(text)
        except ValueError as exc:
            raise InvalidRecordError(
                f"Invalid {key} in {record} document: {value!r}",
                details={"field": key},
            ) from exc
    return _datetime(text, record, key).date()


def _address_from_wire(data: Any) -> Address | None:
    if not isinstance(data, Mapping):
        return None
    return Address(
        street=data.get("street") or "",
        city=data.get("city") or "",
        state=data.get("state") or "",
        zip_code=data.get("zipCode") or data.get("postalCode") or "",
        country=data.get("country") or "",
    )


def _company_from_wire(data: Any) -> CompanyInfo | None:
    if isinstance(data, str):
        return CompanyInfo(name=data) if data else None
    if not isinstance(data, Mapping) or not data.get("name"):
        return None
    return CompanyInfo(
        name=data["name"],
        tax_id=data.get("taxId"),
        registration_number=data.get("registrationNumber"),
    )


def _client_snapshot(data: Any, record: str) -> ClientSnapshot:
    # Unpopulated references arrive as a bare id.
    if isinstance(data, str):
        return ClientSnapshot(id=data, name="")
    if not isinstance(data, Mapping):
        raise InvalidRecordError(
            f"Missing client in {record} document", details={"field": "client"}
        )
    address = data.get("address")
    if isinstance(address, Mapping):
        address = ", ".join(
            str(part)
            for part in (
                address.get("street"),
                address.get("city"),
                address.get("country"),
            )
            if part
        )
    return ClientSnapshot(
        id=_record_id(data, "client"),
        name=data.get("name") or "",
        email=data.get("email") or "",
        address=address or "",
    )


def _item_from_wire(data: Any) -> InvoiceItem:
    item = _document(data, "invoice item")
    product = item.get("product")
    if isinstance(product, Mapping):
        product = product.get("id", product.get("_id"))
    tax = item.get("tax", item.get("taxRate"))
    discount = item.get("discount")
    quantity = item.get("quantity") or 0
    try:
        quantity = int(quantity)
    except (TypeError, ValueError) as exc:
        raise InvalidRecordError(
            f"Invalid quantity in invoice item: {quantity!r}",
            details={"field": "quantity"},
        ) from exc
    return InvoiceItem(
        description=item.get("description") or "",
        quantity=quantity,
        price=_decimal(item.get("price"), "invoice item", "price"),
        id=item.get("id", item.get("_id")),
        product_id=product,
        tax=None if tax is None else _decimal(tax, "invoice item", "tax"),
        discount=(
            None
            if discount is None
            else _decimal(discount, "invoice item", "discount")
        ),
    )


def _payment_snapshot(data: Any) -> PaymentSnapshot:
    payment = _document(data, "invoice payment")
    return PaymentSnapshot(
        id=_record_id(payment, "invoice payment"),
        amount=_decimal(payment.get("amount"), "invoice payment", "amount"),
        date=_date(payment.get("date"), "invoice payment", "date"),
        method=payment.get("method"),
    )


def _invoice_snapshot(data: Any) -> InvoiceSnapshot:
    if isinstance(data, str):
        return InvoiceSnapshot(
            id=data,
            invoice_number="",
            client=ClientSnapshot(id="", name=""),
            total=coerce_decimal(None),
        )
    invoice = _document(data, "payment invoice")
    return InvoiceSnapshot(
        id=_record_id(invoice, "payment invoice"),
        invoice_number=invoice.get("invoiceNumber") or "",
        client=_client_snapshot(invoice.get("client"), "payment invoice"),
        total=_decimal(invoice.get("total"), "payment invoice", "total"),
    )


__all__ = [
    "to_camel",
    "to_wire",
    "draft_to_wire",
    "client_from_wire",
    "product_from_wire",
    "invoice_from_wire",
    "payment_from_wire",
    "many",
    "one",
]
