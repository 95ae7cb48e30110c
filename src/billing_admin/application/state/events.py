"""Events consumed by the entity state reducers.

Remote-sync operations emit a ``Pending`` event when issued and exactly one
``Fulfilled`` or ``Rejected`` event when they resolve. The remaining events
are local UI intents that never touch the backend.
"""

from dataclasses import dataclass
from typing import Any, Literal

from billing_admin.domain.services.filtering import SortSpec


Operation = Literal[
    "FETCH_ALL",
    "FETCH_ONE",
    "CREATE",
    "UPDATE",
    "STATUS_CHANGE",
    "DELETE",
    "SEARCH",
    "FETCH_RELATED_INVOICES",
    "FETCH_RELATED_PAYMENTS",
    "FETCH_BY_INVOICE",
    "RECORD_PAYMENT",
    "DOWNLOAD_PDF",
]


@dataclass(frozen=True)
class Pending:
    operation: Operation


@dataclass(frozen=True)
class Fulfilled:
    """Successful resolution.

    ``payload`` is a tuple of records for collection operations, a record
    for single-record operations, and the deleted id for ``DELETE``.
    """

    operation: Operation
    payload: Any = None


@dataclass(frozen=True)
class Rejected:
    operation: Operation
    message: str


@dataclass(frozen=True)
class ClearError:
    pass


@dataclass(frozen=True)
class ClearSelected:
    pass


@dataclass(frozen=True)
class SetFilters:
    """Merge ``changes`` (field name to value) into the active filters."""

    changes: dict[str, Any]


@dataclass(frozen=True)
class ClearFilters:
    pass


@dataclass(frozen=True)
class SetSort:
    sort: SortSpec


@dataclass(frozen=True)
class AddTag:
    tag: str


@dataclass(frozen=True)
class RemoveTag:
    tag: str


Event = (
    Pending
    | Fulfilled
    | Rejected
    | ClearError
    | ClearSelected
    | SetFilters
    | ClearFilters
    | SetSort
    | AddTag
    | RemoveTag
)


DEFAULT_ERROR_MESSAGES: dict[Operation, str] = {
    "FETCH_ALL": "Failed to fetch records",
    "FETCH_ONE": "Failed to fetch record",
    "CREATE": "Failed to create record",
    "UPDATE": "Failed to update record",
    "STATUS_CHANGE": "Failed to update status",
    "DELETE": "Failed to delete record",
    "SEARCH": "Failed to search records",
    "FETCH_RELATED_INVOICES": "Failed to fetch invoices",
    "FETCH_RELATED_PAYMENTS": "Failed to fetch payments",
    "FETCH_BY_INVOICE": "Failed to fetch payments for invoice",
    "RECORD_PAYMENT": "Failed to record payment",
    "DOWNLOAD_PDF": "Failed to generate PDF",
}


__all__ = [
    "Operation",
    "Pending",
    "Fulfilled",
    "Rejected",
    "ClearError",
    "ClearSelected",
    "SetFilters",
    "ClearFilters",
    "SetSort",
    "AddTag",
    "RemoveTag",
    "Event",
    "DEFAULT_ERROR_MESSAGES",
]
