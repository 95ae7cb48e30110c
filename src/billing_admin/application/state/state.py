"""State records held by the per-entity stores."""

from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from billing_admin.domain.models import Client, Invoice, Payment, Product
from billing_admin.domain.services.filtering import (
    ClientFilters,
    InvoiceFilters,
    PaymentFilters,
    ProductFilters,
    SortSpec,
)

T = TypeVar("T")


@dataclass(frozen=True)
class EntityState(Generic[T]):
    """Authoritative in-memory view of one entity collection.

    Attributes:
        items: Collection as last reported by the backend.
        selected: Record loaded through a fetch-one call, if any.
        loading: True while the latest issued call has not resolved.
        error: Message of the latest failed call, if any.
        filters: Active filter configuration for display.
        sort: Active sort configuration for display.
    """

    items: tuple[T, ...] = ()
    selected: T | None = None
    loading: bool = False
    error: str | None = None
    filters: Any = None
    sort: SortSpec = field(default_factory=SortSpec)


@dataclass(frozen=True)
class ClientsState(EntityState[Client]):
    """Client state with the selected client's invoices and payments."""

    selected_invoices: tuple[Invoice, ...] = ()
    selected_payments: tuple[Payment, ...] = ()


def initial_clients_state() -> ClientsState:
    return ClientsState(filters=ClientFilters(), sort=SortSpec(None, "asc"))


def initial_invoices_state() -> EntityState[Invoice]:
    return EntityState(filters=InvoiceFilters(), sort=SortSpec(None, "desc"))


def initial_payments_state() -> EntityState[Payment]:
    return EntityState(filters=PaymentFilters(), sort=SortSpec(None, "desc"))


def initial_products_state() -> EntityState[Product]:
    return EntityState(filters=ProductFilters(), sort=SortSpec(None, "asc"))


__all__ = [
    "EntityState",
    "ClientsState",
    "initial_clients_state",
    "initial_invoices_state",
    "initial_payments_state",
    "initial_products_state",
]
