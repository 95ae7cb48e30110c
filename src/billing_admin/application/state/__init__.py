"""Per-entity state containers."""

from .events import (
    AddTag,
    ClearError,
    ClearFilters,
    ClearSelected,
    Fulfilled,
    Pending,
    Rejected,
    RemoveTag,
    SetFilters,
    SetSort,
)
from .reducers import reduce_clients, reduce_entity
from .state import (
    ClientsState,
    EntityState,
    initial_clients_state,
    initial_invoices_state,
    initial_payments_state,
    initial_products_state,
)
from .store import Store

__all__ = [
    "AddTag",
    "ClearError",
    "ClearFilters",
    "ClearSelected",
    "Fulfilled",
    "Pending",
    "Rejected",
    "RemoveTag",
    "SetFilters",
    "SetSort",
    "reduce_clients",
    "reduce_entity",
    "ClientsState",
    "EntityState",
    "initial_clients_state",
    "initial_invoices_state",
    "initial_payments_state",
    "initial_products_state",
    "Store",
]
