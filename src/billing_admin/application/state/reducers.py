"""Pure reducers for the entity stores.

A reducer takes the current state and one event and returns the next
state. Rejections only touch ``loading`` and ``error``; reconciliation of
an id that is not in ``items`` is a no-op since the next full fetch is
authoritative.
"""

from dataclasses import replace
from typing import Any, TypeVar

from billing_admin.application.state.events import (
    AddTag,
    ClearError,
    ClearFilters,
    ClearSelected,
    Event,
    Fulfilled,
    Pending,
    Rejected,
    RemoveTag,
    SetFilters,
    SetSort,
)
from billing_admin.application.state.state import ClientsState, EntityState

S = TypeVar("S", bound=EntityState)

_REPLACE_ITEMS = ("FETCH_ALL", "SEARCH", "FETCH_BY_INVOICE")
_REPLACE_ONE = ("UPDATE", "STATUS_CHANGE", "RECORD_PAYMENT")


def _same_id(record: Any, record_id: str) -> bool:
    return record is not None and record.id == record_id


def _replace_by_id(items: tuple, record: Any) -> tuple:
    if not any(item.id == record.id for item in items):
        return items
    return tuple(record if item.id == record.id else item for item in items)


def _apply_fulfilled(state: S, event: Fulfilled) -> S:
    operation = event.operation
    payload = event.payload
    if operation in _REPLACE_ITEMS:
        return replace(state, items=tuple(payload or ()), loading=False)
    if operation == "FETCH_ONE":
        return replace(state, selected=payload, loading=False)
    if operation == "CREATE":
        return replace(state, items=state.items + (payload,), loading=False)
    if operation in _REPLACE_ONE:
        selected = payload if _same_id(state.selected, payload.id) else state.selected
        return replace(
            state,
            items=_replace_by_id(state.items, payload),
            selected=selected,
            loading=False,
        )
    if operation == "DELETE":
        items = tuple(item for item in state.items if item.id != payload)
        if len(items) == len(state.items):
            items = state.items
        selected = None if _same_id(state.selected, payload) else state.selected
        return replace(state, items=items, selected=selected, loading=False)
    return replace(state, loading=False)


def reduce_entity(state: S, event: Event) -> S:
    """Return the state following ``event``.

    Args:
        state: Current entity state.
        event: Lifecycle or UI event.

    Returns:
        EntityState: Next state. Unknown events return ``state`` unchanged.
    """
    if isinstance(event, Pending):
        return replace(state, loading=True, error=None)
    if isinstance(event, Fulfilled):
        return _apply_fulfilled(state, event)
    if isinstance(event, Rejected):
        return replace(state, loading=False, error=event.message)
    if isinstance(event, ClearError):
        return replace(state, error=None)
    if isinstance(event, ClearSelected):
        return replace(state, selected=None)
    if isinstance(event, SetFilters):
        return replace(state, filters=replace(state.filters, **event.changes))
    if isinstance(event, ClearFilters):
        return replace(state, filters=type(state.filters)())
    if isinstance(event, SetSort):
        return replace(state, sort=event.sort)
    return state


def reduce_clients(state: ClientsState, event: Event) -> ClientsState:
    """Client reducer: entity transitions plus sub-selections and tags."""
    if isinstance(event, Fulfilled):
        if event.operation == "FETCH_RELATED_INVOICES":
            return replace(
                state,
                selected_invoices=tuple(event.payload or ()),
                loading=False,
            )
        if event.operation == "FETCH_RELATED_PAYMENTS":
            return replace(
                state,
                selected_payments=tuple(event.payload or ()),
                loading=False,
            )
    if isinstance(event, ClearSelected):
        return replace(
            state,
            selected=None,
            selected_invoices=(),
            selected_payments=(),
        )
    if isinstance(event, AddTag):
        tags = state.filters.tags
        if event.tag in tags:
            return state
        return replace(state, filters=replace(state.filters, tags=tags | {event.tag}))
    if isinstance(event, RemoveTag):
        tags = state.filters.tags - {event.tag}
        return replace(state, filters=replace(state.filters, tags=tags))
    return reduce_entity(state, event)


__all__ = ["reduce_entity", "reduce_clients"]
