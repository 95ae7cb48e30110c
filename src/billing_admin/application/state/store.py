"""Single-writer store wrapping an entity reducer."""

from collections.abc import Awaitable, Callable
from typing import Any, Generic, TypeVar

from billing_admin.application.state.events import (
    DEFAULT_ERROR_MESSAGES,
    Event,
    Fulfilled,
    Operation,
    Pending,
    Rejected,
)
from billing_admin.domain.exceptions import BillingError
from billing_admin.infrastructure.logging.logger import get_app_logger

S = TypeVar("S")

Listener = Callable[[S], None]


class Store(Generic[S]):
    """Hold one state value and advance it through a pure reducer.

    Events are applied in the order they are dispatched. For remote calls
    that is the order in which they resolve, not the order in which they
    were issued: the last resolution wins.
    """

    def __init__(
        self,
        reducer: Callable[[S, Event], S],
        initial_state: S,
        name: str = "store",
        logger=None,
    ) -> None:
        """Initialize the store.

        Args:
            reducer: Pure function computing the next state.
            initial_state: State before any event.
            name: Label used in log messages.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._reducer = reducer
        self._state = initial_state
        self._name = name
        self._logger = logger or get_app_logger()
        self._listeners: list[Listener] = []

    @property
    def state(self) -> S:
        return self._state

    def dispatch(self, event: Event) -> S:
        """Apply ``event`` and notify subscribers.

        Returns:
            The new state.
        """
        self._state = self._reducer(self._state, event)
        for listener in list(self._listeners):
            listener(self._state)
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener``; the returned callable unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def run(
        self,
        operation: Operation,
        call: Callable[[], Awaitable[Any]],
        error_message: str | None = None,
    ) -> Any:
        """Run a remote call between its pending and resolution events.

        Args:
            operation: Operation reported in the emitted events.
            call: Zero-argument coroutine factory performing the call.
            error_message: Fallback message when the failure carries none.

        Returns:
            The call result, or None when the call failed with a
            ``BillingError``. Failures are reported through ``error``.

        Raises:
            Exception: Any non-billing exception, after the rejection has
                been dispatched.
        """
        fallback = error_message or DEFAULT_ERROR_MESSAGES[operation]
        self.dispatch(Pending(operation))
        try:
            result = await call()
        except BillingError as exc:
            message = exc.message or fallback
            self._logger.warning(
                f"{self._name} {operation} rejected: {message}"
            )
            self.dispatch(Rejected(operation, message))
            return None
        except Exception:
            self.dispatch(Rejected(operation, fallback))
            raise
        self.dispatch(Fulfilled(operation, result))
        return result


__all__ = ["Store"]
