"""Minimal observer registry with idempotent subscription handles."""

import logging
from typing import Any, Callable, Generic, TypeVar

logger = logging.getLogger(__name__)

HandlerT = TypeVar("HandlerT", bound=Callable[..., Any])


class Subscription:
    """Handle returned by EventRegistry.subscribe.

    ``unsubscribe()`` may be called any number of times, including after the
    registry has been cleared.
    """

    def __init__(self, registry: "EventRegistry", handler: Callable[..., Any]):
        self._registry = registry
        self._handler = handler
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def unsubscribe(self) -> None:
        if not self._active:
            return
        self._active = False
        self._registry._remove(self._handler)


class EventRegistry(Generic[HandlerT]):
    """Ordered set of handlers for one named event."""

    def __init__(self, name: str):
        self.name = name
        self._handlers: list[HandlerT] = []

    def __len__(self) -> int:
        return len(self._handlers)

    def subscribe(self, handler: HandlerT) -> Subscription:
        self._handlers.append(handler)
        return Subscription(self, handler)

    def _remove(self, handler: HandlerT) -> None:
        try:
            self._handlers.remove(handler)
        except ValueError:
            pass

    def clear(self) -> None:
        self._handlers.clear()

    def emit(self, *args: Any) -> None:
        """Call every handler; a failing handler does not stop the others."""
        for handler in list(self._handlers):
            try:
                handler(*args)
            except Exception:
                logger.exception(f"Handler for '{self.name}' event failed")
