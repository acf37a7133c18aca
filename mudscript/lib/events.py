"""
Event posting for variable change notifications.

Provides a minimal publish/subscribe hub keyed by event name, and a
`NulloEvents` sink for stores that nobody observes. The variable store posts
through an `Events` instance from its own delivery thread, so handlers run
off the writer's path.

Example:
    events = EventHub()
    events.subscribe("variable:changed", lambda key, data: print(data))
    events.post("variable:changed", {"roomid": "42"})
"""

from typing import Callable, Protocol, Any
import threading
from mudscript.lib.log import LOG

EventHandler = Callable[[str, dict[str, Any]], None]


class Events(Protocol):
    """Protocol for event sinks used by the variable store."""

    def post(self, key: str, data: dict[str, Any]) -> None: ...


class NulloEvents:
    """Event sink that discards everything."""

    def post(self, key: str, data: dict[str, Any]) -> None:
        pass


class EventHub:
    """Dispatches posted events to subscribed handlers.

    Handlers are called in subscription order. A failing handler is logged
    and does not prevent delivery to the remaining handlers.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, list[EventHandler]] = {}
        self._lock: threading.Lock = threading.Lock()

    def subscribe(self, key: str, handler: EventHandler) -> None:
        with self._lock:
            self._handlers.setdefault(key, []).append(handler)

    def unsubscribe(self, key: str, handler: EventHandler) -> None:
        with self._lock:
            handlers: list[EventHandler] = self._handlers.get(key, [])
            if handler in handlers:
                handlers.remove(handler)

    def post(self, key: str, data: dict[str, Any]) -> None:
        with self._lock:
            handlers: list[EventHandler] = list(self._handlers.get(key, []))

        for handler in handlers:
            try:
                handler(key, data)
            except Exception as e:
                LOG(f"Event handler for '{key}' failed: {e}")
