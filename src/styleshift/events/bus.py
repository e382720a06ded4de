"""Simple synchronous event bus for rule, link and property events."""

from typing import Any, Callable


class EventBus:
    """Synchronous publish-subscribe event bus.

    Listeners can subscribe to specific event types or receive all events.
    Events are dispatched synchronously in registration order. A listener
    added or removed while an event is being dispatched takes effect with
    the next event.
    """

    def __init__(self) -> None:
        self._listeners: dict[type, list[Callable]] = {}
        self._global_listeners: list[Callable] = []

    def subscribe(self, event_type: type, callback: Callable) -> None:
        """Register a callback for a specific event type."""
        self._listeners.setdefault(event_type, []).append(callback)

    def unsubscribe(self, event_type: type, callback: Callable) -> None:
        """Remove a callback registered with :meth:`subscribe`.

        Removing a callback that is not registered does nothing.
        """
        callbacks = self._listeners.get(event_type)
        if callbacks and callback in callbacks:
            callbacks.remove(callback)
            if not callbacks:
                del self._listeners[event_type]

    def on_all(self, callback: Callable) -> None:
        """Register a callback that receives every event."""
        self._global_listeners.append(callback)

    def off_all(self, callback: Callable) -> None:
        """Remove a callback registered with :meth:`on_all`."""
        if callback in self._global_listeners:
            self._global_listeners.remove(callback)

    def has_listeners(self) -> bool:
        return bool(self._listeners) or bool(self._global_listeners)

    def emit(self, event: Any) -> None:
        """Dispatch an event to all matching listeners."""
        for cb in list(self._global_listeners):
            cb(event)
        for cb in list(self._listeners.get(type(event), [])):
            cb(event)
