"""
events.py - Minimal observer registration for players, games and views
"""

from collections import defaultdict
from typing import Any, Callable, Dict, List


class EventEmitter:
    """
    Keeps named lists of callbacks and invokes them synchronously.

    Callbacks run in registration order, inside the emit() call, so a
    notification has been fully delivered by the time emit() returns.
    """

    def __init__(self):
        self._listeners: Dict[str, List[Callable[..., Any]]] = defaultdict(list)

    def on(self, event: str, callback: Callable[..., Any]) -> Callable[..., Any]:
        """Register a callback for an event; returns the callback."""
        self._listeners[event].append(callback)
        return callback

    def off(self, event: str, callback: Callable[..., Any]) -> None:
        """Remove a previously registered callback (no-op if absent)."""
        listeners = self._listeners.get(event)
        if listeners and callback in listeners:
            listeners.remove(callback)

    def emit(self, event: str, *args: Any) -> None:
        # Copy so callbacks may unregister themselves while being called
        for callback in list(self._listeners.get(event, ())):
            callback(*args)

    def listener_count(self, event: str) -> int:
        return len(self._listeners.get(event, ()))
