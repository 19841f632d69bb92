import logging
from typing import Callable, Dict, List

logger = logging.getLogger(__name__)

# Event names emitted by the filtering views
CONTENTS_CHANGED = "contents_changed"
QUERY_CLEARED = "query_cleared"
TRANSFERRED = "transferred"


class EventEmitter:
    """
    Simple event emitter used in place of Qt Signals in core logic.
    Callbacks run synchronously in the emitter's thread.
    """
    def __init__(self):
        self._listeners: Dict[str, List[Callable]] = {}

    def on(self, event_name: str, callback: Callable):
        """Register a callback for an event."""
        if event_name not in self._listeners:
            self._listeners[event_name] = []
        self._listeners[event_name].append(callback)

    def off(self, event_name: str, callback: Callable):
        """Unregister a callback."""
        if event_name in self._listeners:
            try:
                self._listeners[event_name].remove(callback)
            except ValueError:
                pass

    def emit(self, event_name: str, *args, **kwargs):
        """Emit an event, calling all registered listeners."""
        for callback in list(self._listeners.get(event_name, [])):
            try:
                callback(*args, **kwargs)
            except Exception:
                # One broken display binding must not stop the others
                logger.exception(f"Error in listener for '{event_name}'")

    def listener_count(self, event_name: str) -> int:
        return len(self._listeners.get(event_name, []))

    def clear(self):
        """Remove all listeners."""
        self._listeners.clear()
