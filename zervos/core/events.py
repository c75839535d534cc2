"""
Change notification for state containers.

Containers notify after every mutation; readers subscribe a callback instead
of relying on a UI framework to re-render.
"""

from datetime import datetime
from typing import Any, Callable, Dict, List

from util.logging import logger


class StateEvent:
    """A single mutation of a state container."""

    def __init__(self, component: str, action: str, data: Dict[str, Any] = None):
        self.component = component
        self.action = action
        self.data = data or {}
        self.timestamp = datetime.now().isoformat()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "component": self.component,
            "action": self.action,
            "data": self.data,
            "timestamp": self.timestamp
        }

    def __repr__(self) -> str:
        return f"StateEvent({self.component}.{self.action})"


Listener = Callable[[StateEvent], None]


class StateNotifier:
    """Holds subscribers for one container and fans events out to them."""

    def __init__(self, component: str):
        self.component = component
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register listener; returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def notify(self, action: str, data: Dict[str, Any] = None) -> StateEvent:
        event = StateEvent(self.component, action, data)
        logger.log_state_change(self.component, action, data)

        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception as e:
                # A broken subscriber must not undo or block the mutation
                logger.error(f"Listener {listener!r} failed on {event!r}: {e}")
        return event

    @property
    def listener_count(self) -> int:
        return len(self._listeners)
