# event_dispatcher.py

from collections import defaultdict
import re
import traceback
from typing import Any, Callable, Dict, List, Optional
from loggers import EventLogger


class Event:
    """
    Represents an event with type, data, and metadata.
    """

    def __init__(self, event_type: str, data: Any = None, metadata: Optional[Dict[str, Any]] = None):
        """
        Initializes an Event instance.

        Args:
            event_type (str): The type of the event, using colon-separated namespacing.
            data (Any, optional): The data associated with the event.
            metadata (Dict[str, Any], optional): Additional metadata for the event.
        """
        self.event_type = event_type
        self.data = data
        self.metadata = metadata or {}

    def __repr__(self):
        return f"Event({self.event_type!r}, {self.data!r})"


class EventDispatcher:
    """
    Manages event listeners, dispatching, and listener prioritization.

    The simulation only ever talks to the outside world through a dispatcher:
    renderers, loggers and tests subscribe to the event types they care about.
    """

    def __init__(self):
        self.listeners: Dict[str, List[Dict[str, Any]]] = defaultdict(list)
        self.wildcard_listeners: List[Dict[str, Any]] = []
        # prefixes that are dispatched but not written to the event log
        self.event_filter: List[str] = ['timer']

    @staticmethod
    def _compile(event_type: str):
        return re.compile('.*'.join(re.escape(part) for part in event_type.split('*')))

    def add_listener(self, event_type: str, callback: Callable, priority: int = 0) -> None:
        """
        Subscribes a callback.

        Args:
            event_type (str): Exact type such as 'food:placed', or a pattern
                with '*' such as 'rabbit:*'.
            callback (Callable): Called with the Event.
            priority (int, optional): Higher runs earlier; equal priorities keep
                subscription order.
        """
        listener = {"callback": callback, "priority": priority}
        if '*' in event_type:
            listener["event_type"] = event_type
            listener["pattern"] = self._compile(event_type)
            self.wildcard_listeners.append(listener)
        else:
            self.listeners[event_type].append(listener)
            self.listeners[event_type].sort(key=lambda x: x["priority"], reverse=True)

    def remove_listener(self, event_type: str, callback: Callable) -> None:
        """Unsubscribes a callback from the exact type or pattern it was added with."""
        if '*' in event_type:
            self.wildcard_listeners = [
                l for l in self.wildcard_listeners
                if not (l["event_type"] == event_type and l["callback"] == callback)
            ]
        elif event_type in self.listeners:
            self.listeners[event_type] = [l for l in self.listeners[event_type] if l["callback"] != callback]

    def _get_listeners(self, event: Event) -> List[Dict[str, Any]]:
        """Exact and wildcard listeners for the event, highest priority first."""
        matched = list(self.listeners.get(event.event_type, ()))
        matched.extend(l for l in self.wildcard_listeners if l["pattern"].fullmatch(event.event_type))
        matched.sort(key=lambda x: x["priority"], reverse=True)
        return matched

    def _log_event(self, event: Event) -> None:
        if not any(event.event_type.startswith(prefix + ':') for prefix in self.event_filter):
            EventLogger.log_event_dispatch(event.event_type, event.data, event.metadata)

    def dispatch_event(self, event: Event) -> None:
        """
        Synchronously dispatches an event to all registered listeners.

        A failing listener is logged and skipped; it never interrupts the
        caller or the remaining listeners.
        """
        self._log_event(event)
        for listener in self._get_listeners(event):
            try:
                listener["callback"](event)
            except Exception as e:
                EventLogger.error(
                    f"Listener {listener['callback']!r} failed on {event.event_type}: "
                    f"{type(e).__name__}: {e}\n{traceback.format_exc()}"
                )
