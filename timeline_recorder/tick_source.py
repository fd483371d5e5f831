"""
Tick source contract and a minimal in-process implementation.

A tick source emits a named event carrying one number. What the number means
depends on who listens: the capture engine reads it as the time elapsed since
the previous tick, the playback engine as an absolute timeline position.
"""

from collections import defaultdict
from typing import Callable, DefaultDict, List, Optional, Protocol
import logging

logger = logging.getLogger(__name__)

DEFAULT_EVENT = "update"

TickCallback = Callable[[float], None]


class TickSource(Protocol):
    """Anything the recorder can subscribe its engines to."""

    def subscribe(self, event_name: str, callback: TickCallback) -> None:
        ...

    def unsubscribe(self, event_name: str, callback: TickCallback) -> None:
        ...


class Ticker:
    """
    Synchronous in-process tick source.

    Listeners are called in subscription order on the emitting thread.
    Exceptions raised by a listener propagate to the caller of emit().
    """

    def __init__(self, default_event: str = DEFAULT_EVENT):
        self.default_event = default_event
        self._listeners: DefaultDict[str, List[TickCallback]] = defaultdict(list)

    def subscribe(self, event_name: str, callback: TickCallback):
        listeners = self._listeners[event_name]
        if callback in listeners:
            return
        listeners.append(callback)
        logger.debug(f"Subscribed {getattr(callback, '__qualname__', callback)} to '{event_name}'")

    def unsubscribe(self, event_name: str, callback: TickCallback):
        listeners = self._listeners.get(event_name)
        if not listeners or callback not in listeners:
            return
        listeners.remove(callback)
        logger.debug(f"Unsubscribed {getattr(callback, '__qualname__', callback)} from '{event_name}'")
        if not listeners:
            del self._listeners[event_name]

    def emit(self, event_name: str, value: float):
        """Deliver a value to every listener of an event."""
        for callback in list(self._listeners.get(event_name, ())):
            callback(value)

    def tick(self, value: float):
        """Emit on the default event."""
        self.emit(self.default_event, value)

    def listener_count(self, event_name: Optional[str] = None) -> int:
        return len(self._listeners.get(event_name or self.default_event, ()))
