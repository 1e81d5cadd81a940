"""In-process publish/subscribe used to announce state changes."""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, List, TypeVar

TEvent = TypeVar("TEvent")
Listener = Callable[[TEvent], None]


@dataclass(frozen=True)
class ItemStored:
    """An item was written to the store."""
    id: str
    item: Dict[str, Any]


@dataclass(frozen=True)
class ItemDeleted:
    """An item was removed from the store."""
    id: str


class EventEmitter(Generic[TEvent]):
    """Synchronous event channel owned by the component that emits on it.

    The same listener may be registered several times and is then called
    once per registration. Listener exceptions propagate to the emitter.
    """

    def __init__(self):
        self._listeners: List[Listener] = []

    def add_listener(self, listener: Listener) -> Callable[[], None]:
        """Register a listener.

        Returns:
            A function that removes this registration again
        """
        self._listeners.append(listener)
        removed = False

        def remove() -> None:
            nonlocal removed
            if removed:
                return
            removed = True
            self.remove_listener(listener)

        return remove

    def remove_listener(self, listener: Listener) -> None:
        """Remove the earliest registration of listener, if any."""
        try:
            self._listeners.remove(listener)
        except ValueError:
            pass

    def emit(self, event: TEvent) -> None:
        """Call every registered listener in registration order."""
        for listener in list(self._listeners):
            listener(event)


class EventRecorder(Generic[TEvent]):
    """Collects the events emitted on a channel."""

    def __init__(self, emitter: EventEmitter):
        self._events: List[TEvent] = []
        emitter.add_listener(self._events.append)

    def data(self) -> List[TEvent]:
        return list(self._events)


def record_events(emitter: EventEmitter) -> EventRecorder:
    return EventRecorder(emitter)
