"""In-memory event bus.

Delivers offline-sync events (queued, synced) to the app's listeners,
e.g. the pending badge and the "meals synced" toast.
"""

import inspect
import logging
from typing import Any, Callable, Dict, List, Type

from domain.offline.core.events.base import DomainEvent

logger = logging.getLogger(__name__)

Listener = Callable[[Any], Any]


def _listener_name(listener: Listener) -> str:
    return getattr(listener, "__qualname__", None) or repr(listener)


class InMemoryEventBus:
    """
    IEventBus kept in process memory.

    A listener registered for a class also hears its subclasses, so
    subscribing to DomainEvent observes everything. Listeners may be plain
    functions or coroutines. They run one after the other in registration
    order (exact class first, then base classes); one that raises is
    logged and skipped. Not thread-safe.

    Example:
        >>> bus = InMemoryEventBus()
        >>> bus.subscribe(OfflineMealsSynced, refresh_badge)
        >>> await bus.publish(OfflineMealsSynced.create(2, 0, "online"))
    """

    def __init__(self) -> None:
        self._listeners: Dict[Type[DomainEvent], List[Listener]] = {}

    def subscribe(self, event_type: Type[DomainEvent], handler: Listener) -> None:
        """Register handler for event_type. Registering twice means two calls."""
        self._listeners.setdefault(event_type, []).append(handler)
        logger.debug(
            "Listener registered",
            extra={"event_type": event_type.__name__, "listener": _listener_name(handler)},
        )

    def unsubscribe(self, event_type: Type[DomainEvent], handler: Listener) -> bool:
        """
        Drop one registration of handler.

        Returns:
            False when handler was not registered for event_type
        """
        registered = self._listeners.get(event_type, [])
        if handler not in registered:
            return False
        registered.remove(handler)
        return True

    def clear(self) -> None:
        """Forget every listener."""
        self._listeners.clear()

    def get_handler_count(self, event_type: Type[DomainEvent]) -> int:
        """Listeners registered for exactly event_type."""
        return len(self._listeners.get(event_type, []))

    def _listeners_for(self, event: DomainEvent) -> List[Listener]:
        found: List[Listener] = []
        for cls in type(event).__mro__:
            found.extend(self._listeners.get(cls, []))
        return found

    async def publish(self, event: DomainEvent) -> None:
        """
        Deliver event to its listeners.

        Args:
            event: Event to deliver
        """
        event_name = type(event).__name__
        listeners = self._listeners_for(event)
        if not listeners:
            logger.debug("Event has no listeners", extra={"event_type": event_name})
            return

        delivered = 0
        for listener in listeners:
            try:
                result = listener(event)
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                logger.error(
                    "Event listener failed",
                    extra={
                        "event_type": event_name,
                        "event_id": str(event.event_id),
                        "listener": _listener_name(listener),
                        "error": str(e),
                    },
                    exc_info=True,
                )
            else:
                delivered += 1

        logger.debug(
            "Event delivered",
            extra={"event_type": event_name, "delivered": delivered, "listeners": len(listeners)},
        )
