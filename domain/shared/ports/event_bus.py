"""Event bus port.

The application layer publishes offline-sync events through it;
infrastructure/events provides the in-memory implementation.
"""

from typing import Any, Callable, Protocol, Type

from domain.offline.core.events.base import DomainEvent

# Called with the event; may return an awaitable, which is awaited.
EventHandler = Callable[[Any], Any]


class IEventBus(Protocol):
    """
    Publish/subscribe contract for domain events.

    Example:
        >>> event_bus.subscribe(OfflineMealQueued, show_offline_banner)
        >>> await event_bus.publish(OfflineMealQueued.create("2025-01-15", "lunch", 1))
    """

    def subscribe(self, event_type: Type[DomainEvent], handler: EventHandler) -> None:
        """Register handler for event_type and its subclasses."""
        ...

    async def publish(self, event: DomainEvent) -> None:
        """Deliver event to every matching handler."""
        ...
