"""Event bus implementations."""

from infrastructure.events.in_memory_bus import InMemoryEventBus

__all__ = ["InMemoryEventBus"]
