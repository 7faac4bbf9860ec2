"""Unit tests for InMemoryEventBus."""

from typing import List

import pytest

from domain.offline.core.events.base import DomainEvent
from domain.offline.core.events.offline_meal_queued import OfflineMealQueued
from domain.offline.core.events.offline_meals_synced import OfflineMealsSynced
from infrastructure.events.in_memory_bus import InMemoryEventBus


@pytest.fixture
def event_bus() -> InMemoryEventBus:
    """Fixture providing clean InMemoryEventBus."""
    return InMemoryEventBus()


@pytest.fixture
def synced_event() -> OfflineMealsSynced:
    return OfflineMealsSynced.create(synced_count=2, pending_count=0, trigger="online")


class TestSubscribe:
    def test_subscribe_counts_handlers(self, event_bus: InMemoryEventBus) -> None:
        async def handler(event: OfflineMealsSynced) -> None:
            pass

        event_bus.subscribe(OfflineMealsSynced, handler)
        event_bus.subscribe(OfflineMealsSynced, handler)

        assert event_bus.get_handler_count(OfflineMealsSynced) == 2
        assert event_bus.get_handler_count(OfflineMealQueued) == 0

    def test_unsubscribe(self, event_bus: InMemoryEventBus) -> None:
        async def handler(event: OfflineMealsSynced) -> None:
            pass

        event_bus.subscribe(OfflineMealsSynced, handler)

        assert event_bus.unsubscribe(OfflineMealsSynced, handler) is True
        assert event_bus.unsubscribe(OfflineMealsSynced, handler) is False
        assert event_bus.get_handler_count(OfflineMealsSynced) == 0


class TestPublish:
    @pytest.mark.asyncio
    async def test_handlers_called_in_order(
        self, event_bus: InMemoryEventBus, synced_event: OfflineMealsSynced
    ) -> None:
        calls: List[str] = []

        async def first(event: OfflineMealsSynced) -> None:
            calls.append("first")

        async def second(event: OfflineMealsSynced) -> None:
            calls.append("second")

        event_bus.subscribe(OfflineMealsSynced, first)
        event_bus.subscribe(OfflineMealsSynced, second)

        await event_bus.publish(synced_event)

        assert calls == ["first", "second"]

    @pytest.mark.asyncio
    async def test_only_matching_type_receives(
        self, event_bus: InMemoryEventBus, synced_event: OfflineMealsSynced
    ) -> None:
        received: List[OfflineMealQueued] = []

        async def handler(event: OfflineMealQueued) -> None:
            received.append(event)

        event_bus.subscribe(OfflineMealQueued, handler)
        await event_bus.publish(synced_event)

        assert received == []

    @pytest.mark.asyncio
    async def test_failing_handler_does_not_block_others(
        self, event_bus: InMemoryEventBus, synced_event: OfflineMealsSynced
    ) -> None:
        calls: List[str] = []

        async def failing(event: OfflineMealsSynced) -> None:
            raise RuntimeError("toast renderer crashed")

        async def working(event: OfflineMealsSynced) -> None:
            calls.append("working")

        event_bus.subscribe(OfflineMealsSynced, failing)
        event_bus.subscribe(OfflineMealsSynced, working)

        await event_bus.publish(synced_event)

        assert calls == ["working"]

    @pytest.mark.asyncio
    async def test_base_class_listener_hears_every_event(
        self, event_bus: InMemoryEventBus, synced_event: OfflineMealsSynced
    ) -> None:
        seen: List[str] = []

        async def exact(event: OfflineMealsSynced) -> None:
            seen.append("exact")

        async def audit(event: DomainEvent) -> None:
            seen.append(type(event).__name__)

        event_bus.subscribe(DomainEvent, audit)
        event_bus.subscribe(OfflineMealsSynced, exact)

        await event_bus.publish(synced_event)
        await event_bus.publish(OfflineMealQueued.create("2025-01-15", "lunch", 1))

        assert seen == ["exact", "OfflineMealsSynced", "OfflineMealQueued"]

    @pytest.mark.asyncio
    async def test_plain_function_listener(
        self, event_bus: InMemoryEventBus, synced_event: OfflineMealsSynced
    ) -> None:
        received: List[OfflineMealsSynced] = []

        event_bus.subscribe(OfflineMealsSynced, received.append)
        await event_bus.publish(synced_event)

        assert received == [synced_event]

    @pytest.mark.asyncio
    async def test_publish_without_handlers(
        self, event_bus: InMemoryEventBus, synced_event: OfflineMealsSynced
    ) -> None:
        await event_bus.publish(synced_event)

    def test_clear(self, event_bus: InMemoryEventBus) -> None:
        async def handler(event: OfflineMealsSynced) -> None:
            pass

        event_bus.subscribe(OfflineMealsSynced, handler)
        event_bus.clear()

        assert event_bus.get_handler_count(OfflineMealsSynced) == 0
