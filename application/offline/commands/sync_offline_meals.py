"""Sync offline meals command and handler.

Flushes the offline queue against the remote writer. Triggered on app
start, when the network comes back, or from the manual sync button;
the triggers do not coordinate, the queue's single-flight guard does.
"""

from dataclasses import dataclass
from enum import Enum
import logging

from domain.offline.core.events.offline_meals_synced import OfflineMealsSynced
from domain.offline.services.offline_meal_queue import OfflineMealQueue
from domain.shared.ports.event_bus import IEventBus
from domain.shared.ports.meal_writer import IMealWriter

logger = logging.getLogger(__name__)


class SyncTrigger(str, Enum):
    """What asked for a sync."""

    STARTUP = "startup"
    ONLINE = "online"
    MANUAL = "manual"


@dataclass(frozen=True)
class SyncOfflineMealsCommand:
    """
    Command: Replay queued meals.

    Attributes:
        trigger: Origin of the request
    """

    trigger: SyncTrigger = SyncTrigger.MANUAL


@dataclass(frozen=True)
class SyncResult:
    """
    Result of SyncOfflineMealsCommand.

    Attributes:
        synced_count: Meals persisted by this sync
        pending_count: Meals still queued
        joined: True when the call waited on a sync already running
    """

    synced_count: int
    pending_count: int
    joined: bool = False


class SyncOfflineMealsCommandHandler:
    """Handler for SyncOfflineMealsCommand."""

    def __init__(
        self,
        queue: OfflineMealQueue,
        writer: IMealWriter,
        event_bus: IEventBus,
    ):
        """
        Initialize handler.

        Args:
            queue: Offline meal queue
            writer: Remote meal writer port
            event_bus: Event bus port
        """
        self._queue = queue
        self._writer = writer
        self._event_bus = event_bus

    async def handle(self, command: SyncOfflineMealsCommand) -> SyncResult:
        """
        Execute sync command.

        Failures are silent: entries that did not go through stay queued
        for the next trigger. OfflineMealsSynced is published only when
        at least one meal synced, and only by the call that ran the flush:
        a call joining a flush already in progress reports the same counts
        with joined=True and publishes nothing.

        Args:
            command: SyncOfflineMealsCommand

        Returns:
            SyncResult
        """
        joined = self._queue.flush_in_progress
        synced = await self._queue.flush(self._writer.save)
        pending = self._queue.size()

        logger.info(
            "Offline sync finished",
            extra={
                "trigger": command.trigger.value,
                "synced": synced,
                "pending": pending,
                "joined": joined,
            },
        )

        if synced > 0 and not joined:
            await self._event_bus.publish(
                OfflineMealsSynced.create(
                    synced_count=synced,
                    pending_count=pending,
                    trigger=command.trigger.value,
                )
            )

        return SyncResult(synced_count=synced, pending_count=pending, joined=joined)
