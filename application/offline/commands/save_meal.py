"""Save meal command and handler.

Sends the meal straight to the remote store when the network is
reachable, otherwise buffers it in the offline queue.
"""

from dataclasses import dataclass
from enum import Enum
import logging

from domain.offline.core.entities.meal_submission import MealSubmission
from domain.offline.core.events.offline_meal_queued import OfflineMealQueued
from domain.offline.services.offline_meal_queue import OfflineMealQueue
from domain.shared.ports.connectivity import IConnectivityProbe
from domain.shared.ports.event_bus import IEventBus
from domain.shared.ports.meal_writer import IMealWriter

logger = logging.getLogger(__name__)


class SaveMealStatus(str, Enum):
    """Outcome of a save request."""

    SAVED = "saved"
    QUEUED = "queued"


@dataclass(frozen=True)
class SaveMealCommand:
    """
    Command: Save a meal from the editor.

    Attributes:
        submission: Meal payload built by the editor
    """

    submission: MealSubmission


@dataclass(frozen=True)
class SaveMealResult:
    """
    Result of SaveMealCommand.

    Attributes:
        status: SAVED when persisted remotely, QUEUED when buffered offline
        pending_count: Offline queue size after the command
    """

    status: SaveMealStatus
    pending_count: int


class SaveMealCommandHandler:
    """Handler for SaveMealCommand."""

    def __init__(
        self,
        queue: OfflineMealQueue,
        writer: IMealWriter,
        connectivity: IConnectivityProbe,
        event_bus: IEventBus,
    ):
        """
        Initialize handler.

        Args:
            queue: Offline meal queue
            writer: Remote meal writer port
            connectivity: Connectivity probe port
            event_bus: Event bus port
        """
        self._queue = queue
        self._writer = writer
        self._connectivity = connectivity
        self._event_bus = event_bus

    async def handle(self, command: SaveMealCommand) -> SaveMealResult:
        """
        Execute save command.

        Flow:
        1. Ask the connectivity probe
        2. Offline: enqueue and publish OfflineMealQueued
        3. Online: send to the remote store

        Args:
            command: SaveMealCommand

        Returns:
            SaveMealResult

        Raises:
            MealSendError: Online send failed (the meal is NOT queued)
        """
        submission = command.submission

        if not await self._connectivity.is_online():
            self._queue.enqueue(submission)
            pending = self._queue.size()

            await self._event_bus.publish(
                OfflineMealQueued.create(
                    date=submission.date,
                    meal_type=submission.meal_type.value,
                    pending_count=pending,
                )
            )
            return SaveMealResult(status=SaveMealStatus.QUEUED, pending_count=pending)

        logger.info(
            "Saving meal",
            extra={
                "date": submission.date,
                "meal_type": submission.meal_type.value,
                "item_count": len(submission.items),
            },
        )
        await self._writer.save(submission)

        return SaveMealResult(status=SaveMealStatus.SAVED, pending_count=self._queue.size())
