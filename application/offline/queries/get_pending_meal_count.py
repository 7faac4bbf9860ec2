"""Get pending meal count query - size of the offline queue."""

from dataclasses import dataclass

from domain.offline.services.offline_meal_queue import OfflineMealQueue


@dataclass(frozen=True)
class GetPendingMealCountQuery:
    """Query: how many meals wait for connectivity (UI badge)."""

    pass


class GetPendingMealCountQueryHandler:
    """Handler for GetPendingMealCountQuery."""

    def __init__(self, queue: OfflineMealQueue):
        self._queue = queue

    async def handle(self, query: GetPendingMealCountQuery) -> int:
        """Return the number of persisted pending meals."""
        return self._queue.size()
