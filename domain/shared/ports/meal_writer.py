"""Meal writer port.

Persists one meal and its food lines in the remote store.
"""

from typing import Awaitable, Callable, Protocol

from domain.offline.core.entities.meal_submission import MealSubmission

# Send function accepted by OfflineMealQueue.flush: resolves or raises.
MealSender = Callable[[MealSubmission], Awaitable[None]]


class IMealWriter(Protocol):
    """Port for the remote meal-save collaborator.

    Implementations should raise PermanentSendError for failures that
    will never succeed, and anything else for failures worth retrying.
    """

    async def save(self, submission: MealSubmission) -> None:
        """Create the meal and its food lines remotely.

        Args:
            submission: Meal to persist

        Raises:
            TransientSendError: Network or server trouble, retry later
            PermanentSendError: The remote store rejected the payload
        """
        ...
