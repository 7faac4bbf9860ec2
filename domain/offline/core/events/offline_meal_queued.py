"""OfflineMealQueued domain event."""

from dataclasses import dataclass
from datetime import datetime, timezone
from uuid import uuid4

from .base import DomainEvent


@dataclass(frozen=True)
class OfflineMealQueued(DomainEvent):
    """Domain event: a meal was saved to the offline queue.

    The UI shows "N meals saved offline, will sync automatically".

    Attributes:
        date: Day the meal belongs to (YYYY-MM-DD).
        meal_type: Meal slot value (breakfast, lunch, ...).
        pending_count: Queue size after the enqueue.

    Examples:
        >>> event = OfflineMealQueued.create(
        ...     date="2025-01-15", meal_type="lunch", pending_count=2
        ... )
        >>> event.pending_count
        2
    """

    date: str
    meal_type: str
    pending_count: int

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.pending_count < 0:
            raise ValueError(f"pending_count cannot be negative, got {self.pending_count}")

    @classmethod
    def create(cls, date: str, meal_type: str, pending_count: int) -> "OfflineMealQueued":
        """Create new event with generated id and current timestamp."""
        return cls(
            event_id=uuid4(),
            occurred_at=datetime.now(timezone.utc),
            date=date,
            meal_type=meal_type,
            pending_count=pending_count,
        )
