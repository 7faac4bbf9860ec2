"""QueuedMealWrite - a meal submission waiting in the offline queue."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from pydantic import field_validator

from .meal_submission import MealSubmission


class QueuedMealWrite(MealSubmission):
    """Meal submission plus the moment it was queued.

    queued_at is informational (observability and display order);
    it is never used to resolve conflicts.
    """

    queued_at: datetime

    @field_validator("queued_at")
    @classmethod
    def timezone_aware(cls, v: datetime) -> datetime:
        """Reject naive datetimes."""
        if v.tzinfo is None:
            raise ValueError("queued_at must be timezone-aware (use UTC)")
        return v

    @classmethod
    def from_submission(
        cls,
        submission: MealSubmission,
        queued_at: Optional[datetime] = None,
    ) -> "QueuedMealWrite":
        """Stamp a submission for the queue.

        Args:
            submission: Payload supplied by the caller
            queued_at: Enqueue time, defaults to now (UTC)

        Returns:
            New QueuedMealWrite
        """
        fields = {name: getattr(submission, name) for name in MealSubmission.model_fields}
        return cls(**fields, queued_at=queued_at or datetime.now(timezone.utc))

    def to_submission(self) -> MealSubmission:
        """Drop queue metadata, keeping the payload."""
        fields = {name: getattr(self, name) for name in MealSubmission.model_fields}
        return MealSubmission(**fields)
