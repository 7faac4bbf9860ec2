"""OfflineMealsSynced domain event."""

from dataclasses import dataclass
from datetime import datetime, timezone
from uuid import uuid4

from .base import DomainEvent


@dataclass(frozen=True)
class OfflineMealsSynced(DomainEvent):
    """Domain event: queued meals reached the remote store.

    Only raised when at least one meal synced; failed flushes stay silent
    and the next trigger retries them.

    Attributes:
        synced_count: Meals persisted by this flush (> 0).
        pending_count: Meals still waiting after the flush.
        trigger: What started the flush (startup, online, manual).
    """

    synced_count: int
    pending_count: int
    trigger: str

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.synced_count <= 0:
            raise ValueError(f"synced_count must be positive, got {self.synced_count}")

    @classmethod
    def create(cls, synced_count: int, pending_count: int, trigger: str) -> "OfflineMealsSynced":
        """Create new event with generated id and current timestamp."""
        return cls(
            event_id=uuid4(),
            occurred_at=datetime.now(timezone.utc),
            synced_count=synced_count,
            pending_count=pending_count,
            trigger=trigger,
        )
