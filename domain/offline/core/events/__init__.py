"""Domain events for the offline meal domain."""

from .base import DomainEvent
from .offline_meal_queued import OfflineMealQueued
from .offline_meals_synced import OfflineMealsSynced

__all__ = [
    "DomainEvent",
    "OfflineMealQueued",
    "OfflineMealsSynced",
]
