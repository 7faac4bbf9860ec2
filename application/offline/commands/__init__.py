"""CQRS Commands for offline meal sync."""

from .save_meal import (
    SaveMealCommand,
    SaveMealCommandHandler,
    SaveMealResult,
    SaveMealStatus,
)
from .sync_offline_meals import (
    SyncOfflineMealsCommand,
    SyncOfflineMealsCommandHandler,
    SyncResult,
    SyncTrigger,
)

__all__ = [
    # Save command
    "SaveMealCommand",
    "SaveMealCommandHandler",
    "SaveMealResult",
    "SaveMealStatus",
    # Sync command
    "SyncOfflineMealsCommand",
    "SyncOfflineMealsCommandHandler",
    "SyncResult",
    "SyncTrigger",
]
