"""Offline meal domain - durable queue of pending meal saves."""

from .core.entities import FoodLine, ItemSource, MealSubmission, MealType, QueuedMealWrite

__all__ = [
    "FoodLine",
    "ItemSource",
    "MealSubmission",
    "MealType",
    "QueuedMealWrite",
]
