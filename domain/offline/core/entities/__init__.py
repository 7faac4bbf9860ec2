"""Core entities for the offline meal domain."""

from .meal_submission import FoodLine, ItemSource, MealSubmission, MealType
from .queued_meal_write import QueuedMealWrite

__all__ = [
    "FoodLine",
    "ItemSource",
    "MealSubmission",
    "MealType",
    "QueuedMealWrite",
]
