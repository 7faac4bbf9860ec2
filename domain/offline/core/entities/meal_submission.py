"""Meal submission - the payload of one meal save.

A submission is what the meal editor hands over when the user presses
"save": the day, the meal slot, a label and the food lines. It is sent
to the remote store as-is, or buffered in the offline queue.
"""

from __future__ import annotations

from datetime import date as date_type
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class MealType(str, Enum):
    """Meal slot within a day."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


class ItemSource(str, Enum):
    """Where the macros of a food line come from."""

    AI = "ai"
    BARCODE = "barcode"
    MANUAL = "manual"


class FoodLine(BaseModel):
    """Single food line of a meal.

    Example:
        >>> line = FoodLine(
        ...     name="Greek yogurt",
        ...     quantity="150 g",
        ...     calories=146.0,
        ...     protein=15.0,
        ...     carbs=6.0,
        ...     fat=6.5,
        ...     source=ItemSource.MANUAL,
        ... )
        >>> line.barcode is None
        True
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Food name")
    quantity: str = Field(..., description="Quantity label, e.g. '150 g'")
    calories: float = Field(..., ge=0)
    protein: float = Field(..., ge=0)
    carbs: float = Field(..., ge=0)
    fat: float = Field(..., ge=0)
    barcode: Optional[str] = None
    image_url: Optional[str] = None
    source: ItemSource


class MealSubmission(BaseModel):
    """One meal save, without queue metadata.

    Attributes:
        date: Calendar day of the meal (YYYY-MM-DD).
        meal_type: Meal slot.
        meal_name: Free-text label.
        items: Food lines in display order.
        image_url: Optional image shared by the whole meal.
    """

    model_config = ConfigDict(frozen=True)

    date: str
    meal_type: MealType
    meal_name: str
    items: List[FoodLine] = Field(default_factory=list)
    image_url: Optional[str] = None

    @field_validator("date")
    @classmethod
    def iso_calendar_day(cls, v: str) -> str:
        """Ensure date is a YYYY-MM-DD calendar day."""
        if len(v) != 10:
            raise ValueError(f"date must be YYYY-MM-DD, got {v!r}")
        date_type.fromisoformat(v)
        return v

    def total_calories(self) -> float:
        """Sum of calories over all food lines."""
        return sum(item.calories for item in self.items)
