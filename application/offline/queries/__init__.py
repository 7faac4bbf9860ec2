"""CQRS Queries for offline meal sync."""

from .get_pending_meal_count import GetPendingMealCountQuery, GetPendingMealCountQueryHandler

__all__ = ["GetPendingMealCountQuery", "GetPendingMealCountQueryHandler"]
