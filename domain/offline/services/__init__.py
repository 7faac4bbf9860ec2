"""Domain services for the offline meal domain."""

from .offline_meal_queue import OfflineMealQueue, parse_queue

__all__ = ["OfflineMealQueue", "parse_queue"]
