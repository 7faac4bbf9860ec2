"""Domain ports (interfaces for infrastructure adapters)."""

from domain.shared.ports.connectivity import IConnectivityProbe
from domain.shared.ports.event_bus import IEventBus
from domain.shared.ports.key_value_storage import IKeyValueStorage
from domain.shared.ports.meal_writer import IMealWriter, MealSender

__all__ = [
    "IConnectivityProbe",
    "IEventBus",
    "IKeyValueStorage",
    "IMealWriter",
    "MealSender",
]
