"""Shared test fixtures.

Unit tests use the in-memory storage and never touch the network.
"""

from typing import Any, Callable, Generator

import pytest

from domain.offline.core.entities.meal_submission import (
    FoodLine,
    ItemSource,
    MealSubmission,
    MealType,
)
from domain.offline.services.offline_meal_queue import OfflineMealQueue
from infrastructure.storage.in_memory_storage import InMemoryKeyValueStorage


@pytest.fixture(autouse=True)
def _clear_offline_env(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Keep OFFLINE_*/REMOTE_* values from a local .env out of the tests."""
    for name in (
        "OFFLINE_STORAGE_BACKEND",
        "OFFLINE_STORAGE_DIR",
        "OFFLINE_SEND_TIMEOUT_S",
        "OFFLINE_QUEUE_WARN_SIZE",
        "OFFLINE_SINGLE_FLIGHT",
        "REMOTE_API_URL",
        "REMOTE_API_KEY",
        "CONNECTIVITY_CHECK_URL",
    ):
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture
def storage() -> InMemoryKeyValueStorage:
    """Fresh in-memory storage."""
    return InMemoryKeyValueStorage()


@pytest.fixture
def queue(storage: InMemoryKeyValueStorage) -> OfflineMealQueue:
    """Offline queue over in-memory storage, no send timeout."""
    return OfflineMealQueue(storage, send_timeout=None)


@pytest.fixture
def make_submission() -> Callable[..., MealSubmission]:
    """Factory for meal submissions; keyword args override defaults."""

    def _make(**overrides: Any) -> MealSubmission:
        data: dict[str, Any] = {
            "date": "2025-01-15",
            "meal_type": MealType.LUNCH,
            "meal_name": "Chicken salad",
            "items": [
                FoodLine(
                    name="Chicken breast",
                    quantity="120 g",
                    calories=198.0,
                    protein=37.0,
                    carbs=0.0,
                    fat=4.3,
                    source=ItemSource.AI,
                ),
                FoodLine(
                    name="Olive oil",
                    quantity="1 tbsp",
                    calories=119.0,
                    protein=0.0,
                    carbs=0.0,
                    fat=13.5,
                    source=ItemSource.MANUAL,
                ),
            ],
            "image_url": None,
        }
        data.update(overrides)
        return MealSubmission(**data)

    return _make
