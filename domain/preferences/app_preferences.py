"""App preferences stored in local key-value storage.

Values are clamped on load and on save so a hand-edited or outdated
record never pushes the UI outside its supported ranges.
"""

from __future__ import annotations

import json
import logging
import math
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict

from domain.offline.core.exceptions.domain_errors import StorageError
from domain.shared.ports.key_value_storage import IKeyValueStorage

logger = logging.getLogger(__name__)

PREFERENCES_KEY = "kcal-ai:preferences:v1"

# Keys holding cached scanner data, wiped by clear_food_scan_cache().
FOOD_SCAN_CACHE_KEYS = (
    "kcal-ai:recent-scans:v1",
    "kcal-ai:favorite-scans:v1",
    "kcal-ai:scan-history:v1",
)


class ProductScoreMode(str, Enum):
    """How strictly scanned products are scored."""

    TOLERANT = "tolerant"
    BALANCED = "balanced"
    STRICT = "strict"


class AppPreferences(BaseModel):
    """Per-device settings, defaults included."""

    model_config = ConfigDict(frozen=True)

    default_portion_grams: int = 100
    hydration_goal_glasses: int = 12
    product_score_mode: ProductScoreMode = ProductScoreMode.BALANCED
    scanner_auto_start: bool = False
    scanner_vibrate_on_detect: bool = True
    scan_sound_enabled: bool = False


DEFAULT_PREFERENCES = AppPreferences()


def _is_finite_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def clamp_portion(value: Any) -> int:
    """Default portion in grams, rounded and kept within 1..600."""
    if not _is_finite_number(value):
        return DEFAULT_PREFERENCES.default_portion_grams
    return min(600, max(1, _round_half_up(value)))


def clamp_hydration_goal(value: Any) -> int:
    """Daily glasses of water, rounded and kept within 4..20."""
    if not _is_finite_number(value):
        return DEFAULT_PREFERENCES.hydration_goal_glasses
    return min(20, max(4, _round_half_up(value)))


class PreferencesStore:
    """Loads and saves AppPreferences."""

    def __init__(self, storage: IKeyValueStorage) -> None:
        self._storage = storage

    def load(self) -> AppPreferences:
        """
        Read preferences, repairing whatever is missing or out of range.

        Returns:
            Stored preferences, or defaults when absent or unreadable
        """
        try:
            raw = self._storage.get(PREFERENCES_KEY)
            if not raw:
                return DEFAULT_PREFERENCES
            parsed = json.loads(raw)
        except (ValueError, StorageError) as e:
            logger.warning("Preferences unreadable, using defaults", extra={"error": str(e)})
            return DEFAULT_PREFERENCES

        if not isinstance(parsed, dict):
            return DEFAULT_PREFERENCES

        try:
            score_mode = ProductScoreMode(parsed.get("product_score_mode"))
        except ValueError:
            score_mode = DEFAULT_PREFERENCES.product_score_mode

        vibrate = (
            bool(parsed["scanner_vibrate_on_detect"])
            if "scanner_vibrate_on_detect" in parsed
            else DEFAULT_PREFERENCES.scanner_vibrate_on_detect
        )

        return AppPreferences(
            default_portion_grams=clamp_portion(
                parsed.get("default_portion_grams", DEFAULT_PREFERENCES.default_portion_grams)
            ),
            hydration_goal_glasses=clamp_hydration_goal(
                parsed.get("hydration_goal_glasses", DEFAULT_PREFERENCES.hydration_goal_glasses)
            ),
            product_score_mode=score_mode,
            scanner_auto_start=bool(parsed.get("scanner_auto_start")),
            scanner_vibrate_on_detect=vibrate,
            scan_sound_enabled=bool(parsed.get("scan_sound_enabled")),
        )

    def save(self, preferences: AppPreferences) -> None:
        """Persist preferences with numeric fields clamped."""
        payload = preferences.model_dump(mode="json")
        payload["default_portion_grams"] = clamp_portion(preferences.default_portion_grams)
        payload["hydration_goal_glasses"] = clamp_hydration_goal(preferences.hydration_goal_glasses)
        self._storage.set(PREFERENCES_KEY, json.dumps(payload))


def clear_food_scan_cache(storage: IKeyValueStorage) -> None:
    """Forget recent, favorite and historical scans."""
    for key in FOOD_SCAN_CACHE_KEYS:
        storage.remove(key)
