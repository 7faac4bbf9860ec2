"""Preferences domain - per-device app settings."""

from .app_preferences import (
    AppPreferences,
    PreferencesStore,
    ProductScoreMode,
    clamp_hydration_goal,
    clamp_portion,
    clear_food_scan_cache,
)

__all__ = [
    "AppPreferences",
    "PreferencesStore",
    "ProductScoreMode",
    "clamp_hydration_goal",
    "clamp_portion",
    "clear_food_scan_cache",
]
