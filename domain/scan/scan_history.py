"""Scan history stored in local key-value storage.

Most recent first, one entry per barcode, capped at SCAN_HISTORY_LIMIT.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from domain.offline.core.exceptions.domain_errors import StorageError
from domain.shared.ports.key_value_storage import IKeyValueStorage

logger = logging.getLogger(__name__)

SCAN_HISTORY_KEY = "kcal-ai:scan-history:v1"
SCAN_HISTORY_LIMIT = 120


class ScanOrigin(str, Enum):
    """Screen the product was scanned from."""

    SCAN = "scan"
    ADD_MEAL = "add-meal"


class ScannedFood(BaseModel):
    """Product seen by the barcode scanner, nutrients per 100 g."""

    model_config = ConfigDict(frozen=True)

    barcode: str
    name: str
    image_url: Optional[str] = None
    brands: Optional[str] = None
    nutriscore_grade: Optional[str] = None
    kcal_100g: float = Field(..., ge=0)
    protein_100g: float = Field(..., ge=0)
    carbs_100g: float = Field(..., ge=0)
    fat_100g: float = Field(..., ge=0)
    source: ScanOrigin
    scanned_at: datetime


_HISTORY_ADAPTER = TypeAdapter(List[ScannedFood])


class ScanHistoryStore:
    """Reads and writes the scan history list."""

    def __init__(self, storage: IKeyValueStorage) -> None:
        self._storage = storage

    def read(self) -> List[ScannedFood]:
        """
        Current history.

        Entries of the wrong shape are skipped, the rest are kept.

        Returns:
            Valid entries in stored order, [] when absent or unreadable
        """
        try:
            raw = self._storage.get(SCAN_HISTORY_KEY)
            if not raw:
                return []
            data = json.loads(raw)
        except (ValueError, StorageError) as e:
            logger.warning(
                "Scan history unreadable, treating as empty",
                extra={"error": str(e)},
            )
            return []

        if not isinstance(data, list):
            return []

        history: List[ScannedFood] = []
        for item in data:
            try:
                history.append(ScannedFood.model_validate(item))
            except ValidationError:
                continue

        if len(history) < len(data):
            logger.warning(
                "Skipped malformed scan history entries",
                extra={"skipped": len(data) - len(history)},
            )
        return history

    def save(self, entries: List[ScannedFood]) -> None:
        """Persist entries, keeping only the first SCAN_HISTORY_LIMIT."""
        kept = entries[:SCAN_HISTORY_LIMIT]
        self._storage.set(SCAN_HISTORY_KEY, _HISTORY_ADAPTER.dump_json(kept).decode("utf-8"))

    def push(self, entry: ScannedFood) -> List[ScannedFood]:
        """
        Put entry at the front, replacing older scans of the same barcode.

        Args:
            entry: Freshly scanned product

        Returns:
            The new history, as returned by read() afterwards
        """
        current = self.read()
        history = [entry] + [item for item in current if item.barcode != entry.barcode]
        self.save(history)
        return history[:SCAN_HISTORY_LIMIT]
