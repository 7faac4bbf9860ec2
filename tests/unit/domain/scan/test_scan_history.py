"""Unit tests for ScanHistoryStore."""

import json
from datetime import datetime, timezone

import pytest

from domain.scan.scan_history import (
    SCAN_HISTORY_KEY,
    SCAN_HISTORY_LIMIT,
    ScanHistoryStore,
    ScannedFood,
    ScanOrigin,
)
from infrastructure.storage.in_memory_storage import InMemoryKeyValueStorage


def scanned(barcode: str, name: str = "Product") -> ScannedFood:
    return ScannedFood(
        barcode=barcode,
        name=name,
        kcal_100g=540.0,
        protein_100g=6.3,
        carbs_100g=57.5,
        fat_100g=30.9,
        nutriscore_grade="e",
        source=ScanOrigin.SCAN,
        scanned_at=datetime.now(timezone.utc),
    )


@pytest.fixture
def history(storage: InMemoryKeyValueStorage) -> ScanHistoryStore:
    return ScanHistoryStore(storage)


class TestScanHistoryStore:
    """Test scan history read/save/push."""

    def test_read_empty(self, history: ScanHistoryStore) -> None:
        assert history.read() == []

    def test_malformed_entries_are_skipped(
        self, storage: InMemoryKeyValueStorage, history: ScanHistoryStore
    ) -> None:
        good = json.loads(scanned("1111111111111").model_dump_json())
        storage.set(SCAN_HISTORY_KEY, json.dumps([{"barcode": "1"}, good, "junk"]))

        assert [e.barcode for e in history.read()] == ["1111111111111"]

        result = history.push(scanned("2222222222222"))

        assert [e.barcode for e in result] == ["2222222222222", "1111111111111"]

    def test_push_puts_newest_first(self, history: ScanHistoryStore) -> None:
        history.push(scanned("1111111111111"))
        result = history.push(scanned("2222222222222"))

        assert [e.barcode for e in result] == ["2222222222222", "1111111111111"]
        assert history.read() == result

    def test_push_replaces_same_barcode(self, history: ScanHistoryStore) -> None:
        history.push(scanned("1111111111111", name="old"))
        history.push(scanned("2222222222222"))
        result = history.push(scanned("1111111111111", name="new"))

        assert [e.name for e in result] == ["new", "Product"]

    def test_save_caps_history(self, history: ScanHistoryStore) -> None:
        entries = [scanned(f"{i:013d}") for i in range(SCAN_HISTORY_LIMIT + 10)]

        history.save(entries)

        stored = history.read()
        assert len(stored) == SCAN_HISTORY_LIMIT
        assert stored[0].barcode == f"{0:013d}"

    def test_push_on_full_history_drops_oldest(self, history: ScanHistoryStore) -> None:
        history.save([scanned(f"{i:013d}") for i in range(SCAN_HISTORY_LIMIT)])

        result = history.push(scanned("9999999999999"))

        assert len(result) == SCAN_HISTORY_LIMIT
        assert result[0].barcode == "9999999999999"
        assert f"{SCAN_HISTORY_LIMIT - 1:013d}" not in {e.barcode for e in history.read()}

    @pytest.mark.parametrize("raw", ["nope", "{}", json.dumps([{"barcode": "1"}])])
    def test_unreadable_history_is_empty(
        self, storage: InMemoryKeyValueStorage, history: ScanHistoryStore, raw: str
    ) -> None:
        storage.set(SCAN_HISTORY_KEY, raw)

        assert history.read() == []

    def test_stored_with_wire_values(
        self, storage: InMemoryKeyValueStorage, history: ScanHistoryStore
    ) -> None:
        history.push(scanned("1111111111111"))

        data = json.loads(storage.get(SCAN_HISTORY_KEY))
        assert data[0]["source"] == "scan"
