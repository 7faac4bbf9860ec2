"""Scan domain - recently scanned barcode products."""

from .scan_history import SCAN_HISTORY_LIMIT, ScannedFood, ScanHistoryStore, ScanOrigin

__all__ = ["SCAN_HISTORY_LIMIT", "ScannedFood", "ScanHistoryStore", "ScanOrigin"]
