"""Domain layer for offline meal synchronization.

Business rules for buffering meal saves while the device is offline and
replaying them against the remote store, plus the small local records
(scan history, preferences) kept in the same key-value storage.
"""
