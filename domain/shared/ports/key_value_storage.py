"""Key-value storage port.

Durable local storage with string values, in the spirit of a browser's
localStorage: synchronous, one value per key, no transactions.
"""

from typing import Optional, Protocol


class IKeyValueStorage(Protocol):
    """Port for durable string key-value storage.

    Implementations raise StorageError (or any exception) when the
    underlying medium is unavailable. Callers decide whether to swallow it.
    """

    def get(self, key: str) -> Optional[str]:
        """Read the value stored under key.

        Args:
            key: Storage key

        Returns:
            Stored string, or None if the key is absent
        """
        ...

    def set(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value.

        Args:
            key: Storage key
            value: String to store
        """
        ...

    def remove(self, key: str) -> None:
        """Delete key. Missing keys are ignored.

        Args:
            key: Storage key
        """
        ...
