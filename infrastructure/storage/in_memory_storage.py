"""In-memory key-value storage.

Simple dictionary storage for testing and development.
Values are lost on process restart.
"""

import logging
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)


class InMemoryKeyValueStorage:
    """In-memory implementation of IKeyValueStorage.

    Thread safety: NOT thread-safe (use locks if needed)
    Persistence: Data lost on process restart (in-memory only)

    Example:
        >>> storage = InMemoryKeyValueStorage()
        >>> storage.set("key", "value")
        >>> storage.get("key")
        'value'
    """

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        """Initialize storage, optionally pre-seeded (tests)."""
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> List[str]:
        """Stored keys (for testing/debugging)."""
        return list(self._data)

    def clear(self) -> None:
        """Remove every key (for testing)."""
        self._data.clear()
        logger.debug("In-memory storage cleared")
