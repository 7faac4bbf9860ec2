"""Storage factory.

Environment-based storage selection:
- OFFLINE_STORAGE_BACKEND=file (durable, survives restarts)
- OFFLINE_STORAGE_BACKEND=inmemory (fast, isolated tests; default)

Usage:
    from infrastructure.storage.factory import create_key_value_storage

    storage = create_key_value_storage()
"""

import logging

from domain.shared.ports.key_value_storage import IKeyValueStorage
from infrastructure.config import get_offline_storage_backend, get_offline_storage_dir
from infrastructure.storage.file_storage import FileKeyValueStorage
from infrastructure.storage.in_memory_storage import InMemoryKeyValueStorage

logger = logging.getLogger(__name__)


def create_key_value_storage() -> IKeyValueStorage:
    """Create key-value storage based on OFFLINE_STORAGE_BACKEND.

    Returns:
        IKeyValueStorage: Storage instance

    Raises:
        ValueError: If the backend name is unknown
    """
    backend = get_offline_storage_backend()

    if backend == "file":
        directory = get_offline_storage_dir()
        logger.info("Using file storage", extra={"directory": str(directory)})
        return FileKeyValueStorage(directory)

    if backend == "inmemory":
        return InMemoryKeyValueStorage()

    raise ValueError(
        f"Unknown OFFLINE_STORAGE_BACKEND={backend!r}. Use 'inmemory' or 'file'."
    )
