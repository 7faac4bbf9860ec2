"""Key-value storage adapters."""

from infrastructure.storage.file_storage import FileKeyValueStorage
from infrastructure.storage.in_memory_storage import InMemoryKeyValueStorage

__all__ = [
    "FileKeyValueStorage",
    "InMemoryKeyValueStorage",
]
