"""File-backed key-value storage.

One file per key inside a directory. Writes go to a temporary file in
the same directory and are moved into place with os.replace, so a
reader sees either the old value or the new one, never a torn write.
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Optional
from urllib.parse import quote

from domain.offline.core.exceptions.domain_errors import StorageError

logger = logging.getLogger(__name__)


class FileKeyValueStorage:
    """
    Durable implementation of IKeyValueStorage.

    Keys are percent-encoded into file names, so any key is accepted and
    two different keys never share a file.

    Example:
        >>> storage = FileKeyValueStorage(Path("~/.kcal-ai/storage").expanduser())
        >>> storage.set("kcal-ai:preferences:v1", "{}")
        >>> storage.get("kcal-ai:preferences:v1")
        '{}'
    """

    SUFFIX = ".value"

    def __init__(self, directory: Path) -> None:
        """
        Initialize storage.

        Args:
            directory: Folder holding the value files (created on first write)
        """
        self._directory = Path(directory)

    @property
    def directory(self) -> Path:
        return self._directory

    def path_for(self, key: str) -> Path:
        """File holding the value of key."""
        return self._directory / f"{quote(key, safe='')}{self.SUFFIX}"

    def get(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"Cannot read {path}: {e}", key=key) from e

    def set(self, key: str, value: str) -> None:
        path = self.path_for(key)
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self._directory, prefix=".tmp-")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(value)
                os.replace(tmp_name, path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as e:
            raise StorageError(f"Cannot write {path}: {e}", key=key) from e

        logger.debug("Stored value", extra={"key": key, "bytes": len(value)})

    def remove(self, key: str) -> None:
        path = self.path_for(key)
        try:
            path.unlink()
        except FileNotFoundError:
            return
        except OSError as e:
            raise StorageError(f"Cannot remove {path}: {e}", key=key) from e
