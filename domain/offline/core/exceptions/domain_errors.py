"""Domain exceptions for offline meal synchronization.

All exceptions inherit from OfflineSyncError so callers can catch the
whole family at once.
"""

from typing import Optional


class OfflineSyncError(Exception):
    """Base exception for offline sync."""

    pass


class StorageError(OfflineSyncError):
    """Raised by key-value storage adapters when a read or write fails.

    The offline queue never lets this escape: an unreadable queue is an
    empty queue, and a failed write is logged and ignored.
    """

    def __init__(self, message: str, key: Optional[str] = None) -> None:
        super().__init__(message)
        self.key = key


class MealSendError(OfflineSyncError):
    """Raised when a meal could not be persisted remotely.

    Attributes:
        status_code: HTTP status returned by the remote store, if any
    """

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class TransientSendError(MealSendError):
    """Send failure that may succeed later (network, 5xx, rate limit).

    Queued entries failing this way stay in the queue and are retried on
    every following flush.
    """

    pass


class PermanentSendError(MealSendError):
    """Send failure that will never succeed (validation, missing day).

    Queued entries failing this way are moved to the dead-letter list.
    """

    pass


class NotAuthenticatedError(TransientSendError):
    """No signed-in user to attach the meal to.

    Transient: the entry becomes sendable once the user signs in again.
    """

    def __init__(self, message: str = "Not signed in") -> None:
        super().__init__(message, status_code=401)
