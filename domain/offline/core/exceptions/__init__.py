"""Exceptions for the offline meal domain."""

from .domain_errors import (
    MealSendError,
    NotAuthenticatedError,
    OfflineSyncError,
    PermanentSendError,
    StorageError,
    TransientSendError,
)

__all__ = [
    "OfflineSyncError",
    "StorageError",
    "MealSendError",
    "TransientSendError",
    "PermanentSendError",
    "NotAuthenticatedError",
]
