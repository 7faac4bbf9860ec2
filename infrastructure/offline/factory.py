"""Offline sync factory.

Builds the offline queue and the remote adapters from environment
configuration, and keeps process-wide singletons for the storage and the
queue (one queue per storage, otherwise the single-flight guard would
not see overlapping flushes).

Usage:
    from infrastructure.offline.factory import get_offline_meal_queue

    queue = get_offline_meal_queue()
    queue.size()
"""

from typing import Optional

from domain.offline.services.offline_meal_queue import OfflineMealQueue
from domain.shared.ports.key_value_storage import IKeyValueStorage
from infrastructure.config import (
    get_connectivity_check_url,
    get_offline_queue_warn_size,
    get_offline_send_timeout,
    get_remote_api_key,
    get_remote_api_url,
    is_offline_single_flight_enabled,
    load_environment,
)
from infrastructure.remote.http_connectivity_probe import HttpConnectivityProbe
from infrastructure.remote.http_meal_writer import HttpMealWriter
from infrastructure.storage.factory import create_key_value_storage

_storage: Optional[IKeyValueStorage] = None
_offline_meal_queue: Optional[OfflineMealQueue] = None


def create_offline_meal_queue(storage: IKeyValueStorage) -> OfflineMealQueue:
    """Create a queue over storage, tuned by OFFLINE_* env vars."""
    return OfflineMealQueue(
        storage,
        send_timeout=get_offline_send_timeout(),
        single_flight=is_offline_single_flight_enabled(),
        warn_size=get_offline_queue_warn_size(),
    )


def get_key_value_storage() -> IKeyValueStorage:
    """Get singleton key-value storage."""
    global _storage
    if _storage is None:
        load_environment()
        _storage = create_key_value_storage()
    return _storage


def get_offline_meal_queue() -> OfflineMealQueue:
    """Get singleton offline meal queue bound to the singleton storage."""
    global _offline_meal_queue
    if _offline_meal_queue is None:
        _offline_meal_queue = create_offline_meal_queue(get_key_value_storage())
    return _offline_meal_queue


def create_meal_writer() -> HttpMealWriter:
    """
    Create the remote meal writer.

    Raises:
        ValueError: If REMOTE_API_URL or REMOTE_API_KEY is not set
    """
    load_environment()
    url = get_remote_api_url()
    key = get_remote_api_key()
    if not url or not key:
        raise ValueError("REMOTE_API_URL and REMOTE_API_KEY must be set to save meals remotely")
    return HttpMealWriter(url, key)


def create_connectivity_probe() -> HttpConnectivityProbe:
    """
    Create the connectivity probe.

    Raises:
        ValueError: If neither CONNECTIVITY_CHECK_URL nor REMOTE_API_URL is set
    """
    load_environment()
    url = get_connectivity_check_url()
    if not url:
        raise ValueError("Set CONNECTIVITY_CHECK_URL or REMOTE_API_URL")
    return HttpConnectivityProbe(url)


def reset_offline_components() -> None:
    """Drop singletons so the next call re-reads the environment (tests)."""
    global _storage, _offline_meal_queue
    _storage = None
    _offline_meal_queue = None
