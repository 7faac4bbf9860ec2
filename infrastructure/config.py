"""Configuration utilities for infrastructure layer.

Settings come from environment variables. load_environment() reads a
.env file first when one is present; variables already set win.
"""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


def load_environment(env_path: Optional[Path] = None) -> bool:
    """
    Load variables from a .env file into os.environ.

    Args:
        env_path: Explicit file, defaults to .env in the working directory

    Returns:
        True if a file was found and loaded
    """
    path = env_path or Path.cwd() / ".env"
    if not path.exists():
        return False
    return load_dotenv(path, override=False)


def get_offline_storage_backend() -> str:
    """
    Get key-value storage backend.

    Returns:
        "inmemory" or "file" from OFFLINE_STORAGE_BACKEND, defaults to "inmemory"
    """
    return os.getenv("OFFLINE_STORAGE_BACKEND", "inmemory").lower()


def get_offline_storage_dir() -> Path:
    """
    Get directory used by the file storage backend.

    Returns:
        Path from OFFLINE_STORAGE_DIR, defaults to ~/.kcal-ai/storage
    """
    raw = os.getenv("OFFLINE_STORAGE_DIR")
    if raw:
        return Path(raw).expanduser()
    return Path.home() / ".kcal-ai" / "storage"


def get_offline_send_timeout() -> Optional[float]:
    """
    Get per-entry send timeout for queue flushes.

    OFFLINE_SEND_TIMEOUT_S=0 disables the timeout.

    Returns:
        Seconds (default 30.0), or None when disabled
    """
    value = float(os.getenv("OFFLINE_SEND_TIMEOUT_S", "30"))
    return value if value > 0 else None


def get_offline_queue_warn_size() -> int:
    """Queue size above which growth is logged (OFFLINE_QUEUE_WARN_SIZE, default 50)."""
    return int(os.getenv("OFFLINE_QUEUE_WARN_SIZE", "50"))


def is_offline_single_flight_enabled() -> bool:
    """Whether overlapping flushes are coalesced (OFFLINE_SINGLE_FLIGHT, default on)."""
    return os.getenv("OFFLINE_SINGLE_FLIGHT", "1").lower() not in ("0", "false", "no", "off")


def get_remote_api_url() -> Optional[str]:
    """
    Get base URL of the remote meal store (PostgREST-style API).

    Example .env:
        REMOTE_API_URL=https://project.supabase.co

    Returns:
        URL without trailing slash, or None if not set
    """
    url = os.getenv("REMOTE_API_URL")
    return url.rstrip("/") if url else None


def get_remote_api_key() -> Optional[str]:
    """Get public API key sent with every remote request (REMOTE_API_KEY)."""
    return os.getenv("REMOTE_API_KEY") or None


def get_connectivity_check_url() -> Optional[str]:
    """
    Get URL pinged to decide whether the device is online.

    Returns:
        CONNECTIVITY_CHECK_URL, falling back to the remote API health endpoint
    """
    url = os.getenv("CONNECTIVITY_CHECK_URL")
    if url:
        return url
    base = get_remote_api_url()
    return f"{base}/rest/v1/" if base else None
