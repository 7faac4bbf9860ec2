"""Connectivity probe port."""

from typing import Protocol


class IConnectivityProbe(Protocol):
    """Port answering "is the network reachable right now?"."""

    async def is_online(self) -> bool:
        """Return True when the remote store is reachable."""
        ...
