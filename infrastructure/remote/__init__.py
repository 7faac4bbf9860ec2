"""Adapters talking to the remote meal store."""

from infrastructure.remote.http_connectivity_probe import HttpConnectivityProbe
from infrastructure.remote.http_meal_writer import HttpMealWriter

__all__ = ["HttpConnectivityProbe", "HttpMealWriter"]
