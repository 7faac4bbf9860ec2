"""Offline meal use cases."""
