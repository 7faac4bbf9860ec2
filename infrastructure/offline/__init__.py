"""Wiring of the offline meal queue and its collaborators."""
