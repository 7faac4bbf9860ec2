"""Core building blocks of the offline meal domain."""
