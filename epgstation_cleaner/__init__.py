"""Retention cleaner for EPGStation recordings."""

__version__ = "1.0.0"
