"""Hookshot: webhook notifications for project events."""

__version__ = "0.1.0"
