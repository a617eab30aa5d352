"""Render decoded router commands with token-aware, human-readable values."""

__version__ = "0.1.0"
