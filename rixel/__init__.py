"""Rixel: tile grid spatial index and movement mask."""

__version__ = "0.1.0"
