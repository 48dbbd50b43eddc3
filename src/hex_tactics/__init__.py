"""Hex-grid geometry, sensor concealment, navigation and targeting for sector combat."""

__version__ = "0.1.0"
