"""Seismic volume tools: analysis windows, slice and sub-cube cutting, layer files and trace utilities."""

__version__ = "1.0.0"