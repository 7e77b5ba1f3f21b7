"""Inspection and staging tools for vendor asset packages."""

__version__ = "0.1.0"
