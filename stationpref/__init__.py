"""Resolve Japanese station names into prefecture addresses."""

__version__ = "0.1.0"
