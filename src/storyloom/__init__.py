"""Storyloom - collaborative story writing backend."""

__version__ = "0.1.0"
