"""Threaded posts and comments storage engine with pluggable backends."""

__version__ = "1.0.0"
