"""Resolve, verify and install dirclean release binaries."""

__version__ = "0.1.0"
