"""Linkboard: backend for a threaded link-sharing and discussion site."""

__version__ = "0.1.0"
