"""Decide which commands a changeset triggers."""

__version__ = "0.1.0"
