"""Exceptions raised by the store module."""

from __future__ import annotations


class StoreError(Exception):
    """Base class for persistence failures and store lifecycle misuse."""


class InitializationError(StoreError):
    """The database file could not be opened or its schema created."""


class WriteError(StoreError):
    """An insert or delete batch failed and was rolled back."""
