"""
Abstract base class for durable slot storage.

A slot is a single named key holding one serialized blob. Backends only need
to read, write and delete whole values; there is no partial update.
"""

from abc import ABC, abstractmethod

from ..exceptions import ZenspaceError


class SlotStorage(ABC):
    """Abstract base class for key-value slot backends."""

    def __init__(self, **config):
        self.config = config

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the stored text for ``key``, or None if the slot is empty."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Replace the value stored under ``key``."""

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Delete a slot. Returns True if deleted, False if it didn't exist."""

    def exists(self, key: str) -> bool:
        return self.get(key) is not None


class StorageError(ZenspaceError):
    """Base exception for storage errors."""


class StoragePermissionError(StorageError):
    """Raised when a storage operation is not permitted."""
