"""
Slot storage backends for zenspace.

A slot is a single named key holding the whole serialized entry collection.
"""

from .base import SlotStorage, StorageError, StoragePermissionError
from .local import LocalSlotStorage
from .memory import MemorySlotStorage

__all__ = [
    "LocalSlotStorage",
    "MemorySlotStorage",
    "SlotStorage",
    "StorageError",
    "StoragePermissionError",
]
