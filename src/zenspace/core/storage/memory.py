"""In-process slot storage. Nothing survives the process; handy for tests."""

from .base import SlotStorage


class MemorySlotStorage(SlotStorage):
    def __init__(self, initial: dict[str, str] | None = None, **config):
        super().__init__(**config)
        self._slots: dict[str, str] = dict(initial or {})
        self.writes = 0

    def get(self, key: str) -> str | None:
        return self._slots.get(key)

    def set(self, key: str, value: str) -> None:
        self._slots[key] = value
        self.writes += 1

    def delete(self, key: str) -> bool:
        return self._slots.pop(key, None) is not None
