"""
Local filesystem slot storage.

Each key maps to ``<base_path>/<key>.json``. Writes go through a temp file
and ``os.replace`` so a crash mid-write never leaves a truncated slot.
"""

import os
import re
import tempfile
from pathlib import Path

from loguru import logger

from .base import SlotStorage, StorageError, StoragePermissionError

_SEGMENT_RE = re.compile(r"[A-Za-z0-9_][A-Za-z0-9_.-]*")


class LocalSlotStorage(SlotStorage):
    """Local filesystem slot backend."""

    suffix = ".json"

    def __init__(self, base_path: str = "~/.zenspace-data", **config):
        super().__init__(**config)
        self.base_path = Path(base_path).expanduser().resolve()
        self.base_path.mkdir(parents=True, exist_ok=True)

    def _get_full_path(self, key: str) -> Path:
        """Map a slot key to ``<base_path>/<key>.json``.

        Keys are ``/``-separated names made of letters, digits, ``_``, ``-``
        and ``.``; no segment may start with ``.`` or ``~``. Anything else
        could land outside ``base_path`` and is refused.
        """
        segments = key.split("/")
        bad = [s for s in segments if not _SEGMENT_RE.fullmatch(s)]
        if bad:
            raise StoragePermissionError(f"Invalid slot key {key!r}: bad segment {bad[0]!r}")
        return self.base_path.joinpath(*segments[:-1], segments[-1] + self.suffix)

    def get(self, key: str) -> str | None:
        path = self._get_full_path(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except PermissionError as e:
            raise StoragePermissionError(f"Cannot read {path}: {e}") from e
        except UnicodeDecodeError as e:
            raise StorageError(f"Slot {key!r} is not valid UTF-8: {e}") from e

    def set(self, key: str, value: str) -> None:
        path = self._get_full_path(key)
        path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(tmp_name, path)
        except PermissionError as e:
            raise StoragePermissionError(f"Cannot write to {path}: {e}") from e
        finally:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
        logger.debug(f"Wrote slot {key!r} ({len(value)} chars) to {path}")

    def delete(self, key: str) -> bool:
        path = self._get_full_path(key)
        if not path.exists():
            return False
        path.unlink()
        return True
