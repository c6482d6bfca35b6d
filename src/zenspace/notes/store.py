"""EntryStore: the canonical entry collection and its durable slot.

The store owns every ``Entry`` plus the id of the entry open in the editor.
Each successful create/update/delete rewrites the whole collection to one
slot as a JSON array; ``load`` reverses that, reseeding a welcome entry when
the slot is missing or unreadable.
"""

from __future__ import annotations

import json
import random
import string
from collections.abc import Iterator
from typing import Any

from loguru import logger

from zenspace.core.config import DEFAULT_STORAGE_KEY
from zenspace.core.exceptions import CorruptStateError
from zenspace.core.storage import SlotStorage, StorageError

from .models import Entry, EntryType, TagSet, now_ms

_ID_ALPHABET = string.ascii_lowercase + string.digits
_ID_LENGTH = 9

# Fields a patch may touch. Anything else (id, createdAt, ...) is dropped.
EDITABLE_FIELDS = frozenset({"title", "content", "type", "tags"})

WELCOME_TITLE = "Welcome to zenspace"
WELCOME_CONTENT = """# Getting Started

This is your personal space for writing and thinking.

### Features
- AI-powered summaries
- Catchy title generation
- Minimalist Markdown-ready editor
- Instant search"""


def encode_entries(entries: list[Entry] | tuple[Entry, ...]) -> str:
    """Serialize a collection to the slot's JSON array format."""
    return json.dumps([entry.to_dict() for entry in entries], ensure_ascii=False)


def decode_entries(raw: str) -> list[Entry]:
    """Parse the slot's JSON array back into entries.

    Raises:
        CorruptStateError: If the text is not JSON, not an array, holds an
            invalid record, or repeats an id.
    """
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise CorruptStateError(f"Entry slot is not valid JSON: {e}") from e

    if not isinstance(data, list):
        raise CorruptStateError(f"Entry slot must hold a JSON array, got {type(data).__name__}")

    entries: list[Entry] = []
    seen: set[str] = set()
    for index, record in enumerate(data):
        try:
            entry = Entry.from_dict(record)
        except ValueError as e:
            raise CorruptStateError(f"Invalid entry at index {index}: {e}") from e
        if entry.id in seen:
            raise CorruptStateError(f"Duplicate entry id {entry.id!r} at index {index}")
        seen.add(entry.id)
        entries.append(entry)
    return entries


def welcome_entry() -> Entry:
    """The single entry a fresh or unreadable slot is seeded with."""
    now = now_ms()
    return Entry(
        id="1",
        type=EntryType.NOTE,
        title=WELCOME_TITLE,
        content=WELCOME_CONTENT,
        tags=TagSet(["welcome", "guide"]),
        created_at=now,
        updated_at=now,
    )


class EntryStore:
    """In-memory entry collection persisted to a single durable slot.

    Insertion order puts the newest entry first; display order is the
    search pipeline's business. Selection is held by id and resolves to
    ``None`` whenever that id is no longer live.

    Example::

        store = EntryStore(LocalSlotStorage("~/.zenspace-data"))
        store.load()
        entry = store.create(EntryType.BLOG)
        store.update(entry.id, title="Hello", tags=["draft"])
    """

    def __init__(self, storage: SlotStorage, key: str = DEFAULT_STORAGE_KEY):
        self.storage = storage
        self.key = key
        self._entries: list[Entry] = []
        self._selected_id: str | None = None
        self._loaded = False
        self.recovered_from_corruption = False

    # -- Collection access ----------------------------------------------------

    @property
    def loaded(self) -> bool:
        """Whether ``load()`` has run. An empty store is not the same as an unloaded one."""
        return self._loaded

    @property
    def entries(self) -> tuple[Entry, ...]:
        """Live entries in insertion order (newest first)."""
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(tuple(self._entries))

    def __contains__(self, entry_id: object) -> bool:
        return self.get(entry_id) is not None  # type: ignore[arg-type]

    def get(self, entry_id: str | None) -> Entry | None:
        if entry_id is None:
            return None
        for entry in self._entries:
            if entry.id == entry_id:
                return entry
        return None

    # -- Selection --------------------------------------------------------------

    @property
    def selected_id(self) -> str | None:
        """The selected id, or None if it does not resolve to a live entry."""
        if self.get(self._selected_id) is None:
            return None
        return self._selected_id

    @property
    def selected(self) -> Entry | None:
        return self.get(self._selected_id)

    def select(self, entry_id: str | None) -> Entry | None:
        """Open an entry in the editor. Unknown ids clear the selection."""
        entry = self.get(entry_id)
        self._selected_id = entry.id if entry else None
        return entry

    # -- Mutations --------------------------------------------------------------

    def create(self, entry_type: EntryType | str = EntryType.NOTE) -> Entry:
        """Create an empty entry, put it first, and select it."""
        now = now_ms()
        entry = Entry(
            id=self._generate_id(),
            type=EntryType(entry_type),
            created_at=now,
            updated_at=now,
        )
        self._entries.insert(0, entry)
        self._selected_id = entry.id
        logger.debug(f"Created {entry.type.value} entry {entry.id}")
        self._autosave()
        return entry

    def update(self, entry_id: str, **fields: Any) -> Entry | None:
        """Merge ``fields`` into the selected entry.

        Only the currently selected entry can be edited; any other id (or an
        unknown one) is a silent no-op that returns None.
        """
        if entry_id != self.selected_id:
            logger.debug(f"Ignoring update for {entry_id}: not the selected entry")
            return None
        return self.apply(entry_id, **fields)

    def apply(self, entry_id: str, **fields: Any) -> Entry | None:
        """Merge ``fields`` into an entry regardless of selection.

        ``id``, ``created_at``/``createdAt`` and ``updated_at``/``updatedAt``
        are never taken from the patch. Returns None if the entry is gone.
        """
        entry = self.get(entry_id)
        if entry is None:
            logger.debug(f"Ignoring update for missing entry {entry_id}")
            return None

        changes = self._clean_patch(fields)
        for key, value in changes.items():
            setattr(entry, key, value)
        entry.updated_at = max(now_ms(), entry.created_at)
        self._autosave()
        return entry

    def add_tag(self, entry_id: str, tag: str) -> Entry | None:
        """Add one tag to the selected entry. Blank tags are ignored."""
        entry = self.get(entry_id)
        tag = tag.strip()
        if entry is None or not tag:
            return None
        return self.update(entry_id, tags=entry.tags.union([tag]))

    def remove_tag(self, entry_id: str, tag: str) -> Entry | None:
        entry = self.get(entry_id)
        if entry is None or tag not in entry.tags:
            return None
        return self.update(entry_id, tags=TagSet(t for t in entry.tags if t != tag))

    def delete(self, entry_id: str) -> bool:
        """Remove an entry and repair the selection.

        Confirmation is the caller's job. Deleting the last entry still
        persists the now-empty collection.
        """
        entry = self.get(entry_id)
        if entry is None:
            return False

        was_selected = self._selected_id == entry_id
        self._entries.remove(entry)
        if was_selected:
            self._selected_id = self._entries[0].id if self._entries else None
        logger.debug(f"Deleted entry {entry_id}; selection now {self._selected_id}")
        self.persist()
        return True

    # -- Persistence ------------------------------------------------------------

    def load(self) -> list[Entry]:
        """Rebuild the collection from the slot.

        A missing slot seeds the welcome entry. A slot that cannot be read or
        decoded is logged and seeded the same way, setting
        ``recovered_from_corruption``.
        """
        self.recovered_from_corruption = False
        try:
            raw = self.storage.get(self.key)
            entries = None if raw is None else decode_entries(raw)
        except (CorruptStateError, StorageError) as e:
            logger.warning(f"Failed to load entries, reseeding: {e}")
            self.recovered_from_corruption = True
            entries = [welcome_entry()]

        if entries is None:
            logger.info(f"No saved entries under {self.key!r}; seeding welcome entry")
            entries = [welcome_entry()]

        self._entries = entries
        self._selected_id = entries[0].id if entries else None
        self._loaded = True
        return list(entries)

    def persist(self) -> None:
        """Write the whole collection to the slot."""
        self.storage.set(self.key, encode_entries(self._entries))

    def _autosave(self) -> None:
        # An empty collection is only ever written by an explicit delete.
        if self._entries:
            self.persist()

    # -- Internal ---------------------------------------------------------------

    def _generate_id(self) -> str:
        while True:
            candidate = "".join(random.choices(_ID_ALPHABET, k=_ID_LENGTH))
            if self.get(candidate) is None:
                return candidate

    @staticmethod
    def _clean_patch(fields: dict[str, Any]) -> dict[str, Any]:
        changes: dict[str, Any] = {}
        for key, value in fields.items():
            if key not in EDITABLE_FIELDS:
                if key not in ("id", "created_at", "createdAt", "updated_at", "updatedAt"):
                    logger.warning(f"Ignoring unknown entry field {key!r}")
                continue
            if key == "tags":
                value = TagSet(value)
            elif key == "type":
                value = EntryType(value)
            elif not isinstance(value, str):
                raise TypeError(f"Entry field {key!r} must be a string, got {type(value).__name__}")
            changes[key] = value
        return changes
