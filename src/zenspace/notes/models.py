"""Core data models for entries.

An ``Entry`` is a single note or blog post. Tags are held in a ``TagSet`` so
duplicate suppression is a property of the type rather than of every caller.
"""

from __future__ import annotations

import time
from collections.abc import Iterable, Iterator, MutableSet
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class EntryType(StrEnum):
    BLOG = "blog"
    NOTE = "note"


def now_ms() -> int:
    """Current wall-clock time in integer milliseconds since the epoch."""
    return int(time.time() * 1000)


class TagSet(MutableSet):
    """An insertion-ordered set of tag labels.

    Membership is case-sensitive exact match. Iteration order is the order in
    which tags were first added, so display stays stable across edits.
    """

    def __init__(self, tags: Iterable[str] = ()):
        self._items: dict[str, None] = {}
        for tag in tags:
            self.add(tag)

    def __contains__(self, tag: object) -> bool:
        return tag in self._items

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def add(self, tag: str) -> None:
        if not isinstance(tag, str):
            raise TypeError(f"Tags must be strings, got {type(tag).__name__}")
        self._items.setdefault(tag, None)

    def discard(self, tag: str) -> None:
        self._items.pop(tag, None)

    def union(self, tags: Iterable[str]) -> TagSet:
        """Return a new TagSet with ``tags`` appended after the existing ones."""
        merged = TagSet(self)
        for tag in tags:
            merged.add(tag)
        return merged

    def to_list(self) -> list[str]:
        return list(self._items)

    def copy(self) -> TagSet:
        return TagSet(self)

    def __repr__(self) -> str:
        return f"TagSet({self.to_list()!r})"


@dataclass
class Entry:
    """A note or blog document.

    Attributes:
        id: Opaque unique identifier, fixed at creation.
        title: Free text, may be empty.
        content: Markdown body.
        type: ``blog`` or ``note``.
        tags: Ordered set of labels.
        created_at: Creation time (ms since epoch).
        updated_at: Last mutation time (ms since epoch), never before ``created_at``.
    """

    id: str
    type: EntryType = EntryType.NOTE
    title: str = ""
    content: str = ""
    tags: TagSet = field(default_factory=TagSet)
    created_at: int = field(default_factory=now_ms)
    updated_at: int = 0

    def __post_init__(self):
        self.type = EntryType(self.type)
        if not isinstance(self.tags, TagSet):
            self.tags = TagSet(self.tags)
        if self.updated_at < self.created_at:
            self.updated_at = self.created_at

    @property
    def is_blank(self) -> bool:
        """True when the content holds nothing but whitespace."""
        return not self.content.strip()

    def to_dict(self) -> dict[str, Any]:
        """Serialize using the slot's wire keys."""
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "type": self.type.value,
            "tags": self.tags.to_list(),
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: Any) -> Entry:
        """Build an Entry from a wire record.

        Raises:
            ValueError: If a field is missing, mistyped, or violates an invariant.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Entry record must be an object, got {type(data).__name__}")

        entry_id = data.get("id")
        if not isinstance(entry_id, str) or not entry_id:
            raise ValueError(f"Entry id must be a non-empty string, got {entry_id!r}")

        for key in ("title", "content"):
            if not isinstance(data.get(key), str):
                raise ValueError(f"Entry {entry_id}: {key!r} must be a string")

        tags = data.get("tags")
        if not isinstance(tags, list) or not all(isinstance(t, str) for t in tags):
            raise ValueError(f"Entry {entry_id}: 'tags' must be a list of strings")

        created_at, updated_at = data.get("createdAt"), data.get("updatedAt")
        for key, value in (("createdAt", created_at), ("updatedAt", updated_at)):
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"Entry {entry_id}: {key!r} must be an integer timestamp")
        if updated_at < created_at:
            raise ValueError(f"Entry {entry_id}: updatedAt precedes createdAt")

        try:
            entry_type = EntryType(data.get("type"))
        except ValueError:
            raise ValueError(f"Entry {entry_id}: unknown type {data.get('type')!r}") from None

        return cls(
            id=entry_id,
            type=entry_type,
            title=data["title"],
            content=data["content"],
            tags=TagSet(tags),
            created_at=created_at,
            updated_at=updated_at,
        )

    def __repr__(self) -> str:
        title = self.title[:30] + "..." if len(self.title) > 30 else self.title
        return f"Entry(id='{self.id}', type='{self.type.value}', title='{title}')"
