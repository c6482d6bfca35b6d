"""Search/filter/sort pipeline.

Derives the visible list from the store for a query string. Pure: the
input collection is never mutated and nothing is cached between calls.
"""

from __future__ import annotations

from collections.abc import Iterable

from .models import Entry, EntryType


def matches(entry: Entry, query: str) -> bool:
    """Case-insensitive substring match against title, content, or any tag.

    ``query`` is expected to be already case-folded.
    """
    if not query:
        return True
    if query in entry.title.casefold() or query in entry.content.casefold():
        return True
    return any(query in tag.casefold() for tag in entry.tags)


def filter_entries(
    entries: Iterable[Entry],
    query: str = "",
    *,
    entry_type: EntryType | str | None = None,
) -> list[Entry]:
    """Return the entries matching ``query``, most recently modified first.

    Args:
        entries: Collection in insertion order.
        query: Free-text query, matched as is; only ``""`` matches everything.
        entry_type: Optionally keep only ``blog`` or ``note`` entries.

    Returns:
        A new list sorted by ``updated_at`` descending. Ties keep their
        insertion order.
    """
    needle = query.casefold()
    wanted_type = EntryType(entry_type) if entry_type else None

    visible = [
        entry
        for entry in entries
        if (wanted_type is None or entry.type == wanted_type) and matches(entry, needle)
    ]
    # sorted() is stable, so equal timestamps keep insertion order
    return sorted(visible, key=lambda entry: entry.updated_at, reverse=True)
