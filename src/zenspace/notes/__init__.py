"""Entry model, store, search pipeline and Markdown preview."""

from .models import Entry, EntryType, TagSet
from .render import excerpt, render_markdown
from .search import filter_entries
from .store import EntryStore, decode_entries, encode_entries, welcome_entry

__all__ = [
    "Entry",
    "EntryStore",
    "EntryType",
    "TagSet",
    "decode_entries",
    "encode_entries",
    "excerpt",
    "filter_entries",
    "render_markdown",
    "welcome_entry",
]
