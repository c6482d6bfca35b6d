"""Shared test fixtures for zenspace."""

import tempfile
from unittest.mock import AsyncMock, MagicMock

import pytest

from zenspace.core.storage import MemorySlotStorage
from zenspace.notes import Entry, EntryStore, EntryType, TagSet


@pytest.fixture
def tmp_dir():
    """Provide a temporary directory that is cleaned up after the test."""
    with tempfile.TemporaryDirectory() as d:
        yield d


@pytest.fixture
def storage():
    return MemorySlotStorage()


@pytest.fixture
def store(storage):
    """A loaded store whose slot started empty (so it holds the welcome entry)."""
    s = EntryStore(storage)
    s.load()
    return s


@pytest.fixture
def make_entry():
    """Factory for entries with explicit timestamps."""

    def _make(
        entry_id="e1",
        *,
        title="",
        content="",
        entry_type=EntryType.NOTE,
        tags=(),
        created_at=1_000,
        updated_at=None,
    ):
        return Entry(
            id=entry_id,
            type=entry_type,
            title=title,
            content=content,
            tags=TagSet(tags),
            created_at=created_at,
            updated_at=created_at if updated_at is None else updated_at,
        )

    return _make


@pytest.fixture
def fake_llm():
    """Stand-in for LLMClient: ``agenerate`` is an AsyncMock returning text."""
    llm = MagicMock()
    llm.agenerate = AsyncMock(return_value="")
    return llm
