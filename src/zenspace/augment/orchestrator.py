"""Augmentation orchestrator.

Runs at most one augmentation per entry at a time and merges results back
into the store. Each entry moves ``IDLE -> PROCESSING -> IDLE`` whether the
call succeeds or fails. Failures are absorbed here: they are logged and
recorded for display, and the entry is left untouched.

Merges are applied to the entry as it stands when the provider answers,
keyed by the id captured at call time. An entry deleted in the meantime
stays deleted.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from enum import StrEnum
from typing import TypeVar

from loguru import logger

from zenspace.core.exceptions import AugmentationFailedError
from zenspace.notes.store import EntryStore

from .client import AugmentationClient, TitleSuggestion

T = TypeVar("T")

# Guard key for questions, which are not tied to one entry.
ASK_KEY = "__ask__"


class AugmentationState(StrEnum):
    IDLE = "idle"
    PROCESSING = "processing"


class AugmentationOrchestrator:
    """Coordinates augmentation calls for the entries of one store.

    Attributes:
        summaries: Ephemeral summaries by entry id. Never persisted.
        errors: Last failure message by entry id, cleared on the next attempt.
    """

    def __init__(self, store: EntryStore, client: AugmentationClient):
        self.store = store
        self.client = client
        self._processing: set[str] = set()
        self.summaries: dict[str, str] = {}
        self.errors: dict[str, str] = {}

    # -- State ------------------------------------------------------------------

    def state(self, entry_id: str) -> AugmentationState:
        return AugmentationState.PROCESSING if entry_id in self._processing else AugmentationState.IDLE

    def is_processing(self, entry_id: str) -> bool:
        return entry_id in self._processing

    def error(self, entry_id: str) -> str | None:
        return self.errors.get(entry_id)

    def summary(self, entry_id: str) -> str | None:
        return self.summaries.get(entry_id)

    def dismiss_summary(self, entry_id: str) -> None:
        self.summaries.pop(entry_id, None)

    # -- Operations -------------------------------------------------------------

    async def inspire(self, entry_id: str) -> TitleSuggestion | None:
        """Suggest a title and tags for an entry and merge them in.

        The title is only filled if it is blank; suggested tags are unioned
        into the existing set. Returns the suggestion, or None if nothing
        was requested or the request failed.
        """
        entry = self.store.get(entry_id)
        if entry is None or entry.is_blank:
            return None

        suggestion = await self._run(entry_id, lambda: self.client.suggest_title_and_tags(entry.content))
        if suggestion is None:
            return None

        current = self.store.get(entry_id)
        if current is None:
            logger.info(f"Entry {entry_id} was deleted before suggestions arrived; dropping them")
            return suggestion

        changes: dict = {"tags": current.tags.union(suggestion.tags)}
        if not current.title.strip():
            changes["title"] = suggestion.title
        self.store.apply(entry_id, **changes)
        return suggestion

    async def summarize(self, entry_id: str) -> str | None:
        """Summarize an entry into ``summaries``; the entry itself is not modified."""
        entry = self.store.get(entry_id)
        if entry is None or entry.is_blank:
            return None

        summary = await self._run(entry_id, lambda: self.client.summarize(entry.content))
        if summary is None:
            return None
        if self.store.get(entry_id) is None:
            logger.info(f"Entry {entry_id} was deleted before its summary arrived; dropping it")
            return summary
        self.summaries[entry_id] = summary
        return summary

    async def ask(self, query: str, context: str) -> str | None:
        """Answer a question about the user's notes. None on failure."""
        if not query.strip():
            return None
        return await self._run(ASK_KEY, lambda: self.client.answer_with_context(query, context))

    # -- Internal ---------------------------------------------------------------

    async def _run(self, key: str, call: Callable[[], Awaitable[T]]) -> T | None:
        if key in self._processing:
            logger.debug(f"Augmentation already in flight for {key}; ignoring trigger")
            return None

        self._processing.add(key)
        self.errors.pop(key, None)
        try:
            return await call()
        except AugmentationFailedError as e:
            logger.warning(f"Augmentation for {key} failed: {e}")
            self.errors[key] = str(e)
            return None
        finally:
            self._processing.discard(key)
