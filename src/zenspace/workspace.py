"""Workspace: the one object that owns an editing session.

Holds the entry store, the augmentation orchestrator and the current search
query, so nothing below it needs module-level state. Presentation code (the
CLI) talks to a Workspace and never to storage directly.
"""

from __future__ import annotations

from collections.abc import Callable

from loguru import logger

from zenspace.augment import AugmentationClient, AugmentationOrchestrator, build_context
from zenspace.core.config import DEFAULT_STORAGE_KEY, Config
from zenspace.core.llm import LLMClient
from zenspace.core.storage import LocalSlotStorage, SlotStorage
from zenspace.notes import Entry, EntryStore, EntryType, filter_entries

ConfirmFn = Callable[[Entry], bool]


class Workspace:
    """Coordinates the store, search query and augmentations.

    Example::

        ws = Workspace.from_config(Config())
        ws.open()
        entry = ws.new_entry("blog")
        ws.store.update(entry.id, content="# Hello")
        await ws.orchestrator.inspire(entry.id)
    """

    def __init__(
        self,
        storage: SlotStorage,
        client: AugmentationClient | None = None,
        *,
        storage_key: str | None = None,
    ):
        self.store = EntryStore(storage, key=storage_key or DEFAULT_STORAGE_KEY)
        self.orchestrator = AugmentationOrchestrator(self.store, client or AugmentationClient())
        self.query = ""

    @classmethod
    def from_config(cls, config: Config) -> Workspace:
        storage = LocalSlotStorage(base_path=config.get_data_dir())
        client = AugmentationClient(LLMClient.from_config(config))
        return cls(storage, client, storage_key=config.get("storage.key"))

    def open(self) -> list[Entry]:
        """Load entries from the slot (seeding on first run or corruption)."""
        entries = self.store.load()
        if self.store.recovered_from_corruption:
            logger.warning("Saved entries were unreadable; started over with the welcome entry")
        return entries

    # -- Editing ----------------------------------------------------------------

    def new_entry(self, entry_type: EntryType | str = EntryType.NOTE) -> Entry:
        return self.store.create(entry_type)

    def delete(self, entry_id: str, confirm: ConfirmFn) -> bool:
        """Delete after asking ``confirm``. A negative answer leaves the store unchanged."""
        entry = self.store.get(entry_id)
        if entry is None:
            return False
        if not confirm(entry):
            logger.debug(f"Delete of {entry_id} cancelled")
            return False
        self.orchestrator.dismiss_summary(entry_id)
        return self.store.delete(entry_id)

    # -- Views ------------------------------------------------------------------

    def set_query(self, query: str) -> list[Entry]:
        self.query = query
        return self.visible_entries()

    def visible_entries(self, entry_type: EntryType | str | None = None) -> list[Entry]:
        """The filtered, sorted view for the current query."""
        return filter_entries(self.store.entries, self.query, entry_type=entry_type)

    # -- Questions --------------------------------------------------------------

    async def ask(self, question: str, context_limit: int = 20_000) -> str | None:
        """Answer a question grounded in the visible entries."""
        context = build_context(self.visible_entries(), limit=context_limit)
        return await self.orchestrator.ask(question, context)
