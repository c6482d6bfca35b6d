"""AI augmentation client.

Three stateless operations, each a single round trip to the text-generation
provider: summarize, suggest a title and tags, and answer a question
grounded in the user's own notes. Provider failures surface as
``AugmentationFailedError``; a structured reply that does not parse is
resolved here to a safe default instead.
"""

from __future__ import annotations

import json
from collections.abc import Iterable

from loguru import logger
from pydantic import BaseModel, Field, ValidationError

from zenspace.core.exceptions import AugmentationFailedError, MalformedAugmentationResponseError
from zenspace.core.llm import LLMClient, strip_code_fences
from zenspace.notes.models import Entry

SUMMARY_UNAVAILABLE = "Could not generate summary."
UNTITLED = "Untitled"

SUMMARY_TEMPERATURE = 0.7

SUMMARY_PROMPT = "Please provide a concise summary (max 3 sentences) of the following content: \n\n{content}"

SUGGEST_PROMPT = (
    "Based on the following content, suggest a short catchy title and 3 relevant tags. "
    "Return in JSON format. \n\nContent: {content}"
)

ANSWER_PROMPT = "Context: {context}\n\nUser Question: {query}"

ANSWER_SYSTEM = (
    "You are a helpful assistant for a personal blog and note app. "
    "Use the provided context to answer the user's questions about their own writings. "
    "Be concise and personal."
)


class TitleSuggestion(BaseModel):
    """Schema for the title/tags suggestion."""

    title: str = Field(description="Short catchy title")
    tags: list[str] = Field(description="A few relevant tags")


SUGGESTION_RESPONSE_FORMAT = {
    "type": "json_schema",
    "json_schema": {
        "name": "title_suggestion",
        "schema": {
            "type": "object",
            "properties": {
                "title": {"type": "string"},
                "tags": {"type": "array", "items": {"type": "string"}},
            },
            "required": ["title", "tags"],
        },
    },
}


def parse_suggestion(text: str) -> TitleSuggestion:
    """Parse and validate a title/tags payload.

    Raises:
        MalformedAugmentationResponseError: If the payload is not valid JSON
            or does not match the schema.
    """
    try:
        data = json.loads(strip_code_fences(text or ""))
        return TitleSuggestion.model_validate(data)
    except (json.JSONDecodeError, ValidationError) as e:
        raise MalformedAugmentationResponseError(f"Unparseable suggestion payload: {e}") from e


def build_context(entries: Iterable[Entry], limit: int = 20_000) -> str:
    """Join entries into a context string for ``answer_with_context``.

    Entries are added in the given order until ``limit`` characters would
    be exceeded.
    """
    parts: list[str] = []
    used = 0
    for entry in entries:
        block = f"## {entry.title or UNTITLED} ({entry.type.value})\n{entry.content.strip()}"
        if entry.tags:
            block += "\nTags: " + ", ".join(entry.tags)
        if parts and used + len(block) > limit:
            break
        parts.append(block)
        used += len(block) + 2
    return "\n\n".join(parts)


class AugmentationClient:
    """Issues augmentation requests through an :class:`LLMClient`.

    The client never retries. Each call either returns a result or raises
    ``AugmentationFailedError`` chained to the provider's exception.
    """

    def __init__(self, llm: LLMClient | None = None):
        self.llm = llm or LLMClient()

    async def summarize(self, content: str) -> str:
        """Summarize ``content`` in at most three sentences."""
        text = await self._generate(
            SUMMARY_PROMPT.format(content=content),
            temperature=SUMMARY_TEMPERATURE,
        )
        return text if text.strip() else SUMMARY_UNAVAILABLE

    async def suggest_title_and_tags(self, content: str) -> TitleSuggestion:
        """Ask for a short title and a few tags.

        A reply that fails to parse yields ``TitleSuggestion("Untitled", [])``.
        """
        text = await self._generate(
            SUGGEST_PROMPT.format(content=content),
            response_format=SUGGESTION_RESPONSE_FORMAT,
        )
        try:
            return parse_suggestion(text)
        except MalformedAugmentationResponseError as e:
            logger.warning(f"{e}; falling back to defaults")
            return TitleSuggestion(title=UNTITLED, tags=[])

    async def answer_with_context(self, query: str, context: str) -> str:
        """Answer ``query`` using only the supplied notes as context."""
        return await self._generate(
            ANSWER_PROMPT.format(context=context, query=query),
            system=ANSWER_SYSTEM,
        )

    async def _generate(self, prompt: str, **kwargs) -> str:
        try:
            return await self.llm.agenerate(prompt, **kwargs)
        except ImportError:
            raise
        except Exception as e:
            logger.error(f"Augmentation request failed ({type(e).__name__}): {e}")
            raise AugmentationFailedError(f"Augmentation request failed: {e}") from e
