"""Tests for AugmentationClient: prompts, parsing fallbacks and error wrapping."""

import pytest

from zenspace.augment.client import (
    ANSWER_SYSTEM,
    SUGGESTION_RESPONSE_FORMAT,
    SUMMARY_TEMPERATURE,
    SUMMARY_UNAVAILABLE,
    UNTITLED,
    AugmentationClient,
    TitleSuggestion,
    build_context,
    parse_suggestion,
)
from zenspace.core.exceptions import (
    AugmentationFailedError,
    MalformedAugmentationResponseError,
)
from zenspace.notes.models import EntryType


@pytest.fixture
def client(fake_llm):
    return AugmentationClient(llm=fake_llm)


class TestParseSuggestion:
    def test_plain_json(self):
        result = parse_suggestion('{"title": "Morning Pages", "tags": ["habits", "writing"]}')
        assert result == TitleSuggestion(title="Morning Pages", tags=["habits", "writing"])

    def test_fenced_json(self):
        text = '```json\n{"title": "Fenced", "tags": ["a"]}\n```'
        assert parse_suggestion(text).title == "Fenced"

    def test_not_json(self):
        with pytest.raises(MalformedAugmentationResponseError):
            parse_suggestion("Sure! Here is a title: Hello")

    def test_wrong_shape(self):
        with pytest.raises(MalformedAugmentationResponseError):
            parse_suggestion('{"title": "x", "tags": "not-a-list"}')

    def test_missing_field(self):
        with pytest.raises(MalformedAugmentationResponseError):
            parse_suggestion('{"title": "x"}')

    def test_malformed_is_an_augmentation_failure(self):
        assert issubclass(MalformedAugmentationResponseError, AugmentationFailedError)


class TestSummarize:
    @pytest.mark.asyncio
    async def test_returns_provider_text(self, client, fake_llm):
        fake_llm.agenerate.return_value = "A short summary."
        assert await client.summarize("Long text") == "A short summary."

    @pytest.mark.asyncio
    async def test_prompt_and_temperature(self, client, fake_llm):
        fake_llm.agenerate.return_value = "ok"
        await client.summarize("Body text")
        prompt = fake_llm.agenerate.call_args.args[0]
        assert "max 3 sentences" in prompt
        assert prompt.endswith("Body text")
        assert fake_llm.agenerate.call_args.kwargs["temperature"] == SUMMARY_TEMPERATURE

    @pytest.mark.asyncio
    async def test_empty_reply_uses_sentinel(self, client, fake_llm):
        fake_llm.agenerate.return_value = "   "
        assert await client.summarize("text") == SUMMARY_UNAVAILABLE

    @pytest.mark.asyncio
    async def test_provider_error_wrapped(self, client, fake_llm):
        fake_llm.agenerate.side_effect = RuntimeError("quota exceeded")
        with pytest.raises(AugmentationFailedError, match="quota exceeded") as exc_info:
            await client.summarize("text")
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    @pytest.mark.asyncio
    async def test_missing_litellm_propagates(self, client, fake_llm):
        fake_llm.agenerate.side_effect = ImportError("Install LLM support with: pip install litellm")
        with pytest.raises(ImportError):
            await client.summarize("text")

    @pytest.mark.asyncio
    async def test_single_attempt(self, client, fake_llm):
        fake_llm.agenerate.side_effect = TimeoutError("slow")
        with pytest.raises(AugmentationFailedError):
            await client.summarize("text")
        assert fake_llm.agenerate.await_count == 1


class TestSuggest:
    @pytest.mark.asyncio
    async def test_parses_reply(self, client, fake_llm):
        fake_llm.agenerate.return_value = '{"title": "Coffee Notes", "tags": ["coffee", "morning", "ritual"]}'
        result = await client.suggest_title_and_tags("I drank coffee.")
        assert result.title == "Coffee Notes"
        assert result.tags == ["coffee", "morning", "ritual"]

    @pytest.mark.asyncio
    async def test_requests_structured_output(self, client, fake_llm):
        fake_llm.agenerate.return_value = '{"title": "t", "tags": []}'
        await client.suggest_title_and_tags("content")
        call = fake_llm.agenerate.call_args
        assert call.kwargs["response_format"] == SUGGESTION_RESPONSE_FORMAT
        assert "catchy title" in call.args[0]
        assert call.args[0].endswith("Content: content")

    @pytest.mark.asyncio
    async def test_malformed_reply_falls_back(self, client, fake_llm):
        fake_llm.agenerate.return_value = "not json at all"
        result = await client.suggest_title_and_tags("content")
        assert result == TitleSuggestion(title=UNTITLED, tags=[])

    @pytest.mark.asyncio
    async def test_empty_reply_falls_back(self, client, fake_llm):
        fake_llm.agenerate.return_value = ""
        result = await client.suggest_title_and_tags("content")
        assert result.title == UNTITLED

    @pytest.mark.asyncio
    async def test_provider_error_is_not_masked(self, client, fake_llm):
        fake_llm.agenerate.side_effect = ConnectionError("offline")
        with pytest.raises(AugmentationFailedError):
            await client.suggest_title_and_tags("content")


class TestAnswer:
    @pytest.mark.asyncio
    async def test_uses_system_framing(self, client, fake_llm):
        fake_llm.agenerate.return_value = "You wrote about coffee."
        answer = await client.answer_with_context("What did I write?", "## Coffee\nbeans")
        assert answer == "You wrote about coffee."
        call = fake_llm.agenerate.call_args
        assert call.kwargs["system"] == ANSWER_SYSTEM
        assert call.args[0] == "Context: ## Coffee\nbeans\n\nUser Question: What did I write?"

    @pytest.mark.asyncio
    async def test_empty_answer_passes_through(self, client, fake_llm):
        fake_llm.agenerate.return_value = ""
        assert await client.answer_with_context("q", "c") == ""


class TestBuildContext:
    def test_formats_entries(self, make_entry):
        entries = [
            make_entry("a", title="Coffee", content="beans\n", tags=["drink"]),
            make_entry("b", content="untitled body", entry_type=EntryType.BLOG),
        ]
        context = build_context(entries)
        assert context == ("## Coffee (note)\nbeans\nTags: drink\n\n## Untitled (blog)\nuntitled body")

    def test_respects_limit(self, make_entry):
        entries = [make_entry(str(i), title=f"T{i}", content="x" * 50) for i in range(10)]
        context = build_context(entries, limit=150)
        assert "## T0" in context
        assert "## T9" not in context
        assert len(context) <= 150

    def test_first_entry_always_included(self, make_entry):
        context = build_context([make_entry("a", content="y" * 500)], limit=10)
        assert context.startswith("## Untitled")

    def test_empty(self):
        assert build_context([]) == ""
