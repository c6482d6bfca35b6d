"""Tests for the CLI entry point."""

import json
import os
import sys
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest
from click.testing import CliRunner
from loguru import logger

from zenspace.cli import main


@pytest.fixture(autouse=True)
def isolated(monkeypatch, tmp_dir):
    """Keep the real ~/.zenspace config and ZENSPACE_* env out of CLI runs."""
    for key in list(os.environ):
        if key.startswith("ZENSPACE_"):
            monkeypatch.delenv(key)
    monkeypatch.setattr("zenspace.cli.common.CONFIG_PATH", Path(tmp_dir) / "missing.yaml")
    yield
    logger.remove()
    logger.add(sys.stderr, level="WARNING")


@pytest.fixture
def run(tmp_dir):
    runner = CliRunner()

    def _run(*args, **kwargs):
        return runner.invoke(main, ["--data-dir", tmp_dir, *args], **kwargs)

    return _run


def _slot(tmp_dir):
    return json.loads((Path(tmp_dir) / "zenspace_data_v1.json").read_text(encoding="utf-8"))


class TestCliGroup:
    def test_help(self):
        runner = CliRunner()
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "zenspace" in result.output
        for command in ("new", "list", "show", "edit", "delete", "summarize", "inspire", "ask"):
            assert command in result.output

    def test_version(self):
        runner = CliRunner()
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output


class TestSetup:
    def test_invalid_config_is_reported(self, run, monkeypatch):
        monkeypatch.setenv("ZENSPACE_LLM__PROVIDER", "nonsense")
        result = run("list")
        assert result.exit_code != 0
        assert "unknown provider" in result.output

    def test_creates_configured_directories(self, run, tmp_dir):
        assert run("list").exit_code == 0
        assert (Path(tmp_dir) / "logs").is_dir()


class TestEntryCommands:
    def test_first_list_shows_welcome(self, run):
        result = run("list")
        assert result.exit_code == 0
        assert "Welcome to zenspace" in result.output
        assert "1 of 1 entries" in result.output

    def test_new_then_list(self, run, tmp_dir):
        result = run("new", "--type", "blog", "--title", "Espresso", "--content", "Notes on beans")
        assert result.exit_code == 0
        entry_id = result.output.strip()

        saved = _slot(tmp_dir)
        assert saved[0]["id"] == entry_id
        assert saved[0]["type"] == "blog"
        assert saved[0]["title"] == "Espresso"

        listing = run("list", "espresso")
        assert entry_id in listing.output
        assert "1 of 2 entries" in listing.output

    def test_list_no_match(self, run):
        result = run("list", "zzz-nothing")
        assert result.exit_code == 0
        assert "No entries found." in result.output

    def test_list_type_filter(self, run):
        run("new", "--type", "blog", "--title", "Post")
        result = run("list", "--type", "note")
        assert "Post" not in result.output
        assert "Welcome to zenspace" in result.output

    def test_show_renders(self, run):
        result = run("show", "1")
        assert result.exit_code == 0
        assert "Welcome to zenspace" in result.output
        assert "Getting Started" in result.output
        assert "#welcome" in result.output

    def test_show_raw(self, run):
        result = run("show", "1", "--raw")
        assert result.output.startswith("# Getting Started")

    def test_show_unknown(self, run):
        result = run("show", "nope")
        assert result.exit_code != 0
        assert "No entry with id" in result.output

    def test_edit(self, run, tmp_dir):
        result = run("edit", "1", "--title", "Renamed", "--tag", "extra", "--untag", "guide")
        assert result.exit_code == 0
        assert "Updated 1" in result.output
        saved = _slot(tmp_dir)[0]
        assert saved["title"] == "Renamed"
        assert saved["tags"] == ["welcome", "extra"]
        assert saved["updatedAt"] >= saved["createdAt"]

    def test_edit_tags_go_through_store(self, run, tmp_dir):
        result = run("edit", "1", "--tag", "guide", "--tag", "  ", "--tag", " new ", "--untag", "missing")
        assert result.exit_code == 0
        assert _slot(tmp_dir)[0]["tags"] == ["welcome", "guide", "new"]

    def test_edit_append(self, run, tmp_dir):
        run("edit", "1", "--content", "first")
        run("edit", "1", "--append", "second")
        assert _slot(tmp_dir)[0]["content"] == "first\n\nsecond"

    def test_edit_nothing(self, run):
        result = run("edit", "1")
        assert "Nothing to change." in result.output

    def test_delete_confirmed(self, run, tmp_dir):
        result = run("delete", "1", "--yes")
        assert result.exit_code == 0
        assert "Deleted 1" in result.output
        assert _slot(tmp_dir) == []

        listing = run("list")
        assert "No entries found." in listing.output

    def test_delete_prompt_declined(self, run):
        run("list")  # seed
        result = run("delete", "1", input="n\n")
        assert "Cancelled." in result.output
        assert "Welcome to zenspace" in run("list").output

    def test_delete_prompt_accepted(self, run):
        result = run("delete", "1", input="y\n")
        assert "Deleted 1" in result.output


class TestAiCommands:
    def test_summarize(self, run):
        with patch("zenspace.core.llm.client.LLMClient.agenerate", new=AsyncMock(return_value="Short.")):
            result = run("summarize", "1")
        assert result.exit_code == 0
        assert "Short." in result.output

    def test_summarize_failure(self, run):
        with patch(
            "zenspace.core.llm.client.LLMClient.agenerate",
            new=AsyncMock(side_effect=RuntimeError("no key")),
        ):
            result = run("summarize", "1")
        assert result.exit_code != 0
        assert "no key" in result.output

    def test_summarize_blank(self, run):
        entry_id = run("new").output.strip()
        with patch("zenspace.core.llm.client.LLMClient.agenerate", new=AsyncMock()) as agenerate:
            result = run("summarize", entry_id)
        assert "Entry is empty" in result.output
        agenerate.assert_not_awaited()

    def test_inspire_merges(self, run, tmp_dir):
        entry_id = run("new", "--content", "Thoughts on tea").output.strip()
        reply = '{"title": "Tea Time", "tags": ["tea", "ritual"]}'
        with patch("zenspace.core.llm.client.LLMClient.agenerate", new=AsyncMock(return_value=reply)):
            result = run("inspire", entry_id)
        assert result.exit_code == 0
        assert "Title: Tea Time" in result.output
        assert "#tea #ritual" in result.output
        saved = _slot(tmp_dir)[0]
        assert saved["title"] == "Tea Time"
        assert saved["tags"] == ["tea", "ritual"]

    def test_ask(self, run):
        with patch(
            "zenspace.core.llm.client.LLMClient.agenerate",
            new=AsyncMock(return_value="You wrote a **welcome** note."),
        ) as agenerate:
            result = run("ask", "what", "did", "I", "write?")
        assert result.exit_code == 0
        assert "welcome" in result.output
        assert "User Question: what did I write?" in agenerate.call_args.args[0]


class TestApiKeyEnv:
    def test_exports_configured_key(self, monkeypatch, tmp_dir):
        from zenspace.cli.common import set_api_key_env
        from zenspace.core.config import Config

        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        config = Config(data_dir=tmp_dir)
        config.set("llm.provider", "openai")
        config.set("llm.api_key", "sk-test")
        set_api_key_env(config)
        assert os.environ["OPENAI_API_KEY"] == "sk-test"

    def test_existing_env_wins(self, monkeypatch, tmp_dir):
        from zenspace.cli.common import set_api_key_env
        from zenspace.core.config import Config

        monkeypatch.setenv("GEMINI_API_KEY", "from-env")
        config = Config(data_dir=tmp_dir)
        config.set("llm.api_key", "from-config")
        set_api_key_env(config)
        assert os.environ["GEMINI_API_KEY"] == "from-env"
