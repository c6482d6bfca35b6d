"""Commands that call the AI provider."""

from __future__ import annotations

import asyncio

import click

from .common import open_workspace, require_entry


@click.command()
@click.argument("entry_id")
@click.pass_obj
def summarize(config, entry_id: str) -> None:
    """Summarize an entry in a few sentences (not saved)."""
    workspace = open_workspace(config)
    entry = require_entry(workspace, entry_id)
    if entry.is_blank:
        click.echo("Entry is empty; nothing to summarize.")
        return

    summary = asyncio.run(workspace.orchestrator.summarize(entry.id))
    if summary is None:
        raise click.ClickException(workspace.orchestrator.error(entry.id) or "Summary failed.")
    click.echo(summary)


@click.command()
@click.argument("entry_id")
@click.pass_obj
def inspire(config, entry_id: str) -> None:
    """Suggest a title and tags and merge them into the entry."""
    workspace = open_workspace(config)
    entry = require_entry(workspace, entry_id)
    if entry.is_blank:
        click.echo("Entry is empty; write something first.")
        return

    suggestion = asyncio.run(workspace.orchestrator.inspire(entry.id))
    if suggestion is None:
        raise click.ClickException(workspace.orchestrator.error(entry.id) or "Suggestion failed.")

    updated = workspace.store.get(entry.id)
    click.echo(f"Title: {updated.title}")
    click.echo("Tags:  " + " ".join(f"#{tag}" for tag in updated.tags))


@click.command()
@click.argument("question", nargs=-1, required=True)
@click.option("--query", "-q", default="", help="Only use entries matching this search as context.")
@click.pass_obj
def ask(config, question: tuple[str, ...], query: str) -> None:
    """Ask a question about your own notes."""
    from zenspace.augment.orchestrator import ASK_KEY

    workspace = open_workspace(config)
    workspace.set_query(query)
    answer = asyncio.run(workspace.ask(" ".join(question)))
    if answer is None:
        raise click.ClickException(workspace.orchestrator.error(ASK_KEY) or "No answer.")

    from rich.console import Console

    from zenspace.notes import render_markdown

    Console().print(render_markdown(answer))
