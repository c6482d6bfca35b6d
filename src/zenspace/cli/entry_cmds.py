"""Commands that create, list, show, edit and delete entries."""

from __future__ import annotations

from datetime import datetime

import click

from zenspace.notes import EntryType, excerpt, render_markdown

from .common import open_workspace, require_entry

_TYPES = click.Choice([t.value for t in EntryType])


def _format_time(ms: int) -> str:
    return datetime.fromtimestamp(ms / 1000).strftime("%Y-%m-%d %H:%M")


@click.command()
@click.option("--type", "entry_type", type=_TYPES, default=EntryType.NOTE.value, show_default=True)
@click.option("--title", default=None, help="Initial title.")
@click.option("--content", default=None, help="Initial Markdown content.")
@click.pass_obj
def new(config, entry_type: str, title: str | None, content: str | None) -> None:
    """Create a new blog post or note."""
    workspace = open_workspace(config)
    entry = workspace.new_entry(entry_type)

    changes = {k: v for k, v in (("title", title), ("content", content)) if v is not None}
    if changes:
        workspace.store.update(entry.id, **changes)
    click.echo(entry.id)


@click.command("list")
@click.argument("query", nargs=-1)
@click.option("--type", "entry_type", type=_TYPES, default=None, help="Only show blogs or notes.")
@click.pass_obj
def list_entries(config, query: tuple[str, ...], entry_type: str | None) -> None:
    """List entries, most recently edited first, optionally filtered by QUERY."""
    workspace = open_workspace(config)
    workspace.set_query(" ".join(query))
    entries = workspace.visible_entries(entry_type)

    if not entries:
        click.echo("No entries found.")
        return

    for entry in entries:
        tags = " ".join(f"#{tag}" for tag in entry.tags)
        click.echo(f"{entry.id}  [{entry.type.value}]  {_format_time(entry.updated_at)}  {entry.title or 'Untitled'}")
        preview = excerpt(entry.content, 72)
        if preview or tags:
            click.echo(f"    {preview}  {tags}".rstrip())
    click.echo(f"\n{len(entries)} of {len(workspace.store)} entries")


@click.command()
@click.argument("entry_id")
@click.option("--raw", is_flag=True, help="Print the Markdown source instead of rendering it.")
@click.pass_obj
def show(config, entry_id: str, raw: bool) -> None:
    """Preview an entry."""
    workspace = open_workspace(config)
    entry = require_entry(workspace, entry_id)

    if raw:
        click.echo(entry.content)
        return

    from rich.console import Console
    from rich.panel import Panel

    console = Console()
    subtitle = " ".join(f"#{tag}" for tag in entry.tags) or None
    console.print(
        Panel(
            render_markdown(entry.content),
            title=entry.title or "Untitled",
            subtitle=subtitle,
        )
    )
    console.print(
        f"[dim]{entry.type.value} | created {_format_time(entry.created_at)} | "
        f"updated {_format_time(entry.updated_at)}[/dim]"
    )


@click.command()
@click.argument("entry_id")
@click.option("--title", default=None, help="Replace the title.")
@click.option("--content", default=None, help="Replace the Markdown content.")
@click.option("--append", default=None, help="Append a paragraph to the content.")
@click.option("--tag", "add_tags", multiple=True, help="Add a tag (repeatable).")
@click.option("--untag", "remove_tags", multiple=True, help="Remove a tag (repeatable).")
@click.pass_obj
def edit(config, entry_id: str, title, content, append, add_tags, remove_tags) -> None:
    """Edit an entry's title, content or tags."""
    workspace = open_workspace(config)
    entry = require_entry(workspace, entry_id)

    changes: dict = {}
    if title is not None:
        changes["title"] = title
    if content is not None:
        changes["content"] = content
    if append:
        base = changes.get("content", entry.content).rstrip()
        changes["content"] = f"{base}\n\n{append}" if base else append

    if not (changes or add_tags or remove_tags):
        click.echo("Nothing to change.")
        return

    if changes:
        workspace.store.update(entry.id, **changes)
    for tag in add_tags:
        workspace.store.add_tag(entry.id, tag)
    for tag in remove_tags:
        workspace.store.remove_tag(entry.id, tag)
    click.echo(f"Updated {entry.id}")


@click.command()
@click.argument("entry_id")
@click.option("--yes", "-y", is_flag=True, help="Skip the confirmation prompt.")
@click.pass_obj
def delete(config, entry_id: str, yes: bool) -> None:
    """Delete an entry."""
    workspace = open_workspace(config)
    require_entry(workspace, entry_id)

    def confirm(entry) -> bool:
        return yes or click.confirm(f"Are you sure you want to delete {entry.title or entry.id!r}?")

    if workspace.delete(entry_id, confirm):
        click.echo(f"Deleted {entry_id}")
    else:
        click.echo("Cancelled.")
