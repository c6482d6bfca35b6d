"""zenspace CLI: entry point for writing, searching and augmenting entries."""

import click

from zenspace import __version__


@click.group()
@click.version_option(version=__version__, package_name="zenspace")
@click.option("--config", "config_file", type=click.Path(dir_okay=False), default=None, help="YAML or JSON config file.")
@click.option("--data-dir", type=click.Path(file_okay=False), default=None, help="Directory holding the entry slot.")
@click.option("-v", "--verbose", is_flag=True, help="Log debug output to stderr.")
@click.pass_context
def main(ctx: click.Context, config_file: str | None, data_dir: str | None, verbose: bool) -> None:
    """zenspace: your personal notes and blog, with AI help."""
    from .common import setup

    ctx.obj = setup(config_file=config_file, data_dir=data_dir, verbose=verbose)


# Register subcommands
from .ai_cmds import ask, inspire, summarize
from .entry_cmds import delete, edit, list_entries, new, show

main.add_command(new)
main.add_command(list_entries)
main.add_command(show)
main.add_command(edit)
main.add_command(delete)
main.add_command(summarize)
main.add_command(inspire)
main.add_command(ask)
