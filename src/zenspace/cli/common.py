"""Shared setup logic for CLI commands."""

from __future__ import annotations

import os
from pathlib import Path

import click

from zenspace.core.config import Config
from zenspace.core.exceptions import ConfigurationError
from zenspace.core.utils.logging import configure_logging
from zenspace.notes import Entry

ZENSPACE_DIR = Path.home() / ".zenspace"
CONFIG_PATH = ZENSPACE_DIR / "config.yaml"


def setup(config_file: str | None = None, data_dir: str | None = None, verbose: bool = False) -> Config:
    """Load config and configure logging for one CLI invocation."""
    if config_file is None and CONFIG_PATH.exists():
        config_file = str(CONFIG_PATH)
    config = Config(config_file=config_file, data_dir=data_dir)
    if data_dir:
        config.set("paths.data_dir", os.path.expanduser(data_dir))

    try:
        config.validated()
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e
    config.ensure_directories()

    configure_logging(config, verbose=verbose)
    return config


def set_api_key_env(config: Config) -> None:
    """Export ``llm.api_key`` under the env var litellm reads for the provider.

    A key already present in the environment wins.
    """
    from zenspace.core.llm.config import PROVIDER_ENV_MAP

    api_key = config.get("llm.api_key", "")
    env_var = PROVIDER_ENV_MAP.get(config.get("llm.provider", ""))
    if api_key and env_var and env_var not in os.environ:
        os.environ[env_var] = api_key


def open_workspace(config: Config):
    """Build and load the workspace described by ``config``."""
    from zenspace.workspace import Workspace

    set_api_key_env(config)
    workspace = Workspace.from_config(config)
    workspace.open()
    return workspace


def require_entry(workspace, entry_id: str) -> Entry:
    """Select an entry or exit with an error if it does not exist."""
    entry = workspace.store.select(entry_id)
    if entry is None:
        raise click.ClickException(f"No entry with id {entry_id!r}")
    return entry
