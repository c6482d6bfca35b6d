"""
Layered configuration for zenspace.

Three layers are merged, later ones winning:

    built-in defaults  <  config file (YAML or JSON)  <  ZENSPACE_* env vars

Env var names map onto nested keys with a double underscore, so
``ZENSPACE_LLM__PROVIDER=openai`` sets ``llm.provider``. Env values stay
strings; ``Config.validated()`` coerces them.

Usage:
    config = Config(config_file="~/.zenspace/config.yaml")
    config.get("storage.key")
    config.get("llm.timeout", 60)
"""

import json
import os
from typing import Any

import yaml

ENV_PREFIX = "ZENSPACE_"
DEFAULT_DATA_DIR = os.path.join("~", ".zenspace-data")
DEFAULT_STORAGE_KEY = "zenspace_data_v1"


def _defaults(data_dir: str) -> dict[str, Any]:
    return {
        "paths": {"data_dir": data_dir, "log_dir": os.path.join(data_dir, "logs")},
        "storage": {"key": DEFAULT_STORAGE_KEY},
        "llm": {"provider": "gemini", "model": "", "timeout": 60},
        "logging": {"level": "WARNING", "file": ""},
    }


def _deep_merge(target: dict, overlay: dict) -> dict:
    """Merge ``overlay`` into ``target`` in place, recursing into nested dicts."""
    for key, value in overlay.items():
        current = target.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            _deep_merge(current, value)
        else:
            target[key] = value
    return target


def _read_file(path: str) -> dict[str, Any]:
    """Parse a YAML or JSON config file. Other extensions contribute nothing."""
    ext = os.path.splitext(path)[1].lower()
    if ext not in (".yaml", ".yml", ".json"):
        return {}
    with open(path, encoding="utf-8") as f:
        data = json.load(f) if ext == ".json" else yaml.safe_load(f)
    return data or {}


def _env_layer(prefix: str) -> dict[str, Any]:
    """Collect ``<prefix>SECTION__KEY`` env vars into a nested dict."""
    layer: dict[str, Any] = {}
    if not prefix:
        return layer
    for name, value in os.environ.items():
        if not name.startswith(prefix):
            continue
        *sections, leaf = name[len(prefix) :].lower().split("__")
        node = layer
        for section in sections:
            if not isinstance(node.get(section), dict):
                node[section] = {}
            node = node[section]
        node[leaf] = value
    return layer


class Config:
    """
    Merged view of defaults, config file and environment.

    Values are read and written by dotted path (``"llm.provider"``); the
    underlying nested dict is exposed as ``config_data``.
    """

    def __init__(
        self,
        config_file: str | None = None,
        env_prefix: str = ENV_PREFIX,
        data_dir: str | None = None,
        defaults: dict[str, Any] | None = None,
    ):
        """
        Args:
            config_file: YAML or JSON file; a missing file is skipped.
            env_prefix: Prefix of override env vars. Empty disables env overrides.
            data_dir: Directory holding the entry slot. Defaults to ~/.zenspace-data.
            defaults: Extra defaults merged over the built-in ones.
        """
        self.config_file = os.path.expanduser(config_file) if config_file else None
        self.env_prefix = env_prefix or ""
        self._data_dir = os.path.expanduser(data_dir or DEFAULT_DATA_DIR)

        self.config_data: dict[str, Any] = _defaults(self._data_dir)
        _deep_merge(self.config_data, defaults or {})
        if self.config_file and os.path.exists(self.config_file):
            _deep_merge(self.config_data, _read_file(self.config_file))
        _deep_merge(self.config_data, _env_layer(self.env_prefix))

    def get(self, key_path: str, default: Any = None) -> Any:
        """Value at a dotted path, or ``default`` if any segment is missing."""
        node: Any = self.config_data
        for part in key_path.split("."):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    def set(self, key_path: str, value: Any) -> None:
        """Set the value at a dotted path, creating sections as needed."""
        *sections, leaf = key_path.split(".")
        node = self.config_data
        for section in sections:
            node = node.setdefault(section, {})
        node[leaf] = value

    def get_data_dir(self) -> str:
        return os.path.expanduser(self.get("paths.data_dir") or self._data_dir)

    def ensure_directories(self) -> None:
        """Create every directory listed under ``paths``."""
        for path in (self.get("paths") or {}).values():
            if isinstance(path, str) and path:
                os.makedirs(os.path.expanduser(path), exist_ok=True)

    def validated(self):
        """Return the config as a validated ``ZenspaceConfig``.

        Raises:
            ConfigurationError: If a value fails schema validation.
        """
        from pydantic import ValidationError

        from .config_schema import ZenspaceConfig
        from .exceptions import ConfigurationError

        try:
            return ZenspaceConfig.model_validate(self.config_data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

