"""Real ConfigStore implementation backed by ~/.gltags/config.toml."""

import logging
import tomllib
from collections.abc import MutableMapping
from pathlib import Path
from typing import Any, cast

import tomlkit

from gitlab_tags.core.config import GlobalConfig, coerce_config_value
from gitlab_tags.gateway.config_store.abc import ConfigStore

logger = logging.getLogger(__name__)


def _installation_path() -> Path:
    """Return path to the gltags directory.

    Not cached so tests can monkeypatch Path.home().
    """
    return Path.home() / ".gltags"


class RealConfigStore(ConfigStore):
    """Production implementation that reads/writes ~/.gltags/config.toml."""

    def __init__(self, *, path: Path | None = None) -> None:
        """Create the store.

        Args:
            path: Explicit config file path (defaults to ~/.gltags/config.toml)
        """
        self._path = path

    def config_path(self) -> Path:
        if self._path is not None:
            return self._path
        return _installation_path() / "config.toml"

    def load_config(self) -> GlobalConfig:
        config_path = self.config_path()
        if not config_path.exists():
            logger.debug("No config file at %s, using defaults", config_path)
            return GlobalConfig()

        data = tomllib.loads(config_path.read_text(encoding="utf-8"))
        try:
            return GlobalConfig.from_mapping(data)
        except ValueError as e:
            raise ValueError(f"Invalid config in {config_path}: {e}") from e

    def set_value(self, key: str, value: str) -> None:
        """Write one key, preserving existing formatting and comments via tomlkit."""
        coerced = coerce_config_value(key, value)
        config_path = self.config_path()
        config_path.parent.mkdir(parents=True, exist_ok=True)

        if config_path.exists():
            with config_path.open("r", encoding="utf-8") as f:
                doc = tomlkit.load(f)
        else:
            doc = tomlkit.document()

        assert isinstance(doc, MutableMapping), f"Expected MutableMapping, got {type(doc)}"
        cast(dict[str, Any], doc)[key] = coerced

        with config_path.open("w", encoding="utf-8") as f:
            tomlkit.dump(doc, f)
