"""Fake ConfigStore implementation for testing."""

from dataclasses import replace
from pathlib import Path

from gitlab_tags.core.config import GlobalConfig, coerce_config_value
from gitlab_tags.gateway.config_store.abc import ConfigStore


class FakeConfigStore(ConfigStore):
    """In-memory fake implementation that tracks mutations.

    This class has NO public setup methods beyond constructor.
    """

    def __init__(self, *, config: GlobalConfig | None = None) -> None:
        """Create FakeConfigStore.

        Args:
            config: Initial config state (None = defaults, as if no file existed)
        """
        self._config = config if config is not None else GlobalConfig()
        self._set_values: list[tuple[str, str]] = []

    def config_path(self) -> Path:
        return Path("/fake/gltags/config.toml")

    def load_config(self) -> GlobalConfig:
        return self._config

    def set_value(self, key: str, value: str) -> None:
        coerced = coerce_config_value(key, value)
        self._config = replace(self._config, **{key: coerced})
        self._set_values.append((key, value))

    @property
    def set_values(self) -> list[tuple[str, str]]:
        """(key, value) pairs passed to set_value(), in order."""
        return list(self._set_values)
