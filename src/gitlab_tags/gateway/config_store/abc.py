"""Abstract base class for configuration storage."""

from abc import ABC, abstractmethod
from pathlib import Path

from gitlab_tags.core.config import GlobalConfig


class ConfigStore(ABC):
    """Abstract interface for reading and writing the global config file.

    All implementations (real and fake) must implement this interface.
    """

    @abstractmethod
    def config_path(self) -> Path:
        """Path of the config file (~/.gltags/config.toml)."""
        ...

    @abstractmethod
    def load_config(self) -> GlobalConfig:
        """Load the config file.

        Returns:
            Loaded config, or defaults when the file does not exist

        Raises:
            ValueError: If the file holds invalid values
        """
        ...

    @abstractmethod
    def set_value(self, key: str, value: str) -> None:
        """Set one key in the config file, creating the file if needed.

        Raises:
            ValueError: If the key is unknown or the value invalid
        """
        ...
