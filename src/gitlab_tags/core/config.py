"""Global gltags configuration.

Example ~/.gltags/config.toml:
  url = "https://gitlab.example.com"
  token = "glpat-..."
  default_project = "group/project"
  timeout = 30.0
  per_page = 96

GITLAB_URL, GITLAB_TOKEN and GITLAB_PROJECT override the file.
"""

from collections.abc import Mapping
from dataclasses import dataclass, replace
from functools import cache
from typing import Any
from urllib.parse import urlparse

DEFAULT_URL = "https://gitlab.com"
DEFAULT_TIMEOUT = 30.0
DEFAULT_PER_PAGE = 96


@dataclass(frozen=True)
class GlobalConfig:
    """Immutable global configuration data.

    Loaded once at CLI entry point and stored in GitLabContext.
    """

    url: str = DEFAULT_URL
    token: str | None = None
    default_project: str | None = None
    timeout: float = DEFAULT_TIMEOUT
    per_page: int = DEFAULT_PER_PAGE

    @property
    def hostname(self) -> str:
        """Host part of the instance URL (e.g. "gitlab.com")."""
        return urlparse(self.url).hostname or self.url

    @staticmethod
    def from_mapping(data: Mapping[str, Any]) -> "GlobalConfig":
        """Build a config from parsed TOML, validating every known key.

        Raises:
            ValueError: If a value has the wrong type or is out of range
        """
        config = GlobalConfig()
        for key in get_config_keys():
            if key in data:
                config = replace(config, **{key: coerce_config_value(key, data[key])})
        return config


@cache
def get_config_keys() -> dict[str, str]:
    """Get user-exposed config keys with descriptions.

    Order determines display order in 'gltags config list'.
    """
    return {
        "url": "GitLab instance URL (https://gitlab.com by default)",
        "token": "Access token sent as PRIVATE-TOKEN (falls back to glab's token)",
        "default_project": "Project used when --project is not given",
        "timeout": "HTTP request timeout in seconds",
        "per_page": "Page size used when listing every tag or protection rule",
    }


def coerce_config_value(key: str, value: Any) -> str | float | int:
    """Convert a raw value (TOML or command line string) to the key's type.

    Raises:
        ValueError: If the key is unknown or the value invalid
    """
    if key not in get_config_keys():
        msg = f"Unknown config key: {key}"
        raise ValueError(msg)

    if key == "timeout":
        timeout = float(value)
        if timeout <= 0:
            msg = f"timeout must be positive, got {value}"
            raise ValueError(msg)
        return timeout

    if key == "per_page":
        per_page = int(value)
        if not 1 <= per_page <= 100:
            msg = f"per_page must be between 1 and 100, got {value}"
            raise ValueError(msg)
        return per_page

    text = str(value).strip()
    if key == "url" and not text.startswith(("http://", "https://")):
        msg = f"url must start with http:// or https://, got {value}"
        raise ValueError(msg)
    return text


def apply_env_overrides(config: GlobalConfig, env: Mapping[str, str]) -> GlobalConfig:
    """Override file values with GITLAB_URL, GITLAB_TOKEN and GITLAB_PROJECT."""
    overrides: dict[str, Any] = {}
    if env.get("GITLAB_URL"):
        overrides["url"] = coerce_config_value("url", env["GITLAB_URL"])
    if env.get("GITLAB_TOKEN"):
        overrides["token"] = env["GITLAB_TOKEN"]
    if env.get("GITLAB_PROJECT"):
        overrides["default_project"] = env["GITLAB_PROJECT"]
    return replace(config, **overrides)
