"""Tests for GlobalConfig parsing and environment overrides."""

import pytest

from gitlab_tags.core.config import (
    GlobalConfig,
    apply_env_overrides,
    coerce_config_value,
    get_config_keys,
)


def test_hostname_from_url() -> None:
    assert GlobalConfig(url="https://gitlab.example.com:8443/").hostname == "gitlab.example.com"
    assert GlobalConfig().hostname == "gitlab.com"


def test_config_keys_in_display_order() -> None:
    assert list(get_config_keys()) == ["url", "token", "default_project", "timeout", "per_page"]


@pytest.mark.parametrize(
    ("key", "raw", "expected"),
    [
        ("timeout", "2.5", 2.5),
        ("per_page", "100", 100),
        ("url", " https://gitlab.example.com ", "https://gitlab.example.com"),
        ("default_project", "group/sub/project", "group/sub/project"),
    ],
)
def test_coerce_valid_values(key: str, raw: str, expected: object) -> None:
    assert coerce_config_value(key, raw) == expected


@pytest.mark.parametrize(
    ("key", "raw", "message"),
    [
        ("timeout", "0", "timeout must be positive"),
        ("timeout", "soon", "could not convert"),
        ("per_page", "0", "between 1 and 100"),
        ("per_page", "101", "between 1 and 100"),
        ("url", "gitlab.example.com", "must start with http"),
        ("nope", "x", "Unknown config key"),
    ],
)
def test_coerce_invalid_values(key: str, raw: str, message: str) -> None:
    with pytest.raises(ValueError, match=message):
        coerce_config_value(key, raw)


def test_from_mapping_skips_unknown_keys() -> None:
    config = GlobalConfig.from_mapping({"per_page": 10, "extra": True})

    assert config == GlobalConfig(per_page=10)


def test_env_overrides_take_precedence() -> None:
    config = GlobalConfig(url="https://file.example.com", token="file", default_project="a/b")

    result = apply_env_overrides(
        config,
        {
            "GITLAB_URL": "https://env.example.com",
            "GITLAB_TOKEN": "env",
            "GITLAB_PROJECT": "c/d",
        },
    )

    assert result.url == "https://env.example.com"
    assert result.token == "env"
    assert result.default_project == "c/d"


def test_empty_env_values_are_ignored() -> None:
    config = GlobalConfig(token="file")

    assert apply_env_overrides(config, {"GITLAB_TOKEN": ""}) == config
