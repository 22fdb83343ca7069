"""Tests for RealConfigStore against a temporary config file."""

from pathlib import Path

import pytest

from gitlab_tags.core.config import DEFAULT_PER_PAGE, DEFAULT_URL, GlobalConfig
from gitlab_tags.gateway.config_store.real import RealConfigStore


def test_missing_file_loads_defaults(tmp_path: Path) -> None:
    store = RealConfigStore(path=tmp_path / "config.toml")

    assert store.load_config() == GlobalConfig()


def test_default_path_is_under_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(Path, "home", lambda: tmp_path)

    assert RealConfigStore().config_path() == tmp_path / ".gltags" / "config.toml"


def test_load_reads_all_keys(tmp_path: Path) -> None:
    config_path = tmp_path / "config.toml"
    config_path.write_text(
        'url = "https://gitlab.example.com"\n'
        'token = "glpat-file"\n'
        'default_project = "group/project"\n'
        "timeout = 5\n"
        "per_page = 20\n",
        encoding="utf-8",
    )

    config = RealConfigStore(path=config_path).load_config()

    assert config.url == "https://gitlab.example.com"
    assert config.token == "glpat-file"
    assert config.default_project == "group/project"
    assert config.timeout == 5.0
    assert config.per_page == 20


def test_load_ignores_unknown_keys(tmp_path: Path) -> None:
    config_path = tmp_path / "config.toml"
    config_path.write_text('colour = "blue"\n', encoding="utf-8")

    config = RealConfigStore(path=config_path).load_config()

    assert config.url == DEFAULT_URL
    assert config.per_page == DEFAULT_PER_PAGE


def test_load_rejects_invalid_value(tmp_path: Path) -> None:
    config_path = tmp_path / "config.toml"
    config_path.write_text("per_page = 500\n", encoding="utf-8")

    with pytest.raises(ValueError, match="Invalid config in"):
        RealConfigStore(path=config_path).load_config()


def test_set_value_creates_file_and_parent(tmp_path: Path) -> None:
    config_path = tmp_path / "nested" / "config.toml"
    store = RealConfigStore(path=config_path)

    store.set_value("default_project", "group/project")
    store.set_value("per_page", "50")

    config = store.load_config()
    assert config.default_project == "group/project"
    assert config.per_page == 50


def test_set_value_preserves_comments(tmp_path: Path) -> None:
    config_path = tmp_path / "config.toml"
    config_path.write_text('# my instance\nurl = "https://gitlab.example.com"\n', encoding="utf-8")
    store = RealConfigStore(path=config_path)

    store.set_value("timeout", "12.5")

    content = config_path.read_text(encoding="utf-8")
    assert "# my instance" in content
    assert "timeout = 12.5" in content
    assert store.load_config().url == "https://gitlab.example.com"


def test_set_value_rejects_unknown_key(tmp_path: Path) -> None:
    config_path = tmp_path / "config.toml"
    store = RealConfigStore(path=config_path)

    with pytest.raises(ValueError, match="Unknown config key"):
        store.set_value("colour", "blue")

    assert not config_path.exists()
