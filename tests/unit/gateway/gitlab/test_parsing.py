"""Tests for GitLab payload parsing."""

from datetime import UTC, datetime, timedelta, timezone

import pytest

from gitlab_tags.gateway.gitlab.parsing import (
    parse_datetime,
    parse_project,
    parse_protected_tag,
    parse_release,
    parse_tag,
)
from gitlab_tags.gateway.gitlab.types import AccessLevel
from tests.test_utils.gitlab_payloads import (
    project_payload,
    protected_tag_payload,
    tag_payload,
)


def test_parse_tag_full_payload() -> None:
    tag = parse_tag(tag_payload("v1.0.0", release_description="Notes", protected=True))

    assert tag.name == "v1.0.0"
    assert tag.target == "2695effb5807a22ff3d138d593fd856244e155e7"
    assert tag.protected is True
    assert tag.commit is not None
    assert tag.commit.short_id == "2695effb"
    assert tag.commit.parent_ids == ("2a4b78934375d7f53875269ffd4f45fd83a84ebe",)
    assert tag.release is not None
    assert tag.release.tag_name == "v1.0.0"
    assert tag.release.description == "Notes"


def test_parse_tag_without_release() -> None:
    tag = parse_tag(tag_payload("v1.0.0"))

    assert tag.release is None


def test_parse_tag_empty_message_is_none() -> None:
    """Lightweight tags come back with message "" rather than null."""
    tag = parse_tag(tag_payload("v1.0.0", message=""))

    assert tag.message is None


def test_parse_tag_minimal_payload() -> None:
    tag = parse_tag({"name": "env/test-tag"})

    assert tag.name == "env/test-tag"
    assert tag.commit is None
    assert tag.protected is False
    assert tag.created_at is None


def test_parse_tag_missing_name_raises() -> None:
    with pytest.raises(KeyError):
        parse_tag({"message": "no name"})


def test_parse_release_falls_back_to_tag_name() -> None:
    release = parse_release({"description": "Notes"}, tag_name="v1.0.0")

    assert release.tag_name == "v1.0.0"
    assert release.description == "Notes"


def test_parse_release_without_any_tag_name_raises() -> None:
    with pytest.raises(ValueError, match="no tag_name"):
        parse_release({"description": "Notes"})


def test_parse_protected_tag() -> None:
    rule = parse_protected_tag(protected_tag_payload("release-*", access_level=30))

    assert rule.name == "release-*"
    assert len(rule.create_access_levels) == 1
    assert rule.create_access_levels[0].access_level is AccessLevel.DEVELOPER
    assert rule.create_access_levels[0].access_level_description == "Developers + Maintainers"


def test_parse_protected_tag_unknown_access_level_raises() -> None:
    payload = {"name": "x", "create_access_levels": [{"access_level": 31}]}

    with pytest.raises(ValueError):
        parse_protected_tag(payload)


def test_parse_protected_tag_with_user_and_group_entries() -> None:
    payload = {
        "name": "release-*",
        "create_access_levels": [
            {"id": 1, "access_level": 40, "access_level_description": "Maintainers"},
            {"id": 2, "access_level": None, "access_level_description": "Jane", "user_id": 5},
            {"id": 3, "access_level": None, "group_id": 7},
        ],
    }

    rule = parse_protected_tag(payload)

    maintainers, user, group = rule.create_access_levels
    assert maintainers.access_level is AccessLevel.MAINTAINER
    assert user.access_level is None
    assert user.user_id == 5
    assert user.access_level_description == "Jane"
    assert group.access_level is None
    assert group.group_id == 7
    assert group.deploy_key_id is None


def test_parse_project() -> None:
    project = parse_project(project_payload(42, "group/project"))

    assert project.id == 42
    assert project.name == "project"
    assert project.path_with_namespace == "group/project"
    assert project.default_branch == "main"


def test_parse_datetime_with_offset() -> None:
    parsed = parse_datetime("2012-05-28T04:42:42.000-07:00")

    assert parsed == datetime(2012, 5, 28, 4, 42, 42, tzinfo=timezone(timedelta(hours=-7)))


def test_parse_datetime_zulu() -> None:
    assert parse_datetime("2024-01-02T03:04:05Z") == datetime(2024, 1, 2, 3, 4, 5, tzinfo=UTC)


def test_parse_datetime_empty() -> None:
    assert parse_datetime(None) is None
    assert parse_datetime("") is None
