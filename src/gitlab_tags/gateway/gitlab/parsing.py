"""Parsing of GitLab API JSON payloads into tag types."""

from datetime import datetime
from typing import Any

from gitlab_tags.gateway.gitlab.types import (
    AccessLevel,
    Commit,
    Project,
    ProtectedTag,
    ProtectedTagAccessLevel,
    Release,
    Tag,
)


def parse_datetime(value: str | None) -> datetime | None:
    """Parse an ISO 8601 timestamp as returned by GitLab.

    Example:
        >>> parse_datetime("2012-05-28T04:42:42.000-07:00")
        datetime(2012, 5, 28, 4, 42, 42, tzinfo=...)
    """
    if not value:
        return None
    return datetime.fromisoformat(value)


def parse_commit(data: dict[str, Any]) -> Commit:
    return Commit(
        id=data["id"],
        short_id=data.get("short_id") or data["id"][:8],
        title=data.get("title") or "",
        message=data.get("message"),
        author_name=data.get("author_name"),
        author_email=data.get("author_email"),
        authored_date=parse_datetime(data.get("authored_date")),
        committed_date=parse_datetime(data.get("committed_date")),
        parent_ids=tuple(data.get("parent_ids") or ()),
    )


def parse_release(data: dict[str, Any], *, tag_name: str | None = None) -> Release:
    """Parse a release object.

    Releases embedded in a tag payload carry only tag_name and description.
    When tag_name is missing it falls back to the owning tag's name.
    """
    resolved_tag_name = data.get("tag_name") or tag_name
    if resolved_tag_name is None:
        msg = "Release payload has no tag_name"
        raise ValueError(msg)
    return Release(
        tag_name=resolved_tag_name,
        description=data.get("description"),
        name=data.get("name"),
    )


def parse_tag(data: dict[str, Any]) -> Tag:
    name = data["name"]
    commit_data = data.get("commit")
    release_data = data.get("release")
    return Tag(
        name=name,
        message=data.get("message") or None,
        target=data.get("target"),
        commit=parse_commit(commit_data) if commit_data else None,
        release=parse_release(release_data, tag_name=name) if release_data else None,
        protected=bool(data.get("protected", False)),
        created_at=parse_datetime(data.get("created_at")),
    )


def parse_access_level_entry(data: dict[str, Any]) -> ProtectedTagAccessLevel:
    level = data.get("access_level")
    return ProtectedTagAccessLevel(
        access_level=AccessLevel(level) if level is not None else None,
        access_level_description=data.get("access_level_description"),
        user_id=data.get("user_id"),
        group_id=data.get("group_id"),
        deploy_key_id=data.get("deploy_key_id"),
    )


def parse_protected_tag(data: dict[str, Any]) -> ProtectedTag:
    levels = tuple(
        parse_access_level_entry(level) for level in data.get("create_access_levels") or ()
    )
    return ProtectedTag(name=data["name"], create_access_levels=levels)


def parse_project(data: dict[str, Any]) -> Project:
    return Project(
        id=int(data["id"]),
        name=data["name"],
        path_with_namespace=data["path_with_namespace"],
        default_branch=data.get("default_branch"),
        web_url=data.get("web_url"),
    )
