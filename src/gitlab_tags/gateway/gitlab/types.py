"""Type definitions for GitLab tag operations."""

from dataclasses import dataclass
from datetime import datetime
from enum import IntEnum
from typing import Literal


class AccessLevel(IntEnum):
    """GitLab role access levels, as sent and received by the API."""

    NONE = 0
    MINIMAL_ACCESS = 5
    GUEST = 10
    PLANNER = 15
    REPORTER = 20
    DEVELOPER = 30
    MAINTAINER = 40
    OWNER = 50
    ADMIN = 60


# Tag listing options accepted by GET /projects/:id/repository/tags
TagOrderBy = Literal["name", "updated", "version"]
SortOrder = Literal["asc", "desc"]


@dataclass(frozen=True)
class Project:
    """A GitLab project, the scope of every tag operation."""

    id: int
    name: str
    path_with_namespace: str
    default_branch: str | None = None
    web_url: str | None = None


# Numeric id, "namespace/path" string, or a Project
ProjectRef = int | str | Project


@dataclass(frozen=True)
class Commit:
    """Commit a tag points at."""

    id: str
    short_id: str
    title: str
    message: str | None = None
    author_name: str | None = None
    author_email: str | None = None
    authored_date: datetime | None = None
    committed_date: datetime | None = None
    parent_ids: tuple[str, ...] = ()


@dataclass(frozen=True)
class Release:
    """Release notes attached to a tag."""

    tag_name: str
    description: str | None
    name: str | None = None


@dataclass(frozen=True)
class Tag:
    """A repository tag.

    Names may contain "/" (e.g. "env/test-tag").
    """

    name: str
    message: str | None = None
    target: str | None = None
    commit: Commit | None = None
    release: Release | None = None
    protected: bool = False
    created_at: datetime | None = None


@dataclass(frozen=True)
class ProtectedTagAccessLevel:
    """One entry of a protected tag's create_access_levels.

    Entries granting a specific user, group or deploy key (GitLab Premium)
    carry no role: access_level is None and one of the ids is set.
    """

    access_level: AccessLevel | None
    access_level_description: str | None = None
    user_id: int | None = None
    group_id: int | None = None
    deploy_key_id: int | None = None


@dataclass(frozen=True)
class ProtectedTag:
    """A protection rule restricting who may create tags matching `name`.

    The name may be an exact tag name or a wildcard pattern ("release-*").
    """

    name: str
    create_access_levels: tuple[ProtectedTagAccessLevel, ...] = ()
