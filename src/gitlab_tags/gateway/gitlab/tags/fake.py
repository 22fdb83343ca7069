"""Fake GitLab tag operations for testing."""

import hashlib
import re
from collections.abc import Callable, Sequence
from dataclasses import replace
from fnmatch import fnmatchcase
from typing import TypeVar

from gitlab_tags.gateway.gitlab.errors import GitLabApiError, NotFoundError
from gitlab_tags.gateway.gitlab.pager import Page, PageFetcher, Pager
from gitlab_tags.gateway.gitlab.paths import project_segment
from gitlab_tags.gateway.gitlab.tags.abc import TagsGateway, validate_listing_options
from gitlab_tags.gateway.gitlab.types import (
    AccessLevel,
    Commit,
    ProjectRef,
    ProtectedTag,
    ProtectedTagAccessLevel,
    Release,
    SortOrder,
    Tag,
    TagOrderBy,
)

T = TypeVar("T")

_SHA_PATTERN = re.compile(r"^[0-9a-f]{7,40}$")
_INVALID_NAME_PATTERN = re.compile(r"[\s~^:?*\[\\]|\.\.|@\{|^-|/$|\.lock$|^/|//")

ACCESS_LEVEL_DESCRIPTIONS: dict[AccessLevel, str] = {
    AccessLevel.NONE: "No one",
    AccessLevel.DEVELOPER: "Developers + Maintainers",
    AccessLevel.MAINTAINER: "Maintainers",
    AccessLevel.OWNER: "Owners",
    AccessLevel.ADMIN: "Admins",
}


class FakeTagsGateway(TagsGateway):
    """In-memory fake implementation of GitLab tag operations.

    This class has NO public setup methods. All state is provided via constructor
    using keyword arguments with sensible defaults.

    Projects are keyed by the reference they are addressed with, so a test
    should use the same reference (id, path or Project) throughout. Tags are
    kept in creation order. Deleting a tag deletes its release; protection
    rules are independent of tags.
    """

    def __init__(
        self,
        *,
        tags: dict[ProjectRef, Sequence[Tag]] | None = None,
        protected_tags: dict[ProjectRef, Sequence[ProtectedTag]] | None = None,
        branches: Sequence[str] = ("main", "master"),
    ) -> None:
        """Create FakeTagsGateway with pre-configured state.

        Args:
            tags: Mapping of project reference -> existing tags
            protected_tags: Mapping of project reference -> existing protection rules
            branches: Branch names accepted as refs by create_tag(); existing
                tag names and commit SHAs are accepted too
        """
        self._tags: dict[str, dict[str, Tag]] = {
            project_segment(project): {tag.name: tag for tag in project_tags}
            for project, project_tags in (tags or {}).items()
        }
        self._protected_tags: dict[str, dict[str, ProtectedTag]] = {
            project_segment(project): {rule.name: rule for rule in rules}
            for project, rules in (protected_tags or {}).items()
        }
        self._branches = frozenset(branches)

        # Mutation tracking
        self._created_tags: list[tuple[str, str, str]] = []
        self._deleted_tags: list[tuple[str, str]] = []
        self._created_releases: list[tuple[str, str, str]] = []
        self._updated_releases: list[tuple[str, str, str]] = []
        self._protected: list[tuple[str, str, AccessLevel]] = []
        self._unprotected: list[tuple[str, str]] = []
        self._page_requests: list[tuple[str, int, int]] = []

    # --- Tags ---

    def get_tags(
        self,
        project: ProjectRef,
        *,
        order_by: TagOrderBy | None = None,
        sort: SortOrder | None = None,
        search: str | None = None,
    ) -> list[Tag]:
        validate_listing_options(order_by, sort)
        return self._list_tags(project, order_by=order_by, sort=sort, search=search)

    def get_tags_pager(
        self,
        project: ProjectRef,
        per_page: int,
        *,
        order_by: TagOrderBy | None = None,
        sort: SortOrder | None = None,
        search: str | None = None,
    ) -> Pager[Tag]:
        validate_listing_options(order_by, sort)

        def list_tags() -> list[Tag]:
            return self._list_tags(project, order_by=order_by, sort=sort, search=search)

        return Pager(self._page_fetcher(project_segment(project), list_tags), per_page)

    def get_tag(self, project: ProjectRef, name: str) -> Tag:
        key = project_segment(project)
        tag = self._tags.get(key, {}).get(name)
        if tag is None:
            raise NotFoundError(message="404 Tag Not Found", endpoint=_tag_endpoint(key, name))
        return self._with_protection(key, tag)

    def create_tag(
        self,
        project: ProjectRef,
        name: str,
        ref: str,
        *,
        message: str | None = None,
        release_description: str | None = None,
    ) -> Tag:
        key = project_segment(project)
        endpoint = f"projects/{key}/repository/tags"
        project_tags = self._tags.setdefault(key, {})

        if not name or _INVALID_NAME_PATTERN.search(name):
            raise GitLabApiError(status_code=400, message="Tag name invalid", endpoint=endpoint)
        if name in project_tags:
            msg = f"Tag {name} already exists"
            raise GitLabApiError(status_code=400, message=msg, endpoint=endpoint)
        if not self._is_known_ref(key, ref):
            msg = f"Target {ref} is invalid"
            raise GitLabApiError(status_code=400, message=msg, endpoint=endpoint)

        sha = _fake_sha(ref)
        release = None
        if release_description is not None:
            release = Release(tag_name=name, description=release_description)
        tag = Tag(
            name=name,
            message=message,
            target=sha,
            commit=Commit(id=sha, short_id=sha[:8], title=f"Commit at {ref}"),
            release=release,
        )
        project_tags[name] = tag
        self._created_tags.append((key, name, ref))
        return self._with_protection(key, tag)

    def delete_tag(self, project: ProjectRef, name: str) -> None:
        key = project_segment(project)
        project_tags = self._tags.get(key, {})
        if name not in project_tags:
            raise NotFoundError(message="404 Tag Not Found", endpoint=_tag_endpoint(key, name))
        del project_tags[name]
        self._deleted_tags.append((key, name))

    # --- Releases ---

    def create_release(self, project: ProjectRef, tag_name: str, description: str) -> Release:
        key = project_segment(project)
        endpoint = f"projects/{key}/releases"
        tag = self._tags.get(key, {}).get(tag_name)
        if tag is None:
            raise NotFoundError(message="404 Tag Not Found", endpoint=endpoint)
        if tag.release is not None:
            raise GitLabApiError(
                status_code=409, message="Release already exists", endpoint=endpoint
            )

        release = Release(tag_name=tag_name, description=description)
        self._tags[key][tag_name] = replace(tag, release=release)
        self._created_releases.append((key, tag_name, description))
        return release

    def update_release(self, project: ProjectRef, tag_name: str, description: str) -> Release:
        key = project_segment(project)
        endpoint = f"projects/{key}/releases/{tag_name}"
        tag = self._tags.get(key, {}).get(tag_name)
        if tag is None or tag.release is None:
            raise NotFoundError(message="404 Not Found", endpoint=endpoint)

        release = replace(tag.release, description=description)
        self._tags[key][tag_name] = replace(tag, release=release)
        self._updated_releases.append((key, tag_name, description))
        return release

    # --- Protected tags ---

    def get_protected_tags(self, project: ProjectRef) -> list[ProtectedTag]:
        return list(self._protected_tags.get(project_segment(project), {}).values())

    def get_protected_tags_pager(self, project: ProjectRef, per_page: int) -> Pager[ProtectedTag]:
        key = project_segment(project)
        return Pager(self._page_fetcher(key, lambda: self.get_protected_tags(project)), per_page)

    def get_protected_tag(self, project: ProjectRef, name: str) -> ProtectedTag:
        key = project_segment(project)
        rule = self._protected_tags.get(key, {}).get(name)
        if rule is None:
            raise NotFoundError(
                message="404 Not found", endpoint=f"projects/{key}/protected_tags/{name}"
            )
        return rule

    def protect_tag(
        self, project: ProjectRef, name: str, access_level: AccessLevel
    ) -> ProtectedTag:
        key = project_segment(project)
        rules = self._protected_tags.setdefault(key, {})
        if name in rules:
            raise GitLabApiError(
                status_code=409,
                message=f"Protected tag '{name}' already exists",
                endpoint=f"projects/{key}/protected_tags",
            )

        rule = ProtectedTag(
            name=name,
            create_access_levels=(
                ProtectedTagAccessLevel(
                    access_level=access_level,
                    access_level_description=ACCESS_LEVEL_DESCRIPTIONS.get(access_level),
                ),
            ),
        )
        rules[name] = rule
        self._protected.append((key, name, access_level))
        return rule

    def unprotect_tag(self, project: ProjectRef, name: str) -> None:
        key = project_segment(project)
        rules = self._protected_tags.get(key, {})
        if name not in rules:
            raise NotFoundError(
                message="404 Not found", endpoint=f"projects/{key}/protected_tags/{name}"
            )
        del rules[name]
        self._unprotected.append((key, name))

    # --- Mutation tracking ---

    @property
    def created_tags(self) -> list[tuple[str, str, str]]:
        """Tags created, as (project_key, name, ref) tuples."""
        return self._created_tags

    @property
    def deleted_tags(self) -> list[tuple[str, str]]:
        """Tags deleted, as (project_key, name) tuples."""
        return self._deleted_tags

    @property
    def created_releases(self) -> list[tuple[str, str, str]]:
        """Releases created, as (project_key, tag_name, description) tuples."""
        return self._created_releases

    @property
    def updated_releases(self) -> list[tuple[str, str, str]]:
        """Releases updated, as (project_key, tag_name, description) tuples."""
        return self._updated_releases

    @property
    def protected(self) -> list[tuple[str, str, AccessLevel]]:
        """Protection rules created, as (project_key, name, access_level) tuples."""
        return self._protected

    @property
    def unprotected(self) -> list[tuple[str, str]]:
        """Protection rules removed, as (project_key, name) tuples."""
        return self._unprotected

    @property
    def page_requests(self) -> list[tuple[str, int, int]]:
        """Pages fetched through pagers, as (project_key, page, per_page) tuples."""
        return self._page_requests

    # --- Helpers ---

    def _list_tags(
        self,
        project: ProjectRef,
        *,
        order_by: TagOrderBy | None,
        sort: SortOrder | None,
        search: str | None,
    ) -> list[Tag]:
        key = project_segment(project)
        tags = [self._with_protection(key, tag) for tag in self._tags.get(key, {}).values()]
        if search:
            tags = [tag for tag in tags if _matches_search(tag.name, search)]

        # GitLab defaults to order_by=updated, sort=desc (newest first)
        descending = sort != "asc"
        if order_by == "name":
            return sorted(tags, key=lambda tag: tag.name, reverse=descending)
        if order_by == "version":
            return sorted(tags, key=lambda tag: _version_key(tag.name), reverse=descending)
        return list(reversed(tags)) if descending else tags

    def _page_fetcher(self, key: str, list_items: Callable[[], list[T]]) -> PageFetcher[T]:
        """Serve pages from the current state, re-listed on every request."""

        def fetch_page(page: int, per_page: int) -> Page[T]:
            self._page_requests.append((key, page, per_page))
            items = list_items()
            total_pages = max(1, (len(items) + per_page - 1) // per_page)
            start = (page - 1) * per_page
            return Page(
                items=tuple(items[start : start + per_page]),
                page=page,
                per_page=per_page,
                next_page=page + 1 if page < total_pages else None,
                total_items=len(items),
                total_pages=total_pages,
            )

        return fetch_page

    def _with_protection(self, key: str, tag: Tag) -> Tag:
        rules = self._protected_tags.get(key, {})
        is_protected = any(fnmatchcase(tag.name, pattern) for pattern in rules)
        return replace(tag, protected=is_protected)

    def _is_known_ref(self, key: str, ref: str) -> bool:
        if ref in self._branches or ref in self._tags.get(key, {}):
            return True
        return _SHA_PATTERN.match(ref) is not None


def _tag_endpoint(key: str, name: str) -> str:
    return f"projects/{key}/repository/tags/{name}"


def _fake_sha(ref: str) -> str:
    return hashlib.sha1(ref.encode("utf-8")).hexdigest()


def _matches_search(name: str, search: str) -> bool:
    if search.startswith("^"):
        return name.startswith(search[1:])
    if search.endswith("$"):
        return name.endswith(search[:-1])
    return search in name


def _version_key(name: str) -> tuple[tuple[int, int | str], ...]:
    """Natural sort key: "v1.10.0" sorts after "v1.9.0"."""
    parts = re.findall(r"\d+|[^\d]+", name)
    return tuple((0, int(part)) if part.isdigit() else (1, part) for part in parts)
