"""Abstract base class for GitLab tag operations."""

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import TypeVar

from gitlab_tags.gateway.gitlab.errors import NotFoundError
from gitlab_tags.gateway.gitlab.pager import Pager
from gitlab_tags.gateway.gitlab.types import (
    AccessLevel,
    ProjectRef,
    ProtectedTag,
    Release,
    SortOrder,
    Tag,
    TagOrderBy,
)

T = TypeVar("T")

VALID_ORDER_BY: frozenset[str] = frozenset({"name", "updated", "version"})
VALID_SORT: frozenset[str] = frozenset({"asc", "desc"})


def optional_on_not_found(fn: Callable[[], T]) -> T | None:
    """Call fn, mapping NotFoundError to None.

    Every other error propagates unchanged.
    """
    try:
        return fn()
    except NotFoundError:
        return None


def validate_listing_options(order_by: str | None, sort: str | None) -> None:
    """Reject tag listing options GitLab does not accept.

    Raises:
        ValueError: If order_by or sort is not a supported value
    """
    if order_by is not None and order_by not in VALID_ORDER_BY:
        msg = f"order_by must be one of {sorted(VALID_ORDER_BY)}, got {order_by!r}"
        raise ValueError(msg)
    if sort is not None and sort not in VALID_SORT:
        msg = f"sort must be one of {sorted(VALID_SORT)}, got {sort!r}"
        raise ValueError(msg)


class TagsGateway(ABC):
    """Abstract interface for repository tags, their releases and protection rules.

    All implementations (real and fake) must implement this interface. Every
    operation is scoped to a project given as a numeric id, a
    "namespace/path" string or a Project.
    """

    # --- Tags ---

    @abstractmethod
    def get_tags(
        self,
        project: ProjectRef,
        *,
        order_by: TagOrderBy | None = None,
        sort: SortOrder | None = None,
        search: str | None = None,
    ) -> list[Tag]:
        """List every tag of a project.

        Args:
            project: Project reference
            order_by: "name", "updated" or "version" (server default: "updated")
            sort: "asc" or "desc" (server default: "desc")
            search: Only tags whose name contains this string; "^term" and
                "term$" anchor the match

        Returns:
            All tags, fetched page by page

        Raises:
            ValueError: If order_by or sort is invalid
            GitLabApiError: If the request fails
        """
        ...

    @abstractmethod
    def get_tags_pager(
        self,
        project: ProjectRef,
        per_page: int,
        *,
        order_by: TagOrderBy | None = None,
        sort: SortOrder | None = None,
        search: str | None = None,
    ) -> Pager[Tag]:
        """Page through the tags of a project.

        The first page is fetched immediately; pager.total_items is available
        without fetching the rest.
        """
        ...

    @abstractmethod
    def get_tag(self, project: ProjectRef, name: str) -> Tag:
        """Get a single tag by name.

        Raises:
            NotFoundError: If the tag does not exist
        """
        ...

    def get_optional_tag(self, project: ProjectRef, name: str) -> Tag | None:
        """Get a single tag by name, or None if it does not exist."""
        return optional_on_not_found(lambda: self.get_tag(project, name))

    @abstractmethod
    def create_tag(
        self,
        project: ProjectRef,
        name: str,
        ref: str,
        *,
        message: str | None = None,
        release_description: str | None = None,
    ) -> Tag:
        """Create a tag pointing at ref.

        Args:
            project: Project reference
            name: Tag name (may contain "/")
            ref: Branch name, tag name or commit SHA to tag
            message: Annotation message; creates an annotated tag when given
            release_description: Release notes to create for the new tag (a
                second request to the releases API)

        Raises:
            GitLabApiError: If the ref does not exist, the name is invalid or
                already taken
        """
        ...

    @abstractmethod
    def delete_tag(self, project: ProjectRef, name: str) -> None:
        """Delete a tag.

        Raises:
            NotFoundError: If the tag does not exist
        """
        ...

    # --- Releases ---

    @abstractmethod
    def create_release(self, project: ProjectRef, tag_name: str, description: str) -> Release:
        """Attach release notes to an existing tag.

        Raises:
            NotFoundError: If the tag does not exist
            GitLabApiError: If the tag already has a release
        """
        ...

    @abstractmethod
    def update_release(self, project: ProjectRef, tag_name: str, description: str) -> Release:
        """Replace the release notes of a tag.

        Raises:
            NotFoundError: If the tag or its release does not exist
        """
        ...

    # --- Protected tags ---

    @abstractmethod
    def get_protected_tags(self, project: ProjectRef) -> list[ProtectedTag]:
        """List every protection rule of a project."""
        ...

    @abstractmethod
    def get_protected_tags_pager(self, project: ProjectRef, per_page: int) -> Pager[ProtectedTag]:
        """Page through the protection rules of a project."""
        ...

    @abstractmethod
    def get_protected_tag(self, project: ProjectRef, name: str) -> ProtectedTag:
        """Get a protection rule by name or wildcard pattern.

        Raises:
            NotFoundError: If no rule with that name exists
        """
        ...

    def get_optional_protected_tag(self, project: ProjectRef, name: str) -> ProtectedTag | None:
        """Get a protection rule by name, or None if it does not exist."""
        return optional_on_not_found(lambda: self.get_protected_tag(project, name))

    @abstractmethod
    def protect_tag(
        self, project: ProjectRef, name: str, access_level: AccessLevel
    ) -> ProtectedTag:
        """Protect tags matching name, allowing creation from access_level up.

        A rule may be created whether or not a tag with that name exists.

        Raises:
            GitLabApiError: If a rule with that name already exists
        """
        ...

    @abstractmethod
    def unprotect_tag(self, project: ProjectRef, name: str) -> None:
        """Remove a protection rule. The tag itself is left in place.

        Raises:
            NotFoundError: If no rule with that name exists
        """
        ...
