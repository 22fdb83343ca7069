"""Production implementation of GitLab tag operations."""

import logging
from dataclasses import replace

from gitlab_tags.gateway.gitlab.pager import Page, Pager
from gitlab_tags.gateway.gitlab.parsing import parse_protected_tag, parse_release, parse_tag
from gitlab_tags.gateway.gitlab.paths import encode_segment, project_endpoint
from gitlab_tags.gateway.gitlab.tags.abc import TagsGateway, validate_listing_options
from gitlab_tags.gateway.gitlab.types import (
    AccessLevel,
    ProjectRef,
    ProtectedTag,
    Release,
    SortOrder,
    Tag,
    TagOrderBy,
)
from gitlab_tags.gateway.http.abc import HttpClient

logger = logging.getLogger(__name__)

# Page size used when walking a full listing
DEFAULT_PER_PAGE = 96


class RealTagsGateway(TagsGateway):
    """Production implementation over the GitLab REST API v4.

    Every operation is a single request (full listings: one request per page).
    Nothing is cached between calls.
    """

    def __init__(self, http_client: HttpClient, *, per_page: int = DEFAULT_PER_PAGE) -> None:
        """Create the gateway.

        Args:
            http_client: Client for the GitLab API
            per_page: Page size used by get_tags() and get_protected_tags()
        """
        self._http_client = http_client
        self._per_page = per_page

    # --- Tags ---

    def get_tags(
        self,
        project: ProjectRef,
        *,
        order_by: TagOrderBy | None = None,
        sort: SortOrder | None = None,
        search: str | None = None,
    ) -> list[Tag]:
        pager = self.get_tags_pager(
            project, self._per_page, order_by=order_by, sort=sort, search=search
        )
        return pager.all()

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
        endpoint = project_endpoint(project, "repository", "tags")

        def fetch_page(page: int, size: int) -> Page[Tag]:
            response = self._http_client.get(
                endpoint,
                params={
                    "page": page,
                    "per_page": size,
                    "order_by": order_by,
                    "sort": sort,
                    "search": search,
                },
            )
            tags = [parse_tag(item) for item in response.body or []]
            return Page.from_response(response, tags, page=page, per_page=size)

        return Pager(fetch_page, per_page)

    def get_tag(self, project: ProjectRef, name: str) -> Tag:
        response = self._http_client.get(_tag_endpoint(project, name))
        return parse_tag(response.body)

    def create_tag(
        self,
        project: ProjectRef,
        name: str,
        ref: str,
        *,
        message: str | None = None,
        release_description: str | None = None,
    ) -> Tag:
        data: dict[str, str] = {"tag_name": name, "ref": ref}
        if message is not None:
            data["message"] = message

        logger.debug("Creating tag %s at %s", name, ref)
        response = self._http_client.post(
            project_endpoint(project, "repository", "tags"), data=data
        )
        tag = parse_tag(response.body)
        if release_description is None:
            return tag

        # The tags endpoint no longer accepts release_description
        release = self.create_release(project, name, release_description)
        return replace(tag, release=release)

    def delete_tag(self, project: ProjectRef, name: str) -> None:
        logger.debug("Deleting tag %s", name)
        self._http_client.delete(_tag_endpoint(project, name))

    # --- Releases ---

    def create_release(self, project: ProjectRef, tag_name: str, description: str) -> Release:
        response = self._http_client.post(
            project_endpoint(project, "releases"),
            data={"tag_name": tag_name, "description": description},
        )
        return parse_release(response.body, tag_name=tag_name)

    def update_release(self, project: ProjectRef, tag_name: str, description: str) -> Release:
        response = self._http_client.put(
            project_endpoint(project, "releases", encode_segment(tag_name)),
            data={"description": description},
        )
        return parse_release(response.body, tag_name=tag_name)

    # --- Protected tags ---

    def get_protected_tags(self, project: ProjectRef) -> list[ProtectedTag]:
        return self.get_protected_tags_pager(project, self._per_page).all()

    def get_protected_tags_pager(self, project: ProjectRef, per_page: int) -> Pager[ProtectedTag]:
        endpoint = project_endpoint(project, "protected_tags")

        def fetch_page(page: int, size: int) -> Page[ProtectedTag]:
            response = self._http_client.get(endpoint, params={"page": page, "per_page": size})
            rules = [parse_protected_tag(item) for item in response.body or []]
            return Page.from_response(response, rules, page=page, per_page=size)

        return Pager(fetch_page, per_page)

    def get_protected_tag(self, project: ProjectRef, name: str) -> ProtectedTag:
        response = self._http_client.get(_protected_tag_endpoint(project, name))
        return parse_protected_tag(response.body)

    def protect_tag(
        self, project: ProjectRef, name: str, access_level: AccessLevel
    ) -> ProtectedTag:
        logger.debug("Protecting tag %s for %s", name, access_level.name)
        response = self._http_client.post(
            project_endpoint(project, "protected_tags"),
            data={"name": name, "create_access_level": int(access_level)},
        )
        return parse_protected_tag(response.body)

    def unprotect_tag(self, project: ProjectRef, name: str) -> None:
        logger.debug("Unprotecting tag %s", name)
        self._http_client.delete(_protected_tag_endpoint(project, name))


def _tag_endpoint(project: ProjectRef, name: str) -> str:
    return project_endpoint(project, "repository", "tags", encode_segment(name))


def _protected_tag_endpoint(project: ProjectRef, name: str) -> str:
    return project_endpoint(project, "protected_tags", encode_segment(name))
