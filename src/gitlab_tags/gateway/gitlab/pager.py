"""Lazy, restartable pagination over GitLab list endpoints.

GitLab paginates list endpoints with page/per_page query parameters and
reports position and totals in response headers:

    X-Page, X-Per-Page, X-Next-Page, X-Total, X-Total-Pages

X-Total and X-Total-Pages are omitted for very large collections, in which
case the totals are None and iteration relies on X-Next-Page alone.
"""

from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

from gitlab_tags.gateway.http.abc import HttpResponse

T = TypeVar("T")

# GitLab's maximum per_page value
MAX_PER_PAGE = 100


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of results plus the pagination state reported with it."""

    items: tuple[T, ...]
    page: int
    per_page: int
    next_page: int | None
    total_items: int | None = None
    total_pages: int | None = None

    @classmethod
    def from_response(
        cls, response: HttpResponse, items: Sequence[T], *, page: int, per_page: int
    ) -> "Page[T]":
        """Build a page from parsed items and the response pagination headers."""
        total_items = _int_header(response, "X-Total")
        total_pages = _int_header(response, "X-Total-Pages")
        reported_page = _int_header(response, "X-Page") or page
        reported_per_page = _int_header(response, "X-Per-Page") or per_page

        next_header = response.header("X-Next-Page")
        if next_header is not None:
            next_page = int(next_header) if next_header.strip() else None
        elif total_pages is not None:
            next_page = reported_page + 1 if reported_page < total_pages else None
        else:
            # No headers at all: a full page may be followed by another
            next_page = reported_page + 1 if len(items) >= reported_per_page else None

        return cls(
            items=tuple(items),
            page=reported_page,
            per_page=reported_per_page,
            next_page=next_page,
            total_items=total_items,
            total_pages=total_pages,
        )


# (page_number, per_page) -> Page
PageFetcher = Callable[[int, int], Page[T]]


class Pager(Generic[T]):
    """Sequence of result pages fetched on demand.

    The first page is fetched when the pager is created, which makes the
    totals available immediately. Every iteration starts again from page 1
    (served from the cached first page) and fetches the following pages as
    they are consumed.

    Usage:
        pager = gateway.tags.get_tags_pager(project, 20)
        pager.total_items          # no further requests
        for page in pager:         # list[Tag] per page
            ...
        names = [t.name for t in pager.stream()]
    """

    def __init__(self, fetch_page: PageFetcher[T], per_page: int) -> None:
        if per_page < 1:
            msg = f"per_page must be positive, got {per_page}"
            raise ValueError(msg)
        self._fetch_page = fetch_page
        self._per_page = min(per_page, MAX_PER_PAGE)
        self._first_page = fetch_page(1, self._per_page)

    @property
    def total_items(self) -> int | None:
        return self._first_page.total_items

    @property
    def total_pages(self) -> int | None:
        return self._first_page.total_pages

    @property
    def items_per_page(self) -> int:
        return self._first_page.per_page

    def first(self) -> list[T]:
        """Items of the first page (no request)."""
        return list(self._first_page.items)

    def page(self, number: int) -> list[T]:
        """Items of a single 1-based page."""
        if number < 1:
            msg = f"Page numbers start at 1, got {number}"
            raise ValueError(msg)
        if number == 1:
            return self.first()
        return list(self._fetch_page(number, self._per_page).items)

    def __iter__(self) -> Iterator[list[T]]:
        current = self._first_page
        while current.items:
            yield list(current.items)
            if current.next_page is None:
                return
            current = self._fetch_page(current.next_page, self._per_page)

    def stream(self) -> Iterator[T]:
        """Yield items one at a time across all pages."""
        for items in self:
            yield from items

    def all(self) -> list[T]:
        """Fetch every remaining page and return all items."""
        return list(self.stream())


def _int_header(response: HttpResponse, name: str) -> int | None:
    value = response.header(name)
    if value is None or not value.strip():
        return None
    return int(value)
