"""Filtered and paginated views over the catalog store."""

from __future__ import annotations
import math
from collections.abc import Sequence
from dataclasses import dataclass
from .models import ALL_CATEGORIES, PAGE_SIZE, CatalogEntry
from .store import CatalogStore


@dataclass(frozen=True, slots=True)
class Projection:
    """The slice of the catalog currently shown to the operator."""

    page_items: tuple[CatalogEntry, ...]
    total_count: int
    page_count: int
    current_page: int
    page_size: int = PAGE_SIZE

    @property
    def has_previous(self) -> bool:
        """Return ``True`` when a previous page exists."""
        return self.current_page > 1

    @property
    def has_next(self) -> bool:
        """Return ``True`` when a following page exists."""
        return self.current_page < self.page_count

    def range_label(self) -> str:
        """Return the ``Showing start–end of total`` footer text."""
        if self.total_count == 0:
            return "Showing 0–0 of 0"
        start = (self.current_page - 1) * self.page_size + 1
        end = min(self.current_page * self.page_size, self.total_count)
        return f"Showing {start}–{end} of {self.total_count}"


def matches_search(entry: CatalogEntry, search_query: str) -> bool:
    """Return ``True`` when the query occurs in the entry's name or description."""
    if not search_query:
        return True
    needle = search_query.casefold()
    return needle in entry.name.casefold() or needle in entry.description.casefold()


def matches_category(entry: CatalogEntry, category_filter: str) -> bool:
    """Return ``True`` for the ``All`` sentinel or an exact category match."""
    return category_filter == ALL_CATEGORIES or entry.category == category_filter


def filter_entries(
    entries: Sequence[CatalogEntry], search_query: str, category_filter: str
) -> list[CatalogEntry]:
    """Apply the search filter, then the category filter, keeping order."""
    searched = [e for e in entries if matches_search(e, search_query)]
    return [e for e in searched if matches_category(e, category_filter)]


def project(
    entries: Sequence[CatalogEntry],
    search_query: str,
    category_filter: str,
    current_page: int,
    page_size: int = PAGE_SIZE,
) -> Projection:
    """Return the page ``current_page`` of the filtered entries."""
    filtered = filter_entries(entries, search_query, category_filter)
    total = len(filtered)
    page_count = math.ceil(total / page_size)
    start = (current_page - 1) * page_size
    items = tuple(filtered[start : current_page * page_size])
    return Projection(
        page_items=items,
        total_count=total,
        page_count=page_count,
        current_page=current_page,
        page_size=page_size,
    )


class ViewProjector:
    """Own the query parameters and expose the matching projection.

    Changing the search text or category always returns to the first page,
    and so does any change to the underlying store. Results are memoized on
    ``(store version, search, category, page)``.
    """

    def __init__(self, store: CatalogStore, *, page_size: int = PAGE_SIZE) -> None:
        """Bind the projector to ``store`` with default query parameters."""
        self._store = store
        self._page_size = page_size
        self._search_query = ""
        self._category_filter = ALL_CATEGORIES
        self._current_page = 1
        self._seen_version = store.version
        self._cache_key: tuple[int, str, str, int] | None = None
        self._cached: Projection | None = None

    @property
    def search_query(self) -> str:
        """Return the active search text."""
        return self._search_query

    @property
    def category_filter(self) -> str:
        """Return the active category filter."""
        return self._category_filter

    @property
    def current_page(self) -> int:
        """Return the 1-indexed page being displayed."""
        self._sync_with_store()
        return self._current_page

    def set_search(self, search_query: str) -> None:
        """Set the search text and return to the first page."""
        self._search_query = search_query
        self._current_page = 1

    def set_category(self, category_filter: str) -> None:
        """Set the category filter and return to the first page."""
        self._category_filter = category_filter
        self._current_page = 1

    def next_page(self) -> None:
        """Advance one page; does nothing on the last page."""
        projection = self.projection
        if self._current_page < max(1, projection.page_count):
            self._current_page += 1

    def go_to_page(self, page: int) -> None:
        """Jump to ``page`` clamped to the available pages."""
        projection = self.projection
        self._current_page = min(max(1, page), max(1, projection.page_count))

    def previous_page(self) -> None:
        """Go back one page; does nothing on the first page."""
        self._sync_with_store()
        if self._current_page > 1:
            self._current_page -= 1

    @property
    def projection(self) -> Projection:
        """Return the projection for the current query parameters."""
        self._sync_with_store()
        key = (
            self._store.version,
            self._search_query,
            self._category_filter,
            self._current_page,
        )
        if self._cache_key != key or self._cached is None:
            self._cached = project(
                self._store.entries,
                self._search_query,
                self._category_filter,
                self._current_page,
                self._page_size,
            )
            self._cache_key = key
        return self._cached

    def _sync_with_store(self) -> None:
        if self._store.version != self._seen_version:
            self._seen_version = self._store.version
            self._current_page = 1


__all__ = [
    "Projection",
    "ViewProjector",
    "filter_entries",
    "matches_category",
    "matches_search",
    "project",
]
