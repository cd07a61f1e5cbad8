"""Pagination state machine.

Each `Paginator` is an independent object: a filtered view and the full list
can be paginated side by side without sharing state.
"""

from __future__ import annotations

import math
from typing import Sequence, TypeVar

from core.domain.models import PaginationState


T = TypeVar("T")

DEFAULT_ITEMS_PER_PAGE = 21
DEFAULT_MAX_VISIBLE_PAGES = 7


class Paginator:
    """Tracks the current page over a list whose length changes over time.

    `items_per_page` is fixed at construction. `total_pages` is 0 for an empty
    list, while `current_page` keeps reporting 1.
    """

    def __init__(self, items_per_page: int = DEFAULT_ITEMS_PER_PAGE) -> None:
        if items_per_page < 1:
            raise ValueError("items_per_page must be >= 1")
        self._items_per_page = items_per_page
        self._current_page = 1
        self._total_items = 0
        self._total_pages = 0

    @property
    def items_per_page(self) -> int:
        return self._items_per_page

    @property
    def current_page(self) -> int:
        return self._current_page

    @property
    def total_items(self) -> int:
        return self._total_items

    @property
    def total_pages(self) -> int:
        return self._total_pages

    @property
    def state(self) -> PaginationState:
        """Snapshot of the current state (a copy)."""

        return PaginationState(
            current_page=self._current_page,
            items_per_page=self._items_per_page,
            total_items=self._total_items,
            total_pages=self._total_pages,
        )

    def initialize(self, total_items: int) -> None:
        """Recompute pages for `total_items`.

        A different total than the previous call means a different dataset,
        so the view goes back to page 1. With the same total, an out of range
        page is clamped to the last page.
        """

        if total_items < 0:
            raise ValueError("total_items must be >= 0")

        previous_total = self._total_items
        self._total_items = total_items
        self._total_pages = math.ceil(total_items / self._items_per_page)

        if previous_total != total_items:
            self._current_page = 1
        elif self._current_page > self._total_pages:
            self._current_page = min(self._current_page, self._total_pages or 1)

    def set_page(self, page: int) -> bool:
        if page < 1 or page > self._total_pages:
            return False
        self._current_page = page
        return True

    def next_page(self) -> bool:
        return self.set_page(self._current_page + 1)

    def previous_page(self) -> bool:
        return self.set_page(self._current_page - 1)

    def first_page(self) -> None:
        self._current_page = 1

    def last_page(self) -> None:
        self._current_page = self._total_pages or 1

    def has_next_page(self) -> bool:
        return self._current_page < self._total_pages

    def has_previous_page(self) -> bool:
        return self._current_page > 1

    def current_slice(self, items: Sequence[T]) -> list[T]:
        start = (self._current_page - 1) * self._items_per_page
        return list(items[start : start + self._items_per_page])

    def page_window(self, max_visible: int = DEFAULT_MAX_VISIBLE_PAGES) -> list[int]:
        """Page numbers to show in the controls.

        The window is centered on the current page when possible; when the
        right edge is clamped at `total_pages` it extends to the left instead.
        """

        if max_visible < 1:
            raise ValueError("max_visible must be >= 1")

        total = self._total_pages
        if total <= max_visible:
            return list(range(1, total + 1))

        half = max_visible // 2
        start = max(1, self._current_page - half)
        end = min(total, start + max_visible - 1)
        if end - start < max_visible - 1:
            start = max(1, end - max_visible + 1)
        return list(range(start, end + 1))

    def reset(self) -> None:
        self._current_page = 1
        self._total_items = 0
        self._total_pages = 0
