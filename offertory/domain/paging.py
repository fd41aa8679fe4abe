"""Pagination for long ledger listings."""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 20
PAGES_PER_GROUP = 15


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of rows plus the page-link window around it."""

    items: list[T]
    number: int
    total_pages: int
    group_start: int
    group_end: int

    @property
    def has_previous_group(self) -> bool:
        return self.group_start > 1

    @property
    def has_next_group(self) -> bool:
        return self.group_end < self.total_pages


def paginate(
    rows: list[T],
    page: int,
    page_size: int = DEFAULT_PAGE_SIZE,
    pages_per_group: int = PAGES_PER_GROUP,
) -> Page[T]:
    """Slice rows into a page.

    Args:
        rows: All rows, already in display order.
        page: Requested 1-based page number; clamped into range.
        page_size: Rows per page.
        pages_per_group: Page links shown at once.

    Returns:
        Page with its items and link window. An empty input yields page 1
        of 0 with no items.
    """
    if page_size <= 0:
        raise ValueError("page_size must be positive")

    total_pages = -(-len(rows) // page_size)
    number = min(max(page, 1), max(total_pages, 1))
    group_start = (number - 1) // pages_per_group * pages_per_group + 1
    group_end = min(group_start + pages_per_group - 1, total_pages)

    return Page(
        items=rows[(number - 1) * page_size : number * page_size],
        number=number,
        total_pages=total_pages,
        group_start=group_start,
        group_end=group_end,
    )
