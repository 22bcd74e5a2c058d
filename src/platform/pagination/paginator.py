"""
Page-number pagination over insertion-ordered collections.

A page is a read-only view: the store does the slicing (skip/limit) and this module
only derives the cursors. Count and slice are two separate reads, so a page fetched
while other requests insert or delete may repeat or skip items relative to the
previous page.
"""

import math
from typing import Generic, Optional, Sequence, TypeVar

import attrs

from src.platform.config.core_setting import settings


T = TypeVar('T')

# OFFSET + LIMIT must fit the signed 64-bit integers SQL backends bind
MAX_OFFSET = 2**63 - 1


def _parse_positive_int(raw: object) -> Optional[int]:
    if raw is None or isinstance(raw, bool):
        return None
    try:
        value = int(str(raw).strip())
    except ValueError:
        return None
    return value if value > 0 else None


@attrs.frozen
class PageCursor:
    page: int
    page_size: int


@attrs.frozen
class PageRequest:
    page: int = 1
    page_size: int = 10

    @classmethod
    def from_query(
        cls,
        page: object = None,
        page_size: object = None,
        *,
        default_page_size: int | None = None,
        max_page_size: int | None = None,
    ) -> 'PageRequest':
        """
        Build a request from raw query values.

        Absent, non-numeric and non-positive values fall back to page 1 and the
        default page size; page sizes above the maximum are clamped, and so are
        pages whose offset would not fit a database OFFSET. Such pages are empty.
        """
        default_size = default_page_size or settings.DEFAULT_PAGE_SIZE
        max_size = max_page_size or settings.MAX_PAGE_SIZE
        size = min(_parse_positive_int(page_size) or default_size, max_size)
        page = min(_parse_positive_int(page) or 1, MAX_OFFSET // size)
        return cls(page=page, page_size=size)

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.page_size

    @property
    def limit(self) -> int:
        return self.page_size


@attrs.frozen
class Page(Generic[T]):
    items: Sequence[T]
    current_page: int
    total_pages: int
    total_count: int
    next_page: Optional[PageCursor] = None
    previous_page: Optional[PageCursor] = None


def paginate(items: Sequence[T], *, total_count: int, request: PageRequest) -> Page[T]:
    """Wrap an already sliced window of a collection with its page cursors."""
    if len(items) > request.page_size:
        raise ValueError('Page window is larger than the requested page size')

    next_page = None
    if request.skip + request.page_size < total_count:
        next_page = PageCursor(page=request.page + 1, page_size=request.page_size)

    previous_page = None
    if request.skip > 0:
        previous_page = PageCursor(page=request.page - 1, page_size=request.page_size)

    return Page(
        items=list(items),
        current_page=request.page,
        total_pages=math.ceil(total_count / request.page_size) if total_count else 0,
        total_count=total_count,
        next_page=next_page,
        previous_page=previous_page,
    )
