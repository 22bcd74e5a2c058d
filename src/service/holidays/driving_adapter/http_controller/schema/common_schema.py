from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from src.platform.pagination.paginator import Page, PageCursor


T = TypeVar('T')


class PageCursorResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    page: int
    page_size: int = Field(..., alias='pageSize')

    @classmethod
    def from_cursor(cls, cursor: Optional[PageCursor]) -> Optional['PageCursorResponse']:
        if cursor is None:
            return None
        return cls(page=cursor.page, page_size=cursor.page_size)


class PaginatedResponse(BaseModel, Generic[T]):
    """Absent cursors are omitted from the body (routes use response_model_exclude_none)."""

    model_config = ConfigDict(populate_by_name=True)

    items: List[T]
    current_page: int = Field(..., alias='currentPage')
    total_pages: int = Field(..., alias='totalPages')
    next_page: Optional[PageCursorResponse] = Field(default=None, alias='nextPage')
    previous_page: Optional[PageCursorResponse] = Field(default=None, alias='previousPage')

    @classmethod
    def from_page(cls, page: Page, items: List[T]) -> 'PaginatedResponse[T]':
        return cls(
            items=items,
            current_page=page.current_page,
            total_pages=page.total_pages,
            next_page=PageCursorResponse.from_cursor(page.next_page),
            previous_page=PageCursorResponse.from_cursor(page.previous_page),
        )


class MessageResponse(BaseModel):
    message: str
