"""
Pagination bookkeeping shared by the datatable components.
"""

from account_browser.schemas.common import Pagination
from account_browser.services.salesforce_service import PAGE_SIZE, total_pages


def pagination_text(current_page: int, pages: int, total_count: int, noun: str) -> str:
    """e.g. 'Page 2 of 3 (25 accounts)', or 'No accounts found' when empty."""
    if total_count <= 0:
        return f"No {noun}s found"
    label = noun if total_count == 1 else f"{noun}s"
    return f"Page {current_page} of {pages} ({total_count} {label})"


class PageTracker:
    """Current page, total count and derived page count for one list."""

    def __init__(self, noun: str, page_size: int = PAGE_SIZE) -> None:
        self.noun = noun
        self.page_size = page_size
        self.current_page = 1
        self.total_count = 0
        self.total_pages = 1

    def reset(self) -> None:
        self.current_page = 1
        self.total_count = 0
        self.total_pages = 1

    def set_total(self, total_count: int) -> None:
        self.total_count = max(total_count, 0)
        self.total_pages = total_pages(self.total_count, self.page_size)

    @property
    def is_first_page(self) -> bool:
        return self.current_page == 1

    @property
    def is_last_page(self) -> bool:
        return self.current_page >= self.total_pages

    def to_schema(self) -> Pagination:
        return Pagination(
            current_page=self.current_page,
            page_size=self.page_size,
            total_count=self.total_count,
            total_pages=self.total_pages,
            is_first_page=self.is_first_page,
            is_last_page=self.is_last_page,
            text=pagination_text(self.current_page, self.total_pages, self.total_count, self.noun),
        )
