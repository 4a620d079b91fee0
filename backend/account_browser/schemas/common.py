"""
Common Pydantic schemas (pagination, datatable columns, toasts, errors).
"""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class MessageResponse(BaseModel):
    message: str


class ErrorDetail(BaseModel):
    detail: str


class Pagination(BaseModel):
    """Pagination bookkeeping for one datatable. Pages are 1-based."""
    current_page: int = 1
    page_size: int = 10
    total_count: int = 0
    total_pages: int = 1
    is_first_page: bool = True
    is_last_page: bool = True
    text: str = ""


class PaginatedResponse(BaseModel, Generic[T]):
    """One page of records plus its pagination state."""
    items: list[T]
    pagination: Pagination


class DataTableColumn(BaseModel):
    """Column definition for a datatable (label, field, display type)."""
    label: str
    field_name: str
    type: str = "text"
    sortable: bool = False
    type_attributes: dict[str, Any] = Field(default_factory=dict)


class ToastMessage(BaseModel):
    """User-facing notification raised by a component."""
    title: str
    message: str
    variant: str = "info"
