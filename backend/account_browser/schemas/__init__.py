# Pydantic request/response schemas (API contract).

from account_browser.schemas.common import (
    DataTableColumn,
    ErrorDetail,
    MessageResponse,
    PaginatedResponse,
    Pagination,
    ToastMessage,
)
from account_browser.schemas.account import Account
from account_browser.schemas.contact import Contact
from account_browser.schemas.display import (
    AccountTableState,
    ContactTableState,
    DatatableResponse,
    DisplayStateResponse,
    SearchUpdate,
    SelectedRow,
    SelectionUpdate,
)

__all__ = [
    "MessageResponse",
    "ErrorDetail",
    "Pagination",
    "PaginatedResponse",
    "DataTableColumn",
    "ToastMessage",
    "Account",
    "Contact",
    "AccountTableState",
    "ContactTableState",
    "DatatableResponse",
    "DisplayStateResponse",
    "SearchUpdate",
    "SelectedRow",
    "SelectionUpdate",
]
