"""
Display session schemas: view state of the account/contact display and its events.
"""

from pydantic import AliasChoices, BaseModel, Field

from account_browser.schemas.account import Account
from account_browser.schemas.common import DataTableColumn, Pagination, ToastMessage
from account_browser.schemas.contact import Contact


class AccountTableState(BaseModel):
    records: list[Account] = []
    columns: list[DataTableColumn] = []
    pagination: Pagination
    is_loading: bool = False


class ContactTableState(BaseModel):
    records: list[Contact] = []
    columns: list[DataTableColumn] = []
    pagination: Pagination
    is_loading: bool = False


class DisplayStateResponse(BaseModel):
    """Response for the display session endpoints. Toasts are delivered once."""
    id: str
    search_key: str = ""
    accounts: AccountTableState
    selected_account_id: str | None = None
    selected_account_name: str = ""
    selected_account_rows: list[str] = []
    show_contacts: bool = False
    contacts: ContactTableState
    toasts: list[ToastMessage] = []


class SearchUpdate(BaseModel):
    """Request body for PUT /display/{id}/search."""
    value: str = Field("", max_length=255)


class SelectedRow(BaseModel):
    id: str = Field(validation_alias=AliasChoices("Id", "id"))
    name: str | None = Field(None, validation_alias=AliasChoices("Name", "name"))


class SelectionUpdate(BaseModel):
    """Request body for PUT /display/{id}/selection. Only the first row is used."""
    selected_rows: list[SelectedRow] = []


class DatatableResponse(BaseModel):
    """Response for GET /datatable/accounts."""
    search_term: str = ""
    records: list[Account] = []
    columns: list[DataTableColumn] = []
    toasts: list[ToastMessage] = []
