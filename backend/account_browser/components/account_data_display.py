"""
Account data display: searchable, paginated Account list with the related
Contacts of the selected account.

Each handler updates local state, calls the Salesforce service, then updates
state again. Loads run synchronously; a failed load surfaces an error toast
and leaves the previously displayed page in place, except after a search
change, which empties the account list before loading.
"""

import logging
import threading
from typing import Any, Iterable

from pydantic import ValidationError

from account_browser.components.columns import ACCOUNT_COLUMNS, CONTACT_COLUMNS
from account_browser.components.pagination import PageTracker
from account_browser.schemas.account import Account
from account_browser.schemas.common import ToastMessage
from account_browser.schemas.contact import Contact
from account_browser.schemas.display import (
    AccountTableState,
    ContactTableState,
    DisplayStateResponse,
    SelectedRow,
)
from account_browser.services.salesforce_service import SalesforceService, SalesforceServiceError

logger = logging.getLogger(__name__)


class AccountDataDisplay:
    """Server-side state of one account/contact display."""

    def __init__(self, display_id: str, service: SalesforceService) -> None:
        self.id = display_id
        self._service = service
        # Held by callers around a handler and the state snapshot that follows it
        self.lock = threading.Lock()

        # Accounts
        self.account_list: list[Account] = []
        self.account_pages = PageTracker("account")
        self.is_loading_accounts = False
        self.selected_account_rows: list[str] = []
        self.selected_account_id: str | None = None
        self.selected_account_name = ""

        # Contacts
        self.contact_list: list[Contact] = []
        self.contact_pages = PageTracker("contact")
        self.is_loading_contacts = False

        self.search_key = ""
        self._toasts: list[ToastMessage] = []

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    def connect(self) -> None:
        """Initial load when the display is created."""
        self.load_accounts()

    def load_accounts(self, page_number: int | None = None) -> bool:
        """
        Fetch accounts for the current search key. page_number defaults to the
        current page; it becomes current only if both calls succeed.
        A successful load clears the selection. Returns False on failure.
        """
        page = page_number or self.account_pages.current_page
        self.is_loading_accounts = True
        try:
            count = self._service.count_accounts(self.search_key)
            records = self._service.get_accounts(self.search_key, page)
            accounts = [Account.from_record(r) for r in records]
        except SalesforceServiceError as e:
            logger.warning("Account load failed for display %s: %s", self.id, e.message)
            self._show_error_toast(f"Error loading accounts: {e.message}")
            return False
        except ValidationError as e:
            logger.warning("Malformed account record for display %s: %s", self.id, e)
            self._show_error_toast("Error loading accounts: unexpected record format")
            return False
        finally:
            self.is_loading_accounts = False
        self.account_pages.set_total(count)
        self.account_pages.current_page = page
        self.account_list = accounts
        self._clear_selection()
        return True

    def load_contacts(self, account_id: str, page_number: int | None = None) -> bool:
        """Fetch one page of contacts for account_id. Returns False on failure."""
        page = page_number or self.contact_pages.current_page
        self.is_loading_contacts = True
        try:
            count = self._service.count_contacts(account_id)
            records = self._service.get_contacts(account_id, page)
            contacts = [Contact.model_validate(r) for r in records]
        except SalesforceServiceError as e:
            logger.warning("Contact load failed for account %s: %s", account_id, e.message)
            self._show_error_toast(f"Error loading contacts: {e.message}")
            return False
        except ValidationError as e:
            logger.warning("Malformed contact record for account %s: %s", account_id, e)
            self._show_error_toast("Error loading contacts: unexpected record format")
            return False
        finally:
            self.is_loading_contacts = False
        self.contact_pages.set_total(count)
        self.contact_pages.current_page = page
        self.contact_list = contacts
        return True

    # -------------------------------------------------------------------------
    # Event handlers
    # -------------------------------------------------------------------------

    def handle_search_change(self, value: str | None) -> None:
        """New search key: back to page 1; accounts, selection and contacts cleared."""
        self.search_key = value or ""
        self.account_list = []
        self.account_pages.reset()
        self._clear_selection()
        self.load_accounts(1)

    def handle_account_selection(self, selected_rows: Iterable[SelectedRow | dict[str, Any]]) -> None:
        """Select the first row and load its contacts; an empty selection clears them."""
        rows = [r if isinstance(r, SelectedRow) else SelectedRow.model_validate(r) for r in selected_rows]
        if not rows:
            self._clear_selection()
            return
        selected = rows[0]
        self.selected_account_rows = [selected.id]
        self.selected_account_id = selected.id
        self.selected_account_name = selected.name or self._account_name(selected.id)
        self.contact_list = []
        self.contact_pages.reset()
        self.load_contacts(selected.id, 1)

    def handle_previous_accounts(self) -> None:
        if self.account_pages.current_page > 1:
            self.load_accounts(self.account_pages.current_page - 1)

    def handle_next_accounts(self) -> None:
        if self.account_pages.current_page < self.account_pages.total_pages:
            self.load_accounts(self.account_pages.current_page + 1)

    def handle_previous_contacts(self) -> None:
        if self.selected_account_id and self.contact_pages.current_page > 1:
            self.load_contacts(self.selected_account_id, self.contact_pages.current_page - 1)

    def handle_next_contacts(self) -> None:
        if self.selected_account_id and self.contact_pages.current_page < self.contact_pages.total_pages:
            self.load_contacts(self.selected_account_id, self.contact_pages.current_page + 1)

    # -------------------------------------------------------------------------
    # Computed state
    # -------------------------------------------------------------------------

    @property
    def is_first_account_page(self) -> bool:
        return self.account_pages.is_first_page

    @property
    def is_last_account_page(self) -> bool:
        return self.account_pages.is_last_page

    @property
    def is_first_contact_page(self) -> bool:
        return self.contact_pages.is_first_page

    @property
    def is_last_contact_page(self) -> bool:
        return self.contact_pages.is_last_page

    @property
    def show_contacts(self) -> bool:
        return self.selected_account_id is not None

    def drain_toasts(self) -> list[ToastMessage]:
        """Return pending toasts and clear them."""
        toasts, self._toasts = self._toasts, []
        return toasts

    def to_state(self) -> DisplayStateResponse:
        """Snapshot for the API; drains pending toasts."""
        return DisplayStateResponse(
            id=self.id,
            search_key=self.search_key,
            accounts=AccountTableState(
                records=self.account_list,
                columns=ACCOUNT_COLUMNS,
                pagination=self.account_pages.to_schema(),
                is_loading=self.is_loading_accounts,
            ),
            selected_account_id=self.selected_account_id,
            selected_account_name=self.selected_account_name,
            selected_account_rows=list(self.selected_account_rows),
            show_contacts=self.show_contacts,
            contacts=ContactTableState(
                records=self.contact_list,
                columns=CONTACT_COLUMNS,
                pagination=self.contact_pages.to_schema(),
                is_loading=self.is_loading_contacts,
            ),
            toasts=self.drain_toasts(),
        )

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _clear_selection(self) -> None:
        self.selected_account_rows = []
        self.selected_account_id = None
        self.selected_account_name = ""
        self.contact_list = []
        self.contact_pages.reset()

    def _account_name(self, account_id: str) -> str:
        for account in self.account_list:
            if account.id == account_id:
                return account.name or ""
        return ""

    def _show_error_toast(self, message: str) -> None:
        self._toasts.append(ToastMessage(title="Error", message=message, variant="error"))
