"""
Account datatable: up to 10 accounts filtered by name, newest first.
No pagination and no related contacts.
"""

import logging

from pydantic import ValidationError

from account_browser.components.columns import DATATABLE_COLUMNS
from account_browser.schemas.account import Account
from account_browser.schemas.common import ToastMessage
from account_browser.schemas.display import DatatableResponse
from account_browser.services.salesforce_service import (
    PAGE_SIZE,
    SalesforceService,
    SalesforceServiceError,
)

logger = logging.getLogger(__name__)


class AccountDatatable:
    def __init__(self, service: SalesforceService, limit_count: int = PAGE_SIZE) -> None:
        self._service = service
        self.limit_count = limit_count
        self.accounts: list[Account] = []
        self.search_term = ""
        self.is_loading = False
        self._toasts: list[ToastMessage] = []

    def connect(self) -> None:
        self.load_accounts()

    def load_accounts(self, search_value: str = "") -> None:
        self.is_loading = True
        try:
            records = self._service.search_accounts(search_value, limit_count=self.limit_count)
            self.accounts = [Account.from_record(r) for r in records]
        except SalesforceServiceError as e:
            logger.error("Error loading accounts: %s", e.message)
            self._toasts.append(
                ToastMessage(title="Error", message="Error loading accounts", variant="error")
            )
        except ValidationError as e:
            logger.error("Malformed account record: %s", e)
            self._toasts.append(
                ToastMessage(title="Error", message="Error loading accounts", variant="error")
            )
        finally:
            self.is_loading = False

    def handle_search_change(self, value: str | None) -> None:
        self.search_term = value or ""
        self.load_accounts(self.search_term)

    def to_response(self) -> DatatableResponse:
        toasts, self._toasts = self._toasts, []
        return DatatableResponse(
            search_term=self.search_term,
            records=self.accounts,
            columns=DATATABLE_COLUMNS,
            toasts=toasts,
        )
