"""
Shared fixtures: an in-memory stand-in for the Salesforce service and an API client
wired to it through dependency overrides.
"""

import math

import pytest
from fastapi.testclient import TestClient

from account_browser.main import app
from account_browser.services.display_store import DisplayStore, get_display_store
from account_browser.services.salesforce_service import (
    PAGE_SIZE,
    SalesforceServiceError,
    get_salesforce_service,
    page_offset,
)


def make_account(i: int, name: str | None = None) -> dict:
    return {
        "Id": f"001{i:015d}",
        "Name": name or f"Account {i:03d}",
        "AccountNumber": f"AN-{i:04d}",
        "Type": "Customer - Direct",
        "AccountStatus__c": "Active",
        "CreatedDate": "2024-01-15T10:30:00.000+0000",
        "RecordTypeId": "012000000000000AAA",
    }


def make_contact(account_id: str, i: int) -> dict:
    return {
        "Id": f"003{i:015d}",
        "AccountId": account_id,
        "FirstName": f"First{i:03d}",
        "LastName": f"Last{i:03d}",
        "Email": f"contact{i}@example.com",
    }


class FakeSalesforceService:
    """Answers the account/contact queries from lists; records every call."""

    def __init__(self, accounts: list[dict], contacts: list[dict] | None = None) -> None:
        self.accounts = sorted(accounts, key=lambda a: a["Name"])
        self.contacts = contacts or []
        self.calls: list[tuple] = []
        self.fail_with: str | None = None
        self.loading_observer = None

    def _maybe_fail(self) -> None:
        if self.loading_observer is not None:
            self.loading_observer()
        if self.fail_with:
            raise SalesforceServiceError(self.fail_with, status_code=500)

    def _matching(self, search_key: str | None) -> list[dict]:
        key = (search_key or "").strip().lower()
        return [a for a in self.accounts if key in a["Name"].lower()]

    def _related(self, account_id: str) -> list[dict]:
        return [c for c in self.contacts if c["AccountId"] == account_id]

    def count_accounts(self, search_key=None) -> int:
        self.calls.append(("count_accounts", search_key))
        self._maybe_fail()
        return len(self._matching(search_key))

    def get_accounts(self, search_key=None, page_number=1, page_size=PAGE_SIZE) -> list[dict]:
        self.calls.append(("get_accounts", search_key, page_number))
        self._maybe_fail()
        offset = page_offset(page_number, page_size)
        return self._matching(search_key)[offset:offset + page_size]

    def search_accounts(self, search_term=None, limit_count=PAGE_SIZE) -> list[dict]:
        self.calls.append(("search_accounts", search_term, limit_count))
        self._maybe_fail()
        return self._matching(search_term)[:limit_count]

    def count_contacts(self, account_id) -> int:
        self.calls.append(("count_contacts", account_id))
        self._maybe_fail()
        return len(self._related(account_id))

    def get_contacts(self, account_id, page_number=1, page_size=PAGE_SIZE) -> list[dict]:
        self.calls.append(("get_contacts", account_id, page_number))
        self._maybe_fail()
        offset = page_offset(page_number, page_size)
        return self._related(account_id)[offset:offset + page_size]

    def calls_named(self, name: str) -> list[tuple]:
        return [c for c in self.calls if c[0] == name]


@pytest.fixture
def accounts() -> list[dict]:
    """25 accounts: pages of 10, 10 and 5."""
    return [make_account(i) for i in range(1, 26)]


@pytest.fixture
def big_account(accounts: list[dict]) -> dict:
    return accounts[0]


@pytest.fixture
def contacts(big_account: dict) -> list[dict]:
    """23 contacts on the first account, none on the others."""
    return [make_contact(big_account["Id"], i) for i in range(1, 24)]


@pytest.fixture
def salesforce(accounts: list[dict], contacts: list[dict]) -> FakeSalesforceService:
    return FakeSalesforceService(accounts, contacts)


@pytest.fixture
def store() -> DisplayStore:
    return DisplayStore(max_sessions=3)


@pytest.fixture
def client(salesforce: FakeSalesforceService, store: DisplayStore):
    app.dependency_overrides[get_salesforce_service] = lambda: salesforce
    app.dependency_overrides[get_display_store] = lambda: store
    try:
        with TestClient(app) as c:
            yield c
    finally:
        app.dependency_overrides.clear()


def expected_pages(count: int) -> int:
    return max(1, math.ceil(count / PAGE_SIZE))
