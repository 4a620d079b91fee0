"""
Salesforce REST API client and the account/contact query operations.
Uses Bearer token auth, requests library, error handling, and retries on 429/5xx.
"""

import logging
import math
import re
import time
from typing import Any

import requests

from account_browser.core.config import get_settings

logger = logging.getLogger(__name__)

PAGE_SIZE = 10
# SOQL rejects OFFSET values above 2000.
MAX_SOQL_OFFSET = 2000

ACCOUNT_FIELDS = ["Id", "Name", "AccountNumber", "Type", "AccountStatus__c", "CreatedDate"]
ACCOUNT_LOOKUP_FIELDS = ["Id", "Name", "RecordTypeId", "CreatedDate"]
CONTACT_FIELDS = ["Id", "FirstName", "LastName", "Email"]

ACCOUNT_ORDER_BY = "Name ASC"
ACCOUNT_LOOKUP_ORDER_BY = "CreatedDate DESC"
CONTACT_ORDER_BY = "LastName ASC, FirstName ASC"

_RECORD_ID_RE = re.compile(r"^[a-zA-Z0-9]{15}(?:[a-zA-Z0-9]{3})?$")


class SalesforceServiceError(Exception):
    """Raised when a Salesforce API call fails."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        detail: Any = None,
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.detail = detail
        super().__init__(message)


class InvalidQueryError(SalesforceServiceError):
    """Raised before any request when query input is out of range or malformed."""


def escape_soql_literal(value: str) -> str:
    """Escape a value for use inside a single-quoted SOQL string literal."""
    return value.replace("\\", "\\\\").replace("'", "\\'")


def escape_soql_like(value: str) -> str:
    """Escape a value for a LIKE pattern; % and _ are matched literally."""
    return escape_soql_literal(value).replace("%", "\\%").replace("_", "\\_")


def page_offset(page_number: int, page_size: int = PAGE_SIZE) -> int:
    """Row offset of a 1-based page. Raises InvalidQueryError when out of range."""
    if page_number < 1:
        raise InvalidQueryError(f"Page number must be 1 or greater, got {page_number}")
    offset = (page_number - 1) * page_size
    if offset > MAX_SOQL_OFFSET:
        raise InvalidQueryError(
            f"Page {page_number} is beyond the maximum query offset of {MAX_SOQL_OFFSET} records"
        )
    return offset


def total_pages(total_count: int, page_size: int = PAGE_SIZE) -> int:
    """Number of pages for total_count records; never less than 1."""
    return max(1, math.ceil(max(total_count, 0) / page_size))


class SalesforceService:
    """
    Salesforce REST query service. Bearer token auth, retries on 429/5xx.
    """

    def __init__(
        self,
        instance_url: str | None = None,
        access_token: str | None = None,
        api_version: str | None = None,
    ) -> None:
        settings = get_settings()
        self._instance_url = (instance_url or settings.salesforce_instance_url).rstrip("/")
        self._token = access_token or settings.salesforce_access_token
        self._api_version = (api_version or settings.salesforce_api_version).lstrip("vV")
        self._timeout = settings.salesforce_timeout
        self._max_retries = settings.salesforce_max_retries

    def _get_headers(self) -> dict[str, str]:
        """Build request headers with Bearer token."""
        if not self._token:
            raise SalesforceServiceError(
                "Salesforce access token not configured. Set SALESFORCE_ACCESS_TOKEN in environment."
            )
        return {
            "Authorization": f"Bearer {self._token}",
            "Accept": "application/json",
        }

    def _base_url(self) -> str:
        if not self._instance_url:
            raise SalesforceServiceError(
                "Salesforce instance URL not configured. Set SALESFORCE_INSTANCE_URL in environment."
            )
        return f"{self._instance_url}/services/data/v{self._api_version}"

    @staticmethod
    def _should_retry(status_code: int) -> bool:
        return status_code == 429 or status_code >= 500

    def _retry_wait(self, retry_after: str | None, attempt: int) -> float:
        """Seconds to wait before the next attempt, never longer than the request timeout."""
        wait = float(retry_after) if retry_after and retry_after.isdigit() else float(2 ** attempt)
        return min(wait, self._timeout)

    def _handle_error(self, response: requests.Response) -> None:
        """Interpret error response and raise SalesforceServiceError with detail."""
        try:
            body = response.json()
        except ValueError:
            body = response.text or None
        msg = f"Salesforce API error: {response.status_code}"
        # Salesforce returns a list of {"message": ..., "errorCode": ...}
        first = body[0] if isinstance(body, list) and body else body
        if isinstance(first, dict):
            detail = first.get("message") or first.get("error_description") or first.get("error")
            if first.get("errorCode"):
                msg += f" ({first['errorCode']})"
            if isinstance(detail, str):
                msg += f" — {detail}"
        elif isinstance(body, str) and body:
            msg += f" — {body[:500]}"
        raise SalesforceServiceError(msg, status_code=response.status_code, detail=body)

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        retries: int | None = None,
    ) -> dict[str, Any]:
        """
        Execute HTTP request with retries on 429/5xx.
        path: relative to /services/data/vXX.X (no leading slash required).
        """
        retries = self._max_retries if retries is None else retries
        url = f"{self._base_url()}/{path.lstrip('/')}"
        headers = self._get_headers()
        last_exc: Exception | None = None

        for attempt in range(retries + 1):
            try:
                resp = requests.request(
                    method=method,
                    url=url,
                    headers=headers,
                    params=params,
                    timeout=self._timeout,
                )
            except requests.RequestException as e:
                last_exc = e
                logger.warning("Salesforce request failed (attempt %d): %s", attempt + 1, e)
                if attempt < retries:
                    time.sleep(self._retry_wait(None, attempt))
                continue

            limit_info = resp.headers.get("Sforce-Limit-Info")
            if limit_info:
                logger.debug("Salesforce %s", limit_info)

            if resp.ok:
                if resp.status_code == 204 or not resp.content:
                    return {}
                return resp.json()

            if self._should_retry(resp.status_code) and attempt < retries:
                wait = self._retry_wait(resp.headers.get("Retry-After"), attempt)
                logger.warning(
                    "Salesforce %s %s (attempt %d), retrying in %.1fs",
                    resp.status_code,
                    resp.reason,
                    attempt + 1,
                    wait,
                )
                time.sleep(wait)
                continue

            self._handle_error(resp)

        if last_exc:
            raise SalesforceServiceError(
                f"Salesforce request failed after {retries + 1} attempts: {last_exc!s}"
            ) from last_exc
        raise SalesforceServiceError("Salesforce request failed unexpectedly")

    def query(self, soql: str) -> dict[str, Any]:
        """Run a SOQL query. Returns the raw response (totalSize, done, records)."""
        logger.debug("SOQL: %s", soql)
        try:
            data = self._request("GET", "/query", params={"q": soql})
        except SalesforceServiceError:
            raise
        except Exception as e:
            raise SalesforceServiceError(f"Failed to run query: {e!s}") from e
        if not isinstance(data, dict):
            raise SalesforceServiceError("Unexpected response when running query")
        return data

    @staticmethod
    def _records(data: dict[str, Any]) -> list[dict[str, Any]]:
        records = data.get("records") or []
        return [{k: v for k, v in r.items() if k != "attributes"} for r in records]

    # -------------------------------------------------------------------------
    # Accounts
    # -------------------------------------------------------------------------

    @staticmethod
    def _account_name_filter(search_key: str | None) -> str:
        key = (search_key or "").strip()
        if not key:
            return ""
        return f" WHERE Name LIKE '%{escape_soql_like(key)}%'"

    def count_accounts(self, search_key: str | None = None) -> int:
        """Count accounts whose name contains search_key (all accounts when blank)."""
        soql = "SELECT COUNT() FROM Account" + self._account_name_filter(search_key)
        data = self.query(soql)
        return int(data.get("totalSize") or 0)

    def get_accounts(
        self,
        search_key: str | None = None,
        page_number: int = 1,
        page_size: int = PAGE_SIZE,
    ) -> list[dict[str, Any]]:
        """Fetch one page of accounts matching search_key, ordered by name."""
        offset = page_offset(page_number, page_size)
        soql = (
            f"SELECT {', '.join(ACCOUNT_FIELDS)} FROM Account"
            f"{self._account_name_filter(search_key)}"
            f" ORDER BY {ACCOUNT_ORDER_BY} LIMIT {page_size} OFFSET {offset}"
        )
        return self._records(self.query(soql))

    def search_accounts(
        self,
        search_term: str | None = None,
        limit_count: int = PAGE_SIZE,
    ) -> list[dict[str, Any]]:
        """Fetch up to limit_count accounts matching search_term, newest first."""
        if limit_count < 1:
            raise InvalidQueryError(f"Limit must be 1 or greater, got {limit_count}")
        soql = (
            f"SELECT {', '.join(ACCOUNT_LOOKUP_FIELDS)} FROM Account"
            f"{self._account_name_filter(search_term)}"
            f" ORDER BY {ACCOUNT_LOOKUP_ORDER_BY} LIMIT {limit_count}"
        )
        return self._records(self.query(soql))

    # -------------------------------------------------------------------------
    # Contacts
    # -------------------------------------------------------------------------

    @staticmethod
    def _account_id_filter(account_id: str) -> str:
        if not account_id or not _RECORD_ID_RE.match(account_id):
            raise InvalidQueryError(f"Invalid account id: {account_id!r}")
        return f" WHERE AccountId = '{account_id}'"

    def count_contacts(self, account_id: str) -> int:
        """Count contacts related to account_id."""
        soql = "SELECT COUNT() FROM Contact" + self._account_id_filter(account_id)
        data = self.query(soql)
        return int(data.get("totalSize") or 0)

    def get_contacts(
        self,
        account_id: str,
        page_number: int = 1,
        page_size: int = PAGE_SIZE,
    ) -> list[dict[str, Any]]:
        """Fetch one page of contacts related to account_id."""
        where = self._account_id_filter(account_id)
        offset = page_offset(page_number, page_size)
        soql = (
            f"SELECT {', '.join(CONTACT_FIELDS)} FROM Contact{where}"
            f" ORDER BY {CONTACT_ORDER_BY} LIMIT {page_size} OFFSET {offset}"
        )
        return self._records(self.query(soql))


def get_salesforce_service() -> SalesforceService:
    """Dependency: return a SalesforceService instance."""
    return SalesforceService()
