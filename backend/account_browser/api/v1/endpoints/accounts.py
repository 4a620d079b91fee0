"""
Accounts endpoints. Paginated account search and related contacts from Salesforce.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status
from pydantic import ValidationError

from account_browser.components.pagination import PageTracker
from account_browser.schemas.account import Account
from account_browser.schemas.common import PaginatedResponse
from account_browser.schemas.contact import Contact
from account_browser.services.salesforce_service import (
    InvalidQueryError,
    SalesforceService,
    SalesforceServiceError,
    get_salesforce_service,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/accounts", tags=["accounts"])


@router.get(
    "",
    response_model=PaginatedResponse[Account],
    summary="List accounts",
    description="One page (10 records) of accounts whose name contains the search key, ordered by name.",
)
def list_accounts(
    search: str = Query("", max_length=255, description="Account name search key"),
    page: int = Query(1, ge=1, description="1-based page number"),
    salesforce: SalesforceService = Depends(get_salesforce_service),
) -> PaginatedResponse[Account]:
    """GET /api/v1/accounts?search=&page= — count and fetch one page of accounts."""
    try:
        count = salesforce.count_accounts(search)
        records = salesforce.get_accounts(search, page)
        tracker = PageTracker("account")
        tracker.set_total(count)
        tracker.current_page = page
        return PaginatedResponse[Account](
            items=[Account.from_record(r) for r in records],
            pagination=tracker.to_schema(),
        )
    except InvalidQueryError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except SalesforceServiceError as e:
        logger.warning("Salesforce account query error: %s", e.message)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=e.message or "Salesforce query failed",
        )
    except ValidationError as e:
        logger.warning("Malformed Salesforce account record: %s", e)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Unexpected record format from Salesforce",
        )
    except Exception as e:
        logger.exception("List accounts error: %s", e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to list accounts",
        )


@router.get(
    "/{account_id}/contacts",
    response_model=PaginatedResponse[Contact],
    summary="List contacts of an account",
    description="One page (10 records) of contacts related to the account.",
)
def list_account_contacts(
    account_id: str = Path(..., description="Salesforce Account Id (15 or 18 characters)"),
    page: int = Query(1, ge=1, description="1-based page number"),
    salesforce: SalesforceService = Depends(get_salesforce_service),
) -> PaginatedResponse[Contact]:
    """GET /api/v1/accounts/{account_id}/contacts?page= — count and fetch one page of contacts."""
    try:
        count = salesforce.count_contacts(account_id)
        records = salesforce.get_contacts(account_id, page)
        tracker = PageTracker("contact")
        tracker.set_total(count)
        tracker.current_page = page
        return PaginatedResponse[Contact](
            items=[Contact.model_validate(r) for r in records],
            pagination=tracker.to_schema(),
        )
    except InvalidQueryError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    except SalesforceServiceError as e:
        logger.warning("Salesforce contact query error: %s", e.message)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=e.message or "Salesforce query failed",
        )
    except ValidationError as e:
        logger.warning("Malformed Salesforce contact record: %s", e)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Unexpected record format from Salesforce",
        )
    except Exception as e:
        logger.exception("List contacts error: %s", e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to list contacts",
        )
