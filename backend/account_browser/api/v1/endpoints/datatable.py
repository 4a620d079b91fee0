"""
Account datatable endpoint: up to 10 accounts by name, no pagination.
"""

from fastapi import APIRouter, Depends, Query

from account_browser.components.account_datatable import AccountDatatable
from account_browser.schemas.display import DatatableResponse
from account_browser.services.salesforce_service import SalesforceService, get_salesforce_service

router = APIRouter(prefix="/datatable", tags=["datatable"])


@router.get(
    "/accounts",
    response_model=DatatableResponse,
    summary="Account datatable",
    description="Newest accounts whose name contains the search term. Load failures are returned as toasts.",
)
def get_account_datatable(
    search_term: str = Query("", max_length=255, description="Account name search term"),
    salesforce: SalesforceService = Depends(get_salesforce_service),
) -> DatatableResponse:
    """GET /api/v1/datatable/accounts?search_term= — render the account datatable."""
    datatable = AccountDatatable(salesforce)
    if search_term:
        datatable.handle_search_change(search_term)
    else:
        datatable.connect()
    return datatable.to_response()
