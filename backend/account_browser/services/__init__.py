# Services: Salesforce queries. The display session store lives in
# account_browser.services.display_store (it depends on the components).

from account_browser.services.salesforce_service import (
    PAGE_SIZE,
    InvalidQueryError,
    SalesforceService,
    SalesforceServiceError,
    get_salesforce_service,
    total_pages,
)

__all__ = [
    "PAGE_SIZE",
    "InvalidQueryError",
    "SalesforceService",
    "SalesforceServiceError",
    "get_salesforce_service",
    "total_pages",
]
