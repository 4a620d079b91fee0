"""
Aggregate v1 API routes.

Convention: Use "" (not "/") for the root path of a segment (e.g. @router.get(""), @router.post(""))
so the route is /api/v1/accounts not /api/v1/accounts/. This avoids 307 redirects when the
request arrives without a trailing slash.
"""

from fastapi import APIRouter

from account_browser.api.v1.endpoints import accounts, datatable, display

api_router = APIRouter()

api_router.include_router(accounts.router, prefix="")
api_router.include_router(datatable.router, prefix="")
api_router.include_router(display.router, prefix="")
