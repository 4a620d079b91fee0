# Components: server-side datatable state driven by UI events

from account_browser.components.account_data_display import AccountDataDisplay
from account_browser.components.account_datatable import AccountDatatable
from account_browser.components.pagination import PageTracker, pagination_text

__all__ = [
    "AccountDataDisplay",
    "AccountDatatable",
    "PageTracker",
    "pagination_text",
]
