"""
Display session endpoints. Each session holds the server-side state of one
account/contact display; UI events are posted here and the new view state returned.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from account_browser.components.account_data_display import AccountDataDisplay
from account_browser.schemas.display import DisplayStateResponse, SearchUpdate, SelectionUpdate
from account_browser.services.display_store import (
    DisplaySessionNotFound,
    DisplayStore,
    get_display_store,
)
from account_browser.services.salesforce_service import SalesforceService, get_salesforce_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/display", tags=["display"])


def _get_display(display_id: str, store: DisplayStore) -> AccountDataDisplay:
    try:
        return store.get(display_id)
    except DisplaySessionNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.post(
    "",
    response_model=DisplayStateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create display session",
    description="Create a display and load the first page of accounts.",
)
def create_display(
    salesforce: SalesforceService = Depends(get_salesforce_service),
    store: DisplayStore = Depends(get_display_store),
) -> DisplayStateResponse:
    """POST /api/v1/display — new session, initial account load."""
    display = store.create(salesforce)
    logger.info("Created display session %s", display.id)
    with display.lock:
        display.connect()
        return display.to_state()


@router.get(
    "/{display_id}",
    response_model=DisplayStateResponse,
    summary="Get display state",
)
def get_display_state(
    display_id: str,
    store: DisplayStore = Depends(get_display_store),
) -> DisplayStateResponse:
    display = _get_display(display_id, store)
    with display.lock:
        return display.to_state()


@router.delete(
    "/{display_id}",
    status_code=204,
    summary="Close display session",
)
def delete_display(
    display_id: str,
    store: DisplayStore = Depends(get_display_store),
) -> None:
    """DELETE /api/v1/display/{display_id} — drop the session state."""
    try:
        store.delete(display_id)
    except DisplaySessionNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.put(
    "/{display_id}/search",
    response_model=DisplayStateResponse,
    summary="Change search key",
    description="Resets to account page 1 and clears the selected account and its contacts.",
)
def change_search(
    display_id: str,
    body: SearchUpdate,
    store: DisplayStore = Depends(get_display_store),
) -> DisplayStateResponse:
    display = _get_display(display_id, store)
    with display.lock:
        display.handle_search_change(body.value)
        return display.to_state()


@router.put(
    "/{display_id}/selection",
    response_model=DisplayStateResponse,
    summary="Change account selection",
    description="Selecting a row loads page 1 of its contacts; an empty list clears the selection.",
)
def change_selection(
    display_id: str,
    body: SelectionUpdate,
    store: DisplayStore = Depends(get_display_store),
) -> DisplayStateResponse:
    display = _get_display(display_id, store)
    with display.lock:
        display.handle_account_selection(body.selected_rows)
        return display.to_state()


@router.post("/{display_id}/accounts/previous", response_model=DisplayStateResponse)
def previous_accounts(
    display_id: str,
    store: DisplayStore = Depends(get_display_store),
) -> DisplayStateResponse:
    display = _get_display(display_id, store)
    with display.lock:
        display.handle_previous_accounts()
        return display.to_state()


@router.post("/{display_id}/accounts/next", response_model=DisplayStateResponse)
def next_accounts(
    display_id: str,
    store: DisplayStore = Depends(get_display_store),
) -> DisplayStateResponse:
    display = _get_display(display_id, store)
    with display.lock:
        display.handle_next_accounts()
        return display.to_state()


@router.post("/{display_id}/contacts/previous", response_model=DisplayStateResponse)
def previous_contacts(
    display_id: str,
    store: DisplayStore = Depends(get_display_store),
) -> DisplayStateResponse:
    display = _get_display(display_id, store)
    with display.lock:
        display.handle_previous_contacts()
        return display.to_state()


@router.post("/{display_id}/contacts/next", response_model=DisplayStateResponse)
def next_contacts(
    display_id: str,
    store: DisplayStore = Depends(get_display_store),
) -> DisplayStateResponse:
    display = _get_display(display_id, store)
    with display.lock:
        display.handle_next_contacts()
        return display.to_state()
