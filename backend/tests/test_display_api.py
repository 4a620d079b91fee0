"""
Tests for the display session endpoints (server-side component state).
"""

import threading
import time

from account_browser.api.v1.endpoints import display as display_endpoints
from account_browser.services.display_store import DisplayStore

from conftest import FakeSalesforceService


def _create(client) -> dict:
    resp = client.post("/api/v1/display")
    assert resp.status_code == 201
    return resp.json()


def test_create_loads_first_page(client, store: DisplayStore) -> None:
    state = _create(client)
    assert len(store) == 1
    assert len(state["accounts"]["records"]) == 10
    assert state["accounts"]["pagination"]["total_pages"] == 3
    assert state["show_contacts"] is False
    assert state["contacts"]["pagination"]["text"] == "No contacts found"
    assert state["toasts"] == []


def test_get_state(client) -> None:
    state = _create(client)
    again = client.get(f"/api/v1/display/{state['id']}").json()
    assert again["accounts"] == state["accounts"]


def test_unknown_session_is_404(client) -> None:
    assert client.get("/api/v1/display/missing").status_code == 404
    assert client.post("/api/v1/display/missing/accounts/next").status_code == 404
    assert client.delete("/api/v1/display/missing").status_code == 404


def test_delete_session(client, store: DisplayStore) -> None:
    state = _create(client)
    assert client.delete(f"/api/v1/display/{state['id']}").status_code == 204
    assert len(store) == 0
    assert client.get(f"/api/v1/display/{state['id']}").status_code == 404


def test_selection_and_contact_paging(client, big_account: dict) -> None:
    display_id = _create(client)["id"]
    body = {"selected_rows": [{"Id": big_account["Id"], "Name": big_account["Name"]}]}
    state = client.put(f"/api/v1/display/{display_id}/selection", json=body).json()
    assert state["selected_account_id"] == big_account["Id"]
    assert state["selected_account_name"] == big_account["Name"]
    assert state["show_contacts"] is True
    assert state["contacts"]["pagination"]["current_page"] == 1
    assert len(state["contacts"]["records"]) == 10

    state = client.post(f"/api/v1/display/{display_id}/contacts/next").json()
    assert state["contacts"]["pagination"]["current_page"] == 2
    state = client.post(f"/api/v1/display/{display_id}/contacts/previous").json()
    assert state["contacts"]["pagination"]["current_page"] == 1

    state = client.put(f"/api/v1/display/{display_id}/selection", json={"selected_rows": []}).json()
    assert state["selected_account_id"] is None
    assert state["contacts"]["records"] == []


def test_search_resets_selection(client, big_account: dict) -> None:
    display_id = _create(client)["id"]
    client.post(f"/api/v1/display/{display_id}/accounts/next")
    client.put(
        f"/api/v1/display/{display_id}/selection",
        json={"selected_rows": [{"id": big_account["Id"], "name": big_account["Name"]}]},
    )
    state = client.put(f"/api/v1/display/{display_id}/search", json={"value": "Account 02"}).json()
    assert state["search_key"] == "Account 02"
    assert state["accounts"]["pagination"]["current_page"] == 1
    assert state["selected_account_id"] is None
    assert state["show_contacts"] is False
    assert state["accounts"]["pagination"]["total_count"] == 6


def test_account_navigation(client) -> None:
    display_id = _create(client)["id"]
    client.post(f"/api/v1/display/{display_id}/accounts/next")
    state = client.post(f"/api/v1/display/{display_id}/accounts/next").json()
    assert state["accounts"]["pagination"]["current_page"] == 3
    assert len(state["accounts"]["records"]) == 5
    state = client.post(f"/api/v1/display/{display_id}/accounts/next").json()
    assert state["accounts"]["pagination"]["current_page"] == 3
    state = client.post(f"/api/v1/display/{display_id}/accounts/previous").json()
    assert state["accounts"]["pagination"]["current_page"] == 2


def test_toasts_delivered_once(client, salesforce: FakeSalesforceService) -> None:
    display_id = _create(client)["id"]
    salesforce.fail_with = "UNABLE_TO_LOCK_ROW"
    state = client.post(f"/api/v1/display/{display_id}/accounts/next").json()
    assert state["toasts"] == [
        {"title": "Error", "message": "Error loading accounts: UNABLE_TO_LOCK_ROW", "variant": "error"}
    ]
    assert state["accounts"]["pagination"]["current_page"] == 1
    assert client.get(f"/api/v1/display/{display_id}").json()["toasts"] == []


def test_store_evicts_oldest(client, store: DisplayStore) -> None:
    ids = [_create(client)["id"] for _ in range(4)]
    assert len(store) == 3
    assert client.get(f"/api/v1/display/{ids[0]}").status_code == 404
    assert client.get(f"/api/v1/display/{ids[-1]}").status_code == 200


def test_events_on_one_display_run_one_at_a_time(salesforce: FakeSalesforceService, store: DisplayStore) -> None:
    display = store.create(salesforce)
    display.connect()
    guard = threading.Lock()
    active = [0]
    peak = [0]

    def slow_call() -> None:
        with guard:
            active[0] += 1
            peak[0] = max(peak[0], active[0])
        time.sleep(0.05)
        with guard:
            active[0] -= 1

    salesforce.loading_observer = slow_call
    threads = [
        threading.Thread(target=display_endpoints.next_accounts, args=(display.id,), kwargs={"store": store})
        for _ in range(2)
    ]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert peak[0] == 1
    assert display.account_pages.current_page == 3
