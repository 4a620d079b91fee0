"""
In-memory registry of display sessions (one AccountDataDisplay per session id).
Nothing is persisted; least recently used sessions are evicted past the limit.
"""

import logging
import threading
import uuid
from collections import OrderedDict
from functools import lru_cache

from account_browser.components.account_data_display import AccountDataDisplay
from account_browser.core.config import get_settings
from account_browser.services.salesforce_service import SalesforceService

logger = logging.getLogger(__name__)


class DisplaySessionNotFound(Exception):
    """Raised when a display session id is unknown or was evicted."""

    def __init__(self, display_id: str) -> None:
        self.display_id = display_id
        super().__init__(f"Display session {display_id} not found")


class DisplayStore:
    def __init__(self, max_sessions: int | None = None) -> None:
        self._max_sessions = max_sessions or get_settings().display_max_sessions
        self._displays: OrderedDict[str, AccountDataDisplay] = OrderedDict()
        self._lock = threading.Lock()

    def create(self, service: SalesforceService) -> AccountDataDisplay:
        """Register a new display. The caller connects it (initial load)."""
        display = AccountDataDisplay(str(uuid.uuid4()), service)
        with self._lock:
            self._displays[display.id] = display
            while len(self._displays) > self._max_sessions:
                evicted_id, _ = self._displays.popitem(last=False)
                logger.info("Evicted display session %s", evicted_id)
        return display

    def get(self, display_id: str) -> AccountDataDisplay:
        with self._lock:
            display = self._displays.get(display_id)
            if display is None:
                raise DisplaySessionNotFound(display_id)
            self._displays.move_to_end(display_id)
            return display

    def delete(self, display_id: str) -> None:
        with self._lock:
            if self._displays.pop(display_id, None) is None:
                raise DisplaySessionNotFound(display_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._displays)


@lru_cache()
def get_display_store() -> DisplayStore:
    """Dependency: process-wide display store."""
    return DisplayStore()
