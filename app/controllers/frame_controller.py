import logging
import sqlite3
import webbrowser

from app.app_state import app_state
from app.services.frame_lifecycle import FrameLifecycleManager, LifecycleEventKind
from app.services.lifecycle_config import LifecycleConfig
from app.services.lifecycle_store import LifecycleStore
from app.services.url_catalog_service import UrlCatalogService
from core.catalog import effective_url


class FrameController:
    """Builds the lifecycle manager for the current user and handles what it delegates out."""

    def __init__(self, scheduler, config=None, service=None, store=None, opener=None):
        self.scheduler = scheduler
        self.config = config or LifecycleConfig()
        self.service = service
        self.store = store
        self.opener = opener or webbrowser.open
        self.manager = None
        self._unsubscribe = None

    def open_dashboard(self, narrow=False):
        """Mutates: manager. Does NOT mutate: current_user_id. Returns: (bool, str)."""
        if not app_state.current_user_id:
            return False, "No user selected."
        if self.service is None:
            self.service = UrlCatalogService(app_state.current_user_id)
        if self.store is None:
            self.store = LifecycleStore(namespace=app_state.current_user_id)
        try:
            groups = self.service.list_url_groups_for_current_user()
        except sqlite3.Error:
            logging.error("Failed to load URL groups", exc_info=True)
            return False, "Could not load URL groups."
        if not groups:
            return False, "No URL groups assigned."

        self.close()
        self.manager = FrameLifecycleManager.create(
            groups,
            self.scheduler,
            store=self.store,
            config=self.config,
            narrow=narrow,
            record_last_active_url=self.service.record_last_active_url,
        )
        self._unsubscribe = self.manager.subscribe(self._on_event)

        last_url_id = self._last_active_url_id()
        if last_url_id and self.manager.select_url(last_url_id):
            return True, "Dashboard restored."
        return True, "Dashboard ready."

    def refresh(self):
        """Mutates: manager groups. Returns: (bool, str)."""
        if self.manager is None:
            return False, "Dashboard is not open."
        try:
            groups = self.service.list_url_groups_for_current_user()
        except sqlite3.Error:
            logging.error("Failed to refresh URL groups", exc_info=True)
            return False, "Could not load URL groups."
        self.manager.set_groups(groups)
        return True, "URL groups refreshed."

    def open_external(self, url_id):
        """Mutates: none. Returns: (bool, str)."""
        url = self.manager.url(url_id) if self.manager else None
        if url is None:
            return False, "URL not found."
        target = effective_url(url, self.manager.narrow)
        try:
            self.opener(target)
        except webbrowser.Error:
            logging.error("Failed to open %s externally", target, exc_info=True)
            return False, "Could not open the browser."
        return True, f"Opened {url.title} in the browser."

    def close(self):
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        if self.manager is not None:
            self.manager.dispose()
            self.manager = None

    def _last_active_url_id(self):
        try:
            return self.service.last_active_url_id()
        except sqlite3.Error:
            logging.warning("Failed to read last active URL", exc_info=True)
            return None

    def _on_event(self, event):
        if event.kind == LifecycleEventKind.OPEN_EXTERNAL:
            success, message = self.open_external(event.url_id)
            if not success:
                logging.warning(message)
