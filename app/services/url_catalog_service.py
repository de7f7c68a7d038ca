"""Data collaborator for the dashboard: the current user's groups and last active URL."""
from __future__ import annotations

import logging

from core import catalog
from core.catalog import UrlGroup


class UrlCatalogService:
    def __init__(self, user_id: str):
        self.user_id = user_id

    def list_url_groups_for_current_user(self) -> list[UrlGroup]:
        groups = catalog.list_url_groups_for_user(self.user_id)
        logging.info("[CATALOG] loaded %s group(s) for user=%s", len(groups), self.user_id)
        return groups

    def record_last_active_url(self, url_id: str) -> None:
        """Fire-and-forget; storage errors propagate to the caller, which logs them."""
        success, message = catalog.set_last_active_url(self.user_id, url_id)
        if not success:
            logging.warning("[CATALOG] last active url not recorded: %s", message)

    def last_active_url_id(self) -> str | None:
        return catalog.get_last_active_url(self.user_id)
