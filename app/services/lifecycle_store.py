"""Best-effort persistence of menu expansion and known URL ids.

Values live in the app_state key/value table as JSON. Any read or write
failure degrades to "nothing persisted"; callers never see an exception.
"""
from __future__ import annotations

import json
import logging
import sqlite3
from typing import Iterable, Mapping

from core import storage

OPEN_GROUPS_KEY = "menu-bar-open-groups"
KNOWN_URL_IDS_KEY = "iframe-state-known-url-ids"


class LifecycleStore:
    def __init__(self, namespace: str | None = None):
        self.namespace = namespace

    def _key(self, base: str) -> str:
        return f"{base}:{self.namespace}" if self.namespace else base

    def _read(self, base: str):
        key = self._key(base)
        try:
            raw = storage.get_app_state(key)
        except (sqlite3.Error, OSError):
            logging.warning("[STORE] read failed key=%s", key, exc_info=True)
            return None
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError:
            logging.warning("[STORE] ignoring malformed value key=%s", key)
            return None

    def _write(self, base: str, value) -> None:
        key = self._key(base)
        try:
            storage.set_app_state(key, json.dumps(value))
        except (sqlite3.Error, OSError, TypeError, ValueError):
            logging.warning("[STORE] write failed key=%s", key, exc_info=True)

    def load_open_groups(self) -> dict[str, bool]:
        data = self._read(OPEN_GROUPS_KEY)
        if isinstance(data, dict):
            items = data.items()
        elif isinstance(data, list):
            items = [pair for pair in data if isinstance(pair, (list, tuple)) and len(pair) == 2]
        else:
            return {}
        return {
            group_id: is_open
            for group_id, is_open in items
            if isinstance(group_id, str) and isinstance(is_open, bool)
        }

    def save_open_groups(self, open_groups: Mapping[str, bool]) -> None:
        self._write(OPEN_GROUPS_KEY, dict(open_groups))

    def load_known_url_ids(self) -> set[str]:
        data = self._read(KNOWN_URL_IDS_KEY)
        if not isinstance(data, list):
            return set()
        return {url_id for url_id in data if isinstance(url_id, str)}

    def save_known_url_ids(self, url_ids: Iterable[str]) -> None:
        self._write(KNOWN_URL_IDS_KEY, sorted(url_ids))
