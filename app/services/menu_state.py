"""Side-menu open groups and top-menu active group, derived from the active URL."""
from __future__ import annotations

from typing import Mapping, Sequence

from core.catalog import UrlGroup


class MenuState:
    def __init__(self, groups: Sequence[UrlGroup], open_groups: Mapping[str, bool] | None = None):
        self._groups: list[UrlGroup] = list(groups)
        self._open: dict[str, bool] = dict(open_groups or {})
        self._selected_group_id: str | None = None
        self._default_group()

    def _default_group(self) -> None:
        if self._selected_group_id is None and self._groups:
            self._selected_group_id = self._groups[0].id

    def _has_group(self, group_id: str) -> bool:
        return any(group.id == group_id for group in self._groups)

    def set_groups(self, groups: Sequence[UrlGroup]) -> None:
        self._groups = list(groups)
        if self._selected_group_id is not None and not self._has_group(self._selected_group_id):
            self._selected_group_id = None
        self._default_group()

    def restore(self, open_groups: Mapping[str, bool]) -> None:
        self._open = dict(open_groups)

    def group_of(self, url_id: str | None) -> str | None:
        if url_id is None:
            return None
        for group in self._groups:
            if group.contains(url_id):
                return group.id
        return None

    @property
    def open_groups(self) -> dict[str, bool]:
        return dict(self._open)

    def is_open(self, group_id: str) -> bool:
        return self._open.get(group_id, False)

    def toggle(self, group_id: str) -> bool:
        if not self._has_group(group_id):
            return False
        self._open[group_id] = not self._open.get(group_id, False)
        return True

    def sync_active(self, active_url_id: str | None, narrow: bool) -> bool:
        """Expand the active URL's group (collapse the rest when narrow). Returns True on change."""
        group_id = self.group_of(active_url_id)
        if group_id is None:
            return False
        self._selected_group_id = group_id
        before = dict(self._open)
        if narrow:
            # Narrow layouts keep only the active group expanded
            self._open = {group.id: group.id == group_id for group in self._groups}
        else:
            self._open[group_id] = True
        return before != self._open

    def active_group_id(self, active_url_id: str | None) -> str | None:
        return self.group_of(active_url_id) or self._selected_group_id

    def select_group(self, group_id: str) -> bool:
        if not self._has_group(group_id):
            return False
        self._selected_group_id = group_id
        return True
