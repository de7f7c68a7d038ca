"""Four display statuses derived from the active id and the loaded set."""
from __future__ import annotations

from enum import Enum
from typing import AbstractSet


class FrameStatus(str, Enum):
    ACTIVE_LOADED = "active-loaded"
    ACTIVE_UNLOADED = "active-unloaded"
    INACTIVE_LOADED = "inactive-loaded"
    INACTIVE_UNLOADED = "inactive-unloaded"

    @property
    def is_active(self) -> bool:
        return self in (FrameStatus.ACTIVE_LOADED, FrameStatus.ACTIVE_UNLOADED)

    @property
    def is_loaded(self) -> bool:
        return self in (FrameStatus.ACTIVE_LOADED, FrameStatus.INACTIVE_LOADED)

    @property
    def tooltip(self) -> str:
        return _TOOLTIPS[self]


_TOOLTIPS = {
    FrameStatus.ACTIVE_LOADED: "Currently active (click to reload, long press to unload)",
    FrameStatus.ACTIVE_UNLOADED: "Currently active but unloaded (click to reload)",
    FrameStatus.INACTIVE_LOADED: "Loaded in background (click to view, long press to unload)",
    FrameStatus.INACTIVE_UNLOADED: "Currently unloaded (click to load and view)",
}


def status(url_id: str, active_url_id: str | None, loaded_url_ids: AbstractSet[str]) -> FrameStatus:
    """Pure and total: never stored, always recomputed."""
    is_active = active_url_id is not None and url_id == active_url_id
    is_loaded = url_id in loaded_url_ids
    if is_active:
        return FrameStatus.ACTIVE_LOADED if is_loaded else FrameStatus.ACTIVE_UNLOADED
    return FrameStatus.INACTIVE_LOADED if is_loaded else FrameStatus.INACTIVE_UNLOADED
