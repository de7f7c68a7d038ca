"""Per-session frame lifecycle: which URL is active, which frames are loaded.

Only two things are stored: the active url id and the loaded set. Every
display status, the open groups and the top-menu group are derived from them
plus the group list. Loading is the renderer's job (it reports back through
mark_loaded); unloading and selection are decided here.

No operation raises. Unknown or stale ids are ignored because the group list
can change underneath the client at any time.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, Sequence

from app.services.frame_status import FrameStatus, status
from app.services.idle_timeout import IdleTimeoutMonitor
from app.services.lifecycle_config import LifecycleConfig
from app.services.lifecycle_store import LifecycleStore
from app.services.long_press import LongPressTracker
from app.services.menu_state import MenuState
from app.services.scheduler import Scheduler
from core.catalog import Url, UrlGroup

LOG = logging.getLogger(__name__)


class LifecycleEventKind(str, Enum):
    SELECTED = "selected"
    LOADED = "loaded"
    UNLOADED = "unloaded"
    RELOAD_REQUESTED = "reload_requested"
    OPEN_EXTERNAL = "open_external"
    LONG_PRESS_STARTED = "long_press_started"
    LONG_PRESS_ENDED = "long_press_ended"
    MENU_CHANGED = "menu_changed"
    GROUPS_CHANGED = "groups_changed"


@dataclass(frozen=True)
class LifecycleEvent:
    kind: LifecycleEventKind
    url_id: str | None = None


Listener = Callable[[LifecycleEvent], None]


def _index_urls(groups: Iterable[UrlGroup]) -> dict[str, Url]:
    urls: dict[str, Url] = {}
    for group in groups:
        for url in group.urls:
            urls.setdefault(url.id, url)
    return urls


class FrameLifecycleManager:
    def __init__(
        self,
        groups: Sequence[UrlGroup],
        scheduler: Scheduler,
        *,
        store: LifecycleStore | None = None,
        config: LifecycleConfig | None = None,
        narrow: bool = False,
        record_last_active_url: Callable[[str], None] | None = None,
    ):
        self._config = config or LifecycleConfig()
        self._store = store
        self._record_last_active_url = record_last_active_url
        self._groups: tuple[UrlGroup, ...] = tuple(groups)
        self._urls = _index_urls(self._groups)
        self._active_url_id: str | None = None
        self._loaded: set[str] = set()
        self._known: set[str] = set()
        self._narrow = narrow
        self._listeners: list[Listener] = []
        self._disposed = False
        self._menu = MenuState(self._groups)
        self._long_press = LongPressTracker(
            scheduler,
            self._on_long_press,
            threshold_ms=self._config.long_press_ms,
            suppress_ms=self._config.click_suppress_ms,
        )
        self._idle = IdleTimeoutMonitor(scheduler, self._on_idle_timeout)

    @classmethod
    def create(cls, groups: Sequence[UrlGroup], scheduler: Scheduler, **kwargs) -> "FrameLifecycleManager":
        """Build a manager and rehydrate persisted menu state once."""
        manager = cls(groups, scheduler, **kwargs)
        if manager._store is not None:
            manager._menu.restore(manager._store.load_open_groups())
            manager._known = manager._store.load_known_url_ids()
        return manager

    def dispose(self) -> None:
        """Cancel every pending timer and drop listeners; later calls are no-ops."""
        if self._disposed:
            return
        self._disposed = True
        self._long_press.dispose()
        self._idle.dispose()
        self._listeners.clear()

    @property
    def disposed(self) -> bool:
        return self._disposed

    # ---- observation ----

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self, kind: LifecycleEventKind, url_id: str | None = None) -> None:
        event = LifecycleEvent(kind, url_id)
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                LOG.error("[FRAME] listener failed for %s", event, exc_info=True)

    # ---- read-only state ----

    @property
    def groups(self) -> tuple[UrlGroup, ...]:
        return self._groups

    def url(self, url_id: str) -> Url | None:
        return self._urls.get(url_id)

    @property
    def active_url_id(self) -> str | None:
        return self._active_url_id

    @property
    def loaded_url_ids(self) -> frozenset[str]:
        return frozenset(self._loaded)

    @property
    def known_url_ids(self) -> frozenset[str]:
        return frozenset(self._known)

    def was_previously_loaded(self, url_id: str) -> bool:
        """Cosmetic hint only; never reinstates a frame."""
        return url_id in self._known

    def status(self, url_id: str) -> FrameStatus:
        return status(url_id, self._active_url_id, self._loaded)

    def long_press_progress(self, url_id: str) -> float:
        return self._long_press.progress(url_id)

    def is_long_pressing(self, url_id: str) -> bool:
        return self._long_press.is_pressing(url_id)

    @property
    def narrow(self) -> bool:
        return self._narrow

    @property
    def open_groups(self) -> dict[str, bool]:
        return self._menu.open_groups

    def is_group_open(self, group_id: str) -> bool:
        return self._menu.is_open(group_id)

    @property
    def active_group_id(self) -> str | None:
        return self._menu.active_group_id(self._active_url_id)

    def group_of(self, url_id: str) -> str | None:
        return self._menu.group_of(url_id)

    # ---- operations ----

    def select_url(self, url_id: str) -> bool:
        """Make url_id the active URL. Loading is left to the renderer."""
        if self._disposed:
            return False
        url = self._urls.get(url_id)
        if url is None:
            LOG.debug("[FRAME] ignoring select of unknown url %s", url_id)
            return False
        if url.open_in_new_tab:
            LOG.debug("[FRAME] ignoring select of external url %s", url_id)
            return False
        previous = self._active_url_id
        self._active_url_id = url_id
        if previous != url_id:
            if previous is not None and previous in self._loaded:
                self._start_idle(previous)
            self._idle.stop(url_id)
            self._sync_menu()
        self._record(url_id)
        self._emit(LifecycleEventKind.SELECTED, url_id)
        return True

    def reload_url(self, url_id: str) -> bool:
        """Ask the renderer for a fresh load of the active URL."""
        if self._disposed or url_id not in self._urls or url_id != self._active_url_id:
            return False
        LOG.info("[FRAME] reload requested url=%s loaded=%s", url_id, url_id in self._loaded)
        self._emit(LifecycleEventKind.RELOAD_REQUESTED, url_id)
        return True

    def unload_url(self, url_id: str) -> bool:
        """Free the frame for url_id. Active selection is unchanged; repeated calls are no-ops."""
        if self._disposed or url_id not in self._urls or url_id not in self._loaded:
            return False
        self._loaded.discard(url_id)
        self._idle.stop(url_id)
        if self._long_press.is_pressing(url_id):
            self._long_press.cancel(url_id)
        LOG.info("[FRAME] unloaded url=%s status=%s", url_id, self.status(url_id).value)
        self._emit(LifecycleEventKind.UNLOADED, url_id)
        return True

    def mark_loaded(self, url_id: str) -> bool:
        """Renderer callback: the frame for url_id now has content."""
        if self._disposed:
            return False
        url = self._urls.get(url_id)
        if url is None or url.open_in_new_tab or url_id in self._loaded:
            return False
        self._loaded.add(url_id)
        if url_id not in self._known:
            self._known.add(url_id)
            if self._store is not None:
                self._store.save_known_url_ids(self._known)
        if url_id != self._active_url_id:
            self._start_idle(url_id)
        self._emit(LifecycleEventKind.LOADED, url_id)
        return True

    def click(self, url_id: str) -> bool:
        """Reload when already active, otherwise select. Swallowed right after a long press."""
        if self._disposed:
            return False
        if self._long_press.consume_click():
            LOG.debug("[LONG_PRESS] click suppressed url=%s", url_id)
            return False
        url = self._urls.get(url_id)
        if url is None:
            return False
        if url.open_in_new_tab:
            self._emit(LifecycleEventKind.OPEN_EXTERNAL, url_id)
            return True
        if url_id == self._active_url_id:
            return self.reload_url(url_id)
        return self.select_url(url_id)

    # ---- input handlers ----

    def on_click(self, url_id: str) -> bool:
        return self.click(url_id)

    def on_pointer_down(self, url_id: str) -> bool:
        """Arm the long-press timer; only loaded URLs have anything to unload."""
        if self._disposed:
            return False
        # Any new press ends the window for a click trailing an earlier long press
        self._long_press.clear_swallow()
        if url_id not in self._loaded:
            return False
        self._long_press.press(url_id)
        self._emit(LifecycleEventKind.LONG_PRESS_STARTED, url_id)
        return True

    def on_pointer_up(self, url_id: str) -> bool:
        """Returns True when this release ended a completed long press."""
        if self._disposed:
            return False
        was_pressing = self._long_press.is_pressing(url_id)
        completed = self._long_press.release(url_id)
        if was_pressing:
            self._emit(LifecycleEventKind.LONG_PRESS_ENDED, url_id)
        return completed

    def on_pointer_leave(self, url_id: str) -> None:
        if self._disposed:
            return
        if self._long_press.cancel(url_id):
            self._emit(LifecycleEventKind.LONG_PRESS_ENDED, url_id)

    def on_touch_start(self, url_id: str) -> bool:
        return self.on_pointer_down(url_id)

    def on_touch_end(self, url_id: str) -> bool:
        return self.on_pointer_up(url_id)

    def on_touch_cancel(self, url_id: str) -> None:
        self.on_pointer_leave(url_id)

    # ---- menu ----

    def toggle_group(self, group_id: str) -> bool:
        if self._disposed or not self._menu.toggle(group_id):
            return False
        self._persist_menu()
        self._emit(LifecycleEventKind.MENU_CHANGED)
        return True

    def select_group(self, group_id: str) -> bool:
        """Top-menu group selector."""
        if self._disposed or not self._menu.select_group(group_id):
            return False
        self._emit(LifecycleEventKind.MENU_CHANGED)
        return True

    def set_narrow(self, narrow: bool) -> None:
        if self._disposed or narrow == self._narrow:
            return
        self._narrow = narrow
        self._sync_menu()
        self._emit(LifecycleEventKind.MENU_CHANGED)

    def set_groups(self, groups: Sequence[UrlGroup]) -> None:
        """Swap in a fresh group list; frames for URLs that vanished are unloaded."""
        if self._disposed:
            return
        self._groups = tuple(groups)
        self._urls = _index_urls(self._groups)
        self._menu.set_groups(self._groups)
        for url_id in sorted(self._loaded - set(self._urls)):
            self._loaded.discard(url_id)
            self._idle.stop(url_id)
            self._long_press.cancel(url_id)
            self._emit(LifecycleEventKind.UNLOADED, url_id)
        if self._active_url_id is not None and self._active_url_id not in self._urls:
            self._active_url_id = None
        self._emit(LifecycleEventKind.GROUPS_CHANGED)

    # ---- internals ----

    def _sync_menu(self) -> None:
        if self._menu.sync_active(self._active_url_id, self._narrow):
            self._persist_menu()
            self._emit(LifecycleEventKind.MENU_CHANGED)

    def _persist_menu(self) -> None:
        if self._store is not None:
            self._store.save_open_groups(self._menu.open_groups)

    def _start_idle(self, url_id: str) -> None:
        url = self._urls.get(url_id)
        if url is not None:
            self._idle.start(url_id, url.idle_timeout_minutes)

    def _record(self, url_id: str) -> None:
        if self._record_last_active_url is None:
            return
        try:
            self._record_last_active_url(url_id)
        except Exception:
            LOG.warning("[FRAME] failed to record last active url %s", url_id, exc_info=True)

    def _on_long_press(self, url_id: str) -> None:
        if url_id in self._loaded:
            LOG.info("[LONG_PRESS] unloading url=%s", url_id)
            self.unload_url(url_id)
        self._emit(LifecycleEventKind.LONG_PRESS_ENDED, url_id)

    def _on_idle_timeout(self, url_id: str) -> None:
        if url_id == self._active_url_id or url_id not in self._loaded:
            return
        LOG.info("[FRAME] idle timeout url=%s", url_id)
        self.unload_url(url_id)
