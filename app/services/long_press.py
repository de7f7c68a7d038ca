"""Long-press gesture tracking with post-gesture click suppression.

One press per key (url id). A press that outlives the threshold fires the
long-press callback once and opens a click-suppression window; the release
that ends such a gesture also arms a one-shot click swallow so the click some
platforms synthesize after a long touch is not treated as a selection.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from app.services.lifecycle_config import DEFAULT_CLICK_SUPPRESS_MS, DEFAULT_LONG_PRESS_MS
from app.services.scheduler import Scheduler, TimerHandle

LOG = logging.getLogger(__name__)


@dataclass
class _Press:
    started_ms: float
    handle: TimerHandle


class LongPressTracker:
    def __init__(
        self,
        scheduler: Scheduler,
        on_long_press: Callable[[str], None],
        threshold_ms: int = DEFAULT_LONG_PRESS_MS,
        suppress_ms: int = DEFAULT_CLICK_SUPPRESS_MS,
    ):
        self._scheduler = scheduler
        self._on_long_press = on_long_press
        self.threshold_ms = threshold_ms
        self.suppress_ms = suppress_ms
        self._presses: dict[str, _Press] = {}
        self._fired: set[str] = set()
        self._suppress_handle: TimerHandle | None = None
        self._swallow_next_click = False

    def press(self, key: str) -> None:
        """Start (or restart) the threshold timer for key."""
        self.cancel(key)
        self.clear_swallow()
        handle = self._scheduler.call_later(self.threshold_ms, lambda: self._expire(key))
        self._presses[key] = _Press(self._scheduler.now_ms(), handle)

    def clear_swallow(self) -> None:
        """Drop a pending one-shot click swallow."""
        self._swallow_next_click = False

    def release(self, key: str) -> bool:
        """End a gesture. Returns True when the gesture completed as a long press."""
        press = self._presses.pop(key, None)
        if press is not None:
            press.handle.cancel()
            return False
        if key in self._fired:
            self._fired.discard(key)
            self._swallow_next_click = True
            return True
        return False

    def cancel(self, key: str) -> bool:
        """Abort a gesture without a click (pointer leave, touch cancel)."""
        self._fired.discard(key)
        press = self._presses.pop(key, None)
        if press is None:
            return False
        press.handle.cancel()
        return True

    def is_pressing(self, key: str) -> bool:
        return key in self._presses

    def progress(self, key: str) -> float:
        press = self._presses.get(key)
        if press is None:
            return 0.0
        elapsed = self._scheduler.now_ms() - press.started_ms
        return min(1.0, max(0.0, elapsed / self.threshold_ms))

    @property
    def suppressing(self) -> bool:
        return self._suppress_handle is not None

    def consume_click(self) -> bool:
        """Return True when the incoming click must be swallowed."""
        if self._swallow_next_click:
            self._swallow_next_click = False
            return True
        return self.suppressing

    def dispose(self) -> None:
        for press in self._presses.values():
            press.handle.cancel()
        self._presses.clear()
        self._fired.clear()
        self._close_suppression_window()
        self._swallow_next_click = False

    def _expire(self, key: str) -> None:
        if self._presses.pop(key, None) is None:
            return
        self._fired.add(key)
        self._open_suppression_window()
        LOG.debug("[LONG_PRESS] fired key=%s", key)
        self._on_long_press(key)

    def _open_suppression_window(self) -> None:
        if self._suppress_handle is not None:
            self._suppress_handle.cancel()
        self._suppress_handle = self._scheduler.call_later(self.suppress_ms, self._close_suppression_window)

    def _close_suppression_window(self) -> None:
        if self._suppress_handle is not None:
            self._suppress_handle.cancel()
        self._suppress_handle = None
