"""Background idle timers that unload frames left inactive too long."""
from __future__ import annotations

from typing import Callable

from app.services.scheduler import Scheduler, TimerHandle

MS_PER_MINUTE = 60 * 1000


class IdleTimeoutMonitor:
    def __init__(self, scheduler: Scheduler, on_timeout: Callable[[str], None]):
        self._scheduler = scheduler
        self._on_timeout = on_timeout
        self._handles: dict[str, TimerHandle] = {}

    def start(self, url_id: str, minutes: int | None) -> bool:
        """(Re)start the idle countdown. Returns False when the URL has no timeout."""
        self.stop(url_id)
        if not minutes or minutes <= 0:
            return False
        self._handles[url_id] = self._scheduler.call_later(
            minutes * MS_PER_MINUTE, lambda: self._expire(url_id)
        )
        return True

    def stop(self, url_id: str) -> None:
        handle = self._handles.pop(url_id, None)
        if handle is not None:
            handle.cancel()

    def pending(self) -> frozenset[str]:
        return frozenset(self._handles)

    def dispose(self) -> None:
        for handle in self._handles.values():
            handle.cancel()
        self._handles.clear()

    def _expire(self, url_id: str) -> None:
        if self._handles.pop(url_id, None) is None:
            return
        self._on_timeout(url_id)
