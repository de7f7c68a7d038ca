"""QTimer-backed scheduler used by the running application."""
from __future__ import annotations

import time
from typing import Callable

from PyQt6.QtCore import QObject, QTimer


class QtTimerHandle:
    def __init__(self, timer: QTimer):
        self._timer = timer

    def cancel(self) -> None:
        if self._timer is None:
            return
        self._timer.stop()
        self._timer.deleteLater()
        self._timer = None


class QtScheduler:
    def __init__(self, parent: QObject | None = None):
        self._parent = parent

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> QtTimerHandle:
        timer = QTimer(self._parent)
        timer.setSingleShot(True)
        handle = QtTimerHandle(timer)

        def fire():
            handle.cancel()
            callback()

        timer.timeout.connect(fire)
        timer.start(max(0, int(delay_ms)))
        return handle

    def now_ms(self) -> float:
        return time.monotonic() * 1000.0
