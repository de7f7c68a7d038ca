"""Timer scheduling seam between the frame lifecycle core and an event loop."""
from __future__ import annotations

from typing import Callable, Protocol


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Single-threaded timer source. Callbacks run on the event loop thread."""

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> TimerHandle: ...

    def now_ms(self) -> float: ...
