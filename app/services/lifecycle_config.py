"""Timing and layout thresholds for the frame lifecycle manager."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass

DEFAULT_LONG_PRESS_MS = 800
DEFAULT_CLICK_SUPPRESS_MS = 500
DEFAULT_NARROW_BREAKPOINT_PX = 900
DEFAULT_PROGRESS_REFRESH_MS = 16


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logging.warning("Ignoring non-integer %s=%r", name, raw)
        return default
    if value <= 0:
        logging.warning("Ignoring non-positive %s=%r", name, raw)
        return default
    return value


@dataclass(frozen=True)
class LifecycleConfig:
    long_press_ms: int = DEFAULT_LONG_PRESS_MS
    click_suppress_ms: int = DEFAULT_CLICK_SUPPRESS_MS
    narrow_breakpoint_px: int = DEFAULT_NARROW_BREAKPOINT_PX
    progress_refresh_ms: int = DEFAULT_PROGRESS_REFRESH_MS

    @classmethod
    def from_env(cls) -> "LifecycleConfig":
        return cls(
            long_press_ms=_env_int("DASHBOARD_LONG_PRESS_MS", DEFAULT_LONG_PRESS_MS),
            click_suppress_ms=_env_int("DASHBOARD_CLICK_SUPPRESS_MS", DEFAULT_CLICK_SUPPRESS_MS),
            narrow_breakpoint_px=_env_int("DASHBOARD_NARROW_BREAKPOINT_PX", DEFAULT_NARROW_BREAKPOINT_PX),
        )

    def is_narrow(self, width_px: int) -> bool:
        return width_px < self.narrow_breakpoint_px
