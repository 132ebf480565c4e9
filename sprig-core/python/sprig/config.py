"""
Render configuration.

Property naming conventions and idle-time scheduling budgets live here so a
session can be tuned without touching the phases themselves.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional


def _read_ms(environ: Mapping[str, str], name: str, default: float) -> float:
    """Read a millisecond value from the environment, returning seconds."""
    raw = environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number of milliseconds, got {raw!r}")
    if value < 0:
        raise ValueError(f"{name} must not be negative, got {raw!r}")
    return value / 1000.0


@dataclass(frozen=True)
class RenderConfig:
    """
    Settings shared by the work loop and the commit phase.

    Attributes:
        event_prefix: Property names starting with this are event bindings.
        style_prop: Property name carrying an inline style mapping.
        children_prop: Reserved property name holding child elements.
        time_slice: Seconds of work allowed per idle slot.
        idle_interval: Seconds between idle callbacks on an asyncio loop.
    """
    event_prefix: str = "on"
    style_prop: str = "style"
    children_prop: str = "children"
    time_slice: float = 0.005
    idle_interval: float = 0.05

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "RenderConfig":
        """
        Build a config from ``SPRIG_TIME_SLICE_MS`` and ``SPRIG_IDLE_INTERVAL_MS``.

        Unset variables keep their defaults.
        """
        if environ is None:
            environ = os.environ
        defaults = cls()
        return cls(
            time_slice=_read_ms(environ, "SPRIG_TIME_SLICE_MS", defaults.time_slice),
            idle_interval=_read_ms(environ, "SPRIG_IDLE_INTERVAL_MS", defaults.idle_interval),
        )


DEFAULT_CONFIG = RenderConfig()
