"""In-process publish/subscribe event bus."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .bus import EventBus, Subscription, Topic, event_bus
from .exceptions import ConfigValidationError, RelayBusError

if TYPE_CHECKING:
    from .app import EventBusDemoApp
    from .config import ensure_config_dir, load_config

__all__ = [
    "ConfigValidationError",
    "EventBus",
    "EventBusDemoApp",
    "RelayBusError",
    "Subscription",
    "Topic",
    "event_bus",
    "ensure_config_dir",
    "load_config",
]


def __getattr__(name: str) -> Any:
    """Lazily import symbols to keep the UI and config dependencies optional at import time."""
    if name in {"ensure_config_dir", "load_config"}:
        from .config import ensure_config_dir, load_config

        return {"ensure_config_dir": ensure_config_dir, "load_config": load_config}[name]
    if name == "EventBusDemoApp":
        from .app import EventBusDemoApp

        return EventBusDemoApp
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
