"""Named events used by the demo application."""

from __future__ import annotations

from .bus import Topic

EVENT_BUS_DATA: Topic[str] = Topic("eventBusData")

DEFAULT_MESSAGE = "Hello from Event Bus!"
