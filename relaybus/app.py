"""Textual demo that drives an :class:`EventBus` from a button."""

from __future__ import annotations

import logging
from typing import Any

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.widgets import Button, Footer, Header, Label, Log

from .bus import EventBus, Subscription
from .config import load_config

LOGGER = logging.getLogger(__name__)


class EventBusDemoApp(App[None]):
    """Subscribe on mount, emit on button press."""

    CSS = """
    #controls {
        height: auto;
        padding: 1;
    }
    #controls Button {
        margin-right: 2;
    }
    #received_log {
        border: round $accent;
        height: 1fr;
    }
    """

    BINDINGS = [
        Binding("e", "emit_event", "Emit event"),
        Binding("d", "toggle_listener", "Connect/disconnect"),
        Binding("q", "quit", "Quit"),
    ]

    def __init__(
        self,
        bus: EventBus | None = None,
        config: dict[str, dict[str, Any]] | None = None,
    ) -> None:
        super().__init__()
        self.config = config or load_config()
        self.bus = (
            bus
            if bus is not None
            else EventBus(isolate_errors=bool(self.config["bus"]["isolate_errors"]))
        )
        self.event_name: str = self.config["demo"]["event_name"]
        self.message: str = self.config["demo"]["message"]
        self.received: list[Any] = []
        self._subscription: Subscription | None = None
        self.title = self.config["app"]["title"]

    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical():
            with Horizontal(id="controls"):
                yield Button("Emit Event", id="emit_button", variant="primary")
                yield Button("Disconnect", id="toggle_button")
            yield Label(f"Listening on: {self.event_name!r}", id="listener_status")
            yield Log(id="received_log")
        yield Footer()

    def on_mount(self) -> None:
        self._connect()

    def on_unmount(self) -> None:
        if self._subscription is not None:
            self.bus.unsubscribe(self._subscription)
            self._subscription = None

    def _on_event_bus_data(self, data: Any) -> None:
        LOGGER.info(
            "EventBus Data Received: %s",
            data,
            extra={"event": "demo.received", "event_name": self.event_name},
        )
        self.received.append(data)
        self.query_one("#received_log", Log).write_line(
            f"EventBus Data Received: {data}"
        )

    def _connect(self) -> None:
        if self._subscription is not None:
            return
        self._subscription = self.bus.subscribe(self.event_name, self._on_event_bus_data)
        self._refresh_status()

    def _disconnect(self) -> None:
        if self._subscription is None:
            return
        self.bus.unsubscribe(self._subscription)
        self._subscription = None
        self._refresh_status()

    def _refresh_status(self) -> None:
        connected = self._subscription is not None
        state = "Listening on" if connected else "Disconnected from"
        self.query_one("#listener_status", Label).update(f"{state}: {self.event_name!r}")
        self.query_one("#toggle_button", Button).label = (
            "Disconnect" if connected else "Connect"
        )

    @property
    def is_listening(self) -> bool:
        return self._subscription is not None

    def action_emit_event(self) -> None:
        self.bus.emit(self.event_name, self.message)

    def action_toggle_listener(self) -> None:
        if self._subscription is None:
            self._connect()
        else:
            self._disconnect()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "emit_button":
            self.action_emit_event()
        elif event.button.id == "toggle_button":
            self.action_toggle_listener()
