"""Event bus for decoupled component communication.

Usage:
    bus = EventBus()

    # Subscribe to events
    def on_greeting(message: str) -> None:
        print(f"Received: {message}")

    subscription = bus.subscribe("greeting", on_greeting)

    # Emit events
    bus.emit("greeting", "hello")

    # Stop listening
    bus.unsubscribe(subscription)

Delivery is synchronous and follows registration order. The set of listeners
for an emission is fixed when ``emit`` starts: listeners added while it runs
are first called on the next ``emit``, listeners removed while it runs still
receive the current payload.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from itertools import count
import logging
from typing import Any, Generic, TypeVar, overload

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")

Listener = Callable[[Any], Any]

_registration_ids = count(1)


@dataclass(frozen=True)
class Topic(Generic[T]):
    """Typed event name.

    ``Topic[str]("chat.message")`` addresses the same listeners as the plain
    string ``"chat.message"`` but lets type checkers match listener
    signatures against the payload type.
    """

    name: str

    def __str__(self) -> str:
        return self.name


EventName = str | Topic[Any]


@dataclass(frozen=True)
class Subscription:
    """Handle returned by :meth:`EventBus.subscribe`."""

    event_name: str
    listener: Listener
    token: int = field(default_factory=lambda: next(_registration_ids))


def _resolve(event_name: EventName) -> str:
    if isinstance(event_name, Topic):
        return event_name.name
    return event_name


class EventBus:
    """Simple event bus for publish/subscribe pattern.

    Enables loose coupling between components by allowing them to
    communicate via named events rather than direct method calls.

    By default a listener that raises stops delivery for that one ``emit``
    and the exception reaches the caller. With ``isolate_errors=True`` the
    failure is logged and the remaining listeners still run.
    """

    def __init__(self, *, isolate_errors: bool = False) -> None:
        self._subscribers: dict[str, list[Subscription]] = {}
        self.isolate_errors = isolate_errors

    @overload
    def subscribe(self, event_name: Topic[T], listener: Callable[[T], Any]) -> Subscription: ...

    @overload
    def subscribe(self, event_name: str, listener: Listener) -> Subscription: ...

    def subscribe(self, event_name: EventName, listener: Listener) -> Subscription:
        """Subscribe to an event.

        Args:
            event_name: Event to listen for (e.g., "eventBusData")
            listener: Callable invoked with the payload on every emit

        Returns:
            Handle that can be passed to :meth:`unsubscribe`.
        """
        name = _resolve(event_name)
        subscription = Subscription(event_name=name, listener=listener)
        self._subscribers.setdefault(name, []).append(subscription)
        LOGGER.debug(
            "Subscribed to event: %s",
            name,
            extra={"event": "bus.subscribed", "event_name": name},
        )
        return subscription

    def unsubscribe(self, subscription: Subscription) -> bool:
        """Remove one registration.

        Returns:
            False when the registration was already gone.
        """
        name = subscription.event_name
        registrations = self._subscribers.get(name)
        if not registrations or subscription not in registrations:
            return False
        registrations.remove(subscription)
        if not registrations:
            del self._subscribers[name]
        LOGGER.debug(
            "Unsubscribed from event: %s",
            name,
            extra={"event": "bus.unsubscribed", "event_name": name},
        )
        return True

    @overload
    def emit(self, event_name: Topic[T], payload: T) -> None: ...

    @overload
    def emit(self, event_name: str, payload: Any) -> None: ...

    def emit(self, event_name: EventName, payload: Any) -> None:
        """Deliver ``payload`` to every listener of ``event_name``.

        Args:
            event_name: Event name
            payload: Passed through to each listener unchanged
        """
        name = _resolve(event_name)
        snapshot = tuple(self._subscribers.get(name, ()))
        for subscription in snapshot:
            if not self.isolate_errors:
                subscription.listener(payload)
                continue
            try:
                subscription.listener(payload)
            except Exception:
                LOGGER.exception(
                    "Event listener failed for %s",
                    name,
                    extra={"event": "bus.listener.failed", "event_name": name},
                )

    def clear(self, event_name: EventName | None = None) -> None:
        """Clear subscribers.

        Args:
            event_name: Specific event to clear, or None for all
        """
        if event_name is None:
            self._subscribers.clear()
        else:
            self._subscribers.pop(_resolve(event_name), None)

    def listener_count(self, event_name: EventName) -> int:
        """Return how many registrations ``event_name`` currently has.

        Args:
            event_name: Event name or topic
        """
        return len(self._subscribers.get(_resolve(event_name), ()))

    def event_names(self) -> list[str]:
        """Return names with at least one listener, in first-subscription order."""
        return [name for name, registrations in self._subscribers.items() if registrations]


# Global event bus instance
event_bus = EventBus()
