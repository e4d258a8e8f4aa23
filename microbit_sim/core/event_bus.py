"""Synchronous publish/subscribe channel for hardware events."""

from __future__ import annotations

import itertools
import logging
from typing import Callable

from microbit_sim.core.events import Event

logger = logging.getLogger(__name__)

EventCallback = Callable[[Event], None]


class Subscription:
    """Token returned by EventBus.subscribe().

    Calling the token unsubscribes it, so it doubles as the unsubscribe
    function handed to UI collaborators.
    """

    def __init__(self, bus: "EventBus", token_id: int):
        self.bus = bus
        self.id = token_id

    @property
    def active(self) -> bool:
        return self.bus.is_subscribed(self)

    def unsubscribe(self) -> None:
        self.bus.unsubscribe(self)

    def __call__(self) -> None:
        self.unsubscribe()

    def __repr__(self) -> str:
        return f"Subscription(id={self.id}, active={self.active})"


class EventBus:
    """Fan-out of events to zero or more subscribers.

    publish() runs on the caller's execution context and calls every
    subscriber in registration order. A subscriber raising an exception is
    logged and skipped; the remaining subscribers still receive the event.
    """

    def __init__(self) -> None:
        self._subscribers: dict[int, EventCallback] = {}
        self._ids = itertools.count(1)

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def subscribe(self, callback: EventCallback) -> Subscription:
        if not callable(callback):
            raise TypeError("Event subscriber must be callable")
        token = Subscription(self, next(self._ids))
        self._subscribers[token.id] = callback
        return token

    def unsubscribe(self, token: Subscription) -> None:
        if token.bus is self:
            self._subscribers.pop(token.id, None)

    def is_subscribed(self, token: Subscription) -> bool:
        return token.bus is self and token.id in self._subscribers

    def publish(self, event: Event) -> None:
        for token_id, callback in list(self._subscribers.items()):
            try:
                callback(event)
            except Exception:
                logger.exception(
                    "Event subscriber %d failed while handling %s", token_id, event
                )

    def clear(self) -> None:
        self._subscribers.clear()
