"""Push-button press dispatch."""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any, Callable, Optional

from microbit_sim.core.enums import Button, ButtonLike
from microbit_sim.core.event_bus import EventBus
from microbit_sim.core.events import ButtonPress
from microbit_sim.core.handles import CallbackHandle, HandleTable
from microbit_sim.core.state import HardwareState

logger = logging.getLogger(__name__)


class ButtonDispatcher:
    """Latches button presses and calls the handlers registered for them.

    Handlers run synchronously in registration order. A failing handler is
    logged and recorded on its handle; it never stops the others and press()
    itself never raises for it. A handler that returns an awaitable has it
    scheduled on the running loop with the same isolation.
    """

    def __init__(self, state: HardwareState, bus: EventBus):
        self._state = state
        self._bus = bus
        self._table = HandleTable()
        self._handlers: dict[Button, list[CallbackHandle]] = {button: [] for button in Button}
        self._background: set[asyncio.Future[Any]] = set()

    def register(self, button: ButtonLike, handler: Callable[[], Any]) -> CallbackHandle:
        button = Button.coerce(button)
        handle = self._table.create(handler, kind=f"button {button.value}")
        handle.activate()
        self._handlers[button].append(handle)
        return handle

    def handlers(self, button: ButtonLike) -> list[CallbackHandle]:
        return [h for h in self._handlers[Button.coerce(button)] if h.active]

    def unregister(self, handle: CallbackHandle) -> None:
        for handles in self._handlers.values():
            if handle in handles:
                handles.remove(handle)
        self._table.destroy(handle)

    def is_pressed(self, button: ButtonLike) -> bool:
        return self._state.get_button(button)

    def press(self, button: ButtonLike) -> None:
        button = Button.coerce(button)
        self._state.set_button(button, True)
        self._bus.publish(ButtonPress(button))

        for handle in list(self._handlers[button]):
            if handle.active:
                self._call(handle)

    def _call(self, handle: CallbackHandle) -> None:
        try:
            result = handle.invoke()
        except Exception as exc:
            self._log_failure(handle, exc)
            return

        if not inspect.isawaitable(result):
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError as exc:
            if inspect.iscoroutine(result):
                result.close()
            self._log_failure(handle, exc)
            return
        future = asyncio.ensure_future(result, loop=loop)
        self._background.add(future)
        future.add_done_callback(lambda f, h=handle: self._finish(h, f))

    async def wait_idle(self, timeout: Optional[float] = None) -> None:
        """Wait for async handlers that are still running."""
        if self._background:
            await asyncio.wait(list(self._background), timeout=timeout)

    def _finish(self, handle: CallbackHandle, future: asyncio.Future[Any]) -> None:
        self._background.discard(future)
        if future.cancelled():
            return
        exc = future.exception()
        if isinstance(exc, Exception):
            self._log_failure(handle, exc)

    def _log_failure(self, handle: CallbackHandle, exc: Exception) -> None:
        failure = handle.record_failure(exc)
        logger.error("Error in button handler: %s", failure, exc_info=exc)

    def clear(self) -> None:
        """Destroy every registered handler."""
        self._table.destroy_all()
        for handles in self._handlers.values():
            handles.clear()

    def reset(self) -> None:
        """Destroy every handler and release both latches."""
        self.clear()
        for button in Button:
            self._state.set_button(button, False)
