"""Capability surface handed to the embedded script interpreter.

Every mutating call updates HardwareState and then publishes the matching
event, in one step with no suspension point in between. Only pause() and
show_string() suspend, and only the calling task.
"""

from __future__ import annotations

import logging
from types import SimpleNamespace
from typing import Any, Callable

from microbit_sim.core.buttons import ButtonDispatcher
from microbit_sim.core.enums import Button, ButtonLike, PinKind
from microbit_sim.core.event_bus import EventBus
from microbit_sim.core.events import LedChange, PinChange, Reset
from microbit_sim.core.handles import CallbackHandle
from microbit_sim.core.scheduler import ForeverScheduler
from microbit_sim.core.state import HardwareState
from microbit_sim.core.text_scroller import TextScroller
from microbit_sim.interfaces.clock import IClock

logger = logging.getLogger(__name__)

DEFAULT_SCROLL_INTERVAL_MS = 150


class ScriptBridge:
    """Pin, LED, button and timing operations available to scripts."""

    def __init__(
        self,
        state: HardwareState,
        bus: EventBus,
        clock: IClock,
        scheduler: ForeverScheduler,
        buttons: ButtonDispatcher,
        scroll_interval_ms: float = DEFAULT_SCROLL_INTERVAL_MS,
    ):
        self._state = state
        self._bus = bus
        self._clock = clock
        self._scheduler = scheduler
        self._buttons = buttons
        self._scroll_interval_ms = scroll_interval_ms
        self._scroller = TextScroller(self, clock, width=state.width, height=state.height)

    # ==========================================================
    # Pins
    # ==========================================================

    def digital_write(self, pin: str, value: int) -> None:
        self._state.set_digital(pin, value)
        self._bus.publish(PinChange(pin, self._state.get_digital(pin), PinKind.DIGITAL))

    def digital_read(self, pin: str) -> int:
        return self._state.get_digital(pin)

    def analog_write(self, pin: str, value: int) -> None:
        # Analog writes are not observed by the UI, so no event.
        self._state.set_analog(pin, value)

    def analog_read(self, pin: str) -> int:
        return self._state.get_analog(pin)

    # ==========================================================
    # LED matrix
    # ==========================================================

    def plot(self, x: int, y: int) -> None:
        self._state.set_led(x, y, True)
        self._bus.publish(LedChange(x, y, 1))

    def unplot(self, x: int, y: int) -> None:
        self._state.set_led(x, y, False)
        self._bus.publish(LedChange(x, y, 0))

    def point(self, x: int, y: int) -> bool:
        return self._state.get_led(x, y)

    def clear_screen(self) -> None:
        """Unplot every LED, one event per cell."""
        for x in range(self._state.width):
            for y in range(self._state.height):
                self.unplot(x, y)

    # ==========================================================
    # Input
    # ==========================================================

    def on_button_pressed(self, button: ButtonLike, handler: Callable[[], Any]) -> CallbackHandle:
        return self._buttons.register(button, handler)

    def button_is_pressed(self, button: ButtonLike) -> bool:
        return self._buttons.is_pressed(button)

    def clear_button_handlers(self) -> None:
        self._buttons.clear()

    # ==========================================================
    # Basic
    # ==========================================================

    async def show_string(self, text: str, interval: float | None = None) -> None:
        """Scroll text across the matrix; returns once it has left the display."""
        if interval is None:
            interval = self._scroll_interval_ms
        await self._scroller.scroll(str(text), interval)

    def forever(self, callback: Callable[[], Any]) -> CallbackHandle:
        return self._scheduler.register(callback)

    async def pause(self, ms: float) -> None:
        await self._clock.sleep(ms)

    def reset(self) -> None:
        """Cancel every script callback, zero all state and emit one Reset."""
        self._scheduler.cancel_all()
        self._buttons.reset()
        self._state.reset()
        self._bus.publish(Reset())
        logger.info("Board state reset")

    # ==========================================================
    # Interpreter module
    # ==========================================================

    def python_module(self) -> dict[str, Any]:
        """Build the namespaces the interpreter exposes to user scripts."""
        return {
            "pins": SimpleNamespace(
                digital_write_pin=self.digital_write,
                digital_read_pin=self.digital_read,
                analog_write_pin=self.analog_write,
                read_analog_pin=self.analog_read,
            ),
            "led": SimpleNamespace(
                plot=self.plot,
                unplot=self.unplot,
                point=self.point,
            ),
            "input": SimpleNamespace(
                on_button_pressed=self.on_button_pressed,
                button_is_pressed=self.button_is_pressed,
                _clear=self.clear_button_handlers,
            ),
            "basic": SimpleNamespace(
                show_string=self.show_string,
                forever=self.forever,
                pause=self.pause,
                clear_screen=self.clear_screen,
                reset=self.reset,
            ),
            "Button": Button,
            "DigitalPin": SimpleNamespace(**{pin: pin for pin in self._state.pin_ids}),
        }
