"""micro:bit board implementation.

Wires together:
- HardwareState (21 pins, 5x5 LED matrix, buttons A/B)
- EventBus for observers
- ForeverScheduler and ButtonDispatcher for script callbacks
- ScriptBridge, the surface handed to the interpreter
"""

from __future__ import annotations

from typing import Any, Optional

from microbit_sim.core.bridge import ScriptBridge
from microbit_sim.core.buttons import ButtonDispatcher
from microbit_sim.core.clock import AsyncioClock
from microbit_sim.core.enums import ButtonLike
from microbit_sim.core.event_bus import EventBus, EventCallback, Subscription
from microbit_sim.core.scheduler import ForeverScheduler
from microbit_sim.core.state import BoardSnapshot, HardwareState
from microbit_sim.interfaces.board import Board
from microbit_sim.interfaces.clock import IClock
from microbit_sim.utils.config_loader import BoardConfig, load_config


class MicrobitBoard(Board):
    """BBC micro:bit style board driven by user scripts."""

    def __init__(
        self,
        clock: Optional[IClock] = None,
        config: Optional[BoardConfig] = None,
        config_path: Optional[str] = None,
        **_kwargs: Any,
    ):
        # Bundled microbit_sim/microbit/config.yaml unless a config is given
        if config is None:
            config = load_config("microbit", path=config_path)
        self.config = config

        self._clock = clock or AsyncioClock()
        self._state = HardwareState(
            config.pins.pin_ids,
            width=config.display.width,
            height=config.display.height,
        )
        self._events = EventBus()
        self._scheduler = ForeverScheduler(
            self._clock, interval_ms=config.timing.forever_interval_ms
        )
        self._buttons = ButtonDispatcher(self._state, self._events)
        self._bridge = ScriptBridge(
            self._state,
            self._events,
            self._clock,
            self._scheduler,
            self._buttons,
            scroll_interval_ms=config.timing.scroll_interval_ms,
        )

    @property
    def name(self) -> str:
        return "micro:bit"

    @property
    def bridge(self) -> ScriptBridge:
        return self._bridge

    @property
    def clock(self) -> IClock:
        return self._clock

    @property
    def state(self) -> HardwareState:
        return self._state

    @property
    def events(self) -> EventBus:
        return self._events

    @property
    def scheduler(self) -> ForeverScheduler:
        return self._scheduler

    @property
    def buttons(self) -> ButtonDispatcher:
        return self._buttons

    def subscribe(self, callback: EventCallback) -> Subscription:
        return self._events.subscribe(callback)

    def snapshot(self) -> BoardSnapshot:
        return self._state.snapshot()

    def press_button(self, button: ButtonLike) -> None:
        self._buttons.press(button)

    def python_module(self) -> dict[str, Any]:
        return self._bridge.python_module()

    def reset(self) -> None:
        """Reset the entire board."""
        self._bridge.reset()

    async def aclose(self) -> None:
        """Destroy every script callback and wait for the loops to stop."""
        self._scheduler.cancel_all()
        self._buttons.clear()
        await self._scheduler.wait_idle()
        await self._buttons.wait_idle()
        self._events.clear()
