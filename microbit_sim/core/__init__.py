"""Core modules for the simulator.

Board-agnostic building blocks:
- state: validated pin/LED/button storage
- event_bus: synchronous event fan-out
- handles: owned handles for script callbacks
- scheduler: forever-loop tasks
- buttons: button press dispatch
- text_scroller / glyphs: scrolling text on the LED matrix
- bridge: the surface handed to the script interpreter
- board: board registry and factory (Board ABC is in interfaces)
"""

from microbit_sim.core.board import (
    BoardRegistry,
    create_board,
    list_available_boards,
    open_board,
)
from microbit_sim.core.bridge import ScriptBridge
from microbit_sim.core.buttons import ButtonDispatcher
from microbit_sim.core.clock import AsyncioClock
from microbit_sim.core.event_bus import EventBus, Subscription
from microbit_sim.core.handles import CallbackHandle, HandleState, HandleTable
from microbit_sim.core.scheduler import ForeverScheduler
from microbit_sim.core.state import BoardSnapshot, HardwareState, PinState
from microbit_sim.core.text_scroller import TextScroller, build_scroll_pattern

__all__ = [
    "BoardRegistry",
    "create_board",
    "list_available_boards",
    "open_board",
    "ScriptBridge",
    "ButtonDispatcher",
    "AsyncioClock",
    "EventBus",
    "Subscription",
    "CallbackHandle",
    "HandleState",
    "HandleTable",
    "ForeverScheduler",
    "BoardSnapshot",
    "HardwareState",
    "PinState",
    "TextScroller",
    "build_scroll_pattern",
]
