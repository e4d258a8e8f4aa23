"""micro:bit board simulator.

Emulates a small microcontroller board (21 pins, a 5x5 LED matrix, two
push-buttons) driven by user scripts running in an external interpreter,
and republishes every state change as a typed event for an observing UI.

Architecture:
- HardwareState holds pins, LEDs and button latches
- EventBus fans events out to observers synchronously
- ScriptBridge is the capability surface handed to the interpreter
- ForeverScheduler runs one asyncio task per forever loop
- ButtonDispatcher latches presses and calls handlers
- TextScroller scrolls strings across the matrix

Getting started:
    from microbit_sim import create_board

    board = create_board("microbit")
    board.subscribe(print)
    board.bridge.plot(2, 2)
"""

# Core abstractions
from microbit_sim.interfaces.board import Board
from microbit_sim.core.board import (
    create_board,
    list_available_boards,
    open_board,
    verify_boards_registered,
)
from microbit_sim.core.bridge import ScriptBridge
from microbit_sim.core.buttons import ButtonDispatcher
from microbit_sim.core.clock import AsyncioClock
from microbit_sim.core.enums import Button, PinKind
from microbit_sim.core.event_bus import EventBus, Subscription
from microbit_sim.core.events import ButtonPress, Event, LedChange, PinChange, Reset
from microbit_sim.core.exceptions import (
    CallbackFailure,
    InvalidPinError,
    OutOfRangeError,
    SimulatorError,
)
from microbit_sim.core.handles import CallbackHandle
from microbit_sim.core.scheduler import ForeverScheduler
from microbit_sim.core.state import BoardSnapshot, HardwareState, PinState
from microbit_sim.core.text_scroller import TextScroller, build_scroll_pattern

# Board implementations (auto-registers when imported)
from microbit_sim.microbit import MicrobitBoard

__all__ = [
    # Core
    "Board",
    "ScriptBridge",
    "ButtonDispatcher",
    "AsyncioClock",
    "EventBus",
    "Subscription",
    "ForeverScheduler",
    "HardwareState",
    "TextScroller",
    "build_scroll_pattern",
    # Data
    "Button",
    "PinKind",
    "PinState",
    "BoardSnapshot",
    "CallbackHandle",
    # Events
    "Event",
    "PinChange",
    "LedChange",
    "ButtonPress",
    "Reset",
    # Errors
    "SimulatorError",
    "InvalidPinError",
    "OutOfRangeError",
    "CallbackFailure",
    # Board creation
    "create_board",
    "list_available_boards",
    "open_board",
    "verify_boards_registered",
    # Concrete boards
    "MicrobitBoard",
]
