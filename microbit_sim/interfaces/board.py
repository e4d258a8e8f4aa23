"""Board abstraction - behavioral contract.

A Board is one simulated device: hardware state, event stream, the
script-facing bridge and the lifecycle controls an observing UI uses.
Every concrete board must implement this interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from microbit_sim.core.enums import ButtonLike
from microbit_sim.core.event_bus import EventCallback, Subscription
from microbit_sim.core.state import BoardSnapshot

if TYPE_CHECKING:
    from microbit_sim.core.bridge import ScriptBridge
    from microbit_sim.interfaces.clock import IClock


class Board(ABC):
    """Base class for simulated boards.

    Boards are explicitly constructed and caller-owned; independent
    instances never share state.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable board name (e.g., 'micro:bit')."""
        ...

    @property
    @abstractmethod
    def bridge(self) -> ScriptBridge:
        """Capability object handed to the script interpreter."""
        ...

    @property
    @abstractmethod
    def clock(self) -> IClock:
        """Time source for pauses and forever loops."""
        ...

    @abstractmethod
    def subscribe(self, callback: EventCallback) -> Subscription:
        """Observe every event; call the returned token to unsubscribe."""
        ...

    @abstractmethod
    def snapshot(self) -> BoardSnapshot:
        """Immutable copy of pins, LEDs and buttons."""
        ...

    @abstractmethod
    def press_button(self, button: ButtonLike) -> None:
        """Deliver an external button press."""
        ...

    @abstractmethod
    def reset(self) -> None:
        """Reset the entire board."""
        ...

    @abstractmethod
    async def aclose(self) -> None:
        """Stop every script callback and wait for its task to finish."""
        ...
