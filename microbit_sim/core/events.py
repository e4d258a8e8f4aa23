"""Typed events published on every observable hardware state change."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Literal, Union

from microbit_sim.core.enums import Button, PinKind


@dataclass(frozen=True)
class PinChange:
    """A pin value was written."""

    type: ClassVar[str] = "pin-change"

    pin: str
    value: int
    kind: PinKind = PinKind.DIGITAL

    def as_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "pin": self.pin,
            "value": self.value,
            "pinType": self.kind.value,
        }


@dataclass(frozen=True)
class LedChange:
    """An LED in the matrix was plotted (1) or unplotted (0)."""

    type: ClassVar[str] = "led-change"

    x: int
    y: int
    value: Literal[0, 1]

    def as_dict(self) -> dict[str, Any]:
        return {"type": self.type, "x": self.x, "y": self.y, "value": self.value}


@dataclass(frozen=True)
class ButtonPress:
    """A push-button was pressed."""

    type: ClassVar[str] = "button-press"

    button: Button

    def as_dict(self) -> dict[str, Any]:
        return {"type": self.type, "button": self.button.value}


@dataclass(frozen=True)
class Reset:
    """The whole board was reset to power-on state."""

    type: ClassVar[str] = "reset"

    def as_dict(self) -> dict[str, Any]:
        return {"type": self.type}


Event = Union[PinChange, LedChange, ButtonPress, Reset]
