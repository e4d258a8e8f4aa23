"""Canonical mutable hardware state of a single board.

HardwareState is a pure data holder: validated get/set accessors for the
pins, the LED matrix and the button latches. It never publishes events;
the script bridge pairs every mutation with its event.
"""

from __future__ import annotations

import operator
from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Iterable, Mapping

from microbit_sim.core.enums import Button, ButtonLike
from microbit_sim.core.exceptions import InvalidPinError, OutOfRangeError


@dataclass(frozen=True)
class PinState:
    """Digital and analog value of one pin."""

    digital: int = 0
    analog: int = 0


@dataclass(frozen=True)
class BoardSnapshot:
    """Immutable copy of all hardware state at one point in time.

    leds is indexed ``leds[x][y]``.
    """

    pins: Mapping[str, PinState]
    leds: tuple[tuple[bool, ...], ...]
    buttons: Mapping[str, bool]


class HardwareState:
    """Pins, LED matrix and button latches of one board instance."""

    def __init__(self, pin_ids: Iterable[str], width: int = 5, height: int = 5):
        self._pin_ids = tuple(pin_ids)
        if not self._pin_ids:
            raise ValueError("HardwareState needs at least one pin")
        self._width = width
        self._height = height
        self._pins: dict[str, PinState] = {}
        self._leds: list[list[bool]] = []
        self._buttons: dict[Button, bool] = {}
        self.reset()

    @property
    def pin_ids(self) -> tuple[str, ...]:
        return self._pin_ids

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    # ==========================================================
    # Pins
    # ==========================================================

    def _check_pin(self, pin: str) -> None:
        if not isinstance(pin, str) or pin not in self._pins:
            raise InvalidPinError(pin)

    def set_digital(self, pin: str, value: int) -> None:
        """Overwrite the digital value of a pin.

        Raises:
            InvalidPinError: If the pin is unknown.
        """
        self._check_pin(pin)
        value = operator.index(value)
        self._pins[pin] = replace(self._pins[pin], digital=value)

    def set_analog(self, pin: str, value: int) -> None:
        """Overwrite the analog value of a pin.

        Raises:
            InvalidPinError: If the pin is unknown.
        """
        self._check_pin(pin)
        value = operator.index(value)
        self._pins[pin] = replace(self._pins[pin], analog=value)

    def get_digital(self, pin: str) -> int:
        self._check_pin(pin)
        return self._pins[pin].digital

    def get_analog(self, pin: str) -> int:
        self._check_pin(pin)
        return self._pins[pin].analog

    # ==========================================================
    # LED matrix
    # ==========================================================

    def _check_led(self, x: int, y: int) -> tuple[int, int]:
        x = operator.index(x)
        y = operator.index(y)
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise OutOfRangeError(x, y, self._width, self._height)
        return x, y

    def set_led(self, x: int, y: int, lit: bool) -> None:
        """Light or clear one LED.

        Raises:
            OutOfRangeError: If x or y lies outside the matrix.
            TypeError: If x or y is not an integer.
        """
        x, y = self._check_led(x, y)
        self._leds[x][y] = bool(lit)

    def get_led(self, x: int, y: int) -> bool:
        x, y = self._check_led(x, y)
        return self._leds[x][y]

    def clear_leds(self) -> None:
        self._leds = [[False] * self._height for _ in range(self._width)]

    # ==========================================================
    # Buttons
    # ==========================================================

    def set_button(self, button: ButtonLike, pressed: bool) -> None:
        self._buttons[Button.coerce(button)] = bool(pressed)

    def get_button(self, button: ButtonLike) -> bool:
        return self._buttons[Button.coerce(button)]

    # ==========================================================
    # Lifecycle
    # ==========================================================

    def reset(self) -> None:
        """Return every pin, LED and button latch to its default."""
        self._pins = {pin: PinState() for pin in self._pin_ids}
        self.clear_leds()
        self._buttons = {button: False for button in Button}

    def snapshot(self) -> BoardSnapshot:
        """Return an immutable copy that does not alias live state."""
        return BoardSnapshot(
            pins=MappingProxyType(dict(self._pins)),
            leds=tuple(tuple(column) for column in self._leds),
            buttons=MappingProxyType(
                {button.value: pressed for button, pressed in self._buttons.items()}
            ),
        )
