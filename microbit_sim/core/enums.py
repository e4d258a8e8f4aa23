"""Board enumeration types."""

from __future__ import annotations

from enum import Enum
from typing import Union


class PinKind(str, Enum):
    """Which value of a pin a change refers to."""

    DIGITAL = "digital"
    """Digital level written with digital_write_pin."""

    ANALOG = "analog"
    """Analog level written with analog_write_pin."""


class Button(str, Enum):
    """Push-button identifiers.

    Members compare equal to their names ("A", "B") so external
    collaborators can match them without importing this enum.
    """

    A = "A"
    """Left push-button."""

    B = "B"
    """Right push-button."""

    @classmethod
    def coerce(cls, button: Union["Button", str]) -> "Button":
        """Return the Button for an enum member or its name.

        Raises:
            ValueError: If the name is not a known button.
        """
        if isinstance(button, cls):
            return button
        return cls(str(button))

    def __str__(self) -> str:
        return self.value


ButtonLike = Union[Button, str]
