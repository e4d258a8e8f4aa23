"""micro:bit board implementation.

Importing this package registers the board as "microbit".
"""

from microbit_sim.core.board import register_board

from .board import MicrobitBoard

register_board("microbit", MicrobitBoard)

__all__ = ["MicrobitBoard"]
