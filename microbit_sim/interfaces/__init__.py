"""Interface abstractions for the simulator.

Defines behavioral contracts that all implementations must satisfy:
- Board: simulated board interface (abstract base class)
- IClock: time source for script suspension points
"""

from microbit_sim.interfaces.board import Board
from microbit_sim.interfaces.clock import IClock

__all__ = ["Board", "IClock"]
