"""Clock implementation backed by the asyncio event loop."""

from __future__ import annotations

import asyncio
import time

from microbit_sim.interfaces.clock import IClock


class AsyncioClock(IClock):
    """Wall-clock suspension on the running event loop.

    Negative durations are treated as zero, like a zero-delay timer.
    """

    def now_ms(self) -> float:
        return time.monotonic() * 1000.0

    async def sleep(self, ms: float) -> None:
        await asyncio.sleep(max(0.0, ms) / 1000.0)
