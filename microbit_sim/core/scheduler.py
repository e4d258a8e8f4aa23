"""Forever-loop scheduler.

Every registered callback runs as its own asyncio task: invoke the callback
to completion (awaiting it if it returns an awaitable), wait the
inter-iteration delay, repeat. Tasks share nothing but the board state they
touch through the bridge, so one slow or broken loop cannot stall another.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Any, Callable, Optional

from microbit_sim.core.handles import CallbackHandle, HandleTable
from microbit_sim.interfaces.clock import IClock

logger = logging.getLogger(__name__)

DEFAULT_FOREVER_INTERVAL_MS = 20


class ForeverScheduler:
    """Runs one independent repeating task per registered callback.

    Per-handle states: Active (iterating, possibly after failures) and
    Destroyed (cancelled or reset). Cancellation stops future iterations
    only; an iteration already running is allowed to finish.
    """

    def __init__(self, clock: IClock, interval_ms: float = DEFAULT_FOREVER_INTERVAL_MS):
        if interval_ms < 0:
            raise ValueError("Forever interval must be >= 0")
        self._clock = clock
        self._interval_ms = interval_ms
        self._handles = HandleTable()
        self._tasks: dict[int, asyncio.Task[None]] = {}

    @property
    def interval_ms(self) -> float:
        return self._interval_ms

    @property
    def active_handles(self) -> list[CallbackHandle]:
        return [handle for handle in self._handles if handle.active]

    def register(self, callback: Callable[[], Any]) -> CallbackHandle:
        """Start repeating callback in its own task.

        Raises:
            RuntimeError: If called without a running event loop.
            TypeError: If callback is not callable.
        """
        loop = asyncio.get_running_loop()
        handle = self._handles.create(callback, kind="forever")
        handle.activate()
        task = loop.create_task(self._run(handle), name=f"forever-{handle.id}")
        self._tasks[handle.id] = task
        task.add_done_callback(lambda _t, handle_id=handle.id: self._tasks.pop(handle_id, None))
        return handle

    def cancel(self, handle: CallbackHandle) -> None:
        self._handles.destroy(handle)

    def cancel_all(self) -> None:
        self._handles.destroy_all()

    async def wait_idle(self, timeout: Optional[float] = None) -> None:
        """Wait for every task whose handle was cancelled to wind down.

        Tasks of still-active handles never finish on their own, so only
        destroyed handles are awaited.
        """
        pending = [
            task for handle_id, task in list(self._tasks.items())
            if self._handles.get(handle_id) is None
        ]
        if pending:
            await asyncio.wait(pending, timeout=timeout)

    async def _run(self, handle: CallbackHandle) -> None:
        await self._clock.sleep(self._interval_ms)
        while handle.active:
            await self._iterate(handle)
            if not handle.active:
                break
            await self._clock.sleep(self._interval_ms)
        logger.debug("Forever loop %d stopped", handle.id)

    async def _iterate(self, handle: CallbackHandle) -> None:
        try:
            result = handle.invoke()
            if inspect.isawaitable(result):
                await result
        except Exception as exc:
            failure = handle.record_failure(exc)
            logger.error("Error in forever loop: %s", failure, exc_info=exc)
