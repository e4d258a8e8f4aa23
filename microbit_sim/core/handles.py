"""Owned handles for callbacks supplied by the embedded script.

The host keeps every script callback in a HandleTable keyed by a generated
id. Destroying a handle removes the table entry and makes the handle inert,
so nothing relies on garbage collection of a reference that crosses the
script boundary.
"""

from __future__ import annotations

import itertools
import logging
from enum import Enum
from typing import Any, Callable, Iterator, Optional

from microbit_sim.core.exceptions import CallbackFailure, HandleDestroyedError

logger = logging.getLogger(__name__)


class HandleState(Enum):
    """Lifecycle of a CallbackHandle."""

    REGISTERED = "registered"
    ACTIVE = "active"
    DESTROYED = "destroyed"


class CallbackHandle:
    """Opaque handle wrapping one script callback.

    Attributes:
        id: Table key, unique within the owning HandleTable.
        kind: Owner label used in logs ("forever", "button A", ...).
        failure_count: Number of invocations that raised.
        last_failure: Most recent failure, or None.
    """

    def __init__(self, handle_id: int, callback: Callable[[], Any], kind: str):
        self.id = handle_id
        self.kind = kind
        self._callback: Optional[Callable[[], Any]] = callback
        self._state = HandleState.REGISTERED
        self.failure_count = 0
        self.last_failure: Optional[CallbackFailure] = None

    @property
    def state(self) -> HandleState:
        return self._state

    @property
    def active(self) -> bool:
        return self._state is HandleState.ACTIVE

    @property
    def destroyed(self) -> bool:
        return self._state is HandleState.DESTROYED

    def activate(self) -> None:
        if self._state is HandleState.DESTROYED:
            raise HandleDestroyedError(self.id)
        self._state = HandleState.ACTIVE

    def invoke(self) -> Any:
        """Call the wrapped callback and return its result.

        Raises:
            HandleDestroyedError: If the handle has been destroyed.
        """
        if self._callback is None:
            raise HandleDestroyedError(self.id)
        return self._callback()

    def record_failure(self, exc: BaseException) -> CallbackFailure:
        failure = CallbackFailure(self.id, self.kind, exc)
        self.failure_count += 1
        self.last_failure = failure
        return failure

    def _mark_destroyed(self) -> None:
        self._state = HandleState.DESTROYED
        self._callback = None

    def __repr__(self) -> str:
        return f"CallbackHandle(id={self.id}, kind={self.kind!r}, state={self._state.value})"


class HandleTable:
    """Registry of live handles owned by one scheduler or dispatcher."""

    def __init__(self) -> None:
        self._handles: dict[int, CallbackHandle] = {}
        self._ids = itertools.count(1)

    def create(self, callback: Callable[[], Any], kind: str) -> CallbackHandle:
        if not callable(callback):
            raise TypeError(f"{kind} callback must be callable")
        handle = CallbackHandle(next(self._ids), callback, kind)
        self._handles[handle.id] = handle
        logger.debug("Registered %r", handle)
        return handle

    def get(self, handle_id: int) -> Optional[CallbackHandle]:
        return self._handles.get(handle_id)

    def destroy(self, handle: CallbackHandle) -> None:
        """Remove the handle from the table and make it inert. Idempotent."""
        if self._handles.pop(handle.id, None) is handle:
            logger.debug("Destroyed %r", handle)
        handle._mark_destroyed()

    def destroy_all(self) -> None:
        for handle in list(self._handles.values()):
            self.destroy(handle)

    def __contains__(self, handle: object) -> bool:
        return isinstance(handle, CallbackHandle) and self._handles.get(handle.id) is handle

    def __iter__(self) -> Iterator[CallbackHandle]:
        return iter(list(self._handles.values()))

    def __len__(self) -> int:
        return len(self._handles)
