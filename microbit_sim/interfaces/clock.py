"""Clock interface: the only source of suspension for script tasks."""

from __future__ import annotations

from abc import ABC, abstractmethod


class IClock(ABC):
    """Time source used by pause(), show_string() and forever loops."""

    @abstractmethod
    def now_ms(self) -> float:
        """Monotonic time in milliseconds."""
        ...

    @abstractmethod
    async def sleep(self, ms: float) -> None:
        """Suspend the calling task for ms milliseconds.

        Only the calling task is suspended; other tasks keep running.
        """
        ...
