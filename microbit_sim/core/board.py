"""Board registry.

A registered name is both the key for the board class and the name of its
bundled config directory (``microbit_sim/<name>/config.yaml``). Boards
created by name are built from the shared, validated config cache, yet
every call returns a new board with its own state, bus and tasks.

Board packages call register_board() from their ``__init__.py``, so
importing the package is enough to make the board creatable by name.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any, AsyncIterator, Type

from microbit_sim.utils import config_loader

if TYPE_CHECKING:
    from microbit_sim.interfaces.board import Board

logger = logging.getLogger(__name__)


class BoardRegistry:
    """Board classes keyed by name.

    Registration happens at import time, before any board is created, so
    the registry is not locked.
    """

    def __init__(self) -> None:
        self._boards: dict[str, Type[Board]] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._boards

    def register(self, name: str, board_class: Type[Board]) -> None:
        if not isinstance(board_class, type):
            raise TypeError(f"Board '{name}' must be registered with a class, got {board_class!r}")
        if name in self._boards:
            taken_by = self._boards[name].__name__
            raise ValueError(f"Board name '{name}' is already taken by {taken_by}")
        self._boards[name] = board_class
        logger.debug("Registered board %r as %s", name, board_class.__name__)

    def board_class(self, name: str) -> Type[Board]:
        try:
            return self._boards[name]
        except KeyError:
            known = ", ".join(self.names()) or "none"
            raise ValueError(f"No board named '{name}' (registered: {known})") from None

    def names(self) -> list[str]:
        return sorted(self._boards)

    def create(self, name: str, **kwargs: Any) -> Board:
        """Build a new board by name.

        Unless the caller passes ``config`` or ``config_path``, the board
        receives the cached config loaded from its bundled YAML file.

        Raises:
            ValueError: If no board is registered under name.
            ConfigurationError: If the bundled config is invalid.
        """
        board_class = self.board_class(name)
        if kwargs.get("config") is None and kwargs.get("config_path") is None:
            kwargs["config"] = config_loader.get_config(name)
        logger.debug("Creating board %r", name)
        return board_class(**kwargs)


_REGISTRY = BoardRegistry()


def register_board(name: str, board_class: Type[Board]) -> None:
    _REGISTRY.register(name, board_class)


def get_board(name: str) -> Type[Board]:
    return _REGISTRY.board_class(name)


def create_board(name: str, **kwargs: Any) -> Board:
    return _REGISTRY.create(name, **kwargs)


def list_available_boards() -> list[str]:
    return _REGISTRY.names()


@asynccontextmanager
async def open_board(name: str, **kwargs: Any) -> AsyncIterator[Board]:
    """Create a board by name and aclose() it when the block exits.

    Example:
        async with open_board("microbit") as board:
            board.bridge.forever(blink)
            await asyncio.sleep(1)
    """
    board = create_board(name, **kwargs)
    try:
        yield board
    finally:
        await board.aclose()


def verify_boards_registered(*required: str) -> None:
    """Fail fast when board packages were not imported.

    With no arguments at least one board must be registered; otherwise
    every name in required must be.

    Raises:
        RuntimeError: If a required board (or any board) is missing.
    """
    missing = [name for name in required if name not in _REGISTRY]
    if missing:
        raise RuntimeError(
            f"Boards not registered: {', '.join(missing)}. "
            "Import their packages first, e.g. `import microbit_sim.microbit`."
        )
    if not _REGISTRY.names():
        raise RuntimeError(
            "No boards registered! Ensure board modules are imported. "
            "Example: from microbit_sim.microbit import MicrobitBoard"
        )
