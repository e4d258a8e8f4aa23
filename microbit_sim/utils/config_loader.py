"""Helpers for loading and validating board configuration."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional
import threading

import yaml  # type: ignore[import-untyped]

from microbit_sim.core.enums import Button
from microbit_sim.core.exceptions import ConfigurationError
from microbit_sim.core.glyphs import GLYPH_HEIGHT


@dataclass(frozen=True)
class PinsConfig:
    prefix: str
    count: int

    @property
    def pin_ids(self) -> tuple[str, ...]:
        return tuple(f"{self.prefix}{i}" for i in range(self.count))


@dataclass(frozen=True)
class DisplayConfig:
    width: int
    height: int


@dataclass(frozen=True)
class TimingConfig:
    forever_interval_ms: float = 20
    scroll_interval_ms: float = 150


@dataclass(frozen=True)
class BoardConfig:
    board_name: str
    pins: PinsConfig
    display: DisplayConfig
    buttons: tuple[str, ...]
    timing: TimingConfig


# Configuration cache with thread safety
_LOADER_CACHE: dict[str, BoardConfig] = {}
_CACHE_LOCK = threading.RLock()


def _get_config_path(board_name: str, path: Optional[str] = None) -> str:
    if path is None:
        # Config files are in microbit_sim/{board_name}/config.yaml
        base = Path(__file__).parent.parent / board_name / "config.yaml"
        path = str(base)

    return path


def _load_yaml_file(path: Path) -> dict[str, Any]:
    try:
        with path.open("r", encoding="utf-8") as fh:
            raw = yaml.safe_load(fh)
    except Exception as exc:
        raise ConfigurationError(f"Failed to parse config: {exc}") from exc

    if not isinstance(raw, dict):
        raise ConfigurationError(f"Config root must be a mapping: {path}")
    return raw


def _build_timing_cfg(timing_raw: dict[str, Any]) -> TimingConfig:
    """Convert the timing section to TimingConfig with defaults."""
    defaults = TimingConfig()
    return TimingConfig(
        forever_interval_ms=float(
            timing_raw.get("forever_interval_ms", defaults.forever_interval_ms)
        ),
        scroll_interval_ms=float(
            timing_raw.get("scroll_interval_ms", defaults.scroll_interval_ms)
        ),
    )


def _parse_board_cfg_from_dict(raw: dict[str, Any]) -> BoardConfig:
    try:
        pins = raw["pins"]
        display = raw["display"]

        cfg = BoardConfig(
            board_name=str(raw["board_name"]),
            pins=PinsConfig(prefix=str(pins["prefix"]), count=int(pins["count"])),
            display=DisplayConfig(
                width=int(display["width"]),
                height=int(display["height"]),
            ),
            buttons=tuple(str(b) for b in raw.get("buttons", [b.value for b in Button])),
            timing=_build_timing_cfg(raw.get("timing") or {}),
        )
    except KeyError as exc:
        raise ConfigurationError(f"Missing required config key: {exc}") from exc
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"Invalid config schema: {exc}") from exc

    _validate_board_config(cfg)
    return cfg


def _validate_board_config(cfg: BoardConfig) -> None:
    """Basic sanity checks to fail fast on bad configs."""
    if cfg.pins.count <= 0:
        raise ConfigurationError("pins.count", "must be positive")
    if not cfg.pins.prefix:
        raise ConfigurationError("pins.prefix", "must not be empty")

    # Text scrolling draws 5-row glyphs straight onto the matrix
    if cfg.display.height != GLYPH_HEIGHT or cfg.display.width != GLYPH_HEIGHT:
        raise ConfigurationError(
            "display", f"LED matrix must be {GLYPH_HEIGHT}x{GLYPH_HEIGHT}"
        )

    known = {b.value for b in Button}
    if set(cfg.buttons) != known or len(cfg.buttons) != len(known):
        raise ConfigurationError("buttons", f"must list exactly {sorted(known)}")

    if cfg.timing.forever_interval_ms < 0 or cfg.timing.scroll_interval_ms < 0:
        raise ConfigurationError("timing", "intervals must be >= 0")


def load_config(board_name: str, path: Optional[str] = None) -> BoardConfig:
    """Load and validate configuration from a YAML file.

    Args:
        board_name: Board identifier (e.g., 'microbit') for config lookup.
        path: Optional path to YAML config. If None, load bundled microbit_sim/{board_name}/config.yaml.

    Returns:
        BoardConfig instance

    Raises:
        ConfigurationError: on parse or validation errors
    """

    p = Path(_get_config_path(board_name=board_name, path=path))
    raw = _load_yaml_file(p)

    return _parse_board_cfg_from_dict(raw=raw)


def get_config(board_name: str) -> BoardConfig:
    """Return the loaded config for board_name, loading and caching if necessary.

    THREAD SAFETY: This function is thread-safe. Multiple threads can
    safely call this concurrently.
    """
    with _CACHE_LOCK:
        if board_name not in _LOADER_CACHE:
            _LOADER_CACHE[board_name] = load_config(board_name=board_name)
        return _LOADER_CACHE[board_name]


def clear_config_cache() -> None:
    """Clear all cached configurations.

    All subsequent calls to get_config() will reload from disk.
    """
    with _CACHE_LOCK:
        _LOADER_CACHE.clear()
