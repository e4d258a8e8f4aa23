"""
Pytest configuration and shared fixtures for the simulator test suite.
"""

import asyncio
import sys
import tempfile
from pathlib import Path

import pytest
import yaml

# Ensure project root is on PYTHONPATH so 'microbit_sim' can be imported
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from microbit_sim.interfaces.clock import IClock  # noqa: E402
from microbit_sim.microbit import MicrobitBoard  # noqa: E402


class FakeClock(IClock):
    """Clock that records requested sleeps and only yields to the loop."""

    def __init__(self):
        self.now = 0.0
        self.sleeps = []

    def now_ms(self) -> float:
        return self.now

    async def sleep(self, ms: float) -> None:
        self.sleeps.append(ms)
        self.now += max(0.0, ms)
        await asyncio.sleep(0)


async def _run_until(predicate, max_yields=1000):
    """Yield to the event loop until predicate() is true."""
    for _ in range(max_yields):
        if predicate():
            return
        await asyncio.sleep(0)
    raise AssertionError("condition not reached")


async def _spin(yields=20):
    for _ in range(yields):
        await asyncio.sleep(0)


@pytest.fixture
def run_until():
    return _run_until


@pytest.fixture
def spin():
    return _spin


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def board(fake_clock):
    return MicrobitBoard(clock=fake_clock)


@pytest.fixture
def events(board):
    """List that receives every event published by the board."""
    received = []
    board.subscribe(received.append)
    return received


@pytest.fixture
def temp_yaml_file():
    """
    Fixture that provides a temporary YAML file.

    Yields:
        Path: Path to the temporary YAML file
    """
    with tempfile.NamedTemporaryFile(
        mode="w",
        suffix=".yaml",
        delete=False,
    ) as f:
        temp_path = Path(f.name)

    yield temp_path

    # Cleanup
    if temp_path.exists():
        temp_path.unlink()


@pytest.fixture
def valid_board_config_dict():
    """
    Fixture providing a complete valid board configuration dictionary.
    """
    return {
        "board_name": "microbit",
        "pins": {"prefix": "P", "count": 21},
        "display": {"width": 5, "height": 5},
        "buttons": ["A", "B"],
        "timing": {"forever_interval_ms": 20, "scroll_interval_ms": 150},
    }


@pytest.fixture
def temp_config_yaml_file(temp_yaml_file, valid_board_config_dict):
    """
    Fixture that creates a temporary YAML file with valid configuration.
    """
    with open(temp_yaml_file, "w", encoding="utf-8") as f:
        yaml.dump(valid_board_config_dict, f)

    yield temp_yaml_file


def pytest_configure(config):
    """
    Hook for initial pytest configuration.

    Used to add custom markers and configuration.
    """
    config.addinivalue_line(
        "markers",
        "slow: marks tests as slow (deselect with '-m \"not slow\"')",
    )
    config.addinivalue_line(
        "markers",
        "integration: marks tests as integration tests",
    )
    config.addinivalue_line("markers", "unit: marks tests as unit tests")
