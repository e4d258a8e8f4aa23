import pytest

from microbit_sim.core.enums import Button, PinKind
from microbit_sim.core.events import ButtonPress, LedChange, PinChange, Reset
from microbit_sim.core.exceptions import InvalidPinError, OutOfRangeError
from microbit_sim.core.glyphs import glyph_width
from microbit_sim.core.state import PinState
from microbit_sim.core.text_scroller import TRAILING_BLANK_COLUMNS

ALL_CELLS = [(x, y) for x in range(5) for y in range(5)]


@pytest.fixture
def bridge(board):
    return board.bridge


@pytest.mark.parametrize("x, y", ALL_CELLS)
def test_plot_point_unplot_round_trip(bridge, events, x, y):
    bridge.plot(x, y)
    assert bridge.point(x, y) is True
    bridge.unplot(x, y)
    assert bridge.point(x, y) is False

    assert events == [LedChange(x, y, 1), LedChange(x, y, 0)]


def test_point_emits_nothing(bridge, events):
    bridge.point(1, 1)
    assert events == []


def test_led_out_of_range_raises_and_emits_nothing(bridge, events):
    with pytest.raises(OutOfRangeError):
        bridge.plot(5, 0)
    with pytest.raises(OutOfRangeError):
        bridge.unplot(0, -1)
    with pytest.raises(OutOfRangeError):
        bridge.point(9, 9)
    assert events == []


def test_digital_write_read_emits_pin_change(bridge, events):
    bridge.digital_write("P0", 1)

    assert bridge.digital_read("P0") == 1
    assert events == [PinChange("P0", 1, PinKind.DIGITAL)]


def test_analog_write_read_is_silent(bridge, events):
    bridge.analog_write("P1", 1023)

    assert bridge.analog_read("P1") == 1023
    assert events == []


@pytest.mark.parametrize(
    "operation",
    [
        lambda b: b.digital_write("P99", 1),
        lambda b: b.digital_read("P99"),
        lambda b: b.analog_write("P99", 1),
        lambda b: b.analog_read("P99"),
    ],
)
def test_invalid_pin_leaves_state_unchanged(board, bridge, events, operation):
    before = board.snapshot()

    with pytest.raises(InvalidPinError):
        operation(bridge)

    assert board.snapshot() == before
    assert events == []


def test_clear_screen_unplots_every_cell(bridge, events):
    bridge.plot(2, 2)
    events.clear()

    bridge.clear_screen()

    assert len(events) == 25
    assert all(isinstance(e, LedChange) and e.value == 0 for e in events)
    assert not any(bridge.point(x, y) for x, y in ALL_CELLS)


@pytest.mark.asyncio
async def test_show_string_empty_only_clears(bridge, events, fake_clock):
    await bridge.show_string("")

    assert len(events) == 25
    assert all(e.value == 0 for e in events)
    assert fake_clock.sleeps == []


@pytest.mark.asyncio
async def test_show_string_single_glyph_frames(bridge, events, fake_clock):
    await bridge.show_string("A", interval=10)

    frames = glyph_width("A") + TRAILING_BLANK_COLUMNS
    clears = sum(1 for e in events if e == LedChange(0, 0, 0))
    assert clears == frames + 1
    assert fake_clock.sleeps == [10] * (frames - 1)
    assert not any(bridge.point(x, y) for x, y in ALL_CELLS)

    # Top row of "A" is ".##." and is visible in the first frame
    first_plots = []
    for event in events[25:]:
        if event.value == 0:
            break
        first_plots.append((event.x, event.y))
    assert (1, 0) in first_plots and (2, 0) in first_plots


@pytest.mark.asyncio
async def test_show_string_uses_configured_default_interval(bridge, fake_clock):
    await bridge.show_string("I")
    assert fake_clock.sleeps and set(fake_clock.sleeps) == {150}


@pytest.mark.asyncio
async def test_pause_suspends_through_clock(bridge, fake_clock):
    await bridge.pause(250)
    assert fake_clock.sleeps == [250]


@pytest.mark.asyncio
async def test_forever_drives_bridge(board, bridge, events, run_until):
    def blink():
        if bridge.point(0, 0):
            bridge.unplot(0, 0)
        else:
            bridge.plot(0, 0)

    handle = bridge.forever(blink)
    await run_until(lambda: len(events) >= 4)

    assert [e.value for e in events[:4]] == [1, 0, 1, 0]
    board.scheduler.cancel(handle)
    await board.aclose()


def test_on_button_pressed_returns_handle(board, bridge):
    calls = []
    handle = bridge.on_button_pressed(Button.A, lambda: calls.append(1))

    board.press_button("A")
    board.press_button("B")

    assert calls == [1]
    assert handle.active
    assert bridge.button_is_pressed("A")
    assert bridge.button_is_pressed(Button.B)


@pytest.mark.asyncio
async def test_reset_zeroes_state_and_stops_callbacks(board, bridge, events, run_until, spin):
    loop_calls = []
    button_calls = []
    forever_handle = bridge.forever(lambda: loop_calls.append(1))
    button_handle = bridge.on_button_pressed("A", lambda: button_calls.append(1))
    bridge.digital_write("P5", 1)
    bridge.analog_write("P6", 700)
    bridge.plot(3, 3)
    board.press_button("A")
    await run_until(lambda: loop_calls)
    events.clear()

    board.reset()

    assert events == [Reset()]
    snap = board.snapshot()
    assert all(pin_state == PinState(0, 0) for pin_state in snap.pins.values())
    assert not any(any(column) for column in snap.leds)
    assert snap.buttons == {"A": False, "B": False}
    assert forever_handle.destroyed
    assert button_handle.destroyed

    count = len(loop_calls)
    await spin()
    board.press_button("A")
    assert len(loop_calls) == count
    assert button_calls == [1]
    assert events == [Reset(), ButtonPress(Button.A)]
    await board.aclose()


def test_python_module_surface(bridge):
    module = bridge.python_module()

    assert set(module) == {"pins", "led", "input", "basic", "Button", "DigitalPin"}
    assert module["DigitalPin"].P0 == "P0"
    assert module["DigitalPin"].P20 == "P20"
    assert module["Button"].A == "A"
    assert module["Button"].B.name == "B"

    module["pins"].digital_write_pin(module["DigitalPin"].P2, 1)
    assert module["pins"].digital_read_pin("P2") == 1
    module["pins"].analog_write_pin("P2", 400)
    assert module["pins"].read_analog_pin("P2") == 400

    module["led"].plot(4, 4)
    assert module["led"].point(4, 4)
    module["led"].unplot(4, 4)
    assert not module["led"].point(4, 4)

    for name in ("show_string", "forever", "pause", "clear_screen", "reset"):
        assert callable(getattr(module["basic"], name))
    for name in ("on_button_pressed", "button_is_pressed", "_clear"):
        assert callable(getattr(module["input"], name))


def test_input_clear_drops_handlers(board, bridge):
    calls = []
    module = bridge.python_module()
    module["input"].on_button_pressed(module["Button"].A, lambda: calls.append(1))
    module["input"]._clear()

    board.press_button("A")

    assert calls == []


@pytest.mark.asyncio
async def test_reset_lets_suspended_scroll_finish_then_stops(board, bridge, events, run_until, spin):
    started = []
    finished = []

    async def scroll():
        started.append(1)
        await bridge.show_string("Hi", interval=5)
        finished.append(1)

    handle = bridge.forever(scroll)
    await run_until(lambda: any(isinstance(e, LedChange) and e.value == 1 for e in events))

    board.reset()

    assert handle.destroyed
    assert finished == []
    await board.aclose()
    await spin()
    assert started == [1]
    assert finished == [1]
    assert events.count(Reset()) == 1


@pytest.mark.asyncio
async def test_reset_during_pause_runs_no_further_iteration(board, bridge, fake_clock, run_until, spin):
    iterations = []

    async def body():
        iterations.append("start")
        await bridge.pause(1000)
        iterations.append("end")

    bridge.forever(body)
    await run_until(lambda: 1000 in fake_clock.sleeps)

    board.reset()
    await board.scheduler.wait_idle(timeout=1)
    await spin()

    assert iterations == ["start", "end"]
    assert board.scheduler.active_handles == []
