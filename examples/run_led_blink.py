import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Ensure local repo package is used even if another "microbit_sim" is on PYTHONPATH.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from microbit_sim import open_board


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Blink the centre LED of a simulated micro:bit.")
    parser.add_argument(
        "--seconds",
        type=float,
        default=2.0,
        help="How long to let the script run",
    )
    parser.add_argument(
        "--period",
        type=int,
        default=250,
        help="Milliseconds between LED toggles",
    )
    parser.add_argument(
        "--text",
        default="Hi",
        help="Text scrolled when button A is pressed",
    )
    return parser.parse_args()


async def run(args: argparse.Namespace) -> None:
    async with open_board("microbit") as board:
        await drive(board, args)


async def drive(board, args: argparse.Namespace) -> None:
    board.subscribe(lambda event: print(event.as_dict()))

    ns = board.python_module()
    led, basic, inputs = ns["led"], ns["basic"], ns["input"]

    async def blink():
        led.plot(2, 2)
        await basic.pause(args.period)
        led.unplot(2, 2)
        await basic.pause(args.period)

    async def greet():
        await basic.show_string(args.text)

    basic.forever(blink)
    inputs.on_button_pressed(ns["Button"].A, greet)

    await asyncio.sleep(args.seconds / 2)
    board.press_button("A")
    await asyncio.sleep(args.seconds / 2)

    board.reset()


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(name)s %(levelname)s: %(message)s")
    asyncio.run(run(parse_args()))


if __name__ == "__main__":
    main()
