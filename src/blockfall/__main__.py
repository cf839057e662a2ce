"""Command line entry point.

Run with: `python -m blockfall`

By default this opens the pygame window.  ``--ascii`` instead runs the engine
headless for a number of simulated frames and prints the resulting board,
useful as a minimal smoke test without a display.
"""

from __future__ import annotations

import argparse
import logging

from . import GameEngine, grid_to_text, render_grid


FRAME_MS = 1000 / 60


def run_ascii(ticks: int, seed: int | None) -> str:
    engine = GameEngine(seed=seed)
    engine.start()
    for frame in range(1, ticks + 1):
        engine.tick(frame * FRAME_MS)
        if not engine.running:
            break
    grid = render_grid(engine.board.snapshot(), engine.active)
    state = engine.state
    header = f"score={state.score} level={state.level} lines={state.lines} status={state.status.value}"
    return header + "\n" + grid_to_text(grid)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--ascii", action="store_true", help="Print a headless frame instead of opening a window.")
    parser.add_argument("--ticks", type=int, default=600, help="Frames to simulate in --ascii mode.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the piece randomizer.")
    parser.add_argument("--no-preview", dest="preview", action="store_false", help="Hide the next piece preview.")
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (e.g. DEBUG, INFO, WARNING).",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO), format="%(message)s")

    if args.ascii:
        print(run_ascii(args.ticks, args.seed))
        return

    from .run_pygame import main as run_window

    run_window(seed=args.seed, show_preview=args.preview)


if __name__ == "__main__":
    main()
