"""Text demo for the falling-block engine.

Run with: `python -m blockfall`

A random piece is spawned near the top of the field above a full-width slab of
the same colour.  The field is printed after every tick until it settles; the
slab rows clear once they land and the piece then sinks to the floor.
"""

from __future__ import annotations

import argparse
import logging
import random
from typing import Callable, Optional, Sequence

from .field import HEIGHT, WIDTH, FallingField
from .grid import BoundedGrid, Rotation
from .pieces import Cell, random_color, random_piece


LOGGER = logging.getLogger(__name__)

SPAWN_X = 3
SPAWN_Y = 3
SLAB_HEIGHT = 2


def run_demo(
    seed: int = 5,
    *,
    width: int = WIDTH,
    height: int = HEIGHT,
    slab_row: int = 10,
    max_ticks: int = 1000,
    emit: Callable[[str], None] = print,
) -> int:
    """Play the demo scenario and return the number of changing ticks."""

    rng = random.Random(seed)
    color = random_color(rng)
    turns = rng.randrange(4)
    piece = random_piece(rng, color).rotated(Rotation.CLOCKWISE, turns)

    field = FallingField(width, height)
    field.spawn(piece, SPAWN_X, SPAWN_Y)
    slab = BoundedGrid.filled(width, SLAB_HEIGHT, Cell(color))
    field.copy_in_clipped(0, slab_row, slab)
    LOGGER.info(
        "Seed %d: %dx%d %s piece, %d quarter turns", seed, piece.width, piece.height, color.name, turns
    )
    emit(field.render())

    ticks = 0
    while field.tick():
        ticks += 1
        LOGGER.info("Tick %d: content height %d", ticks, field.content_height())
        emit(field.render())
        if ticks >= max_ticks:
            LOGGER.warning("Stopped after %d ticks without settling", ticks)
            break
    return ticks


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--seed", type=int, default=5, help="Random seed for the piece draw.")
    parser.add_argument("--width", type=int, default=WIDTH, help="Field width in cells.")
    parser.add_argument("--height", type=int, default=HEIGHT, help="Field height in cells.")
    parser.add_argument(
        "--slab-row",
        type=int,
        default=10,
        help="Row at which the full-width slab is placed.",
    )
    parser.add_argument(
        "--max-ticks",
        type=int,
        default=1000,
        help="Stop after this many changing ticks.",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (e.g. DEBUG, INFO, WARNING).",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO), format="%(message)s")
    run_demo(
        args.seed,
        width=args.width,
        height=args.height,
        slab_row=args.slab_row,
        max_ticks=args.max_ticks,
    )


if __name__ == "__main__":
    main()
