"""Helpers for code driving a :class:`~blockfall.field.FallingField`."""

from __future__ import annotations

from typing import Optional, Tuple
import random

import numpy as np

from .field import FallingField
from .grid import BoundedGrid, Rotation
from .mask import OccupancyMask
from .pieces import Color, Piece, random_color, random_piece


# Mapping from ``Color`` to the integer used by ``to_int_grid``.  ``0`` is
# reserved for empty cells.
COLOR_VALUES = {c: i + 1 for i, c in enumerate(Color)}


def spawn_random(
    field: FallingField,
    rng: Optional[random.Random] = None,
    x: Optional[int] = None,
    y: int = 0,
) -> Tuple[int, int]:
    """Spawn a randomly shaped, coloured and rotated piece into ``field``.

    The piece is turned clockwise by a random number of quarter turns and
    placed with clipped placement.  ``x`` defaults to the centre column.
    Returns the offset actually used.
    """

    rng = rng or random.Random()
    color = random_color(rng)
    turns = rng.randrange(4)
    piece = random_piece(rng, color).rotated(Rotation.CLOCKWISE, turns)
    if x is None:
        x = max(0, (field.width - piece.width) // 2)
    return field.spawn(piece, x, y)


def settle(field: FallingField, max_ticks: Optional[int] = None) -> int:
    """Tick ``field`` until nothing changes and return the number of changes.

    Raises:
        RuntimeError: If more than ``max_ticks`` ticks report a change.
    """

    changes = 0
    while field.tick():
        changes += 1
        if max_ticks is not None and changes > max_ticks:
            raise RuntimeError(f"Field did not settle within {max_ticks} ticks")
    return changes


def preview(field: FallingField, piece: Piece, x: int, y: int) -> FallingField:
    """Return a copy of ``field`` with ``piece`` drawn over it.

    Only the piece's occupied cells are stamped, so the field content under
    the empty corners of its bounding box stays visible.  The offset is
    clipped the same way :meth:`FallingField.spawn` clips it.
    """

    frame = field.clone()
    x, y = frame.clip_offset(x, y, piece)
    frame.copy_in_masked(x, y, piece, OccupancyMask.from_grid(piece))
    return frame


def to_int_grid(grid: BoundedGrid) -> np.ndarray:
    """Return ``grid`` as a ``uint8`` array for renderers.

    Empty cells map to ``0`` and occupied cells to the value of their colour
    in ``COLOR_VALUES``.
    """

    values = np.zeros((grid.height, grid.width), dtype=np.uint8)
    for x, y, cell in grid.cells():
        values[y, x] = COLOR_VALUES[cell.color]
    return values
