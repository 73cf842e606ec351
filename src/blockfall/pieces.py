"""Cell payloads and the catalogue of the seven tetromino shapes.

Every shape is produced as a fresh :class:`~blockfall.grid.BoundedGrid` sized to
its bounding box.  The occupied cells share a single :class:`Color` and start
out active so that, once copied into a :class:`~blockfall.field.FallingField`,
they fall as one piece.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple
import random

from .grid import BoundedGrid


class Color(str, Enum):
    """Colours a piece can take."""

    RED = "R"
    GREEN = "G"
    BLUE = "B"
    YELLOW = "Y"


@dataclass(frozen=True)
class Cell:
    """Value stored in an occupied playfield cell."""

    color: Color
    active: bool = True

    def locked(self) -> "Cell":
        """Return the settled version of this cell."""

        return Cell(self.color, False)


class PieceType(str, Enum):
    """Enumeration of the seven standard tetromino shapes."""

    I = "I"
    O = "O"
    L = "L"
    J = "J"
    S = "S"
    Z = "Z"
    T = "T"


Piece = BoundedGrid
ShapeCells = List[Tuple[int, int]]

# ``(width, height)`` of each bounding box and its occupied ``(x, y)`` cells.
_SHAPES: Dict[PieceType, Tuple[Tuple[int, int], ShapeCells]] = {
    PieceType.I: ((1, 4), [(0, 0), (0, 1), (0, 2), (0, 3)]),
    PieceType.O: ((2, 2), [(0, 0), (1, 0), (0, 1), (1, 1)]),
    PieceType.L: ((2, 3), [(0, 0), (0, 1), (0, 2), (1, 2)]),
    PieceType.J: ((2, 3), [(1, 0), (1, 1), (1, 2), (0, 2)]),
    PieceType.S: ((3, 2), [(1, 0), (2, 0), (0, 1), (1, 1)]),
    PieceType.Z: ((3, 2), [(0, 0), (1, 0), (1, 1), (2, 1)]),
    PieceType.T: ((3, 2), [(1, 0), (0, 1), (1, 1), (2, 1)]),
}


def shape_cells(kind: PieceType) -> ShapeCells:
    """Return a copy of the occupied ``(x, y)`` offsets for ``kind``."""

    return list(_SHAPES[kind][1])


def make_piece(kind: PieceType, color: Color) -> Piece:
    """Build a new piece of ``kind`` whose cells are all ``color`` and active."""

    (width, height), cells = _SHAPES[kind]
    piece = BoundedGrid(width, height)
    for x, y in cells:
        piece.set_unchecked(x, y, Cell(color))
    return piece


def i_piece(color: Color) -> Piece:
    return make_piece(PieceType.I, color)


def o_piece(color: Color) -> Piece:
    return make_piece(PieceType.O, color)


def l_piece(color: Color) -> Piece:
    return make_piece(PieceType.L, color)


def j_piece(color: Color) -> Piece:
    return make_piece(PieceType.J, color)


def s_piece(color: Color) -> Piece:
    return make_piece(PieceType.S, color)


def z_piece(color: Color) -> Piece:
    return make_piece(PieceType.Z, color)


def t_piece(color: Color) -> Piece:
    return make_piece(PieceType.T, color)


PIECE_BUILDERS: Dict[PieceType, Callable[[Color], Piece]] = {
    PieceType.I: i_piece,
    PieceType.O: o_piece,
    PieceType.L: l_piece,
    PieceType.J: j_piece,
    PieceType.S: s_piece,
    PieceType.Z: z_piece,
    PieceType.T: t_piece,
}


def random_color(rng: Optional[random.Random] = None) -> Color:
    """Return one of the four colours with equal probability."""

    return (rng or random).choice(list(Color))


def random_piece_type(rng: Optional[random.Random] = None) -> PieceType:
    """Return one of the seven shapes with equal probability."""

    return (rng or random).choice(list(PieceType))


def random_piece(
    rng: Optional[random.Random] = None, color: Optional[Color] = None
) -> Piece:
    """Return a random shape in ``color`` (or in a random colour).

    The colour is drawn before the shape; the two draws are independent.
    """

    if color is None:
        color = random_color(rng)
    return PIECE_BUILDERS[random_piece_type(rng)](color)
