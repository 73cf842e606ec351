from __future__ import annotations

import random
from collections import Counter

import pytest

from blockfall.pieces import (
    PIECE_BUILDERS,
    Cell,
    Color,
    PieceType,
    i_piece,
    make_piece,
    o_piece,
    random_color,
    random_piece,
    random_piece_type,
    shape_cells,
    t_piece,
)


EXPECTED_BOXES = {
    PieceType.I: (1, 4),
    PieceType.O: (2, 2),
    PieceType.L: (2, 3),
    PieceType.J: (2, 3),
    PieceType.S: (3, 2),
    PieceType.Z: (3, 2),
    PieceType.T: (3, 2),
}


@pytest.mark.parametrize("kind", list(PieceType))
def test_every_shape_has_four_active_cells_of_one_colour(kind: PieceType) -> None:
    piece = PIECE_BUILDERS[kind](Color.BLUE)
    assert piece.shape == EXPECTED_BOXES[kind]
    cells = list(piece.cells())
    assert len(cells) == 4
    assert all(value == Cell(Color.BLUE, True) for _, _, value in cells)
    assert sorted((x, y) for x, y, _ in cells) == sorted(shape_cells(kind))


def test_shape_patterns() -> None:
    assert [(x, y) for x, y, _ in i_piece(Color.RED).cells()] == [(0, 0), (0, 1), (0, 2), (0, 3)]
    assert len(list(o_piece(Color.RED).cells())) == 4
    t = t_piece(Color.RED)
    assert t.get(0, 0) is None and t.get(2, 0) is None
    assert t.get(1, 0) == Cell(Color.RED)


def test_pieces_are_fresh_grids() -> None:
    first = make_piece(PieceType.L, Color.GREEN)
    second = make_piece(PieceType.L, Color.GREEN)
    assert first == second
    first.set(0, 0, None)
    assert second.get(0, 0) == Cell(Color.GREEN)


def test_locked_cell_keeps_colour() -> None:
    cell = Cell(Color.YELLOW)
    assert cell.active is True
    assert cell.locked() == Cell(Color.YELLOW, False)


def test_random_selectors_cover_all_values() -> None:
    rng = random.Random(0)
    kinds = Counter(random_piece_type(rng) for _ in range(7000))
    colors = Counter(random_color(rng) for _ in range(4000))
    assert set(kinds) == set(PieceType)
    assert set(colors) == set(Color)
    assert all(800 < n < 1200 for n in kinds.values())
    assert all(800 < n < 1200 for n in colors.values())


def test_random_piece_is_reproducible() -> None:
    a = random_piece(random.Random(3))
    b = random_piece(random.Random(3))
    assert a == b
    piece = random_piece(random.Random(3), Color.RED)
    assert {value.color for _, _, value in piece.cells()} == {Color.RED}
