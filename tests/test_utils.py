from __future__ import annotations

import random

import numpy as np
import pytest

from blockfall.field import FallingField
from blockfall.pieces import Cell, Color, PieceType, make_piece
from blockfall.utils import COLOR_VALUES, preview, settle, spawn_random, to_int_grid


def test_settle_counts_changing_ticks() -> None:
    field = FallingField(10, 20)
    field.spawn(make_piece(PieceType.I, Color.RED), 0, 0)
    assert settle(field) == 16
    assert field.is_settled()
    assert settle(field) == 0


def test_settle_gives_up_after_max_ticks() -> None:
    field = FallingField(10, 20)
    field.spawn(make_piece(PieceType.I, Color.RED), 0, 0)
    with pytest.raises(RuntimeError):
        settle(field, max_ticks=3)

    other = FallingField(10, 20)
    other.spawn(make_piece(PieceType.I, Color.RED), 0, 0)
    assert settle(other, max_ticks=16) == 16


def test_spawn_random_places_four_active_cells() -> None:
    field = FallingField(10, 20)
    x, y = spawn_random(field, random.Random(7))
    assert y == 0
    assert 0 <= x < field.width
    cells = field.active_cells()
    assert len(cells) == 4
    colours = {field.get(cx, cy).color for cx, cy in cells}
    assert len(colours) == 1


def test_spawn_random_is_reproducible() -> None:
    a = FallingField(6, 6)
    b = FallingField(6, 6)
    spawn_random(a, random.Random(11), x=5)
    spawn_random(b, random.Random(11), x=5)
    assert a == b


def test_preview_keeps_background_and_field() -> None:
    field = FallingField(10, 4)
    debris = Cell(Color.GREEN, False)
    field.set(9, 0, debris)
    piece = make_piece(PieceType.J, Color.RED)

    frame = preview(field, piece, 9, 0)
    # J occupies (1, 0), (1, 1), (1, 2), (0, 2) of its 2x3 box, clipped to x=8.
    assert frame.get(9, 0) == Cell(Color.RED)
    assert frame.get(8, 2) == Cell(Color.RED)
    assert frame.get(8, 0) is None
    assert field.get(9, 0) == debris
    assert not field.has_active()

    field.set(8, 0, debris)
    frame = preview(field, piece, 8, 0)
    assert frame.get(8, 0) == debris


def test_to_int_grid_maps_colours() -> None:
    field = FallingField(3, 2)
    field.set(0, 0, Cell(Color.RED))
    field.set(2, 1, Cell(Color.YELLOW, False))
    values = to_int_grid(field)
    assert values.dtype == np.uint8
    assert values.shape == (2, 3)
    assert values[0, 0] == COLOR_VALUES[Color.RED] == 1
    assert values[1, 2] == COLOR_VALUES[Color.YELLOW] == 4
    assert int(values.sum()) == 5
