"""Falling-block puzzle engine: bounded grids, tetromino pieces and gravity."""

from .grid import BoundedGrid, DimensionMismatchError, OutOfBoundsError, Rotation
from .mask import OccupancyMask
from .pieces import (
    Cell,
    Color,
    PieceType,
    make_piece,
    random_color,
    random_piece,
    random_piece_type,
)
from .field import FallingField
from .utils import preview, settle, spawn_random, to_int_grid

__all__ = [
    "BoundedGrid",
    "OccupancyMask",
    "FallingField",
    "Rotation",
    "OutOfBoundsError",
    "DimensionMismatchError",
    "Cell",
    "Color",
    "PieceType",
    "make_piece",
    "random_color",
    "random_piece",
    "random_piece_type",
    "preview",
    "settle",
    "spawn_random",
    "to_int_grid",
]
