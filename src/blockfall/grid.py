"""Bounded two-dimensional grid used for playfields, pieces and masks.

Cells are addressed as ``(x, y)`` where ``x`` is the column and ``y`` the row,
with the origin in the top-left corner.  Every cell either holds a value or is
empty (``None``).  The backing storage is a NumPy object array of shape
``(height, width)`` so row-level checks in :mod:`blockfall.field` can be
vectorised.
"""

from __future__ import annotations

import copy
from enum import Enum
from typing import Any, Iterator, Tuple, TypeVar

import numpy as np


G = TypeVar("G", bound="BoundedGrid")

# Number of column/row indices labelled by ``render``.
RENDER_INDEX_LIMIT = 10
FILLED_GLYPH = "██"
EMPTY_GLYPH = "░░"


class OutOfBoundsError(IndexError):
    """Raised when a coordinate or a sub-grid falls outside a grid."""


class DimensionMismatchError(ValueError):
    """Raised when a mask does not have the same size as its source grid."""


class Rotation(str, Enum):
    """Direction of a quarter turn."""

    CLOCKWISE = "cw"
    COUNTERCLOCKWISE = "ccw"


_is_present = np.frompyfunc(lambda cell: cell is not None, 1, 1)


class BoundedGrid:
    """Fixed-size rectangular grid of optional cells."""

    def __init__(self, width: int, height: int) -> None:
        if width < 0 or height < 0:
            raise ValueError("Grid dimensions must not be negative")
        self._width = int(width)
        self._height = int(height)
        self._cells = np.full((self._height, self._width), None, dtype=object)

    @classmethod
    def filled(cls: type[G], width: int, height: int, value: Any) -> G:
        """Return a grid with every cell set to a copy of ``value``.

        Passing ``None`` produces an empty grid.  Each cell receives its own
        shallow copy so mutable payloads are never shared between cells.
        """

        grid = cls(width, height)
        if value is not None:
            for y in range(grid._height):
                for x in range(grid._width):
                    grid._cells[y, x] = copy.copy(value)
        return grid

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def shape(self) -> Tuple[int, int]:
        """Return ``(width, height)``."""

        return self._width, self._height

    # Cell access ------------------------------------------------------
    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self._width and 0 <= y < self._height

    def _check(self, x: int, y: int) -> None:
        if not self.in_bounds(x, y):
            raise OutOfBoundsError(
                f"Cell ({x}, {y}) out of bounds for {self._width}x{self._height} grid"
            )

    def get(self, x: int, y: int) -> Any:
        """Return the value at ``(x, y)`` or ``None`` when the cell is empty.

        Raises:
            OutOfBoundsError: If the coordinates are outside the grid.
        """

        self._check(x, y)
        return self._cells[y, x]

    def set(self, x: int, y: int, value: Any) -> None:
        """Store ``value`` at ``(x, y)``; ``None`` empties the cell.

        Raises:
            OutOfBoundsError: If the coordinates are outside the grid.
        """

        self._check(x, y)
        self._cells[y, x] = value

    def get_unchecked(self, x: int, y: int) -> Any:
        """Return the value at ``(x, y)`` without validating the coordinates."""

        return self._cells[y, x]

    def set_unchecked(self, x: int, y: int, value: Any) -> None:
        """Store ``value`` at ``(x, y)`` without validating the coordinates."""

        self._cells[y, x] = value

    def is_empty(self, x: int, y: int) -> bool:
        self._check(x, y)
        return self._cells[y, x] is None

    def occupancy(self) -> np.ndarray:
        """Return a ``(height, width)`` boolean array of occupied cells."""

        return _is_present(self._cells).astype(bool)

    # Sub-grid placement -----------------------------------------------
    def _check_fits(self, x: int, y: int, other: "BoundedGrid") -> None:
        if x < 0 or y < 0:
            raise OutOfBoundsError(f"Negative offset ({x}, {y}) is not supported")
        if x + other._width > self._width or y + other._height > self._height:
            raise OutOfBoundsError(
                f"{other._width}x{other._height} grid at ({x}, {y}) does not fit "
                f"in {self._width}x{self._height} grid"
            )

    def _write(self, x: int, y: int, source: np.ndarray) -> None:
        rows, cols = source.shape
        self._cells[y : y + rows, x : x + cols] = copy.deepcopy(source)

    def copy_in(self, x: int, y: int, other: "BoundedGrid") -> None:
        """Copy every cell of ``other`` into this grid at offset ``(x, y)``.

        Destination cells are overwritten unconditionally, including with the
        empty cells of ``other``.

        Raises:
            OutOfBoundsError: If ``other`` does not fit at the offset.
        """

        self._check_fits(x, y, other)
        self._write(x, y, other._cells)

    def clip_offset(self, x: int, y: int, other: "BoundedGrid") -> Tuple[int, int]:
        """Return the offset nearest to ``(x, y)`` at which ``other`` fits.

        Raises:
            OutOfBoundsError: If the offset is negative or ``other`` is larger
                than this grid.
        """

        if x < 0 or y < 0:
            raise OutOfBoundsError(f"Negative offset ({x}, {y}) is not supported")
        if other._width > self._width or other._height > self._height:
            raise OutOfBoundsError(
                f"{other._width}x{other._height} grid cannot be clipped into "
                f"{self._width}x{self._height} grid"
            )
        return min(x, self._width - other._width), min(y, self._height - other._height)

    def copy_in_clipped(self, x: int, y: int, other: "BoundedGrid") -> Tuple[int, int]:
        """Copy ``other`` in, shifting the offset so it fits.

        The offset moves left and/or up by the minimum amount needed to keep
        ``other`` inside the right and bottom edges.  Returns the effective
        ``(x, y)`` used.

        Raises:
            OutOfBoundsError: If the offset is negative or ``other`` is larger
                than this grid.
        """

        x, y = self.clip_offset(x, y, other)
        self._write(x, y, other._cells)
        return x, y

    def copy_in_masked(
        self, x: int, y: int, other: "BoundedGrid", mask: "BoundedGrid"
    ) -> None:
        """Copy the cells of ``other`` whose ``mask`` cell is present.

        Destination cells under an absent mask cell are left untouched.

        Raises:
            DimensionMismatchError: If ``mask`` and ``other`` differ in size.
            OutOfBoundsError: If ``other`` does not fit at the offset.
        """

        if mask._width != other._width:
            raise DimensionMismatchError("Mask width does not match source width")
        if mask._height != other._height:
            raise DimensionMismatchError("Mask height does not match source height")
        self._check_fits(x, y, other)

        selected = mask.occupancy()
        target = self._cells[y : y + other._height, x : x + other._width]
        target[selected] = copy.deepcopy(other._cells[selected])

    # Transforms -------------------------------------------------------
    def rotated(self: G, direction: Rotation = Rotation.CLOCKWISE, turns: int = 1) -> G:
        """Return a new grid rotated by ``90 * turns`` degrees.

        A clockwise quarter turn maps ``(x, y)`` to ``(height - 1 - y, x)`` in
        a grid with swapped dimensions.  Negative ``turns`` rotate the other
        way; multiples of four return a copy with the original dimensions.
        """

        turns %= 4
        if Rotation(direction) is Rotation.CLOCKWISE:
            # np.rot90 turns counter-clockwise for positive k.
            turns = -turns
        cells = np.rot90(self._cells, turns)
        rows, cols = cells.shape
        rotated = self._empty_like(cols, rows)
        rotated._cells[:, :] = copy.deepcopy(cells)
        return rotated

    def _empty_like(self: G, width: int, height: int) -> G:
        return type(self)(width, height)

    def clone(self: G) -> G:
        """Return an independent deep copy of the grid."""

        duplicate = self._empty_like(self._width, self._height)
        duplicate._cells = copy.deepcopy(self._cells)
        return duplicate

    def __copy__(self: G) -> G:
        return self.clone()

    def __deepcopy__(self: G, memo: dict) -> G:
        return self.clone()

    # Iteration --------------------------------------------------------
    def rows(self) -> Iterator[Tuple[Any, ...]]:
        """Yield each row, top to bottom, as a tuple of cells."""

        for row in self._cells:
            yield tuple(row)

    def cells(self) -> Iterator[Tuple[int, int, Any]]:
        """Yield ``(x, y, value)`` for every occupied cell in row-major order."""

        for y, row in enumerate(self._cells):
            for x, value in enumerate(row):
                if value is not None:
                    yield x, y, value

    def __len__(self) -> int:
        return self._width * self._height

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BoundedGrid):
            return NotImplemented
        if self.shape != other.shape:
            return False
        return all(a == b for a, b in zip(self._cells.flat, other._cells.flat))

    __hash__ = None  # type: ignore[assignment]

    # Debug output -----------------------------------------------------
    def render(self) -> str:
        """Return a fixed-width text picture of the grid for debugging."""

        lines = [
            " " + "".join(f"{i} " for i in range(min(RENDER_INDEX_LIMIT, self._width)))
        ]
        for y, row in enumerate(self._cells):
            prefix = str(y) if y < RENDER_INDEX_LIMIT else " "
            glyphs = "".join(EMPTY_GLYPH if cell is None else FILLED_GLYPH for cell in row)
            lines.append(prefix + glyphs)
        return "\n".join(lines) + "\n"

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(width={self._width}, height={self._height})"

