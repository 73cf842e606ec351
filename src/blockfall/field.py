"""Playfield holding falling pieces and settled debris.

:class:`FallingField` is a :class:`~blockfall.grid.BoundedGrid` of
:class:`~blockfall.pieces.Cell` values.  Active cells form the piece that is
still falling; locked cells are settled debris.  :meth:`FallingField.tick`
advances the field by one discrete step:

1. The active piece moves down one row as a rigid unit.  When it rests on the
   floor or on locked debris it locks in place instead.
2. When nothing is falling, one compaction pass lets every empty row pull the
   row above it down by one, so debris sinks into the gaps left by clears.
3. When nothing moved at all, completely occupied rows are emptied.

Callers keep calling ``tick`` until it returns ``False`` before spawning the
next piece.
"""

from __future__ import annotations

import logging
from typing import List, Tuple

import numpy as np

from .grid import BoundedGrid
from .pieces import Cell, Piece


# Dimensions of the standard playfield.
WIDTH = 10
HEIGHT = 20

LOGGER = logging.getLogger(__name__)

_is_active = np.frompyfunc(lambda cell: cell is not None and cell.active, 1, 1)


class FallingField(BoundedGrid):
    """Playfield running the fall / lock / clear automaton."""

    def __init__(self, width: int = WIDTH, height: int = HEIGHT) -> None:
        super().__init__(width, height)

    # Queries ----------------------------------------------------------
    def active_mask(self) -> np.ndarray:
        """Return a ``(height, width)`` boolean array of active cells."""

        return _is_active(self._cells).astype(bool)

    def has_active(self) -> bool:
        return bool(self.active_mask().any())

    def active_cells(self) -> List[Tuple[int, int]]:
        """Return the ``(x, y)`` coordinates of the falling piece."""

        ys, xs = np.nonzero(self.active_mask())
        return list(zip(xs.tolist(), ys.tolist()))

    def full_rows(self) -> List[int]:
        """Return the indices of rows with no empty cell, top to bottom."""

        if self._width == 0:
            return []
        return np.nonzero(np.all(self.occupancy(), axis=1))[0].tolist()

    def content_height(self) -> int:
        """Return the distance from the topmost occupied row to the floor.

        An empty field has a content height of ``0``.
        """

        occupied_rows = np.nonzero(np.any(self.occupancy(), axis=1))[0]
        if occupied_rows.size == 0:
            return 0
        return self._height - int(occupied_rows[0])

    def is_settled(self) -> bool:
        """Return ``True`` when further ticks cannot change the field."""

        return not self.has_active() and not self.full_rows()

    # Placement --------------------------------------------------------
    def spawn(self, piece: Piece, x: int, y: int) -> Tuple[int, int]:
        """Place ``piece`` as the active piece and return the offset used.

        The piece is copied with clipped placement, so its whole bounding box
        overwrites the destination.  Every occupied cell becomes active.
        """

        activated = BoundedGrid(piece.width, piece.height)
        for px, py, value in piece.cells():
            activated.set_unchecked(px, py, Cell(value.color))
        offset = self.copy_in_clipped(x, y, activated)
        LOGGER.debug("Spawned %dx%d piece at %s", piece.width, piece.height, offset)
        return offset

    # Automaton --------------------------------------------------------
    def tick(self) -> bool:
        """Advance the field by one step and return whether anything changed."""

        if self._fall():
            return True
        if self._clear():
            return True
        return False

    def _fall(self) -> bool:
        active = self.active_mask()
        if active.any():
            if self._can_descend(active):
                self._descend(active)
                return True
            # Locking is not reported as a change on its own.
            self._lock(active)
        return self._compact()

    def _can_descend(self, active: np.ndarray) -> bool:
        if active[-1].any():
            return False
        locked = self.occupancy() & ~active
        return not bool(np.any(active[:-1] & locked[1:]))

    def _descend(self, active: np.ndarray) -> None:
        ys, xs = np.nonzero(active)
        moving = self._cells[ys, xs]
        self._cells[ys, xs] = None
        self._cells[ys + 1, xs] = moving

    def _lock(self, active: np.ndarray) -> None:
        ys, xs = np.nonzero(active)
        for y, x in zip(ys, xs):
            self._cells[y, x] = self._cells[y, x].locked()
        LOGGER.debug("Locked %d cells, content height %d", ys.size, self.content_height())

    def _compact(self) -> bool:
        occupied_rows = np.any(self.occupancy(), axis=1)
        moved: List[int] = []
        for y in range(self._height - 1, 0, -1):
            if not occupied_rows[y] and occupied_rows[y - 1]:
                self._cells[y] = self._cells[y - 1]
                self._cells[y - 1] = None
                occupied_rows[y] = True
                occupied_rows[y - 1] = False
                moved.append(y - 1)
        if moved:
            LOGGER.debug("Compacted %d rows", len(moved))
        return bool(moved)

    def _clear(self) -> bool:
        rows = self.full_rows()
        if not rows:
            return False
        self._cells[rows] = None
        LOGGER.debug("Cleared rows %s", rows)
        return True
