"""Presence-only grids used to stencil masked copies."""

from __future__ import annotations

import numpy as np

from .grid import BoundedGrid


PRESENT = True


class OccupancyMask(BoundedGrid):
    """Grid whose cells are either present (``True``) or empty.

    A mask derived from a piece lets callers copy only the piece's silhouette
    with :meth:`BoundedGrid.copy_in_masked`, preserving whatever lies under
    the empty corners of its bounding box.
    """

    @classmethod
    def from_grid(cls, grid: BoundedGrid) -> "OccupancyMask":
        """Return a mask with a present cell wherever ``grid`` is occupied."""

        mask = cls(grid.width, grid.height)
        mask._cells[grid.occupancy()] = PRESENT
        return mask

    def invert(self) -> None:
        """Flip every cell between present and empty in place."""

        present = self.occupancy()
        self._cells[present] = None
        self._cells[~present] = PRESENT

    def inverted(self) -> "OccupancyMask":
        """Return an inverted copy, leaving this mask unchanged."""

        flipped = self.clone()
        flipped.invert()
        return flipped

    def count(self) -> int:
        return int(np.count_nonzero(self.occupancy()))
