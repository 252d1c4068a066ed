"""Cell hierarchies over the periodic angular domain ``[0, 2π)``."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod

import numpy as np

TWO_PI = 2.0 * math.pi


class CellHierarchy(ABC):
    """
    A static, balanced tree of cells over a 1-D periodic domain.

    Cells are numbered contiguously level by level: level ``L`` owns the ids
    ``first_cell_of_level(L) .. first_cell_of_level(L + 1) - 1``.  The children
    of a cell at level ``L`` form a contiguous block at level ``L + 1``, so the
    finest-level descendants of any cell are contiguous as well.

    Every branching factor must be uniform: a cell at level ``L`` has exactly
    ``num_cells_in_level(k)`` descendants at level ``L + k``.
    """

    @abstractmethod
    def num_cells_in_level(self, level: int) -> int:
        """Number of cells in ``level``."""

    @abstractmethod
    def first_cell_of_level(self, level: int) -> int:
        """Global id of the first cell in ``level``."""

    @abstractmethod
    def cell_for_point(self, angle: float, level: int) -> int:
        """Index of the cell owning ``angle``, local to ``level`` (0-based)."""

    def cells_for_points(self, angles, level: int) -> np.ndarray:
        """Vectorised :meth:`cell_for_point`; subclasses may override."""
        return np.fromiter(
            (self.cell_for_point(float(a), level) for a in angles),
            dtype=np.int64,
            count=len(angles),
        )

    def level_of_cell(self, cell: int) -> int:
        """Level the global cell id belongs to."""
        level = 0
        while cell >= self.first_cell_of_level(level + 1):
            level += 1
        return level

    def is_cell_of_level(self, cell: int, level: int) -> bool:
        return self.first_cell_of_level(level) <= cell < self.first_cell_of_level(level + 1)


class AngleHelper(CellHierarchy):
    """
    Binary hierarchy: level ``L`` splits the circle into ``2**L`` equal arcs.

    Level 0 is the whole circle (cell 0), level 1 holds cells 1 and 2, level 2
    holds cells 3..6, and so on.
    """

    def num_cells_in_level(self, level: int) -> int:
        return 1 << level

    def first_cell_of_level(self, level: int) -> int:
        return (1 << level) - 1

    def cell_for_point(self, angle: float, level: int) -> int:
        return math.floor(angle * (1 << level) / TWO_PI)

    def cells_for_points(self, angles, level: int) -> np.ndarray:
        angles = np.asarray(angles, dtype=np.float64)
        return np.floor(angles * ((1 << level) / TWO_PI)).astype(np.int64)

    def level_of_cell(self, cell: int) -> int:
        return (cell + 1).bit_length() - 1

    def finest_level_covering(self, width: float, max_level: int) -> int:
        """Finest level (``<= max_level``) whose cells are at least ``width`` wide."""
        if width <= 0.0:
            return max_level
        if width >= TWO_PI:
            return 0
        return max(0, min(max_level, int(math.floor(math.log2(TWO_PI / width)))))
