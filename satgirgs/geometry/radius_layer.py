"""
Hierarchical spatial index over the points of one radius band.

Points are bucketed into the finest (``target``) level of a
:class:`~satgirgs.geometry.angle_helper.CellHierarchy` with a counting sort,
so the points of every finest-level cell are contiguous in the backing array.
Because the finest-level descendants of any coarser cell are contiguous too,
the points below *any* cell form one slice and every query is O(1).
"""

from __future__ import annotations

import logging
from typing import Sequence

import numpy as np

from satgirgs.geometry.angle_helper import AngleHelper, CellHierarchy

logger = logging.getLogger(__name__)


class RadiusLayer:
    """
    Write-once index of the points whose radius lies in ``[r_min, r_max]``.

    Parameters
    ----------
    r_min, r_max : float
        Closed radius band the layer represents.
    target_level : int
        Level of the cell hierarchy the points are bucketed into.
    nodes : sequence of int
        Ids of the nodes belonging to this layer.
    angles : array-like
        Angular coordinate of *every* node, indexed by node id.
    points : array-like
        Full position of every node, indexed by node id.
    hierarchy : CellHierarchy, optional
        Cell numbering to use; defaults to the binary :class:`AngleHelper`.
    """

    def __init__(
        self,
        r_min: float,
        r_max: float,
        target_level: int,
        nodes: Sequence[int],
        angles,
        points,
        hierarchy: CellHierarchy | None = None,
    ) -> None:
        self.r_min = r_min
        self.r_max = r_max
        self.target_level = target_level
        self.hierarchy = hierarchy if hierarchy is not None else AngleHelper()

        cells_in_level = self.hierarchy.num_cells_in_level(target_level)
        node_ids = np.asarray(nodes, dtype=np.int64).reshape(-1)
        cells = self.hierarchy.cells_for_points(
            np.asarray(angles, dtype=np.float64)[node_ids], target_level,
        )
        if cells.size and (cells.min() < 0 or cells.max() >= cells_in_level):
            bad = int(cells.max()) if cells.max() >= cells_in_level else int(cells.min())
            raise ValueError(
                f"Cell {bad} is outside level {target_level} "
                f"(expected 0 <= cell < {cells_in_level})"
            )

        # exclusive prefix sums: prefix[c] is the number of points in all cells < c
        counts = np.bincount(cells, minlength=cells_in_level)
        prefix = np.zeros(cells_in_level + 1, dtype=np.int64)
        np.cumsum(counts, out=prefix[1:])

        # counting sort: each point goes to its cell's slot plus the number
        # of points already placed in that cell
        starts = prefix.tolist()
        num_inserted = [0] * cells_in_level
        order = [0] * len(node_ids)
        for i, cell in enumerate(cells.tolist()):
            order[starts[cell] + num_inserted[cell]] = i
            num_inserted[cell] += 1

        sorted_ids = node_ids[np.asarray(order, dtype=np.int64)]
        self._prefix_sums = prefix
        self._node_ids = sorted_ids
        self._points = np.asarray(points)[sorted_ids]
        for arr in (self._prefix_sums, self._node_ids, self._points):
            arr.setflags(write=False)

        logger.debug(
            "RadiusLayer [%.3f, %.3f]: %d points in %d cells (level %d)",
            r_min, r_max, len(sorted_ids), cells_in_level, target_level,
        )

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def prefix_sums(self) -> np.ndarray:
        return self._prefix_sums

    @property
    def points(self) -> np.ndarray:
        return self._points

    @property
    def node_ids(self) -> np.ndarray:
        return self._node_ids

    def __len__(self) -> int:
        return len(self._node_ids)

    def __repr__(self) -> str:
        return (
            f"<RadiusLayer r=[{self.r_min:.3f}, {self.r_max:.3f}] "
            f"level={self.target_level} points={len(self)}>"
        )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def _descendant_range(self, cell: int, level: int) -> tuple[int, int]:
        """First and one-past-last target-level cell below ``cell``."""
        if level > self.target_level:
            raise ValueError(
                f"Level {level} is finer than the layer's target level {self.target_level}"
            )
        if not self.hierarchy.is_cell_of_level(cell, level):
            raise ValueError(f"Cell {cell} does not belong to level {level}")

        descendants = self.hierarchy.num_cells_in_level(self.target_level - level)
        begin = (cell - self.hierarchy.first_cell_of_level(level)) * descendants
        return begin, begin + descendants

    def points_in_cell(self, cell: int, level: int) -> int:
        """Number of points whose finest-level cell descends from ``cell``."""
        begin, end = self._descendant_range(cell, level)
        return int(self._prefix_sums[end] - self._prefix_sums[begin])

    def kth_point(self, cell: int, level: int, k: int) -> np.ndarray:
        """The ``k``-th point (0-based) below ``cell``."""
        return self._points[self._kth_index(cell, level, k)]

    def kth_node(self, cell: int, level: int, k: int) -> int:
        """Node id of :meth:`kth_point`."""
        return int(self._node_ids[self._kth_index(cell, level, k)])

    def _kth_index(self, cell: int, level: int, k: int) -> int:
        begin, end = self._descendant_range(cell, level)
        first = int(self._prefix_sums[begin])
        count = int(self._prefix_sums[end]) - first
        if not 0 <= k < count:
            raise ValueError(f"k={k} out of range for cell {cell} holding {count} points")
        return first + k

    def first_point_pointer(self, cell: int, level: int) -> np.ndarray:
        """Read-only view over the points below ``cell``, in storage order."""
        begin, end = self._descendant_range(cell, level)
        return self._points[self._prefix_sums[begin]:self._prefix_sums[end]]

    def node_ids_in_cell(self, cell: int, level: int) -> np.ndarray:
        """Node ids aligned with :meth:`first_point_pointer`."""
        begin, end = self._descendant_range(cell, level)
        return self._node_ids[self._prefix_sums[begin]:self._prefix_sums[end]]
