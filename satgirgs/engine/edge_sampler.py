"""
Nearest / second-nearest edge sampling.

For every clause node the two closest non-clause nodes (by weighted distance)
are located with a full scan of the non-clause set.  Workers own a static,
contiguous share of the clauses and collect edges in a private buffer that is
flushed into the shared result under a lock whenever it reaches
``block_size`` edges; leftovers are flushed once all workers have finished.
"""

from __future__ import annotations

import logging
import os
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Sequence

import numpy as np

from satgirgs.nodes import Node, WeightedDistance, node_arrays, weighted_distance
from satgirgs.sampling import partition

logger = logging.getLogger(__name__)

BLOCK_SIZE = 1 << 20


class EdgeSampler:
    """
    Connects each clause to its nearest and second-nearest non-clause node.

    Parameters
    ----------
    distance : WeightedDistance
        Vectorised ranking function; smaller means closer.  Ties resolve to
        the first candidate in non-clause order.
    parallel : bool
        Spread clauses over several worker threads.
    workers : int | None
        Worker count when ``parallel`` (defaults to the CPU count).
    block_size : int
        Edges buffered per worker before a flush into the shared result.
    """

    def __init__(
        self,
        distance: WeightedDistance = weighted_distance,
        parallel: bool = True,
        workers: int | None = None,
        block_size: int = BLOCK_SIZE,
    ) -> None:
        if block_size < 1:
            raise ValueError(f"block_size must be positive, got {block_size}")
        self.distance = distance
        self.parallel = parallel
        self.workers = workers
        self.block_size = block_size
        # flush count of the most recently finished sample() call
        self.flushes = 0

    def sample(
        self,
        c_nodes: Sequence[Node],
        nc_nodes: Sequence[Node],
        debug_mode: bool = False,
    ) -> np.ndarray:
        """
        Sample edges for all clauses.

        In normal mode each clause yields one edge between its nearest and
        second-nearest non-clause node.  In debug mode each clause yields two
        edges from itself to those nodes; clause ``i`` is numbered
        ``len(nc_nodes) + i`` so it cannot collide with a non-clause index.

        Returns
        -------
        np.ndarray
            ``(k, 2)`` array of edges with ``u <= v``, in no particular order.
        """
        if not c_nodes:
            return np.empty((0, 2), dtype=np.int64)
        if len(nc_nodes) < 2:
            raise ValueError(
                f"Need at least 2 non-clause nodes to connect clauses, got {len(nc_nodes)}"
            )

        c_pos, c_weights, _ = node_arrays(c_nodes)
        nc_pos, nc_weights, nc_index = node_arrays(nc_nodes)
        offset = len(nc_nodes)

        num_workers = 1
        if self.parallel:
            num_workers = max(1, min(self.workers or os.cpu_count() or 1, len(c_nodes)))
        chunks = partition(len(c_nodes), num_workers)

        shared = _SharedEdges()

        def work(worker_id: int) -> list[tuple[int, int]]:
            local: list[tuple[int, int]] = []
            start, stop = chunks[worker_id]
            for clause in range(start, stop):
                dist = np.array(
                    self.distance(nc_pos, nc_weights, c_pos[clause], c_weights[clause]),
                    dtype=np.float64,
                )
                nearest, second = _two_smallest(dist)

                if debug_mode:
                    self._add_edge(shared, local, int(nc_index[nearest]), offset + clause)
                    self._add_edge(shared, local, int(nc_index[second]), offset + clause)
                else:
                    self._add_edge(
                        shared, local, int(nc_index[nearest]), int(nc_index[second]),
                    )
            return local

        if num_workers == 1:
            leftovers = [work(0)]
        else:
            with ThreadPoolExecutor(max_workers=num_workers) as executor:
                leftovers = list(executor.map(work, range(num_workers)))

        for local in leftovers:
            shared.flush(local)

        edges = np.array(shared.edges, dtype=np.int64).reshape(-1, 2)
        self.flushes = shared.flushes
        logger.info(
            "Sampled %d edges for %d clauses on %d workers (%d flushes)",
            len(edges), len(c_nodes), num_workers, shared.flushes,
        )
        return edges

    def _add_edge(
        self, shared: "_SharedEdges", local: list[tuple[int, int]], u: int, v: int,
    ) -> None:
        if u > v:
            u, v = v, u
        local.append((u, v))
        if len(local) == self.block_size:
            shared.flush(local)
            local.clear()


class _SharedEdges:
    """Edge vector shared by the workers of one ``sample`` call."""

    def __init__(self) -> None:
        self.edges: list[tuple[int, int]] = []
        self.flushes = 0
        self._lock = threading.Lock()

    def flush(self, local: list[tuple[int, int]]) -> None:
        if not local:
            return
        with self._lock:
            self.edges.extend(local)
            self.flushes += 1
            logger.debug("Flushed %d edges", len(local))


def _two_smallest(dist: np.ndarray) -> tuple[int, int]:
    """Positions of the smallest and the next-smallest other entry."""
    nearest = int(np.argmin(dist))
    second = int(np.argmin(np.delete(dist, nearest)))
    if second >= nearest:
        second += 1
    return nearest, second


def generate_edges(
    c_nodes: Sequence[Node],
    nc_nodes: Sequence[Node],
    debug_mode: bool = False,
    parallel: bool = True,
    workers: int | None = None,
    distance: WeightedDistance = weighted_distance,
) -> np.ndarray:
    """Convenience wrapper around :meth:`EdgeSampler.sample`."""
    sampler = EdgeSampler(distance=distance, parallel=parallel, workers=workers)
    return sampler.sample(c_nodes, nc_nodes, debug_mode=debug_mode)
