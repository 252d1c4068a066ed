"""
Threshold hyperbolic random graphs on top of :class:`RadiusLayer`.

Nodes live in a hyperbolic disk of radius ``R`` and are connected iff their
hyperbolic distance is at most ``R``.  The disk is cut into unit-height radius
bands, each indexed by a :class:`RadiusLayer`.  For a node ``u`` and a band
with lower radius ``r_min`` every partner lies within an angular window
``Δθ_max(r_u, r_min)`` of ``u``, so only the (at most two) cells of width
``>= 2·Δθ_max`` around ``u`` are scanned.
"""

from __future__ import annotations

import logging
import math
import os
from concurrent.futures import ThreadPoolExecutor

import numpy as np

from satgirgs.geometry.angle_helper import TWO_PI, AngleHelper
from satgirgs.geometry.radius_layer import RadiusLayer
from satgirgs.sampling import partition

logger = logging.getLogger(__name__)

# widen query windows so boundary pairs are never lost to rounding
_WINDOW_SLACK = 1e-9


def default_radius(n: int) -> float:
    """Disk radius giving constant expected degree: ``2·ln(n) + 1``."""
    return 2.0 * math.log(max(n, 1)) + 1.0


def cosh_distance(r1, t1, r2, t2):
    """``cosh`` of the hyperbolic distance between polar points; vectorised."""
    return np.cosh(r1) * np.cosh(r2) - np.sinh(r1) * np.sinh(r2) * np.cos(t1 - t2)


def angular_window(r_u: float, r_v: float, radius: float) -> float:
    """
    Largest angular gap at which points with radii ``r_u`` and ``r_v`` are
    still within distance ``radius``.  Decreases as ``r_v`` grows.
    """
    if r_u + r_v <= radius:
        return math.pi
    denom = math.sinh(r_u) * math.sinh(r_v)
    if denom == 0.0:
        return math.pi
    cos_gap = (math.cosh(r_u) * math.cosh(r_v) - math.cosh(radius)) / denom
    return math.acos(min(1.0, max(-1.0, cos_gap)))


def build_layers(
    radii: np.ndarray,
    angles: np.ndarray,
    radius: float,
    max_level: int = 16,
    helper: AngleHelper | None = None,
) -> list[RadiusLayer]:
    """Bucket nodes into unit-height radius bands ``[R-i-1, R-i)``, outermost first."""
    helper = helper if helper is not None else AngleHelper()
    radii = np.asarray(radii, dtype=np.float64)
    angles = np.asarray(angles, dtype=np.float64)

    num_layers = max(1, math.ceil(radius))
    band = np.clip(np.floor(radius - radii).astype(np.int64), 0, num_layers - 1)
    points = np.column_stack((radii, angles))

    layers = []
    for i in range(num_layers):
        r_max = radius - i
        r_min = max(0.0, r_max - 1.0) if i < num_layers - 1 else 0.0
        width = 2.0 * angular_window(r_min, r_min, radius)
        target_level = helper.finest_level_covering(width, max_level)
        layers.append(RadiusLayer(
            r_min, r_max, target_level, np.flatnonzero(band == i), angles, points,
            hierarchy=helper,
        ))

    logger.debug("Built %d radius layers for R=%.3f", num_layers, radius)
    return layers


def _query_cells(helper: AngleHelper, angle: float, window: float, level: int) -> list[int]:
    """Global ids of the cells at ``level`` touching ``[angle-window, angle+window]``."""
    if level == 0 or window >= math.pi:
        return [helper.first_cell_of_level(0)]
    first = helper.first_cell_of_level(level)
    last_local = helper.num_cells_in_level(level) - 1
    lo = min(helper.cell_for_point((angle - window) % TWO_PI, level), last_local)
    hi = min(helper.cell_for_point((angle + window) % TWO_PI, level), last_local)
    return [first + lo] if lo == hi else [first + lo, first + hi]


def threshold_edges(
    radii: np.ndarray,
    angles: np.ndarray,
    radius: float,
    layers: list[RadiusLayer],
    parallel: bool = False,
    workers: int | None = None,
) -> np.ndarray:
    """
    All pairs ``u < v`` at hyperbolic distance ``<= radius``.

    Workers own contiguous node ranges and return their edges, which are
    concatenated once all of them have finished.
    """
    radii = np.asarray(radii, dtype=np.float64)
    angles = np.asarray(angles, dtype=np.float64)
    n = len(radii)
    if n == 0:
        return np.empty((0, 2), dtype=np.int64)

    helper = layers[0].hierarchy
    cosh_radius = math.cosh(radius)
    num_workers = max(1, min(workers or os.cpu_count() or 1, n)) if parallel else 1
    chunks = partition(n, num_workers)

    def work(worker_id: int) -> np.ndarray:
        found = []
        start, stop = chunks[worker_id]
        for u in range(start, stop):
            r_u, t_u = radii[u], angles[u]
            for layer in layers:
                if not len(layer):
                    continue
                window = angular_window(r_u, layer.r_min, radius)
                window = window * (1.0 + _WINDOW_SLACK) + _WINDOW_SLACK
                level = helper.finest_level_covering(2.0 * window, layer.target_level)
                for cell in _query_cells(helper, t_u, window, level):
                    ids = layer.node_ids_in_cell(cell, level)
                    if not len(ids):
                        continue
                    pts = layer.first_point_pointer(cell, level)
                    close = cosh_distance(r_u, t_u, pts[:, 0], pts[:, 1]) <= cosh_radius
                    partners = ids[close & (ids > u)]
                    if len(partners):
                        found.append(np.column_stack((np.full(len(partners), u), partners)))
        if not found:
            return np.empty((0, 2), dtype=np.int64)
        return np.concatenate(found).astype(np.int64)

    if num_workers == 1:
        parts = [work(0)]
    else:
        with ThreadPoolExecutor(max_workers=num_workers) as executor:
            parts = list(executor.map(work, range(num_workers)))

    edges = np.concatenate(parts)
    logger.info("Found %d hyperbolic edges among %d nodes", len(edges), n)
    return edges


def brute_force_threshold_edges(radii, angles, radius: float) -> np.ndarray:
    """Quadratic reference for :func:`threshold_edges`."""
    radii = np.asarray(radii, dtype=np.float64)
    angles = np.asarray(angles, dtype=np.float64)
    u, v = np.triu_indices(len(radii), k=1)
    close = cosh_distance(radii[u], angles[u], radii[v], angles[v]) <= math.cosh(radius)
    return np.column_stack((u[close], v[close])).astype(np.int64)
