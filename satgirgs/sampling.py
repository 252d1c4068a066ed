"""
Weight and position samplers.

Every sampler fans out over a fixed number of workers, each filling a
contiguous index range from its own random stream.  A non-negative seed makes
worker ``i`` draw from ``default_rng(seed + i)``, so output is reproducible for
a given ``(n, seed, worker count)``; a negative seed draws fresh OS entropy.
"""

from __future__ import annotations

import logging
import math
import os
from concurrent.futures import ThreadPoolExecutor
from typing import Callable

import numpy as np

logger = logging.getLogger(__name__)

# Thread start-up only pays off above this many nodes per worker
MIN_NODES_PER_WORKER = 10_000


def worker_count(n: int, parallel: bool, max_workers: int | None = None) -> int:
    """Number of workers to use for ``n`` items."""
    if not parallel:
        return 1
    available = max_workers or os.cpu_count() or 1
    return max(1, min(available, n // MIN_NODES_PER_WORKER))


def partition(n: int, workers: int) -> list[tuple[int, int]]:
    """Split ``range(n)`` into ``workers`` contiguous, near-equal chunks."""
    base, remainder = divmod(n, workers)
    chunks = []
    start = 0
    for i in range(workers):
        stop = start + base + (1 if i < remainder else 0)
        chunks.append((start, stop))
        start = stop
    return chunks


def make_rng(seed: int, worker_id: int = 0) -> np.random.Generator:
    """Random stream of one worker; negative seeds are non-deterministic."""
    return np.random.default_rng(seed + worker_id if seed >= 0 else None)


def _fan_out(
    n: int,
    seed: int,
    parallel: bool,
    workers: int | None,
    draw: Callable[[np.random.Generator, int], np.ndarray],
    tail: tuple[int, ...] = (),
) -> np.ndarray:
    if n < 0:
        raise ValueError(f"Population size must be non-negative, got {n}")

    result = np.empty((n, *tail), dtype=np.float64)
    num_workers = worker_count(n, parallel, workers)
    chunks = partition(n, num_workers)

    def fill(worker_id: int) -> None:
        start, stop = chunks[worker_id]
        result[start:stop] = draw(make_rng(seed, worker_id), stop - start)

    if num_workers == 1:
        fill(0)
    else:
        logger.debug("Sampling %d items on %d workers", n, num_workers)
        with ThreadPoolExecutor(max_workers=num_workers) as executor:
            list(executor.map(fill, range(num_workers)))
    return result


def generate_weights(
    n: int,
    ple: float,
    seed: int = -1,
    parallel: bool = False,
    workers: int | None = None,
) -> np.ndarray:
    """
    Power-law weights in ``[1, n/2]`` by inverse-CDF sampling.

    Parameters
    ----------
    n : int
        Number of weights to draw.
    ple : float
        Power-law exponent, must be greater than 1.
    seed : int
        Base seed; negative means non-deterministic.
    parallel : bool
        Fan out over several workers when ``n`` is large enough.
    workers : int | None
        Upper bound on the worker count (defaults to the CPU count).
    """
    if ple <= 1:
        raise ValueError(f"Power-law exponent must be greater than 1, got {ple}")

    exponent = 1.0 - ple
    scale = (0.5 * n) ** exponent - 1.0 if n > 0 else 0.0

    def draw(rng: np.random.Generator, count: int) -> np.ndarray:
        return (scale * rng.random(count) + 1.0) ** (1.0 / exponent)

    return _fan_out(n, seed, parallel, workers, draw)


def generate_positions(
    n: int,
    dimension: int,
    seed: int = -1,
    parallel: bool = False,
    workers: int | None = None,
) -> np.ndarray:
    """``n`` points drawn uniformly from the unit hypercube, shape ``(n, dimension)``."""
    if dimension < 1:
        raise ValueError(f"Dimension must be at least 1, got {dimension}")

    def draw(rng: np.random.Generator, count: int) -> np.ndarray:
        return rng.random((count, dimension))

    return _fan_out(n, seed, parallel, workers, draw, tail=(dimension,))


def generate_angles(
    n: int,
    seed: int = -1,
    parallel: bool = False,
    workers: int | None = None,
) -> np.ndarray:
    """Uniform angles in ``[0, 2π)``."""

    def draw(rng: np.random.Generator, count: int) -> np.ndarray:
        return 2.0 * math.pi * rng.random(count)

    return _fan_out(n, seed, parallel, workers, draw)


def generate_radii(
    n: int,
    alpha: float,
    radius: float,
    seed: int = -1,
    parallel: bool = False,
    workers: int | None = None,
) -> np.ndarray:
    """Radii in ``[0, radius)`` with density ``α·sinh(αr) / (cosh(αR) - 1)``."""
    if alpha <= 0:
        raise ValueError(f"alpha must be positive, got {alpha}")
    spread = math.cosh(alpha * radius) - 1.0

    def draw(rng: np.random.Generator, count: int) -> np.ndarray:
        return np.arccosh(1.0 + spread * rng.random(count)) / alpha

    return _fan_out(n, seed, parallel, workers, draw)
