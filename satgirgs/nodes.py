"""Node records and the weighted distance used to rank candidate neighbours."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence

import numpy as np

# (target positions, target weights, source position, source weight) -> distances
WeightedDistance = Callable[[np.ndarray, np.ndarray, np.ndarray, float], np.ndarray]


@dataclass(frozen=True)
class Node:
    """A sampled node: position on the unit torus, weight, and external id."""

    position: tuple[float, ...]
    weight: float
    index: int

    @property
    def dimension(self) -> int:
        return len(self.position)

    def weighted_distance(self, other: "Node") -> float:
        return float(weighted_distance(
            np.asarray(self.position), np.float64(self.weight),
            np.asarray(other.position), other.weight,
        ))


def torus_distance(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Maximum-norm distance on the unit torus; broadcasts over leading axes."""
    diff = np.abs(np.asarray(a) - np.asarray(b))
    diff = np.minimum(diff, 1.0 - diff)
    return diff.max(axis=-1)


def weighted_distance(
    positions: np.ndarray,
    weights: np.ndarray,
    position: np.ndarray,
    weight: float,
) -> np.ndarray:
    """
    GIRG distance ``dist^d / (w_u * w_v)``.

    Small values mean "close": near in space or heavy enough to reach far.
    Only the ordering of the returned values is meaningful.
    """
    positions = np.asarray(positions, dtype=np.float64)
    dimension = positions.shape[-1]
    return torus_distance(positions, position) ** dimension / (weights * weight)


def convert_to_nodes(
    positions: Sequence[Sequence[float]],
    weights: Sequence[float],
    index_offset: int = 0,
) -> list[Node]:
    """Zip positions and weights into nodes numbered from ``index_offset``."""
    if len(positions) != len(weights):
        raise ValueError(
            f"Got {len(positions)} positions but {len(weights)} weights"
        )
    return [
        Node(tuple(float(x) for x in pos), float(w), index_offset + i)
        for i, (pos, w) in enumerate(zip(positions, weights))
    ]


def node_arrays(nodes: Sequence[Node]) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Stack nodes into ``(positions, weights, indices)`` arrays."""
    if not nodes:
        return np.empty((0, 0)), np.empty(0), np.empty(0, dtype=np.int64)
    positions = np.array([n.position for n in nodes], dtype=np.float64)
    weights = np.array([n.weight for n in nodes], dtype=np.float64)
    indices = np.array([n.index for n in nodes], dtype=np.int64)
    return positions, weights, indices
