"""Threshold hyperbolic random graph generator."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any

import numpy as np

from satgirgs.config import HyperbolicConfig
from satgirgs.engine.dedup import deduplicate_edge_array
from satgirgs.generators.base import BaseGenerator, GeneratedGraph
from satgirgs.geometry.hyperbolic import build_layers, threshold_edges
from satgirgs.nodes import Node
from satgirgs.sampling import generate_angles, generate_radii
from satgirgs.utils.dot_writer import save_dot

logger = logging.getLogger(__name__)


@dataclass
class HyperbolicGraph(GeneratedGraph):
    radii: np.ndarray
    angles: np.ndarray
    radius: float
    edges: np.ndarray

    def node_ids(self) -> list[int]:
        return list(range(len(self.radii)))

    def weighted_edges(self) -> list[tuple[int, int, int]]:
        return [tuple(row) for row in self.edges.tolist()]

    def nodes(self) -> list[Node]:
        """Nodes in Cartesian layout, weighted by ``e^{(R - r)/2}``."""
        return [
            Node(
                (r * math.cos(t), r * math.sin(t)),
                math.exp((self.radius - r) / 2.0),
                i,
            )
            for i, (r, t) in enumerate(zip(self.radii.tolist(), self.angles.tolist()))
        ]

    def save_dot(self, path) -> None:
        save_dot([], self.nodes(), self.weighted_edges(), path)


def generate_hyperbolic(config: HyperbolicConfig) -> HyperbolicGraph:
    radius = config.disk_radius
    opts = {"parallel": config.parallel, "workers": config.workers}

    angles = generate_angles(config.n, config.angle_seed, **opts)
    radii = generate_radii(config.n, config.alpha, radius, config.radius_seed, **opts)
    layers = build_layers(radii, angles, radius, max_level=config.max_level)
    edges = deduplicate_edge_array(threshold_edges(radii, angles, radius, layers, **opts))

    logger.info("Hyperbolic graph n=%d R=%.3f: %d edges", config.n, radius, len(edges))
    return HyperbolicGraph(radii, angles, radius, edges)


class HyperbolicGenerator(BaseGenerator):
    """
    Generates threshold hyperbolic random graphs.

    Nodes are placed in a hyperbolic disk of radius ``R`` (quasi-uniformly for
    ``alpha = 1``) and connected when their hyperbolic distance is at most
    ``R``.  Degrees follow a power law with exponent ``2·alpha + 1``.

    Parameters
    ----------
    alpha : float, default 0.75
        Radial dispersion.
    radius : float | None
        Disk radius; defaults to ``2·ln(size) + 1``.
    seed : int | None
        Base seed for angles and radii.
    """

    name = "hyperbolic"

    def build(self, size: int, **params: Any) -> tuple[HyperbolicGraph, dict[str, Any]]:
        seed = params.pop("seed", None)
        if seed is not None:
            params.update(angle_seed=seed, radius_seed=seed + (1 << 20))
        config = HyperbolicConfig(n=size, **params)
        effective = config.model_dump(exclude={"n", "parallel", "workers"})
        effective["radius"] = config.disk_radius
        return generate_hyperbolic(config), effective
