"""SAT-GIRG generator: variables and clauses placed by the GIRG model."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import numpy as np

from satgirgs.config import SatGirgConfig
from satgirgs.engine.dedup import deduplicate_edge_array
from satgirgs.engine.edge_sampler import generate_edges
from satgirgs.generators.base import BaseGenerator, GeneratedGraph
from satgirgs.nodes import Node, convert_to_nodes
from satgirgs.sampling import generate_positions, generate_weights
from satgirgs.utils.dot_writer import save_dot

logger = logging.getLogger(__name__)

# keeps the four derived streams apart from each other's worker offsets
_SEED_STRIDE = 1 << 20


@dataclass
class SatGirgGraph(GeneratedGraph):
    """Clause nodes, non-clause nodes and the deduplicated edge triples."""

    c_nodes: list[Node]
    nc_nodes: list[Node]
    edges: np.ndarray
    debug_mode: bool = False

    def node_ids(self) -> list[int]:
        nodes = [node.index for node in self.nc_nodes]
        if self.debug_mode:
            nodes.extend(node.index for node in self.c_nodes)
        return nodes

    def weighted_edges(self) -> list[tuple[int, int, int]]:
        return [tuple(row) for row in self.edges.tolist()]

    @property
    def total_multiplicity(self) -> int:
        return int(self.edges[:, 2].sum()) if len(self.edges) else 0

    def save_dot(self, path) -> None:
        save_dot(self.c_nodes, self.nc_nodes, self.weighted_edges(), path, self.debug_mode)


def generate_satgirg(config: SatGirgConfig) -> SatGirgGraph:
    """
    Run the full pipeline: sample both node sets, connect every clause to its
    two closest variables and collapse repeated edges.
    """
    n, m = config.n, config.num_clauses
    opts = {"parallel": config.parallel, "workers": config.workers}

    weights = generate_weights(n, config.ple, config.weight_seed, **opts)
    positions = generate_positions(n, config.dimension, config.position_seed, **opts)
    c_weights = generate_weights(m, config.ple, config.clause_weight_seed, **opts)
    c_positions = generate_positions(m, config.dimension, config.clause_position_seed, **opts)

    nc_nodes = convert_to_nodes(positions, weights)
    # clause ids follow the variable ids so both can appear in one graph
    c_nodes = convert_to_nodes(c_positions, c_weights, index_offset=n)

    raw = generate_edges(
        c_nodes, nc_nodes, debug_mode=config.debug_mode,
        parallel=config.parallel, workers=config.workers,
    )
    edges = deduplicate_edge_array(raw)
    logger.info(
        "SAT-GIRG n=%d m=%d d=%d: %d raw edges, %d distinct",
        n, m, config.dimension, len(raw), len(edges),
    )
    return SatGirgGraph(c_nodes, nc_nodes, edges, config.debug_mode)


class SatGirgGenerator(BaseGenerator):
    """
    Generates SAT-like graphs from geometric inhomogeneous random graphs.

    ``size`` variables and a number of clauses receive power-law weights and
    uniform positions on the unit torus.  Each clause links its nearest and
    second-nearest variable, so edges capture variable co-occurrence.

    Parameters
    ----------
    clauses : int, default size
        Number of clause nodes.
    dimension : int, default 2
        Dimension of the torus.
    ple : float, default 2.5
        Power-law exponent of the weights.
    seed : int | None
        Base seed; the four random streams are derived from it.  If omitted
        the fixed defaults of :class:`SatGirgConfig` are used.
    debug_mode : bool, default False
        Emit clause-variable edges instead of variable-variable edges.
    parallel : bool, default True
        Sample on several worker threads.
    """

    name = "satgirg"

    def build(self, size: int, **params: Any) -> tuple[SatGirgGraph, dict[str, Any]]:
        seed = params.pop("seed", None)
        if seed is not None:
            params.update(
                weight_seed=seed,
                position_seed=seed + _SEED_STRIDE,
                clause_weight_seed=seed + 2 * _SEED_STRIDE,
                clause_position_seed=seed + 3 * _SEED_STRIDE,
            )
        config = SatGirgConfig(n=size, **params)
        effective = config.model_dump(exclude={"n", "parallel", "workers"})
        effective["clauses"] = config.num_clauses
        return generate_satgirg(config), effective
