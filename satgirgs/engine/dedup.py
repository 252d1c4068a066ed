"""Collapse repeated undirected edges into ``(u, v, multiplicity)`` triples."""

from __future__ import annotations

import logging

import numpy as np

logger = logging.getLogger(__name__)


def deduplicate_edge_array(edges) -> np.ndarray:
    """
    Canonicalise, sort and run-length encode an edge list.

    Parameters
    ----------
    edges : array-like
        Pairs ``(u, v)`` in any orientation.

    Returns
    -------
    np.ndarray
        ``(k, 3)`` array of ``(u, v, multiplicity)`` with ``u <= v``, sorted by
        ``u`` then ``v``.
    """
    edges = np.asarray(edges, dtype=np.int64).reshape(-1, 2)
    if len(edges) == 0:
        return np.empty((0, 3), dtype=np.int64)

    u = np.minimum(edges[:, 0], edges[:, 1])
    v = np.maximum(edges[:, 0], edges[:, 1])
    order = np.lexsort((v, u))
    u, v = u[order], v[order]

    # a run starts wherever the pair differs from its predecessor
    starts = np.flatnonzero(np.r_[True, (u[1:] != u[:-1]) | (v[1:] != v[:-1])])
    counts = np.diff(np.r_[starts, len(u)])

    logger.debug("Deduplicated %d raw edges into %d", len(edges), len(starts))
    return np.column_stack((u[starts], v[starts], counts))


def deduplicate_edges(edges) -> list[tuple[int, int, int]]:
    """List form of :func:`deduplicate_edge_array`."""
    return [tuple(row) for row in deduplicate_edge_array(edges).tolist()]


def expand_edges(triples) -> np.ndarray:
    """Inverse of deduplication: repeat each ``(u, v)`` ``multiplicity`` times."""
    triples = np.asarray(triples, dtype=np.int64).reshape(-1, 3)
    return np.repeat(triples[:, :2], triples[:, 2], axis=0)
