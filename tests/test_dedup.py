"""Tests for edge deduplication."""

import numpy as np

from satgirgs.engine.dedup import deduplicate_edge_array, deduplicate_edges, expand_edges


def _canonical_sorted(edges):
    return sorted((min(u, v), max(u, v)) for u, v in edges)


class TestDeduplicate:
    def test_concrete_example(self):
        assert deduplicate_edges([(2, 1), (1, 2), (3, 4)]) == [(1, 2, 2), (3, 4, 1)]

    def test_last_run_is_kept(self):
        assert deduplicate_edges([(5, 6), (6, 5), (6, 5)]) == [(5, 6, 3)]

    def test_single_edge(self):
        assert deduplicate_edges([(9, 3)]) == [(3, 9, 1)]

    def test_empty(self):
        assert deduplicate_edges([]) == []
        assert deduplicate_edge_array(np.empty((0, 2))).shape == (0, 3)

    def test_sorted_by_u_then_v(self):
        result = deduplicate_edges([(4, 0), (1, 3), (0, 2), (3, 1), (0, 1)])
        assert result == [(0, 1, 1), (0, 2, 1), (0, 4, 1), (1, 3, 2)]

    def test_round_trip(self):
        rng = np.random.default_rng(8)
        raw = rng.integers(0, 30, size=(2000, 2))
        raw = raw[raw[:, 0] != raw[:, 1]]
        triples = deduplicate_edge_array(raw)
        expanded = [tuple(e) for e in expand_edges(triples).tolist()]
        assert expanded == _canonical_sorted(raw.tolist())
        assert triples[:, 2].sum() == len(raw)

    def test_idempotent(self):
        rng = np.random.default_rng(9)
        raw = rng.integers(0, 10, size=(300, 2))
        once = deduplicate_edge_array(raw)
        twice = deduplicate_edge_array(expand_edges(once))
        assert np.array_equal(once, twice)
