"""Tests for node records and distances."""

import numpy as np
import pytest

from satgirgs.nodes import Node, convert_to_nodes, node_arrays, torus_distance, weighted_distance


class TestDistances:
    def test_torus_wraps(self):
        assert torus_distance(np.array([0.05, 0.5]), np.array([0.95, 0.5])) == pytest.approx(0.1)

    def test_max_norm(self):
        assert torus_distance(np.array([0.1, 0.1]), np.array([0.2, 0.4])) == pytest.approx(0.3)

    def test_weights_shrink_distance(self):
        positions = np.array([[0.2, 0.2], [0.2, 0.2]])
        d = weighted_distance(positions, np.array([1.0, 4.0]), np.array([0.0, 0.0]), 1.0)
        assert d[0] == pytest.approx(0.04)
        assert d[1] == pytest.approx(0.01)

    def test_node_distance_symmetric(self):
        a = Node((0.1, 0.9), 2.0, 0)
        b = Node((0.7, 0.3), 3.0, 1)
        assert a.weighted_distance(b) == pytest.approx(b.weighted_distance(a))
        assert a.weighted_distance(b) == pytest.approx(0.4 ** 2 / 6.0)


class TestConversion:
    def test_offsets_indices(self):
        nodes = convert_to_nodes([[0.1], [0.2]], [1.0, 2.0], index_offset=5)
        assert [n.index for n in nodes] == [5, 6]
        assert nodes[1] == Node((0.2,), 2.0, 6)

    def test_length_mismatch(self):
        with pytest.raises(ValueError, match="positions"):
            convert_to_nodes([[0.1]], [1.0, 2.0])

    def test_node_arrays(self):
        positions, weights, indices = node_arrays(convert_to_nodes([[0.1, 0.2]], [3.0], 4))
        assert positions.shape == (1, 2)
        assert weights.tolist() == [3.0]
        assert indices.tolist() == [4]
