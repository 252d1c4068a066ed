"""Tests for instance generators."""

import pytest

from satgirgs.config import HyperbolicConfig, SatGirgConfig
from satgirgs.generators import (
    GENERATOR_REGISTRY,
    HyperbolicGenerator,
    SatGirgGenerator,
    generate_hyperbolic,
    generate_satgirg,
    get_generator,
    list_generators,
)


# ── Helpers ──────────────────────────────────────────────────────────

def _assert_valid_graph(graph: dict, expected_size: int):
    """Verify a graph dict has the right structure."""
    assert "nodes" in graph
    assert "edges" in graph
    assert "metadata" in graph
    assert len(graph["nodes"]) == expected_size

    nodes = set(graph["nodes"])
    for edge in graph["edges"]:
        assert edge["source"] in nodes
        assert edge["target"] in nodes
        assert edge["source"] != edge["target"]  # no self-loops
        assert edge["weight"] >= 1


# ── Registry ─────────────────────────────────────────────────────────

def test_registry_lists_all():
    assert set(GENERATOR_REGISTRY) == {"satgirg", "hyperbolic"}
    assert list_generators() == ["hyperbolic", "satgirg"]


def test_get_generator_unknown():
    with pytest.raises(ValueError, match="Unknown generator"):
        get_generator("nope")


# ── SAT-GIRG ─────────────────────────────────────────────────────────

class TestSatGirg:
    def test_basic(self):
        g = SatGirgGenerator().generate(100, seed=42, parallel=False)
        _assert_valid_graph(g, 100)
        assert g["metadata"]["generator"] == "satgirg"
        assert g["metadata"]["params"]["clauses"] == 100

    def test_one_edge_per_clause(self):
        g = SatGirgGenerator().generate(80, clauses=120, seed=1, parallel=False)
        assert sum(e["weight"] for e in g["edges"]) == 120

    def test_debug_mode_includes_clauses(self):
        g = SatGirgGenerator().generate(50, clauses=30, debug_mode=True, seed=3, parallel=False)
        _assert_valid_graph(g, 80)
        assert sum(e["weight"] for e in g["edges"]) == 60
        for edge in g["edges"]:
            # every edge joins a variable (< 50) and a clause (>= 50)
            assert min(edge["source"], edge["target"]) < 50
            assert max(edge["source"], edge["target"]) >= 50

    def test_deterministic(self):
        gen = SatGirgGenerator()
        g1 = gen.generate(60, seed=123, parallel=False)
        g2 = gen.generate(60, seed=123, parallel=False)
        assert g1["edges"] == g2["edges"]

    def test_default_seeds_are_fixed(self):
        a = generate_satgirg(SatGirgConfig(n=40, parallel=False))
        b = generate_satgirg(SatGirgConfig(n=40, parallel=False))
        assert a.edges.tolist() == b.edges.tolist()
        assert [n.position for n in a.nc_nodes] == [n.position for n in b.nc_nodes]

    def test_pipeline_graph(self):
        graph = generate_satgirg(SatGirgConfig(n=30, clauses=45, dimension=3, parallel=False))
        assert len(graph.nc_nodes) == 30
        assert len(graph.c_nodes) == 45
        assert graph.c_nodes[0].index == 30
        assert graph.nc_nodes[0].dimension == 3
        assert graph.total_multiplicity == 45
        rows = graph.edges.tolist()
        assert rows == sorted(rows)
        assert all(u < v for u, v, _ in rows)

    def test_parallel_matches_serial(self):
        serial = generate_satgirg(SatGirgConfig(n=200, parallel=False))
        parallel = generate_satgirg(SatGirgConfig(n=200, parallel=True, workers=4))
        assert serial.edges.tolist() == parallel.edges.tolist()

    def test_no_clauses(self):
        graph = generate_satgirg(SatGirgConfig(n=10, clauses=0, parallel=False))
        assert graph.edges.shape == (0, 3)
        assert graph.to_networkx().number_of_edges() == 0

    def test_invalid_size(self):
        with pytest.raises(ValueError):
            SatGirgGenerator().generate(1)


# ── Hyperbolic ───────────────────────────────────────────────────────

class TestHyperbolic:
    def test_basic(self):
        g = HyperbolicGenerator().generate(300, seed=42, parallel=False)
        _assert_valid_graph(g, 300)
        assert g["metadata"]["generator"] == "hyperbolic"
        assert all(e["weight"] == 1 for e in g["edges"])

    def test_deterministic(self):
        gen = HyperbolicGenerator()
        g1 = gen.generate(200, seed=7, parallel=False)
        g2 = gen.generate(200, seed=7, parallel=False)
        assert g1["edges"] == g2["edges"]

    def test_custom_radius(self):
        g = HyperbolicGenerator().generate(100, radius=6.0, seed=1, parallel=False)
        assert g["metadata"]["params"]["radius"] == 6.0

    def test_pipeline_graph(self):
        graph = generate_hyperbolic(HyperbolicConfig(n=150, parallel=False))
        assert len(graph.radii) == 150
        nodes = graph.nodes()
        assert len(nodes) == 150
        assert all(node.weight >= 1.0 for node in nodes)
