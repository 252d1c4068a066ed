"""Abstract base classes for generated graphs and instance generators."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Iterable

import networkx as nx


class GeneratedGraph(ABC):
    """A generated graph that can be exported."""

    @abstractmethod
    def node_ids(self) -> list[int]:
        """Ids of every node that belongs to the graph."""

    @abstractmethod
    def weighted_edges(self) -> Iterable[tuple[int, int, int]]:
        """Edges as ``(u, v, multiplicity)`` triples."""

    @abstractmethod
    def save_dot(self, path) -> None:
        """Write the graph in Graphviz format."""

    def to_networkx(self) -> nx.Graph:
        G = nx.Graph()
        G.add_nodes_from(self.node_ids())
        G.add_weighted_edges_from(self.weighted_edges())
        return G


class BaseGenerator(ABC):
    """
    Base class for graph instance generators.

    Every generator produces a standardised graph dict::

        {
            "nodes": [0, 1, 2, ...],
            "edges": [
                {"source": 0, "target": 1, "weight": 2},
                ...
            ],
            "metadata": {
                "generator": "satgirg",
                "size": 100,
                "params": {"ple": 2.5},
            }
        }

    where an edge ``weight`` is the number of times the edge was sampled.
    """

    name: str = "base"

    @abstractmethod
    def build(self, size: int, **params: Any) -> tuple[GeneratedGraph, dict[str, Any]]:
        """
        Generate a graph instance.

        Parameters
        ----------
        size : int
            Size of the primary node population.
        **params
            Generator-specific parameters.

        Returns
        -------
        tuple
            The generated graph and the effective parameters used.
        """

    def generate(self, size: int, **params: Any) -> dict:
        """Generate a graph instance as a standard graph dict."""
        graph, effective = self.build(size, **params)
        return self._nx_to_dict(graph.to_networkx(), self.name, size, effective)

    # ------------------------------------------------------------------
    # Helpers shared by all generators
    # ------------------------------------------------------------------

    @staticmethod
    def _nx_to_dict(
        G,  # noqa: N803  (networkx convention)
        generator_name: str,
        size: int,
        params: dict[str, Any],
    ) -> dict:
        """Convert a ``networkx.Graph`` to the standard dict format."""
        edges = []
        for u, v, data in G.edges(data=True):
            edges.append({
                "source": u,
                "target": v,
                "weight": data.get("weight", 1),
            })
        return {
            "nodes": list(G.nodes()),
            "edges": edges,
            "metadata": {
                "generator": generator_name,
                "size": size,
                "params": params,
            },
        }
