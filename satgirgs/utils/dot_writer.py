"""
Graphviz ``.dot`` export of generated graphs.

Nodes carry their weight as label and their position as a pinned ``pos``
attribute; edges carry their multiplicity as label.
"""

from __future__ import annotations

import logging
import os
from typing import Iterable, Sequence

from satgirgs.nodes import Node

logger = logging.getLogger(__name__)


def _node_line(node: Node, extra: str = "") -> str:
    pos = ",".join(f"{x:.6f}" for x in node.position)
    return f'\t{node.index} [{extra}label="{node.weight:.2f}", pos="{pos}!"];\n'


def save_dot(
    c_nodes: Sequence[Node],
    nc_nodes: Sequence[Node],
    graph: Iterable[tuple[int, int, int]],
    path: str | os.PathLike,
    debug_mode: bool = False,
) -> None:
    """
    Write the graph to ``path``.

    Clause nodes are only written in debug mode, where they are endpoints of
    edges; they are highlighted in red.

    Raises
    ------
    OSError
        If ``path`` cannot be opened for writing.
    """
    try:
        f = open(path, "w")
    except OSError as exc:
        raise OSError(f'Error: failed to open file "{os.fspath(path)}"') from exc

    edges = 0
    with f:
        f.write("graph girg {\n\toverlap=scale;\n\n")
        for node in nc_nodes:
            f.write(_node_line(node))
        if debug_mode:
            for node in c_nodes:
                f.write(_node_line(node, extra='color="red",style="filled", '))
        f.write("\n")
        for u, v, w in graph:
            f.write(f'\t{u}\t-- {v}[label="{w}"];\n')
            edges += 1
        f.write("}\n")

    logger.info("Wrote %d nodes and %d edges to %s", len(nc_nodes), edges, path)
