"""
Concrete directed, weighted graph implementation.

Implements the Graph interface using a simple adjacency-list representation.
"""

from typing import Dict, Hashable, Iterable, Mapping, Optional, Sequence, Tuple

import numpy as np

from graph import Graph


class AdjacencyListGraph(Graph):
    """
    Directed, weighted graph backed by a node -> (neighbor -> weight) mapping.
    """

    def __init__(self) -> None:
        self._adj: Dict[Hashable, Dict[Hashable, float]] = {}

    @classmethod
    def from_edges(
        cls,
        edges: Iterable[Tuple[Hashable, Hashable, float]],
        directed: bool = True,
        nodes: Iterable[Hashable] = (),
    ) -> "AdjacencyListGraph":
        """
        Build a graph from (src, dst, weight) triples.

        Undirected input adds both directions with the same weight. Extra
        nodes (e.g. isolated ones) can be given through ``nodes``.
        """
        graph = cls()
        for node in nodes:
            graph.add_node(node)
        for src, dst, weight in edges:
            if directed:
                graph.add_edge(src, dst, weight)
            else:
                graph.add_undirected_edge(src, dst, weight)
        return graph

    @classmethod
    def from_matrix(
        cls,
        matrix: Sequence[Sequence[float]],
        labels: Optional[Sequence[Hashable]] = None,
        missing: Optional[float] = 0.0,
    ) -> "AdjacencyListGraph":
        """
        Build a graph from a square weight matrix.

        Entry [i][j] is the weight of i -> j. NaN, infinite and ``missing``
        entries mean "no edge"; the diagonal is ignored. Rows are labelled
        0..n-1 unless ``labels`` is given.

        With the default ``missing=0.0`` a zero-weight edge cannot be
        expressed; pass ``missing=None`` (and mark absent edges with inf or
        NaN) to keep zero entries as edges.
        """
        weights = np.asarray(matrix, dtype=float)
        if weights.ndim != 2 or weights.shape[0] != weights.shape[1]:
            raise ValueError(f"weight matrix must be square, got shape {weights.shape}")

        n = weights.shape[0]
        names = list(labels) if labels is not None else list(range(n))
        if len(names) != n:
            raise ValueError(f"expected {n} labels, got {len(names)}")

        graph = cls()
        for name in names:
            graph.add_node(name)

        present = np.isfinite(weights)
        if missing is not None:
            present &= weights != missing
        np.fill_diagonal(present, False)
        for i, j in zip(*np.nonzero(present)):
            graph.add_edge(names[i], names[j], float(weights[i, j]))
        return graph

    # --- Mutation API (construction only, not part of Graph interface) -------

    def add_node(self, node: Hashable) -> None:
        """Ensure node exists in the graph."""
        self._adj.setdefault(node, {})

    def add_edge(self, src: Hashable, dst: Hashable, weight: float) -> None:
        """
        Add or update a directed edge src -> dst with weight.
        Auto-adds nodes if they don't exist.
        """
        self.add_node(src)
        self.add_node(dst)
        self._adj[src][dst] = weight

    def add_undirected_edge(self, a: Hashable, b: Hashable, weight: float) -> None:
        """Add a -> b and b -> a with the same weight."""
        self.add_edge(a, b, weight)
        self.add_edge(b, a, weight)

    def edge_count(self) -> int:
        """Number of directed edges."""
        return sum(len(neighbors) for neighbors in self._adj.values())

    def to_directed(self) -> "AdjacencyListGraph":
        """
        Independent copy with every edge stored explicitly in both directions.

        An edge present in only one direction is mirrored with the same weight.
        """
        copy = AdjacencyListGraph()
        for node in self._adj:
            copy.add_node(node)
        for src, neighbors in self._adj.items():
            for dst, weight in neighbors.items():
                copy.add_edge(src, dst, weight)
                copy._adj[dst].setdefault(src, weight)
        return copy

    # --- Graph interface -----------------------------------------------------

    def nodes(self) -> Iterable[Hashable]:
        return self._adj.keys()

    def outgoing(self, node: Hashable) -> Mapping[Hashable, float]:
        return dict(self._adj.get(node, {}))  # defensive copy
