"""
Directed, weighted graph abstraction for the shortest-path engine.

Nodes are any hashable identifiers (usually ints).
Edges are directed: u -> v with a non-negative weight.
"""

from abc import ABC, abstractmethod
from typing import Hashable, Iterable, Mapping


class Graph(ABC):
    """Directed, weighted graph over hashable node ids."""

    @abstractmethod
    def nodes(self) -> Iterable[Hashable]:
        """Return all nodes in the graph."""
        raise NotImplementedError

    @abstractmethod
    def outgoing(self, node: Hashable) -> Mapping[Hashable, float]:
        """
        Outgoing neighbors and edge weights for a given node.

        Returns: mapping neighbor -> weight
        """
        raise NotImplementedError


class MappingGraph(Graph):
    """
    Read-only Graph view over a plain node -> (neighbor -> weight) mapping.

    The mapping is borrowed, not copied. Every neighbor is expected to also
    be a key of the mapping.
    """

    def __init__(self, adjacency: Mapping[Hashable, Mapping[Hashable, float]]) -> None:
        self._adj = adjacency

    def nodes(self) -> Iterable[Hashable]:
        return self._adj.keys()

    def outgoing(self, node: Hashable) -> Mapping[Hashable, float]:
        return self._adj.get(node, {})
