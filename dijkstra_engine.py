"""
Dijkstra shortest paths over an indexed priority queue.

Every graph node is queued up front and relaxed in place with
change_priority, so the queue never holds stale entries. A lazy-deletion
heapq variant is kept alongside as a cross-check baseline.
"""

from types import MappingProxyType
from typing import Dict, Hashable, List, Mapping, NamedTuple, Optional, Union
import heapq
import math

from algorithms import ShortestPathEngine
from graph import Graph, MappingGraph
from priority_queue import IndexedPriorityQueue

# Distance of a node with no known path from the source.
UNREACHED = None


class UnreachableError(LookupError):
    """No path from the source to the requested destination."""


class PathHop(NamedTuple):
    node: Hashable
    weight: float             # cost of the edge into this node (0 for the source)
    cumulative_weight: float  # cost from the source to this node


def _queue_priority(distance: Optional[float]) -> float:
    return math.inf if distance is UNREACHED else distance


class DijkstraEngine(ShortestPathEngine):
    """
    Single-source Dijkstra run, computed entirely in the constructor.

    Undirected graphs must store each edge in both directions with the same
    weight; for them, neighbours already settled are skipped. Weights must be
    non-negative and the source must be a graph node. Neither is checked,
    and breaking either silently yields wrong distances. Neighbours that are
    not graph nodes are ignored in both modes.

    Complexity:
        O((V + E) log V)
    """

    def __init__(
        self,
        graph: Union[Graph, Mapping[Hashable, Mapping[Hashable, float]]],
        source: Hashable,
        directed: bool = False,
    ) -> None:
        if not isinstance(graph, Graph):
            graph = MappingGraph(graph)

        self._graph = graph
        self._source = source
        self._directed = directed
        self._queue = IndexedPriorityQueue()
        self._distances: Dict[Hashable, Optional[float]] = {}
        self._previous: Dict[Hashable, Optional[Hashable]] = {}

        for node in graph.nodes():
            self._distances[node] = UNREACHED
            self._previous[node] = None
        self._distances[source] = 0

        self._queue.push(source, 0)
        for node in graph.nodes():
            if node != source:
                self._queue.push(node, _queue_priority(self._distances[node]))

        self._run()

    @property
    def source(self) -> Hashable:
        return self._source

    @property
    def directed(self) -> bool:
        return self._directed

    def _run(self) -> None:
        while not self._queue.is_empty():
            current = self._queue.pop()
            base = self._distances[current]
            if base is UNREACHED:
                continue

            for neighbor, weight in self._neighbors(current).items():
                if neighbor not in self._distances:
                    continue
                alt = base + weight
                best = self._distances[neighbor]
                if best is UNREACHED or alt < best:
                    self._distances[neighbor] = alt
                    self._previous[neighbor] = current
                    self._queue.change_priority(neighbor, alt)

    def _neighbors(self, node: Hashable) -> Mapping[Hashable, float]:
        outgoing = self._graph.outgoing(node)
        if self._directed:
            return outgoing
        # Symmetric, non-negative edges cannot improve a settled node.
        return {v: w for v, w in outgoing.items() if self._queue.contains(v)}

    # --- Results -------------------------------------------------------------

    def distances(self) -> Mapping[Hashable, Optional[float]]:
        return MappingProxyType(self._distances)

    def previous(self) -> Mapping[Hashable, Optional[Hashable]]:
        return MappingProxyType(self._previous)

    def shortest_path_to(self, destination: Hashable) -> List[PathHop]:
        """
        Hops from the source to destination, source first.

        The source hop has weight 0 and cumulative weight 0; every other hop
        carries the cost of the edge into it and its distance from the source.

        Raises:
            UnreachableError: destination was never reached (or is not a node).
        """
        if self._distances.get(destination, UNREACHED) is UNREACHED:
            raise UnreachableError(
                f"{destination!r} is not reachable from {self._source!r}"
            )

        reversed_nodes: List[Hashable] = []
        node = destination
        while node != self._source:
            reversed_nodes.append(node)
            node = self._previous[node]

        path = [PathHop(self._source, 0, 0)]
        for node in reversed(reversed_nodes):
            cumulative = self._distances[node]
            path.append(PathHop(node, cumulative - path[-1].cumulative_weight, cumulative))
        return path


def baseline_distances(graph: Graph, source: Hashable) -> Dict[Hashable, float]:
    """
    Plain heapq Dijkstra with lazy deletion of outdated entries.

    Returns costs for reachable nodes only. Used to cross-check
    DijkstraEngine on generated graphs.
    """
    dist: Dict[Hashable, float] = {source: 0}
    pq = [(0, 0, source)]  # (distance, tie-breaker, node)
    counter = 1

    while pq:
        d_u, _, u = heapq.heappop(pq)
        # Skip outdated entries
        if d_u != dist.get(u, math.inf):
            continue

        for v, w in graph.outgoing(u).items():
            alt = d_u + w
            if alt < dist.get(v, math.inf):
                dist[v] = alt
                heapq.heappush(pq, (alt, counter, v))
                counter += 1

    return dist
