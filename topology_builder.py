"""
Utilities to generate seeded random graphs for shortest-path experiments.
"""

from typing import List, Tuple
import math
import random

from adjacency_list_graph import AdjacencyListGraph


def random_points(count: int, seed: int | None = None) -> List[Tuple[float, float]]:
    """Uniform points in the unit square, one per node id 0..count-1."""
    rng = random.Random(seed)
    return [(rng.random(), rng.random()) for _ in range(count)]


def build_random_graph(
    nodes: int,
    degree: int = 3,
    max_weight: float = 10.0,
    seed: int | None = None,
    directed: bool = False,
) -> AdjacencyListGraph:
    """
    Connect random points to their nearest neighbours.

    Args:
        nodes: number of nodes, labelled 0..nodes-1.
        degree: number of nearest nodes each node links to.
        max_weight: weight of a link spanning the unit-square diagonal;
            shorter links scale down linearly.
        seed: RNG seed for reproducibility.
        directed: when False every link is added in both directions with the
            same weight; when True only from each node to its neighbours, so
            some nodes may be unreachable.
    """
    points = random_points(nodes, seed=seed)
    graph = AdjacencyListGraph()
    for node in range(nodes):
        graph.add_node(node)

    if degree <= 0:
        return graph

    scale = max_weight / math.sqrt(2.0)
    for node, (x, y) in enumerate(points):
        distances: List[tuple[float, int]] = []
        for other, (ox, oy) in enumerate(points):
            if other == node:
                continue
            distances.append((math.hypot(x - ox, y - oy), other))

        distances.sort()
        for dist, neighbor in distances[:degree]:
            weight = round(dist * scale, 6)
            if directed:
                graph.add_edge(node, neighbor, weight)
            else:
                graph.add_undirected_edge(node, neighbor, weight)
    return graph
