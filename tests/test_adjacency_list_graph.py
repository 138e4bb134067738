"""
Unit tests for AdjacencyListGraph and MappingGraph.
"""

import math

import numpy as np
import pytest

from adjacency_list_graph import AdjacencyListGraph
from graph import MappingGraph


def test_add_nodes_and_edges():
    g = AdjacencyListGraph()

    g.add_edge("A", "B", 1.0)
    g.add_edge("A", "C", 2.0)
    g.add_edge("B", "C", 3.0)

    assert set(g.nodes()) == {"A", "B", "C"}

    assert g.outgoing("A") == {"B": 1.0, "C": 2.0}
    assert g.outgoing("B") == {"C": 3.0}
    assert g.outgoing("C") == {}
    assert g.edge_count() == 3


def test_outgoing_returns_copy():
    g = AdjacencyListGraph()
    g.add_edge(1, 2, 1.0)

    out = g.outgoing(1)
    out.clear()

    assert g.outgoing(1) == {2: 1.0}


def test_outgoing_unknown_node_is_empty():
    assert AdjacencyListGraph().outgoing("missing") == {}


def test_add_undirected_edge_adds_both_directions():
    g = AdjacencyListGraph()
    g.add_undirected_edge(1, 2, 4.0)
    assert g.outgoing(1) == {2: 4.0}
    assert g.outgoing(2) == {1: 4.0}


def test_from_edges_keeps_isolated_nodes():
    g = AdjacencyListGraph.from_edges([(1, 2, 1.0)], nodes=[3])
    assert set(g.nodes()) == {1, 2, 3}
    assert g.outgoing(3) == {}


def test_from_edges_undirected():
    g = AdjacencyListGraph.from_edges([(1, 2, 1.0), (2, 3, 2.0)], directed=False)
    assert g.outgoing(2) == {1: 1.0, 3: 2.0}
    assert g.edge_count() == 4


def test_to_directed_mirrors_one_way_edges():
    g = AdjacencyListGraph.from_edges([("a", "b", 1.0), ("b", "c", 2.0), ("c", "b", 5.0)])
    d = g.to_directed()

    assert d.outgoing("b") == {"a": 1.0, "c": 2.0}
    # Explicit reverse edges keep their own weight.
    assert d.outgoing("c") == {"b": 5.0}
    # Original is untouched.
    assert g.outgoing("b") == {"c": 2.0}


def test_from_matrix_skips_zero_and_infinite_entries():
    m = np.array(
        [
            [0.0, 2.0, math.inf],
            [2.0, 0.0, 3.5],
            [np.nan, 0.0, 7.0],
        ]
    )
    g = AdjacencyListGraph.from_matrix(m)

    assert set(g.nodes()) == {0, 1, 2}
    assert g.outgoing(0) == {1: 2.0}
    assert g.outgoing(1) == {0: 2.0, 2: 3.5}
    # Diagonal entries are not self-loops.
    assert g.outgoing(2) == {}


def test_from_matrix_with_labels():
    g = AdjacencyListGraph.from_matrix([[0, 1], [0, 0]], labels=["x", "y"])
    assert g.outgoing("x") == {"y": 1.0}
    assert g.outgoing("y") == {}


def test_from_matrix_keeps_zero_weights_without_missing_marker():
    inf = math.inf
    m = [
        [0.0, 0.0, inf],
        [inf, 0.0, 2.0],
        [0.0, inf, 0.0],
    ]
    g = AdjacencyListGraph.from_matrix(m, missing=None)
    assert g.outgoing(0) == {1: 0.0}
    assert g.outgoing(1) == {2: 2.0}
    assert g.outgoing(2) == {0: 0.0}


def test_from_matrix_custom_missing_marker():
    g = AdjacencyListGraph.from_matrix([[-1, 0], [-1, -1]], missing=-1)
    assert g.outgoing(0) == {1: 0.0}
    assert g.outgoing(1) == {}


def test_from_matrix_rejects_bad_shapes():
    with pytest.raises(ValueError):
        AdjacencyListGraph.from_matrix([[0, 1, 2], [1, 0, 2]])
    with pytest.raises(ValueError):
        AdjacencyListGraph.from_matrix([[0, 1], [1, 0]], labels=["only-one"])


def test_mapping_graph_borrows_mapping():
    adj = {1: {2: 1.0}, 2: {}}
    g = MappingGraph(adj)
    assert list(g.nodes()) == [1, 2]
    adj[2][1] = 3.0
    assert g.outgoing(2) == {1: 3.0}
    assert g.outgoing(99) == {}
