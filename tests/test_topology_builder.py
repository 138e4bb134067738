"""
Tests for seeded random graph generation.
"""

from topology_builder import build_random_graph, random_points


def test_random_points_are_seeded():
    assert random_points(10, seed=3) == random_points(10, seed=3)
    assert random_points(10, seed=3) != random_points(10, seed=4)
    assert all(0.0 <= x < 1.0 and 0.0 <= y < 1.0 for x, y in random_points(50, seed=1))


def test_same_seed_same_graph():
    a = build_random_graph(40, degree=3, seed=5)
    b = build_random_graph(40, degree=3, seed=5)
    for node in a.nodes():
        assert a.outgoing(node) == b.outgoing(node)


def test_undirected_graph_is_symmetric():
    g = build_random_graph(40, degree=3, seed=2, directed=False)
    for node in g.nodes():
        for neighbor, weight in g.outgoing(node).items():
            assert g.outgoing(neighbor)[node] == weight


def test_directed_graph_has_fixed_out_degree():
    g = build_random_graph(30, degree=4, seed=9, directed=True)
    assert set(g.nodes()) == set(range(30))
    for node in g.nodes():
        assert len(g.outgoing(node)) == 4
        assert node not in g.outgoing(node)
    assert g.edge_count() == 120


def test_weights_are_bounded_by_max_weight():
    g = build_random_graph(25, degree=5, max_weight=3.0, seed=1)
    for node in g.nodes():
        for weight in g.outgoing(node).values():
            assert 0.0 <= weight <= 3.0


def test_zero_degree_gives_isolated_nodes():
    g = build_random_graph(5, degree=0, seed=1)
    assert g.edge_count() == 0
    assert set(g.nodes()) == {0, 1, 2, 3, 4}
