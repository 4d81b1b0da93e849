# tests/test_network_graph.py
"""
NETWORK GRAPH TESTS: Crossing, Ordering and Graph Queries
=========================================================

Crossing rule:
    intersecting segments cross unless they share exactly one endpoint

Ordering rule:
    springs sort by (higher endpoint index, lower endpoint index), where the
    index is the position of the mass in the graph
"""

import pytest

from reservoir_arm.graph import GraphInvariantError, Mass, MassType, NetworkGraph
from reservoir_arm.graph.spring import segments_cross, segments_intersect
from reservoir_arm.ranges import Range


# =============================================================================
# Crossing
# =============================================================================

@pytest.fixture
def crossing_graph():
    graph = NetworkGraph()
    left1, right1 = Mass(-100, 1), Mass(100, 1)
    left2, right2 = Mass(-100, 2), Mass(100, 2)
    bottom, top = Mass(1, 0), Mass(1, 10)
    graph.add_masses(left1, right1, left2, right2, bottom, top)

    horizontal1 = graph.add_spring(left1, right1)
    horizontal2 = graph.add_spring(left2, right2)
    vertical = graph.add_spring(bottom, top)
    return horizontal1, horizontal2, vertical


def test_parallel_springs_do_not_cross(crossing_graph):
    horizontal1, horizontal2, _ = crossing_graph
    assert not horizontal1.is_crossing(horizontal2)
    assert not horizontal2.is_crossing(horizontal1)


def test_vertical_crosses_both_horizontals(crossing_graph):
    horizontal1, horizontal2, vertical = crossing_graph
    assert vertical.is_crossing(horizontal1)
    assert vertical.is_crossing(horizontal2)
    assert horizontal1.is_crossing(vertical)


def test_spring_crosses_itself(crossing_graph):
    """Both endpoints shared: still a crossing."""
    _, _, vertical = crossing_graph
    assert vertical.is_crossing(vertical)


def test_springs_sharing_one_endpoint_do_not_cross():
    a, b, c = Mass(0, 0), Mass(1, 1), Mass(0, 2)
    graph = NetworkGraph()
    graph.add_masses(a, b, c)
    s1 = graph.add_spring(a, b)
    s2 = graph.add_spring(c, b)
    assert not s1.is_crossing(s2)


def test_shared_endpoint_within_tolerance():
    assert segments_intersect((0, 0), (1, 1), (0, 2), (1, 1 - 1e-10))
    assert not segments_cross((0, 0), (1, 1), (0, 2), (1, 1 - 1e-10))
    # a visible gap is no shared endpoint, and the segments do not touch
    assert not segments_intersect((0, 0), (1, 1), (0, 2), (1, 1.5))


def test_collinear_overlap_counts_as_crossing():
    assert segments_cross((0, 0), (2, 0), (1, 0), (3, 0))


# =============================================================================
# Ordering
# =============================================================================

class TestSpringOrdering:

    def setup_method(self):
        self.graph = NetworkGraph()
        self.m1, self.m2, self.m3, self.m4 = Mass(5, 6), Mass(11, 12), Mass(7, 13), Mass(8, 14)
        self.graph.add_masses(self.m1, self.m2, self.m3, self.m4)
        self.s0 = self.graph.add_spring(self.m2, self.m4)   # (3, 1)
        self.s1 = self.graph.add_spring(self.m1, self.m2)   # (1, 0)
        self.s2 = self.graph.add_spring(self.m3, self.m4)   # (3, 2)
        self.s3 = self.graph.add_spring(self.m1, self.m3)   # (2, 0)

    def test_compare(self):
        g = self.graph
        assert self.s0.compare(self.s1, g) > 0
        assert self.s1.compare(self.s3, g) < 0
        assert self.s3.compare(self.s2, g) < 0
        assert self.s0.compare(self.s2, g) < 0
        assert self.s0.compare(self.s3, g) > 0
        assert self.s2.compare(self.s3, g) > 0
        assert self.s0.compare(self.s0, g) == 0

    def test_compare_none(self):
        with pytest.raises(ValueError):
            self.s0.compare(None, self.graph)

    def test_sorted_springs(self):
        assert self.graph.sorted_springs() == [self.s1, self.s3, self.s0, self.s2]

    def test_higher_and_lower_index(self):
        assert self.s0.mass_with_higher_index(self.graph) is self.m4
        assert self.s0.mass_with_lower_index(self.graph) is self.m2

    def test_foreign_mass_in_spring(self):
        stranger = Mass(0, 0)
        spring = NetworkGraph().add_spring(self.m1, stranger)
        self.graph.springs.append(spring)
        with pytest.raises(GraphInvariantError):
            self.graph.sorted_springs()


# =============================================================================
# Masses and springs
# =============================================================================

def test_add_masses_validation():
    graph = NetworkGraph()
    with pytest.raises(ValueError):
        graph.add_masses()
    with pytest.raises(ValueError):
        graph.add_masses(Mass(0, 0), None)
    assert graph.masses == []


def test_index_of_uses_identity():
    graph = NetworkGraph()
    a, b = Mass(1, 1), Mass(1, 1)
    graph.add_masses(a, b)
    assert graph.index_of(a) == 0
    assert graph.index_of(b) == 1

    with pytest.raises(GraphInvariantError):
        graph.index_of(Mass(1, 1))


def test_remove_spring_not_in_graph():
    graph = NetworkGraph()
    a, b = Mass(0, 0), Mass(1, 1)
    graph.add_masses(a, b)
    spring = NetworkGraph().add_spring(a, b)
    with pytest.raises(GraphInvariantError):
        graph.remove_spring(spring)


def test_type_queries():
    graph = NetworkGraph()
    shoulder = Mass(0, 0, MassType.SHOULDER)
    first_input, second_input = Mass(0, 1, MassType.INPUT), Mass(0, 2, MassType.INPUT)
    hand = Mass(0, 3, MassType.HAND)
    graph.add_masses(shoulder, first_input, Mass(4, 4), second_input, hand)

    assert graph.shoulder() is shoulder
    assert graph.hand() is hand
    assert graph.elbow() is None
    assert graph.inputs() == [first_input, second_input]
    assert len(graph.network_masses()) == 1


def test_has_spring_between_ignores_direction():
    graph = NetworkGraph()
    a, b, c = Mass(0, 0), Mass(1, 0), Mass(2, 0)
    graph.add_masses(a, b, c)
    graph.add_spring(b, a)
    assert graph.has_spring_between(a, b)
    assert graph.has_spring_between(b, a)
    assert not graph.has_spring_between(a, c)


def test_find_reachable_masses_and_inputs():
    """Only NETWORK and INPUT masses in the distance ring, never the mass itself."""
    graph = NetworkGraph()
    center = Mass(0, 0, MassType.INPUT)
    near = Mass(1, 0)
    ring = Mass(0, 2)
    ring_input = Mass(-2, 0, MassType.INPUT)
    far = Mass(10, 0)
    skeleton = Mass(0, -2, MassType.HAND)
    graph.add_masses(center, near, ring, ring_input, far, skeleton)

    reachable = graph.find_reachable_masses_and_inputs(center, Range(1.5, 2.5), False)
    assert reachable == [ring, ring_input]


def test_find_reachable_excludes_crossings():
    graph = NetworkGraph()
    center = Mass(0, 0, MassType.INPUT)
    blocked = Mass(0, 2)
    free = Mass(2, 0)
    wall_left, wall_right = Mass(-1, 1, MassType.INPUT), Mass(1, 1, MassType.INPUT)
    graph.add_masses(center, blocked, free, wall_left, wall_right)
    graph.add_spring(wall_left, wall_right)

    with_crossings = graph.find_reachable_masses_and_inputs(center, Range(1.9, 2.1), False)
    without = graph.find_reachable_masses_and_inputs(center, Range(1.9, 2.1), True)
    assert with_crossings == [blocked, free]
    assert without == [free]


def test_remove_mass_spring_network_keeps_skeleton():
    graph = NetworkGraph()
    shoulder = Mass(0, 0, MassType.SHOULDER)
    inp = Mass(0, 1, MassType.INPUT)
    net = Mass(2, 2)
    graph.add_masses(shoulder, inp, net)
    kept = graph.add_spring(shoulder, inp)
    graph.add_spring(inp, net)

    graph.remove_mass_spring_network()
    assert graph.masses == [shoulder, inp]
    assert graph.springs == [kept]


def test_remove_not_connected_network_masses():
    graph = NetworkGraph()
    inp = Mass(0, 1, MassType.INPUT)
    lonely, connected = Mass(5, 5), Mass(2, 2)
    graph.add_masses(inp, lonely, connected)
    graph.add_spring(inp, connected)

    assert graph.remove_not_connected_network_masses() == 1
    assert graph.masses == [inp, connected]
    # removal shifts later indices
    assert graph.index_of(connected) == 1
