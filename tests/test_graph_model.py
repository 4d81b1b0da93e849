# tests/test_graph_model.py
"""
GRAPH MODEL TESTS: Ranges, Masses and Connection Types
======================================================

The basic value types everything else is built on:
- Range / tighter_range combine expansion windows
- Mass equality is identity, type codes are the CSV export codes
- The connection type of a spring is fixed by its ORDERED endpoint types
"""

import pytest

from reservoir_arm.graph import (
    ConnectionType, GraphInvariantError, Mass, MassType, Spring, connection_type_for,
)
from reservoir_arm.ranges import Range, tighter_range


class TestRange:

    def test_tighter_range_inside(self):
        assert tighter_range(Range(-5, 5), Range(-2, 2)) == Range(-2, 2)

    def test_tighter_range_overlapping(self):
        assert tighter_range(Range(-5, 5), Range(-2, 10)) == Range(-2, 5)

    def test_tighter_range_wider_first(self):
        assert tighter_range(Range(-500, 500), Range(-2, 10)) == Range(-2, 10)

    def test_disjoint_ranges_give_reversed_range(self):
        """No exception: the result simply has min > max."""
        result = tighter_range(Range(0, 1), Range(5, 6))
        assert result == Range(5, 1)
        assert result.width < 0

    def test_contains_is_inclusive(self):
        r = Range(1.0, 3.0)
        assert r.contains(1.0)
        assert r.contains(3.0)
        assert not r.contains(3.0001)


class TestMass:

    def test_default_type_is_network(self):
        assert Mass(1, 2).type is MassType.NETWORK

    def test_equality_is_identity(self):
        """Two masses at the same place are still two masses."""
        a = Mass(1.0, 2.0)
        b = Mass(1.0, 2.0)
        assert a != b
        assert a == a

    def test_none_type_rejected(self):
        with pytest.raises(ValueError):
            Mass(0, 0, None)

    def test_distance(self):
        assert Mass(0, 0).distance_to(Mass(3, 4)) == pytest.approx(5.0)

    def test_export_codes(self):
        codes = {t: t.code for t in MassType}
        assert codes == {
            MassType.SHOULDER: "f",
            MassType.ELBOW: "i",
            MassType.HAND: "e",
            MassType.ARM_SEGMENT: "r",
            MassType.INPUT: "i",
            MassType.NETWORK: "t",
        }

    def test_from_code_shared_code_resolves_to_input(self):
        assert MassType.from_code("i") is MassType.INPUT
        assert MassType.from_code("f") is MassType.SHOULDER
        assert MassType.from_code("t") is MassType.NETWORK

    def test_from_code_unknown(self):
        with pytest.raises(ValueError):
            MassType.from_code("x")


# Every ordered pair with its expected type, checked in both directions
TYPE_PAIRS = [
    (MassType.SHOULDER, MassType.ARM_SEGMENT, ConnectionType.ROBOT_ARM_BASE, ConnectionType.ROBOT_ARM_BASE),
    (MassType.SHOULDER, MassType.INPUT, ConnectionType.FIXED, ConnectionType.FIXED),
    (MassType.SHOULDER, MassType.NETWORK, ConnectionType.FIXED, ConnectionType.SPRING),
    (MassType.ELBOW, MassType.ARM_SEGMENT, ConnectionType.FIXED, ConnectionType.FIXED),
    (MassType.HAND, MassType.ARM_SEGMENT, ConnectionType.FIXED, ConnectionType.FIXED),
    (MassType.ARM_SEGMENT, MassType.ARM_SEGMENT, ConnectionType.ROBOT_ARM_JOINT, ConnectionType.ROBOT_ARM_JOINT),
    (MassType.ARM_SEGMENT, MassType.INPUT, ConnectionType.FIXED, ConnectionType.FIXED),
    (MassType.INPUT, MassType.NETWORK, ConnectionType.SPRING, ConnectionType.SPRING),
    (MassType.INPUT, MassType.INPUT, ConnectionType.FIXED, ConnectionType.FIXED),
    (MassType.NETWORK, MassType.NETWORK, ConnectionType.SPRING, ConnectionType.SPRING),
    (MassType.HAND, MassType.NETWORK, ConnectionType.FIXED, ConnectionType.SPRING),
]


@pytest.mark.parametrize("first, second, forward, backward", TYPE_PAIRS)
def test_connection_type_table(first, second, forward, backward):
    assert connection_type_for(first, second) is forward
    assert connection_type_for(second, first) is backward


def test_spring_type_fixed_at_construction():
    shoulder = Mass(0, 1, MassType.SHOULDER)
    segment = Mass(0, 1, MassType.ARM_SEGMENT)
    spring = Spring(shoulder, segment)
    assert spring.connection_type is ConnectionType.ROBOT_ARM_BASE

    with pytest.raises(AttributeError):
        spring.connection_type = ConnectionType.FIXED


def test_spring_rejects_none():
    with pytest.raises(ValueError):
        Spring(Mass(0, 0), None)


def test_connection_type_codes():
    assert [c.value for c in ConnectionType] == [1, 2, 3, 4, 5, 6, 7]
    assert str(ConnectionType.FIXED) == "5"


def test_graph_invariant_error_is_runtime_error():
    assert issubclass(GraphInvariantError, RuntimeError)
