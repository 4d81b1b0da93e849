# reservoir_arm/graph/spring.py
"""
SPRING: Typed Edges, Crossing Test and Export Ordering
======================================================

PURPOSE:
--------
A Spring connects two masses. What the physics simulator does with it is
decided by its ConnectionType, which is derived from the ORDERED pair of
endpoint types when the spring is built and never changes afterwards.

CONNECTION TABLE (source -> destination):
-----------------------------------------
    SHOULDER    -> ARM_SEGMENT   ROBOT_ARM_BASE
    SHOULDER    -> *             FIXED
    ARM_SEGMENT -> ARM_SEGMENT   ROBOT_ARM_JOINT
    ARM_SEGMENT -> SHOULDER      ROBOT_ARM_BASE
    ARM_SEGMENT -> *             FIXED
    INPUT       -> NETWORK       SPRING
    INPUT       -> *             FIXED
    ELBOW       -> *             FIXED
    HAND        -> *             FIXED
    NETWORK     -> *             SPRING

GEOMETRY:
---------
Two springs CROSS when their segments intersect and they are not joined at
exactly one shared endpoint. Endpoints closer than 1e-8 count as shared.
Sharing both endpoints (a spring against itself) still counts as crossing.

ORDERING:
---------
Springs are exported sorted by (higher endpoint index, lower endpoint index).
Indices belong to a NetworkGraph, so the graph is passed in explicitly.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Tuple

from .mass import GraphInvariantError, Mass, MassType

if TYPE_CHECKING:
    from .network import NetworkGraph

Point = Tuple[float, float]

ENDPOINT_TOLERANCE = 1e-8


class ConnectionType(Enum):
    """Constraint kinds understood by the physics simulator (value = export code)."""

    SPRING = 1
    POINT_TO_POINT = 2
    SLIDER = 3
    CONE_TWIST = 4
    FIXED = 5
    ROBOT_ARM_BASE = 6
    ROBOT_ARM_JOINT = 7

    def __str__(self) -> str:
        return str(self.value)


def connection_type_for(source: MassType, destination: MassType) -> ConnectionType:
    """
    Look up the connection type for an ordered (source, destination) pair.

    Raises:
    -------
    GraphInvariantError
        If the source type has no entry in the table.
    """
    if source is MassType.SHOULDER:
        if destination is MassType.ARM_SEGMENT:
            return ConnectionType.ROBOT_ARM_BASE
        return ConnectionType.FIXED

    if source is MassType.ARM_SEGMENT:
        if destination is MassType.ARM_SEGMENT:
            return ConnectionType.ROBOT_ARM_JOINT
        if destination is MassType.SHOULDER:
            return ConnectionType.ROBOT_ARM_BASE
        return ConnectionType.FIXED

    if source is MassType.INPUT:
        if destination is MassType.NETWORK:
            return ConnectionType.SPRING
        return ConnectionType.FIXED

    if source in (MassType.ELBOW, MassType.HAND):
        return ConnectionType.FIXED

    if source is MassType.NETWORK:
        return ConnectionType.SPRING

    raise GraphInvariantError(
        f"The given masses of the type {source} (source) respectively "
        f"{destination} (destination) cannot be connected via springs."
    )


def _orientation(a: Point, b: Point, c: Point) -> int:
    """Sign of the cross product (b - a) x (c - a)."""
    cross = (b[0] - a[0]) * (c[1] - a[1]) - (b[1] - a[1]) * (c[0] - a[0])
    if cross > 0:
        return 1
    if cross < 0:
        return -1
    return 0


def _on_segment(a: Point, b: Point, p: Point) -> bool:
    """True if p, known to be collinear with a-b, lies within the a-b box."""
    return (min(a[0], b[0]) <= p[0] <= max(a[0], b[0])
            and min(a[1], b[1]) <= p[1] <= max(a[1], b[1]))


def segments_intersect(p1: Point, p2: Point, q1: Point, q2: Point) -> bool:
    """
    Closed segment intersection test.

    Touching endpoints and collinear overlaps count as intersections.
    """
    o1 = _orientation(p1, p2, q1)
    o2 = _orientation(p1, p2, q2)
    o3 = _orientation(q1, q2, p1)
    o4 = _orientation(q1, q2, p2)

    if o1 != o2 and o3 != o4:
        return True

    if o1 == 0 and _on_segment(p1, p2, q1):
        return True
    if o2 == 0 and _on_segment(p1, p2, q2):
        return True
    if o3 == 0 and _on_segment(q1, q2, p1):
        return True
    if o4 == 0 and _on_segment(q1, q2, p2):
        return True

    return False


def _same_point(a: Point, b: Point, tolerance: float) -> bool:
    return ((a[0] - b[0]) ** 2 + (a[1] - b[1]) ** 2) ** 0.5 < tolerance


def connected_at_only_one_end(
    p1: Point, p2: Point, q1: Point, q2: Point,
    tolerance: float = ENDPOINT_TOLERANCE
) -> bool:
    """True when the segments share exactly one endpoint."""
    p1q1 = _same_point(p1, q1, tolerance)
    p1q2 = _same_point(p1, q2, tolerance)
    p2q1 = _same_point(p2, q1, tolerance)
    p2q2 = _same_point(p2, q2, tolerance)

    return ((p1q1 and not p2q2)
            or (p1q2 and not p2q1)
            or (p2q1 and not p1q2)
            or (p2q2 and not p1q1))


def segments_cross(
    p1: Point, p2: Point, q1: Point, q2: Point,
    tolerance: float = ENDPOINT_TOLERANCE
) -> bool:
    """Crossing predicate on raw segments (see module docstring)."""
    if not segments_intersect(p1, p2, q1, q2):
        return False
    return not connected_at_only_one_end(p1, p2, q1, q2, tolerance)


@dataclass(frozen=True, eq=False)
class Spring:
    """
    A spring between two masses.

    Springs are normally created through NetworkGraph.add_spring. The
    connection type is derived from (source.type, destination.type) and
    cannot be passed in.

    Parameters:
    -----------
    source : Mass
        Start mass (the order matters for the connection type)
    destination : Mass
        End mass
    """
    source: Mass
    destination: Mass
    connection_type: ConnectionType = field(init=False)

    def __post_init__(self):
        if self.source is None or self.destination is None:
            raise ValueError("The arguments may not be None.")
        object.__setattr__(
            self, "connection_type",
            connection_type_for(self.source.type, self.destination.type)
        )

    @property
    def line(self) -> Tuple[Point, Point]:
        return ((self.source.x, self.source.y),
                (self.destination.x, self.destination.y))

    @property
    def length(self) -> float:
        return self.source.distance_to(self.destination)

    def is_connected(self, mass: Mass) -> bool:
        """True if the mass is the source or the destination of this spring."""
        return self.source is mass or self.destination is mass

    def is_crossing(self, other: "Spring", tolerance: float = ENDPOINT_TOLERANCE) -> bool:
        """True if this and the other spring cross geometrically."""
        (p1, p2), (q1, q2) = self.line, other.line
        return segments_cross(p1, p2, q1, q2, tolerance)

    def mass_with_higher_index(self, graph: "NetworkGraph") -> Mass:
        if graph.index_of(self.source) > graph.index_of(self.destination):
            return self.source
        return self.destination

    def mass_with_lower_index(self, graph: "NetworkGraph") -> Mass:
        if graph.index_of(self.source) < graph.index_of(self.destination):
            return self.source
        return self.destination

    def sort_key(self, graph: "NetworkGraph") -> Tuple[int, int]:
        """(higher endpoint index, lower endpoint index) in the given graph."""
        i = graph.index_of(self.source)
        j = graph.index_of(self.destination)
        return (max(i, j), min(i, j))

    def compare(self, other: "Spring", graph: "NetworkGraph") -> int:
        """
        Three-way comparison in export order.

        Returns a negative number, zero or a positive number when this spring
        sorts before, together with or after the other one.
        """
        if other is None:
            raise ValueError("The argument may not be None.")

        this_high, this_low = self.sort_key(graph)
        other_high, other_low = other.sort_key(graph)

        if this_high != other_high:
            return this_high - other_high
        return this_low - other_low
