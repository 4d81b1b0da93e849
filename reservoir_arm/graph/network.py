# reservoir_arm/graph/network.py
"""
NETWORK GRAPH: Robot Arm Plus Mass-Spring Network
=================================================

PURPOSE:
--------
NetworkGraph owns the masses and springs of one robot arm and the network
attached to it. It is deliberately a pair of ordered lists:

    masses   insertion order = export index (never re-sorted)
    springs  insertion order = construction order

Removing a mass shifts the index of every later mass. Nothing else reorders
the lists.

SKELETON vs NETWORK:
--------------------
Shoulder, elbow, hand, arm segments and inputs form the skeleton built from
the DSL. NETWORK masses are the randomly grown part; the growth engine
throws them away and regrows them on every run with
remove_mass_spring_network().
"""

from typing import Dict, List, Optional

from .mass import GraphInvariantError, Mass, MassType
from .spring import ENDPOINT_TOLERANCE, Spring, segments_cross
from ..ranges import Range


class NetworkGraph:
    """
    Ordered container of masses and springs.

    Examples:
    ---------
    >>> graph = NetworkGraph()
    >>> a, b = Mass(0, 0, MassType.INPUT), Mass(1, 1)
    >>> graph.add_masses(a, b)
    >>> spring = graph.add_spring(a, b)
    >>> graph.index_of(b)
    1
    """

    def __init__(self):
        self.masses: List[Mass] = []
        self.springs: List[Spring] = []

    def __repr__(self) -> str:
        return f"NetworkGraph(masses={len(self.masses)}, springs={len(self.springs)})"

    # ------------------------------------------------------------------
    # Masses
    # ------------------------------------------------------------------

    def add_masses(self, *masses: Mass) -> None:
        """
        Append masses in the given order.

        Raises:
        -------
        ValueError
            If no mass is given or one of them is None.
        """
        if not masses:
            raise ValueError("At least one mass has to be given.")
        if any(mass is None for mass in masses):
            raise ValueError("The argument may not contain None.")

        self.masses.extend(masses)

    def contains(self, mass: Mass) -> bool:
        return any(candidate is mass for candidate in self.masses)

    def index_of(self, mass: Mass) -> int:
        """
        Position of this exact mass instance in the mass list.

        Raises:
        -------
        GraphInvariantError
            If the mass is not part of this graph.
        """
        for index, candidate in enumerate(self.masses):
            if candidate is mass:
                return index
        raise GraphInvariantError("This mass is not in the given NetworkGraph.")

    def index_map(self) -> Dict[int, int]:
        """id(mass) -> index for all masses, first occurrence wins."""
        indices: Dict[int, int] = {}
        for index, mass in enumerate(self.masses):
            indices.setdefault(id(mass), index)
        return indices

    def masses_of_type(self, mass_type: MassType) -> List[Mass]:
        return [mass for mass in self.masses if mass.type is mass_type]

    def network_masses(self) -> List[Mass]:
        return self.masses_of_type(MassType.NETWORK)

    def inputs(self) -> List[Mass]:
        """Input masses in insertion order."""
        return self.masses_of_type(MassType.INPUT)

    def _first_of_type(self, mass_type: MassType) -> Optional[Mass]:
        for mass in self.masses:
            if mass.type is mass_type:
                return mass
        return None

    def shoulder(self) -> Optional[Mass]:
        return self._first_of_type(MassType.SHOULDER)

    def elbow(self) -> Optional[Mass]:
        return self._first_of_type(MassType.ELBOW)

    def hand(self) -> Optional[Mass]:
        return self._first_of_type(MassType.HAND)

    # ------------------------------------------------------------------
    # Springs
    # ------------------------------------------------------------------

    def add_spring(self, source: Mass, destination: Mass) -> Spring:
        """Create a spring source -> destination, append it and return it."""
        if source is None or destination is None:
            raise ValueError("The arguments may not be None.")

        spring = Spring(source, destination)
        self.springs.append(spring)
        return spring

    def remove_spring(self, spring: Spring) -> None:
        for index, candidate in enumerate(self.springs):
            if candidate is spring:
                del self.springs[index]
                return
        raise GraphInvariantError("This spring is not in the given NetworkGraph.")

    def springs_of(self, mass: Mass) -> List[Spring]:
        """All springs that have the mass as source or destination."""
        return [spring for spring in self.springs if spring.is_connected(mass)]

    def has_spring_between(self, mass1: Mass, mass2: Mass) -> bool:
        """Direction does not matter."""
        return any(spring.is_connected(mass2) for spring in self.springs_of(mass1))

    def sorted_springs(self) -> List[Spring]:
        """
        Springs in canonical export order.

        Sorted by (higher endpoint index, lower endpoint index). The index
        map is built once per call instead of scanning per comparison.

        Raises:
        -------
        GraphInvariantError
            If a spring references a mass that is not in this graph.
        """
        indices = self.index_map()

        def key(spring: Spring):
            try:
                i = indices[id(spring.source)]
                j = indices[id(spring.destination)]
            except KeyError:
                raise GraphInvariantError(
                    "A spring references a mass that is not in this NetworkGraph."
                ) from None
            return (max(i, j), min(i, j))

        return sorted(self.springs, key=key)

    # ------------------------------------------------------------------
    # Queries used by the growth engine
    # ------------------------------------------------------------------

    def would_cross_existing_springs(
        self, source: Mass, destination: Mass,
        tolerance: float = ENDPOINT_TOLERANCE
    ) -> bool:
        """True if a spring source -> destination would cross any spring."""
        p1, p2 = (source.x, source.y), (destination.x, destination.y)
        for spring in self.springs:
            q1, q2 = spring.line
            if segments_cross(p1, p2, q1, q2, tolerance):
                return True
        return False

    def find_reachable_masses_and_inputs(
        self, mass: Mass, distance_range: Range, exclude_crossings: bool,
        tolerance: float = ENDPOINT_TOLERANCE
    ) -> List[Mass]:
        """
        NETWORK and INPUT masses within distance_range of the given mass.

        Parameters:
        -----------
        mass : Mass
            Mass to search from (never part of the result)
        distance_range : Range
            Inclusive [min, max] ring around the mass
        exclude_crossings : bool
            Drop candidates whose spring would cross an existing spring

        Returns:
        --------
        List[Mass]
            Candidates in graph order, possibly empty
        """
        reachable = []

        for candidate in self.masses:
            if candidate is mass:
                continue
            if candidate.type not in (MassType.NETWORK, MassType.INPUT):
                continue
            if exclude_crossings and self.would_cross_existing_springs(mass, candidate, tolerance):
                continue

            distance = mass.distance_to(candidate)
            if distance_range.min <= distance <= distance_range.max:
                reachable.append(candidate)

        return reachable

    # ------------------------------------------------------------------
    # Removal
    # ------------------------------------------------------------------

    def remove_not_connected_network_masses(self) -> int:
        """Drop NETWORK masses without springs. Returns how many were removed."""
        before = len(self.masses)
        self.masses = [
            mass for mass in self.masses
            if not (mass.type is MassType.NETWORK and not self.springs_of(mass))
        ]
        return before - len(self.masses)

    def remove_mass_spring_network(self) -> None:
        """Remove every NETWORK mass and every spring touching one."""
        self.masses = [mass for mass in self.masses if mass.type is not MassType.NETWORK]
        self.springs = [
            spring for spring in self.springs
            if spring.source.type is not MassType.NETWORK
            and spring.destination.type is not MassType.NETWORK
        ]

    def reset(self) -> None:
        self.masses = []
        self.springs = []
