# reservoir_arm/graph/mass.py
"""
MASS: Typed Nodes of the Mass-Spring Network
============================================

PURPOSE:
--------
A Mass is a point in the 2D plane that springs attach to. The robot arm
(shoulder, elbow, hand, arm segments), the input nodes on the arm and the
randomly grown network are all made of masses; only their TYPE differs.

IDENTITY:
---------
Masses have no id field. Two masses at the same coordinates are still two
different masses, so equality is identity (eq=False). The position of a mass
inside its NetworkGraph is its only index, and that index is looked up on
demand by the graph (see NetworkGraph.index_of).

TYPES AND EXPORT CODES:
-----------------------
    SHOULDER     'f'  fixed to the ground (no force applied)
    ELBOW        'i'  joint between upper and lower arm
    HAND         'e'  end effector, follows the target curve
    ARM_SEGMENT  'r'  rigid robot arm segment
    INPUT        'i'  arm point shared by arm and network
    NETWORK      't'  free network mass (force applied)
"""

import math
from dataclasses import dataclass
from enum import Enum


class GraphInvariantError(RuntimeError):
    """Raised when the graph is used in a way its construction rules forbid."""
    pass


class MassType(Enum):
    """Mass type with its CSV export code and display colour."""

    SHOULDER = ("f", "red")
    ELBOW = ("i", "gray")
    HAND = ("e", "blue")
    ARM_SEGMENT = ("r", "lightgray")
    INPUT = ("i", "green")
    NETWORK = ("t", "white")

    def __init__(self, code: str, color: str):
        self.code = code
        self.color = color

    @classmethod
    def from_code(cls, code: str) -> "MassType":
        """
        Resolve an export code back to a type.

        'i' is shared by ELBOW and INPUT. Exported networks hold far more
        inputs than elbows, so 'i' resolves to INPUT.
        """
        if code == cls.INPUT.code:
            return cls.INPUT
        for mass_type in cls:
            if mass_type.code == code:
                return mass_type
        raise ValueError(f"The value '{code}' is not a valid mass type code.")

    @property
    def is_skeleton(self) -> bool:
        return self is not MassType.NETWORK


@dataclass(eq=False)
class Mass:
    """
    A mass at (x, y).

    Parameters:
    -----------
    x : float
        X-coordinate
    y : float
        Y-coordinate (the arm usually extends along +y)
    type : MassType
        Defaults to NETWORK

    Examples:
    ---------
    >>> shoulder = Mass(0.0, 1.0, MassType.SHOULDER)
    >>> free = Mass(2.5, 3.0)
    >>> free.type
    <MassType.NETWORK: ('t', 'white')>
    """
    x: float
    y: float
    type: MassType = MassType.NETWORK

    def __post_init__(self):
        if self.type is None:
            raise ValueError("The type may not be None.")

    def distance_to(self, other: "Mass") -> float:
        """Euclidean distance between this and the other mass."""
        return math.hypot(self.x - other.x, self.y - other.y)
