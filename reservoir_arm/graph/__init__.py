# reservoir_arm/graph - Mass-spring graph data model
"""
GRAPH: MASSES, SPRINGS AND THE NETWORK GRAPH
============================================

    mass.py      Mass, MassType, GraphInvariantError
    spring.py    Spring, ConnectionType, crossing predicate
    network.py   NetworkGraph (ordered masses + springs)

USAGE:
------
    from reservoir_arm.graph import Mass, MassType, NetworkGraph

    graph = NetworkGraph()
    shoulder = Mass(0, 1, MassType.SHOULDER)
    segment = Mass(0, 1, MassType.ARM_SEGMENT)
    graph.add_masses(shoulder, segment)
    graph.add_spring(shoulder, segment)   # ConnectionType.ROBOT_ARM_BASE
"""

from .mass import Mass, MassType, GraphInvariantError
from .spring import ConnectionType, Spring, connection_type_for, segments_cross
from .network import NetworkGraph

__all__ = [
    'Mass', 'MassType', 'GraphInvariantError',
    'ConnectionType', 'Spring', 'connection_type_for', 'segments_cross',
    'NetworkGraph',
]
