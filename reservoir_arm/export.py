# reservoir_arm/export.py
"""
CSV export and import for the physics simulator.

Two files describe one network:

    masses.csv          code,x,y,0[,j...]   one row per mass, in graph order;
                        j are the lower-indexed masses it is connected to
    connection_map.csv  higher,lower,code   one row per spring, sorted by
                        (higher, lower); code is the ConnectionType value

Lines starting with '#' are comments and are skipped on import.
"""

import csv
import io
from typing import List, Optional

from .graph.mass import Mass, MassType
from .graph.network import NetworkGraph
from .graph.spring import ConnectionType

MASSES_PREAMBLE = "# type,x,y,z[,connected lower-index masses]\n"
CONNECTION_MAP_PREAMBLE = "# higher index,lower index,connection type\n"


def _writer(output: io.StringIO):
    return csv.writer(output, lineterminator="\n")


def connections_to_prior_masses(mass: Mass, graph: NetworkGraph) -> List[int]:
    """Indices of lower-indexed masses connected to `mass`, ascending."""
    indices = graph.index_map()
    own = indices[id(mass)]
    prior = set()

    for spring in graph.springs_of(mass):
        other = spring.destination if spring.source is mass else spring.source
        index = indices.get(id(other))
        if index is not None and index < own:
            prior.add(index)

    return sorted(prior)


def to_masses_csv(graph: Optional[NetworkGraph]) -> str:
    """
    Masses of the graph as CSV text.

    >>> graph = NetworkGraph()
    >>> a, b = Mass(5, 6), Mass(11, 12)
    >>> graph.add_masses(a, b)
    >>> _ = graph.add_spring(a, b)
    >>> print(to_masses_csv(graph), end="")
    # type,x,y,z[,connected lower-index masses]
    t,5.0,6.0,0
    t,11.0,12.0,0,0
    """
    if graph is None:
        raise ValueError("The argument may not be None.")

    output = io.StringIO()
    output.write(MASSES_PREAMBLE)
    writer = _writer(output)

    for mass in graph.masses:
        row = [mass.type.code, float(mass.x), float(mass.y), 0]
        row.extend(connections_to_prior_masses(mass, graph))
        writer.writerow(row)

    return output.getvalue()


def to_connection_map_csv(graph: Optional[NetworkGraph]) -> str:
    """Springs of the graph as CSV text, in canonical order."""
    if graph is None:
        raise ValueError("The argument may not be None.")

    indices = graph.index_map()
    output = io.StringIO()
    output.write(CONNECTION_MAP_PREAMBLE)
    writer = _writer(output)

    for spring in graph.sorted_springs():
        i = indices[id(spring.source)]
        j = indices[id(spring.destination)]
        writer.writerow([max(i, j), min(i, j), spring.connection_type.value])

    return output.getvalue()


def _data_rows(text: str) -> List[List[str]]:
    lines = [line for line in text.splitlines()
             if line.strip() and not line.lstrip().startswith("#")]
    return [[cell.strip() for cell in row] for row in csv.reader(lines)]


def to_network_graph(masses_csv: Optional[str], connection_map_csv: Optional[str]) -> NetworkGraph:
    """
    Rebuild a NetworkGraph from the two CSV texts.

    Springs are created higher -> lower as they appear in the connection
    map; their connection type is derived again from the mass types.

    Raises:
    -------
    ValueError
        If an argument is None, a row is malformed, a mass code is unknown
        or a spring references a missing mass.
    """
    if masses_csv is None or connection_map_csv is None:
        raise ValueError("The arguments may not be None.")

    graph = NetworkGraph()

    for line_number, row in enumerate(_data_rows(masses_csv)):
        if len(row) < 3:
            raise ValueError(f"Mass row {line_number} needs at least code,x,y: {row}")
        try:
            x, y = float(row[1]), float(row[2])
        except ValueError:
            raise ValueError(f"Mass row {line_number} has invalid coordinates: {row}") from None
        graph.add_masses(Mass(x, y, MassType.from_code(row[0])))

    for line_number, row in enumerate(_data_rows(connection_map_csv)):
        if len(row) != 3:
            raise ValueError(f"Connection row {line_number} needs higher,lower,code: {row}")
        try:
            higher, lower, code = int(row[0]), int(row[1]), int(row[2])
        except ValueError:
            raise ValueError(f"Connection row {line_number} is not numeric: {row}") from None

        ConnectionType(code)
        if not (0 <= lower < len(graph.masses) and 0 <= higher < len(graph.masses)):
            raise ValueError(f"Connection row {line_number} references a missing mass: {row}")

        graph.add_spring(graph.masses[higher], graph.masses[lower])

    return graph
