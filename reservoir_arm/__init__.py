# reservoir_arm - Grammar-grown mass-spring networks for a robot arm
"""
RESERVOIR-ARM: Growing Mass-Spring Networks From Grammars
=========================================================

This package provides:
- a small DSL describing a two-segment robot arm and its input masses
- an L-system style expander turning a seed into a construction string
- a randomized growth engine building a mass-spring network on the arm
- CSV export for the physics simulator and matplotlib rendering

ARCHITECTURE:
-------------
    graph/          Mass, Spring, NetworkGraph (ordered, index = position)
    grammar/        DSL parser, symbol expander, growth engine
    ranges.py       Range and tighter_range
    config.py       GrowthConfig / CONFIG
    pipeline.py     build_network (parse + expand + grow)
    export.py       masses / connection map CSV
    viz.py          plotting
"""

from .ranges import Range, tighter_range
from .config import CONFIG, GrowthConfig
from .graph import (
    ConnectionType, GraphInvariantError, Mass, MassType, NetworkGraph, Spring,
)
from .grammar import (
    GrammarDslParser, GrammarModel, GraphGrowthEngine, Option, ParserError,
    Rule, SymbolExpander,
)
from .pipeline import NetworkBuild, build_network

__version__ = "0.1.0"
