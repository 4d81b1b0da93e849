# reservoir_arm/grammar/model.py
"""
GRAMMAR MODEL: What the DSL Parser Produces
===========================================

PURPOSE:
--------
Plain data shared by the three grammar stages:

    GrammarDslParser   text  -> GrammarModel (+ errors)
    SymbolExpander     seed  -> construction string (+ errors)
    GraphGrowthEngine  model + construction string -> grown NetworkGraph

Both parsers follow the same Parser protocol: parse(text) returns a
ParseResult (value, errors). Errors are collected, never raised, so a
half-broken grammar still yields everything that could be understood.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, NamedTuple, Optional, Protocol, Set

from ..graph.mass import Mass
from ..graph.network import NetworkGraph
from ..config import CONFIG
from ..ranges import Range, tighter_range

DEFAULT_EXPANSION_RANGE_X = Range(*CONFIG.default_expansion_range_x)


@dataclass(frozen=True)
class Rule:
    """
    Production rule search -> replace.

    Example: productionRules A->Acc gives Rule(search='A', replace='Acc').
    """
    search: str
    replace: str


@dataclass(frozen=True)
class ParserError:
    """
    A problem found while parsing.

    Parameters:
    -----------
    line_index : int
        0-based line (DSL) or character position (seed, construction string)
    message : str
        Human-readable description
    """
    line_index: int
    message: str

    def __post_init__(self):
        if self.line_index is None or self.line_index < 0 or self.message is None:
            raise ValueError(
                "The line index has to be at least 0, the message may not be None."
            )


class Option(Enum):
    """Switches set with the 'options' keyword (values are the DSL spelling)."""

    SHOW_NOT_CONNECTED_MASSES = "showNotConnectedMasses"
    EXCLUDE_SPRING_CROSSINGS = "excludeSpringCrossings"
    ALLOW_NEGATIVE_Y_VALUES = "allowNegativeYValues"


class ParseResult(NamedTuple):
    value: Any
    errors: List[ParserError]


class Parser(Protocol):
    """Anything that turns text into a value plus a list of ParserErrors."""

    def parse(self, text: Optional[str]) -> ParseResult:
        ...


@dataclass
class GrammarModel:
    """
    Everything the DSL text defines.

    The skeleton masses (shoulder, elbow, hand, inputs) are the same objects
    that sit in `graph`, so the growth engine can start from them directly.
    """
    shoulder: Optional[Mass] = None
    elbow: Optional[Mass] = None
    hand: Optional[Mass] = None
    inputs: List[Mass] = field(default_factory=list)
    production_rules: List[Rule] = field(default_factory=list)
    mass_creations: Dict[str, Range] = field(default_factory=dict)
    spring_creations: Dict[str, Range] = field(default_factory=dict)
    random_mass_count: int = 0
    random_spring_count: int = 0
    options: Set[Option] = field(default_factory=set)
    expansion_range_x: Range = DEFAULT_EXPANSION_RANGE_X
    graph: NetworkGraph = field(default_factory=NetworkGraph)
    upper_arm_segment: Optional[Mass] = None
    lower_arm_segment: Optional[Mass] = None

    def production_rule(self, search: str) -> Optional[Rule]:
        """First rule whose search string equals `search`, else None."""
        for rule in self.production_rules:
            if rule.search == search:
                return rule
        return None

    def is_mass_creation(self, letter: str) -> bool:
        return letter in self.mass_creations

    def is_spring_creation(self, letter: str) -> bool:
        return letter in self.spring_creations

    def mass_creation_range(self, letter: str) -> Optional[Range]:
        return self.mass_creations.get(letter)

    def spring_creation_range(self, letter: str) -> Optional[Range]:
        return self.spring_creations.get(letter)

    def has_option(self, option: Option) -> bool:
        return option in self.options


__all__ = [
    'DEFAULT_EXPANSION_RANGE_X', 'Option', 'ParseResult', 'Parser',
    'ParserError', 'Range', 'Rule', 'GrammarModel', 'tighter_range',
]
