# reservoir_arm/grammar/parser.py
"""
GRAMMAR DSL PARSER: Skeleton, Templates and Rules From Text
===========================================================

PURPOSE:
--------
Reads the grammar text line by line and builds a GrammarModel. Each
non-blank, non-comment line has to match exactly one keyword line:

    shoulder X Y                 skeleton mass (also elbow, hand)
    input X Y                    input mass on the arm (accumulates)
    expansionRangeX [MIN, MAX]   horizontal window for mass placement
    createMass L [MIN, MAX]      letter L places a mass at that distance
    createSpring L [MIN, MAX]    letter L connects a mass at that distance
    randomMasses N               extra random masses after growth
    randomSprings N              extra random springs after growth
    options OPT ...              see Option
    productionRules A->B ...     rewriting rules for the seed

Lines that match nothing produce a ParserError; parsing always continues.

EXAMPLE:
--------
    # Arm construction
    shoulder 0 0.25
    elbow 5 0
    hand 10 0

    # Network connection to arm
    input 1 0
    input 4 0
    input 6 0
    input 9 0

    productionRules A->Acc B->AC C->ccc
    createMass a [1, 8]
    createSpring c [3, 10]
    expansionRangeX [-3, 5]
    options excludeSpringCrossings

ARM SEGMENTS:
-------------
After all lines are read, the rigid arm is wired up. If exactly two inputs lie
between shoulder and elbow (by y), an ARM_SEGMENT is created at the shoulder
and connected to shoulder, elbow and both inputs. Elbow/hand work the same
way with a segment at the elbow. Two segments are joined to each other. Any
other input count simply leaves the segment out.
"""

import logging
import re
from enum import Enum
from typing import Callable, Dict, List, Optional

from ..graph.mass import Mass, MassType
from .model import (
    DEFAULT_EXPANSION_RANGE_X, GrammarModel, Option, ParseResult, ParserError,
    Range, Rule,
)

logger = logging.getLogger(__name__)

_H = r"[ \t]"
NUMBER = r"-?[0-9]+(?:\.[0-9]*)?"
_RANGE = rf"\[{_H}*({NUMBER}){_H}*,{_H}*({NUMBER}){_H}*\]"
_RULE = rf"([_a-zA-Z][_0-9a-zA-Z]*){_H}*->{_H}*([-_a-zA-Z0-9]+)"

RULE_PATTERN = re.compile(_RULE)
NUMBER_PATTERN = re.compile(NUMBER)


class Keyword(Enum):
    SHOULDER = "shoulder"
    ELBOW = "elbow"
    HAND = "hand"
    INPUT = "input"
    EXPANSION_RANGE_X = "expansionRangeX"
    CREATE_MASS = "createMass"
    CREATE_SPRING = "createSpring"
    OPTIONS = "options"
    PRODUCTION_RULES = "productionRules"
    RANDOM_MASSES = "randomMasses"
    RANDOM_SPRINGS = "randomSprings"


def _keyword_pattern(keyword: Keyword) -> "re.Pattern[str]":
    kw = keyword.value

    if keyword in (Keyword.SHOULDER, Keyword.ELBOW, Keyword.HAND, Keyword.INPUT):
        body = rf"((?:{_H}+{NUMBER}{_H}+{NUMBER})+)"
    elif keyword in (Keyword.CREATE_MASS, Keyword.CREATE_SPRING):
        body = rf"{_H}+([a-zA-Z]){_H}+{_RANGE}"
    elif keyword is Keyword.EXPANSION_RANGE_X:
        body = rf"{_H}+{_RANGE}"
    elif keyword in (Keyword.RANDOM_MASSES, Keyword.RANDOM_SPRINGS):
        body = rf"{_H}+(-?[0-9]+)"
    elif keyword is Keyword.OPTIONS:
        body = rf"((?:{_H}+[a-zA-Z]+)+)"
    elif keyword is Keyword.PRODUCTION_RULES:
        body = rf"((?:{_H}+{_RULE})+)"
    else:
        raise ValueError(f"Unknown keyword: {keyword}")

    return re.compile(rf"{_H}*{kw}{body}{_H}*")


KEYWORD_PATTERNS: Dict[Keyword, "re.Pattern[str]"] = {
    keyword: _keyword_pattern(keyword) for keyword in Keyword
}

MASS_TYPE_FOR_KEYWORD = {
    Keyword.SHOULDER: MassType.SHOULDER,
    Keyword.ELBOW: MassType.ELBOW,
    Keyword.HAND: MassType.HAND,
    Keyword.INPUT: MassType.INPUT,
}


# =============================================================================
# Line helpers
# =============================================================================

def is_empty(line: Optional[str]) -> bool:
    return line is None or not line.strip()


def is_comment(line: Optional[str]) -> bool:
    return line is not None and line.strip().startswith("#")


def keyword_of_line(line: str) -> Optional[Keyword]:
    """The first keyword whose line grammar matches the whole line."""
    for keyword, pattern in KEYWORD_PATTERNS.items():
        if pattern.fullmatch(line):
            return keyword
    return None


def parse_masses(line: str) -> List[Mass]:
    """
    All coordinate pairs of a shoulder/elbow/hand/input line.

    Returns an empty list when the line is not such a line.

    >>> [(m.x, m.y) for m in parse_masses("hand 5 6 -7.1 -90")]
    [(5.0, 6.0), (-7.1, -90.0)]
    """
    keyword = keyword_of_line(line)
    if keyword not in MASS_TYPE_FOR_KEYWORD:
        return []

    match = KEYWORD_PATTERNS[keyword].fullmatch(line)
    numbers = [float(n) for n in NUMBER_PATTERN.findall(match.group(1))]
    mass_type = MASS_TYPE_FOR_KEYWORD[keyword]

    return [Mass(numbers[i], numbers[i + 1], mass_type) for i in range(0, len(numbers) - 1, 2)]


def parse_integer(line: str) -> int:
    """The count of a randomMasses/randomSprings line."""
    keyword = keyword_of_line(line)
    if keyword not in (Keyword.RANDOM_MASSES, Keyword.RANDOM_SPRINGS):
        raise ValueError(f"Not an integer line: {line!r}")
    return int(KEYWORD_PATTERNS[keyword].fullmatch(line).group(1))


def parse_production_rules(line: str) -> List[Rule]:
    """
    >>> parse_production_rules("productionRules x -> y a->b")
    [Rule(search='x', replace='y'), Rule(search='a', replace='b')]
    """
    match = KEYWORD_PATTERNS[Keyword.PRODUCTION_RULES].fullmatch(line)
    if match is None:
        raise ValueError(f"Not a productionRules line: {line!r}")
    return [Rule(m.group(1), m.group(2)) for m in RULE_PATTERN.finditer(match.group(1))]


def parse_create_letter(line: str) -> str:
    keyword = keyword_of_line(line)
    if keyword not in (Keyword.CREATE_MASS, Keyword.CREATE_SPRING):
        raise ValueError(f"Not a creation line: {line!r}")
    return KEYWORD_PATTERNS[keyword].fullmatch(line).group(1)


def parse_create_range(line: str) -> Range:
    keyword = keyword_of_line(line)
    if keyword not in (Keyword.CREATE_MASS, Keyword.CREATE_SPRING):
        raise ValueError(f"Not a creation line: {line!r}")
    match = KEYWORD_PATTERNS[keyword].fullmatch(line)
    return Range(float(match.group(2)), float(match.group(3)))


def parse_expansion_range(line: str) -> Range:
    match = KEYWORD_PATTERNS[Keyword.EXPANSION_RANGE_X].fullmatch(line)
    if match is None:
        raise ValueError(f"Not an expansionRangeX line: {line!r}")
    return Range(float(match.group(1)), float(match.group(2)))


def parse_options(line: str) -> List[Option]:
    """
    Known options of an options line, in order.

    Unknown names are logged and skipped.
    """
    match = KEYWORD_PATTERNS[Keyword.OPTIONS].fullmatch(line)
    if match is None:
        raise ValueError(f"Not an options line: {line!r}")

    options = []
    for candidate in match.group(1).split():
        try:
            options.append(Option(candidate))
        except ValueError:
            logger.warning("Did not understand option: %s", candidate)
    return options


def masses_between_y_range(masses: List[Mass], y_start: float, y_end: float) -> List[Mass]:
    """Masses with y_start <= y <= y_end, in the given order."""
    return [mass for mass in masses if y_start <= mass.y <= y_end]


# =============================================================================
# Parser
# =============================================================================

class GrammarDslParser:
    """
    Parses grammar text into a GrammarModel.

    A new model and graph are built on every call, nothing carries over
    between runs.

    Examples:
    ---------
    >>> model, errors = GrammarDslParser().parse("shoulder 0 1\\nelbow 0 11\\nhand 0 21")
    >>> [m.type.name for m in model.graph.masses]
    ['SHOULDER', 'ELBOW', 'HAND']
    >>> errors
    []
    """

    def __init__(self):
        self._handlers: Dict[Keyword, Callable[[GrammarModel, str], None]] = {
            Keyword.SHOULDER: self._handle_skeleton_mass,
            Keyword.ELBOW: self._handle_skeleton_mass,
            Keyword.HAND: self._handle_skeleton_mass,
            Keyword.INPUT: self._handle_input,
            Keyword.EXPANSION_RANGE_X: self._handle_expansion_range,
            Keyword.CREATE_MASS: self._handle_create_mass,
            Keyword.CREATE_SPRING: self._handle_create_spring,
            Keyword.OPTIONS: self._handle_options,
            Keyword.PRODUCTION_RULES: self._handle_production_rules,
            Keyword.RANDOM_MASSES: self._handle_random_masses,
            Keyword.RANDOM_SPRINGS: self._handle_random_springs,
        }

    def parse(self, text: Optional[str]) -> ParseResult:
        """
        Parse the grammar text.

        Returns:
        --------
        ParseResult
            (GrammarModel, list of ParserError). Unpacks as a tuple.
        """
        model = GrammarModel(expansion_range_x=DEFAULT_EXPANSION_RANGE_X)
        errors: List[ParserError] = []

        if text is None:
            return ParseResult(model, errors)

        for index, raw_line in enumerate(text.split("\n")):
            line = raw_line.rstrip("\r")

            if is_empty(line) or is_comment(line):
                continue

            keyword = keyword_of_line(line)
            if keyword is None:
                errors.append(ParserError(index, "Cannot understand this line."))
                continue

            self._handlers[keyword](model, line)

        self.create_and_connect_segments_to_inputs(model)

        logger.debug(
            "Parsed grammar: %d masses, %d springs, %d rules, %d errors",
            len(model.graph.masses), len(model.graph.springs),
            len(model.production_rules), len(errors)
        )
        return ParseResult(model, errors)

    # ------------------------------------------------------------------
    # Keyword handlers
    # ------------------------------------------------------------------

    def _handle_skeleton_mass(self, model: GrammarModel, line: str) -> None:
        mass = parse_masses(line)[0]

        if mass.type is MassType.SHOULDER:
            model.shoulder = mass
        elif mass.type is MassType.ELBOW:
            model.elbow = mass
        else:
            model.hand = mass

        model.graph.add_masses(mass)

    def _handle_input(self, model: GrammarModel, line: str) -> None:
        mass = parse_masses(line)[0]
        model.inputs.append(mass)
        model.graph.add_masses(mass)

    def _handle_expansion_range(self, model: GrammarModel, line: str) -> None:
        model.expansion_range_x = parse_expansion_range(line)

    def _handle_create_mass(self, model: GrammarModel, line: str) -> None:
        model.mass_creations[parse_create_letter(line)] = parse_create_range(line)

    def _handle_create_spring(self, model: GrammarModel, line: str) -> None:
        model.spring_creations[parse_create_letter(line)] = parse_create_range(line)

    def _handle_options(self, model: GrammarModel, line: str) -> None:
        model.options.update(parse_options(line))

    def _handle_production_rules(self, model: GrammarModel, line: str) -> None:
        model.production_rules.extend(parse_production_rules(line))

    def _handle_random_masses(self, model: GrammarModel, line: str) -> None:
        model.random_mass_count = parse_integer(line)

    def _handle_random_springs(self, model: GrammarModel, line: str) -> None:
        model.random_spring_count = parse_integer(line)

    # ------------------------------------------------------------------
    # Arm segments
    # ------------------------------------------------------------------

    @staticmethod
    def create_and_connect_segments_to_inputs(model: GrammarModel) -> None:
        """Build the upper/lower arm segments (see module docstring)."""
        graph = model.graph
        model.upper_arm_segment = None
        model.lower_arm_segment = None

        if model.shoulder is not None and model.elbow is not None:
            upper_inputs = masses_between_y_range(model.inputs, model.shoulder.y, model.elbow.y)

            if len(upper_inputs) == 2:
                segment = Mass(model.shoulder.x, model.shoulder.y, MassType.ARM_SEGMENT)
                graph.add_masses(segment)
                graph.add_spring(model.shoulder, segment)
                graph.add_spring(model.elbow, segment)
                graph.add_spring(upper_inputs[0], segment)
                graph.add_spring(upper_inputs[1], segment)
                model.upper_arm_segment = segment
            else:
                logger.debug("No upper arm segment: %d inputs between shoulder and elbow",
                             len(upper_inputs))

        if model.elbow is not None and model.hand is not None:
            lower_inputs = masses_between_y_range(model.inputs, model.elbow.y, model.hand.y)

            if len(lower_inputs) == 2:
                segment = Mass(model.elbow.x, model.elbow.y, MassType.ARM_SEGMENT)
                graph.add_masses(segment)
                graph.add_spring(model.elbow, segment)
                graph.add_spring(model.hand, segment)
                graph.add_spring(lower_inputs[0], segment)
                graph.add_spring(lower_inputs[1], segment)
                model.lower_arm_segment = segment
            else:
                logger.debug("No lower arm segment: %d inputs between elbow and hand",
                             len(lower_inputs))

        if model.upper_arm_segment is not None and model.lower_arm_segment is not None:
            graph.add_spring(model.upper_arm_segment, model.lower_arm_segment)


def parse_grammar(text: Optional[str]) -> ParseResult:
    """Shortcut for GrammarDslParser().parse(text)."""
    return GrammarDslParser().parse(text)
