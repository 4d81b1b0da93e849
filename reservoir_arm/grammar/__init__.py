# reservoir_arm/grammar - DSL, seed expansion and network growth
"""
GRAMMAR: From Text to a Grown Network
=====================================

    model.py      GrammarModel, Rule, ParserError, Option, Range
    parser.py     GrammarDslParser (DSL text -> GrammarModel)
    expander.py   SymbolExpander (seed -> construction string)
    developer.py  GraphGrowthEngine (construction string -> network)

USAGE:
------
    import numpy as np
    from reservoir_arm.grammar import GrammarDslParser, SymbolExpander, GraphGrowthEngine

    model, errors = GrammarDslParser().parse(text)
    construction, seed_errors = SymbolExpander(model.production_rules).parse("A(3){B}")
    GraphGrowthEngine(np.random.default_rng(42)).develop(model, construction)
"""

from .model import (
    GrammarModel, Option, ParseResult, Parser, ParserError, Range, Rule,
    tighter_range,
)
from .parser import GrammarDslParser, parse_grammar
from .expander import SymbolExpander, expand
from .developer import GraphGrowthEngine, develop

__all__ = [
    'GrammarModel', 'Option', 'ParseResult', 'Parser', 'ParserError',
    'Range', 'Rule', 'tighter_range',
    'GrammarDslParser', 'parse_grammar',
    'SymbolExpander', 'expand',
    'GraphGrowthEngine', 'develop',
]
