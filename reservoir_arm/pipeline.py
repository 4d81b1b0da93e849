# reservoir_arm/pipeline.py
"""
End-to-end convenience: grammar text + seed -> grown network.

    result = build_network(grammar_text, "A(3){B}", np.random.default_rng(7))
    result.model.graph          # NetworkGraph
    result.construction         # expanded seed
    result.grammar_errors       # DSL line errors
"""

import logging
from typing import List, NamedTuple, Optional

import numpy as np

from .config import CONFIG, GrowthConfig
from .grammar.developer import GraphGrowthEngine
from .grammar.expander import SymbolExpander
from .grammar.model import GrammarModel, ParserError
from .grammar.parser import GrammarDslParser

logger = logging.getLogger(__name__)


class NetworkBuild(NamedTuple):
    model: GrammarModel
    construction: str
    grammar_errors: List[ParserError]
    seed_errors: List[ParserError]
    construction_errors: List[ParserError]

    @property
    def has_errors(self) -> bool:
        return bool(self.grammar_errors or self.seed_errors or self.construction_errors)


def build_network(
    grammar_text: Optional[str],
    seed_text: Optional[str],
    rng: Optional[np.random.Generator] = None,
    config: GrowthConfig = CONFIG,
) -> NetworkBuild:
    """
    Parse the grammar, expand the seed and grow the network.

    Parameters:
    -----------
    grammar_text : str
        DSL text (see reservoir_arm.grammar.parser)
    seed_text : str
        Initialisation string expanded with the grammar's production rules
    rng : np.random.Generator, optional
        Defaults to np.random.default_rng(config.default_seed)

    Returns:
    --------
    NetworkBuild
        The model (with its grown graph), the construction string and the
        errors of each stage
    """
    if rng is None:
        rng = np.random.default_rng(config.default_seed)

    model, grammar_errors = GrammarDslParser().parse(grammar_text)
    construction, seed_errors = SymbolExpander(model.production_rules, config).parse(seed_text)
    construction_errors = GraphGrowthEngine(rng, config).develop(model, construction)

    logger.info(
        "Built network: %d masses, %d springs (%d grammar, %d seed, %d construction errors)",
        len(model.graph.masses), len(model.graph.springs),
        len(grammar_errors), len(seed_errors), len(construction_errors)
    )
    return NetworkBuild(model, construction, grammar_errors, seed_errors, construction_errors)
