# reservoir_arm/grammar/developer.py
"""
GRAPH GROWTH ENGINE: Construction String -> Mass-Spring Network
===============================================================

PURPOSE:
--------
Reads the construction string produced by the SymbolExpander and grows the
NETWORK part of the graph around the arm skeleton.

    createMass letter    new NETWORK mass near the cursor (cursor stays)
    createSpring letter  spring from the cursor to a reachable mass,
                         the cursor moves to that mass
    anything else        ParserError "Unknown construction symbol: C"

The cursor starts at the first input.

AFTER THE STRING:
-----------------
1. randomMasses extra masses between shoulder and hand height
2. randomSprings extra springs between network masses and inputs
3. dead ends pruned: a network mass with a single spring loses it
4. network masses without springs are removed (unless showNotConnectedMasses)

RANDOMNESS:
-----------
All draws go through an injected np.random.Generator, so a run is fully
reproducible from its seed:

    rng = np.random.default_rng(42)
    errors = GraphGrowthEngine(rng).develop(model, "aacac")
"""

import logging
from typing import List, Optional

import numpy as np

from ..config import CONFIG, GrowthConfig
from ..graph.mass import Mass, MassType
from .model import GrammarModel, Option, ParserError, Range, tighter_range

logger = logging.getLogger(__name__)


class GraphGrowthEngine:
    """
    Grows the mass-spring network of a GrammarModel.

    Parameters:
    -----------
    rng : np.random.Generator
        Source of all random decisions (use np.random.default_rng(seed))
    config : GrowthConfig
        Attempt limits and probabilities (defaults to CONFIG)
    """

    def __init__(self, rng: np.random.Generator, config: GrowthConfig = CONFIG):
        self.rng = rng
        self.config = config

    # ------------------------------------------------------------------
    # Main entry point
    # ------------------------------------------------------------------

    def develop(self, model: GrammarModel, construction: Optional[str]) -> List[ParserError]:
        """
        Rebuild the network of model.graph from the construction string.

        Skeleton masses, inputs and the springs between them are kept; all
        NETWORK masses from a previous run are thrown away first.

        Returns:
        --------
        List[ParserError]
            One error per character that is neither a createMass nor a
            createSpring letter. Empty if the graph has no inputs.
        """
        graph = model.graph
        errors: List[ParserError] = []

        inputs = model.inputs or graph.inputs()
        if not inputs:
            logger.warning("No input masses, nothing to develop")
            return errors

        graph.remove_mass_spring_network()
        cursor = inputs[0]

        for position, letter in enumerate(construction or ""):
            if model.is_mass_creation(letter):
                self.create_mass(model, cursor, model.mass_creation_range(letter))
            elif model.is_spring_creation(letter):
                cursor = self.create_spring(model, cursor, model.spring_creation_range(letter))
            else:
                errors.append(ParserError(position, f"Unknown construction symbol: {letter}"))

        self.add_random_masses(model, cursor)
        self.add_random_springs(model)
        self.remove_single_connected_masses(model)

        if not model.has_option(Option.SHOW_NOT_CONNECTED_MASSES):
            removed = graph.remove_not_connected_network_masses()
            logger.debug("Removed %d unconnected network masses", removed)

        logger.info("Developed network: %d masses, %d springs, %d errors",
                    len(graph.masses), len(graph.springs), len(errors))
        return errors

    # ------------------------------------------------------------------
    # Masses
    # ------------------------------------------------------------------

    @staticmethod
    def number_in_range(rng: np.random.Generator, window: Range) -> float:
        """Uniform draw from [window.min, window.max)."""
        return rng.random() * (window.max - window.min) + window.min

    def _window(self, center: float, distance: Range) -> Range:
        """Positive or negative distance window around center, sign drawn at random."""
        if self.rng.random() < 0.5:
            return Range(center + distance.min, center + distance.max)
        return Range(center - distance.max, center - distance.min)

    def place_mass(self, model: GrammarModel, cursor: Mass,
                   distance_x: Range, distance_y: Range) -> Mass:
        """
        Draw the coordinates of a new NETWORK mass around the cursor.

        The X window is narrowed to model.expansion_range_x; the Y window is
        used as drawn. The mass is NOT added to the graph.
        """
        window_x = tighter_range(self._window(cursor.x, distance_x), model.expansion_range_x)
        window_y = self._window(cursor.y, distance_y)

        x = self.number_in_range(self.rng, window_x)
        y = self.number_in_range(self.rng, window_y)

        if not model.has_option(Option.ALLOW_NEGATIVE_Y_VALUES):
            y = abs(y)

        return Mass(x, y, MassType.NETWORK)

    def create_mass(self, model: GrammarModel, cursor: Mass, distance: Range) -> Mass:
        """Add a NETWORK mass at a random distance from the cursor and return it."""
        mass = self.place_mass(model, cursor, distance, distance)
        model.graph.add_masses(mass)
        return mass

    def add_random_masses(self, model: GrammarModel, cursor: Mass) -> int:
        """
        Add model.random_mass_count masses between shoulder and hand height.

        Returns the number of masses added.
        """
        count = model.random_mass_count
        if count <= 0:
            return 0

        if model.shoulder is None or model.hand is None:
            logger.warning("Random masses need a shoulder and a hand, skipping %d masses", count)
            return 0

        distance_y = Range(model.shoulder.y, model.hand.y)

        for _ in range(count):
            mass = self.place_mass(model, cursor, model.expansion_range_x, distance_y)
            if mass.y > model.hand.y:
                mass.y = model.hand.y
            model.graph.add_masses(mass)

        logger.debug("Added %d random masses", count)
        return count

    # ------------------------------------------------------------------
    # Springs
    # ------------------------------------------------------------------

    def create_spring(self, model: GrammarModel, cursor: Mass, distance: Range) -> Mass:
        """
        Connect the cursor to a random reachable mass.

        Returns:
        --------
        Mass
            The newly connected mass (the new cursor), or the unchanged
            cursor if no candidate was found.
        """
        graph = model.graph
        candidates = graph.find_reachable_masses_and_inputs(
            cursor, distance,
            model.has_option(Option.EXCLUDE_SPRING_CROSSINGS),
            self.config.endpoint_tolerance,
        )
        candidates = [m for m in candidates if not graph.has_spring_between(cursor, m)]

        if not candidates:
            return cursor

        target = candidates[self.rng.integers(0, len(candidates))]
        graph.add_spring(cursor, target)
        return target

    def add_random_springs(self, model: GrammarModel) -> int:
        """
        Add up to model.random_spring_count springs between random masses.

        Pairs of two inputs, a mass with itself and already connected pairs
        are rejected. Gives up after max_random_spring_attempts draws.

        Returns the number of springs added.
        """
        count = model.random_spring_count
        graph = model.graph
        network = graph.network_masses()
        inputs = graph.inputs()

        if count <= 0 or not network:
            return 0

        pool = network + inputs
        added = 0
        attempts = 0

        while added < count and attempts < self.config.max_random_spring_attempts:
            attempts += 1

            source = pool[self.rng.integers(0, len(pool))]
            destination = pool[self.rng.integers(0, len(pool))]

            if (inputs and source.type is MassType.NETWORK
                    and destination.type is not MassType.INPUT
                    and self.rng.random() < self.config.input_choice_probability):
                destination = inputs[self.rng.integers(0, len(inputs))]

            if source is destination:
                continue
            if source.type is MassType.INPUT and destination.type is MassType.INPUT:
                continue
            if graph.has_spring_between(source, destination):
                continue

            graph.add_spring(source, destination)
            added += 1

        if added < count:
            logger.info("Added only %d of %d random springs after %d attempts",
                        added, count, attempts)
        return added

    # ------------------------------------------------------------------
    # Pruning
    # ------------------------------------------------------------------

    def remove_single_connected_masses(self, model: GrammarModel) -> int:
        """
        Remove the only spring of every NETWORK mass that has exactly one.

        Masses are visited once in insertion order; a removal can leave an
        earlier-visited neighbour with a single spring, which stays.
        Returns the number of springs removed.
        """
        graph = model.graph
        removed = 0

        for mass in list(graph.network_masses()):
            springs = graph.springs_of(mass)
            if len(springs) == 1:
                graph.remove_spring(springs[0])
                removed += 1

        return removed


def develop(model: GrammarModel, construction: Optional[str],
            rng: Optional[np.random.Generator] = None,
            config: GrowthConfig = CONFIG) -> List[ParserError]:
    """
    Grow model.graph from the construction string.

    Uses np.random.default_rng(config.default_seed) when no rng is given.
    """
    if rng is None:
        rng = np.random.default_rng(config.default_seed)
    return GraphGrowthEngine(rng, config).develop(model, construction)
