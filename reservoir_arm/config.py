# reservoir_arm/config.py
"""
Generation configuration and defaults.
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass
class GrowthConfig:
    """Limits and constants for symbol expansion and network growth."""

    # Symbol expansion: the buffer may not grow beyond this many characters
    max_expansion_length: int = 1000
    too_long_output_text: str = "The output gets too long!"

    # Random spring augmentation: attempts before giving up
    max_random_spring_attempts: int = 1000

    # Chance that a random spring from a network mass is redirected to an input
    input_choice_probability: float = 0.2

    # Spring endpoints closer than this are treated as the same point
    endpoint_tolerance: float = 1e-8

    # DSL defaults
    default_expansion_range_x: Tuple[float, float] = (-1000.0, 1000.0)

    # Seed used by demos and the API when none is given
    default_seed: int = 42


# Global config instance
CONFIG = GrowthConfig()
