"""
Genetic-algorithm search for short closed tours through 2D cities.
"""

from .errors import (
    EvoTSPError,
    InvalidConfigError,
    InvalidInputError,
    InvariantViolationError,
    StopEvolution,
)
from .evolutionary import EvolutionConfig, EvolutionarySearch, GAResult, run_genetic_algorithm

__all__ = [
    "EvoTSPError",
    "InvalidConfigError",
    "InvalidInputError",
    "InvariantViolationError",
    "StopEvolution",
    "EvolutionConfig",
    "EvolutionarySearch",
    "GAResult",
    "run_genetic_algorithm",
    "data",
    "distance",
    "evaluation",
    "population",
]
