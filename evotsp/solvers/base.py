import math
import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np

from ..errors import InvariantViolationError


Tour = List[int]

# Fitness of a zero-length tour (one city, or all cities coincident).
PERFECT_FITNESS = sys.float_info.max


def tour_length(dist: np.ndarray, tour: Sequence[int]) -> float:
    """Closed-loop length: consecutive legs plus the leg from last back to first."""
    n = len(tour)
    if n < 2:
        return 0.0
    a = np.asarray(tour, dtype=np.intp)
    b = np.roll(a, -1)
    return float(dist[a, b].sum())


def fitness(dist: np.ndarray, tour: Sequence[int]) -> float:
    length = tour_length(dist, tour)
    if length == 0.0:
        return PERFECT_FITNESS
    return 1.0 / length


def is_permutation(tour: Sequence[int], n: int) -> bool:
    return len(tour) == n and sorted(tour) == list(range(n))


def check_tour(tour: Sequence[int], n: int, where: str = "tour") -> None:
    if not is_permutation(tour, n):
        raise InvariantViolationError(
            f"{where} is not a permutation of {n} cities: {list(tour)!r}"
        )


class Solver(ABC):
    name: str = "base"

    @abstractmethod
    def solve(self, cities: Sequence[Sequence[float]]) -> Tour:
        raise NotImplementedError


@dataclass
class SolveResult:
    tour: Tour
    length: float
    solver_name: str
    optimum: Optional[float] = None

    @property
    def gap(self) -> float:
        if self.optimum is None or math.isclose(self.optimum, 0.0):
            return float("inf")
        return (self.length - self.optimum) / self.optimum
