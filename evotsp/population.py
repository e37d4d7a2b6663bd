import random
from typing import List, Sequence, Tuple

import numpy as np

from .solvers.base import Tour, fitness, tour_length


Population = List[Tour]


def random_tour(num_cities: int, rng: random.Random) -> Tour:
    tour = list(range(num_cities))
    rng.shuffle(tour)
    return tour


def initialize_population(size: int, num_cities: int, rng: random.Random) -> Population:
    """`size` independent random permutations of range(num_cities)."""
    return [random_tour(num_cities, rng) for _ in range(size)]


def fittest(population: Sequence[Tour], dist: np.ndarray) -> Tuple[Tour, float]:
    """Best tour of a population and its length.

    Ties keep the first tour encountered.
    """
    best = population[0]
    best_fit = fitness(dist, best)
    for tour in population[1:]:
        fit = fitness(dist, tour)
        if fit > best_fit:
            best = tour
            best_fit = fit
    return best, tour_length(dist, best)

