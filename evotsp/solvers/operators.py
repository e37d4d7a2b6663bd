"""
Permutation-preserving genetic operators on tours.

Every operator takes the run's `random.Random` explicitly and returns a new
list; parents are never modified.
"""

import random
from typing import Optional, Sequence, Tuple

import numpy as np

from .base import Tour, fitness


def tournament_select(
    population: Sequence[Tour],
    dist: np.ndarray,
    rng: random.Random,
    k: int,
    scores: Optional[Sequence[float]] = None,
) -> Tour:
    """Fittest of `k` tours drawn with replacement; the first drawn wins ties.

    `scores`, when given, holds the fitness of each population member and
    saves recomputing it for every draw.
    """
    if scores is None:
        scores = [fitness(dist, tour) for tour in population]
    k = min(k, len(population))
    best_idx = rng.randrange(len(population))
    for _ in range(k - 1):
        idx = rng.randrange(len(population))
        if scores[idx] > scores[best_idx]:
            best_idx = idx
    return population[best_idx]


def cut_points(size: int, rng: random.Random) -> Tuple[int, int]:
    start, end = sorted((rng.randint(0, size), rng.randint(0, size)))
    return start, end


def ordered_crossover(
    parent_a: Sequence[int],
    parent_b: Sequence[int],
    rng: random.Random,
    cuts: Optional[Tuple[int, int]] = None,
) -> Tour:
    """Order crossover (OX).

    `parent_a[start:end]` keeps its positions in the child; the other
    positions are filled left to right with the cities of `parent_b` in
    `parent_b` order, skipping those already copied.
    """
    size = len(parent_a)
    start, end = cuts if cuts is not None else cut_points(size, rng)
    if not 0 <= start <= end <= size:
        raise ValueError(f"invalid cut points {start}, {end} for {size} cities")
    child = [None] * size
    child[start:end] = parent_a[start:end]
    placed = set(parent_a[start:end])
    fill = (city for city in parent_b if city not in placed)
    for i in range(size):
        if i < start or i >= end:
            child[i] = next(fill)
    return child


def swap_mutate(tour: Sequence[int], rng: random.Random) -> Tour:
    """Copy of `tour` with two distinct positions swapped."""
    mutated = list(tour)
    if len(mutated) < 2:
        return mutated
    i, j = rng.sample(range(len(mutated)), 2)
    mutated[i], mutated[j] = mutated[j], mutated[i]
    return mutated
