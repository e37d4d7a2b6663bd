from .base import PERFECT_FITNESS, Solver, SolveResult, Tour, check_tour, fitness, is_permutation, tour_length
from .heuristics import ConstructiveSolver, christofides_tour, nearest_neighbor_tour
from .operators import ordered_crossover, swap_mutate, tournament_select

__all__ = [
    "PERFECT_FITNESS",
    "Solver",
    "SolveResult",
    "Tour",
    "check_tour",
    "fitness",
    "is_permutation",
    "tour_length",
    "ConstructiveSolver",
    "christofides_tour",
    "nearest_neighbor_tour",
    "ordered_crossover",
    "swap_mutate",
    "tournament_select",
]
