import time
from dataclasses import dataclass
from typing import List, Optional, Sequence

from .distance import build_distance_matrix
from .solvers.base import SolveResult, Solver, check_tour, tour_length


@dataclass
class Fitness:
    length: float
    runtime: float
    gap: float
    solver_name: str
    tour: List[int]


def evaluate_solver(
    solver: Solver,
    cities: Sequence[Sequence[float]],
    optimum: Optional[float] = None,
) -> Fitness:
    """Run `solver` on `cities` and measure the tour it returns."""
    dist = build_distance_matrix(cities)
    start = time.perf_counter()
    tour = solver.solve(cities)
    runtime = time.perf_counter() - start
    check_tour(tour, len(cities), f"{solver.name} tour")
    result = SolveResult(
        tour=list(tour),
        length=tour_length(dist, tour),
        solver_name=solver.name,
        optimum=optimum,
    )
    return Fitness(
        length=result.length,
        runtime=runtime,
        gap=result.gap,
        solver_name=result.solver_name,
        tour=result.tour,
    )

