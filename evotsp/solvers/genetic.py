from typing import Optional, Sequence

from ..evolutionary import EvolutionConfig, GAResult, GenerationCallback, EvolutionarySearch
from .base import Solver, Tour


class GeneticSolver(Solver):
    name = "genetic"

    def __init__(self, config: EvolutionConfig, on_generation: Optional[GenerationCallback] = None):
        config.validate()
        self.config = config
        self.on_generation = on_generation
        self.last_result: Optional[GAResult] = None

    def solve(self, cities: Sequence[Sequence[float]]) -> Tour:
        search = EvolutionarySearch(self.config, cities, on_generation=self.on_generation)
        self.last_result = search.run()
        return self.last_result.best_tour
