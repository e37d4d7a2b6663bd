import logging
import math
import random
from dataclasses import dataclass, field, replace
from typing import Callable, List, Optional, Sequence

from .distance import build_distance_matrix, validate_cities
from .errors import InvalidConfigError, StopEvolution
from .population import Population, fittest, initialize_population
from .solvers.base import Tour, check_tour, fitness
from .solvers.operators import ordered_crossover, swap_mutate, tournament_select


logger = logging.getLogger(__name__)

GenerationCallback = Callable[[int, float], None]

INIT = "init"
EVOLVING = "evolving"
DONE = "done"


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class EvolutionConfig:
    population_size: int = 100
    generations: int = 500
    mutation_rate: float = 0.1
    tournament_size: int = 5
    random_seed: Optional[int] = None

    def validate(self) -> None:
        """Raise InvalidConfigError if any parameter is out of range.

        Odd population sizes are rejected: children are bred in pairs.
        """
        if not _is_int(self.population_size) or self.population_size <= 0:
            raise InvalidConfigError(f"population_size must be a positive int, got {self.population_size!r}")
        if self.population_size % 2:
            raise InvalidConfigError(f"population_size must be even, got {self.population_size}")
        if not _is_int(self.generations) or self.generations < 0:
            raise InvalidConfigError(f"generations must be a non-negative int, got {self.generations!r}")
        if (
            isinstance(self.mutation_rate, bool)
            or not isinstance(self.mutation_rate, (int, float))
            or math.isnan(self.mutation_rate)
            or not 0.0 <= self.mutation_rate <= 1.0
        ):
            raise InvalidConfigError(f"mutation_rate must be in [0, 1], got {self.mutation_rate!r}")
        if not _is_int(self.tournament_size) or self.tournament_size <= 0:
            raise InvalidConfigError(f"tournament_size must be a positive int, got {self.tournament_size!r}")
        if self.random_seed is not None and not _is_int(self.random_seed):
            raise InvalidConfigError(f"random_seed must be an int or None, got {self.random_seed!r}")


@dataclass
class GAResult:
    best_tour: Tour
    best_distance: float
    generations_run: int
    history: List[float] = field(default_factory=list)


class EvolutionarySearch:
    """Generational GA over tours with a best-so-far record.

    The population is replaced wholesale each generation; the best tour ever
    seen is kept on the side rather than carried into the next population.
    """

    def __init__(
        self,
        config: EvolutionConfig,
        cities: Sequence[Sequence[float]],
        on_generation: Optional[GenerationCallback] = None,
        rng: Optional[random.Random] = None,
    ):
        config.validate()
        self.cfg = config
        self.cities = validate_cities(cities)
        self.dist = build_distance_matrix(self.cities)
        self.num_cities = len(self.cities)
        self.on_generation = on_generation
        self.rng = rng or random.Random(config.random_seed)
        self.generation = 0
        self._stop_requested = False
        self.state = INIT

        self.population: Population = initialize_population(
            config.population_size, self.num_cities, self.rng
        )
        for tour in self.population:
            check_tour(tour, self.num_cities, "initial tour")
        best, best_distance = fittest(self.population, self.dist)
        self.best_tour: Tour = list(best)
        self.best_distance: float = best_distance
        self.history: List[float] = [best_distance]

    def request_stop(self) -> None:
        """Stop before the next generation starts."""
        self._stop_requested = True

    def step(self) -> float:
        """Run one generation and return the best-so-far distance."""
        k = self.cfg.tournament_size
        scores = [fitness(self.dist, tour) for tour in self.population]
        new_pop: Population = []
        for _ in range(self.cfg.population_size // 2):
            parent_a = tournament_select(self.population, self.dist, self.rng, k, scores)
            parent_b = tournament_select(self.population, self.dist, self.rng, k, scores)
            child_a = ordered_crossover(parent_a, parent_b, self.rng)
            child_b = ordered_crossover(parent_b, parent_a, self.rng)
            check_tour(child_a, self.num_cities, "crossover child")
            check_tour(child_b, self.num_cities, "crossover child")
            if self.rng.random() < self.cfg.mutation_rate:
                child_a = swap_mutate(child_a, self.rng)
                check_tour(child_a, self.num_cities, "mutated child")
            if self.rng.random() < self.cfg.mutation_rate:
                child_b = swap_mutate(child_b, self.rng)
                check_tour(child_b, self.num_cities, "mutated child")
            new_pop.extend([child_a, child_b])
        self.population = new_pop

        gen_best, gen_distance = fittest(self.population, self.dist)
        if gen_distance < self.best_distance:
            logger.debug(
                "generation %d: best distance %.6f -> %.6f",
                self.generation, self.best_distance, gen_distance,
            )
            self.best_tour = list(gen_best)
            self.best_distance = gen_distance
        self.generation += 1
        self.history.append(self.best_distance)
        return self.best_distance

    def run(self) -> GAResult:
        if self.state == DONE:
            return self.result()
        logger.info(
            "evolving %d cities: population=%d generations=%d mutation_rate=%s seed=%s",
            self.num_cities, self.cfg.population_size, self.cfg.generations,
            self.cfg.mutation_rate, self.cfg.random_seed,
        )
        self.state = EVOLVING
        while self.generation < self.cfg.generations and not self._stop_requested:
            gen_index = self.generation
            best_distance = self.step()
            if self.on_generation is not None:
                try:
                    self.on_generation(gen_index, best_distance)
                except StopEvolution:
                    logger.info("stop requested after generation %d", gen_index)
                    break
        self.state = DONE
        logger.info(
            "finished after %d generations: best distance %.6f",
            self.generation, self.best_distance,
        )
        return self.result()

    def result(self) -> GAResult:
        return GAResult(
            best_tour=list(self.best_tour),
            best_distance=self.best_distance,
            generations_run=self.generation,
            history=list(self.history),
        )


def run_genetic_algorithm(
    cities: Sequence[Sequence[float]],
    config: Optional[EvolutionConfig] = None,
    on_generation: Optional[GenerationCallback] = None,
    **overrides,
) -> GAResult:
    """Evolve a short closed tour through `cities`.

    Keyword overrides replace fields of `config` (or of the defaults), e.g.
    ``run_genetic_algorithm(cities, generations=200, random_seed=7)``.
    """
    cfg = config or EvolutionConfig()
    if overrides:
        try:
            cfg = replace(cfg, **overrides)
        except TypeError as exc:
            raise InvalidConfigError(str(exc)) from None
    return EvolutionarySearch(cfg, cities, on_generation=on_generation).run()
