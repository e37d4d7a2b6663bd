import random

from evotsp import EvolutionConfig, run_genetic_algorithm


def main():
    rng = random.Random(42)
    cities = [(rng.uniform(0, 100), rng.uniform(0, 100)) for _ in range(30)]

    cfg = EvolutionConfig(
        population_size=60,
        generations=300,
        mutation_rate=0.2,
        tournament_size=5,
        random_seed=7,
    )

    def report(gen, best):
        if gen % 50 == 0:
            print(f"gen {gen}: best distance={best:.2f}")

    result = run_genetic_algorithm(cities, cfg, on_generation=report)
    print(f"best tour: {result.best_tour}")
    print(f"best distance: {result.best_distance:.2f} after {result.generations_run} generations")


if __name__ == "__main__":
    main()
