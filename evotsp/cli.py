import argparse
import logging
import sys
import time
from pathlib import Path

from evotsp.data import load_instance, load_tsplib_instances
from evotsp.errors import EvoTSPError
from evotsp.evaluation import evaluate_solver
from evotsp.evolutionary import EvolutionConfig
from evotsp.solvers.genetic import GeneticSolver
from evotsp.solvers.heuristics import ConstructiveSolver


def log(msg: str) -> None:
    ts = time.strftime("%H:%M:%S")
    print(f"[{ts}] {msg}", flush=True)


def _config_from_args(args) -> EvolutionConfig:
    return EvolutionConfig(
        population_size=args.population_size,
        generations=args.generations,
        mutation_rate=args.mutation_rate,
        tournament_size=args.tournament_size,
        random_seed=args.seed,
    )


def _progress_printer(every: int):
    def report(gen: int, best_distance: float) -> None:
        if every > 0 and gen % every == 0:
            log(f"generation {gen}, best distance so far: {best_distance:.4f}")
    return report


def _describe(fitness) -> str:
    gap = "n/a" if fitness.gap == float("inf") else f"{100 * fitness.gap:.2f}%"
    return f"{fitness.solver_name}: length={fitness.length:.4f} gap={gap} runtime={fitness.runtime:.2f}s"


def run(args) -> None:
    path = Path(args.instance)
    log(f"loading {path}")
    instance = load_instance(path)
    log(f"{instance.name}: {len(instance.cities)} cities, known optimum={instance.optimum}")

    solver = GeneticSolver(_config_from_args(args), on_generation=_progress_printer(args.report_every))
    result = evaluate_solver(solver, instance.cities, instance.optimum)
    log(_describe(result))

    if args.baseline:
        for strategy in ("nearest_neighbor", "christofides"):
            baseline = evaluate_solver(ConstructiveSolver(strategy), instance.cities, instance.optimum)
            log(_describe(baseline))

    print("Best tour:", " ".join(str(n) for n in instance.to_node_ids(result.tour)))
    print(f"Best tour length: {result.length}")


def data(args) -> None:
    instances = load_tsplib_instances(Path(args.data_root), max_nodes=args.max_nodes)
    if not instances:
        print(f"No TSPLIB instances found in {args.data_root}.")
        return
    for inst in instances:
        optimum = "unknown" if inst.optimum is None else f"{inst.optimum:.4f}"
        print(f"{inst.name:<20} cities={len(inst.cities):<6} optimum={optimum}")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Genetic algorithm for the Euclidean TSP")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every improvement")
    subparsers = parser.add_subparsers(dest="command", required=True)

    defaults = EvolutionConfig()
    run_parser = subparsers.add_parser("run", help="Evolve a tour for one TSPLIB instance")
    run_parser.add_argument("instance", help="Path to a .tsp file with a NODE_COORD_SECTION")
    run_parser.add_argument("--population-size", type=int, default=defaults.population_size)
    run_parser.add_argument("--generations", type=int, default=defaults.generations)
    run_parser.add_argument("--mutation-rate", type=float, default=defaults.mutation_rate)
    run_parser.add_argument("--tournament-size", type=int, default=defaults.tournament_size)
    run_parser.add_argument("--seed", type=int, default=None)
    run_parser.add_argument("--report-every", type=int, default=50, help="Progress interval in generations (0 = off)")
    run_parser.add_argument("--baseline", action="store_true", help="Also run nearest-neighbour and Christofides")
    run_parser.set_defaults(func=run)

    data_parser = subparsers.add_parser("data", help="List TSPLIB instances in a directory")
    data_parser.add_argument("--data-root", default="data/tsplib")
    data_parser.add_argument("--max-nodes", type=int, default=None)
    data_parser.set_defaults(func=data)

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        args.func(args)
    except EvoTSPError as exc:
        print(f"error: {exc}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
