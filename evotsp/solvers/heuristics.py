import random
from typing import Optional, Sequence

import networkx as nx
from networkx.algorithms import approximation as nx_app
import numpy as np

from ..distance import build_distance_matrix
from .base import Solver, Tour


def nearest_neighbor_tour(dist: np.ndarray, start: int = 0) -> Tour:
    n = dist.shape[0]
    tour = [start]
    unvisited = set(range(n))
    unvisited.remove(start)
    current = start
    while unvisited:
        # min over a sorted list keeps ties on the lowest index
        nxt = min(sorted(unvisited), key=lambda node: dist[current, node])
        tour.append(nxt)
        unvisited.remove(nxt)
        current = nxt
    return tour


def complete_graph(dist: np.ndarray) -> nx.Graph:
    n = dist.shape[0]
    graph = nx.complete_graph(n)
    for u, v in graph.edges():
        graph[u][v]["weight"] = float(dist[u, v])
    return graph


def christofides_tour(dist: np.ndarray) -> Tour:
    # MST + minimum matching on odd-degree nodes, shortcut to a Hamiltonian cycle.
    n = dist.shape[0]
    if n < 3:
        return list(range(n))
    cycle = nx_app.christofides(complete_graph(dist), weight="weight")
    return list(cycle[:-1])


class ConstructiveSolver(Solver):
    name = "constructive"

    def __init__(self, strategy: str, rng: Optional[random.Random] = None):
        if strategy not in ("nearest_neighbor", "christofides"):
            raise ValueError(f"unknown construction strategy: {strategy!r}")
        self.strategy = strategy
        self.name = strategy
        self.rng = rng or random.Random(0)

    def solve(self, cities: Sequence[Sequence[float]]) -> Tour:
        dist = build_distance_matrix(cities)
        if self.strategy == "christofides":
            return christofides_tour(dist)
        return nearest_neighbor_tour(dist, self.rng.randrange(dist.shape[0]))
