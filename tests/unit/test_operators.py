"""
Unit tests for selection, crossover and mutation
Every operator must keep tours valid permutations
"""

import random
import unittest

from evotsp.distance import build_distance_matrix
from evotsp.solvers.base import fitness, is_permutation
from evotsp.solvers.operators import (
    cut_points,
    ordered_crossover,
    swap_mutate,
    tournament_select,
)


def _random_tour(n, rng):
    tour = list(range(n))
    rng.shuffle(tour)
    return tour


class TestOrderedCrossover(unittest.TestCase):
    """Order crossover keeps a slice of one parent and the order of the other"""

    def test_children_are_permutations(self):
        for seed in range(200):
            rng = random.Random(seed)
            n = rng.randint(1, 30)
            a, b = _random_tour(n, rng), _random_tour(n, rng)
            child = ordered_crossover(a, b, rng)
            self.assertTrue(is_permutation(child, n), (seed, a, b, child))

    def test_every_cut_pair_gives_a_permutation(self):
        rng = random.Random(11)
        n = 9
        a, b = _random_tour(n, rng), _random_tour(n, rng)
        for start in range(n + 1):
            for end in range(start, n + 1):
                child = ordered_crossover(a, b, rng, cuts=(start, end))
                self.assertTrue(is_permutation(child, n), (start, end, child))
                self.assertEqual(child[start:end], a[start:end])

    def test_known_child(self):
        a = [0, 1, 2, 3, 4, 5, 6, 7]
        b = [7, 6, 5, 4, 3, 2, 1, 0]
        child = ordered_crossover(a, b, random.Random(0), cuts=(2, 5))
        # slice [2, 3, 4] stays put, the rest follows b's order
        self.assertEqual(child, [7, 6, 2, 3, 4, 5, 1, 0])

    def test_empty_slice_gives_other_parent_order(self):
        a = [3, 1, 0, 2]
        b = [2, 0, 3, 1]
        for start in range(5):
            self.assertEqual(ordered_crossover(a, b, random.Random(0), cuts=(start, start)), b)

    def test_full_slice_gives_first_parent(self):
        a = [3, 1, 0, 2]
        b = [2, 0, 3, 1]
        self.assertEqual(ordered_crossover(a, b, random.Random(0), cuts=(0, 4)), a)

    def test_parents_untouched(self):
        a = [0, 1, 2, 3, 4]
        b = [4, 2, 0, 3, 1]
        child = ordered_crossover(a, b, random.Random(1))
        self.assertEqual(a, [0, 1, 2, 3, 4])
        self.assertEqual(b, [4, 2, 0, 3, 1])
        self.assertIsNot(child, a)

    def test_single_city(self):
        self.assertEqual(ordered_crossover([0], [0], random.Random(2)), [0])

    def test_invalid_cuts(self):
        with self.assertRaises(ValueError):
            ordered_crossover([0, 1, 2], [2, 1, 0], random.Random(0), cuts=(2, 1))
        with self.assertRaises(ValueError):
            ordered_crossover([0, 1, 2], [2, 1, 0], random.Random(0), cuts=(0, 4))

    def test_cut_points_are_ordered_and_in_range(self):
        rng = random.Random(4)
        for _ in range(500):
            start, end = cut_points(6, rng)
            self.assertTrue(0 <= start <= end <= 6)


class TestSwapMutate(unittest.TestCase):
    """Swap mutation exchanges exactly two positions"""

    def test_two_positions_change(self):
        rng = random.Random(8)
        for _ in range(200):
            tour = _random_tour(10, rng)
            mutated = swap_mutate(tour, rng)
            self.assertTrue(is_permutation(mutated, 10))
            diff = [i for i in range(10) if tour[i] != mutated[i]]
            self.assertEqual(len(diff), 2)
            i, j = diff
            self.assertEqual((tour[i], tour[j]), (mutated[j], mutated[i]))

    def test_returns_copy(self):
        tour = [0, 1, 2, 3]
        mutated = swap_mutate(tour, random.Random(0))
        self.assertEqual(tour, [0, 1, 2, 3])
        self.assertIsNot(mutated, tour)

    def test_too_short_to_swap(self):
        self.assertEqual(swap_mutate([0], random.Random(0)), [0])
        self.assertEqual(swap_mutate([], random.Random(0)), [])

    def test_two_cities_always_swap(self):
        self.assertEqual(swap_mutate([0, 1], random.Random(3)), [1, 0])


class TestTournamentSelect(unittest.TestCase):
    """Tournament selection favours fitter tours"""

    def setUp(self):
        self.dist = build_distance_matrix([(0, 0), (0, 1), (1, 1), (1, 0)])
        self.best = [0, 1, 2, 3]
        self.worse = [0, 2, 1, 3]

    def test_returns_member_of_population(self):
        rng = random.Random(1)
        population = [_random_tour(4, rng) for _ in range(10)]
        for _ in range(50):
            self.assertIn(tournament_select(population, self.dist, rng, 3), population)

    def test_large_tournament_finds_best(self):
        population = [self.worse] * 9 + [self.best]
        rng = random.Random(2)
        picks = [tournament_select(population, self.dist, rng, 300) for _ in range(20)]
        # 300 draws with replacement from 10 tours almost surely hit the best one
        self.assertTrue(all(p == self.best for p in picks))

    def test_size_one_is_uniform_draw(self):
        population = [self.worse, self.best]
        rng = random.Random(3)
        picks = {tuple(tournament_select(population, self.dist, rng, 1)) for _ in range(100)}
        self.assertEqual(picks, {tuple(self.worse), tuple(self.best)})

    def test_tie_keeps_first_drawn(self):
        a, b = [0, 1, 2, 3], [1, 2, 3, 0]
        self.assertEqual(fitness(self.dist, a), fitness(self.dist, b))
        population = [a, b]
        for seed in range(20):
            rng = random.Random(seed)
            first = population[random.Random(seed).randrange(2)]
            self.assertIs(tournament_select(population, self.dist, rng, 5), first)

    def test_precomputed_scores_pick_the_same_tour(self):
        rng = random.Random(6)
        population = [_random_tour(4, rng) for _ in range(10)]
        scores = [fitness(self.dist, tour) for tour in population]
        for seed in range(30):
            with_scores = tournament_select(population, self.dist, random.Random(seed), 3, scores)
            without = tournament_select(population, self.dist, random.Random(seed), 3)
            self.assertIs(with_scores, without)

    def test_scores_decide_the_winner(self):
        population = [self.best, self.worse]
        # scores rank the longer tour first, so it must win every full tournament
        picks = {
            tuple(tournament_select(population, self.dist, random.Random(seed), 50, scores=[0.1, 0.9]))
            for seed in range(10)
        }
        self.assertEqual(picks, {tuple(self.worse)})

    def test_same_seed_same_pick(self):
        rng = random.Random(0)
        population = [_random_tour(6, rng) for _ in range(12)]
        dist = build_distance_matrix([(i, i * i % 5) for i in range(6)])
        a = [tournament_select(population, dist, random.Random(9), 3) for _ in range(5)]
        b = [tournament_select(population, dist, random.Random(9), 3) for _ in range(5)]
        self.assertEqual(a, b)


if __name__ == "__main__":
    unittest.main()
