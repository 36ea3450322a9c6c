import unittest

from salvo.domain.board import BeliefGrid
from salvo.domain.config import ORIENT_HORIZONTAL
from salvo.targeting.heatmap import HeatmapWeights, best_cell, build_probability_map


class ProbabilityMapTests(unittest.TestCase):
    def test_no_ships_left_gives_all_zero_map(self):
        grid = BeliefGrid(5)
        grid.mark_hit((2, 2))
        grid.mark_miss((0, 0))
        prob = build_probability_map(grid, [])
        self.assertEqual(prob, [[0] * 5 for _ in range(5)])
        self.assertIsNone(best_cell(prob, grid))

    def test_misses_block_windows_and_penalise_neighbours(self):
        grid = BeliefGrid(3)
        grid.mark_miss((1, 1))
        prob = build_probability_map(grid, [3])
        # early game: 3 * 10 + 3 * 5 per placement
        self.assertEqual(prob[0][0], 90)
        self.assertEqual(prob[0][1], 45 - 10)
        self.assertEqual(prob[1][1], 0)

    def test_excluded_cells_block_windows(self):
        grid = BeliefGrid(3)
        grid.mark_excluded((0, 1))
        prob = build_probability_map(grid, [3])
        self.assertEqual(prob[0][0], 45)
        self.assertEqual(prob[0][1], 0)

    def test_colinear_neighbours_get_extra_bonus(self):
        grid = BeliefGrid(5)
        grid.mark_hit((2, 2))
        plain = build_probability_map(grid, [2])
        oriented = build_probability_map(grid, [2], ORIENT_HORIZONTAL)
        self.assertEqual(plain[2][1], plain[1][2])
        self.assertEqual(oriented[2][1] - oriented[1][2], HeatmapWeights().colinear_bonus)
        self.assertEqual(oriented[2][3], oriented[2][1])

    def test_hits_raise_covering_windows(self):
        grid = BeliefGrid(5)
        grid.mark_hit((2, 2))
        prob = build_probability_map(grid, [2])
        self.assertGreater(prob[2][1], prob[0][1])
        self.assertEqual(best_cell(prob, grid), (1, 2))

    def test_sunk_cells_are_blocked(self):
        grid = BeliefGrid(3)
        sunk = [(0, 0), (0, 1), (0, 2)]
        for cell in sunk:
            grid.mark_hit(cell)
        prob = build_probability_map(grid, [3], blocked=sunk)
        self.assertEqual(prob[0], [0, 0, 0])
        self.assertEqual(prob[1][0], 45)

    def test_scores_never_negative(self):
        grid = BeliefGrid(6)
        for cell in [(0, 1), (1, 0), (1, 2), (2, 1), (3, 3), (4, 4), (5, 0)]:
            grid.mark_miss(cell)
        grid.mark_hit((4, 1))
        weights = HeatmapWeights(miss_penalty=1000)
        prob = build_probability_map(grid, [4, 2], weights=weights)
        for row in prob:
            for value in row:
                self.assertGreaterEqual(value, 0)

    def test_deterministic(self):
        grid = BeliefGrid(8)
        grid.mark_hit((3, 3))
        grid.mark_hit((3, 4))
        grid.mark_miss((5, 5))
        grid.mark_excluded((2, 3))
        first = build_probability_map(grid, [5, 3, 2], ORIENT_HORIZONTAL)
        second = build_probability_map(grid, [5, 3, 2], ORIENT_HORIZONTAL)
        self.assertEqual(first, second)

    def test_weights_from_params(self):
        weights = HeatmapWeights.from_params({"hit_bonus": 40, "miss_penalty": -3})
        self.assertEqual(weights.hit_bonus, 40)
        self.assertEqual(weights.miss_penalty, 0)
        self.assertEqual(weights.base_per_length, HeatmapWeights().base_per_length)
        with self.assertRaises(ValueError):
            HeatmapWeights.from_params({"nope": 1})

    def test_negative_weights_are_rejected(self):
        with self.assertRaises(ValueError):
            HeatmapWeights(base_per_length=-50)
        with self.assertRaises(ValueError):
            HeatmapWeights(miss_penalty=-1)
        self.assertEqual(HeatmapWeights(colinear_bonus=0).colinear_bonus, 0)


if __name__ == "__main__":
    unittest.main()
