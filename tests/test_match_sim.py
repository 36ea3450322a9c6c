import random
import unittest

from salvo.domain.board import create_board, neighbors4
from salvo.domain.config import EXCLUDED, HIT, ORIENT_HORIZONTAL, ORIENT_UNKNOWN
from salvo.domain.phase import PHASE_HUNT, PHASE_TARGET, classify_phase
from salvo.fleet.builtins import classic_fleet, tournament_fleet
from salvo.fleet.cache import DEFAULT_PLACEMENT_CACHE
from salvo.fleet.definition import FleetDefinition
from salvo.sim.match_sim import percentile, place_fleet, run_match, simulate_game, stable_seed
from salvo.targeting.engine import TargetingEngine


def _play_checked(test, fleet, seed):
    """Play one game by hand, checking engine invariants after every shot."""
    rng = random.Random(seed)
    layout = place_fleet(fleet, DEFAULT_PLACEMENT_CACHE.get(fleet).placements, rng)
    ship_of = {}
    left = {}
    for i, p in enumerate(layout):
        left[i] = len(p.cells)
        for cell in p.cells:
            ship_of[cell] = i

    engine = TargetingEngine()
    engine.initialize(fleet.board_size, list(fleet.ship_lengths))
    n = fleet.board_size
    fired = set()
    excluded_after_sink = set()
    while any(left.values()):
        ctx = engine.context
        oriented = ctx.active and ctx.orientation != ORIENT_UNKNOWN
        anchor = ctx.last_hit

        cell = engine.choose_shot()
        test.assertTrue(0 <= cell[0] < n and 0 <= cell[1] < n)
        test.assertNotIn(cell, fired)
        test.assertNotIn(cell, excluded_after_sink)
        if oriented:
            if ctx.orientation == ORIENT_HORIZONTAL:
                test.assertEqual(cell[0], anchor[0])
            else:
                test.assertEqual(cell[1], anchor[1])
        fired.add(cell)

        ship = ship_of.get(cell)
        sunk = False
        if ship is not None:
            left[ship] -= 1
            sunk = left[ship] == 0
        engine.report_outcome(cell, ship is not None, sunk)

        if sunk:
            test.assertTrue(engine.last_resolution.record.sunk)
            test.assertEqual(set(engine.last_resolution.cells), set(layout[ship].cells))
            excluded_after_sink |= set(engine.last_resolution.excluded)
            for c in excluded_after_sink:
                test.assertEqual(engine.grid.state(c), EXCLUDED)

        for row in engine.probability_map():
            test.assertTrue(all(v >= 0 for v in row))

    test.assertTrue(engine.inventory.all_sunk)
    return len(fired)


class PlaceFleetTests(unittest.TestCase):
    def test_ships_never_touch_orthogonally(self):
        fleet = classic_fleet()
        placements = DEFAULT_PLACEMENT_CACHE.get(fleet).placements
        for seed in range(20):
            layout = place_fleet(fleet, placements, random.Random(seed))
            self.assertEqual(sorted(p.length for p in layout), sorted(fleet.ship_lengths))
            owner = {}
            for i, p in enumerate(layout):
                for cell in p.cells:
                    self.assertNotIn(cell, owner)
                    owner[cell] = i
            for cell, i in owner.items():
                for nb in neighbors4(cell, fleet.board_size):
                    if nb in owner:
                        self.assertEqual(owner[nb], i)

    def test_impossible_fleet_raises(self):
        fleet = FleetDefinition("cramped", "Cramped", 2, (2, 2))
        placements = DEFAULT_PLACEMENT_CACHE.get(fleet).placements
        with self.assertRaises(ValueError):
            place_fleet(fleet, placements, random.Random(0))


class SimulateGameTests(unittest.TestCase):
    def test_games_keep_engine_invariants(self):
        for seed in range(8):
            shots = _play_checked(self, classic_fleet(), seed)
            self.assertGreaterEqual(shots, sum(classic_fleet().ship_lengths))
            self.assertLessEqual(shots, 100)

    def test_tournament_game_finishes(self):
        shots = _play_checked(self, tournament_fleet(), 3)
        self.assertLessEqual(shots, 225)

    def test_small_board_with_single_cell_ship(self):
        fleet = FleetDefinition("tiny", "Tiny", 5, (3, 1))
        for seed in range(10):
            _play_checked(self, fleet, seed)

    def test_replay_gives_same_shot_sequence(self):
        fleet = classic_fleet()
        first = simulate_game(fleet, random.Random(42))
        second = simulate_game(fleet, random.Random(42), engine=TargetingEngine())
        self.assertEqual(first.sequence, second.sequence)
        self.assertEqual(len(set(first.sequence)), first.shots)

    def test_phase_counts_cover_every_shot(self):
        result = simulate_game(classic_fleet(), random.Random(7), track_phases=True)
        self.assertEqual(result.phase_counts[PHASE_HUNT] + result.phase_counts[PHASE_TARGET], result.shots)
        self.assertGreater(result.phase_counts[PHASE_TARGET], 0)


class RunMatchTests(unittest.TestCase):
    def test_summary(self):
        summary = run_match(classic_fleet(), 3, seed=5)
        self.assertEqual(summary.games, 3)
        self.assertEqual(len(summary.shots), 3)
        self.assertLessEqual(summary.best, summary.mean)
        self.assertLessEqual(summary.mean, summary.worst)
        self.assertEqual(sum(summary.phase_counts.values()), sum(summary.shots))
        self.assertIn("[MATCH] classic", summary.format_summary("classic"))

    def test_same_seed_same_results(self):
        a = run_match(classic_fleet(), 2, seed=9)
        b = run_match(classic_fleet(), 2, seed=9)
        self.assertEqual(a.shots, b.shots)

    def test_rejects_bad_input(self):
        with self.assertRaises(ValueError):
            run_match(FleetDefinition("bad", "Bad", 3, (4,)), 1)
        with self.assertRaises(ValueError):
            run_match(classic_fleet(), 0)


class HelperTests(unittest.TestCase):
    def test_percentile(self):
        self.assertEqual(percentile([], 50), 0.0)
        self.assertEqual(percentile([1, 2, 3, 4], 0), 1.0)
        self.assertEqual(percentile([1, 2, 3, 4], 100), 4.0)
        self.assertAlmostEqual(percentile([10, 20], 50), 15.0)

    def test_stable_seed(self):
        self.assertEqual(stable_seed(1, "classic", 3), stable_seed(1, "classic", 3))
        self.assertNotEqual(stable_seed(1, "classic", 3), stable_seed(1, "classic", 4))

    def test_classify_phase(self):
        board = create_board(3)
        self.assertEqual(classify_phase(board, []), PHASE_HUNT)
        board[1][1] = HIT
        self.assertEqual(classify_phase(board, []), PHASE_TARGET)
        self.assertEqual(classify_phase(board, [(1, 1)]), PHASE_HUNT)


if __name__ == "__main__":
    unittest.main()
