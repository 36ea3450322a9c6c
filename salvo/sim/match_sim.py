import hashlib
import multiprocessing as mp
import os
import random
import statistics
import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from salvo.domain.board import create_board
from salvo.domain.config import HIT, MISS
from salvo.domain.phase import PHASE_HUNT, PHASE_TARGET, classify_phase
from salvo.domain.types import Cell, ShipPlacement
from salvo.fleet.cache import DEFAULT_PLACEMENT_CACHE
from salvo.fleet.definition import FleetDefinition
from salvo.fleet.validation import require_valid_fleet
from salvo.targeting.engine import EngineOptions, TargetingEngine
from salvo.utils.debug import DebugLog


PLACEMENT_MAX_BOARDS = 1000


def stable_seed(global_seed: int, fleet_id: str, game_index: int) -> int:
    payload = f"{int(global_seed)}|{fleet_id}|{int(game_index)}".encode("utf-8")
    digest = hashlib.blake2b(payload, digest_size=8).digest()
    return int.from_bytes(digest, "little") & 0x7FFFFFFF


def percentile(values: List[int], pct: float) -> float:
    """Linear-interpolated percentile of an already sorted list."""
    if not values:
        return 0.0
    if pct <= 0:
        return float(values[0])
    if pct >= 100:
        return float(values[-1])
    k = (len(values) - 1) * (pct / 100.0)
    f = int(k)
    c = min(f + 1, len(values) - 1)
    if f == c:
        return float(values[f])
    d0 = values[f] * (c - k)
    d1 = values[c] * (k - f)
    return float(d0 + d1)


@dataclass
class GameResult:
    shots: int
    sequence: List[Cell]
    phase_counts: Dict[str, int] = field(default_factory=dict)


@dataclass
class MatchSummary:
    fleet_id: str
    games: int
    shots: List[int]
    elapsed: float
    phase_counts: Dict[str, int] = field(default_factory=dict)

    @property
    def mean(self) -> float:
        return statistics.mean(self.shots) if self.shots else 0.0

    @property
    def median(self) -> float:
        return statistics.median(self.shots) if self.shots else 0.0

    @property
    def best(self) -> int:
        return min(self.shots) if self.shots else 0

    @property
    def worst(self) -> int:
        return max(self.shots) if self.shots else 0

    def format_summary(self, label: str) -> str:
        shots_sorted = sorted(self.shots)
        hunt = self.phase_counts.get(PHASE_HUNT, 0)
        target = self.phase_counts.get(PHASE_TARGET, 0)
        return (
            f"[MATCH] {label}\n"
            f"  games={self.games} fleet={self.fleet_id}\n"
            f"  mean={self.mean:.2f} median={self.median:.0f} "
            f"p90={percentile(shots_sorted, 90.0):.0f} p95={percentile(shots_sorted, 95.0):.0f}\n"
            f"  min={self.best} max={self.worst}\n"
            f"  hunt_shots={hunt} target_shots={target}\n"
            f"  time={self.elapsed:.2f}s ({self.elapsed / max(1, self.games):.4f}s/game)"
        )


def place_fleet(
    fleet: FleetDefinition,
    placements: Dict[int, List[ShipPlacement]],
    rng: random.Random,
) -> List[ShipPlacement]:
    """Random layout in which no two ships share or touch an edge."""
    for _ in range(PLACEMENT_MAX_BOARDS):
        layout: List[ShipPlacement] = []
        blocked = 0
        valid_board = True

        # Longest ships first
        for length in sorted(fleet.ship_lengths, reverse=True):
            options = placements[length]
            placed = False
            for _ in range(50):
                p = rng.choice(options)
                if not (p.mask & blocked):
                    layout.append(p)
                    blocked |= p.adjacency_mask
                    placed = True
                    break
            if not placed:
                valid_board = False
                break

        if valid_board:
            return layout

    raise ValueError(f"could not place fleet '{fleet.fleet_id}' without touching ships")


def simulate_game(
    fleet: FleetDefinition,
    rng: Optional[random.Random] = None,
    engine: Optional[TargetingEngine] = None,
    layout: Optional[List[ShipPlacement]] = None,
    track_phases: bool = False,
) -> GameResult:
    if rng is None:
        rng = random.Random()
    if engine is None:
        engine = TargetingEngine()

    # 1. Hidden layout
    if layout is None:
        runtime = DEFAULT_PLACEMENT_CACHE.get(fleet)
        layout = place_fleet(fleet, runtime.placements, rng)

    cell_to_ship: Dict[Cell, int] = {}
    remaining_cells: Dict[int, int] = {}
    for i, p in enumerate(layout):
        remaining_cells[i] = len(p.cells)
        for cell in p.cells:
            cell_to_ship[cell] = i

    # 2. Fresh engine state
    board_size = fleet.board_size
    engine.initialize(board_size, list(fleet.ship_lengths))
    board = create_board(board_size)
    sunk_cells: List[Cell] = []
    fired = set()
    sequence: List[Cell] = []
    ships_remaining = len(layout)
    total_cells = board_size * board_size

    phase_counts: Dict[str, int] = {}
    if track_phases:
        phase_counts = {PHASE_HUNT: 0, PHASE_TARGET: 0}

    # 3. Game loop
    while ships_remaining > 0:
        if len(sequence) >= total_cells:
            raise RuntimeError(f"game on {fleet.fleet_id} did not finish within {total_cells} shots")

        if track_phases:
            phase = classify_phase(board, sunk_cells, board_size=board_size)
            phase_counts[phase] += 1

        cell = engine.choose_shot()
        r, c = cell
        if not (0 <= r < board_size and 0 <= c < board_size):
            raise RuntimeError(f"engine chose off-board cell {cell}")
        if cell in fired:
            raise RuntimeError(f"engine repeated cell {cell}")
        fired.add(cell)
        sequence.append(cell)

        ship = cell_to_ship.get(cell)
        sunk = False
        if ship is None:
            board[r][c] = MISS
        else:
            board[r][c] = HIT
            remaining_cells[ship] -= 1
            if remaining_cells[ship] == 0:
                sunk = True
                ships_remaining -= 1
                sunk_cells.extend(layout[ship].cells)

        engine.report_outcome(cell, ship is not None, sunk)

    return GameResult(len(sequence), sequence, phase_counts)


def _game_worker(args) -> Tuple[int, Dict[str, int]]:
    fleet, seed, options, debug_enabled, debug_path = args
    engine = TargetingEngine(options, DebugLog(debug_enabled, debug_path))
    result = simulate_game(fleet, random.Random(seed), engine=engine, track_phases=True)
    return result.shots, result.phase_counts


def run_match(
    fleet: FleetDefinition,
    games: int,
    seed: int = 1337,
    options: Optional[EngineOptions] = None,
    workers: int = 1,
    debug: Optional[DebugLog] = None,
) -> MatchSummary:
    """Play `games` independent games, each with its own engine and seed."""
    require_valid_fleet(fleet)
    if games <= 0:
        raise ValueError("games must be positive")
    if options is None:
        options = EngineOptions()
    debug_enabled = bool(debug and debug.enabled)
    debug_path = debug.path if debug is not None else ""

    args_list = [
        (fleet, stable_seed(seed, fleet.fleet_id, i), options, debug_enabled, debug_path)
        for i in range(games)
    ]

    start = time.perf_counter()
    workers = max(1, min(int(workers), os.cpu_count() or 1, games))
    if workers > 1:
        ctx = mp.get_context()
        with ctx.Pool(processes=workers) as pool:
            results = pool.map(_game_worker, args_list)
    else:
        results = [_game_worker(a) for a in args_list]
    elapsed = time.perf_counter() - start

    phase_totals: Dict[str, int] = {PHASE_HUNT: 0, PHASE_TARGET: 0}
    shots: List[int] = []
    for n, phases in results:
        shots.append(n)
        for key, value in phases.items():
            phase_totals[key] = phase_totals.get(key, 0) + value

    return MatchSummary(fleet.fleet_id, games, shots, elapsed, phase_totals)
