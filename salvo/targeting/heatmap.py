from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Set

from salvo.domain.board import BeliefGrid, neighbors4
from salvo.domain.config import (
    ADJACENT_HIT_BONUS,
    BASE_PER_LENGTH,
    COLINEAR_BONUS,
    EARLY_BONUS_PER_LENGTH,
    EARLY_GAME_HITS,
    EMPTY,
    EXCLUDED,
    HIT,
    HIT_BONUS,
    MISS,
    MISS_PENALTY,
    ORIENT_HORIZONTAL,
    ORIENT_UNKNOWN,
    ORIENT_VERTICAL,
    PARAM_SPECS,
)
from salvo.domain.types import Cell

ProbabilityMap = List[List[int]]


@dataclass(frozen=True)
class HeatmapWeights:
    base_per_length: int = BASE_PER_LENGTH
    hit_bonus: int = HIT_BONUS
    early_game_hits: int = EARLY_GAME_HITS
    early_bonus_per_length: int = EARLY_BONUS_PER_LENGTH
    adjacent_hit_bonus: int = ADJACENT_HIT_BONUS
    colinear_bonus: int = COLINEAR_BONUS
    miss_penalty: int = MISS_PENALTY

    def __post_init__(self):
        negative = sorted(name for name, value in vars(self).items() if value < 0)
        if negative:
            raise ValueError(f"heatmap weights must not be negative: {', '.join(negative)}")

    @classmethod
    def from_params(cls, params: Optional[Dict[str, float]]) -> "HeatmapWeights":
        if not params:
            return cls()
        specs = {spec["key"]: spec for spec in PARAM_SPECS["heatmap"]}
        unknown = sorted(k for k in params if k not in specs)
        if unknown:
            raise ValueError(f"unknown heatmap parameters: {', '.join(unknown)}")
        values = {}
        for key, raw in params.items():
            spec = specs[key]
            values[key] = int(min(spec["max"], max(spec["min"], raw)))
        return cls(**values)


def empty_map(board_size: int) -> ProbabilityMap:
    return [[0 for _ in range(board_size)] for _ in range(board_size)]


def build_probability_map(
    grid: BeliefGrid,
    remaining_lengths: Sequence[int],
    orientation: str = ORIENT_UNKNOWN,
    weights: Optional[HeatmapWeights] = None,
    blocked: Optional[Iterable[Cell]] = None,
) -> ProbabilityMap:
    """
    Score every cell by how many surviving ship placements cover it.

    A window of L cells along a row or column is a placement when none of its
    cells is a miss, excluded, or part of an already sunk ship (`blocked`).
    Each placement adds `L * base + hits * hit_bonus` (plus an early-game
    length bonus) to all of its cells. Unknown cells next to an unresolved
    hit then get a flat bonus, with an extra bonus along `orientation`, and
    unknown cells next to a miss lose a small penalty, floored at zero.

    Returns an all-zero map when no ship remains.
    """
    if weights is None:
        weights = HeatmapWeights()
    n = grid.board_size
    prob = empty_map(n)
    if not remaining_lengths:
        return prob

    board = grid.cells
    blocked_set: Set[Cell] = set(blocked or ())
    early = grid.hit_count < weights.early_game_hits

    def usable(r: int, c: int) -> bool:
        state = board[r][c]
        return state != MISS and state != EXCLUDED and (r, c) not in blocked_set

    for length in remaining_lengths:
        if length > n:
            continue
        base = length * weights.base_per_length
        if early:
            base += length * weights.early_bonus_per_length

        # Horizontal placements
        for r in range(n):
            for c in range(n - length + 1):
                hits = 0
                ok = True
                for k in range(length):
                    if not usable(r, c + k):
                        ok = False
                        break
                    if board[r][c + k] == HIT:
                        hits += 1
                if ok:
                    score = base + hits * weights.hit_bonus
                    for k in range(length):
                        prob[r][c + k] += score

        # Vertical placements
        for r in range(n - length + 1):
            for c in range(n):
                hits = 0
                ok = True
                for k in range(length):
                    if not usable(r + k, c):
                        ok = False
                        break
                    if board[r + k][c] == HIT:
                        hits += 1
                if ok:
                    score = base + hits * weights.hit_bonus
                    for k in range(length):
                        prob[r + k][c] += score

    # Bonus for unknown cells next to unresolved hits
    for r, c in grid.hits():
        if (r, c) in blocked_set:
            continue
        for nr, nc in neighbors4((r, c), n):
            if board[nr][nc] != EMPTY:
                continue
            prob[nr][nc] += weights.adjacent_hit_bonus
            if (orientation == ORIENT_HORIZONTAL and nr == r) or (
                orientation == ORIENT_VERTICAL and nc == c
            ):
                prob[nr][nc] += weights.colinear_bonus

    # Penalty next to misses, floored at zero
    if weights.miss_penalty:
        for r in range(n):
            for c in range(n):
                if board[r][c] != MISS:
                    continue
                for nr, nc in neighbors4((r, c), n):
                    if board[nr][nc] == EMPTY:
                        prob[nr][nc] = max(0, prob[nr][nc] - weights.miss_penalty)

    return prob


def best_cell(prob: ProbabilityMap, grid: BeliefGrid) -> Optional[Cell]:
    """Highest positive score among open cells; row-major order breaks ties."""
    best: Optional[Cell] = None
    best_score = 0
    n = grid.board_size
    for r in range(n):
        for c in range(n):
            if grid.cells[r][c] != EMPTY:
                continue
            if prob[r][c] > best_score:
                best_score = prob[r][c]
                best = (r, c)
    return best
