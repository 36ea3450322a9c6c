from collections import deque
from dataclasses import dataclass, field
from typing import Deque, List, Optional, Sequence, Tuple

from salvo.domain.board import BeliefGrid, format_board, neighbors4
from salvo.domain.config import AUTHORS, HIT, ORIENT_HORIZONTAL, ORIENT_UNKNOWN, ORIENT_VERTICAL
from salvo.domain.inventory import ShipInventory
from salvo.domain.phase import PHASE_HUNT, PHASE_TARGET
from salvo.domain.types import ActiveHitContext, Cell
from salvo.targeting.heatmap import HeatmapWeights, ProbabilityMap, best_cell, build_probability_map
from salvo.targeting.resolver import SunkResolution, resolve_sunk_ship
from salvo.utils.debug import NULL_DEBUG, DebugLog


@dataclass(frozen=True)
class EngineOptions:
    # Exclude diagonal neighbours of a sunk ship as well (off: ships may touch diagonally).
    exclude_diagonals: bool = False
    # Exclude cells beside a confirmed run of hits as soon as its axis is known.
    exclude_perpendicular: bool = True
    weights: HeatmapWeights = field(default_factory=HeatmapWeights)


def _axis_steps(orientation: str) -> Tuple[Tuple[int, int], ...]:
    if orientation == ORIENT_HORIZONTAL:
        return ((0, 1), (0, -1))
    if orientation == ORIENT_VERTICAL:
        return ((1, 0), (-1, 0))
    return ()


class TargetingEngine:
    """
    Hunt/target shot selector for one game at a time.

    The harness calls `initialize` once per game, then alternates
    `choose_shot` and `report_outcome` until every ship is sunk. The engine
    never returns a cell twice and never returns a cell off the board.
    """

    def __init__(self, options: Optional[EngineOptions] = None, debug: Optional[DebugLog] = None):
        self.options = options or EngineOptions()
        self.debug = debug if debug is not None else NULL_DEBUG
        self.grid: Optional[BeliefGrid] = None
        self.inventory: Optional[ShipInventory] = None
        self.queue: Deque[Cell] = deque()
        self.shots: List[Cell] = []
        self.context = ActiveHitContext()
        self.last_resolution: Optional[SunkResolution] = None

    # ------------------------------------------------------------------
    # Harness contract
    # ------------------------------------------------------------------

    def initialize(self, board_size: int, ship_lengths: Sequence[int]) -> None:
        self.grid = BeliefGrid(board_size)
        self.inventory = ShipInventory(ship_lengths, board_size)
        self.queue = deque()
        self.shots = []
        self.context = ActiveHitContext()
        self.last_resolution = None
        self.debug.event("New game", f"{board_size}x{board_size}, ships {list(ship_lengths)}")

    def authors(self) -> str:
        return AUTHORS

    @property
    def phase(self) -> str:
        return PHASE_TARGET if self.context.active else PHASE_HUNT

    def choose_shot(self) -> Cell:
        grid = self._require_grid()

        source = "orientation"
        shot = self._follow_orientation()
        prob: Optional[ProbabilityMap] = None

        if shot is None and self.queue:
            prob = self.probability_map()
            shot = self._pop_queue(prob)
            source = "queue"

        if shot is None:
            if prob is None:
                prob = self.probability_map()
            shot = best_cell(prob, grid)
            source = "map"

        if shot is None:
            shot = self._fallback_scan()
            source = "fallback"

        if not grid.in_bounds(shot) or grid.is_attacked(shot):
            raise RuntimeError(f"selected {shot} which is off the board or already attacked")

        self.debug.event("Shot", f"{shot} via {source}", f"phase={self.phase} queue={list(self.queue)}")
        return shot

    def report_outcome(self, cell: Cell, hit: bool, ship_just_sunk: bool = False) -> None:
        grid = self._require_grid()
        cell = (int(cell[0]), int(cell[1]))
        if not grid.in_bounds(cell):
            raise ValueError(f"cell {cell} is outside the {grid.board_size}x{grid.board_size} board")
        if grid.is_attacked(cell):
            raise ValueError(f"cell {cell} was already attacked")
        if ship_just_sunk and not hit:
            raise ValueError(f"cell {cell} reported as a miss that sank a ship")

        self.shots.append(cell)
        if hit:
            grid.mark_hit(cell)
            if ship_just_sunk:
                self._on_sunk(cell)
            elif not self.context.active:
                self._start_streak(cell)
            else:
                self._extend_streak(cell)
        else:
            grid.mark_miss(cell)
            self._on_miss()

        if self.debug.enabled:
            self.debug.event(
                "Board",
                f"after shot {len(self.shots)} at {cell}: {'HIT' if hit else 'MISS'}",
                format_board(grid),
            )

    # ------------------------------------------------------------------
    # Scoring
    # ------------------------------------------------------------------

    def probability_map(self) -> ProbabilityMap:
        grid = self._require_grid()
        return build_probability_map(
            grid,
            self.inventory.remaining_lengths(),
            self.context.orientation,
            self.options.weights,
            blocked=self.inventory.sunk_cells(),
        )

    # ------------------------------------------------------------------
    # Selection steps
    # ------------------------------------------------------------------

    def _next_along_axis(self, cell: Cell) -> Optional[Cell]:
        for dr, dc in _axis_steps(self.context.orientation):
            cand = (cell[0] + dr, cell[1] + dc)
            if self.grid.in_bounds(cand) and self.grid.is_open(cand):
                return cand
        return None

    def _beyond_first_hit(self) -> Optional[Cell]:
        """First open cell past the hit run on the far side of the streak's first hit."""
        ctx = self.context
        first, last = ctx.first_hit, ctx.last_hit
        if first is None or last is None:
            return None
        if ctx.orientation == ORIENT_HORIZONTAL:
            step = (0, -1 if last[1] > first[1] else 1)
        elif ctx.orientation == ORIENT_VERTICAL:
            step = (-1 if last[0] > first[0] else 1, 0)
        else:
            return None

        cur = (first[0] + step[0], first[1] + step[1])
        while self.grid.in_bounds(cur) and self.grid.state(cur) == HIT:
            cur = (cur[0] + step[0], cur[1] + step[1])
        if self.grid.in_bounds(cur) and self.grid.is_open(cur):
            return cur
        return None

    def _follow_orientation(self) -> Optional[Cell]:
        ctx = self.context
        if not ctx.active or ctx.orientation == ORIENT_UNKNOWN:
            return None
        nxt = self._next_along_axis(ctx.last_hit)
        if nxt is not None:
            return nxt
        return self._beyond_first_hit()

    def _pop_queue(self, prob: ProbabilityMap) -> Optional[Cell]:
        live = [c for c in self.queue if self.grid.is_open(c)]
        if not live:
            self.queue.clear()
            return None
        # max() keeps the earliest entry among equal scores
        best = max(live, key=lambda c: prob[c[0]][c[1]])
        self.queue = deque(c for c in live if c != best)
        return best

    def _fallback_scan(self) -> Cell:
        grid = self.grid
        for r, c in grid.iter_cells():
            if (r + c) % 2 == 0 and grid.is_open((r, c)):
                return r, c
        for cell in grid.iter_cells():
            if grid.is_open(cell):
                return cell
        for cell in grid.iter_cells():
            if not grid.is_attacked(cell):
                self.debug.event("Fallback", f"only excluded cells left, shooting {cell}", level="warning")
                return cell
        raise RuntimeError("no unattacked cell left on the board")

    # ------------------------------------------------------------------
    # Outcome handling
    # ------------------------------------------------------------------

    def _start_streak(self, cell: Cell) -> None:
        ctx = self.context
        ctx.reset()
        ctx.first_hit = cell
        ctx.last_hit = cell
        ctx.consecutive_hits = 1

        # A leftover hit from an earlier streak may already sit next to this one.
        resolved = self.inventory.sunk_cells()
        for nb in neighbors4(cell, self.grid.board_size):
            if self.grid.state(nb) == HIT and nb not in resolved:
                ctx.first_hit = nb
                ctx.consecutive_hits = 2
                self._set_orientation([nb, cell])
                nxt = self._next_along_axis(cell)
                if nxt is not None:
                    self.queue.append(nxt)
                self.debug.event("Streak", f"hit {cell} joins earlier hit {nb}, {ctx.orientation.lower()}")
                return

        prob = self.probability_map()
        for nb in neighbors4(cell, self.grid.board_size):
            if self.grid.is_open(nb) and prob[nb[0]][nb[1]] > 0:
                self.queue.append(nb)
        self.debug.event("Streak", f"first hit {cell}, queued {list(self.queue)}")

    def _extend_streak(self, cell: Cell) -> None:
        ctx = self.context
        run = None
        for anchor in (ctx.last_hit, ctx.first_hit):
            run = self.grid.run_between(anchor, cell)
            if run is not None:
                break

        if run is None:
            prob = self.probability_map()
            for nb in neighbors4(cell, self.grid.board_size):
                if self.grid.is_open(nb) and prob[nb[0]][nb[1]] > 0 and nb not in self.queue:
                    self.queue.append(nb)
            self.debug.event("Streak", f"hit {cell} is not in line with streak from {ctx.first_hit}")
            return

        ctx.consecutive_hits += 1
        self._set_orientation(run)
        nxt = self._next_along_axis(cell)
        if nxt is not None:
            self.queue.append(nxt)
        ctx.last_hit = cell

    def _set_orientation(self, run: List[Cell]) -> None:
        ctx = self.context
        ctx.orientation = ORIENT_HORIZONTAL if run[0][0] == run[-1][0] else ORIENT_VERTICAL
        if not self.options.exclude_perpendicular:
            return
        if ctx.orientation == ORIENT_HORIZONTAL:
            steps = ((1, 0), (-1, 0))
        else:
            steps = ((0, 1), (0, -1))
        for r, c in run:
            for dr, dc in steps:
                side = (r + dr, c + dc)
                if self.grid.in_bounds(side):
                    self.grid.mark_excluded(side)

    def _on_sunk(self, cell: Cell) -> None:
        self.last_resolution = resolve_sunk_ship(
            self.grid,
            self.inventory,
            cell,
            include_diagonals=self.options.exclude_diagonals,
            debug=self.debug,
        )
        self.queue.clear()
        self.context.reset()

    def _on_miss(self) -> None:
        ctx = self.context
        if ctx.active and ctx.consecutive_hits > 0 and ctx.orientation != ORIENT_UNKNOWN:
            self.queue.clear()
            opposite = self._beyond_first_hit()
            if opposite is not None:
                self.queue.append(opposite)
        ctx.consecutive_hits = 0
        if not any(self.grid.is_open(c) for c in self.queue):
            self.queue.clear()
            ctx.reset()

    def _require_grid(self) -> BeliefGrid:
        if self.grid is None or self.inventory is None:
            raise RuntimeError("initialize() must be called before playing")
        return self.grid
