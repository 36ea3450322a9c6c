from dataclasses import dataclass
from typing import List, Optional, Set, Tuple

from salvo.domain.board import BeliefGrid
from salvo.domain.config import DIRECTIONS, HIT, ORIENT_HORIZONTAL, ORIENT_UNKNOWN, ORIENT_VERTICAL
from salvo.domain.inventory import ShipInventory, ShipRecord
from salvo.domain.types import Cell
from salvo.utils.debug import NULL_DEBUG, DebugLog


@dataclass
class SunkResolution:
    cells: Tuple[Cell, ...]
    orientation: str
    record: Optional[ShipRecord]
    excluded: Tuple[Cell, ...] = ()

    @property
    def matched(self) -> bool:
        return self.record is not None


def _collect_run(grid: BeliefGrid, trigger: Cell, resolved: Set[Cell]) -> Tuple[List[Cell], str]:
    def unresolved_hit(cell: Cell) -> bool:
        return grid.in_bounds(cell) and grid.state(cell) == HIT and cell not in resolved

    axis = None
    for dr, dc in DIRECTIONS:
        if unresolved_hit((trigger[0] + dr, trigger[1] + dc)):
            axis = (abs(dr), abs(dc))
            break

    if axis is None:
        return [trigger], ORIENT_UNKNOWN

    run = [trigger]
    for sign in (-1, 1):
        dr, dc = axis[0] * sign, axis[1] * sign
        cur = (trigger[0] + dr, trigger[1] + dc)
        while unresolved_hit(cur):
            run.append(cur)
            cur = (cur[0] + dr, cur[1] + dc)

    orientation = ORIENT_HORIZONTAL if axis == (0, 1) else ORIENT_VERTICAL
    return sorted(run), orientation


def resolve_sunk_ship(
    grid: BeliefGrid,
    inventory: ShipInventory,
    trigger: Cell,
    include_diagonals: bool = False,
    debug: DebugLog = NULL_DEBUG,
) -> SunkResolution:
    """
    Turn the hit that sank a ship into a confirmed ship record.

    Walks the contiguous run of unresolved hits through `trigger`, matches its
    length against the ships still afloat, records the sinking and excludes
    every unknown cell touching the ship. A run whose length matches no
    surviving ship is reported through `debug`. A lone hit with no length-1
    ship afloat is a miscount upstream: it comes back unmatched, with nothing
    recorded or excluded. Longer mismatched runs raise ValueError.
    """
    if grid.state(trigger) != HIT:
        raise ValueError(f"sunk signal for {trigger}, which is not a hit")

    run, orientation = _collect_run(grid, trigger, inventory.sunk_cells())
    length = len(run)

    if not inventory.has_unsunk(length):
        debug.event(
            "Sunk mismatch",
            f"run of {length} at {run[0]}..{run[-1]} matches no ship afloat",
            f"remaining: {inventory.remaining_lengths()}",
            level="warning",
        )
        if length == 1:
            return SunkResolution(tuple(run), orientation, None)
        raise ValueError(f"sunk run of length {length} matches no ship afloat: {inventory.remaining_lengths()}")

    record = inventory.record_sunk(length, run, orientation)
    excluded: List[Cell] = []
    for cell in sorted(inventory.neighbors_of_sunk(length, include_diagonals)):
        if grid.mark_excluded(cell):
            excluded.append(cell)

    debug.event(
        "Ship sunk",
        f"length {length} {orientation.lower()} at {run[0]}..{run[-1]}",
        f"excluded: {excluded}",
    )
    return SunkResolution(tuple(run), orientation, record, tuple(excluded))
