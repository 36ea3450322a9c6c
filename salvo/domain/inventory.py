from dataclasses import dataclass, field
from typing import List, Sequence, Set

from .config import ORIENT_UNKNOWN
from .types import Cell


@dataclass
class ShipRecord:
    length: int
    sunk: bool = False
    hit_cells: List[Cell] = field(default_factory=list)
    orientation: str = ORIENT_UNKNOWN

    def neighbors(self, board_size: int, include_diagonals: bool = False) -> Set[Cell]:
        """In-bounds cells touching the ship but not part of it."""
        own = set(self.hit_cells)
        if include_diagonals:
            steps = [(dr, dc) for dr in (-1, 0, 1) for dc in (-1, 0, 1) if dr or dc]
        else:
            steps = [(0, 1), (1, 0), (0, -1), (-1, 0)]
        out: Set[Cell] = set()
        for r, c in self.hit_cells:
            for dr, dc in steps:
                nr, nc = r + dr, c + dc
                if 0 <= nr < board_size and 0 <= nc < board_size and (nr, nc) not in own:
                    out.add((nr, nc))
        return out


class ShipInventory:
    """One record per ship in play, in fleet order."""

    def __init__(self, ship_lengths: Sequence[int], board_size: int):
        self.board_size = int(board_size)
        self.records: List[ShipRecord] = []
        for length in ship_lengths:
            if int(length) <= 0:
                raise ValueError(f"ship length must be positive, got {length}")
            self.records.append(ShipRecord(int(length)))

    def remaining_lengths(self) -> List[int]:
        return [s.length for s in self.records if not s.sunk]

    def has_unsunk(self, length: int) -> bool:
        return any(not s.sunk and s.length == length for s in self.records)

    @property
    def all_sunk(self) -> bool:
        return all(s.sunk for s in self.records)

    def sunk_cells(self) -> Set[Cell]:
        cells: Set[Cell] = set()
        for s in self.records:
            if s.sunk:
                cells.update(s.hit_cells)
        return cells

    def record_sunk(self, length: int, cells: Sequence[Cell], orientation: str) -> ShipRecord:
        for s in self.records:
            if not s.sunk and s.length == length:
                s.sunk = True
                s.hit_cells = list(cells)
                s.orientation = orientation
                return s
        raise ValueError(f"no unsunk ship of length {length} in inventory {self.remaining_lengths()}")

    def neighbors_of_sunk(self, length: int, include_diagonals: bool = False) -> Set[Cell]:
        out: Set[Cell] = set()
        for s in self.records:
            if s.sunk and s.length == length:
                out |= s.neighbors(self.board_size, include_diagonals)
        return out
