from dataclasses import dataclass
from typing import Optional, Tuple

from .config import ORIENT_UNKNOWN

Cell = Tuple[int, int]


@dataclass(frozen=True)
class ShipPlacement:
    length: int
    cells: Tuple[Cell, ...]
    mask: int
    adjacency_mask: int


@dataclass
class ActiveHitContext:
    first_hit: Optional[Cell] = None
    last_hit: Optional[Cell] = None
    consecutive_hits: int = 0
    orientation: str = ORIENT_UNKNOWN

    @property
    def active(self) -> bool:
        return self.last_hit is not None

    def reset(self) -> None:
        self.first_hit = None
        self.last_hit = None
        self.consecutive_hits = 0
        self.orientation = ORIENT_UNKNOWN
