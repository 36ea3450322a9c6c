from typing import Iterable, Optional, Sequence, Set

from .config import HIT
from .types import Cell

PHASE_HUNT = "HUNT"
PHASE_TARGET = "TARGET"


def classify_phase(
    board: Sequence[Sequence[str]],
    sunk_cells: Iterable[Cell],
    board_size: Optional[int] = None,
) -> str:
    """TARGET while some hit is not yet accounted for by a sunk ship."""
    if board_size is None:
        board_size = len(board)

    resolved_hits: Set[Cell] = set(sunk_cells)

    for r in range(board_size):
        for c in range(board_size):
            if board[r][c] == HIT and (r, c) not in resolved_hits:
                return PHASE_TARGET

    return PHASE_HUNT
