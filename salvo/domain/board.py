from typing import Iterator, List, Optional, Tuple

from .config import BOARD_SIZE, DIRECTIONS, EMPTY, EXCLUDED, HIT, MISS
from .types import Cell


def cell_index(r: int, c: int, board_size: int = BOARD_SIZE) -> int:
    return r * board_size + c


def make_mask(cells: List[Tuple[int, int]], board_size: int = BOARD_SIZE) -> int:
    m = 0
    for r, c in cells:
        m |= 1 << cell_index(r, c, board_size)
    return m


def create_board(board_size: int = BOARD_SIZE) -> List[List[str]]:
    return [[EMPTY for _ in range(board_size)] for _ in range(board_size)]


def neighbors4(cell: Cell, board_size: int) -> Iterator[Cell]:
    r, c = cell
    for dr, dc in DIRECTIONS:
        nr, nc = r + dr, c + dc
        if 0 <= nr < board_size and 0 <= nc < board_size:
            yield nr, nc


class BeliefGrid:
    """What we know about each cell of the opponent's board.

    A hit is final: no later call moves a cell out of HIT. EXCLUDED is only
    ever laid over EMPTY cells.
    """

    def __init__(self, board_size: int = BOARD_SIZE):
        if board_size <= 0:
            raise ValueError("board_size must be positive")
        self.board_size = int(board_size)
        self.cells = create_board(self.board_size)
        self.hit_count = 0

    def in_bounds(self, cell: Cell) -> bool:
        r, c = cell
        return 0 <= r < self.board_size and 0 <= c < self.board_size

    def _require(self, cell: Cell) -> None:
        if not self.in_bounds(cell):
            raise ValueError(f"cell {cell} is outside the {self.board_size}x{self.board_size} board")

    def state(self, cell: Cell) -> str:
        self._require(cell)
        return self.cells[cell[0]][cell[1]]

    def is_known(self, cell: Cell) -> bool:
        return self.state(cell) != EMPTY

    def is_attacked(self, cell: Cell) -> bool:
        return self.state(cell) in (HIT, MISS)

    def is_open(self, cell: Cell) -> bool:
        return self.state(cell) == EMPTY

    def mark_hit(self, cell: Cell) -> None:
        if self.state(cell) == HIT:
            return
        self.cells[cell[0]][cell[1]] = HIT
        self.hit_count += 1

    def mark_miss(self, cell: Cell) -> None:
        current = self.state(cell)
        if current == MISS:
            return
        if current == HIT:
            raise ValueError(f"cell {cell} is already a hit and cannot become a miss")
        self.cells[cell[0]][cell[1]] = MISS

    def mark_excluded(self, cell: Cell) -> bool:
        if self.state(cell) != EMPTY:
            return False
        self.cells[cell[0]][cell[1]] = EXCLUDED
        return True

    def hits(self) -> List[Cell]:
        return self.cells_in_state(HIT)

    def cells_in_state(self, state: str) -> List[Cell]:
        n = self.board_size
        return [(r, c) for r in range(n) for c in range(n) if self.cells[r][c] == state]

    def iter_cells(self) -> Iterator[Cell]:
        n = self.board_size
        for r in range(n):
            for c in range(n):
                yield r, c

    def run_between(self, a: Cell, b: Cell) -> Optional[List[Cell]]:
        """Cells from a to b inclusive if they share a row or column and every
        cell strictly between them is a hit; otherwise None."""
        if a == b:
            return [a]
        if a[0] == b[0]:
            lo, hi = sorted((a[1], b[1]))
            run = [(a[0], c) for c in range(lo, hi + 1)]
        elif a[1] == b[1]:
            lo, hi = sorted((a[0], b[0]))
            run = [(r, a[1]) for r in range(lo, hi + 1)]
        else:
            return None
        for cell in run[1:-1]:
            if self.state(cell) != HIT:
                return None
        return run


def format_board(grid: BeliefGrid) -> str:
    return "\n".join(" ".join(row) for row in grid.cells)
