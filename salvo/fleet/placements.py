from typing import Dict, Iterable, List

from salvo.domain.board import make_mask
from salvo.domain.types import Cell, ShipPlacement

from .definition import FleetDefinition


def _touch_mask(cells: Iterable[Cell], board_size: int) -> int:
    """The ship's cells plus every cell orthogonally next to them."""
    mask = 0
    for r, c in cells:
        for dr, dc in ((0, 0), (0, 1), (0, -1), (1, 0), (-1, 0)):
            rr = r + dr
            cc = c + dc
            if 0 <= rr < board_size and 0 <= cc < board_size:
                mask |= 1 << (rr * board_size + cc)
    return mask


def generate_line_placements(length: int, board_size: int) -> List[ShipPlacement]:
    placements: List[ShipPlacement] = []
    if length <= 0 or length > board_size:
        return placements

    shapes = [tuple((0, c) for c in range(length))]
    if length > 1:
        shapes.append(tuple((r, 0) for r in range(length)))

    for orient in shapes:
        max_r = max(r for r, _ in orient)
        max_c = max(c for _, c in orient)
        for r0 in range(board_size - max_r):
            for c0 in range(board_size - max_c):
                cells = tuple((r0 + r, c0 + c) for r, c in orient)
                mask = make_mask(list(cells), board_size)
                placements.append(ShipPlacement(length, cells, mask, _touch_mask(cells, board_size)))

    return placements


def generate_fleet_placements(fleet: FleetDefinition) -> Dict[int, List[ShipPlacement]]:
    placements: Dict[int, List[ShipPlacement]] = {}
    for length in fleet.distinct_lengths():
        placements[length] = generate_line_placements(length, fleet.board_size)
    return placements
