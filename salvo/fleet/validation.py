from typing import List, Set

from .definition import FleetDefinition


def validate_fleet(fleet: FleetDefinition) -> List[str]:
    errors: List[str] = []

    if fleet.board_size <= 0:
        errors.append("board_size must be positive")

    if not fleet.ship_lengths:
        errors.append("fleet must define at least one ship")

    for i, length in enumerate(fleet.ship_lengths):
        _validate_ship(i, int(length), fleet.board_size, errors)

    if fleet.board_size > 0 and fleet.total_ship_cells > fleet.board_size * fleet.board_size:
        errors.append("ships cover more cells than the board has")

    return errors


def _validate_ship(index: int, length: int, board_size: int, errors: List[str]) -> None:
    if length <= 0:
        errors.append(f"ship #{index} must have length > 0")
    elif board_size > 0 and length > board_size:
        errors.append(f"ship #{index} of length {length} does not fit a {board_size}x{board_size} board")


def require_valid_fleet(fleet: FleetDefinition) -> None:
    errors = validate_fleet(fleet)
    if errors:
        raise ValueError(f"invalid fleet '{fleet.fleet_id}': " + "; ".join(errors))
