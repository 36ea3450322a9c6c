from typing import Tuple

from .definition import FleetDefinition


def classic_fleet() -> FleetDefinition:
    return FleetDefinition(
        fleet_id="classic",
        name="Classic Battleship (10x10)",
        board_size=10,
        ship_lengths=(5, 4, 3, 3, 2),
    )


def tournament_fleet() -> FleetDefinition:
    # Carrier 6 through patrol boat 2 on the larger match board.
    return FleetDefinition(
        fleet_id="tournament",
        name="Tournament (15x15)",
        board_size=15,
        ship_lengths=(6, 5, 4, 4, 3, 2),
    )


def builtin_fleets() -> Tuple[FleetDefinition, ...]:
    return (classic_fleet(), tournament_fleet())
