import random

from salvo.fleet.definition import FleetDefinition
from salvo.sim.match_sim import simulate_game


def main() -> None:
    fleet = FleetDefinition(
        "smoke_tiny",
        "Smoke Tiny",
        5,
        (3, 2),
    )

    result = simulate_game(fleet, rng=random.Random(0))
    print(f"Smoke OK: shots={result.shots}")


if __name__ == "__main__":
    main()
