from dataclasses import dataclass
from typing import Dict, List

from salvo.domain.types import ShipPlacement

from .definition import FleetDefinition
from .placements import generate_fleet_placements


@dataclass
class FleetRuntime:
    definition: FleetDefinition
    placements: Dict[int, List[ShipPlacement]]


class PlacementCache:
    def __init__(self):
        self._cache: Dict[str, FleetRuntime] = {}

    def _key(self, fleet: FleetDefinition) -> str:
        return f"{fleet.fleet_hash}:{fleet.fleet_version}"

    def get(self, fleet: FleetDefinition) -> FleetRuntime:
        key = self._key(fleet)
        if key not in self._cache:
            placements = generate_fleet_placements(fleet)
            self._cache[key] = FleetRuntime(fleet, placements)
        return self._cache[key]


DEFAULT_PLACEMENT_CACHE = PlacementCache()
