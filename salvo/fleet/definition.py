import hashlib
import json
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class FleetDefinition:
    fleet_id: str
    name: str
    board_size: int
    ship_lengths: Tuple[int, ...]
    fleet_version: int = 1

    def normalized(self) -> dict:
        return {
            "fleet_id": self.fleet_id,
            "name": self.name,
            "board_size": int(self.board_size),
            "ship_lengths": sorted((int(n) for n in self.ship_lengths), reverse=True),
        }

    @property
    def fleet_hash(self) -> str:
        payload = json.dumps(self.normalized(), sort_keys=True, separators=(",", ":"))
        return hashlib.sha256(payload.encode("utf-8")).hexdigest()[:16]

    @property
    def total_ship_cells(self) -> int:
        return sum(int(n) for n in self.ship_lengths)

    def distinct_lengths(self) -> Tuple[int, ...]:
        return tuple(sorted({int(n) for n in self.ship_lengths}, reverse=True))
