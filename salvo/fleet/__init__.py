from .builtins import builtin_fleets, classic_fleet, tournament_fleet
from .cache import DEFAULT_PLACEMENT_CACHE, FleetRuntime, PlacementCache
from .definition import FleetDefinition
from .placements import generate_fleet_placements, generate_line_placements
from .validation import require_valid_fleet, validate_fleet

__all__ = [
    "FleetDefinition",
    "FleetRuntime",
    "PlacementCache",
    "DEFAULT_PLACEMENT_CACHE",
    "classic_fleet",
    "tournament_fleet",
    "builtin_fleets",
    "generate_fleet_placements",
    "generate_line_placements",
    "validate_fleet",
    "require_valid_fleet",
]
