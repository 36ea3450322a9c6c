#!/usr/bin/env python3
import argparse
import os
from typing import Iterable

from salvo.fleet.builtins import builtin_fleets, classic_fleet, tournament_fleet
from salvo.fleet.definition import FleetDefinition
from salvo.sim.match_sim import run_match
from salvo.targeting.engine import EngineOptions
from salvo.targeting.heatmap import HeatmapWeights
from salvo.utils.debug import DebugLog


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(str(raw).strip())
        return value if value > 0 else default
    except ValueError:
        return default


def _resolve_fleet(name: str, board_size: int = 0, ships: str = "") -> FleetDefinition:
    if ships:
        lengths = tuple(int(tok) for tok in ships.split(",") if tok.strip())
        size = board_size or 10
        return FleetDefinition("custom", f"Custom ({size}x{size})", size, lengths)
    name = (name or "classic").strip().lower()
    if name in {"classic", "10x10", "standard"}:
        return classic_fleet()
    if name in {"tournament", "15x15"}:
        return tournament_fleet()
    for fleet in builtin_fleets():
        if fleet.fleet_id == name:
            return fleet
    raise ValueError(f"Unknown fleet '{name}'. Use classic or tournament.")


def _parse_params(raw: Iterable[str]) -> dict:
    params = {}
    for item in raw:
        key, sep, value = item.partition("=")
        if not sep:
            raise ValueError(f"Expected key=value, got '{item}'.")
        params[key.strip()] = int(value)
    return params


def main(argv: Iterable[str] = None) -> int:
    parser = argparse.ArgumentParser(description="Match harness: play many games against random fleets.")
    parser.add_argument("--fleet", default="classic", help="Fleet id (classic|tournament)")
    parser.add_argument("--board-size", type=int, default=0, help="Board size for --ships")
    parser.add_argument("--ships", default="", help="Comma-separated ship lengths (custom fleet)")
    parser.add_argument("--games", type=int, default=_env_int("SALVO_GAMES", 200), help="Games to play")
    parser.add_argument("--seed", type=int, default=1337, help="Global seed")
    parser.add_argument("--workers", type=int, default=_env_int("SALVO_WORKERS", 1), help="Worker processes")
    parser.add_argument("--param", action="append", default=[], help="Heatmap weight override, key=value")
    parser.add_argument("--diagonals", action="store_true", help="Also exclude diagonal neighbours of sunk ships")
    parser.add_argument("--debug", action="store_true", help="Write a debug log (see SALVO_DEBUG_LOG)")
    args = parser.parse_args(list(argv) if argv is not None else None)

    fleet = _resolve_fleet(args.fleet, args.board_size, args.ships)
    options = EngineOptions(
        exclude_diagonals=args.diagonals,
        weights=HeatmapWeights.from_params(_parse_params(args.param)),
    )
    debug = DebugLog.from_env()
    if args.debug:
        debug.enabled = True

    print(f"Fleet: {fleet.name} ships={list(fleet.ship_lengths)}")
    print(f"Games: {args.games}, Seed: {args.seed}, Workers: {args.workers}")
    print()

    summary = run_match(fleet, args.games, seed=args.seed, options=options, workers=args.workers, debug=debug)
    print(summary.format_summary(fleet.fleet_id))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
