#!/usr/bin/env python3
"""Dungeon structural diagnostics for specific seeds.

Usage:
  python scripts/diagnose_seeds.py 292372 730727
  python scripts/diagnose_seeds.py --strategy stochastic 1 2 3

If no seeds are provided as CLI args, a default list is used.
Exits with non-zero status if structural issues are detected.
"""

from __future__ import annotations

import argparse
import json
import os
import sys
from typing import List

# Ensure project root on path if executed directly
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from agentdungeon.dungeon import ROOM, VOID, DungeonConfig, DungeonGenerator  # noqa: E402 import after path fix

DEFAULT_SEEDS = [292372, 730727]


def analyze(result, config: DungeonConfig) -> dict:
    """Count border tiles carved and rooms that touch another room (8-neighborhood)."""
    view = result.view
    size = view.size
    border = sum(
        1 for col, row, kind in view.cells() if kind != VOID and (col in (0, size - 1) or row in (0, size - 1))
    )
    owner = {}
    for idx, room in enumerate(result.rooms):
        for cell in room.cells():
            owner[cell] = idx
    touching = set()
    for (col, row), idx in owner.items():
        for dc in (-1, 0, 1):
            for dr in (-1, 0, 1):
                other = owner.get((col + dc, row + dr))
                if other is not None and other != idx:
                    touching.add(tuple(sorted((idx, other))))
    stray_room_tiles = sum(1 for col, row, kind in view.cells() if kind == ROOM and (col, row) not in owner)
    issues = {"border_tiles": border, "touching_rooms": len(touching), "stray_room_tiles": stray_room_tiles}
    if result.strategy == "stochastic":
        issues["fill_short"] = max(0, config.fill_goal - view.filled_count)
    return issues


def run_for_seed(seed: int, strategy: str) -> dict:
    config = DungeonConfig(seed=seed)
    result = DungeonGenerator(config).run(strategy)
    issues = analyze(result, config)
    return {"seed": seed, "strategy": strategy, "issues": issues, "ok": all(v == 0 for v in issues.values())}


def main(argv: List[str]) -> int:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--strategy", choices=["constructive", "stochastic"], default="constructive")
    parser.add_argument("seeds", nargs="*", type=int)
    args = parser.parse_args(argv)
    seeds = args.seeds or DEFAULT_SEEDS
    results = [run_for_seed(s, args.strategy) for s in seeds]
    print(json.dumps({"results": results}, indent=2))
    # Non-zero exit if any failure
    if not all(r["ok"] for r in results):
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
