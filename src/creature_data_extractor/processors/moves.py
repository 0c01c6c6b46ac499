"""Move table extraction."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Tuple

from luaparser import astnodes

from ..config import GamePaths
from ..context import ExtractionContext
from ..lua_table import LuaModuleSource
from ..lua_values import callee_name, iter_keyed_fields, reify_args
from ..records import Move, to_slug
from ..writer import records_payload, write_json

logger = logging.getLogger(__name__)

_COMMON = ("base_power", "accuracy", "priority", "move_type", "category", "description")

# Positional argument order of each move constructor.
MOVE_LAYOUTS: Dict[str, Tuple[str, ...]] = {
    "createMove": _COMMON
    + (
        "heals_percent",
        "status_effect",
        "status_chance",
        "causes_flinch",
        "causes_confusion",
        "stat_changes",
        "multi_hit",
    ),
    "createMultiHitMove": _COMMON
    + ("min_hits", "max_hits", "fixed", "status_effect", "status_chance", "causes_flinch"),
    "createRecoilMove": _COMMON
    + ("recoil_percent", "status_effect", "status_chance", "causes_flinch"),
    "createStatMove": ("accuracy", "priority", "move_type", "description", "stat_changes"),
}
MOVE_LAYOUTS["create"] = MOVE_LAYOUTS["createMove"]

LAYOUT_DEFAULTS: Dict[str, Dict[str, object]] = {
    "createStatMove": {"base_power": 0, "category": "Status"},
}


def build_move(key: str, call: astnodes.Call) -> Move:
    name = key or "Unknown"
    creator = callee_name(call)
    layout = MOVE_LAYOUTS.get(creator)
    if layout is None:
        logger.warning("Move %s uses unknown constructor %s; keeping identity only", key, creator)
        return Move(id=key, slug=to_slug(name), name=name)

    values = reify_args(call, len(layout))
    fields = dict(LAYOUT_DEFAULTS.get(creator, {}))
    fields.update(zip(layout, values))
    return Move(id=key, slug=to_slug(name), name=name, **fields)


def build_moves(table: astnodes.Table) -> List[Move]:
    moves: List[Move] = []
    for key, value in iter_keyed_fields(table, "move"):
        if not isinstance(value, astnodes.Call):
            logger.warning(
                "Skipping move %s: expected a constructor call, got %s", key, type(value).__name__
            )
            continue
        moves.append(build_move(key, value))
    return moves


def extract_moves(paths: GamePaths, context: ExtractionContext, output_dir: Path) -> Path:
    table = LuaModuleSource(paths.moves).exported_table()
    moves = build_moves(table)
    logger.info("Extracted %d moves", len(moves))
    return write_json(records_payload(moves), output_dir, "moves.json")
