"""Nature extraction."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, List, Optional

from luaparser import astnodes

from ..config import GamePaths
from ..context import ExtractionContext
from ..lua_table import ExtractionError, LuaModuleSource
from ..lua_values import as_map, reify
from ..records import Nature
from ..writer import records_payload, write_json

logger = logging.getLogger(__name__)

NATURE_ANCHORS = (
    r"local\s+NATURE_DEFS\b[^=\n]*=\s*\{",
    r"\bNATURE_DEFS\b[^=\n]*=\s*\{",
)

STAT_CODES = {
    "Atk": "Attack",
    "Def": "Defense",
    "Spe": "Speed",
    "SpA": "SpecialAttack",
    "SpD": "SpecialDefense",
    "None": "None",
}


def stat_for_code(code: Any) -> Optional[str]:
    if not isinstance(code, str):
        return None
    return STAT_CODES.get(code)


def build_natures(table: astnodes.Table) -> List[Nature]:
    definitions = as_map(reify(table))
    if definitions is None:
        raise ExtractionError("NATURE_DEFS is not a table")

    natures: List[Nature] = []
    for key, value in definitions.items():
        if not isinstance(value, dict):
            logger.warning("Skipping nature %s: definition is not a table", key)
            continue
        name = key if isinstance(key, str) else value.get("Name") or value.get("name") or str(key)
        inc, dec = value.get("inc"), value.get("dec")
        natures.append(
            Nature(
                name=name,
                increases=stat_for_code(inc) or "None",
                decreases=stat_for_code(dec) or "None",
                increase_key=inc,
                decrease_key=dec,
                is_neutral=inc == "None" and dec == "None",
            )
        )
    return natures


def extract_natures(paths: GamePaths, context: ExtractionContext, output_dir: Path) -> Path:
    table = LuaModuleSource(paths.natures).anchored_table(*NATURE_ANCHORS)
    natures = build_natures(table)
    logger.info("Extracted %d natures", len(natures))
    return write_json(records_payload(natures), output_dir, "natures.json")
