"""Status effect extraction."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List

from luaparser import astnodes

from ..config import GamePaths
from ..context import ExtractionContext
from ..lua_table import ExtractionError, LuaModuleSource
from ..lua_values import as_map, reify
from ..records import StatusEffect
from ..writer import records_payload, write_json

logger = logging.getLogger(__name__)

STATUS_ANCHORS = (
    r"local\s+STATUS_DEFINITIONS\b[^=\n]*=\s*\{",
    r"\bSTATUS_DEFINITIONS\b[^=\n]*=\s*\{",
)

STATUS_NAMES = {
    "BRN": "Burn",
    "PAR": "Paralysis",
    "PSN": "Poison",
    "TOX": "Badly Poisoned",
    "SLP": "Sleep",
    "FRZ": "Freeze",
}

STATUS_DESCRIPTIONS = {
    "BRN": "Reduces Attack and deals damage each turn.",
    "PAR": "Reduces Speed and may prevent movement.",
    "PSN": "Deals damage each turn.",
    "TOX": "Deals increasing damage each turn.",
    "SLP": "Prevents action for 1-3 turns.",
    "FRZ": "Prevents action until thawed.",
}


def build_status_effects(table: astnodes.Table) -> List[StatusEffect]:
    definitions = as_map(reify(table))
    if definitions is None:
        raise ExtractionError("STATUS_DEFINITIONS is not a table")

    effects: List[StatusEffect] = []
    for key, value in definitions.items():
        if not isinstance(value, dict):
            logger.warning("Skipping status %s: definition is not a table", key)
            continue
        code = str(key)
        effects.append(
            StatusEffect(
                id=code,
                name=STATUS_NAMES.get(code, code),
                code=code,
                description=STATUS_DESCRIPTIONS.get(code, ""),
                color=value.get("Color"),
                stroke_color=value.get("StrokeColor"),
                is_volatile=bool(value.get("IsVolatile")),
                extra=value,
            )
        )
    return effects


def extract_status_effects(paths: GamePaths, context: ExtractionContext, output_dir: Path) -> Path:
    table = LuaModuleSource(paths.status).anchored_table(*STATUS_ANCHORS)
    effects = build_status_effects(table)
    logger.info("Extracted %d status effects", len(effects))
    return write_json(records_payload(effects), output_dir, "status.json")
