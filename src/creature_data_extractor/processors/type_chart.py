"""Type effectiveness chart extraction."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List

from luaparser import astnodes

from ..config import GamePaths
from ..context import ExtractionContext
from ..lua_table import ExtractionError, LuaModuleSource
from ..lua_values import as_map, reify
from ..writer import write_json

logger = logging.getLogger(__name__)

TYPE_CHART_ANCHORS = (
    r"local\s+CHART\b[^=\n]*=\s*\{",
    r"\bCHART\s*=\s*\{",
)
NEUTRAL_MULTIPLIER = 1


def _is_multiplier(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def build_type_chart(table: astnodes.Table) -> Dict[str, Dict[str, Any]]:
    """Return attacker -> defender -> multiplier with every declared pairing present."""

    chart = as_map(reify(table))
    if chart is None:
        raise ExtractionError("type chart is not a table")

    rows: Dict[str, Dict[str, Any]] = {}
    for attacker, raw_row in chart.items():
        row = as_map(raw_row)
        if row is None:
            logger.warning("Skipping type chart row %s: not a table", attacker)
            continue
        cells: Dict[str, Any] = {}
        for defender, multiplier in row.items():
            if not _is_multiplier(multiplier):
                logger.warning(
                    "Ignoring %s -> %s multiplier %r: not a number", attacker, defender, multiplier
                )
                continue
            cells[str(defender)] = multiplier
        rows[str(attacker)] = cells

    declared: List[str] = list(rows)
    for cells in list(rows.values()):
        for defender in cells:
            if defender not in declared:
                declared.append(defender)

    for attacker in declared:
        cells = rows.setdefault(attacker, {})
        for defender in declared:
            cells.setdefault(defender, NEUTRAL_MULTIPLIER)
    return rows


def extract_type_chart(paths: GamePaths, context: ExtractionContext, output_dir: Path) -> Path:
    table = LuaModuleSource(paths.type_chart).anchored_table(*TYPE_CHART_ANCHORS)
    chart = build_type_chart(table)
    logger.info("Extracted type chart for %d types", len(chart))
    return write_json(chart, output_dir, "types.json")
