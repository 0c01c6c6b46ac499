"""Badge image extraction."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List

from luaparser import astnodes

from ..config import GamePaths
from ..context import ExtractionContext
from ..lua_table import ExtractionError, LuaModuleSource
from ..lua_values import as_map, reify
from ..records import Badge
from ..writer import records_payload, write_json

logger = logging.getLogger(__name__)

BADGE_ANCHORS = (r"BadgeConfig\.BadgeImages\s*=\s*\{",)


def build_badges(table: astnodes.Table) -> List[Badge]:
    images = as_map(reify(table))
    if images is None:
        raise ExtractionError("BadgeConfig.BadgeImages is not a table")

    badges: List[Badge] = []
    for key, image in images.items():
        try:
            number = int(key)
        except (TypeError, ValueError):
            logger.warning("Skipping badge %r: key is not a badge number", key)
            continue
        badges.append(
            Badge(
                id=number,
                number=number,
                image=image if isinstance(image, str) else "",
                name=f"Badge {number}",
            )
        )
    badges.sort(key=lambda badge: badge.number)
    return badges


def extract_badges(paths: GamePaths, context: ExtractionContext, output_dir: Path) -> Path:
    table = LuaModuleSource(paths.badges).anchored_table(*BADGE_ANCHORS)
    badges = build_badges(table)
    logger.info("Extracted %d badges", len(badges))
    return write_json(records_payload(badges), output_dir, "badges.json")
