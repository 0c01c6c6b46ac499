"""Item extraction logic."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List

from luaparser import astnodes

from ..config import GamePaths
from ..context import ExtractionContext
from ..lua_table import LuaModuleSource
from ..lua_values import iter_keyed_fields, reify_args
from ..records import Item, to_slug
from ..writer import records_payload, write_json

logger = logging.getLogger(__name__)

# createItem(stats, description, category, usableInBattle, usableInOverworld, image)
ITEM_ARGUMENTS = 6


def build_item(key: str, call: astnodes.Call) -> Item:
    stats, description, category, in_battle, in_overworld, image = reify_args(
        call, ITEM_ARGUMENTS
    )[:ITEM_ARGUMENTS]
    name = key or "Unknown"
    return Item(
        id=key,
        slug=to_slug(name),
        name=name,
        stats=stats,
        description=description,
        category=category,
        usable_in_battle=in_battle,
        usable_in_overworld=in_overworld,
        image=image,
    )


def build_items(table: astnodes.Table) -> List[Item]:
    items: List[Item] = []
    for key, value in iter_keyed_fields(table, "item"):
        if not isinstance(value, astnodes.Call):
            logger.warning(
                "Skipping item %s: expected a constructor call, got %s", key, type(value).__name__
            )
            continue
        items.append(build_item(key, value))
    return items


def extract_items(paths: GamePaths, context: ExtractionContext, output_dir: Path) -> Path:
    table = LuaModuleSource(paths.items).exported_table()
    items = build_items(table)
    logger.info("Extracted %d items", len(items))
    return write_json(records_payload(items), output_dir, "items.json")
