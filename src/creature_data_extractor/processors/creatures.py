"""Creature table extraction."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from luaparser import astnodes

from ..config import GamePaths
from ..context import ExtractionContext
from ..lua_table import LuaModuleSource
from ..lua_values import iter_keyed_fields, reify_args
from ..records import Creature, to_slug
from ..writer import records_payload, write_json
from .abilities import ability_entry

logger = logging.getLogger(__name__)

# createCreature(dex, name, sprite, shinySprite, description, types, stats,
#                learnset, evoLevel, evolvesInto, weight, shinyColors, class,
#                catchRateScalar, femaleChance)
CREATURE_ARGUMENTS = 15
STAT_NAMES = ("HP", "Attack", "Defense", "SpecialAttack", "SpecialDefense", "Speed")


def _text(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value else None


def build_types(raw: Any) -> List[Any]:
    if isinstance(raw, list):
        return [entry for entry in raw if entry is not None]
    if raw is None:
        return []
    return [raw]


def build_base_stats(raw: Any) -> Dict[str, Any]:
    if isinstance(raw, dict):
        return raw
    if isinstance(raw, list) and len(raw) == len(STAT_NAMES):
        return dict(zip(STAT_NAMES, raw))
    return {}


def build_learnset(raw: Any) -> Optional[Dict[str, List[str]]]:
    """Key learnable moves by level.

    The positional form lists move names per level starting at level 1;
    an explicit ``{[level] = {...}}`` map keeps its levels. Levels without
    moves are dropped and an empty result is ``None``.
    """

    if isinstance(raw, list):
        levels = enumerate(raw, start=1)
    elif isinstance(raw, dict):
        levels = raw.items()
    else:
        return None

    learnset: Dict[str, List[str]] = {}
    for level, moves in levels:
        if isinstance(moves, str):
            moves = [moves]
        if not isinstance(moves, list):
            continue
        names = [move for move in moves if move is not None]
        if names:
            learnset[str(level)] = names
    return learnset or None


def build_creature(key: str, call: astnodes.Call) -> Creature:
    values = reify_args(call, CREATURE_ARGUMENTS)
    name = _text(values[1]) or key
    evolution_level, evolves_into = values[8], _text(values[9])
    if evolution_level is None or evolves_into is None:
        evolution_level = evolves_into = None
    return Creature(
        id=key,
        slug=to_slug(name),
        dex_number=values[0] or 0,
        name=name,
        sprite=values[2] or None,
        shiny_sprite=values[3] or None,
        description=values[4] or "",
        types=build_types(values[5]),
        base_stats=build_base_stats(values[6]),
        learnset=build_learnset(values[7]),
        evolution_level=evolution_level,
        evolves_into=evolves_into,
        base_weight_kg=values[10],
        shiny_colors=values[11],
        creature_class=values[12] or None,
        catch_rate_scalar=values[13],
        female_chance=values[14],
    )


def build_creatures(table: astnodes.Table) -> List[Creature]:
    creatures: List[Creature] = []
    for key, value in iter_keyed_fields(table, "creature"):
        if not isinstance(value, astnodes.Call):
            logger.warning(
                "Skipping creature %s: expected a constructor call, got %s",
                key,
                type(value).__name__,
            )
            continue
        creatures.append(build_creature(key, value))
    return creatures


def attach_abilities(creatures: List[Creature], context: ExtractionContext) -> None:
    for creature in creatures:
        entries = context.abilities_for(creature.name, creature.id)
        if entries is None:
            continue
        shaped = [entry for entry in map(ability_entry, entries) if entry]
        creature.abilities = shaped or None


def extract_creatures(paths: GamePaths, context: ExtractionContext, output_dir: Path) -> Path:
    table = LuaModuleSource(paths.creatures).exported_table()
    creatures = build_creatures(table)
    attach_abilities(creatures, context)
    logger.info("Extracted %d creatures", len(creatures))
    return write_json(records_payload(creatures), output_dir, "creatures.json")
