"""Ability definitions and the per-species ability table."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from luaparser import astnodes

from ..config import GamePaths
from ..context import ExtractionContext
from ..lua_table import ExtractionError, LuaModuleSource
from ..lua_values import as_map, reify
from ..records import Ability, AbilityEntry, SpeciesAbilityLink
from ..writer import records_payload, write_json

logger = logging.getLogger(__name__)

ABILITY_ANCHORS = (
    r"Abilities\.Definitions\s*=\s*\{",
    r"\bDefinitions\s*=\s*\{",
)
SPECIES_ABILITY_ANCHORS = (
    r"local\s+SpeciesAbilities\b[^=\n]*=\s*\{",
    r"\bSpeciesAbilities\b[^=\n]*=\s*\{",
)


def build_abilities(table: astnodes.Table) -> List[Ability]:
    definitions = as_map(reify(table))
    if definitions is None:
        raise ExtractionError("Abilities.Definitions is not a table")

    abilities: List[Ability] = []
    for key, value in definitions.items():
        if not isinstance(value, dict):
            logger.warning("Skipping ability %s: definition is not a table", key)
            continue
        if isinstance(key, str):
            ability_id = key
        else:
            ability_id = str(value.get("Id") or value.get("Name") or key)
        abilities.append(
            Ability(
                id=ability_id,
                name=value.get("Name") or ability_id,
                description=value.get("Description") or "",
                trigger_type=value.get("TriggerType") or "",
                extra=value,
            )
        )
    return abilities


def ability_entry(entry: Any) -> Optional[AbilityEntry]:
    """Shape one species-ability row as ``{Name, Chance}``."""
    if not isinstance(entry, dict):
        logger.warning("Ignoring species ability entry %r: not a table", entry)
        return None
    name = entry.get("Name") or entry.get("name")
    if not name:
        logger.warning("Ignoring species ability entry without a name: %r", entry)
        return None
    chance = entry.get("Chance") or entry.get("chance") or 0
    return AbilityEntry(name=name, chance=chance)


def build_species_abilities(table: astnodes.Table) -> Dict[str, List[Any]]:
    species = as_map(reify(table))
    if species is None:
        raise ExtractionError("SpeciesAbilities is not a table")

    result: Dict[str, List[Any]] = {}
    for key, entries in species.items():
        if not isinstance(entries, list):
            logger.warning("Skipping species %s: ability list is not a table", key)
            continue
        result[str(key)] = entries
    return result


def load_species_abilities(paths: GamePaths) -> Dict[str, List[Any]]:
    table = LuaModuleSource(paths.species_abilities).anchored_table(*SPECIES_ABILITY_ANCHORS)
    return build_species_abilities(table)


def build_species_ability_links(species: Dict[str, List[Any]]) -> List[SpeciesAbilityLink]:
    links = []
    for name, entries in species.items():
        shaped = [entry for entry in (ability_entry(raw) for raw in entries) if entry]
        links.append(SpeciesAbilityLink(species=name, abilities=shaped))
    return links


def extract_abilities(paths: GamePaths, context: ExtractionContext, output_dir: Path) -> Path:
    table = LuaModuleSource(paths.abilities).anchored_table(*ABILITY_ANCHORS)
    abilities = build_abilities(table)
    logger.info("Extracted %d abilities", len(abilities))
    return write_json(records_payload(abilities), output_dir, "abilities.json")


def extract_species_abilities(
    paths: GamePaths, context: ExtractionContext, output_dir: Path
) -> Path:
    if context.species_abilities is None:
        raise ExtractionError("species ability table was not loaded")
    links = build_species_ability_links(context.species_abilities)
    logger.info("Extracted species abilities for %d species", len(links))
    return write_json(records_payload(links), output_dir, "species_abilities.json")
