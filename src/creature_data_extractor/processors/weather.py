"""Weather type extraction."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, List

from luaparser import astnodes

from ..config import GamePaths
from ..context import ExtractionContext
from ..lua_table import ExtractionError, LuaModuleSource
from ..lua_values import as_map, reify
from ..records import WeatherType
from ..writer import records_payload, write_json

logger = logging.getLogger(__name__)

WEATHER_ANCHORS = (r"WeatherConfig\.Types\s*=\s*\{",)


def _default_id(key: Any) -> Any:
    if isinstance(key, int):
        return key
    try:
        return int(key)
    except (TypeError, ValueError):
        return key


def build_weather_types(table: astnodes.Table) -> List[WeatherType]:
    definitions = as_map(reify(table))
    if definitions is None:
        raise ExtractionError("WeatherConfig.Types is not a table")

    weather: List[WeatherType] = []
    for key, value in definitions.items():
        if not isinstance(value, dict):
            logger.warning("Skipping weather %s: definition is not a table", key)
            continue
        weather.append(
            WeatherType(
                id=value.get("Id") or _default_id(key),
                name=value.get("Name") or "",
                description=value.get("Description") or "",
                icon=value.get("Icon") or "",
                weight=value.get("Weight") or 0,
                spawn_modifiers=as_map(value.get("SpawnModifiers")) or {},
                ability_modifiers=as_map(value.get("AbilityModifiers")) or {},
                extra=value,
            )
        )
    return weather


def extract_weather(paths: GamePaths, context: ExtractionContext, output_dir: Path) -> Path:
    table = LuaModuleSource(paths.weather).anchored_table(*WEATHER_ANCHORS)
    weather = build_weather_types(table)
    logger.info("Extracted %d weather types", len(weather))
    return write_json(records_payload(weather), output_dir, "weather.json")
