"""Location (chunk list) extraction."""

from __future__ import annotations

import logging
import re
from collections import defaultdict
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple

from luaparser import astnodes

from ..config import GamePaths
from ..context import ExtractionContext
from ..lua_table import ExtractionError, LuaModuleSource
from ..lua_values import as_map, reify
from ..records import Encounter, Location, to_slug
from ..writer import records_payload, write_json

logger = logging.getLogger(__name__)

LOCATION_ANCHORS = (r"(?:local\s+)?\bChunkList\b[^=\n]*=\s*\{",)

# Chunks visited first, so their definitions win over later duplicates.
CHUNK_ORDER = (
    "Title",
    "Trade",
    "Battle",
    "Chunk1",
    "Chunk2",
    "Chunk3",
    "Chunk4",
    "Chunk5",
    "Chunk6",
    "Chunk7",
    "Chunk8",
    "CatchCare",
    "House1",
    "Professor's Lab",
    "PlayersHouse",
    "Gym1",
)
FIXED_RANKS = {"Title": -3, "Trade": -2, "Battle": -1}

_MAIN_CHUNK_RE = re.compile(r"^Chunk(\d+)$")
_UNLABELED_HOUSE_RE = re.compile(r"^Chunk\d+House\d+$")


def chunk_rank(chunk_id: str) -> Optional[int]:
    """Display rank of a top-level chunk, or None when it has no fixed slot."""
    if chunk_id in FIXED_RANKS:
        return FIXED_RANKS[chunk_id]
    match = _MAIN_CHUNK_RE.match(chunk_id)
    if match:
        return int(match.group(1))
    return None


def normalize_encounter(entry: Any) -> Optional[Encounter]:
    """Accept ``{creature, min, max, chance}`` lists or already keyed tables."""
    if isinstance(entry, list):
        creature, min_level, max_level, chance = (entry + [None] * 4)[:4]
    elif isinstance(entry, dict):
        creature = entry.get("Creature")
        min_level = entry.get("MinLevel")
        max_level = entry.get("MaxLevel")
        chance = entry.get("Chance")
    else:
        return None
    if not isinstance(creature, str) or not creature:
        return None
    return Encounter(creature=creature, min_level=min_level, max_level=max_level, chance=chance)


def _chunk_data(value: Any) -> Optional[Dict[str, Any]]:
    """A chunk is a keyed table; `{}` reifies to an empty list and counts as one."""
    if isinstance(value, dict):
        return value
    if value == []:
        return {}
    return None


def _iter_chunks(value: Any) -> Iterator[Tuple[str, Any]]:
    chunks = as_map(value)
    if not chunks:
        return
    for key, data in chunks.items():
        yield str(key), data


class LocationBuilder:
    """Flattens the chunk tree into Location records.

    Each child names its immediate container's display name as ``Parent``;
    ordering still groups every descendant under its top-level chunk.
    """

    def __init__(self) -> None:
        self.locations: List[Location] = []
        self._seen: set[str] = set()
        self._root_of: Dict[str, str] = {}

    def visit(
        self, key: str, data: Any, parent: Optional[str] = None, root: Optional[str] = None
    ) -> None:
        data = _chunk_data(data)
        if data is None:
            logger.warning("Skipping chunk %s: data is not a keyed table", key)
            return

        proper_name = data.get("ProperName")
        proper_name = proper_name if isinstance(proper_name, str) else ""
        if not proper_name and _UNLABELED_HOUSE_RE.match(key):
            logger.debug("Skipping unlabeled house %s", key)
            return
        if key in self._seen:
            logger.debug("Skipping duplicate chunk %s", key)
            return

        name = proper_name or key
        raw_encounters = as_map(data.get("Encounters")) or {}
        encounters = [
            encounter
            for encounter in map(normalize_encounter, raw_encounters.values())
            if encounter
        ]
        self.locations.append(
            Location(
                id=key,
                slug=to_slug(name),
                name=name,
                encounters=encounters,
                description=data.get("Description") or None,
                parent=parent,
            )
        )
        self._seen.add(key)
        self._root_of[key] = root or key

        for sub_key, sub_data in _iter_chunks(data.get("SubChunks")):
            self.visit(sub_key, sub_data, parent=name, root=root or key)

    def ordered(self) -> List[Location]:
        """Ranked chunks first, then the rest by name; children follow their root."""
        roots = [location for location in self.locations if location.parent is None]
        children: Dict[str, List[Location]] = defaultdict(list)
        for location in self.locations:
            if location.parent is not None:
                children[self._root_of[location.id]].append(location)

        def root_key(location: Location) -> tuple:
            rank = chunk_rank(location.id)
            if rank is not None:
                return (0, rank, "", "")
            return (1, 0, location.name.lower(), location.name)

        def child_key(location: Location) -> tuple:
            return (location.name.lower(), location.name)

        ordered: List[Location] = []
        for root in sorted(roots, key=root_key):
            ordered.append(root)
            ordered.extend(sorted(children.pop(root.id, []), key=child_key))
        for orphans in children.values():
            ordered.extend(sorted(orphans, key=child_key))
        return ordered


def build_locations(table: astnodes.Table) -> List[Location]:
    chunks = as_map(reify(table))
    if chunks is None:
        raise ExtractionError("ChunkList is not a table")
    chunks = {str(key): data for key, data in chunks.items()}

    builder = LocationBuilder()
    for key in CHUNK_ORDER:
        if key in chunks:
            builder.visit(key, chunks[key])
    for key, data in chunks.items():
        if key not in CHUNK_ORDER:
            builder.visit(key, data)
    return builder.ordered()


def extract_locations(paths: GamePaths, context: ExtractionContext, output_dir: Path) -> Path:
    table = LuaModuleSource(paths.locations).anchored_table(*LOCATION_ANCHORS)
    locations = build_locations(table)
    logger.info("Extracted %d locations", len(locations))
    return write_json(records_payload(locations), output_dir, "locations.json")
