"""Daily and weekly challenge extraction."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Optional

from luaparser import astnodes

from ..config import GamePaths
from ..context import ExtractionContext
from ..lua_table import ExtractionError, LuaModuleSource, find_table_literal, parse_table_literal
from ..lua_values import reify
from ..records import Challenge
from ..writer import records_payload, write_json

logger = logging.getLogger(__name__)

CHALLENGE_SECTIONS = (
    ("daily", "Daily", (r"ChallengesConfig\.DailyChallenges\s*=\s*\{",)),
    ("weekly", "Weekly", (r"ChallengesConfig\.WeeklyChallenges\s*=\s*\{",)),
)


def build_challenges(table: astnodes.Table, category: str) -> List[Challenge]:
    entries = reify(table)
    if isinstance(entries, dict):
        entries = list(entries.values())
    if not isinstance(entries, list):
        raise ExtractionError(f"{category} challenges are not a table")

    challenges: List[Challenge] = []
    for value in entries:
        if not isinstance(value, dict):
            logger.warning("Skipping %s challenge %r: not a table", category.lower(), value)
            continue
        challenges.append(
            Challenge(
                id=value.get("Id"),
                name=value.get("Name") or "",
                description=value.get("Description") or "",
                category=value.get("Category") or category,
                goal=value.get("Goal"),
                challenge_type=value.get("Type"),
                reward=value.get("Reward"),
                extra=value,
            )
        )
    return challenges


def load_challenge_sections(text: str) -> Dict[str, Optional[List[Challenge]]]:
    sections: Dict[str, Optional[List[Challenge]]] = {}
    for label, category, anchors in CHALLENGE_SECTIONS:
        try:
            block = find_table_literal(text, anchors)
        except ExtractionError:
            logger.warning("No %s challenge table found", label)
            sections[label] = None
            continue
        sections[label] = build_challenges(parse_table_literal(block), category)
    return sections


def extract_challenges(paths: GamePaths, context: ExtractionContext, output_dir: Path) -> Path:
    sections = load_challenge_sections(LuaModuleSource(paths.challenges).load_text())
    if all(section is None for section in sections.values()):
        raise ExtractionError("neither daily nor weekly challenges were found")

    payload = {label: records_payload(section or []) for label, section in sections.items()}
    logger.info(
        "Extracted %d daily and %d weekly challenges", len(payload["daily"]), len(payload["weekly"])
    )
    return write_json(payload, output_dir, "challenges.json")
