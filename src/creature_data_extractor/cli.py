"""Command line entrypoint for the creature data extractor."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Iterable

from .config import DEFAULT_GAME_DATA_DIR, DEFAULT_OUTPUT_DIR, GamePaths
from .context import ExtractionContext
from .lua_table import ExtractionError, LuaParseError
from .processors.abilities import (
    extract_abilities,
    extract_species_abilities,
    load_species_abilities,
)
from .processors.badges import extract_badges
from .processors.challenges import extract_challenges
from .processors.creatures import extract_creatures
from .processors.items import extract_items
from .processors.locations import extract_locations
from .processors.moves import extract_moves
from .processors.natures import extract_natures
from .processors.status import extract_status_effects
from .processors.type_chart import extract_type_chart
from .processors.weather import extract_weather

logger = logging.getLogger(__name__)

PROCESSOR_MAP = {
    "species_abilities": extract_species_abilities,
    "abilities": extract_abilities,
    "creatures": extract_creatures,
    "items": extract_items,
    "moves": extract_moves,
    "locations": extract_locations,
    "types": extract_type_chart,
    "status": extract_status_effects,
    "weather": extract_weather,
    "natures": extract_natures,
    "challenges": extract_challenges,
    "badges": extract_badges,
}

# Errors that abandon one dataset without stopping the run.
MODULE_ERRORS = (OSError, LuaParseError, ExtractionError)

_NEEDS_SPECIES_ABILITIES = {"species_abilities", "creatures"}


def parse_args(argv: Iterable[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Extract game configuration tables to JSON.")
    parser.add_argument(
        "--game-data",
        default=str(DEFAULT_GAME_DATA_DIR),
        help="Directory holding the vendored ReplicatedStorage/ServerScriptService sources.",
    )
    parser.add_argument(
        "--output",
        default=str(DEFAULT_OUTPUT_DIR),
        help="Directory where JSON files will be written.",
    )
    parser.add_argument(
        "--modules",
        nargs="+",
        default=list(PROCESSOR_MAP.keys()),
        choices=list(PROCESSOR_MAP.keys()),
        help="Choose which data sets to extract.",
    )
    parser.add_argument("--verbose", action="store_true", help="Log debug output.")
    return parser.parse_args(argv)


def configure_logging(verbose: bool = False) -> None:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(logging.DEBUG if verbose else logging.INFO)


def build_context(paths: GamePaths, modules: Iterable[str]) -> ExtractionContext:
    """Load the species-ability table ahead of the datasets that use it."""

    if not _NEEDS_SPECIES_ABILITIES.intersection(modules):
        return ExtractionContext()
    try:
        species = load_species_abilities(paths)
    except MODULE_ERRORS as exc:
        logger.error("Species abilities unavailable, creatures will lack abilities: %s", exc)
        return ExtractionContext()
    logger.info("Loaded species abilities for %d species", len(species))
    return ExtractionContext(species_abilities=species)


def run(paths: GamePaths, output_dir: Path, modules: Iterable[str]) -> list[str]:
    """Run each processor in turn and return the names of the ones that failed."""

    modules = list(modules)
    context = build_context(paths, modules)
    failed: list[str] = []
    for module in modules:
        processor = PROCESSOR_MAP[module]
        try:
            out_file = processor(paths, context, output_dir)
        except MODULE_ERRORS as exc:
            logger.error("%s extraction failed: %s", module, exc)
            failed.append(module)
            continue
        print(f"{module} -> {out_file}")
    return failed


def main(argv: Iterable[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging(args.verbose)
    try:
        paths = GamePaths(Path(args.game_data))
    except FileNotFoundError as exc:
        logger.error("%s", exc)
        return 1
    failed = run(paths, Path(args.output), args.modules)
    if failed:
        logger.error("Failed datasets: %s", ", ".join(failed))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
