"""Paths to the vendored game-data modules."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

DEFAULT_GAME_DATA_DIR = Path("game-data")
DEFAULT_OUTPUT_DIR = Path("data")


@dataclass(frozen=True)
class GamePaths:
    root: Path

    def __post_init__(self) -> None:
        root = Path(self.root)
        object.__setattr__(self, "root", root)
        if not root.exists():
            raise FileNotFoundError(f"Game data directory not found: {root}")

    @property
    def shared_root(self) -> Path:
        return self.root / "ReplicatedStorage" / "Shared"

    @property
    def server_data_root(self) -> Path:
        return self.root / "ServerScriptService" / "Server" / "GameData"

    def shared_module(self, filename: str) -> Path:
        return self.shared_root / filename

    @property
    def creatures(self) -> Path:
        return self.shared_module("Creatures.lua")

    @property
    def items(self) -> Path:
        return self.shared_module("Items.lua")

    @property
    def moves(self) -> Path:
        return self.shared_module("Moves.lua")

    @property
    def locations(self) -> Path:
        return self.server_data_root / "ChunkList.lua"

    @property
    def type_chart(self) -> Path:
        return self.shared_module("TypeChart.lua")

    @property
    def abilities(self) -> Path:
        return self.shared_module("Abilities.lua")

    @property
    def species_abilities(self) -> Path:
        return self.shared_module("SpeciesAbilities.lua")

    @property
    def status(self) -> Path:
        return self.shared_module("Status.lua")

    @property
    def weather(self) -> Path:
        return self.shared_module("WeatherConfig.lua")

    @property
    def natures(self) -> Path:
        return self.shared_module("Natures.lua")

    @property
    def challenges(self) -> Path:
        return self.shared_module("ChallengesConfig.lua")

    @property
    def badges(self) -> Path:
        return self.shared_module("BadgeConfig.lua")
