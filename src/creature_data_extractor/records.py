"""Output record types and their JSON shape."""

from __future__ import annotations

import re
from dataclasses import dataclass, field, fields, is_dataclass
from typing import Any, Dict, List, Optional

_SLUG_RE = re.compile(r"[^a-z0-9]+")


def to_slug(value: Optional[str]) -> str:
    slug = _SLUG_RE.sub("-", str(value or "unknown").lower()).strip("-")
    return slug or "unknown"


def _json_name(attr: str) -> str:
    return "".join(part[:1].upper() + part[1:] for part in attr.split("_"))


def _plain(value: Any) -> Any:
    if is_dataclass(value) and not isinstance(value, type):
        return record_to_dict(value)
    if isinstance(value, list):
        return [_plain(item) for item in value]
    if isinstance(value, dict):
        return {key: _plain(item) for key, item in value.items()}
    return value


def record_to_dict(record: Any) -> Dict[str, Any]:
    """Serialize a record in field order, dropping fields that are ``None``.

    Output names are the PascalCase form of the attribute unless the field
    carries a ``json`` metadata override. Pass-through ``extra`` entries are
    appended without replacing declared fields.
    """

    payload: Dict[str, Any] = {}
    extra: Dict[str, Any] = {}
    for item in fields(record):
        value = getattr(record, item.name)
        if item.name == "extra":
            extra = value or {}
            continue
        if value is None:
            continue
        payload[item.metadata.get("json", _json_name(item.name))] = _plain(value)
    for key, value in extra.items():
        payload.setdefault(str(key), _plain(value))
    return payload


@dataclass
class AbilityEntry:
    name: str
    chance: float = 0


@dataclass
class Creature:
    id: str
    slug: str
    dex_number: float
    name: str
    sprite: Optional[str] = None
    shiny_sprite: Optional[str] = None
    description: str = ""
    types: List[str] = field(default_factory=list)
    base_stats: Dict[str, Any] = field(default_factory=dict)
    learnset: Optional[Dict[str, List[str]]] = None
    evolution_level: Optional[float] = None
    evolves_into: Optional[str] = None
    base_weight_kg: Optional[float] = None
    shiny_colors: Any = None
    creature_class: Optional[str] = field(default=None, metadata={"json": "Class"})
    catch_rate_scalar: Optional[float] = None
    female_chance: Optional[float] = None
    abilities: Optional[List[AbilityEntry]] = None


@dataclass
class Item:
    id: str
    slug: str
    name: str
    stats: Any = None
    description: Optional[str] = None
    category: Optional[str] = None
    usable_in_battle: Optional[bool] = None
    usable_in_overworld: Optional[bool] = None
    image: Optional[str] = None


@dataclass
class Move:
    id: str
    slug: str
    name: str
    base_power: Optional[float] = None
    accuracy: Optional[float] = None
    priority: Optional[float] = None
    move_type: Optional[str] = field(default=None, metadata={"json": "Type"})
    category: Optional[str] = None
    description: Optional[str] = None
    heals_percent: Optional[float] = None
    status_effect: Optional[str] = None
    status_chance: Optional[float] = None
    causes_flinch: Optional[bool] = None
    causes_confusion: Optional[bool] = None
    stat_changes: Any = None
    multi_hit: Any = None
    min_hits: Optional[float] = None
    max_hits: Optional[float] = None
    fixed: Optional[bool] = None
    recoil_percent: Optional[float] = None


@dataclass
class Encounter:
    creature: str
    min_level: Optional[float] = None
    max_level: Optional[float] = None
    chance: Optional[float] = None


@dataclass
class Location:
    id: str
    slug: str
    name: str
    encounters: List[Encounter] = field(default_factory=list)
    description: Optional[str] = None
    parent: Optional[str] = None


@dataclass
class Ability:
    id: str
    name: str
    description: str = ""
    trigger_type: str = ""
    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass
class SpeciesAbilityLink:
    species: str
    abilities: List[AbilityEntry] = field(default_factory=list)


@dataclass
class StatusEffect:
    id: str
    name: str
    code: str
    description: str = ""
    color: Any = None
    stroke_color: Any = None
    is_volatile: bool = False
    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass
class WeatherType:
    id: Any
    name: str = ""
    description: str = ""
    icon: str = ""
    weight: float = 0
    spawn_modifiers: Dict[str, Any] = field(default_factory=dict)
    ability_modifiers: Dict[str, Any] = field(default_factory=dict)
    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass
class Nature:
    name: str
    increases: str = "None"
    decreases: str = "None"
    increase_key: Optional[str] = None
    decrease_key: Optional[str] = None
    is_neutral: bool = False


@dataclass
class Challenge:
    id: Any
    name: str = ""
    description: str = ""
    category: str = ""
    goal: Any = None
    challenge_type: Optional[str] = field(default=None, metadata={"json": "Type"})
    reward: Any = None
    extra: Dict[str, Any] = field(default_factory=dict)


@dataclass
class Badge:
    id: int
    number: int
    image: str
    name: str
