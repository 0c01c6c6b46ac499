"""Shared Luau sources and factories for extractor tests.

Each *_LUA constant mirrors the layout of the matching game module closely
enough to exercise the anchors and constructor layouts the processors rely on.
"""

from pathlib import Path

from creature_data_extractor.lua_table import parse_lua, resolve_exported_table
from creature_data_extractor.luau import normalize_source
from creature_data_extractor.lua_values import reify


def load_table(source):
    """Normalize, parse and resolve the exported table of a Luau snippet."""
    return resolve_exported_table(parse_lua(normalize_source(source)))


def reify_expr(expr):
    return reify(load_table(f"return {{ value = {expr} }}").fields[0].value)


def creature_call(name, dex=1, **overrides):
    """Build one `createCreature(...)` entry with sensible defaults."""
    args = {
        "dex": str(dex),
        "name": f'"{name}"',
        "sprite": '"rbxassetid://1"',
        "shiny": '"rbxassetid://2"',
        "description": '"A creature."',
        "types": "{Types.Normal}",
        "stats": "{HP = 40, Attack = 40, Defense = 40, SpecialAttack = 40, SpecialDefense = 40, Speed = 40}",
        "learnset": '{{"Tackle"}}',
        "evo_level": "nil",
        "evolves_into": "nil",
        "weight": "5",
        "shiny_colors": "nil",
        "class": '"Basic"',
        "catch_rate": "1",
        "female_chance": "0.5",
    }
    args.update(overrides)
    return f"createCreature({', '.join(args.values())})"


CREATURES_LUA = '''--!strict
local Types = require(script.Parent.Types)

type Creature = { Name: string }

local function createCreature(dexNumber: number, name: string, sprite: string): Creature
	return { DexNumber = dexNumber, Name = name }
end

local Creatures: {[string]: Creature} = {
	Kindling = createCreature(1, "Kindling", "rbxassetid://1", "rbxassetid://2", "A small flame.", {Types.Fire, nil}, {HP = 39, Attack = 52, Defense = 43, SpecialAttack = 60, SpecialDefense = 50, Speed = 65}, {{"Tackle"}, nil, {"Ember", "Growl"}}, 16, "Blazeling", 8.5, {Color3.new(1, 0.5, 0)}, "Starter", 1.2, 0.125),
	Blazeling = createCreature(2, nil, "rbxassetid://3", "rbxassetid://4", "It grew.", {Types.Fire, Types.Fighting}, {60, 75, 60, 80, 65, 80}, {}, nil, nil, 19, nil, "Starter", 0.8, 0),
	["Mr. Pebble"] = createCreature(3, "Mr. Pebble", "", "", nil, Types.Rock),
	Oddity = createCreature(4, "Oddity", "rbxassetid://5", "rbxassetid://6", "Half evolved.", {}, {}, {}, 12, nil),
}

return Creatures
'''

MOVES_LUA = '''local Types = require(script.Parent.Types)

local function createMove(basePower: number, accuracy: number, priority: number, moveType: string, category: string, description: string): Move
	return {}
end

local MoveList = {
	Ember = createMove(40, 100, 0, Types.Fire, "Special", "May burn.", nil, "BRN", 10, false, false, nil, nil),
	Recover = createMove(0, 100, 0, "Normal", "Status", "Heals half.", 50),
	DoubleSlap = createMultiHitMove(15, 85, 0, Types.Normal, "Physical", "Hits 2-5 times.", 2, 5, false),
	TakeDown = createRecoilMove(90, 85, 0, "Normal", "Physical", "Hurts the user.", 25),
	Growl = createStatMove(100, 0, "Normal", "Lowers attack.", {Attack = -1}),
	QuickJab = Moves.createMove(40, 100, 1, "Fighting", "Physical", "Strikes first."),
	Mystery = makeSomething(1, 2),
	Broken = 42,
}

return MoveList
'''

ITEMS_LUA = '''return {
	Potion = createItem({HP = 20, Attack = 0, Defense = 0, Speed = 0}, "Restores 20 HP.", "Medicine", true, false, "rbxassetid://123"),
	["Power Band"] = createItem({HP = 0, Attack = 5, Defense = 0, Speed = -2}, "Raises attack.", "Held", false, false, "rbxassetid://456"),
	Junk = "not an item",
}
'''

CHUNK_LIST_LUA = '''local Encounters = require(script.Parent.Encounters)

local ChunkList = {
	Chunk2 = {
		ProperName = "Route 2",
		Encounters = {
			{"Sparkit", 3, 5, 40},
			{Creature = "Pebblin", MinLevel = 4, MaxLevel = 6, Chance = 60},
			{nil, 1, 2, 3},
		},
	},
	Chunk1 = {
		ProperName = "Route 1",
		Description = "Where it begins.",
		Encounters = {},
		SubChunks = {
			Chunk1Cave = {
				ProperName = "Whisper Cave",
				Encounters = { {"Batling", 5, 7, 100} },
				SubChunks = {
					Chunk1CaveDepths = { ProperName = "", Encounters = {} },
				},
			},
			Chunk1House1 = { ProperName = "", Encounters = {} },
			Chunk1House2 = { ProperName = "Old House", Encounters = {} },
		},
	},
	Title = { ProperName = "Title Screen" },
	Lighthouse = { ProperName = "Lighthouse", Encounters = {} },
	Chunk1Cave = { ProperName = "Duplicate Cave", Encounters = {} },
	Arena = { Encounters = {} },
}

return ChunkList
'''

TYPE_CHART_LUA = '''--!strict
type Chart = {[string]: {[string]: number}}

local TypeChart = {}

local CHART: Chart = {
	Fire = { Grass = 2, Water = 0.5 },
	Water = { Fire = 2 },
}

function TypeChart.getMultiplier(attacker: string, defender: string): number
	return (CHART[attacker] or {})[defender] or 1
end

return TypeChart
'''

ABILITIES_LUA = '''local Abilities = {}

Abilities.Definitions = {
	Blaze = { Name = "Blaze", Description = "Boosts fire moves.", TriggerType = "OnAttack", Multiplier = 1.5, TypeBoost = "Fire" },
	Sturdy = { Description = "Survives a hit." },
	Broken = "nope",
}

-- Helper
function Abilities.get(name: string)
	return Abilities.Definitions[name]
end

return Abilities
'''

SPECIES_ABILITIES_LUA = '''local SpeciesAbilities: {[string]: {{Name: string, Chance: number}}} = {
	Kindling = { {Name = "Blaze", Chance = 70}, {Name = "Sturdy", Chance = 30} },
	["Mr. Pebble"] = { {name = "Sturdy", chance = 100}, "Bogus" },
	Lonely = "Blaze",
}

return SpeciesAbilities
'''

STATUS_LUA = '''local Status = {}

local STATUS_DEFINITIONS: {[string]: {Color: Color3}} = {
	BRN = { Color = Color3.new(1, 0.4, 0), StrokeColor = Color3.new(0.5, 0.2, 0) },
	CONF = { Color = Color3.new(0.5, 0.5, 1), IsVolatile = true },
}

function Status.get(code: string)
	return STATUS_DEFINITIONS[code]
end

return Status
'''

WEATHER_LUA = '''local WeatherConfig = {}

WeatherConfig.Types = {
	{ Id = 1, Name = "Clear", Description = "No effects.", Weight = 50 },
	{ Name = "Rain", Icon = "rbxassetid://5", SpawnModifiers = { Water = 1.5 }, Duration = 300 },
}

local function pick(total: number): number
	return total
end

return WeatherConfig
'''

NATURES_LUA = '''local NATURE_DEFS: {[string]: {inc: string, dec: string}} = {
	Adamant = { inc = "Atk", dec = "SpA" },
	Hardy = { inc = "None", dec = "None" },
	Odd = { inc = "Luck", dec = "Spe" },
}

local Natures = {}
return Natures
'''

CHALLENGES_LUA = '''local ChallengesConfig = {}

ChallengesConfig.DailyChallenges = {
	{ Id = "catch_5", Name = "Catcher", Description = "Catch 5 creatures.", Goal = 5, Type = "Catch", Reward = { Type = "Item", Amount = 2, ItemName = "Capsule" } },
}

ChallengesConfig.WeeklyChallenges = {
	{ Id = "win_20", Name = "Champion", Goal = 20, Type = "Battle", Category = "Special" },
	"bad",
}

return ChallengesConfig
'''

BADGES_LUA = '''local BadgeConfig = {}

BadgeConfig.BadgeImages = {
	"rbxassetid://11",
	"rbxassetid://12",
}

BadgeConfig.Locked = "rbxassetid://0"

return BadgeConfig
'''

GAME_FILES = {
    "ReplicatedStorage/Shared/Creatures.lua": CREATURES_LUA,
    "ReplicatedStorage/Shared/Items.lua": ITEMS_LUA,
    "ReplicatedStorage/Shared/Moves.lua": MOVES_LUA,
    "ServerScriptService/Server/GameData/ChunkList.lua": CHUNK_LIST_LUA,
    "ReplicatedStorage/Shared/TypeChart.lua": TYPE_CHART_LUA,
    "ReplicatedStorage/Shared/Abilities.lua": ABILITIES_LUA,
    "ReplicatedStorage/Shared/SpeciesAbilities.lua": SPECIES_ABILITIES_LUA,
    "ReplicatedStorage/Shared/Status.lua": STATUS_LUA,
    "ReplicatedStorage/Shared/WeatherConfig.lua": WEATHER_LUA,
    "ReplicatedStorage/Shared/Natures.lua": NATURES_LUA,
    "ReplicatedStorage/Shared/ChallengesConfig.lua": CHALLENGES_LUA,
    "ReplicatedStorage/Shared/BadgeConfig.lua": BADGES_LUA,
}


def make_game_data(root, **overrides):
    """Write every game module under `root`; override a module by file name.

    Pass ``Items=None`` to leave Items.lua out, or ``Items="..."`` to replace it.
    """
    root = Path(root)
    for relative, content in GAME_FILES.items():
        stem = Path(relative).stem
        if stem in overrides:
            content = overrides[stem]
        if content is None:
            continue
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root
