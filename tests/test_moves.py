"""Move extraction across the constructor layouts."""

import logging

from helpers import MOVES_LUA, load_table

from creature_data_extractor.processors.moves import build_moves
from creature_data_extractor.records import record_to_dict


class TestBuildMoves:
    def setup_method(self):
        self.moves = {move.id: record_to_dict(move) for move in build_moves(load_table(MOVES_LUA))}

    def test_non_call_entries_skipped(self):
        assert list(self.moves) == [
            "Ember",
            "Recover",
            "DoubleSlap",
            "TakeDown",
            "Growl",
            "QuickJab",
            "Mystery",
        ]

    def test_standard_layout(self):
        assert self.moves["Ember"] == {
            "Id": "Ember",
            "Slug": "ember",
            "Name": "Ember",
            "BasePower": 40,
            "Accuracy": 100,
            "Priority": 0,
            "Type": "Fire",
            "Category": "Special",
            "Description": "May burn.",
            "StatusEffect": "BRN",
            "StatusChance": 10,
            "CausesFlinch": False,
            "CausesConfusion": False,
        }

    def test_trailing_arguments_optional(self):
        recover = self.moves["Recover"]
        assert recover["HealsPercent"] == 50
        assert "StatusEffect" not in recover

    def test_multi_hit_layout(self):
        move = self.moves["DoubleSlap"]
        assert move["BasePower"] == 15
        assert move["MinHits"] == 2
        assert move["MaxHits"] == 5
        assert move["Fixed"] is False

    def test_recoil_layout(self):
        move = self.moves["TakeDown"]
        assert move["RecoilPercent"] == 25
        assert move["Category"] == "Physical"

    def test_stat_move_layout(self):
        assert self.moves["Growl"] == {
            "Id": "Growl",
            "Slug": "growl",
            "Name": "Growl",
            "BasePower": 0,
            "Accuracy": 100,
            "Priority": 0,
            "Type": "Normal",
            "Category": "Status",
            "Description": "Lowers attack.",
            "StatChanges": {"Attack": -1},
        }

    def test_dotted_constructor(self):
        assert self.moves["QuickJab"]["Priority"] == 1
        assert self.moves["QuickJab"]["Type"] == "Fighting"

    def test_unknown_constructor_keeps_identity(self):
        assert self.moves["Mystery"] == {"Id": "Mystery", "Slug": "mystery", "Name": "Mystery"}


class TestMoveWarnings:
    def test_warnings_logged(self, caplog):
        with caplog.at_level(logging.WARNING):
            build_moves(load_table(MOVES_LUA))
        assert "unknown constructor makeSomething" in caplog.text
        assert "Skipping move Broken" in caplog.text

    def test_create_alias(self):
        table = load_table('return { Foo = create(10, 90, 0, "Fire", "Physical", "desc") }')
        assert [record_to_dict(move) for move in build_moves(table)] == [
            {
                "Id": "Foo",
                "Slug": "foo",
                "Name": "Foo",
                "BasePower": 10,
                "Accuracy": 90,
                "Priority": 0,
                "Type": "Fire",
                "Category": "Physical",
                "Description": "desc",
            }
        ]
