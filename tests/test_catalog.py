"""Tests for areawiz.fields.catalog: field declarations and cross-field range checks."""

import pytest

from areawiz.fields.catalog import MAP_TYPES, build_fields
from areawiz.fields.schema import GroupLabel, Invalid, Selectable, Valid
from areawiz.resolver import resolve


def _by_name(fields):
    return {f.name: f for f in fields}


class TestBuildFields:
    def test_names_unique(self, fields):
        names = [f.name for f in fields]
        assert len(names) == len(set(names))

    def test_starts_with_area_title(self, fields):
        assert fields[0].name == "areaTitle"

    def test_customize_flag_is_internal(self, fields):
        internal = [f.name for f in fields if f.internal]
        assert internal == ["customizeAreaInfo"]

    def test_config_defaults_used(self, test_config):
        test_config["default_width"] = 42
        fields = _by_name(build_fields(test_config))
        assert fields["width"].resolve_default({}) == 42

    def test_map_type_choices_grouped(self, fields):
        choices = _by_name(fields)["type"].choices
        assert isinstance(choices[0], GroupLabel)
        assert [c.label for c in choices if isinstance(c, Selectable)] == MAP_TYPES
        assert "Arena" in MAP_TYPES

    def test_default_map_type_is_arena(self, fields):
        assert _by_name(fields)["type"].resolve_default({}) == "Arena"

    def test_every_field_depends_only_on_earlier_fields(self, fields):
        seen = set()
        for field in fields:
            assert set(field.depends_on) <= seen, field.name
            seen.add(field.name)


class TestAreaFields:
    def test_area_title_rejects_punctuation(self, fields):
        result = _by_name(fields)["areaTitle"].check("Keep!", {})
        assert isinstance(result, Invalid)

    def test_area_title_accepts_spaces(self, fields):
        assert isinstance(_by_name(fields)["areaTitle"].check("Dark Keep", {}), Valid)

    def test_area_info_hidden_unless_customizing(self, fields):
        author = _by_name(fields)["areaAuthor"]
        assert author.is_visible({"customizeAreaInfo": False}) is False
        assert author.is_visible({"customizeAreaInfo": True}) is True

    def test_room_defaults_echo_area_title(self, fields):
        by_name = _by_name(fields)
        answers = {"areaTitle": "Keep"}
        assert by_name["genericRoomTitle"].resolve_default(answers) == "Room in Keep"
        assert by_name["genericRoomDesc"].resolve_default(answers) == "You are in Keep."
        assert "Keep" in by_name["genericRoomTitle"].render_message(answers)

    @pytest.mark.parametrize("raw", ["", "   "])
    def test_blank_room_title_rejected(self, fields, raw):
        result = _by_name(fields)["genericRoomTitle"].check(raw, {"areaTitle": "Keep"})
        assert isinstance(result, Invalid)
        assert "cannot be empty" in result.message

    def test_room_title_with_punctuation_accepted(self, fields):
        result = _by_name(fields)["genericRoomTitle"].check("Hall, north wing", {"areaTitle": "Keep"})
        assert isinstance(result, Valid)


class TestRangeValidators:
    def test_room_height_maximum_capped_by_height(self, fields):
        field = _by_name(fields)["roomHeightMaximum"]
        answers = {"type": "Digger", "height": 20}
        assert isinstance(field.check("25", answers), Invalid)
        assert isinstance(field.check("20", answers), Valid)

    def test_room_width_minimum_below_maximum(self, fields):
        field = _by_name(fields)["roomWidthMinimum"]
        answers = {"type": "Digger", "roomWidthMaximum": 9}
        assert isinstance(field.check("9", answers), Invalid)
        assert isinstance(field.check("8", answers), Valid)

    def test_corridor_maximum_capped_by_smaller_side(self, fields):
        field = _by_name(fields)["corridorLengthMaximum"]
        answers = {"type": "Digger", "width": 30, "height": 12}
        assert isinstance(field.check("13", answers), Invalid)
        assert isinstance(field.check("12", answers), Valid)

    def test_corridor_minimum_below_maximum(self, fields):
        field = _by_name(fields)["corridorLengthMinimum"]
        answers = {"type": "Digger", "width": 30, "height": 20, "corridorLengthMaximum": 6}
        assert isinstance(field.check("6", answers), Invalid)
        assert isinstance(field.check("5", answers), Valid)

    def test_non_numeric_rejected_before_filter(self, fields):
        field = _by_name(fields)["width"]
        result = field.check("wide", {"areaTitle": "Keep"})
        assert isinstance(result, Invalid)
        assert "positive number" in result.message

    def test_width_floor_must_reach_minimum(self, fields):
        field = _by_name(fields)["width"]
        assert isinstance(field.check("1.9", {"areaTitle": "Keep"}), Invalid)

    def test_regularity_allows_zero(self, fields):
        field = _by_name(fields)["regularity"]
        assert isinstance(field.check("0", {"type": "IceyMaze"}), Valid)
        assert isinstance(field.check("-1", {"type": "IceyMaze"}), Invalid)

    def test_percentage_field_coerced_to_fraction(self, fields):
        field = _by_name(fields)["dugPercentage"]
        assert isinstance(field.check("101", {"type": "Digger"}), Invalid)
        assert field.coerce("25") == 0.25


class TestAlgorithmVisibility:
    @pytest.mark.parametrize("map_type, expected", [
        ("Digger", {"roomWidthMaximum", "corridorLengthMaximum", "dugPercentage", "timeLimit"}),
        ("Uniform", {"roomWidthMaximum", "dugPercentage", "timeLimit"}),
        ("IceyMaze", {"regularity"}),
        ("Rogue", {"cellWidth", "cellHeight"}),
        ("Cellular", {"probability", "iterations"}),
        ("Arena", set()),
    ])
    def test_algorithm_specific_fields(self, fields, map_type, expected):
        algorithm_fields = fields[[f.name for f in fields].index("type") + 1:]
        answers = {"type": map_type}
        visible = {f.name for f in algorithm_fields if f.is_visible(answers)}
        assert expected <= visible
        if map_type == "Uniform":
            assert "corridorLengthMaximum" not in visible
        if map_type == "Arena":
            assert visible == set()


class TestDiggerSession:
    def test_final_answers_satisfy_range_invariants(self, fields, prompter_cls, digger_script):
        prompter = prompter_cls(digger_script)
        answers = resolve(fields, prompter).as_dict()

        assert answers["roomHeightMinimum"] < answers["roomHeightMaximum"] <= answers["height"]
        assert answers["roomWidthMinimum"] < answers["roomWidthMaximum"] <= answers["width"]
        assert answers["corridorLengthMinimum"] <= answers["corridorLengthMaximum"] - 1
        assert answers["corridorLengthMaximum"] <= min(answers["width"], answers["height"])

    def test_rejected_answers_never_recorded(self, fields, prompter_cls, digger_script):
        prompter = prompter_cls(digger_script)
        answers = resolve(fields, prompter).as_dict()

        assert answers["roomHeightMaximum"] == 8
        assert answers["roomHeightMinimum"] == 4
        assert answers["corridorLengthMinimum"] == 2
        assert answers["dugPercentage"] == 0.25
        assert len(prompter.warnings) == 4
        assert prompter.asked.count("roomHeightMaximum") == 2

    def test_skipped_fields_absent(self, fields, prompter_cls, digger_script):
        answers = resolve(fields, prompter_cls(digger_script)).as_dict()
        assert "areaAuthor" not in answers
        assert "regularity" not in answers
        assert answers["customizeAreaInfo"] is False
        assert answers["genericRoomDesc"] == "You are in Dark Keep."


class TestScenarioD:
    def test_room_height_above_height_reprompts(self, fields, prompter_cls, digger_script):
        digger_script["height"] = ["20"]
        digger_script["roomHeightMaximum"] = ["25", "10"]
        prompter = prompter_cls(digger_script)
        answers = resolve(fields, prompter).as_dict()

        assert answers["roomHeightMaximum"] == 10
        assert prompter.warnings[0] == "Maximum room height must be between 2 and 20."
