"""Tests for rule set loading."""

import json

import pytest

from diet_planner.domain.errors import RulesConfigError
from diet_planner.domain.foods import FoodGroup
from diet_planner.domain.patients import PatientType
from diet_planner.rules import available_locales, load_rules


def test_english_rules_load_with_defaults() -> None:
    rules = load_rules()

    assert rules.locale == "en"
    assert rules.rounding_step_g == 5
    assert rules.gastric_ceilings_ml[PatientType.CHILD] == 300
    assert rules.group_caps[FoodGroup.FAT] == 15
    assert "egg" in rules.group_keywords[FoodGroup.PROTEIN]
    assert sum(moment.ratio for moment in rules.default_meal_moments) == pytest.approx(1.0)


def test_available_locales_lists_english() -> None:
    assert "en" in available_locales()


def test_locale_lookup_ignores_case() -> None:
    assert load_rules("EN").locale == "en"


def test_unknown_locale_raises() -> None:
    with pytest.raises(RulesConfigError, match="No rule set"):
        load_rules("zz")


def test_json_overrides_replace_top_level_tables(tmp_path) -> None:
    path = tmp_path / "rules.json"
    path.write_text(
        json.dumps({"default_cap_g": 400, "solid_group_denylist": ["juice"]}),
        encoding="utf-8",
    )

    rules = load_rules("en", str(path))

    assert rules.default_cap_g == 400
    assert rules.solid_group_denylist == ["juice"]
    assert rules.name_caps


def test_invalid_override_values_raise(tmp_path) -> None:
    path = tmp_path / "rules.json"
    path.write_text(json.dumps({"unknown_table": []}), encoding="utf-8")

    with pytest.raises(RulesConfigError, match="Invalid rule set"):
        load_rules("en", str(path))


def test_unreadable_override_file_raises(tmp_path) -> None:
    path = tmp_path / "rules.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(RulesConfigError, match="Cannot read"):
        load_rules("en", str(path))

    with pytest.raises(RulesConfigError, match="Cannot read"):
        load_rules("en", str(tmp_path / "missing.json"))


def test_override_file_must_hold_an_object(tmp_path) -> None:
    path = tmp_path / "rules.json"
    path.write_text("[1, 2]", encoding="utf-8")

    with pytest.raises(RulesConfigError, match="JSON object"):
        load_rules("en", str(path))
