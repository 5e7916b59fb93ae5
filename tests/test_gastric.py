"""Tests for gastric volume limits."""

from dataclasses import replace

from diet_planner.domain.foods import FoodGroup
from diet_planner.domain.patients import PatientType
from diet_planner.domain.recipes import MealSlot
from diet_planner.services.gastric import (
    audit_gastric_volume,
    clamp_gastric_volume,
    estimate_volume,
    gastric_ceiling,
)
from tests.conftest import CHICKEN, EGG, POTATO, RICE, TOMATO, make_item, make_meal


def test_ceiling_by_patient_type(rules) -> None:
    assert gastric_ceiling(PatientType.ADULT, rules) == 600
    assert gastric_ceiling(PatientType.ELDERLY, rules) == 400
    assert gastric_ceiling(PatientType.CHILD, rules) == 300


def test_volume_prefers_cooked_weight(rules) -> None:
    raw_rice = make_item(RICE, FoodGroup.CARBOHYDRATE, 100)
    meal = make_meal(
        MealSlot.LUNCH,
        replace(raw_rice, cooked_quantity_g=280),
        make_item(TOMATO, FoodGroup.VEGETABLE, 20),
    )

    assert estimate_volume(meal, rules) == (280 + 20) * 1.2


def test_clamp_shrinks_scalable_items_only(rules) -> None:
    meal = make_meal(
        MealSlot.LUNCH,
        make_item(CHICKEN, FoodGroup.PROTEIN, 180),
        make_item(RICE, FoodGroup.CARBOHYDRATE, 250),
        make_item(POTATO, FoodGroup.CARBOHYDRATE, 250),
        make_item(EGG, FoodGroup.PROTEIN, 50),
    )

    (clamped,) = clamp_gastric_volume([meal], PatientType.ADULT, rules)

    grams = [item.quantity_g for item in clamped.items]
    assert grams[0] < 180
    assert grams[1] < 250
    assert grams[2] < 250
    assert grams[3] == 50
    assert all(value % 5 == 0 for value in grams)
    assert estimate_volume(clamped, rules) < estimate_volume(meal, rules)


def test_meals_within_grace_are_untouched(rules) -> None:
    meal = make_meal(MealSlot.DINNER, make_item(CHICKEN, FoodGroup.PROTEIN, 260))

    assert clamp_gastric_volume([meal], PatientType.CHILD, rules) == [meal]


def test_audit_warns_for_oversized_meals(rules) -> None:
    meal = make_meal(
        MealSlot.LUNCH,
        make_item(RICE, FoodGroup.CARBOHYDRATE, 200),
        make_item(CHICKEN, FoodGroup.PROTEIN, 200),
        label="Lunch - Rice Bowl",
    )

    warnings = audit_gastric_volume([meal], PatientType.CHILD, rules)

    assert warnings == [
        "Lunch - Rice Bowl: estimated volume 480 mL exceeds the 300 mL limit "
        "for a child patient; consider splitting this meal."
    ]
    assert audit_gastric_volume([meal], PatientType.ADULT, rules) == []
