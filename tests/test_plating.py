"""Tests for plating conventions."""

from diet_planner.domain.foods import FoodGroup
from diet_planner.domain.recipes import MealSlot
from diet_planner.services.plating import apply_plating_rules
from tests.conftest import CHICKEN, OIL, POTATO, RICE, TOMATO, make_item, make_meal


def _grams(meal) -> list[float]:
    return [item.quantity_g for item in meal.items]


def test_portions_round_to_five_grams(rules) -> None:
    meal = make_meal(
        MealSlot.BREAKFAST,
        make_item(RICE, FoodGroup.CARBOHYDRATE, 42),
        make_item(CHICKEN, FoodGroup.PROTEIN, 63),
    )

    (plated,) = apply_plating_rules([meal], rules)

    assert _grams(plated) == [40, 65]


def test_protein_floor_only_in_main_meals(rules) -> None:
    lunch = make_meal(MealSlot.LUNCH, make_item(CHICKEN, FoodGroup.PROTEIN, 50))
    breakfast = make_meal(MealSlot.BREAKFAST, make_item(CHICKEN, FoodGroup.PROTEIN, 50))

    plated_lunch, plated_breakfast = apply_plating_rules([lunch, breakfast], rules)

    assert _grams(plated_lunch) == [80]
    assert _grams(plated_breakfast) == [50]


def test_vegetable_floor_and_fat_cap(rules) -> None:
    meal = make_meal(
        MealSlot.DINNER,
        make_item(TOMATO, FoodGroup.VEGETABLE, 12),
        make_item(OIL, FoodGroup.FAT, 23),
    )

    (plated,) = apply_plating_rules([meal], rules)

    assert _grams(plated) == [30, 15]


def test_portions_never_exceed_hard_cap(rules) -> None:
    meal = make_meal(MealSlot.SNACK, make_item(RICE, FoodGroup.CARBOHYDRATE, 310))

    (plated,) = apply_plating_rules([meal], rules)

    assert _grams(plated) == [250]


def test_tiny_starch_is_dropped_next_to_a_main_starch(rules) -> None:
    meal = make_meal(
        MealSlot.LUNCH,
        make_item(RICE, FoodGroup.CARBOHYDRATE, 20),
        make_item(POTATO, FoodGroup.CARBOHYDRATE, 150),
    )

    (plated,) = apply_plating_rules([meal], rules)

    assert [item.food for item in plated.items] == [POTATO]


def test_largest_starch_is_kept_when_all_are_tiny(rules) -> None:
    meal = make_meal(
        MealSlot.LUNCH,
        make_item(RICE, FoodGroup.CARBOHYDRATE, 20),
        make_item(POTATO, FoodGroup.CARBOHYDRATE, 25),
    )

    (plated,) = apply_plating_rules([meal], rules)

    assert [item.food for item in plated.items] == [POTATO]
    assert _grams(plated) == [25]


def test_empty_portions_are_removed(rules) -> None:
    meal = make_meal(
        MealSlot.DINNER,
        make_item(RICE, FoodGroup.CARBOHYDRATE, 0),
        make_item(CHICKEN, FoodGroup.PROTEIN, 100),
    )

    (plated,) = apply_plating_rules([meal], rules)

    assert [item.food for item in plated.items] == [CHICKEN]
