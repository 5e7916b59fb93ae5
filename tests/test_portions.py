"""Tests for hard caps and calorie redistribution."""

from diet_planner.domain.foods import FoodGroup
from diet_planner.domain.recipes import MealSlot
from diet_planner.services.portions import bound_portions, hard_cap
from tests.conftest import CHICKEN, EGG, OIL, POTATO, RICE, TOMATO, make_food, make_item, make_meal


def test_name_caps_take_precedence_over_group_caps(rules) -> None:
    assert hard_cap(make_item(OIL, FoodGroup.FAT, 50), rules) == 15
    assert hard_cap(make_item(RICE, FoodGroup.CARBOHYDRATE, 50), rules) == 250
    assert hard_cap(make_item(EGG, FoodGroup.PROTEIN, 50), rules) == 150
    oats = make_item(make_food("Oats, rolled", 379), FoodGroup.CARBOHYDRATE, 50)
    assert hard_cap(oats, rules) == 80


def test_group_and_default_caps(rules) -> None:
    assert hard_cap(make_item(CHICKEN, FoodGroup.PROTEIN, 50), rules) == 180
    assert hard_cap(make_item(TOMATO, FoodGroup.VEGETABLE, 50), rules) == 150
    assert hard_cap(make_item(make_food("Mystery", 100), FoodGroup.OTHER, 50), rules) == 500


def test_goat_cheese_is_not_capped_as_oats(rules) -> None:
    goat = make_item(make_food("Goat cheese", 364), FoodGroup.DAIRY, 50)

    assert hard_cap(goat, rules) == 250


def test_overflow_moves_to_dense_carbs_first(rules) -> None:
    meal = make_meal(
        MealSlot.LUNCH,
        make_item(RICE, FoodGroup.CARBOHYDRATE, 400),
        make_item(CHICKEN, FoodGroup.PROTEIN, 100),
        make_item(POTATO, FoodGroup.CARBOHYDRATE, 100),
    )

    (bounded,) = bound_portions([meal], rules)

    assert [item.quantity_g for item in bounded.items] == [250, 180, 250]


def test_small_overflow_is_dropped(rules) -> None:
    meal = make_meal(
        MealSlot.LUNCH,
        make_item(OIL, FoodGroup.FAT, 16),
        make_item(RICE, FoodGroup.CARBOHYDRATE, 100),
    )

    (bounded,) = bound_portions([meal], rules)

    assert [item.quantity_g for item in bounded.items] == [15, 100]


def test_items_under_cap_are_untouched(rules) -> None:
    meal = make_meal(
        MealSlot.DINNER,
        make_item(CHICKEN, FoodGroup.PROTEIN, 120),
        make_item(TOMATO, FoodGroup.VEGETABLE, 80),
    )

    assert bound_portions([meal], rules) == [meal]
