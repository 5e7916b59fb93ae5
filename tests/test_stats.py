"""Tests for nutrient aggregation and rounding helpers."""

import pytest

from diet_planner.domain.foods import FoodGroup
from diet_planner.domain.plans import NutrientTotals
from diet_planner.domain.recipes import MealSlot
from diet_planner.services.rounding import round_half_up, round_to_step
from diet_planner.services.stats import (
    aggregate,
    daily_stats,
    nutrients_below_floors,
    with_meal_stats,
)
from tests.conftest import CHICKEN, RICE, make_food, make_item, make_meal


def test_aggregate_sums_on_net_weight() -> None:
    totals = aggregate(
        [
            make_item(RICE, FoodGroup.CARBOHYDRATE, 100),
            make_item(CHICKEN, FoodGroup.PROTEIN, 100),
        ]
    )

    assert totals.calories == 480
    assert totals.protein_g == pytest.approx(29.1)
    assert totals.fat_g == pytest.approx(3.2)
    assert totals.carbs_g == pytest.approx(79.0)
    assert totals.iron_mg == pytest.approx(0.4)


def test_aggregate_rounds_once() -> None:
    herb = make_food("Parsley, fresh", 1.0)
    items = [make_item(herb, FoodGroup.VEGETABLE, 40) for _ in range(3)]

    assert aggregate(items).calories == 1


def test_empty_items_give_zero_totals() -> None:
    assert aggregate([]) == NutrientTotals()


def test_meal_and_daily_stats() -> None:
    breakfast = make_meal(MealSlot.BREAKFAST, make_item(RICE, FoodGroup.CARBOHYDRATE, 50))
    lunch = make_meal(MealSlot.LUNCH, make_item(CHICKEN, FoodGroup.PROTEIN, 150))

    meals = with_meal_stats([breakfast, lunch])

    assert [meal.stats.calories for meal in meals] == [180, 180]
    assert daily_stats(meals).calories == 360


def test_nutrients_below_floors() -> None:
    totals = NutrientTotals(calories=2000, calcium_mg=500, iron_mg=20)

    short = nutrients_below_floors(
        totals, {"calcium_mg": 1000, "iron_mg": 14, "vitamin_z": 5}
    )

    assert short == ["calcium_mg"]


def test_round_half_up() -> None:
    assert round_half_up(2.5) == 3
    assert round_half_up(3.5) == 4
    assert round_half_up(2.4) == 2
    assert round_half_up(1.25, 1) == 1.3


def test_round_to_step() -> None:
    assert round_to_step(42, 5) == 40
    assert round_to_step(42.5, 5) == 45
    assert round_to_step(7, 1) == 7
    assert round_to_step(7.3, 0) == 7.3
