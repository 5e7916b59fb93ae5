"""Tests for shopping list consolidation."""

from diet_planner.domain.foods import FoodGroup
from diet_planner.domain.plans import DailyPlan, NutrientTotals, NutritionalGoals
from diet_planner.domain.recipes import MealSlot
from diet_planner.services.shopping import ShoppingListService
from tests.conftest import EGG, POTATO, RICE, TOMATO, make_item, make_meal


def _plan(day_label: str, *meals) -> DailyPlan:
    return DailyPlan(
        day_label=day_label,
        meals=tuple(meals),
        stats=NutrientTotals(),
        goals=NutritionalGoals(target_calories=2000),
    )


def test_build_groups_and_sums_items(rules) -> None:
    monday = _plan(
        "Monday",
        make_meal(
            MealSlot.LUNCH,
            make_item(
                RICE, FoodGroup.CARBOHYDRATE, 100, gross_quantity_g=100, cooked_quantity_g=280
            ),
            make_item(EGG, FoodGroup.PROTEIN, 120, gross_quantity_g=120, cooked_quantity_g=96),
            make_item(TOMATO, FoodGroup.VEGETABLE, 50),
        ),
    )
    tuesday = _plan(
        "Tuesday",
        make_meal(
            MealSlot.DINNER,
            make_item(
                RICE, FoodGroup.CARBOHYDRATE, 50, gross_quantity_g=50, cooked_quantity_g=140
            ),
            make_item(POTATO, FoodGroup.CARBOHYDRATE, 200, gross_quantity_g=250),
        ),
    )

    sections = ShoppingListService(rules).build([monday, tuesday])

    assert [section.food_group for section in sections] == [
        FoodGroup.PROTEIN,
        FoodGroup.CARBOHYDRATE,
        FoodGroup.VEGETABLE,
    ]
    egg = sections[0].items[0]
    assert egg.practical_quantity == "2 units"
    assert egg.cooked_g == 96
    potato, rice = sections[1].items
    assert potato.name == "Potato, white, raw"
    assert (potato.gross_g, potato.cooked_g) == (250, 200)
    assert (rice.net_g, rice.gross_g, rice.cooked_g) == (150, 150, 420)
    assert rice.occurrences == 2
    assert rice.practical_quantity == "150 g"
    tomato = sections[2].items[0]
    assert tomato.gross_g == 50


def test_build_with_no_plans(rules) -> None:
    assert ShoppingListService(rules).build([]) == []


def test_practical_quantity_units(rules) -> None:
    service = ShoppingListService(rules)

    assert service.practical_quantity("Milk, whole", 1500) == "1.5 l"
    assert service.practical_quantity("Bread, whole wheat", 100) == "3 slices"
    assert service.practical_quantity("Tuna, canned in water", 80) == "1 cans"
    assert service.practical_quantity("Potato, white, raw", 1250) == "1.25 kg"
    assert service.practical_quantity("Tomato, raw", 340) == "340 g"
