"""Gross and cooked weights for display and shopping."""

from dataclasses import replace

from diet_planner.domain.foods import FoodGroup, PreparationMethod
from diet_planner.domain.plans import Meal, MealItem
from diet_planner.domain.rules import RulesConfig
from diet_planner.services.classification import contains_any, mentions
from diet_planner.services.rounding import round_half_up


def yield_factor(
    name: str, food_group: FoodGroup, method: PreparationMethod, rules: RulesConfig
) -> float:
    """Return the raw-to-cooked weight factor for a food."""
    if contains_any(name, rules.prepared_state_terms):
        return 1.0
    if food_group == FoodGroup.CARBOHYDRATE and method in (
        PreparationMethod.BOILED,
        PreparationMethod.STEAMED,
    ):
        if mentions(name, rules.tuber_patterns):
            return rules.tuber_yield
        if mentions(name, rules.grain_patterns):
            return rules.grain_yield
    return rules.yield_factors.get(method, {}).get(food_group, 1.0)


def apply_bromatology(
    meals: list[Meal],
    rules: RulesConfig,
    default_method: PreparationMethod = PreparationMethod.BOILED,
) -> list[Meal]:
    """Fill gross and cooked weights from the calibrated net quantities."""
    return [
        replace(
            meal,
            items=tuple(_with_weights(item, rules, default_method) for item in meal.items),
        )
        for meal in meals
    ]


def _with_weights(
    item: MealItem, rules: RulesConfig, default_method: PreparationMethod
) -> MealItem:
    waste = item.food.waste_factor if item.food.waste_factor > 0 else 1.0
    method = item.preparation_method or default_method
    if item.food_group in rules.raw_groups:
        cooked = item.quantity_g
    else:
        cooked = round_half_up(
            item.quantity_g * yield_factor(item.food.name, item.food_group, method, rules)
        )
    return replace(
        item,
        waste_factor=waste,
        gross_quantity_g=round_half_up(item.quantity_g * waste),
        cooked_quantity_g=cooked,
        preparation_method=method,
    )
