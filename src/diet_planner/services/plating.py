"""Practitioner plating conventions applied after bounding."""

from dataclasses import replace

from diet_planner.domain.foods import FoodGroup
from diet_planner.domain.plans import Meal, MealItem
from diet_planner.domain.rules import RulesConfig
from diet_planner.services.portions import hard_cap
from diet_planner.services.rounding import round_to_step


def apply_plating_rules(meals: list[Meal], rules: RulesConfig) -> list[Meal]:
    """Round portions, apply floors and caps, and drop redundant small starches."""
    return [_plate_meal(meal, rules) for meal in meals]


def _plate_meal(meal: Meal, rules: RulesConfig) -> Meal:
    plated = [
        replace(item, quantity_g=_plated_quantity(item, meal, rules)) for item in meal.items
    ]
    carbs = [
        index
        for index, item in enumerate(plated)
        if item.food_group == FoodGroup.CARBOHYDRATE
    ]
    if len(carbs) > 1:
        tiny = {index for index in carbs if plated[index].quantity_g < rules.tiny_carb_g}
        if len(tiny) == len(carbs):
            # never drop every starch
            tiny.discard(max(carbs, key=lambda index: plated[index].quantity_g))
        plated = [item for index, item in enumerate(plated) if index not in tiny]
    return replace(meal, items=tuple(item for item in plated if item.quantity_g > 0))


def _plated_quantity(item: MealItem, meal: Meal, rules: RulesConfig) -> float:
    step = rules.rounding_step_g
    grams = item.quantity_g
    if grams <= 0:
        return 0.0
    grams = max(step, round_to_step(grams, step))
    if item.food_group == FoodGroup.PROTEIN and meal.slot in rules.protein_floor_slots:
        grams = max(grams, rules.protein_floor_g)
    if item.food_group == FoodGroup.VEGETABLE:
        grams = max(grams, rules.vegetable_floor_g)
    if item.food_group == FoodGroup.FAT:
        grams = min(grams, rules.fat_plating_cap_g)
    return min(grams, hard_cap(item, rules))
