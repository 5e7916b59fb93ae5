"""Nutrient aggregation with a single final rounding."""

from dataclasses import fields, replace

from diet_planner.domain.foods import MICRONUTRIENT_FIELDS
from diet_planner.domain.plans import Meal, MealItem, NutrientTotals
from diet_planner.services.rounding import round_half_up

_MACRO_FIELDS = ("protein_g", "fat_g", "carbs_g", "fiber_g")
_FOOD_FIELDS = {
    "calories": "energy_kcal",
    **{name: name for name in _MACRO_FIELDS},
    **{name: name for name in MICRONUTRIENT_FIELDS},
}


def aggregate(items: list[MealItem] | tuple[MealItem, ...]) -> NutrientTotals:
    """Sum nutrients over items on net raw weight and round once."""
    sums = dict.fromkeys(_FOOD_FIELDS, 0.0)
    for item in items:
        ratio = item.quantity_g / 100.0
        for total_field, food_field in _FOOD_FIELDS.items():
            sums[total_field] += ratio * getattr(item.food, food_field)
    return NutrientTotals(
        calories=int(round_half_up(sums["calories"])),
        **{name: round_half_up(sums[name], 1) for name in _MACRO_FIELDS},
        **{name: round_half_up(sums[name], 2) for name in MICRONUTRIENT_FIELDS},
    )


def with_meal_stats(meals: list[Meal]) -> list[Meal]:
    """Attach per-meal totals."""
    return [replace(meal, stats=aggregate(meal.items)) for meal in meals]


def daily_stats(meals: list[Meal] | tuple[Meal, ...]) -> NutrientTotals:
    """Aggregate every item of the day from the raw quantities."""
    return aggregate([item for meal in meals for item in meal.items])


def nutrients_below_floors(totals: NutrientTotals, floors: dict[str, float]) -> list[str]:
    """Return the nutrient names whose daily total is under its floor."""
    known = {field.name for field in fields(NutrientTotals)}
    return [
        name
        for name, floor in floors.items()
        if name in known and getattr(totals, name) < floor
    ]
