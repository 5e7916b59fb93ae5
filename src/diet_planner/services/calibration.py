"""Iterative calorie calibration with escalating fallbacks."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, replace

from diet_planner.domain.foods import FoodGroup
from diet_planner.domain.plans import Meal, MealItem, total_calories
from diet_planner.domain.rules import RulesConfig
from diet_planner.services.classification import mentions
from diet_planner.services.portions import hard_cap
from diet_planner.services.rounding import round_to_step

_logger = logging.getLogger(__name__)

_COARSE_ITERATIONS = 6


def is_scalable(item: MealItem, rules: RulesConfig) -> bool:
    """Return True when an item may be scaled proportionally.

    Seasonings, small amounts of cooking fat and single eggs keep their portion.
    """
    grams = item.quantity_g
    name = item.food.name
    if grams < rules.scalable_min_g:
        return False
    if grams < rules.fixed_ingredient_min_g and mentions(name, rules.fixed_ingredient_patterns):
        return False
    if item.food_group == FoodGroup.FAT and grams < rules.fat_scalable_min_g:
        return False
    if grams <= rules.small_egg_max_g and mentions(name, rules.egg_patterns):
        return False
    if mentions(name, rules.staple_carb_patterns) or mentions(name, rules.main_protein_patterns):
        return True
    return grams >= rules.general_scalable_min_g


@dataclass
class CalorieCalibrator:
    """Moves a day's meals toward a calorie target."""

    rules: RulesConfig
    tolerance: float = 0.05
    internal_tolerance: float = 0.02
    max_iterations: int = 10

    def calibrate(self, meals: list[Meal], target: float) -> list[Meal]:
        """Scale scalable items by ``target / total`` until the internal band is met."""
        if target <= 0:
            return meals
        for iteration in range(self.max_iterations):
            current = total_calories(meals)
            if current <= 0 or _within(current, target, self.internal_tolerance):
                break
            factor = target / current
            step = self.rules.rounding_step_g if iteration < _COARSE_ITERATIONS else 1.0
            meals = self._scale(meals, factor, step)
        _logger.info(
            "Calibration reached %.0f kcal for a %.0f kcal target",
            total_calories(meals),
            target,
        )
        return meals

    def force_adjust(self, meals: list[Meal], target: float) -> list[Meal]:
        """Close a remaining gap through carbohydrate portions, then a uniform scale."""
        if target <= 0 or self.within_tolerance(meals, target):
            return meals
        staple = self._carb_pass(
            meals,
            target,
            lambda item: mentions(item.food.name, self.rules.staple_carb_patterns),
            by_slot=True,
        )
        if self.within_tolerance(staple, target):
            return staple
        any_carb = self._carb_pass(staple, target, lambda item: True, by_slot=False)
        if self.within_tolerance(any_carb, target):
            return any_carb
        _logger.warning("Carbohydrate adjustment was not enough; scaling every portion")
        return self._uniform_scale(any_carb, target)

    def within_tolerance(self, meals: list[Meal], target: float) -> bool:
        """Return True when the day is inside the user-facing band."""
        return _within(total_calories(meals), target, self.tolerance)

    def _scale(self, meals: list[Meal], factor: float, step: float) -> list[Meal]:
        floor = self.rules.min_scaled_quantity_g
        scaled = []
        for meal in meals:
            items = []
            for item in meal.items:
                if not is_scalable(item, self.rules):
                    items.append(item)
                    continue
                cap = hard_cap(item, self.rules)
                grams = min(max(item.quantity_g * factor, floor), cap)
                items.append(replace(item, quantity_g=min(round_to_step(grams, step), cap)))
            scaled.append(replace(meal, items=tuple(items)))
        return scaled

    def _carb_pass(
        self,
        meals: list[Meal],
        target: float,
        eligible: Callable[[MealItem], bool],
        *,
        by_slot: bool,
    ) -> list[Meal]:
        rules = self.rules
        grams = [[item.quantity_g for item in meal.items] for meal in meals]
        gap = target - total_calories(meals)
        order = list(range(len(meals)))
        if by_slot:
            rank = {slot: position for position, slot in enumerate(rules.force_adjust_slot_order)}
            order.sort(key=lambda index: rank.get(meals[index].slot, len(rank)))
        for meal_index in order:
            for item_index, item in enumerate(meals[meal_index].items):
                if abs(gap) < rules.force_adjust_min_gap_kcal:
                    break
                energy = item.food.energy_kcal
                if item.food_group != FoodGroup.CARBOHYDRATE or energy <= 0:
                    continue
                if not eligible(item):
                    continue
                current = grams[meal_index][item_index]
                cap = hard_cap(item, rules)
                needed = gap * 100.0 / energy
                if needed > 0:
                    change = min(needed, max(0.0, cap - current))
                else:
                    change = max(needed, -max(0.0, current - rules.force_adjust_floor_g))
                if abs(change) < rules.force_adjust_min_change_g:
                    continue
                adjusted = min(round_to_step(current + change, rules.rounding_step_g), cap)
                grams[meal_index][item_index] = adjusted
                gap -= (adjusted - current) * energy / 100.0
        return _with_quantities(meals, grams)

    def _uniform_scale(self, meals: list[Meal], target: float) -> list[Meal]:
        rules = self.rules
        current = total_calories(meals)
        if current <= 0:
            return meals
        factor = target / current
        grams = []
        for meal in meals:
            row = []
            for item in meal.items:
                quantity = item.quantity_g
                if quantity >= rules.uniform_scale_min_item_g and not mentions(
                    item.food.name, rules.uniform_scale_excluded_patterns
                ):
                    quantity = max(
                        rules.min_scaled_quantity_g,
                        round_to_step(quantity * factor, rules.rounding_step_g),
                    )
                    quantity = min(quantity, hard_cap(item, rules))
                row.append(quantity)
            grams.append(row)
        return _with_quantities(meals, grams)


def _within(current: float, target: float, tolerance: float) -> bool:
    return abs(current - target) <= target * tolerance


def _with_quantities(meals: list[Meal], grams: list[list[float]]) -> list[Meal]:
    return [
        replace(
            meal,
            items=tuple(
                replace(item, quantity_g=quantity)
                for item, quantity in zip(meal.items, row, strict=True)
            ),
        )
        for meal, row in zip(meals, grams, strict=True)
    ]
