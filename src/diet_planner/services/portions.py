"""Hard portion caps and redistribution of capped calories."""

import logging
from dataclasses import replace

from diet_planner.domain.plans import Meal, MealItem
from diet_planner.domain.rules import RulesConfig
from diet_planner.services.classification import mentions

_logger = logging.getLogger(__name__)


def hard_cap(item: MealItem, rules: RulesConfig) -> float:
    """Return the largest realistic portion for an item, in grams."""
    for rule in rules.name_caps:
        if mentions(item.food.name, [rule.pattern]):
            return rule.cap_g
    return rules.group_caps.get(item.food_group, rules.default_cap_g)


def bound_portions(meals: list[Meal], rules: RulesConfig) -> list[Meal]:
    """Clamp items to their caps and move the lost calories onto items with headroom."""
    return [_bound_meal(meal, rules) for meal in meals]


def _bound_meal(meal: Meal, rules: RulesConfig) -> Meal:
    items = list(meal.items)
    caps = [hard_cap(item, rules) for item in items]
    grams = [item.quantity_g for item in items]
    overflow = 0.0
    for index, item in enumerate(items):
        if grams[index] > caps[index]:
            overflow += item.food.calories_for(grams[index] - caps[index])
            grams[index] = caps[index]

    if overflow > rules.redistribution_min_overflow_kcal:
        receivers = [
            index
            for index, item in enumerate(items)
            if caps[index] - grams[index] >= rules.redistribution_min_headroom_g
            and item.food.energy_kcal > 0
        ]
        receivers.sort(
            key=lambda index: (
                not mentions(items[index].food.name, rules.dense_carb_patterns),
                -items[index].food.energy_kcal,
            )
        )
        for index in receivers:
            if overflow <= 0:
                break
            energy_per_gram = items[index].food.energy_kcal / 100.0
            added = min(caps[index] - grams[index], overflow / energy_per_gram)
            grams[index] += added
            overflow -= added * energy_per_gram
        if overflow > rules.redistribution_min_overflow_kcal:
            _logger.info("%s: %.0f kcal could not be redistributed", meal.label, overflow)

    bounded = tuple(
        replace(item, quantity_g=min(grams[index], caps[index]))
        for index, item in enumerate(items)
    )
    return replace(meal, items=bounded)
