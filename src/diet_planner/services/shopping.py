"""Shopping list consolidated from one or more daily plans."""

import math
from dataclasses import dataclass

from diet_planner.domain.foods import FoodGroup
from diet_planner.domain.plans import DailyPlan, MealItem
from diet_planner.domain.rules import RulesConfig
from diet_planner.services.classification import mentions
from diet_planner.services.rounding import round_half_up

_GRAMS_PER_KG = 1000


@dataclass(frozen=True)
class ShoppingItem:
    """Total purchase need for one food."""

    food_id: str
    name: str
    food_group: FoodGroup
    net_g: float
    gross_g: float
    cooked_g: float
    occurrences: int
    practical_quantity: str


@dataclass(frozen=True)
class ShoppingSection:
    """Shopping items of one food group."""

    food_group: FoodGroup
    items: tuple[ShoppingItem, ...]


@dataclass
class _Tally:
    name: str
    food_group: FoodGroup
    net_g: float = 0.0
    gross_g: float = 0.0
    cooked_g: float = 0.0
    occurrences: int = 0


@dataclass
class ShoppingListService:
    """Builds grouped shopping lists."""

    rules: RulesConfig

    def build(self, plans: list[DailyPlan]) -> list[ShoppingSection]:
        """Sum gross and cooked weights per food across every plan."""
        tallies: dict[str, _Tally] = {}
        for plan in plans:
            for meal in plan.meals:
                for item in meal.items:
                    self._add(tallies, item)
        sections = []
        for group in FoodGroup:
            items = [
                self._to_item(food_id, tally)
                for food_id, tally in tallies.items()
                if tally.food_group == group
            ]
            if items:
                items.sort(key=lambda entry: entry.name.lower())
                sections.append(ShoppingSection(food_group=group, items=tuple(items)))
        return sections

    def practical_quantity(self, name: str, gross_g: float) -> str:
        """Express a gross weight in the unit a shopper would use."""
        for rule in self.rules.unit_rules:
            if not mentions(name, [rule.pattern]):
                continue
            amount = gross_g / rule.grams_per_unit
            if rule.countable:
                return f"{max(1, math.ceil(amount))} {rule.unit}"
            return f"{amount:.1f} {rule.unit}"
        if gross_g >= _GRAMS_PER_KG:
            return f"{gross_g / _GRAMS_PER_KG:.2f} kg"
        return f"{gross_g:.0f} g"

    def _add(self, tallies: dict[str, _Tally], item: MealItem) -> None:
        tally = tallies.setdefault(
            item.food.id, _Tally(name=item.food.name, food_group=item.food_group)
        )
        gross = item.gross_quantity_g
        if gross is None:
            gross = round_half_up(item.quantity_g * item.waste_factor)
        cooked = item.cooked_quantity_g
        if cooked is None:
            cooked = item.quantity_g
        tally.net_g += item.quantity_g
        tally.gross_g += gross
        tally.cooked_g += cooked
        tally.occurrences += 1

    def _to_item(self, food_id: str, tally: _Tally) -> ShoppingItem:
        return ShoppingItem(
            food_id=food_id,
            name=tally.name,
            food_group=tally.food_group,
            net_g=tally.net_g,
            gross_g=tally.gross_g,
            cooked_g=tally.cooked_g,
            occurrences=tally.occurrences,
            practical_quantity=self.practical_quantity(tally.name, tally.gross_g),
        )
