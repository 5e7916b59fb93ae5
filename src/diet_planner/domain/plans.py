"""Domain models for generated daily plans."""

from dataclasses import dataclass, field

from diet_planner.domain.foods import FoodGroup, FoodItem, PreparationMethod
from diet_planner.domain.recipes import MealSlot


@dataclass(frozen=True)
class MacroSplit:
    """Share of daily energy per macronutrient."""

    protein: float = 0.20
    carbohydrate: float = 0.50
    fat: float = 0.30


@dataclass(frozen=True)
class NutritionalGoals:
    """Daily targets for a generation request."""

    target_calories: float
    macro_split: MacroSplit = field(default_factory=MacroSplit)
    micronutrient_floors: dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class MealItem:
    """Concrete food portion inside a meal.

    ``quantity_g`` is the raw edible weight that drives every calculation.
    Gross and cooked weights are filled in by the bromatology stage.
    """

    food: FoodItem
    food_group: FoodGroup
    quantity_g: float
    gross_quantity_g: float | None = None
    cooked_quantity_g: float | None = None
    waste_factor: float = 1.0
    preparation_method: PreparationMethod | None = None

    @property
    def calories(self) -> float:
        """Energy of this portion."""
        return self.food.calories_for(self.quantity_g)


@dataclass(frozen=True)
class NutrientTotals:
    """Aggregated nutrients for a meal or a day."""

    calories: int = 0
    protein_g: float = 0.0
    fat_g: float = 0.0
    carbs_g: float = 0.0
    fiber_g: float = 0.0
    calcium_mg: float = 0.0
    phosphorus_mg: float = 0.0
    zinc_mg: float = 0.0
    iron_mg: float = 0.0
    vitamin_a_ug: float = 0.0
    thiamine_mg: float = 0.0
    riboflavin_mg: float = 0.0
    niacin_mg: float = 0.0
    vitamin_c_mg: float = 0.0
    folate_ug: float = 0.0
    sodium_mg: float = 0.0
    potassium_mg: float = 0.0


@dataclass(frozen=True)
class Meal:
    """Named meal composed from a recipe template."""

    label: str
    slot: MealSlot
    items: tuple[MealItem, ...]
    stats: NutrientTotals | None = None

    @property
    def calories(self) -> float:
        """Unrounded energy of the meal."""
        return sum(item.calories for item in self.items)


@dataclass(frozen=True)
class DailyPlan:
    """Generated plan for one day."""

    day_label: str
    meals: tuple[Meal, ...]
    stats: NutrientTotals
    goals: NutritionalGoals
    safety_warnings: tuple[str, ...] = ()
    within_tolerance: bool = False
    deviation: float = 0.0


def total_calories(meals: list[Meal] | tuple[Meal, ...]) -> float:
    """Return the unrounded energy of a list of meals."""
    return sum(meal.calories for meal in meals)
