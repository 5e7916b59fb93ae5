"""Domain models for recipe templates."""

from dataclasses import dataclass, field
from enum import Enum

from diet_planner.domain.foods import FoodGroup, PreparationMethod


class MealSlot(str, Enum):
    """Meal slot a recipe template can fill."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


class RiskMarker(str, Enum):
    """Medical risk flags carried by recipe templates."""

    HIGH_SODIUM = "high_sodium"
    HIGH_FAT = "high_fat"
    HIGH_PURINE = "high_purine"


@dataclass(frozen=True)
class IngredientRole:
    """Abstract ingredient slot of a recipe.

    ``relative_weight`` is a dimensionless share of the meal's calorie budget,
    not a weight in grams.
    """

    food_group: FoodGroup
    candidate_terms: tuple[str, ...]
    relative_weight: float
    preparation_method: PreparationMethod | None = None


@dataclass(frozen=True)
class RecipeTemplate:
    """Recipe with its applicable meal slots and ingredient roles."""

    id: str
    name: str
    slots: frozenset[MealSlot]
    roles: tuple[IngredientRole, ...]
    risk_markers: frozenset[RiskMarker] = field(default_factory=frozenset)
