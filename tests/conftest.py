"""Shared test fixtures."""

import random
from dataclasses import dataclass, field

import pytest

from diet_planner.adapters.drug_interactions import StaticDrugInteractionLookup
from diet_planner.adapters.recipe_store import StaticRecipeStore
from diet_planner.config import Settings
from diet_planner.containers import AppContainer
from diet_planner.domain.foods import FoodGroup, FoodItem
from diet_planner.domain.plans import Meal, MealItem
from diet_planner.domain.recipes import MealSlot, RecipeTemplate
from diet_planner.domain.rules import RulesConfig
from diet_planner.rules import load_rules
from diet_planner.services.planner import DietPlanService
from diet_planner.services.shopping import ShoppingListService


def make_food(  # noqa: PLR0913
    name: str,
    energy_kcal: float,
    protein_g: float = 0.0,
    fat_g: float = 0.0,
    carbs_g: float = 0.0,
    food_id: str | None = None,
    **extra: float,
) -> FoodItem:
    """Build a catalog food with sensible defaults."""
    return FoodItem(
        id=food_id or name.lower().replace(", ", "-").replace(" ", "-"),
        name=name,
        energy_kcal=energy_kcal,
        protein_g=protein_g,
        fat_g=fat_g,
        carbs_g=carbs_g,
        **extra,
    )


def make_item(
    food: FoodItem, group: FoodGroup, grams: float, **extra: object
) -> MealItem:
    """Build a meal item."""
    return MealItem(food=food, food_group=group, quantity_g=grams, **extra)


def make_meal(slot: MealSlot, *items: MealItem, label: str | None = None) -> Meal:
    """Build a meal."""
    return Meal(label=label or slot.value.title(), slot=slot, items=tuple(items))


EGG = make_food("Egg, whole, raw", 143, 12.6, 9.5, 0.7, iron_mg=1.8, calcium_mg=56)
CHICKEN = make_food("Chicken, breast, raw", 120, 22.5, 2.6, 0.0, iron_mg=0.4)
RICE = make_food("Rice, white, raw", 360, 6.6, 0.6, 79.0, waste_factor=1.0)
POTATO = make_food("Potato, white, raw", 77, 2.0, 0.1, 17.5, waste_factor=1.25)
TOMATO = make_food("Tomato, raw", 18, 0.9, 0.2, 3.9, vitamin_c_mg=14.0)
ONION = make_food("Onion, raw", 40, 1.1, 0.1, 9.3, waste_factor=1.1)
OIL = make_food("Oil, vegetable", 884, 0.0, 100.0, 0.0)
APPLE = make_food("Apple, raw", 52, 0.3, 0.2, 13.8, waste_factor=1.15)


def scenario_catalog() -> list[FoodItem]:
    """The eight-food catalog used by the reference scenario."""
    return [EGG, CHICKEN, RICE, POTATO, TOMATO, ONION, OIL, APPLE]


def rich_catalog() -> list[FoodItem]:
    """A catalog with several scalable foods per food group."""
    return [
        *scenario_catalog(),
        make_food("Beef, lean, raw", 170, 21.0, 9.0, 0.0, iron_mg=2.6),
        make_food("Fish, white, raw", 96, 20.0, 1.5, 0.0),
        make_food("Tuna, canned in water", 116, 25.5, 0.8, 0.0),
        make_food("Turkey, breast, raw", 135, 24.0, 4.0, 0.0),
        make_food("Pork, loin, raw", 143, 21.0, 6.0, 0.0),
        make_food("Sweet potato, raw", 86, 1.6, 0.1, 20.1),
        make_food("Oats, rolled", 379, 13.2, 6.5, 67.7),
        make_food("Bread, whole wheat", 247, 13.0, 3.4, 41.0),
        make_food("Pasta, dry", 371, 13.0, 1.5, 75.0),
        make_food("Lentils, dry", 352, 24.6, 1.1, 63.4, iron_mg=6.5),
        make_food("Quinoa, raw", 368, 14.1, 6.1, 64.2),
        make_food("Corn, sweet, raw", 86, 3.3, 1.4, 19.0),
        make_food("Carrot, raw", 41, 0.9, 0.2, 9.6),
        make_food("Lettuce, raw", 15, 1.4, 0.2, 2.9),
        make_food("Spinach, raw", 23, 2.9, 0.4, 3.6, iron_mg=2.7),
        make_food("Broccoli, raw", 34, 2.8, 0.4, 6.6),
        make_food("Squash, raw", 26, 1.0, 0.1, 6.5),
        make_food("Cucumber, raw", 15, 0.7, 0.1, 3.6),
        make_food("Green beans, raw", 31, 1.8, 0.2, 7.0),
        make_food("Bell pepper, raw", 31, 1.0, 0.3, 6.0),
        make_food("Banana, raw", 89, 1.1, 0.3, 22.8),
        make_food("Orange, raw", 47, 0.9, 0.1, 11.8),
        make_food("Strawberry, raw", 32, 0.7, 0.3, 7.7),
        make_food("Milk, whole", 61, 3.2, 3.3, 4.8, calcium_mg=113),
        make_food("Yogurt, plain", 61, 3.5, 3.3, 4.7, calcium_mg=121),
        make_food("Cheese, fresh", 264, 18.0, 20.0, 3.0, calcium_mg=500),
        make_food("Oil, olive", 884, 0.0, 100.0, 0.0),
        make_food("Avocado, raw", 160, 2.0, 14.7, 8.5),
        make_food("Peanut butter", 588, 25.0, 50.0, 20.0),
    ]


@dataclass
class FixedRecipeStore:
    """Recipe store returning a fixed list of templates."""

    templates: list[RecipeTemplate] = field(default_factory=list)

    def list_templates(self) -> list[RecipeTemplate]:
        return list(self.templates)


@dataclass
class BrokenRecipeStore:
    """Recipe store that fails on every call."""

    def list_templates(self) -> list[RecipeTemplate]:
        raise RuntimeError("recipe backend unavailable")


@pytest.fixture
def rules() -> RulesConfig:
    return load_rules("en")


@pytest.fixture
def rng() -> random.Random:
    return random.Random(7)


@pytest.fixture
def plan_service(rules: RulesConfig) -> DietPlanService:
    return DietPlanService(
        rules=rules,
        recipe_store=StaticRecipeStore(),
        interactions=StaticDrugInteractionLookup(),
        rng=random.Random(11),
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(random_seed=5)


@pytest.fixture
def container(
    settings: Settings, rules: RulesConfig, plan_service: DietPlanService
) -> AppContainer:
    return AppContainer(
        settings=settings,
        rules=rules,
        catalog=rich_catalog(),
        meal_moments=None,
        plan_service=plan_service,
        shopping_service=ShoppingListService(rules),
    )
