"""Dependency container wiring for the application."""

import logging
import random
from dataclasses import dataclass
from pathlib import Path

from diet_planner.adapters.csv_food_catalog import CsvFoodCatalog
from diet_planner.adapters.drug_interactions import StaticDrugInteractionLookup
from diet_planner.adapters.recipe_store import StaticRecipeStore
from diet_planner.config import Settings, parse_meal_moments
from diet_planner.domain.foods import FoodItem
from diet_planner.domain.patients import MealMoment
from diet_planner.domain.rules import RulesConfig
from diet_planner.rules import load_rules
from diet_planner.services.planner import DietPlanService
from diet_planner.services.shopping import ShoppingListService

_logger = logging.getLogger(__name__)


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    rules: RulesConfig
    catalog: list[FoodItem]
    meal_moments: list[MealMoment] | None
    plan_service: DietPlanService
    shopping_service: ShoppingListService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    rules = load_rules(resolved_settings.rules_locale, resolved_settings.rules_path)
    catalog: list[FoodItem] = []
    if resolved_settings.catalog_path:
        catalog = CsvFoodCatalog(
            Path(resolved_settings.catalog_path),
            encoding=resolved_settings.catalog_encoding,
        ).load()
    else:
        _logger.warning("No catalog_path configured; requests must supply foods")
    plan_service = DietPlanService(
        rules=rules,
        recipe_store=StaticRecipeStore(),
        interactions=StaticDrugInteractionLookup(),
        calorie_tolerance=resolved_settings.calorie_tolerance,
        internal_tolerance=resolved_settings.internal_tolerance,
        max_calibration_iterations=resolved_settings.max_calibration_iterations,
        min_safe_calories=resolved_settings.min_safe_calories,
        pediatric_min_calories=resolved_settings.pediatric_min_calories,
        fail_open_on_empty_catalog=resolved_settings.fail_open_on_empty_catalog,
        default_preparation_method=resolved_settings.default_preparation_method,
        rng=random.Random(resolved_settings.random_seed),
    )
    return AppContainer(
        settings=resolved_settings,
        rules=rules,
        catalog=catalog,
        meal_moments=parse_meal_moments(resolved_settings.meal_moments),
        plan_service=plan_service,
        shopping_service=ShoppingListService(rules),
    )
