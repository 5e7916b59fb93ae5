"""Daily plan generation pipeline."""

import logging
import random
from dataclasses import dataclass, field
from typing import Protocol

from diet_planner.domain.foods import FoodItem, PreparationMethod
from diet_planner.domain.patients import (
    InsulinType,
    MealMoment,
    PatientConstraints,
    PatientType,
)
from diet_planner.domain.plans import DailyPlan, Meal, NutritionalGoals
from diet_planner.domain.recipes import RecipeTemplate
from diet_planner.domain.rules import MomentSpec, RulesConfig
from diet_planner.services.bromatology import apply_bromatology
from diet_planner.services.calibration import CalorieCalibrator
from diet_planner.services.classification import FoodClassifier, contains_any
from diet_planner.services.composition import MealComposer
from diet_planner.services.gastric import audit_gastric_volume, clamp_gastric_volume
from diet_planner.services.plating import apply_plating_rules
from diet_planner.services.portions import bound_portions
from diet_planner.services.resolver import IngredientResolver
from diet_planner.services.safety import InteractionLookup, SafetyFilter
from diet_planner.services.stats import daily_stats, nutrients_below_floors, with_meal_stats

_logger = logging.getLogger(__name__)

_RATIO_SLACK = 0.05


class RecipeStore(Protocol):
    """Source of recipe templates."""

    def list_templates(self) -> list[RecipeTemplate]:
        """Return every available template."""


@dataclass
class DietPlanService:
    """Generates calorie-calibrated daily plans from templates and a catalog.

    Generation never raises. Degraded paths (empty catalog, no recipe, missed
    calorie band) are reported through ``DailyPlan.safety_warnings``.
    """

    rules: RulesConfig
    recipe_store: RecipeStore
    interactions: InteractionLookup
    calorie_tolerance: float = 0.05
    internal_tolerance: float = 0.02
    max_calibration_iterations: int = 10
    min_safe_calories: float = 400.0
    pediatric_min_calories: float = 1000.0
    fail_open_on_empty_catalog: bool = False
    default_preparation_method: PreparationMethod = PreparationMethod.BOILED
    rng: random.Random = field(default_factory=random.Random)

    def generate(  # noqa: PLR0913
        self,
        goals: NutritionalGoals,
        catalog: list[FoodItem],
        day_label: str = "Day 1",
        constraints: PatientConstraints | None = None,
        rng: random.Random | None = None,
    ) -> DailyPlan:
        """Generate one day. Pass ``rng`` to make the call deterministic."""
        constraints = constraints or PatientConstraints()
        try:
            return self._generate(goals, catalog, day_label, constraints, rng or self.rng)
        except Exception:
            _logger.exception("Plan generation failed for %s", day_label)
            return self._finish(
                day_label,
                [],
                goals,
                ["Plan generation failed unexpectedly; no meals were produced."],
            )

    def generate_week(
        self,
        goals: NutritionalGoals,
        catalog: list[FoodItem],
        day_labels: list[str],
        constraints: PatientConstraints | None = None,
        rng: random.Random | None = None,
    ) -> list[DailyPlan]:
        """Generate one independent plan per day label."""
        return [
            self.generate(goals, catalog, label, constraints, rng) for label in day_labels
        ]

    def meal_moments(self, constraints: PatientConstraints) -> list[MealMoment]:
        """Return the enabled meal moments, or the default day structure."""
        enabled = [moment for moment in constraints.meal_moments if moment.enabled]
        if enabled:
            return enabled
        if constraints.meal_moments:
            return [_moment(self.rules.single_meal_moment)]
        return [_moment(spec) for spec in self.rules.default_meal_moments]

    def _generate(
        self,
        goals: NutritionalGoals,
        catalog: list[FoodItem],
        day_label: str,
        constraints: PatientConstraints,
        rng: random.Random,
    ) -> DailyPlan:
        rules = self.rules
        target = goals.target_calories
        patient_type = constraints.resolved_patient_type()
        warnings = self._clinical_warnings(target, patient_type)
        if not catalog:
            _logger.warning("Empty food catalog, returning an empty plan")
            warnings.append("The food catalog is empty; no meals could be composed.")
            return self._finish(day_label, [], goals, warnings)

        safety = SafetyFilter(
            rules=rules,
            interactions=self.interactions,
            fail_open_on_empty_catalog=self.fail_open_on_empty_catalog,
        )
        filtered = safety.filter(catalog, constraints)
        warnings.extend(filtered.warnings)
        warnings.extend(self._insulin_advice(constraints.insulin))

        moments = self.meal_moments(constraints)
        ratio_total = sum(moment.ratio for moment in moments)
        if abs(ratio_total - 1.0) > _RATIO_SLACK:
            warnings.append(
                f"Meal moment ratios add up to {ratio_total:.0%} of the daily target."
            )

        composer = MealComposer(
            rules=rules,
            resolver=IngredientResolver(rules),
            classifier=FoodClassifier(rules),
            rng=rng,
        )
        recipes = self.recipe_store.list_templates()
        meals: list[Meal] = []
        for moment in moments:
            meal, meal_warnings = composer.compose(
                moment, target, recipes, filtered.safe_catalog, constraints.pathologies
            )
            meals.append(meal)
            warnings.extend(meal_warnings)

        meals = bound_portions(meals, rules)
        meals = apply_plating_rules(meals, rules)
        meals = clamp_gastric_volume(meals, patient_type, rules)
        calibrator = CalorieCalibrator(
            rules=rules,
            tolerance=self.calorie_tolerance,
            internal_tolerance=self.internal_tolerance,
            max_iterations=self.max_calibration_iterations,
        )
        meals = calibrator.calibrate(meals, target)
        meals = calibrator.force_adjust(meals, target)
        meals = composer.add_staple_sides(
            meals, target, filtered.safe_catalog, self.calorie_tolerance
        )
        meals = apply_bromatology(meals, rules, self.default_preparation_method)
        warnings.extend(audit_gastric_volume(meals, patient_type, rules))
        warnings.extend(self._iron_calcium_advice(meals))
        return self._finish(day_label, meals, goals, warnings)

    def _clinical_warnings(self, target: float, patient_type: PatientType) -> list[str]:
        warnings = []
        if target <= 0:
            warnings.append("Target calories must be positive; portions cannot be computed.")
        elif target < self.min_safe_calories:
            warnings.append(
                f"Target of {target:.0f} kcal is below the minimum safe intake of "
                f"{self.min_safe_calories:.0f} kcal; confirm this prescription."
            )
        if patient_type == PatientType.CHILD and 0 < target < self.pediatric_min_calories:
            warnings.append(
                f"Target of {target:.0f} kcal may be insufficient calories for linear "
                "growth in a pediatric patient."
            )
        return warnings

    def _insulin_advice(self, insulin: InsulinType) -> list[str]:
        advice = self.rules.insulin_advice.get(insulin)
        return [advice] if advice else []

    def _iron_calcium_advice(self, meals: list[Meal]) -> list[str]:
        warnings = []
        for meal in meals:
            names = [item.food.name for item in meal.items]
            has_iron = any(contains_any(name, self.rules.iron_terms) for name in names)
            has_calcium = any(contains_any(name, self.rules.calcium_terms) for name in names)
            if has_iron and has_calcium:
                warnings.append(
                    f"{meal.label}: calcium-rich foods reduce iron absorption; "
                    "consider serving them at a different meal."
                )
        return warnings

    def _finish(
        self,
        day_label: str,
        meals: list[Meal],
        goals: NutritionalGoals,
        warnings: list[str],
    ) -> DailyPlan:
        meals = with_meal_stats(meals)
        stats = daily_stats(meals)
        target = goals.target_calories
        deviation = (stats.calories - target) / target if target > 0 else 0.0
        within = target > 0 and abs(deviation) <= self.calorie_tolerance
        if meals and target > 0 and not within:
            _logger.warning("Plan %s missed its target by %.1f%%", day_label, deviation * 100)
            warnings.append(
                f"Calorie target not reached: {stats.calories} kcal planned for "
                f"{target:.0f} kcal ({deviation:+.1%})."
            )
        floors = goals.micronutrient_floors or self.rules.default_micronutrient_floors
        short = nutrients_below_floors(stats, floors) if stats.calories > 0 else []
        if short:
            warnings.append("Below the daily reference intake: " + ", ".join(short) + ".")
        return DailyPlan(
            day_label=day_label,
            meals=tuple(meals),
            stats=stats,
            goals=goals,
            safety_warnings=tuple(dict.fromkeys(warnings)),
            within_tolerance=within,
            deviation=round(deviation, 4),
        )


def _moment(spec: MomentSpec) -> MealMoment:
    return MealMoment(name=spec.name, slot=spec.slot, ratio=spec.ratio)
