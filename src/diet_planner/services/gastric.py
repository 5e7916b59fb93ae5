"""Per-meal volume ceilings by patient age class."""

import logging
from dataclasses import replace

from diet_planner.domain.patients import PatientType
from diet_planner.domain.plans import Meal, MealItem
from diet_planner.domain.rules import RulesConfig
from diet_planner.services.calibration import is_scalable
from diet_planner.services.rounding import round_to_step

_logger = logging.getLogger(__name__)


def gastric_ceiling(patient_type: PatientType, rules: RulesConfig) -> float:
    """Return the volume ceiling in mL for a patient type."""
    return rules.gastric_ceilings_ml.get(
        patient_type, rules.gastric_ceilings_ml.get(PatientType.ADULT, 600.0)
    )


def estimate_volume(meal: Meal, rules: RulesConfig) -> float:
    """Approximate meal volume in mL, using cooked weight when it is known."""
    return sum(_served_grams(item) for item in meal.items) * rules.gastric_density


def clamp_gastric_volume(
    meals: list[Meal], patient_type: PatientType, rules: RulesConfig
) -> list[Meal]:
    """Shrink scalable items of meals whose volume exceeds the ceiling."""
    ceiling = gastric_ceiling(patient_type, rules)
    clamped = []
    for meal in meals:
        volume = estimate_volume(meal, rules)
        if volume <= ceiling + rules.gastric_grace_ml:
            clamped.append(meal)
            continue
        factor = ceiling / volume
        _logger.info(
            "%s: %.0f mL over a %.0f mL ceiling, scaling by %.2f",
            meal.label,
            volume,
            ceiling,
            factor,
        )
        items = tuple(
            replace(
                item,
                quantity_g=max(
                    rules.rounding_step_g,
                    round_to_step(item.quantity_g * factor, rules.rounding_step_g),
                ),
            )
            if is_scalable(item, rules)
            else item
            for item in meal.items
        )
        clamped.append(replace(meal, items=items))
    return clamped


def audit_gastric_volume(
    meals: list[Meal], patient_type: PatientType, rules: RulesConfig
) -> list[str]:
    """Return a warning for each meal still clearly above the ceiling."""
    ceiling = gastric_ceiling(patient_type, rules)
    warnings = []
    for meal in meals:
        volume = estimate_volume(meal, rules)
        if volume > ceiling + rules.gastric_audit_margin_ml:
            warnings.append(
                f"{meal.label}: estimated volume {volume:.0f} mL exceeds the "
                f"{ceiling:.0f} mL limit for a {patient_type.value} patient; "
                "consider splitting this meal."
            )
    return warnings


def _served_grams(item: MealItem) -> float:
    if item.cooked_quantity_g is not None:
        return item.cooked_quantity_g
    return item.quantity_g
