"""Builds meals from recipe templates and a safe catalog."""

import logging
import random
from dataclasses import dataclass, replace

from diet_planner.domain.foods import BALANCED_PLATE_GROUPS, FoodGroup, FoodItem
from diet_planner.domain.patients import MealMoment
from diet_planner.domain.plans import Meal, MealItem, total_calories
from diet_planner.domain.recipes import IngredientRole, RecipeTemplate, RiskMarker
from diet_planner.domain.rules import FillerSpec, RulesConfig
from diet_planner.services.classification import FoodClassifier
from diet_planner.services.portions import hard_cap
from diet_planner.services.resolver import IngredientResolver
from diet_planner.services.rounding import round_half_up, round_to_step

_logger = logging.getLogger(__name__)

_RISK_LABELS = {
    RiskMarker.HIGH_SODIUM: "high-sodium",
    RiskMarker.HIGH_FAT: "high-fat",
    RiskMarker.HIGH_PURINE: "high-purine",
}


@dataclass
class MealComposer:
    """Turns a meal moment into a meal with gram quantities."""

    rules: RulesConfig
    resolver: IngredientResolver
    classifier: FoodClassifier
    rng: random.Random

    def compose(  # noqa: PLR0913
        self,
        moment: MealMoment,
        target_calories: float,
        recipes: list[RecipeTemplate],
        catalog: list[FoodItem],
        pathologies: tuple[str, ...] = (),
    ) -> tuple[Meal, list[str]]:
        """Return the meal for one moment along with composition warnings."""
        warnings: list[str] = []
        candidates = [recipe for recipe in recipes if moment.slot in recipe.slots]
        candidates = self._exclude_risky(candidates, moment, pathologies, warnings)
        if candidates:
            recipe = self.rng.choice(candidates)
        elif recipes:
            recipe = self.rng.choice(recipes)
            warnings.append(
                f"{moment.name}: no suitable recipe left after filtering; "
                f"using '{recipe.name}'."
            )
            _logger.warning("No eligible recipe for %s, falling back", moment.name)
        else:
            warnings.append(f"{moment.name}: no recipes available.")
            return Meal(label=moment.name, slot=moment.slot, items=()), warnings

        label = f"{moment.name} - {recipe.name}"
        if not catalog:
            return Meal(label=label, slot=moment.slot, items=()), warnings

        roles = [*recipe.roles, *self._missing_group_fillers(recipe.roles, catalog)]
        budget = target_calories * moment.ratio
        items = self._portion_roles(roles, catalog, budget)
        items.extend(self._post_hoc_fillers(items, catalog))
        _logger.info("%s composed with %d items", label, len(items))
        return Meal(label=label, slot=moment.slot, items=tuple(items)), warnings

    def add_staple_sides(
        self,
        meals: list[Meal],
        target_calories: float,
        catalog: list[FoodItem],
        tolerance: float = 0.05,
    ) -> list[Meal]:
        """Add staple carbohydrate sides while the day is below the calorie band.

        Runs after calibration, when every portion the recipes chose may already
        be at its cap. Main meals come first and each meal gets at most one side,
        using a staple it does not already contain.
        """
        gap = target_calories - total_calories(meals)
        if target_calories <= 0 or gap <= target_calories * tolerance:
            return meals
        rules = self.rules
        staples: list[FoodItem] = []
        for term in rules.staple_side_terms:
            food = self.resolver.resolve([term], FoodGroup.CARBOHYDRATE, catalog)
            if food is not None and food.energy_kcal > 0:
                if all(food.id != staple.id for staple in staples):
                    staples.append(food)
        rank = {slot: position for position, slot in enumerate(rules.force_adjust_slot_order)}
        order = sorted(range(len(meals)), key=lambda index: rank.get(meals[index].slot, len(rank)))
        sided = list(meals)
        for index in order:
            if gap <= rules.force_adjust_min_gap_kcal:
                break
            meal = sided[index]
            used = {item.food.id for item in meal.items}
            food = next((staple for staple in staples if staple.id not in used), None)
            if not meal.items or food is None:
                continue
            side = MealItem(
                food=food,
                food_group=FoodGroup.CARBOHYDRATE,
                quantity_g=0.0,
                waste_factor=food.waste_factor,
            )
            grams = max(
                rules.min_scaled_quantity_g,
                round_to_step(gap * 100.0 / food.energy_kcal, rules.rounding_step_g),
            )
            grams = min(grams, hard_cap(side, rules))
            sided[index] = replace(meal, items=(*meal.items, replace(side, quantity_g=grams)))
            gap -= food.calories_for(grams)
            _logger.info("%s: added %.0f g of %s as a side", meal.label, grams, food.name)
        return sided

    def _exclude_risky(
        self,
        candidates: list[RecipeTemplate],
        moment: MealMoment,
        pathologies: tuple[str, ...],
        warnings: list[str],
    ) -> list[RecipeTemplate]:
        lowered = [pathology.lower() for pathology in pathologies]
        for marker, triggers in self.rules.risk_triggers.items():
            if not any(trigger in pathology for trigger in triggers for pathology in lowered):
                continue
            kept = [recipe for recipe in candidates if marker not in recipe.risk_markers]
            removed = len(candidates) - len(kept)
            if removed:
                warnings.append(
                    f"{moment.name}: {removed} {_RISK_LABELS.get(marker, marker.value)} "
                    "recipes excluded."
                )
            candidates = kept
        return candidates

    def _missing_group_fillers(
        self, roles: tuple[IngredientRole, ...], catalog: list[FoodItem]
    ) -> list[IngredientRole]:
        fillers = []
        for group in BALANCED_PLATE_GROUPS:
            covered = any(
                self.classifier.terms_mention(role.candidate_terms, group)
                and self.resolver.resolve(role.candidate_terms, role.food_group, catalog)
                is not None
                for role in roles
            )
            if covered:
                continue
            spec, _ = self._pick_filler(group, catalog)
            if spec is not None:
                fillers.append(
                    IngredientRole(
                        food_group=group,
                        candidate_terms=tuple(spec.terms),
                        relative_weight=spec.relative_weight,
                    )
                )
        return fillers

    def _portion_roles(
        self, roles: list[IngredientRole], catalog: list[FoodItem], budget: float
    ) -> list[MealItem]:
        resolved = []
        for role in roles:
            food = self.resolver.resolve(role.candidate_terms, role.food_group, catalog)
            if food is None:
                _logger.info("No catalog match for %s", ", ".join(role.candidate_terms))
                continue
            resolved.append((role, food))
        total_weight = sum(role.relative_weight for role, _ in resolved)
        if total_weight <= 0:
            return []
        items = []
        for role, food in resolved:
            calories = budget * role.relative_weight / total_weight
            if food.energy_kcal > 0:
                grams = calories / (food.energy_kcal / 100.0)
            else:
                grams = self.rules.zero_energy_portion_g
            items.append(
                MealItem(
                    food=food,
                    food_group=role.food_group,
                    quantity_g=round_half_up(grams),
                    waste_factor=food.waste_factor,
                    preparation_method=role.preparation_method,
                )
            )
        return items

    def _post_hoc_fillers(
        self, items: list[MealItem], catalog: list[FoodItem]
    ) -> list[MealItem]:
        extra = []
        for group in BALANCED_PLATE_GROUPS:
            if any(self.classifier.item_in_group(item, group) for item in items):
                continue
            _, food = self._pick_filler(group, catalog)
            if food is None:
                _logger.warning("No %s filler available in the safe catalog", group.value)
                continue
            extra.append(
                MealItem(
                    food=food,
                    food_group=group,
                    quantity_g=self.rules.post_hoc_filler_grams.get(group, 100.0),
                    waste_factor=food.waste_factor,
                )
            )
        return extra

    def _pick_filler(
        self, group: FoodGroup, catalog: list[FoodItem]
    ) -> tuple[FillerSpec | None, FoodItem | None]:
        specs = list(self.rules.fillers.get(group, []))
        if not specs:
            return None, None
        self.rng.shuffle(specs)
        for spec in specs:
            food = self.resolver.resolve(spec.terms, group, catalog)
            if food is not None:
                return spec, food
        return specs[0], None
