"""Safety filter pipeline applied to the catalog before composition."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol

from diet_planner.domain.foods import FoodItem
from diet_planner.domain.interactions import InteractionCheck
from diet_planner.domain.patients import AllergyEntry, AllergySeverity, PatientConstraints
from diet_planner.domain.rules import RulesConfig
from diet_planner.services.classification import contains_any

_logger = logging.getLogger(__name__)


class InteractionLookup(Protocol):
    """Source of drug-food interaction data."""

    def get_medication_warnings(self, medications: list[str]) -> list[str]:
        """Return advisory text for each known medication."""

    def check_food_interaction(
        self, food_name: str, medications: list[str]
    ) -> InteractionCheck:
        """Return interaction counts for one food."""


@dataclass(frozen=True)
class FilterResult:
    """Narrowed catalog with the warnings produced while narrowing it."""

    safe_catalog: list[FoodItem]
    warnings: list[str] = field(default_factory=list)


@dataclass
class SafetyFilter:
    """Removes foods that conflict with patient preferences or clinical constraints.

    Stages run in a fixed order: disliked foods, pathologies, allergies, texture
    and drug interactions. The disliked stage never empties the catalog. The
    clinical stages filter even when nothing is left unless
    ``fail_open_on_empty_catalog`` is set.
    """

    rules: RulesConfig
    interactions: InteractionLookup
    fail_open_on_empty_catalog: bool = False

    def filter(
        self, catalog: list[FoodItem], constraints: PatientConstraints
    ) -> FilterResult:
        """Run every stage and return the safe catalog."""
        warnings: list[str] = []
        safe = self._exclude_disliked(list(catalog), constraints.disliked_foods)
        safe = self._exclude_pathologies(safe, constraints.pathologies, warnings)
        safe = self._exclude_allergens(safe, constraints.allergies, warnings)
        safe = self._exclude_texture(safe, constraints, warnings)
        safe = self._exclude_drug_interactions(safe, constraints.medications, warnings)
        _logger.info("Safety filter kept %d of %d foods", len(safe), len(catalog))
        return FilterResult(safe_catalog=safe, warnings=warnings)

    def allergen_terms(self, entry: AllergyEntry) -> list[str]:
        """Return the name fragments excluded for an allergy entry."""
        allergen = entry.allergen.strip().lower()
        canonical = self.rules.allergen_aliases.get(allergen, allergen)
        terms = [allergen, canonical]
        if entry.severity == AllergySeverity.FATAL:
            terms.extend(self.rules.allergen_derivatives.get(canonical, []))
            terms.extend(self.rules.allergen_direct_terms.get(canonical, []))
        elif entry.severity == AllergySeverity.INTOLERANCE:
            terms.extend(self.rules.allergen_direct_terms.get(canonical, []))
        return list(dict.fromkeys(term for term in terms if term))

    def _exclude_disliked(
        self, catalog: list[FoodItem], disliked: tuple[str, ...]
    ) -> list[FoodItem]:
        terms = [term.strip().lower() for term in disliked if term.strip()]
        if not terms:
            return catalog
        kept = [food for food in catalog if not contains_any(food.name, terms)]
        if catalog and not kept:
            _logger.warning("Disliked foods would empty the catalog; ignoring them")
            return catalog
        return kept

    def _exclude_pathologies(
        self, catalog: list[FoodItem], pathologies: tuple[str, ...], warnings: list[str]
    ) -> list[FoodItem]:
        for pathology in pathologies:
            label = pathology.strip()
            if not label:
                continue
            lowered = label.lower()
            terms = [
                term
                for key, key_terms in self.rules.pathology_exclusions.items()
                if key in lowered
                for term in key_terms
            ]
            if not terms:
                warnings.append(
                    f"Pathology '{label}' has no dietary exclusion rule; review manually."
                )
                continue
            catalog, removed = self._narrow(
                catalog,
                lambda food, terms=terms: contains_any(food.name, terms),
                f"Pathology '{label}'",
                warnings,
            )
            warnings.append(f"Pathology '{label}': {removed} foods excluded.")
        return catalog

    def _exclude_allergens(
        self,
        catalog: list[FoodItem],
        allergies: tuple[AllergyEntry, ...],
        warnings: list[str],
    ) -> list[FoodItem]:
        for entry in allergies:
            if entry.severity == AllergySeverity.PREFERENCE:
                continue
            terms = self.allergen_terms(entry)
            label = f"Allergy to {entry.allergen}"
            catalog, removed = self._narrow(
                catalog,
                lambda food, terms=terms: contains_any(food.name, terms),
                label,
                warnings,
            )
            if entry.severity == AllergySeverity.FATAL:
                warnings.append(
                    f"Fatal allergy to {entry.allergen}: {removed} foods excluded "
                    "including derivatives."
                )
            else:
                warnings.append(
                    f"Intolerance to {entry.allergen}: {removed} foods excluded."
                )
        return catalog

    def _exclude_texture(
        self, catalog: list[FoodItem], constraints: PatientConstraints, warnings: list[str]
    ) -> list[FoodItem]:
        texture = constraints.texture.value
        if texture not in self.rules.texture_restricted_levels:
            return catalog
        terms = self.rules.texture_exclusion_terms
        catalog, removed = self._narrow(
            catalog,
            lambda food: contains_any(food.name, terms),
            f"Texture '{texture}'",
            warnings,
        )
        warnings.append(
            f"Texture '{texture}': {removed} hard or fibrous foods excluded."
        )
        return catalog

    def _exclude_drug_interactions(
        self, catalog: list[FoodItem], medications: tuple[str, ...], warnings: list[str]
    ) -> list[FoodItem]:
        active = [medication for medication in medications if medication.strip()]
        if not active:
            return catalog
        warnings.extend(self.interactions.get_medication_warnings(active))
        catalog, removed = self._narrow(
            catalog,
            lambda food: self.interactions.check_food_interaction(food.name, active).critical_count
            > 0,
            "Medications",
            warnings,
        )
        if removed:
            warnings.append(
                f"Medications: {removed} foods with critical interactions excluded."
            )
        return catalog

    def _narrow(
        self,
        catalog: list[FoodItem],
        is_excluded: Callable[[FoodItem], bool],
        label: str,
        warnings: list[str],
    ) -> tuple[list[FoodItem], int]:
        kept = [food for food in catalog if not is_excluded(food)]
        removed = len(catalog) - len(kept)
        if catalog and not kept:
            if self.fail_open_on_empty_catalog:
                _logger.warning("%s would empty the catalog; stage skipped", label)
                warnings.append(f"{label}: filter skipped because it would exclude every food.")
                return catalog, 0
            _logger.warning("%s excluded every remaining food", label)
            warnings.append(f"{label}: no safe foods remain in the catalog.")
        return kept, removed
