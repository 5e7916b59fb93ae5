"""Maps abstract ingredient roles onto concrete catalog foods."""

import logging
import re
from dataclasses import dataclass

from diet_planner.domain.foods import SOLID_FOOD_GROUPS, FoodGroup, FoodItem
from diet_planner.domain.rules import RulesConfig
from diet_planner.services.classification import contains_any

_logger = logging.getLogger(__name__)


@dataclass
class IngredientResolver:
    """Resolves candidate search terms against a catalog."""

    rules: RulesConfig

    def resolve(
        self,
        candidate_terms: tuple[str, ...] | list[str],
        food_group: FoodGroup,
        catalog: list[FoodItem],
    ) -> FoodItem | None:
        """Return the first food matching a candidate term, in term order."""
        pool = catalog
        if food_group in SOLID_FOOD_GROUPS:
            pool = [
                food
                for food in catalog
                if not contains_any(food.name, self.rules.solid_group_denylist)
            ]
        for term in candidate_terms:
            food = self._match_term(term, pool)
            if food is not None:
                return food
        return None

    def _match_term(self, term: str, pool: list[FoodItem]) -> FoodItem | None:
        needle = term.strip().lower()
        if not needle:
            return None
        for food in pool:
            if food.name.lower() == needle:
                return food
        matches = [food for food in pool if needle in food.name.lower()]
        if not matches and "|" in needle:
            matches = _regex_matches(needle, pool)
        if not matches:
            return None
        if len(matches) == 1:
            return matches[0]
        return self._disambiguate(needle, matches)

    def _disambiguate(self, needle: str, matches: list[FoodItem]) -> FoodItem:
        for rule in self.rules.disambiguation:
            if rule.term.lower() != needle:
                continue
            remaining = [
                food for food in matches if not contains_any(food.name, rule.avoid)
            ] or matches
            preferred = [
                food
                for food in remaining
                if all(word.lower() in food.name.lower() for word in rule.prefer)
            ]
            return _shortest(preferred or remaining)
        return _shortest(matches)


def _regex_matches(pattern: str, pool: list[FoodItem]) -> list[FoodItem]:
    try:
        compiled = re.compile(pattern, re.IGNORECASE)
    except re.error:
        _logger.warning("Ignoring invalid search pattern %r", pattern)
        return []
    return [food for food in pool if compiled.search(food.name)]


def _shortest(foods: list[FoodItem]) -> FoodItem:
    return min(foods, key=lambda food: len(food.name))
