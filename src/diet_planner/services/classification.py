"""Food-group detection by tag and by name keywords."""

import re
from dataclasses import dataclass, field

from diet_planner.domain.foods import FoodGroup, FoodItem
from diet_planner.domain.plans import MealItem
from diet_planner.domain.rules import RulesConfig


def mentions(text: str, patterns: list[str]) -> bool:
    """Return True when any pattern starts a word in ``text``."""
    lowered = text.lower()
    return any(re.search(rf"\b{re.escape(pattern.lower())}", lowered) for pattern in patterns)


def contains_any(text: str, terms: list[str] | tuple[str, ...]) -> bool:
    """Case-insensitive substring test."""
    lowered = text.lower()
    return any(term.lower() in lowered for term in terms)


@dataclass
class FoodClassifier:
    """Keyword based food-group detection built from a rule set."""

    rules: RulesConfig
    _patterns: dict[FoodGroup, re.Pattern[str]] = field(
        default_factory=dict, init=False, repr=False
    )

    def __post_init__(self) -> None:
        for group, keywords in self.rules.group_keywords.items():
            if not keywords:
                continue
            alternatives = "|".join(
                re.escape(keyword.lower()) for keyword in sorted(keywords, key=len, reverse=True)
            )
            self._patterns[group] = re.compile(
                rf"\b(?:{alternatives})(?:e?s)?\b", re.IGNORECASE
            )

    def name_matches(self, text: str, group: FoodGroup) -> bool:
        """Return True when ``text`` contains a keyword of ``group``."""
        pattern = self._patterns.get(group)
        return bool(pattern and pattern.search(text))

    def food_matches(self, food: FoodItem, group: FoodGroup) -> bool:
        """Return True when the food name points to ``group``."""
        return self.name_matches(food.name, group)

    def item_in_group(self, item: MealItem, group: FoodGroup) -> bool:
        """Return True when the item is tagged or named as ``group``."""
        return item.food_group == group or self.food_matches(item.food, group)

    def terms_mention(self, terms: tuple[str, ...], group: FoodGroup) -> bool:
        """Return True when any candidate term carries a keyword of ``group``."""
        return any(self.name_matches(term, group) for term in terms)
