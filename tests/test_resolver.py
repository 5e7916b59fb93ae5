"""Tests for ingredient resolution and food classification."""

from diet_planner.domain.foods import FoodGroup
from diet_planner.services.classification import FoodClassifier, contains_any, mentions
from diet_planner.services.resolver import IngredientResolver
from tests.conftest import POTATO, RICE, make_food, make_item


def test_exact_name_wins_over_substring(rules) -> None:
    apple = make_food("Apple", 52)
    pie = make_food("Apple pie", 237)
    resolver = IngredientResolver(rules)

    assert resolver.resolve(("Apple",), FoodGroup.FRUIT, [pie, apple]) is apple


def test_terms_are_tried_in_order(rules) -> None:
    resolver = IngredientResolver(rules)

    food = resolver.resolve(("Quinoa", "Rice", "Potato"), FoodGroup.CARBOHYDRATE, [POTATO, RICE])

    assert food is RICE


def test_solid_groups_skip_denylisted_foods(rules) -> None:
    juice = make_food("Orange juice", 45)
    orange = make_food("Orange, raw", 47)
    resolver = IngredientResolver(rules)

    assert resolver.resolve(("Orange",), FoodGroup.FRUIT, [juice, orange]) is orange
    assert resolver.resolve(("Orange",), FoodGroup.FRUIT, [juice]) is None
    assert resolver.resolve(("Orange",), FoodGroup.OTHER, [juice]) is juice


def test_rice_flour_never_fills_a_carbohydrate_role(rules) -> None:
    flour = make_food("Rice flour", 366)
    resolver = IngredientResolver(rules)

    assert resolver.resolve(("Rice",), FoodGroup.CARBOHYDRATE, [flour]) is None


def test_disambiguation_prefers_and_avoids(rules) -> None:
    sweet = make_food("Potato, sweet, raw", 86)
    white = make_food("Potato, white, baked, with skin", 93)
    chips = make_food("Potato chips", 536)
    resolver = IngredientResolver(rules)

    assert resolver.resolve(("Potato",), FoodGroup.CARBOHYDRATE, [sweet, chips, white]) is white


def test_disambiguation_falls_back_when_all_are_avoided(rules) -> None:
    brown = make_food("Rice, brown, long grain", 367)
    whole = make_food("Rice, whole grain", 360)
    resolver = IngredientResolver(rules)

    assert resolver.resolve(("Rice",), FoodGroup.CARBOHYDRATE, [brown, whole]) is whole


def test_shortest_name_breaks_ties(rules) -> None:
    long_name = make_food("Lentils, red, split, dry", 358)
    short_name = make_food("Lentils, dry", 352)
    resolver = IngredientResolver(rules)

    assert resolver.resolve(("Lentils",), FoodGroup.CARBOHYDRATE, [long_name, short_name]) is (
        short_name
    )


def test_pipe_terms_are_regex_alternatives(rules) -> None:
    resolver = IngredientResolver(rules)

    food = resolver.resolve(("quinoa|potato",), FoodGroup.CARBOHYDRATE, [RICE, POTATO])

    assert food is POTATO


def test_invalid_regex_term_is_ignored(rules) -> None:
    resolver = IngredientResolver(rules)

    assert resolver.resolve(("(rice|",), FoodGroup.CARBOHYDRATE, [RICE]) is None


def test_empty_term_matches_nothing(rules) -> None:
    resolver = IngredientResolver(rules)

    assert resolver.resolve(("  ",), FoodGroup.CARBOHYDRATE, [RICE]) is None


def test_classifier_matches_whole_keywords(rules) -> None:
    classifier = FoodClassifier(rules)

    assert classifier.name_matches("Chicken, breast, raw", FoodGroup.PROTEIN)
    assert classifier.name_matches("Eggs, scrambled", FoodGroup.PROTEIN)
    assert classifier.name_matches("Tomatoes, canned", FoodGroup.VEGETABLE)
    assert classifier.name_matches("Strawberries", FoodGroup.FRUIT)
    assert not classifier.name_matches("Eggplant, raw", FoodGroup.PROTEIN)
    assert not classifier.name_matches("Peach", FoodGroup.VEGETABLE)


def test_item_in_group_uses_tag_or_name(rules) -> None:
    classifier = FoodClassifier(rules)
    tagged = make_item(make_food("Mystery stew", 100), FoodGroup.PROTEIN, 100)
    named = make_item(make_food("Tuna, canned", 116), FoodGroup.OTHER, 100)

    assert classifier.item_in_group(tagged, FoodGroup.PROTEIN)
    assert classifier.item_in_group(named, FoodGroup.PROTEIN)
    assert not classifier.item_in_group(named, FoodGroup.VEGETABLE)


def test_terms_mention(rules) -> None:
    classifier = FoodClassifier(rules)

    assert classifier.terms_mention(("Mixed salad", "Lettuce"), FoodGroup.VEGETABLE)
    assert not classifier.terms_mention(("Cocoa powder",), FoodGroup.VEGETABLE)


def test_mentions_requires_word_start() -> None:
    assert mentions("Oats, rolled", ["oat"])
    assert not mentions("Goat cheese", ["oat"])
    assert mentions("Sweet potato", ["potato"])


def test_contains_any_is_plain_substring() -> None:
    assert contains_any("Goat cheese", ["oat"])
    assert not contains_any("Rice", ["bean", "corn"])
