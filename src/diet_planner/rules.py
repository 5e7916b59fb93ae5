"""Built-in rule sets and loading of JSON overrides."""

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from diet_planner.domain.errors import RulesConfigError
from diet_planner.domain.rules import RulesConfig

_logger = logging.getLogger(__name__)

_ENGLISH_RULES: dict[str, object] = {
    "locale": "en",
    "group_keywords": {
        "protein": [
            "chicken",
            "beef",
            "pork",
            "turkey",
            "lamb",
            "meat",
            "steak",
            "loin",
            "liver",
            "ham",
            "fish",
            "tuna",
            "salmon",
            "tilapia",
            "trout",
            "cod",
            "sardine",
            "shrimp",
            "mussel",
            "squid",
            "egg",
            "tofu",
            "whey",
            "protein",
        ],
        "carbohydrate": [
            "rice",
            "potato",
            "sweet potato",
            "cassava",
            "oat",
            "oatmeal",
            "bread",
            "toast",
            "pasta",
            "noodle",
            "spaghetti",
            "quinoa",
            "corn",
            "tortilla",
            "cereal",
            "granola",
            "cracker",
            "lentil",
            "bean",
            "chickpea",
            "barley",
            "couscous",
            "plantain",
        ],
        "vegetable": [
            "tomato",
            "onion",
            "carrot",
            "lettuce",
            "spinach",
            "broccoli",
            "cucumber",
            "squash",
            "pumpkin",
            "zucchini",
            "bell pepper",
            "cabbage",
            "celery",
            "green bean",
            "chard",
            "beet",
            "cauliflower",
            "eggplant",
            "asparagus",
            "kale",
            "mushroom",
            "pea",
            "leek",
            "salad",
        ],
        "fruit": [
            "apple",
            "banana",
            "orange",
            "pear",
            "grape",
            "strawberry",
            "strawberries",
            "mango",
            "pineapple",
            "papaya",
            "melon",
            "peach",
            "kiwi",
            "lemon",
            "lime",
            "tangerine",
            "blueberry",
            "blueberries",
            "cherry",
            "cherries",
            "plum",
        ],
        "dairy": ["milk", "cheese", "yogurt", "yoghurt", "kefir", "cream", "curd"],
        "fat": [
            "oil",
            "butter",
            "avocado",
            "margarine",
            "lard",
            "mayonnaise",
            "nut",
            "almond",
            "walnut",
            "olive",
        ],
    },
    "solid_group_denylist": [
        "beverage",
        "drink",
        "flour",
        "juice",
        "nectar",
        "soda",
        "syrup",
        "broth",
        "bouillon",
        "sauce",
        "starch",
        "extract",
    ],
    "disambiguation": [
        {"term": "potato", "prefer": ["white"], "avoid": ["sweet"]},
        {"term": "rice", "prefer": ["white"], "avoid": ["whole", "brown"]},
        {"term": "chicken", "prefer": ["breast"]},
        {"term": "egg", "prefer": ["whole"], "avoid": ["white", "yolk"]},
    ],
    "fillers": {
        "protein": [
            {"terms": ["Egg", "Boiled egg"], "relative_weight": 0.25},
            {"terms": ["Cheese, fresh", "Cheese"], "relative_weight": 0.25},
            {"terms": ["Tuna, canned", "Tuna"], "relative_weight": 0.25},
        ],
        "carbohydrate": [
            {"terms": ["Potato, boiled", "Potato"], "relative_weight": 0.25},
            {"terms": ["Rice, cooked", "Rice"], "relative_weight": 0.25},
            {"terms": ["Corn"], "relative_weight": 0.25},
            {"terms": ["Sweet potato"], "relative_weight": 0.25},
        ],
        "vegetable": [
            {"terms": ["Lettuce", "Tomato"], "relative_weight": 0.2},
            {"terms": ["Cucumber", "Lemon"], "relative_weight": 0.2},
            {"terms": ["Green beans", "Carrot"], "relative_weight": 0.2},
        ],
    },
    "post_hoc_filler_grams": {"protein": 80, "carbohydrate": 100, "vegetable": 100},
    "allergen_aliases": {
        "milk": "dairy",
        "lactose": "dairy",
        "cow's milk": "dairy",
        "dairy products": "dairy",
        "wheat": "gluten",
        "eggs": "egg",
        "shellfish": "seafood",
        "crustacean": "seafood",
        "crustaceans": "seafood",
        "peanuts": "peanut",
        "nuts": "tree nut",
        "tree nuts": "tree nut",
        "soya": "soy",
    },
    "allergen_derivatives": {
        "dairy": [
            "milk",
            "cheese",
            "yogurt",
            "yoghurt",
            "butter",
            "cream",
            "casein",
            "whey",
            "lactose",
            "kefir",
            "ice cream",
            "curd",
            "ghee",
        ],
        "gluten": [
            "wheat",
            "bread",
            "pasta",
            "flour",
            "barley",
            "rye",
            "cracker",
            "noodle",
            "spaghetti",
            "cookie",
            "cake",
            "couscous",
            "bagel",
            "toast",
        ],
        "egg": ["egg", "mayonnaise", "meringue", "albumin"],
        "fish": [
            "fish",
            "tuna",
            "salmon",
            "tilapia",
            "trout",
            "cod",
            "sardine",
            "anchovy",
            "mackerel",
        ],
        "seafood": [
            "shrimp",
            "prawn",
            "crab",
            "lobster",
            "mussel",
            "squid",
            "octopus",
            "clam",
            "oyster",
            "scallop",
        ],
        "peanut": ["peanut"],
        "tree nut": [
            "almond",
            "walnut",
            "hazelnut",
            "cashew",
            "pecan",
            "pistachio",
            "macadamia",
            "brazil nut",
        ],
        "soy": ["soy", "tofu", "edamame", "tempeh"],
        "sesame": ["sesame", "tahini"],
    },
    "allergen_direct_terms": {
        "dairy": ["milk", "cream"],
        "gluten": ["wheat", "flour", "bread", "pasta"],
        "egg": ["egg"],
        "fish": ["fish"],
        "seafood": ["shrimp", "prawn", "crab", "lobster"],
        "peanut": ["peanut"],
        "tree nut": ["almond", "walnut", "hazelnut", "cashew"],
        "soy": ["soy", "tofu"],
        "sesame": ["sesame"],
    },
    "pathology_exclusions": {
        "diabet": [
            "sugar",
            "honey",
            "candy",
            "soda",
            "syrup",
            "jam",
            "cake",
            "cookie",
            "chocolate",
            "sweetened",
        ],
        "hypertens": [
            "salt",
            "ham",
            "bacon",
            "sausage",
            "salami",
            "cured",
            "pickled",
            "soy sauce",
            "bouillon",
            "chips",
        ],
        "renal": ["salt", "bouillon", "cured", "ham", "bacon", "sausage", "banana"],
        "kidney disease": ["salt", "bouillon", "cured", "ham", "bacon", "sausage"],
        "dyslipidem": ["bacon", "sausage", "lard", "butter", "cream", "fried", "chips"],
        "cholesterol": ["bacon", "sausage", "lard", "butter", "cream", "fried"],
        "gout": ["liver", "kidney", "sardine", "anchovy", "mackerel", "shrimp", "mussel"],
        "hyperuric": ["liver", "kidney", "sardine", "anchovy", "shrimp", "mussel"],
        "celiac": [
            "wheat",
            "bread",
            "pasta",
            "flour",
            "barley",
            "rye",
            "cracker",
            "noodle",
            "spaghetti",
            "cookie",
            "cake",
            "couscous",
        ],
        "obes": ["sugar", "candy", "soda", "syrup", "chips", "fried", "cake", "lard"],
        "cardiovascular": ["bacon", "sausage", "lard", "salt", "salami", "cured"],
    },
    "texture_restricted_levels": ["puree", "minced"],
    "texture_exclusion_terms": [
        "nuts",
        "almond",
        "walnut",
        "hazelnut",
        "cashew",
        "pistachio",
        "pecan",
        "macadamia",
        "peanut",
        "seed",
        "popcorn",
        "chips",
        "cracker",
        "crispy",
        "granola",
        "toast",
        "jerky",
        "celery",
        "pineapple",
        "corn",
    ],
    "risk_triggers": {
        "high_sodium": ["hypertens", "renal", "kidney"],
        "high_fat": ["dyslipidem", "cholesterol", "obes", "cardiovascular"],
        "high_purine": ["gout", "hyperuric"],
    },
    "name_caps": [
        {"pattern": "protein powder", "cap_g": 30},
        {"pattern": "whey", "cap_g": 30},
        {"pattern": "cocoa", "cap_g": 15},
        {"pattern": "cacao", "cap_g": 15},
        {"pattern": "chocolate", "cap_g": 30},
        {"pattern": "peanut butter", "cap_g": 30},
        {"pattern": "peanut", "cap_g": 30},
        {"pattern": "almond", "cap_g": 30},
        {"pattern": "walnut", "cap_g": 30},
        {"pattern": "hazelnut", "cap_g": 30},
        {"pattern": "cashew", "cap_g": 30},
        {"pattern": "garlic", "cap_g": 5},
        {"pattern": "oil", "cap_g": 15},
        {"pattern": "onion", "cap_g": 60},
        {"pattern": "egg", "cap_g": 150},
        {"pattern": "oat", "cap_g": 80},
        {"pattern": "cereal", "cap_g": 80},
        {"pattern": "granola", "cap_g": 80},
        {"pattern": "sweet potato", "cap_g": 250},
        {"pattern": "potato", "cap_g": 250},
        {"pattern": "cassava", "cap_g": 250},
        {"pattern": "rice", "cap_g": 250},
        {"pattern": "quinoa", "cap_g": 200},
        {"pattern": "pasta", "cap_g": 200},
        {"pattern": "noodle", "cap_g": 200},
        {"pattern": "bread", "cap_g": 120},
    ],
    "group_caps": {
        "fruit": 200,
        "dairy": 250,
        "fat": 15,
        "vegetable": 150,
        "protein": 180,
    },
    "default_cap_g": 500,
    "dense_carb_patterns": ["rice", "potato", "bread", "pasta", "noodle", "quinoa"],
    "staple_carb_patterns": [
        "rice",
        "potato",
        "sweet potato",
        "oat",
        "pasta",
        "noodle",
        "quinoa",
        "cassava",
        "bread",
        "legume",
        "lentil",
        "bean",
        "chickpea",
    ],
    "main_protein_patterns": [
        "chicken",
        "beef",
        "meat",
        "fish",
        "tuna",
        "turkey",
        "loin",
        "steak",
        "pork",
        "salmon",
        "tilapia",
    ],
    "fixed_ingredient_patterns": [
        "oil",
        "garlic",
        "salt",
        "pepper",
        "oregano",
        "cumin",
        "lemon",
        "lime",
        "vinegar",
    ],
    "uniform_scale_excluded_patterns": ["salt", "garlic", "pepper"],
    "staple_side_terms": ["Rice", "Pasta", "Quinoa", "Potato", "Bread"],
    "gastric_ceilings_ml": {"child": 300, "elderly": 400, "adult": 600},
    "raw_groups": ["fruit", "dairy", "fat"],
    "prepared_state_terms": [
        "cooked",
        "boiled",
        "grilled",
        "fried",
        "baked",
        "steamed",
        "stewed",
        "roasted",
        "sauteed",
        "toasted",
        "canned",
    ],
    "yield_factors": {
        "raw": {
            "protein": 1.0,
            "carbohydrate": 1.0,
            "fat": 1.0,
            "vegetable": 1.0,
            "fruit": 1.0,
            "dairy": 1.0,
            "other": 1.0,
        },
        "boiled": {
            "protein": 0.80,
            "carbohydrate": 2.6,
            "fat": 0.95,
            "vegetable": 0.85,
            "fruit": 1.0,
            "dairy": 1.0,
            "other": 1.0,
        },
        "grilled": {
            "protein": 0.75,
            "carbohydrate": 0.90,
            "fat": 0.70,
            "vegetable": 0.80,
            "fruit": 1.0,
            "dairy": 1.0,
            "other": 0.95,
        },
        "fried": {
            "protein": 0.70,
            "carbohydrate": 0.85,
            "fat": 0.65,
            "vegetable": 0.75,
            "fruit": 0.90,
            "dairy": 1.0,
            "other": 0.90,
        },
        "sauteed": {
            "protein": 0.75,
            "carbohydrate": 0.95,
            "fat": 0.80,
            "vegetable": 0.85,
            "fruit": 0.95,
            "dairy": 1.0,
            "other": 0.95,
        },
        "baked": {
            "protein": 0.78,
            "carbohydrate": 0.95,
            "fat": 0.85,
            "vegetable": 0.82,
            "fruit": 0.92,
            "dairy": 1.0,
            "other": 0.95,
        },
        "steamed": {
            "protein": 0.85,
            "carbohydrate": 2.5,
            "fat": 0.95,
            "vegetable": 0.90,
            "fruit": 1.0,
            "dairy": 1.0,
            "other": 1.0,
        },
    },
    "tuber_patterns": ["potato", "sweet potato", "cassava"],
    "grain_patterns": ["rice", "quinoa", "oat", "lentil", "bean", "chickpea", "barley"],
    "tuber_yield": 1.05,
    "grain_yield": 2.8,
    "iron_terms": ["liver", "beef", "lentil", "spinach", "bean", "chickpea", "kidney"],
    "calcium_terms": ["milk", "cheese", "yogurt", "yoghurt", "kefir"],
    "insulin_advice": {
        "rapid": (
            "Rapid-acting insulin: inject about 30 minutes before meals and keep "
            "carbohydrate portions consistent from day to day."
        ),
        "ultra_rapid": (
            "Ultra-rapid insulin: inject right before eating and match the dose to "
            "the carbohydrate content of each meal."
        ),
    },
    "default_meal_moments": [
        {"name": "Breakfast", "slot": "breakfast", "ratio": 0.25},
        {"name": "Lunch", "slot": "lunch", "ratio": 0.35},
        {"name": "Dinner", "slot": "dinner", "ratio": 0.25},
        {"name": "Snack", "slot": "snack", "ratio": 0.15},
    ],
    "single_meal_moment": {"name": "Single meal", "slot": "lunch", "ratio": 1.0},
    "default_micronutrient_floors": {
        "calcium_mg": 1000,
        "phosphorus_mg": 700,
        "zinc_mg": 11,
        "iron_mg": 14,
        "vitamin_a_ug": 900,
        "thiamine_mg": 1.2,
        "riboflavin_mg": 1.3,
        "niacin_mg": 16,
        "vitamin_c_mg": 90,
        "folate_ug": 400,
        "potassium_mg": 4700,
    },
    "unit_rules": [
        {"pattern": "egg", "unit": "units", "grams_per_unit": 60, "countable": True},
        {"pattern": "apple", "unit": "units", "grams_per_unit": 180, "countable": True},
        {"pattern": "banana", "unit": "units", "grams_per_unit": 120, "countable": True},
        {"pattern": "orange", "unit": "units", "grams_per_unit": 200, "countable": True},
        {"pattern": "bread", "unit": "slices", "grams_per_unit": 40, "countable": True},
        {"pattern": "tuna", "unit": "cans", "grams_per_unit": 170, "countable": True},
        {"pattern": "milk", "unit": "l", "grams_per_unit": 1000},
        {"pattern": "oil", "unit": "l", "grams_per_unit": 900},
    ],
}

_REGISTRY: dict[str, dict[str, object]] = {"en": _ENGLISH_RULES}


def available_locales() -> list[str]:
    """Return the locales with a built-in rule set."""
    return sorted(_REGISTRY)


def load_rules(locale: str = "en", path: str | None = None) -> RulesConfig:
    """Build the rule set for a locale, optionally overridden by a JSON file.

    Top-level keys in the JSON file replace the corresponding built-in tables.
    """
    base = _REGISTRY.get(locale.lower())
    if base is None:
        raise RulesConfigError(f"No rule set registered for locale '{locale}'")
    data = dict(base)
    if path:
        data.update(_read_overrides(Path(path)))
        _logger.info("Loaded rule overrides from %s", path)
    try:
        return RulesConfig.model_validate(data)
    except ValidationError as exc:
        raise RulesConfigError(f"Invalid rule set for locale '{locale}': {exc}") from exc


def _read_overrides(path: Path) -> dict[str, object]:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise RulesConfigError(f"Cannot read rules file {path}: {exc}") from exc
    if not isinstance(payload, dict):
        raise RulesConfigError(f"Rules file {path} must contain a JSON object")
    return payload
