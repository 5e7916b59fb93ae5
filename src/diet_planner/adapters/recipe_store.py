"""Built-in recipe templates."""

from dataclasses import dataclass, field

from diet_planner.domain.foods import FoodGroup
from diet_planner.domain.recipes import IngredientRole, MealSlot, RecipeTemplate, RiskMarker

P = FoodGroup.PROTEIN
C = FoodGroup.CARBOHYDRATE
V = FoodGroup.VEGETABLE
F = FoodGroup.FRUIT
D = FoodGroup.DAIRY
G = FoodGroup.FAT

BREAKFAST = frozenset({MealSlot.BREAKFAST})
LUNCH = frozenset({MealSlot.LUNCH})
DINNER = frozenset({MealSlot.DINNER})
MAIN = frozenset({MealSlot.LUNCH, MealSlot.DINNER})
SNACK = frozenset({MealSlot.SNACK})


def _role(group: FoodGroup, terms: tuple[str, ...], weight: float) -> IngredientRole:
    return IngredientRole(food_group=group, candidate_terms=terms, relative_weight=weight)


def _recipe(
    recipe_id: str,
    name: str,
    slots: frozenset[MealSlot],
    roles: list[IngredientRole],
    *markers: RiskMarker,
) -> RecipeTemplate:
    return RecipeTemplate(
        id=recipe_id,
        name=name,
        slots=slots,
        roles=tuple(roles),
        risk_markers=frozenset(markers),
    )


RECIPE_TEMPLATES: tuple[RecipeTemplate, ...] = (
    _recipe(
        "oatmeal-fruit",
        "Oatmeal with Fruit",
        BREAKFAST,
        [
            _role(C, ("Oats", "Oatmeal"), 0.8),
            _role(D, ("Milk", "Yogurt"), 0.5),
            _role(F, ("Banana", "Apple", "Strawberry"), 0.5),
        ],
    ),
    _recipe(
        "scrambled-eggs-toast",
        "Scrambled Eggs on Toast",
        BREAKFAST,
        [
            _role(P, ("Egg",), 0.8),
            _role(C, ("Bread, whole wheat", "Bread"), 1.0),
            _role(V, ("Tomato", "Spinach"), 0.3),
            _role(G, ("Oil, olive", "Oil"), 0.1),
        ],
    ),
    _recipe(
        "avocado-toast-egg",
        "Avocado Toast with Egg",
        BREAKFAST,
        [
            _role(C, ("Bread",), 1.0),
            _role(G, ("Avocado",), 0.7),
            _role(P, ("Egg", "Cheese"), 0.5),
        ],
    ),
    _recipe(
        "quinoa-porridge",
        "Quinoa Porridge with Apple",
        BREAKFAST,
        [
            _role(C, ("Quinoa",), 1.0),
            _role(F, ("Apple", "Pineapple"), 0.5),
            _role(D, ("Milk", "Yogurt"), 0.3),
        ],
    ),
    _recipe(
        "sweet-potato-hash",
        "Sweet Potato Hash",
        BREAKFAST,
        [
            _role(C, ("Sweet potato",), 1.0),
            _role(P, ("Egg", "Turkey"), 0.6),
            _role(V, ("Onion", "Bell pepper"), 0.2),
            _role(G, ("Oil",), 0.1),
        ],
    ),
    _recipe(
        "vegetable-omelette",
        "Vegetable Omelette with Oats",
        BREAKFAST,
        [
            _role(P, ("Egg",), 0.8),
            _role(V, ("Spinach", "Carrot"), 0.5),
            _role(C, ("Oats", "Flour"), 0.2),
            _role(G, ("Oil",), 0.2),
        ],
    ),
    _recipe(
        "breakfast-burrito",
        "Breakfast Burrito",
        BREAKFAST,
        [
            _role(C, ("Tortilla, corn", "Tortilla"), 1.0),
            _role(P, ("Egg",), 0.6),
            _role(V, ("Tomato", "Onion"), 0.3),
            _role(D, ("Cheese",), 0.2),
        ],
        RiskMarker.HIGH_SODIUM,
    ),
    _recipe(
        "yogurt-parfait",
        "Yogurt Parfait",
        frozenset({MealSlot.BREAKFAST, MealSlot.SNACK}),
        [
            _role(D, ("Yogurt",), 1.0),
            _role(C, ("Oats", "Granola"), 0.5),
            _role(F, ("Strawberry", "Banana"), 0.5),
        ],
    ),
    _recipe(
        "ham-cheese-sandwich",
        "Ham and Cheese Sandwich",
        BREAKFAST,
        [
            _role(C, ("Bread",), 1.0),
            _role(P, ("Ham", "Turkey"), 0.6),
            _role(D, ("Cheese",), 0.3),
            _role(V, ("Lettuce", "Tomato"), 0.2),
        ],
        RiskMarker.HIGH_SODIUM,
        RiskMarker.HIGH_FAT,
    ),
    _recipe(
        "beef-stir-fry",
        "Beef Stir-Fry with Rice",
        MAIN,
        [
            _role(P, ("Beef, lean", "Beef"), 1.0),
            _role(C, ("Potato, white", "Potato"), 0.6),
            _role(C, ("Rice, white", "Rice"), 0.4),
            _role(V, ("Onion", "Tomato"), 0.5),
            _role(G, ("Oil, vegetable", "Oil"), 0.15),
        ],
        RiskMarker.HIGH_SODIUM,
    ),
    _recipe(
        "chicken-rice",
        "Chicken and Rice",
        LUNCH,
        [
            _role(P, ("Chicken, breast", "Chicken"), 1.0),
            _role(C, ("Rice",), 0.8),
            _role(V, ("Carrot", "Peas", "Spinach"), 0.5),
            _role(G, ("Oil",), 0.15),
        ],
    ),
    _recipe(
        "beef-bean-stew",
        "Beef Stew with Beans",
        LUNCH,
        [
            _role(P, ("Beef",), 1.0),
            _role(C, ("Beans", "Lentils"), 0.6),
            _role(C, ("Rice",), 0.4),
            _role(V, ("Squash", "Carrot"), 0.3),
            _role(G, ("Oil",), 0.1),
        ],
    ),
    _recipe(
        "squash-potato-chowder",
        "Squash and Potato Chowder",
        MAIN,
        [
            _role(V, ("Squash", "Pumpkin"), 1.0),
            _role(C, ("Potato",), 0.5),
            _role(C, ("Rice",), 0.4),
            _role(D, ("Cheese, fresh", "Milk"), 0.3),
            _role(C, ("Corn",), 0.2),
        ],
    ),
    _recipe(
        "fish-ceviche",
        "Fish Ceviche with Sweet Potato",
        LUNCH,
        [
            _role(P, ("Fish, white", "Fish"), 1.0),
            _role(C, ("Sweet potato", "Cassava", "Potato"), 0.7),
            _role(C, ("Corn",), 0.3),
            _role(V, ("Onion",), 0.5),
        ],
    ),
    _recipe(
        "lentils-grilled-fish",
        "Lentils with Grilled Fish",
        LUNCH,
        [
            _role(P, ("Fish",), 1.0),
            _role(C, ("Lentils",), 0.7),
            _role(C, ("Rice",), 0.4),
            _role(V, ("Onion", "Tomato"), 0.2),
            _role(G, ("Oil",), 0.15),
        ],
    ),
    _recipe(
        "pasta-bolognese",
        "Pasta Bolognese",
        MAIN,
        [
            _role(C, ("Pasta", "Noodles"), 1.0),
            _role(P, ("Beef, ground", "Beef"), 0.7),
            _role(V, ("Tomato",), 0.5),
            _role(V, ("Onion",), 0.2),
            _role(G, ("Oil, olive", "Oil"), 0.1),
        ],
    ),
    _recipe(
        "fried-chicken-fries",
        "Fried Chicken with Fries",
        LUNCH,
        [
            _role(P, ("Chicken",), 1.0),
            _role(C, ("Potato",), 1.0),
            _role(V, ("Lettuce",), 0.3),
            _role(G, ("Oil",), 0.3),
        ],
        RiskMarker.HIGH_FAT,
    ),
    _recipe(
        "liver-onions",
        "Liver and Onions",
        MAIN,
        [
            _role(P, ("Liver",), 1.0),
            _role(C, ("Potato",), 0.8),
            _role(V, ("Onion",), 0.4),
            _role(G, ("Oil",), 0.1),
        ],
        RiskMarker.HIGH_PURINE,
    ),
    _recipe(
        "seafood-rice",
        "Seafood Rice",
        LUNCH,
        [
            _role(P, ("Shrimp", "Mussels", "Squid"), 1.0),
            _role(C, ("Rice",), 1.0),
            _role(V, ("Bell pepper", "Onion"), 0.3),
            _role(G, ("Oil",), 0.15),
        ],
        RiskMarker.HIGH_PURINE,
        RiskMarker.HIGH_SODIUM,
    ),
    _recipe(
        "turkey-quinoa-bowl",
        "Turkey Quinoa Bowl",
        MAIN,
        [
            _role(P, ("Turkey",), 1.0),
            _role(C, ("Quinoa",), 0.8),
            _role(V, ("Broccoli", "Spinach"), 0.5),
            _role(G, ("Avocado", "Oil"), 0.2),
        ],
    ),
    _recipe(
        "chicken-vegetable-soup",
        "Chicken Vegetable Soup",
        DINNER,
        [
            _role(P, ("Chicken",), 0.8),
            _role(C, ("Noodles", "Pasta", "Potato"), 0.6),
            _role(V, ("Carrot", "Celery"), 0.4),
        ],
    ),
    _recipe(
        "grilled-fish-salad",
        "Grilled Fish with Salad",
        DINNER,
        [
            _role(P, ("Fish",), 1.0),
            _role(V, ("Lettuce", "Cucumber"), 0.5),
            _role(V, ("Tomato",), 0.3),
            _role(C, ("Potato", "Sweet potato"), 0.5),
            _role(G, ("Oil, olive", "Oil"), 0.1),
        ],
    ),
    _recipe(
        "spinach-tortilla",
        "Spinach Tortilla",
        DINNER,
        [
            _role(P, ("Egg",), 0.8),
            _role(V, ("Spinach", "Chard"), 0.8),
            _role(C, ("Potato",), 0.4),
            _role(G, ("Oil",), 0.1),
        ],
    ),
    _recipe(
        "tuna-salad",
        "Tuna Salad",
        MAIN,
        [
            _role(P, ("Tuna",), 1.0),
            _role(V, ("Lettuce", "Tomato"), 0.6),
            _role(C, ("Corn", "Potato"), 0.4),
            _role(G, ("Oil, olive", "Oil"), 0.1),
        ],
        RiskMarker.HIGH_SODIUM,
    ),
    _recipe(
        "pork-chop-rice",
        "Pork Chop with Rice",
        DINNER,
        [
            _role(P, ("Pork",), 1.0),
            _role(C, ("Rice",), 0.7),
            _role(V, ("Broccoli", "Green beans"), 0.4),
        ],
        RiskMarker.HIGH_FAT,
    ),
    _recipe(
        "chicken-fajitas",
        "Chicken Fajitas",
        DINNER,
        [
            _role(P, ("Chicken, breast", "Chicken"), 1.0),
            _role(C, ("Tortilla",), 0.7),
            _role(V, ("Bell pepper", "Onion"), 0.5),
            _role(G, ("Oil",), 0.1),
        ],
    ),
    _recipe(
        "quinoa-stir-fry",
        "Vegetable Quinoa Stir-Fry",
        MAIN,
        [
            _role(C, ("Quinoa", "Rice"), 1.0),
            _role(V, ("Broccoli", "Carrot"), 0.6),
            _role(P, ("Tofu", "Egg"), 0.6),
            _role(G, ("Oil",), 0.1),
        ],
    ),
    _recipe(
        "fruit-yogurt",
        "Fruit and Yogurt",
        SNACK,
        [
            _role(D, ("Yogurt",), 0.6),
            _role(F, ("Apple", "Banana"), 0.4),
        ],
    ),
    _recipe(
        "peanut-banana-toast",
        "Peanut Butter Banana Toast",
        SNACK,
        [
            _role(C, ("Bread",), 0.5),
            _role(G, ("Peanut butter", "Peanut"), 0.2),
            _role(F, ("Banana",), 0.3),
        ],
    ),
    _recipe(
        "cheese-crackers",
        "Cheese and Crackers",
        SNACK,
        [
            _role(C, ("Crackers", "Bread"), 0.5),
            _role(D, ("Cheese",), 0.5),
        ],
        RiskMarker.HIGH_SODIUM,
    ),
    _recipe(
        "fresh-fruit-bowl",
        "Fresh Fruit Bowl",
        SNACK,
        [
            _role(F, ("Apple",), 0.5),
            _role(F, ("Orange", "Tangerine"), 0.5),
        ],
    ),
)


@dataclass(frozen=True)
class SnackIngredient:
    """Loosely-specified ingredient of a snack or dessert recipe."""

    terms: tuple[str, ...]
    weight: float
    food_group: FoodGroup | None = None


@dataclass(frozen=True)
class SnackRecipe:
    """Snack or dessert recipe that has not been normalised into a template."""

    id: str
    name: str
    ingredients: tuple[SnackIngredient, ...]


SNACK_RECIPES: tuple[SnackRecipe, ...] = (
    SnackRecipe(
        "chocolate-apple-muffins",
        "Chocolate Apple Muffins",
        (
            SnackIngredient(("Apple",), 0.3, F),
            SnackIngredient(("Banana",), 0.2, F),
            SnackIngredient(("Oats",), 0.2, C),
            SnackIngredient(("Egg",), 0.1, P),
            SnackIngredient(("Whey protein", "Protein powder"), 0.1, P),
            SnackIngredient(("Cocoa powder", "Cocoa"), 0.1),
        ),
    ),
    SnackRecipe(
        "savory-pizza-muffins",
        "Savory Pizza Muffins",
        (
            SnackIngredient(("Oats",), 0.4, C),
            SnackIngredient(("Egg white", "Egg"), 0.3, P),
            SnackIngredient(("Turkey", "Ham"), 0.2, P),
            SnackIngredient(("Cheese",), 0.1, D),
        ),
    ),
    SnackRecipe(
        "apple-pie-bites",
        "Apple Pie Bites",
        (
            SnackIngredient(("Apple",), 0.4, F),
            SnackIngredient(("Egg",), 0.3, P),
            SnackIngredient(("Oats",), 0.2, C),
            SnackIngredient(("Yogurt",), 0.1, D),
        ),
    ),
    SnackRecipe(
        "banana-oat-cookies",
        "Banana Oat Cookies",
        (
            SnackIngredient(("Banana",), 0.5, F),
            SnackIngredient(("Oats",), 0.4, C),
            SnackIngredient(("Honey",), 0.1),
        ),
    ),
    SnackRecipe(
        "carrot-cake-donut",
        "Carrot Cake Donut",
        (
            SnackIngredient(("Carrot",), 0.3, V),
            SnackIngredient(("Oats",), 0.3, C),
            SnackIngredient(("Egg",), 0.2, P),
            SnackIngredient(("Walnut",), 0.1, G),
            SnackIngredient(("Yogurt",), 0.1, D),
        ),
    ),
    SnackRecipe(
        "protein-brownie",
        "Protein Brownie",
        (
            SnackIngredient(("Oats",), 0.4, C),
            SnackIngredient(("Egg",), 0.4, P),
            SnackIngredient(("Oil, olive", "Oil"), 0.1, G),
            SnackIngredient(("Yogurt",), 0.1, D),
        ),
    ),
)


def normalize_snack_recipe(recipe: SnackRecipe) -> RecipeTemplate:
    """Convert a snack recipe into a snack-slot template."""
    roles = tuple(
        IngredientRole(
            food_group=ingredient.food_group or FoodGroup.OTHER,
            candidate_terms=ingredient.terms,
            relative_weight=ingredient.weight,
        )
        for ingredient in recipe.ingredients
    )
    return RecipeTemplate(id=recipe.id, name=recipe.name, slots=SNACK, roles=roles)


@dataclass
class StaticRecipeStore:
    """Recipe store serving the built-in templates and normalised snacks."""

    templates: tuple[RecipeTemplate, ...] = RECIPE_TEMPLATES
    snack_recipes: tuple[SnackRecipe, ...] = SNACK_RECIPES
    _pool: list[RecipeTemplate] = field(default_factory=list, init=False, repr=False)

    def list_templates(self) -> list[RecipeTemplate]:
        """Return every template, snacks included."""
        if not self._pool:
            self._pool = [
                *self.templates,
                *(normalize_snack_recipe(recipe) for recipe in self.snack_recipes),
            ]
        return list(self._pool)
