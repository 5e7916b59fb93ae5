"""Domain models for catalog foods."""

from dataclasses import dataclass
from enum import Enum


class FoodGroup(str, Enum):
    """Coarse food category used for balance and capping rules."""

    PROTEIN = "protein"
    CARBOHYDRATE = "carbohydrate"
    VEGETABLE = "vegetable"
    FRUIT = "fruit"
    DAIRY = "dairy"
    FAT = "fat"
    OTHER = "other"


SOLID_FOOD_GROUPS = frozenset(
    {
        FoodGroup.PROTEIN,
        FoodGroup.CARBOHYDRATE,
        FoodGroup.VEGETABLE,
        FoodGroup.FRUIT,
    }
)

BALANCED_PLATE_GROUPS = (
    FoodGroup.PROTEIN,
    FoodGroup.CARBOHYDRATE,
    FoodGroup.VEGETABLE,
)


class PreparationMethod(str, Enum):
    """Cooking method used to convert raw weight into cooked weight."""

    RAW = "raw"
    BOILED = "boiled"
    GRILLED = "grilled"
    FRIED = "fried"
    SAUTEED = "sauteed"
    BAKED = "baked"
    STEAMED = "steamed"


MICRONUTRIENT_FIELDS = (
    "calcium_mg",
    "phosphorus_mg",
    "zinc_mg",
    "iron_mg",
    "vitamin_a_ug",
    "thiamine_mg",
    "riboflavin_mg",
    "niacin_mg",
    "vitamin_c_mg",
    "folate_ug",
    "sodium_mg",
    "potassium_mg",
)


@dataclass(frozen=True)
class FoodItem:
    """Catalog entry with nutrient values per 100 g of raw edible portion."""

    id: str
    name: str
    energy_kcal: float
    protein_g: float
    fat_g: float
    carbs_g: float
    fiber_g: float = 0.0
    calcium_mg: float = 0.0
    phosphorus_mg: float = 0.0
    zinc_mg: float = 0.0
    iron_mg: float = 0.0
    vitamin_a_ug: float = 0.0
    thiamine_mg: float = 0.0
    riboflavin_mg: float = 0.0
    niacin_mg: float = 0.0
    vitamin_c_mg: float = 0.0
    folate_ug: float = 0.0
    sodium_mg: float = 0.0
    potassium_mg: float = 0.0
    waste_factor: float = 1.0

    def calories_for(self, grams: float) -> float:
        """Return the energy contributed by a portion of this food."""
        return grams * self.energy_kcal / 100.0
