"""Pydantic models for plan API payloads."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from diet_planner.domain.foods import FoodGroup, FoodItem, PreparationMethod
from diet_planner.domain.patients import (
    AllergyEntry,
    AllergySeverity,
    InsulinType,
    MealMoment,
    PatientConstraints,
    PatientType,
    TextureLevel,
)
from diet_planner.domain.plans import DailyPlan, MacroSplit, Meal, MealItem, NutritionalGoals
from diet_planner.domain.recipes import MealSlot
from diet_planner.services.shopping import ShoppingSection


class FoodPayload(BaseModel):
    """Catalog food supplied with a request, values per 100 g."""

    id: str
    name: str
    energy_kcal: float = Field(ge=0)
    protein_g: float = Field(default=0.0, ge=0)
    fat_g: float = Field(default=0.0, ge=0)
    carbs_g: float = Field(default=0.0, ge=0)
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
    waste_factor: float = Field(default=1.0, gt=0)

    def to_domain(self) -> FoodItem:
        """Convert to a catalog entry."""
        return FoodItem(**self.model_dump())


class AllergyPayload(BaseModel):
    """Allergen with its severity."""

    allergen: str
    severity: AllergySeverity = AllergySeverity.FATAL


class MealMomentPayload(BaseModel):
    """Meal moment configuration."""

    name: str
    slot: MealSlot
    ratio: float = Field(ge=0)
    enabled: bool = True


class PatientPayload(BaseModel):
    """Patient preferences and clinical constraints."""

    disliked_foods: list[str] = Field(default_factory=list)
    pathologies: list[str] = Field(default_factory=list)
    allergies: list[AllergyPayload] = Field(default_factory=list)
    texture: TextureLevel = TextureLevel.NORMAL
    medications: list[str] = Field(default_factory=list)
    patient_type: PatientType | None = None
    age: int | None = Field(default=None, ge=0)
    insulin: InsulinType = InsulinType.NONE
    meal_moments: list[MealMomentPayload] = Field(default_factory=list)

    @field_validator("patient_type", mode="before")
    @classmethod
    def _parse_patient_type(cls, value: object) -> object:
        if isinstance(value, str):
            return PatientType(value)
        return value

    def to_domain(self, default_moments: list[MealMoment] | None = None) -> PatientConstraints:
        """Convert to patient constraints, using ``default_moments`` when none are given."""
        moments = [
            MealMoment(
                name=moment.name,
                slot=moment.slot,
                ratio=moment.ratio,
                enabled=moment.enabled,
            )
            for moment in self.meal_moments
        ]
        return PatientConstraints(
            disliked_foods=tuple(self.disliked_foods),
            pathologies=tuple(self.pathologies),
            allergies=tuple(
                AllergyEntry(allergen=entry.allergen, severity=entry.severity)
                for entry in self.allergies
            ),
            texture=self.texture,
            medications=tuple(self.medications),
            patient_type=self.patient_type,
            age=self.age,
            insulin=self.insulin,
            meal_moments=tuple(moments or default_moments or ()),
        )


class MacroSplitPayload(BaseModel):
    """Share of energy per macronutrient."""

    protein: float = 0.20
    carbohydrate: float = 0.50
    fat: float = 0.30


class GoalsPayload(BaseModel):
    """Daily nutritional targets."""

    target_calories: float
    macro_split: MacroSplitPayload = Field(default_factory=MacroSplitPayload)
    micronutrient_floors: dict[str, float] = Field(default_factory=dict)

    def to_domain(self) -> NutritionalGoals:
        """Convert to nutritional goals."""
        return NutritionalGoals(
            target_calories=self.target_calories,
            macro_split=MacroSplit(**self.macro_split.model_dump()),
            micronutrient_floors=dict(self.micronutrient_floors),
        )


class PlanRequest(BaseModel):
    """Request for a single day."""

    goals: GoalsPayload
    patient: PatientPayload = Field(default_factory=PatientPayload)
    day_label: str = "Day 1"
    seed: int | None = None
    foods: list[FoodPayload] | None = None


class WeekRequest(BaseModel):
    """Request for several independent days."""

    goals: GoalsPayload
    patient: PatientPayload = Field(default_factory=PatientPayload)
    day_labels: list[str] = Field(
        default_factory=lambda: [f"Day {number}" for number in range(1, 8)],
        min_length=1,
    )
    seed: int | None = None
    foods: list[FoodPayload] | None = None


class NutrientTotalsOut(BaseModel):
    """Aggregated nutrients."""

    model_config = ConfigDict(from_attributes=True)

    calories: int
    protein_g: float
    fat_g: float
    carbs_g: float
    fiber_g: float
    calcium_mg: float
    phosphorus_mg: float
    zinc_mg: float
    iron_mg: float
    vitamin_a_ug: float
    thiamine_mg: float
    riboflavin_mg: float
    niacin_mg: float
    vitamin_c_mg: float
    folate_ug: float
    sodium_mg: float
    potassium_mg: float


class MealItemOut(BaseModel):
    """Portion of one food."""

    food_id: str
    name: str
    food_group: FoodGroup
    quantity_g: float
    gross_quantity_g: float | None
    cooked_quantity_g: float | None
    waste_factor: float
    preparation_method: PreparationMethod | None
    calories: float

    @classmethod
    def from_domain(cls, item: MealItem) -> "MealItemOut":
        """Build from a meal item."""
        return cls(
            food_id=item.food.id,
            name=item.food.name,
            food_group=item.food_group,
            quantity_g=item.quantity_g,
            gross_quantity_g=item.gross_quantity_g,
            cooked_quantity_g=item.cooked_quantity_g,
            waste_factor=item.waste_factor,
            preparation_method=item.preparation_method,
            calories=round(item.calories, 1),
        )


class MealOut(BaseModel):
    """Composed meal."""

    label: str
    slot: MealSlot
    items: list[MealItemOut]
    stats: NutrientTotalsOut | None

    @classmethod
    def from_domain(cls, meal: Meal) -> "MealOut":
        """Build from a meal."""
        return cls(
            label=meal.label,
            slot=meal.slot,
            items=[MealItemOut.from_domain(item) for item in meal.items],
            stats=NutrientTotalsOut.model_validate(meal.stats) if meal.stats else None,
        )


class PlanOut(BaseModel):
    """Generated daily plan."""

    day_label: str
    target_calories: float
    meals: list[MealOut]
    stats: NutrientTotalsOut
    safety_warnings: list[str]
    within_tolerance: bool
    deviation: float

    @classmethod
    def from_domain(cls, plan: DailyPlan) -> "PlanOut":
        """Build from a daily plan."""
        return cls(
            day_label=plan.day_label,
            target_calories=plan.goals.target_calories,
            meals=[MealOut.from_domain(meal) for meal in plan.meals],
            stats=NutrientTotalsOut.model_validate(plan.stats),
            safety_warnings=list(plan.safety_warnings),
            within_tolerance=plan.within_tolerance,
            deviation=plan.deviation,
        )


class ShoppingItemOut(BaseModel):
    """Shopping line for one food."""

    model_config = ConfigDict(from_attributes=True)

    food_id: str
    name: str
    food_group: FoodGroup
    net_g: float
    gross_g: float
    cooked_g: float
    occurrences: int
    practical_quantity: str


class ShoppingSectionOut(BaseModel):
    """Shopping lines of one food group."""

    food_group: FoodGroup
    items: list[ShoppingItemOut]

    @classmethod
    def from_domain(cls, section: ShoppingSection) -> "ShoppingSectionOut":
        """Build from a shopping section."""
        return cls(
            food_group=section.food_group,
            items=[ShoppingItemOut.model_validate(item) for item in section.items],
        )


class FoodSummaryOut(BaseModel):
    """Catalog search hit."""

    id: str
    name: str
    energy_kcal: float
