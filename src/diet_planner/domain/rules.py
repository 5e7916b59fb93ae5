"""Injectable rule tables that drive the planning pipeline."""

from pydantic import BaseModel, ConfigDict, Field

from diet_planner.domain.foods import FoodGroup, PreparationMethod
from diet_planner.domain.patients import InsulinType, PatientType
from diet_planner.domain.recipes import MealSlot, RiskMarker


class _FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class FillerSpec(_FrozenModel):
    """Generic ingredient used to complete an unbalanced meal."""

    terms: list[str]
    relative_weight: float = 0.25


class DisambiguationRule(_FrozenModel):
    """Preference applied when a search term matches several foods."""

    term: str
    prefer: list[str] = Field(default_factory=list)
    avoid: list[str] = Field(default_factory=list)


class CapRule(_FrozenModel):
    """Hard portion ceiling for foods whose name contains ``pattern``."""

    pattern: str
    cap_g: float


class UnitRule(_FrozenModel):
    """Practical purchase unit for shopping lists."""

    pattern: str
    unit: str
    grams_per_unit: float
    countable: bool = False


class MomentSpec(_FrozenModel):
    """Default meal moment of the day."""

    name: str
    slot: MealSlot
    ratio: float


class RulesConfig(_FrozenModel):
    """All locale-dependent keyword tables and numeric thresholds."""

    locale: str = "en"

    group_keywords: dict[FoodGroup, list[str]]
    solid_group_denylist: list[str]
    disambiguation: list[DisambiguationRule] = Field(default_factory=list)

    fillers: dict[FoodGroup, list[FillerSpec]]
    post_hoc_filler_grams: dict[FoodGroup, float]
    zero_energy_portion_g: float = 50.0

    allergen_aliases: dict[str, str] = Field(default_factory=dict)
    allergen_derivatives: dict[str, list[str]] = Field(default_factory=dict)
    allergen_direct_terms: dict[str, list[str]] = Field(default_factory=dict)
    pathology_exclusions: dict[str, list[str]] = Field(default_factory=dict)
    texture_restricted_levels: list[str] = Field(default_factory=list)
    texture_exclusion_terms: list[str] = Field(default_factory=list)
    risk_triggers: dict[RiskMarker, list[str]] = Field(default_factory=dict)

    name_caps: list[CapRule]
    group_caps: dict[FoodGroup, float]
    default_cap_g: float = 500.0
    dense_carb_patterns: list[str]
    staple_carb_patterns: list[str]
    main_protein_patterns: list[str]
    fixed_ingredient_patterns: list[str]
    uniform_scale_excluded_patterns: list[str]
    staple_side_terms: list[str] = Field(default_factory=list)

    rounding_step_g: float = 5.0
    min_scaled_quantity_g: float = 15.0
    redistribution_min_overflow_kcal: float = 10.0
    redistribution_min_headroom_g: float = 20.0
    protein_floor_g: float = 80.0
    protein_floor_slots: list[MealSlot] = Field(
        default_factory=lambda: [MealSlot.LUNCH, MealSlot.DINNER]
    )
    vegetable_floor_g: float = 30.0
    fat_plating_cap_g: float = 15.0
    tiny_carb_g: float = 30.0

    scalable_min_g: float = 10.0
    fixed_ingredient_min_g: float = 20.0
    fat_scalable_min_g: float = 5.0
    small_egg_max_g: float = 60.0
    egg_patterns: list[str] = Field(default_factory=lambda: ["egg"])
    general_scalable_min_g: float = 20.0

    force_adjust_slot_order: list[MealSlot] = Field(
        default_factory=lambda: [
            MealSlot.LUNCH,
            MealSlot.DINNER,
            MealSlot.BREAKFAST,
            MealSlot.SNACK,
        ]
    )
    force_adjust_min_gap_kcal: float = 10.0
    force_adjust_floor_g: float = 40.0
    force_adjust_min_change_g: float = 5.0
    uniform_scale_min_item_g: float = 20.0

    gastric_density: float = 1.2
    gastric_grace_ml: float = 20.0
    gastric_audit_margin_ml: float = 50.0
    gastric_ceilings_ml: dict[PatientType, float]

    raw_groups: list[FoodGroup]
    prepared_state_terms: list[str]
    yield_factors: dict[PreparationMethod, dict[FoodGroup, float]]
    tuber_patterns: list[str]
    grain_patterns: list[str]
    tuber_yield: float = 1.05
    grain_yield: float = 2.8

    iron_terms: list[str] = Field(default_factory=list)
    calcium_terms: list[str] = Field(default_factory=list)
    insulin_advice: dict[InsulinType, str] = Field(default_factory=dict)

    default_meal_moments: list[MomentSpec]
    single_meal_moment: MomentSpec
    default_micronutrient_floors: dict[str, float] = Field(default_factory=dict)
    unit_rules: list[UnitRule] = Field(default_factory=list)
