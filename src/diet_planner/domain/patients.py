"""Domain models for patient constraints and meal scheduling."""

from dataclasses import dataclass
from enum import Enum

from diet_planner.domain.recipes import MealSlot

CHILD_AGE_LIMIT = 18
ELDERLY_AGE_FROM = 60


class AllergySeverity(str, Enum):
    """How strictly an allergen must be excluded."""

    FATAL = "fatal"
    INTOLERANCE = "intolerance"
    PREFERENCE = "preference"


class TextureLevel(str, Enum):
    """Texture modification required for dysphagia patients."""

    NORMAL = "normal"
    SOFT = "soft"
    MINCED = "minced"
    PUREE = "puree"
    LIQUID = "liquid"


class PatientType(str, Enum):
    """Age class used for gastric volume ceilings and growth warnings."""

    ADULT = "adult"
    ELDERLY = "elderly"
    CHILD = "child"

    @classmethod
    def _missing_(cls, value: object) -> "PatientType | None":
        if isinstance(value, str):
            return _PATIENT_TYPE_ALIASES.get(value.strip().lower())
        return None


_PATIENT_TYPE_ALIASES = {
    "adulto": PatientType.ADULT,
    "geriatrico": PatientType.ELDERLY,
    "geriátrico": PatientType.ELDERLY,
    "pediatrico": PatientType.CHILD,
    "pediátrico": PatientType.CHILD,
    "pediatric": PatientType.CHILD,
    "geriatric": PatientType.ELDERLY,
}


class InsulinType(str, Enum):
    """Insulin regimen of a diabetic patient."""

    NONE = "none"
    RAPID = "rapid"
    ULTRA_RAPID = "ultra_rapid"


@dataclass(frozen=True)
class AllergyEntry:
    """Allergen with its clinical severity."""

    allergen: str
    severity: AllergySeverity


@dataclass(frozen=True)
class MealMoment:
    """Named meal slot of the day with its share of daily calories."""

    name: str
    slot: MealSlot
    ratio: float
    enabled: bool = True


@dataclass(frozen=True)
class PatientConstraints:
    """Preferences and medical constraints applied to a generation request."""

    disliked_foods: tuple[str, ...] = ()
    pathologies: tuple[str, ...] = ()
    allergies: tuple[AllergyEntry, ...] = ()
    texture: TextureLevel = TextureLevel.NORMAL
    medications: tuple[str, ...] = ()
    patient_type: PatientType | None = None
    age: int | None = None
    insulin: InsulinType = InsulinType.NONE
    meal_moments: tuple[MealMoment, ...] = ()

    def resolved_patient_type(self) -> PatientType:
        """Return the explicit patient type, or infer it from age."""
        if self.patient_type is not None:
            return self.patient_type
        if self.age is not None and self.age < CHILD_AGE_LIMIT:
            return PatientType.CHILD
        if self.age is not None and self.age >= ELDERLY_AGE_FROM:
            return PatientType.ELDERLY
        return PatientType.ADULT
