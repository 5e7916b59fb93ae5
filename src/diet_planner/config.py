"""Application configuration."""

import os

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from diet_planner.domain.foods import PreparationMethod
from diet_planner.domain.patients import MealMoment
from diet_planner.domain.recipes import MealSlot

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    catalog_path: str | None = None
    catalog_encoding: str = "utf-8"
    rules_locale: str = "en"
    rules_path: str | None = None
    random_seed: int | None = None
    calorie_tolerance: float = 0.05
    internal_tolerance: float = 0.02
    max_calibration_iterations: int = 10
    min_safe_calories: float = 400.0
    pediatric_min_calories: float = 1000.0
    fail_open_on_empty_catalog: bool = False
    default_preparation_method: PreparationMethod = PreparationMethod.BOILED
    meal_moments: str | None = None
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @field_validator("default_preparation_method", mode="before")
    @classmethod
    def _normalize_method(cls, value: object) -> object:
        return value.strip().lower() if isinstance(value, str) else value


def parse_meal_moments(raw: str | None) -> list[MealMoment] | None:
    """Parse ``Name:slot:ratio`` entries separated by commas.

    Entries with an unknown slot or a ratio that is not a number are skipped.
    """
    if raw is None:
        return None
    cleaned = raw.strip()
    if not cleaned:
        return None
    moments: list[MealMoment] = []
    for chunk in cleaned.split(","):
        parts = [part.strip() for part in chunk.split(":")]
        if len(parts) != 3 or not parts[0]:
            continue
        name, slot, ratio = parts
        try:
            moments.append(MealMoment(name=name, slot=MealSlot(slot.lower()), ratio=float(ratio)))
        except ValueError:
            continue
    return moments or None
