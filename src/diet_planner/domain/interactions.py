"""Domain models for drug-nutrient interactions."""

from dataclasses import dataclass
from enum import Enum


class InteractionSeverity(str, Enum):
    """Clinical weight of a drug-food interaction."""

    CRITICAL = "critical"
    MODERATE = "moderate"
    MINOR = "minor"


@dataclass(frozen=True)
class DrugInteraction:
    """Foods a medication reacts with and the advice to give."""

    drug: str
    severity: InteractionSeverity
    warning: str
    recommendation: str
    avoid: tuple[str, ...] = ()
    reduce_absorption: tuple[str, ...] = ()
    increase_absorption: tuple[str, ...] = ()
    synergistic: tuple[str, ...] = ()


@dataclass(frozen=True)
class InteractionCheck:
    """Result of checking one food against a medication list."""

    critical_count: int = 0
    moderate_count: int = 0
    warnings: tuple[str, ...] = ()
