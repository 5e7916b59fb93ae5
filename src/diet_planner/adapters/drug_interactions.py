"""Static drug-nutrient interaction table."""

import logging
import unicodedata
from dataclasses import dataclass, field

from diet_planner.domain.interactions import (
    DrugInteraction,
    InteractionCheck,
    InteractionSeverity,
)

_logger = logging.getLogger(__name__)


_VITAMIN_K_GREENS = ("spinach", "kale", "broccoli", "chard", "lettuce", "cabbage")
_TYRAMINE_FOODS = (
    "aged cheese",
    "parmesan",
    "wine",
    "beer",
    "salami",
    "cured",
    "soy sauce",
    "fermented",
    "sauerkraut",
)

_INTERACTIONS: dict[str, DrugInteraction] = {
    "warfarin": DrugInteraction(
        drug="warfarin",
        severity=InteractionSeverity.CRITICAL,
        warning="Warfarin: vitamin K rich greens change the anticoagulant effect.",
        recommendation="Keep leafy green intake low and steady; avoid cranberry.",
        avoid=(*_VITAMIN_K_GREENS, "cranberry"),
    ),
    "acenocoumarol": DrugInteraction(
        drug="acenocoumarol",
        severity=InteractionSeverity.CRITICAL,
        warning="Acenocoumarol: vitamin K rich greens change the anticoagulant effect.",
        recommendation="Keep leafy green intake low and steady; avoid cranberry.",
        avoid=(*_VITAMIN_K_GREENS, "cranberry"),
    ),
    "simvastatin": DrugInteraction(
        drug="simvastatin",
        severity=InteractionSeverity.CRITICAL,
        warning="Simvastatin: grapefruit raises blood levels and myopathy risk.",
        recommendation="Do not eat grapefruit or drink its juice.",
        avoid=("grapefruit",),
    ),
    "tetracycline": DrugInteraction(
        drug="tetracycline",
        severity=InteractionSeverity.CRITICAL,
        warning="Tetracycline: calcium and iron bind the antibiotic.",
        recommendation="Take the dose 2 hours away from dairy and iron-rich food.",
        reduce_absorption=("milk", "cheese", "yogurt", "kefir"),
    ),
    "phenelzine": DrugInteraction(
        drug="phenelzine",
        severity=InteractionSeverity.CRITICAL,
        warning="Phenelzine (MAOI): tyramine-rich foods can cause a hypertensive crisis.",
        recommendation="Avoid aged, cured and fermented foods.",
        avoid=_TYRAMINE_FOODS,
    ),
    "cyclosporine": DrugInteraction(
        drug="cyclosporine",
        severity=InteractionSeverity.CRITICAL,
        warning="Cyclosporine: grapefruit raises blood levels to toxic range.",
        recommendation="Do not eat grapefruit or drink its juice.",
        increase_absorption=("grapefruit",),
    ),
    "digoxin": DrugInteraction(
        drug="digoxin",
        severity=InteractionSeverity.CRITICAL,
        warning="Digoxin: licorice and St John's wort alter its effect.",
        recommendation="Avoid licorice and herbal St John's wort; take apart from bran.",
        avoid=("licorice", "st john's wort"),
        reduce_absorption=("bran",),
    ),
    "furosemide": DrugInteraction(
        drug="furosemide",
        severity=InteractionSeverity.CRITICAL,
        warning="Furosemide: licorice worsens potassium loss.",
        recommendation="Avoid licorice and include potassium-rich vegetables.",
        avoid=("licorice",),
    ),
    "spironolactone": DrugInteraction(
        drug="spironolactone",
        severity=InteractionSeverity.CRITICAL,
        warning="Spironolactone: potassium-rich foods can cause hyperkalaemia.",
        recommendation="Moderate bananas, potatoes and salt substitutes.",
        avoid=("salt substitute",),
        synergistic=("banana", "potato", "avocado", "orange"),
    ),
    "metformin": DrugInteraction(
        drug="metformin",
        severity=InteractionSeverity.MODERATE,
        warning="Metformin: long-term use lowers vitamin B12.",
        recommendation="Take with meals and include B12 sources.",
        avoid=("alcohol",),
    ),
    "levothyroxine": DrugInteraction(
        drug="levothyroxine",
        severity=InteractionSeverity.MODERATE,
        warning="Levothyroxine: soy, fibre and calcium reduce absorption.",
        recommendation="Take on an empty stomach 30-60 minutes before breakfast.",
        reduce_absorption=("soy", "bran", "milk", "coffee"),
    ),
    "enalapril": DrugInteraction(
        drug="enalapril",
        severity=InteractionSeverity.MODERATE,
        warning="Enalapril: potassium-rich foods raise hyperkalaemia risk.",
        recommendation="Do not use salt substitutes; moderate high-potassium produce.",
        synergistic=("banana", "salt substitute"),
    ),
    "lisinopril": DrugInteraction(
        drug="lisinopril",
        severity=InteractionSeverity.MODERATE,
        warning="Lisinopril: potassium-rich foods raise hyperkalaemia risk.",
        recommendation="Do not use salt substitutes; moderate high-potassium produce.",
        synergistic=("banana", "salt substitute"),
    ),
    "losartan": DrugInteraction(
        drug="losartan",
        severity=InteractionSeverity.MODERATE,
        warning="Losartan: potassium-rich foods raise hyperkalaemia risk.",
        recommendation="Do not use salt substitutes; moderate high-potassium produce.",
        synergistic=("banana", "salt substitute"),
    ),
    "atorvastatin": DrugInteraction(
        drug="atorvastatin",
        severity=InteractionSeverity.MODERATE,
        warning="Atorvastatin: large amounts of grapefruit raise blood levels.",
        recommendation="Limit grapefruit.",
        increase_absorption=("grapefruit",),
    ),
    "ciprofloxacin": DrugInteraction(
        drug="ciprofloxacin",
        severity=InteractionSeverity.MODERATE,
        warning="Ciprofloxacin: calcium-rich foods reduce absorption.",
        recommendation="Take 2 hours before or 6 hours after dairy.",
        reduce_absorption=("milk", "yogurt", "cheese"),
    ),
    "phenytoin": DrugInteraction(
        drug="phenytoin",
        severity=InteractionSeverity.MODERATE,
        warning="Phenytoin: lowers folate and vitamin D.",
        recommendation="Keep meal timing consistent relative to the dose.",
    ),
    "ibuprofen": DrugInteraction(
        drug="ibuprofen",
        severity=InteractionSeverity.MODERATE,
        warning="Ibuprofen: irritates the stomach lining.",
        recommendation="Take with food; avoid alcohol.",
        avoid=("alcohol",),
    ),
    "naproxen": DrugInteraction(
        drug="naproxen",
        severity=InteractionSeverity.MODERATE,
        warning="Naproxen: irritates the stomach lining.",
        recommendation="Take with food; avoid alcohol.",
        avoid=("alcohol",),
    ),
    "omeprazole": DrugInteraction(
        drug="omeprazole",
        severity=InteractionSeverity.MODERATE,
        warning="Omeprazole: long-term use lowers B12, iron and magnesium.",
        recommendation="Take 30 minutes before breakfast.",
    ),
    "esomeprazole": DrugInteraction(
        drug="esomeprazole",
        severity=InteractionSeverity.MODERATE,
        warning="Esomeprazole: long-term use lowers B12, iron and magnesium.",
        recommendation="Take 30 minutes before breakfast.",
    ),
    "hydrochlorothiazide": DrugInteraction(
        drug="hydrochlorothiazide",
        severity=InteractionSeverity.MODERATE,
        warning="Hydrochlorothiazide: increases potassium loss.",
        recommendation="Include potassium-rich vegetables and fruit; limit licorice.",
        avoid=("licorice",),
    ),
    "rosuvastatin": DrugInteraction(
        drug="rosuvastatin",
        severity=InteractionSeverity.MINOR,
        warning="Rosuvastatin: few food interactions.",
        recommendation="Limit alcohol.",
    ),
}

_ALIASES = {
    "coumadin": "warfarin",
    "sintrom": "acenocoumarol",
    "glucophage": "metformin",
    "synthroid": "levothyroxine",
    "euthyrox": "levothyroxine",
    "zocor": "simvastatin",
    "lipitor": "atorvastatin",
    "crestor": "rosuvastatin",
    "cipro": "ciprofloxacin",
    "advil": "ibuprofen",
    "motrin": "ibuprofen",
    "aleve": "naproxen",
    "prilosec": "omeprazole",
    "nexium": "esomeprazole",
    "lanoxin": "digoxin",
    "lasix": "furosemide",
    "aldactone": "spironolactone",
    "dilantin": "phenytoin",
    "nardil": "phenelzine",
}


def normalize_medication_name(name: str) -> str:
    """Lower-case, strip accents and resolve brand names to the generic drug."""
    decomposed = unicodedata.normalize("NFKD", name.strip().lower())
    plain = "".join(char for char in decomposed if not unicodedata.combining(char))
    return _ALIASES.get(plain, plain)


@dataclass
class StaticDrugInteractionLookup:
    """Drug-interaction lookup backed by a built-in table."""

    interactions: dict[str, DrugInteraction] = field(
        default_factory=lambda: dict(_INTERACTIONS)
    )

    def find(self, medication: str) -> DrugInteraction | None:
        """Return the interaction entry for a medication name, if known."""
        return self.interactions.get(normalize_medication_name(medication))

    def get_medication_warnings(self, medications: list[str]) -> list[str]:
        """Return one advisory per known medication."""
        warnings = []
        seen: set[str] = set()
        for medication in medications:
            interaction = self.find(medication)
            if interaction is None:
                _logger.info("No interaction data for medication %s", medication)
                continue
            if interaction.drug in seen:
                continue
            seen.add(interaction.drug)
            warnings.append(f"{interaction.warning} → {interaction.recommendation}")
        return warnings

    def check_food_interaction(
        self, food_name: str, medications: list[str]
    ) -> InteractionCheck:
        """Count critical and moderate interactions of a food with the medications."""
        name = food_name.lower()
        critical = 0
        moderate = 0
        warnings = []
        for medication in medications:
            interaction = self.find(medication)
            if interaction is None:
                continue
            is_critical = interaction.severity == InteractionSeverity.CRITICAL
            if _matches(name, interaction.avoid):
                if is_critical:
                    critical += 1
                else:
                    moderate += 1
                warnings.append(f"{food_name}: avoid with {interaction.drug}")
            if _matches(name, interaction.increase_absorption):
                if is_critical:
                    critical += 1
                else:
                    moderate += 1
                warnings.append(f"{food_name}: raises {interaction.drug} levels")
            if _matches(name, interaction.reduce_absorption):
                moderate += 1
                warnings.append(f"{food_name}: reduces {interaction.drug} absorption")
            if _matches(name, interaction.synergistic):
                moderate += 1
                warnings.append(f"{food_name}: adds to {interaction.drug} effect")
        return InteractionCheck(
            critical_count=critical,
            moderate_count=moderate,
            warnings=tuple(warnings),
        )


def _matches(name: str, terms: tuple[str, ...]) -> bool:
    return any(term in name for term in terms)
