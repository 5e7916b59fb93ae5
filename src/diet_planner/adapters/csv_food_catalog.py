"""Food catalog loaded from a semicolon-delimited composition table."""

import logging
import re
from dataclasses import dataclass
from pathlib import Path

import pandas as pd

from diet_planner.domain.errors import CatalogLoadError
from diet_planner.domain.foods import FoodItem

_logger = logging.getLogger(__name__)

_COLUMN_COUNT = 25
_CODE_PATTERN = re.compile(r"^[A-Z][0-9]+")
_NUMERIC_COLUMNS = {
    "energy_kcal": 2,
    "protein_g": 5,
    "fat_g": 6,
    "carbs_g": 7,
    "fiber_g": 9,
    "calcium_mg": 11,
    "phosphorus_mg": 12,
    "zinc_mg": 13,
    "iron_mg": 14,
    "vitamin_a_ug": 16,
    "thiamine_mg": 17,
    "riboflavin_mg": 18,
    "niacin_mg": 19,
    "vitamin_c_mg": 20,
    "folate_ug": 21,
    "sodium_mg": 22,
    "potassium_mg": 23,
}
_WASTE_COLUMN = 24


@dataclass
class CsvFoodCatalog:
    """Reads food composition rows into ``FoodItem`` values.

    The first line is a header. Rows whose code does not look like ``A12`` (unit
    rows, section titles) are skipped. Numbers use a decimal comma and ``-`` for
    missing values.
    """

    path: Path
    encoding: str = "utf-8"

    def load(self) -> list[FoodItem]:
        """Parse the file and return every food row."""
        frame = self._read_frame()
        foods = []
        for row in frame.itertuples(index=False, name=None):
            food = _row_to_food(row)
            if food is not None:
                foods.append(food)
        _logger.info("Loaded %d foods from %s", len(foods), self.path)
        return foods

    def _read_frame(self) -> pd.DataFrame:
        if not self.path.exists():
            raise CatalogLoadError(f"Food catalog not found: {self.path}")
        try:
            frame = pd.read_csv(
                self.path,
                sep=";",
                header=None,
                skiprows=1,
                names=list(range(_COLUMN_COUNT)),
                dtype=str,
                keep_default_na=False,
                on_bad_lines="skip",
                encoding=self.encoding,
            )
        except pd.errors.EmptyDataError:
            return pd.DataFrame(columns=list(range(_COLUMN_COUNT)))
        except (OSError, UnicodeDecodeError, pd.errors.ParserError) as exc:
            raise CatalogLoadError(f"Cannot parse food catalog {self.path}: {exc}") from exc
        return frame.fillna("")


def _row_to_food(row: tuple[object, ...]) -> FoodItem | None:
    code = _clean(row[0])
    name = _clean(row[1])
    if not _CODE_PATTERN.match(code) or not name:
        return None
    values = {field: _parse_number(row[column]) for field, column in _NUMERIC_COLUMNS.items()}
    waste = _parse_number(row[_WASTE_COLUMN])
    return FoodItem(id=code, name=name, waste_factor=waste if waste > 0 else 1.0, **values)


def _clean(value: object) -> str:
    return str(value).strip().strip('"').strip()


def _parse_number(value: object) -> float:
    text = _clean(value)
    if not text or text == "-":
        return 0.0
    try:
        return float(text.replace(",", "."))
    except ValueError:
        return 0.0
