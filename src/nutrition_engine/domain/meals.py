"""Domain models for meal entries and daily summaries."""

from dataclasses import dataclass
from datetime import date, datetime

from nutrition_engine.domain.nutrition import (
    CalorieCheck,
    MacroProfile,
    PortionNutrients,
    UnitResolution,
)


@dataclass(frozen=True)
class MealEntry:
    """A logged food with the nutrition frozen at the time it was added."""

    id: str
    food_ref: str | None
    food_name_snapshot: str
    quantity: float
    unit_label: str
    nutrient_snapshot: MacroProfile
    added_at: datetime | None


@dataclass(frozen=True)
class DailySummaryRecord:
    """Persisted aggregate for one session and date."""

    session_id: str
    date: date
    total_calories: float
    total_protein: float
    total_carbs: float
    total_fat: float
    calories_burned: float
    net_calories: float
    meal_data: tuple[MealEntry, ...]


@dataclass(frozen=True)
class MealAddition:
    """Outcome of adding one food to a day."""

    record: DailySummaryRecord
    entry: MealEntry
    resolution: UnitResolution
    nutrients: PortionNutrients
    check: CalorieCheck


@dataclass(frozen=True)
class MealRemoval:
    """Outcome of removing an entry; missing ids are not an error."""

    record: DailySummaryRecord | None
    removed: bool
