"""JSON codec for the ``meal_data`` column of daily summaries."""

import logging
from collections.abc import Iterable
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from nutrition_engine.domain.meals import MealEntry
from nutrition_engine.domain.nutrition import MacroProfile

_logger = logging.getLogger(__name__)


class StoredMealItem(BaseModel):
    """Meal entry as stored in the ``meal_data`` JSON text.

    Older rows carry integer ids and may lack ``createdAt``.
    """

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    id: str = Field(min_length=1)
    food_ref: str | None = Field(default=None, alias="foodId")
    food_name: str = Field(alias="foodName")
    quantity: float
    unit: str
    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    created_at: datetime | None = Field(default=None, alias="createdAt")

    @classmethod
    def from_entry(cls, entry: MealEntry) -> "StoredMealItem":
        """Build the stored form of an entry."""
        snapshot = entry.nutrient_snapshot
        return cls(
            id=entry.id,
            food_ref=entry.food_ref,
            food_name=entry.food_name_snapshot,
            quantity=entry.quantity,
            unit=entry.unit_label,
            calories=snapshot.calories,
            protein=snapshot.protein_g,
            carbs=snapshot.carbs_g,
            fat=snapshot.fat_g,
            created_at=entry.added_at,
        )

    def to_entry(self) -> MealEntry:
        """Convert back to the domain entry."""
        return MealEntry(
            id=self.id,
            food_ref=self.food_ref,
            food_name_snapshot=self.food_name,
            quantity=self.quantity,
            unit_label=self.unit,
            nutrient_snapshot=MacroProfile(
                calories=self.calories,
                protein_g=self.protein,
                carbs_g=self.carbs,
                fat_g=self.fat,
            ),
            added_at=self.created_at,
        )


_ITEMS = TypeAdapter(list[StoredMealItem])
_ROWS = TypeAdapter(list[object])


def dump_meal_data(entries: Iterable[MealEntry]) -> str:
    """Serialize entries to JSON text, preserving order."""
    items = [StoredMealItem.from_entry(entry) for entry in entries]
    return _ITEMS.dump_json(items, by_alias=True).decode("utf-8")


def load_meal_data(raw: str | bytes | list[object] | None) -> tuple[MealEntry, ...]:
    """Parse stored meal data.

    Data that is not a JSON list reads as empty. Inside a list only the
    unreadable items are skipped, so the rest of the day survives.
    """
    if raw is None or raw in ("", b""):
        return ()
    try:
        if isinstance(raw, str | bytes):
            rows = _ROWS.validate_json(raw)
        else:
            rows = _ROWS.validate_python(raw)
    except ValidationError as exc:
        _logger.warning("Discarding unreadable meal data: %s", exc.errors()[:1])
        return ()

    entries: list[MealEntry] = []
    for index, row in enumerate(rows):
        try:
            item = StoredMealItem.model_validate(row)
        except ValidationError as exc:
            _logger.warning("Skipping unreadable meal item %s: %s", index, exc.errors()[:1])
            continue
        entries.append(item.to_entry())
    return tuple(entries)
