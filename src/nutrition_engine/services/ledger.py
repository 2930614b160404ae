"""Per-day meal ledger."""

import math
import uuid
from collections.abc import Iterable
from dataclasses import dataclass, replace
from datetime import UTC, date, datetime

from nutrition_engine.domain.meals import DailySummaryRecord, MealEntry
from nutrition_engine.domain.nutrition import MacroProfile
from nutrition_engine.services.portions import round_calories, round_macro


@dataclass(frozen=True)
class LedgerRemoval:
    """Outcome of a remove; a missing id still succeeds with ``removed=False``."""

    ledger: "MealLedger"
    removed: bool


@dataclass(frozen=True)
class MealLedger:
    """Ordered meal entries for one session and date.

    The ledger is a value: operations return a new ledger and leave the
    original untouched. Editing an entry is a remove followed by an add.
    """

    session_id: str
    date: date
    entries: tuple[MealEntry, ...] = ()

    @classmethod
    def from_record(cls, record: DailySummaryRecord) -> "MealLedger":
        """Seed a ledger with the meal data of a persisted summary."""
        return cls(session_id=record.session_id, date=record.date, entries=record.meal_data)

    def add_entry(  # noqa: PLR0913
        self,
        food_ref: str | None,
        food_name_snapshot: str,
        quantity: float,
        unit_label: str,
        nutrient_snapshot: MacroProfile,
        *,
        entry_id: str | None = None,
        added_at: datetime | None = None,
    ) -> tuple["MealLedger", MealEntry]:
        """Append a new entry and return the new ledger with the entry."""
        entry = MealEntry(
            id=entry_id or str(uuid.uuid4()),
            food_ref=food_ref,
            food_name_snapshot=food_name_snapshot,
            quantity=quantity,
            unit_label=unit_label,
            nutrient_snapshot=nutrient_snapshot,
            added_at=added_at or datetime.now(tz=UTC),
        )
        return replace(self, entries=(*self.entries, entry)), entry

    def remove_entry(self, entry_id: str) -> LedgerRemoval:
        """Remove an entry by id."""
        remaining = tuple(entry for entry in self.entries if entry.id != entry_id)
        if len(remaining) == len(self.entries):
            return LedgerRemoval(ledger=self, removed=False)
        return LedgerRemoval(ledger=replace(self, entries=remaining), removed=True)

    def get(self, entry_id: str) -> MealEntry | None:
        """Return the entry with the given id, if present."""
        return next((entry for entry in self.entries if entry.id == entry_id), None)

    def totals(self) -> MacroProfile:
        """Return the rounded sum of the entry snapshots."""
        return total_snapshots(self.entries)


def total_snapshots(entries: Iterable[MealEntry]) -> MacroProfile:
    """Sum nutrient snapshots, then round calories to whole and macros to 0.1."""
    snapshots = [entry.nutrient_snapshot for entry in entries]
    return MacroProfile(
        calories=round_calories(_sum(item.calories for item in snapshots)),
        protein_g=round_macro(_sum(item.protein_g for item in snapshots)),
        carbs_g=round_macro(_sum(item.carbs_g for item in snapshots)),
        fat_g=round_macro(_sum(item.fat_g for item in snapshots)),
    )


def _sum(values: Iterable[float]) -> float:
    return math.fsum(value for value in values if math.isfinite(value))
