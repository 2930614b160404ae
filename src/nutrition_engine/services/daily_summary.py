"""Daily summary orchestration: read, reconcile, write."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Protocol

from nutrition_engine.domain.meals import (
    DailySummaryRecord,
    MealAddition,
    MealEntry,
    MealRemoval,
)
from nutrition_engine.domain.nutrition import FoodBase, SmartPortion
from nutrition_engine.domain.trends import ExerciseEntry
from nutrition_engine.services.catalog import FoodCatalogService
from nutrition_engine.services.ledger import MealLedger
from nutrition_engine.services.portions import compute_portion, compute_smart_portion
from nutrition_engine.services.reconciler import reconcile_daily_summary
from nutrition_engine.services.units import UnitResolver
from nutrition_engine.services.validation import CalorieValidator

_logger = logging.getLogger(__name__)


class DailySummaryRepository(Protocol):
    """Persistence interface for daily summary records."""

    def get_daily_summary(self, session_id: str, day: date) -> DailySummaryRecord | None:
        """Return the record for a session and date, if any."""

    def put_daily_summary(self, record: DailySummaryRecord) -> None:
        """Create or overwrite the record for its session and date."""

    def list_daily_summaries(
        self, session_id: str, start: date, end: date
    ) -> list[DailySummaryRecord]:
        """Return records between two dates, inclusive."""


class ExerciseRepository(Protocol):
    """Persistence interface for logged exercise."""

    def list_exercises(self, session_id: str, start: date, end: date) -> list[ExerciseEntry]:
        """Return exercises between two dates, inclusive."""


@dataclass
class DailySummaryService:
    """Apply meal changes to a day's summary record.

    Every change reads the current record, reconciles it and writes the
    result back. The repository must run that sequence as one transaction
    per session and date; otherwise concurrent writers race and the last
    write wins.
    """

    repository: DailySummaryRepository
    exercise_repository: ExerciseRepository
    catalog: FoodCatalogService
    resolver: UnitResolver = field(default_factory=UnitResolver)
    validator: CalorieValidator = field(default_factory=CalorieValidator)
    debug: bool = False

    def get_summary(self, session_id: str, day: date) -> DailySummaryRecord | None:
        """Return the stored record for a day."""
        return self.repository.get_daily_summary(session_id, day)

    async def add_food(  # noqa: PLR0913
        self,
        session_id: str,
        day: date,
        *,
        quantity: float,
        unit_label: str,
        food_id: str | None = None,
        food: FoodBase | None = None,
        smart_portion: SmartPortion | None = None,
        entry_id: str | None = None,
        added_at: datetime | None = None,
    ) -> MealAddition:
        """Resolve a portion of a food and append it to the day.

        ``food`` is used as given; otherwise ``food_id`` is looked up in the
        catalog and catalog errors propagate. Passing an ``entry_id`` that is
        already logged leaves the record unchanged.
        """
        if food is None:
            if food_id is None:
                raise ValueError("Either food or food_id is required")
            food = await self.catalog.get_food(food_id)

        resolution = self.resolver.resolve(food.name, unit_label, food.category)
        if smart_portion is not None:
            nutrients = compute_smart_portion(
                food.macros, smart_portion, resolution.multiplier, quantity
            )
        else:
            nutrients = compute_portion(food.macros, resolution.multiplier, quantity)
        check = self.validator.validate(
            food.name, nutrients.calories, nutrients.total_grams, food.category
        )
        if check.warning:
            _logger.warning("Calorie check for session %s: %s", session_id, check.warning)

        existing = self.repository.get_daily_summary(session_id, day)
        ledger = (
            MealLedger.from_record(existing)
            if existing is not None
            else MealLedger(session_id=session_id, date=day)
        )
        previous = ledger.get(entry_id) if entry_id else None
        if existing is not None and previous is not None:
            return MealAddition(
                record=existing,
                entry=previous,
                resolution=resolution,
                nutrients=nutrients,
                check=check,
            )

        _, entry = ledger.add_entry(
            food.id,
            food.name,
            quantity,
            unit_label,
            nutrients.macros,
            entry_id=entry_id,
            added_at=added_at,
        )
        record = reconcile_daily_summary(
            existing, [entry], "append", session_id=session_id, day=day
        )
        self.repository.put_daily_summary(record)
        if self.debug:
            _logger.info(
                "Meal added: session=%s date=%s food=%s unit=%s multiplier=%s source=%s",
                session_id,
                day,
                food.id,
                unit_label,
                resolution.multiplier,
                resolution.source,
            )
        return MealAddition(
            record=record,
            entry=entry,
            resolution=resolution,
            nutrients=nutrients,
            check=check,
        )

    def append_entries(
        self, session_id: str, day: date, entries: Iterable[MealEntry]
    ) -> DailySummaryRecord:
        """Append prepared entries; ids already logged are skipped."""
        existing = self.repository.get_daily_summary(session_id, day)
        record = reconcile_daily_summary(
            existing, list(entries), "append", session_id=session_id, day=day
        )
        self.repository.put_daily_summary(record)
        return record

    def replace_meals(
        self, session_id: str, day: date, entries: Iterable[MealEntry]
    ) -> DailySummaryRecord:
        """Make ``entries`` the complete meal data for the day."""
        existing = self.repository.get_daily_summary(session_id, day)
        record = reconcile_daily_summary(
            existing, list(entries), "replace", session_id=session_id, day=day
        )
        self.repository.put_daily_summary(record)
        if self.debug:
            _logger.info(
                "Meals replaced: session=%s date=%s entries=%s",
                session_id,
                day,
                len(record.meal_data),
            )
        return record

    def remove_entry(self, session_id: str, day: date, entry_id: str) -> MealRemoval:
        """Remove an entry; unknown ids succeed without writing."""
        existing = self.repository.get_daily_summary(session_id, day)
        if existing is None:
            return MealRemoval(record=None, removed=False)
        removal = MealLedger.from_record(existing).remove_entry(entry_id)
        if not removal.removed:
            return MealRemoval(record=existing, removed=False)
        record = reconcile_daily_summary(existing, removal.ledger, "replace")
        self.repository.put_daily_summary(record)
        return MealRemoval(record=record, removed=True)

    def sync_calories_burned(self, session_id: str, day: date) -> DailySummaryRecord:
        """Set the day's burned calories to the sum of its logged exercise."""
        exercises = self.exercise_repository.list_exercises(session_id, day, day)
        burned = sum(
            exercise.calories_burned or 0.0
            for exercise in exercises
            if exercise.date == day
        )
        existing = self.repository.get_daily_summary(session_id, day)
        meal_data = existing.meal_data if existing is not None else ()
        record = reconcile_daily_summary(
            existing,
            meal_data,
            "replace",
            session_id=session_id,
            day=day,
            calories_burned=burned,
        )
        self.repository.put_daily_summary(record)
        if self.debug:
            _logger.info(
                "Calories burned synced: session=%s date=%s burned=%s",
                session_id,
                day,
                record.calories_burned,
            )
        return record
