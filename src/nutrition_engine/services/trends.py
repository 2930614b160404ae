"""Trend series built from daily summaries, weights and exercise."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta
from typing import Protocol

from nutrition_engine.domain.meals import DailySummaryRecord
from nutrition_engine.domain.trends import ExerciseEntry, TrendPoint, WeightEntry
from nutrition_engine.services.daily_summary import (
    DailySummaryRepository,
    ExerciseRepository,
)

_logger = logging.getLogger(__name__)


class WeightRepository(Protocol):
    """Persistence interface for body weight samples."""

    def list_weights(self, session_id: str, start: date, end: date) -> list[WeightEntry]:
        """Return weight samples between two dates, inclusive."""


def build_trend_series(  # noqa: PLR0913
    nutrition_records: Iterable[DailySummaryRecord],
    weight_entries: Iterable[WeightEntry],
    exercise_entries: Iterable[ExerciseEntry],
    window_days: int,
    *,
    target_calories: float = 2000,
    target_protein: float = 60,
) -> list[TrendPoint]:
    """Merge the three sources into one row per date.

    Dates are the union of all sources, sorted, limited to the last
    ``window_days``. Weight carries forward from the last sample in the
    window; nutrition and burn are zero on dates without records. Rows with
    nothing to show are dropped last.
    """
    if window_days <= 0:
        return []

    nutrition = {record.date: record for record in nutrition_records}
    weights: dict[date, float] = {}
    for entry in weight_entries:
        weights[entry.date] = entry.weight
    burned: dict[date, float] = {}
    for exercise in exercise_entries:
        burned[exercise.date] = burned.get(exercise.date, 0.0) + (
            exercise.calories_burned or 0.0
        )

    dates = sorted(set(nutrition) | set(weights) | set(burned))[-window_days:]

    points: list[TrendPoint] = []
    last_weight: float | None = None
    for day in dates:
        weight = weights.get(day)
        if weight is not None:
            last_weight = weight
        record = nutrition.get(day)
        points.append(
            TrendPoint(
                date=day,
                calories=record.total_calories if record else 0.0,
                protein=record.total_protein if record else 0.0,
                calories_burned=burned.get(day, 0.0),
                weight=weight if weight is not None else last_weight,
                target_calories=target_calories,
                target_protein=target_protein,
            )
        )
    return [point for point in points if _has_data(point)]


def _has_data(point: TrendPoint) -> bool:
    return bool(
        point.calories > 0
        or point.protein > 0
        or point.calories_burned > 0
        or point.weight
    )


@dataclass
class TrendService:
    """Load a session's recent records and build its trend series."""

    summary_repository: DailySummaryRepository
    weight_repository: WeightRepository
    exercise_repository: ExerciseRepository
    window_days: int = 14
    target_calories: float = 2000
    target_protein: float = 60
    debug: bool = False

    def get_series(  # noqa: PLR0913
        self,
        session_id: str,
        *,
        end: date | None = None,
        window_days: int | None = None,
        target_calories: float | None = None,
        target_protein: float | None = None,
    ) -> list[TrendPoint]:
        """Return the trend series for the window ending on ``end``."""
        days = self.window_days if window_days is None else window_days
        if days <= 0:
            return []
        end_day = end or datetime.now(tz=UTC).date()
        start_day = end_day - timedelta(days=days - 1)
        records = self.summary_repository.list_daily_summaries(
            session_id, start_day, end_day
        )
        weights = self.weight_repository.list_weights(session_id, start_day, end_day)
        exercises = self.exercise_repository.list_exercises(
            session_id, start_day, end_day
        )
        series = build_trend_series(
            records,
            weights,
            exercises,
            days,
            target_calories=(
                self.target_calories if target_calories is None else target_calories
            ),
            target_protein=(
                self.target_protein if target_protein is None else target_protein
            ),
        )
        if self.debug:
            _logger.info(
                "Trend series: session=%s start=%s end=%s points=%s",
                session_id,
                start_day,
                end_day,
                len(series),
            )
        return series
