"""Domain models for weight, exercise and trend data."""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class WeightEntry:
    """Body weight sample for a date."""

    session_id: str
    date: date
    weight: float


@dataclass(frozen=True)
class ExerciseEntry:
    """Logged exercise for a date."""

    session_id: str
    date: date
    exercise_name: str
    duration: int
    calories_burned: float


@dataclass(frozen=True)
class TrendPoint:
    """One aligned row of the trend series."""

    date: date
    calories: float
    protein: float
    calories_burned: float
    weight: float | None
    target_calories: float
    target_protein: float
