"""Supabase repository for logged exercise."""

from dataclasses import dataclass
from datetime import date

from supabase import Client

from nutrition_engine.domain.trends import ExerciseEntry
from nutrition_engine.services.daily_summary import ExerciseRepository


@dataclass
class SupabaseExerciseRepository(ExerciseRepository):
    """Supabase implementation for exercise queries."""

    client: Client

    def list_exercises(self, session_id: str, start: date, end: date) -> list[ExerciseEntry]:
        """Return exercises in the date range, oldest first."""
        response = (
            self.client.table("exercises")
            .select("session_id, date, exercise_name, duration, calories_burned")
            .eq("session_id", session_id)
            .gte("date", start.isoformat())
            .lte("date", end.isoformat())
            .order("date", desc=False)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]


def _parse_row(row: dict[str, object]) -> ExerciseEntry:
    return ExerciseEntry(
        session_id=str(row["session_id"]),
        date=date.fromisoformat(str(row["date"])[:10]),
        exercise_name=str(row.get("exercise_name") or ""),
        duration=int(row.get("duration") or 0),
        calories_burned=float(row.get("calories_burned") or 0.0),
    )
