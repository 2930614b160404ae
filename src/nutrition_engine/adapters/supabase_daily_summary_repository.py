"""Supabase repository for daily summaries."""

from dataclasses import dataclass
from datetime import date

from supabase import Client

from nutrition_engine.domain.meals import DailySummaryRecord
from nutrition_engine.services.daily_summary import DailySummaryRepository
from nutrition_engine.services.meal_data import dump_meal_data, load_meal_data

_COLUMNS = (
    "session_id, date, total_calories, total_protein, total_carbs, total_fat, "
    "calories_burned, net_calories, meal_data"
)


@dataclass
class SupabaseDailySummaryRepository(DailySummaryRepository):
    """Supabase implementation for daily summaries."""

    client: Client

    def get_daily_summary(self, session_id: str, day: date) -> DailySummaryRecord | None:
        """Return the summary row for a session and date."""
        response = (
            self.client.table("daily_summaries")
            .select(_COLUMNS)
            .eq("session_id", session_id)
            .eq("date", day.isoformat())
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def put_daily_summary(self, record: DailySummaryRecord) -> None:
        """Upsert the row keyed by session and date."""
        self.client.table("daily_summaries").upsert(
            {
                "session_id": record.session_id,
                "date": record.date.isoformat(),
                "total_calories": record.total_calories,
                "total_protein": record.total_protein,
                "total_carbs": record.total_carbs,
                "total_fat": record.total_fat,
                "calories_burned": record.calories_burned,
                "net_calories": record.net_calories,
                "meal_data": dump_meal_data(record.meal_data),
            },
            on_conflict="session_id,date",
        ).execute()

    def list_daily_summaries(
        self, session_id: str, start: date, end: date
    ) -> list[DailySummaryRecord]:
        """Return summary rows in the date range, oldest first."""
        response = (
            self.client.table("daily_summaries")
            .select(_COLUMNS)
            .eq("session_id", session_id)
            .gte("date", start.isoformat())
            .lte("date", end.isoformat())
            .order("date", desc=False)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]


def _parse_row(row: dict[str, object]) -> DailySummaryRecord:
    return DailySummaryRecord(
        session_id=str(row["session_id"]),
        date=date.fromisoformat(str(row["date"])),
        total_calories=float(row.get("total_calories") or 0.0),
        total_protein=float(row.get("total_protein") or 0.0),
        total_carbs=float(row.get("total_carbs") or 0.0),
        total_fat=float(row.get("total_fat") or 0.0),
        calories_burned=float(row.get("calories_burned") or 0.0),
        net_calories=float(row.get("net_calories") or 0.0),
        meal_data=load_meal_data(row.get("meal_data")),
    )
