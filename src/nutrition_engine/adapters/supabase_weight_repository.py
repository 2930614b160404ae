"""Supabase repository for daily weights."""

from dataclasses import dataclass
from datetime import date

from supabase import Client

from nutrition_engine.domain.trends import WeightEntry
from nutrition_engine.services.trends import WeightRepository


@dataclass
class SupabaseWeightRepository(WeightRepository):
    """Supabase implementation for weight samples."""

    client: Client

    def list_weights(self, session_id: str, start: date, end: date) -> list[WeightEntry]:
        """Return weights in the date range, oldest first."""
        response = (
            self.client.table("daily_weights")
            .select("session_id, date, weight")
            .eq("session_id", session_id)
            .gte("date", start.isoformat())
            .lte("date", end.isoformat())
            .order("date", desc=False)
            .execute()
        )
        return [
            WeightEntry(
                session_id=str(row["session_id"]),
                date=date.fromisoformat(str(row["date"])),
                weight=float(row["weight"]),
            )
            for row in response.data or []
            if row.get("weight") is not None
        ]
