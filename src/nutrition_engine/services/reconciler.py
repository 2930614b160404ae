"""Recompute daily summary records from their meal entries."""

from collections.abc import Iterable
from datetime import date
from typing import Literal

from nutrition_engine.domain.meals import DailySummaryRecord, MealEntry
from nutrition_engine.services.ledger import MealLedger, total_snapshots
from nutrition_engine.services.portions import round_calories

ReconcileMode = Literal["append", "replace"]
RECONCILE_MODES: tuple[str, ...] = ("append", "replace")


def reconcile_daily_summary(  # noqa: PLR0913
    existing: DailySummaryRecord | None,
    entries: MealLedger | Iterable[MealEntry],
    mode: ReconcileMode,
    *,
    session_id: str | None = None,
    day: date | None = None,
    calories_burned: float | None = None,
) -> DailySummaryRecord:
    """Return the summary record for ``entries`` applied to ``existing``.

    ``append`` adds entries after the existing meal data, skipping ids that are
    already present so a retried append changes nothing. ``replace`` takes the
    supplied entries as the complete meal data. Totals are always summed from
    the entry snapshots and ``net_calories`` is recomputed every time.
    ``calories_burned`` keeps the existing value unless one is given.

    Session and date come from the ledger, else the existing record, else the
    keyword arguments. A ledger for another session or date than ``existing``
    raises ``ValueError``.
    """
    if mode not in RECONCILE_MODES:
        raise ValueError(f"Unknown reconcile mode: {mode!r}")

    if isinstance(entries, MealLedger):
        supplied = entries.entries
        session_id, day = entries.session_id, entries.date
        if existing is not None and (existing.session_id, existing.date) != (session_id, day):
            raise ValueError("Ledger and existing summary belong to different days")
    else:
        supplied = tuple(entries)
        if existing is not None:
            session_id, day = existing.session_id, existing.date
    if not session_id or day is None:
        raise ValueError("A session id and date are required to reconcile a summary")

    if mode == "append":
        current = existing.meal_data if existing is not None else ()
        seen = {entry.id for entry in current}
        merged = list(current)
        for entry in supplied:
            if entry.id in seen:
                continue
            seen.add(entry.id)
            merged.append(entry)
        meal_data = tuple(merged)
    else:
        meal_data = supplied

    if calories_burned is not None:
        burned = round_calories(max(calories_burned, 0.0))
    elif existing is not None:
        burned = existing.calories_burned
    else:
        burned = 0.0

    totals = total_snapshots(meal_data)
    return DailySummaryRecord(
        session_id=session_id,
        date=day,
        total_calories=totals.calories,
        total_protein=totals.protein_g,
        total_carbs=totals.carbs_g,
        total_fat=totals.fat_g,
        calories_burned=burned,
        net_calories=totals.calories - burned,
        meal_data=meal_data,
    )
