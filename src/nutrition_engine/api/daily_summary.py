"""Daily summary endpoints."""

from __future__ import annotations

from datetime import date  # noqa: TC003
from typing import TYPE_CHECKING

from fastapi import APIRouter, Request

from nutrition_engine.api.models import (
    AddMealRequest,
    AddMealResponse,
    DailySummaryModel,
    MealEntryModel,
    PortionModel,
    RemoveMealResponse,
    ReplaceMealsRequest,
)
from nutrition_engine.services.portions import format_portion

if TYPE_CHECKING:
    from nutrition_engine.containers import AppContainer

router = APIRouter(prefix="/daily-summary", tags=["daily-summary"])


@router.get("/{session_id}/{day}")
async def get_daily_summary(session_id: str, day: date, request: Request) -> DailySummaryModel:
    """Return the day's summary; days without meals read as empty."""
    container: AppContainer = request.app.state.container
    record = container.daily_summary_service.get_summary(session_id, day)
    if record is None:
        return DailySummaryModel.empty(session_id, day)
    return DailySummaryModel.from_domain(record)


@router.post("/{session_id}/{day}/meals")
async def add_meal(
    session_id: str, day: date, payload: AddMealRequest, request: Request
) -> AddMealResponse:
    """Add a food portion to the day."""
    container: AppContainer = request.app.state.container
    addition = await container.daily_summary_service.add_food(
        session_id,
        day,
        quantity=payload.quantity,
        unit_label=payload.unit_label,
        food_id=payload.food_id,
        food=payload.food.to_domain() if payload.food else None,
        smart_portion=(
            payload.smart_portion.to_domain() if payload.smart_portion else None
        ),
        entry_id=payload.entry_id,
    )
    return AddMealResponse(
        summary=DailySummaryModel.from_domain(addition.record),
        entry=MealEntryModel.from_domain(addition.entry),
        portion=PortionModel.from_domain(
            addition.nutrients,
            addition.resolution,
            addition.check,
            format_portion(payload.quantity, payload.unit_label, addition.nutrients),
        ),
    )


@router.put("/{session_id}/{day}/meals")
async def replace_meals(
    session_id: str, day: date, payload: ReplaceMealsRequest, request: Request
) -> DailySummaryModel:
    """Replace the day's meal data with the supplied entries."""
    container: AppContainer = request.app.state.container
    record = container.daily_summary_service.replace_meals(
        session_id, day, [entry.to_domain() for entry in payload.entries]
    )
    return DailySummaryModel.from_domain(record)


@router.delete("/{session_id}/{day}/meals/{entry_id}")
async def remove_meal(
    session_id: str, day: date, entry_id: str, request: Request
) -> RemoveMealResponse:
    """Remove an entry; unknown ids succeed with ``removed`` false."""
    container: AppContainer = request.app.state.container
    removal = container.daily_summary_service.remove_entry(session_id, day, entry_id)
    summary = (
        DailySummaryModel.from_domain(removal.record)
        if removal.record is not None
        else DailySummaryModel.empty(session_id, day)
    )
    return RemoveMealResponse(removed=removal.removed, summary=summary)


@router.post("/{session_id}/{day}/calories-burned/sync")
async def sync_calories_burned(
    session_id: str, day: date, request: Request
) -> DailySummaryModel:
    """Recompute burned calories from the day's logged exercise."""
    container: AppContainer = request.app.state.container
    record = container.daily_summary_service.sync_calories_burned(session_id, day)
    return DailySummaryModel.from_domain(record)
