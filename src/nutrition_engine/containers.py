"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from nutrition_engine.adapters.fdc_client import HttpxFdcClient
from nutrition_engine.adapters.openai_analysis_client import OpenAIAnalysisClient
from nutrition_engine.adapters.supabase_daily_summary_repository import (
    SupabaseDailySummaryRepository,
)
from nutrition_engine.adapters.supabase_exercise_repository import (
    SupabaseExerciseRepository,
)
from nutrition_engine.adapters.supabase_weight_repository import SupabaseWeightRepository
from nutrition_engine.config import Settings
from nutrition_engine.services.analysis import FoodAnalysisService
from nutrition_engine.services.cache import InMemoryCache
from nutrition_engine.services.catalog import FoodCatalogService
from nutrition_engine.services.daily_summary import DailySummaryService
from nutrition_engine.services.trends import TrendService
from nutrition_engine.services.units import UnitResolver
from nutrition_engine.services.validation import CalorieValidator


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    unit_resolver: UnitResolver
    calorie_validator: CalorieValidator
    catalog_service: FoodCatalogService
    analysis_service: FoodAnalysisService
    daily_summary_service: DailySummaryService
    trend_service: TrendService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    summary_repository = SupabaseDailySummaryRepository(supabase_client)
    weight_repository = SupabaseWeightRepository(supabase_client)
    exercise_repository = SupabaseExerciseRepository(supabase_client)

    fdc_client = HttpxFdcClient.create(
        api_key=resolved_settings.fdc_api_key,
        base_url=resolved_settings.fdc_base_url,
    )
    catalog_service = FoodCatalogService(
        fdc_client=fdc_client,
        cache=InMemoryCache(),
        debug=resolved_settings.debug,
    )
    openai_client = OpenAIAnalysisClient.create(resolved_settings.openai_api_key)
    analysis_service = FoodAnalysisService(
        client=openai_client,
        model=resolved_settings.openai_model,
        reasoning_effort=resolved_settings.openai_reasoning_effort,
        store=resolved_settings.openai_store,
        debug=resolved_settings.debug,
    )
    unit_resolver = UnitResolver()
    calorie_validator = CalorieValidator()
    daily_summary_service = DailySummaryService(
        repository=summary_repository,
        exercise_repository=exercise_repository,
        catalog=catalog_service,
        resolver=unit_resolver,
        validator=calorie_validator,
        debug=resolved_settings.debug,
    )
    trend_service = TrendService(
        summary_repository=summary_repository,
        weight_repository=weight_repository,
        exercise_repository=exercise_repository,
        window_days=resolved_settings.trend_window_days,
        target_calories=resolved_settings.default_target_calories,
        target_protein=resolved_settings.default_target_protein,
        debug=resolved_settings.debug,
    )

    async def close_resources() -> None:
        await fdc_client.close()
        await openai_client.close()

    return AppContainer(
        settings=resolved_settings,
        unit_resolver=unit_resolver,
        calorie_validator=calorie_validator,
        catalog_service=catalog_service,
        analysis_service=analysis_service,
        daily_summary_service=daily_summary_service,
        trend_service=trend_service,
        close_resources=close_resources,
    )
