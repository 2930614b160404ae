"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import date

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse

from nutrition_engine.api.daily_summary import router as daily_summary_router
from nutrition_engine.api.models import (
    AnalyzeNameRequest,
    PortionModel,
    PortionRequest,
    TrendPointModel,
    UnitResolutionModel,
    UnitResolveRequest,
    UnitSuggestionModel,
)
from nutrition_engine.app_logging import configure_logging
from nutrition_engine.containers import AppContainer
from nutrition_engine.domain.analysis import FoodCandidate
from nutrition_engine.services.analysis import AnalysisUnavailableError
from nutrition_engine.services.catalog import CatalogError, FoodNotFoundError
from nutrition_engine.services.portions import (
    compute_portion,
    compute_smart_portion,
    format_portion,
)


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging(debug=container.settings.debug)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(daily_summary_router)

    @app.exception_handler(CatalogError)
    async def catalog_error(_request: Request, exc: CatalogError) -> JSONResponse:
        status_code = (
            status.HTTP_404_NOT_FOUND
            if isinstance(exc, FoodNotFoundError)
            else status.HTTP_503_SERVICE_UNAVAILABLE
        )
        logger.warning("Catalog lookup failed: %s", exc)
        return JSONResponse(
            status_code=status_code,
            content={"detail": str(exc), "retryable": exc.retryable},
        )

    @app.exception_handler(AnalysisUnavailableError)
    async def analysis_error(
        _request: Request, exc: AnalysisUnavailableError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"detail": str(exc), "retryable": exc.retryable},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/units/resolve")
    async def resolve_unit(
        payload: UnitResolveRequest, request: Request
    ) -> UnitResolutionModel:
        """Resolve a unit label to a 100g/ml multiplier."""
        state_container: AppContainer = request.app.state.container
        resolution = state_container.unit_resolver.resolve(
            payload.food_name, payload.unit_label, payload.category
        )
        return UnitResolutionModel.from_domain(resolution)

    @app.get("/units/suggest")
    async def suggest_unit(
        request: Request, food_name: str, category: str = ""
    ) -> UnitSuggestionModel:
        """Suggest a default unit and quantity for a food."""
        state_container: AppContainer = request.app.state.container
        suggestion = state_container.unit_resolver.suggest(food_name, category)
        return UnitSuggestionModel.from_domain(suggestion)

    @app.post("/portions")
    async def compute_portion_endpoint(
        payload: PortionRequest, request: Request
    ) -> PortionModel:
        """Compute nutrition for a portion of a supplied food."""
        state_container: AppContainer = request.app.state.container
        food = payload.food.to_domain()
        resolution = state_container.unit_resolver.resolve(
            food.name, payload.unit_label, food.category
        )
        if payload.smart_portion is not None:
            nutrients = compute_smart_portion(
                food.macros,
                payload.smart_portion.to_domain(),
                resolution.multiplier,
                payload.quantity,
            )
        else:
            nutrients = compute_portion(
                food.macros, resolution.multiplier, payload.quantity
            )
        check = state_container.calorie_validator.validate(
            food.name, nutrients.calories, nutrients.total_grams, food.category
        )
        return PortionModel.from_domain(
            nutrients,
            resolution,
            check,
            format_portion(payload.quantity, payload.unit_label, nutrients),
        )

    @app.get("/trends/{session_id}")
    async def trends(
        session_id: str,
        request: Request,
        end: date | None = None,
        days: int | None = None,
    ) -> dict[str, list[TrendPointModel]]:
        """Return the aligned trend series for a session."""
        state_container: AppContainer = request.app.state.container
        series = state_container.trend_service.get_series(
            session_id, end=end, window_days=days
        )
        return {"points": [TrendPointModel.from_domain(point) for point in series]}

    @app.post("/analysis/name")
    async def analyze_name(
        payload: AnalyzeNameRequest, request: Request
    ) -> dict[str, list[FoodCandidate]]:
        """Estimate nutrition for a food name."""
        state_container: AppContainer = request.app.state.container
        foods = await state_container.analysis_service.analyze_name(payload.name)
        return {"foods": foods}

    @app.post("/analysis/image")
    async def analyze_image(request: Request) -> dict[str, list[FoodCandidate]]:
        """Identify foods in a raw image request body."""
        state_container: AppContainer = request.app.state.container
        image_bytes = await request.body()
        if not image_bytes:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail="Image body is empty"
            )
        foods = await state_container.analysis_service.analyze_image(image_bytes)
        return {"foods": foods}

    return app
