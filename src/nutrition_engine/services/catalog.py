"""Food catalog service backed by USDA FoodData Central."""

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from nutrition_engine.adapters.fdc_client import FdcClient
from nutrition_engine.domain.nutrition import FoodBase
from nutrition_engine.services.cache import Cache

_NUTRIENT_IDS = {
    "calories": 1008,
    "protein": 1003,
    "fat": 1004,
    "carbs": 1005,
}
_NOT_FOUND = 404
FDC_ID_PREFIX = "fdc:"

_logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable


class CatalogError(Exception):
    """Base error for catalog lookups."""

    retryable = False


class FoodNotFoundError(CatalogError):
    """The catalog has no such food; retrying will not help."""


class CatalogUnavailableError(CatalogError):
    """The catalog could not be reached; the caller may retry later."""

    retryable = True


@dataclass
class FoodCatalogService:
    """Catalog lookups with caching and a short retry."""

    fdc_client: FdcClient
    cache: Cache
    search_ttl_seconds: int = 3600
    food_ttl_seconds: int = 86400
    debug: bool = False
    retry_attempts: int = 1
    retry_delay_seconds: float = 0.3

    async def search(self, query: str, limit: int = 5) -> list[FoodBase]:
        """Search foods by name."""
        cache_key = f"fdc:search:{query.lower()}:{limit}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, list):
            return cached

        payload = await self._call_with_retry(
            lambda: self.fdc_client.search_foods(query, page_size=limit),
            action="search",
        )
        foods = [_to_food_base(food) for food in payload.get("foods", [])]
        self.cache.set(cache_key, foods, ttl_seconds=self.search_ttl_seconds)
        if self.debug:
            _logger.info("Catalog search FDC: query=%s results=%s", query, len(foods))
        return foods

    async def find(self, name: str) -> FoodBase:
        """Return the best catalog match for a food name."""
        foods = await self.search(name, limit=1)
        if not foods:
            raise FoodNotFoundError(f"No catalog food matches {name!r}")
        return foods[0]

    async def get_food(self, food_id: str) -> FoodBase:
        """Return base nutrition for a catalog id such as ``fdc:171287``."""
        fdc_id = _parse_fdc_id(food_id)
        cache_key = f"fdc:food:{fdc_id}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, FoodBase):
            return cached

        payload = await self._call_with_retry(
            lambda: self.fdc_client.get_food(fdc_id),
            action=f"get_food:{fdc_id}",
        )
        food = _to_food_base(payload)
        self.cache.set(cache_key, food, ttl_seconds=self.food_ttl_seconds)
        if self.debug:
            _logger.info("Catalog food FDC: fdc_id=%s", fdc_id)
        return food

    async def _call_with_retry(
        self, func: "Callable[[], Awaitable[dict[str, object]]]", *, action: str
    ) -> dict[str, object]:
        """Call an async function with a short retry; 404 is never retried."""
        attempt = 0
        while True:
            try:
                return await func()
            except Exception as exc:
                attempt += 1
                status_code = _status_code_from_exception(exc)
                if self.debug:
                    _logger.warning(
                        "Catalog %s failed (attempt %s/%s, status=%s): %s",
                        action,
                        attempt,
                        self.retry_attempts + 1,
                        status_code,
                        exc,
                    )
                if status_code == str(_NOT_FOUND):
                    raise FoodNotFoundError(f"Catalog {action} returned 404") from exc
                if attempt > self.retry_attempts:
                    raise CatalogUnavailableError(
                        f"Catalog {action} failed after {attempt} attempts"
                    ) from exc
                await asyncio.sleep(self.retry_delay_seconds)


def _parse_fdc_id(food_id: str) -> int:
    raw = food_id.removeprefix(FDC_ID_PREFIX).strip()
    if not raw.isdigit():
        raise FoodNotFoundError(f"Unknown catalog id {food_id!r}")
    return int(raw)


def _status_code_from_exception(exc: Exception) -> str:
    """Extract HTTP status code from an exception, if available."""
    response = getattr(exc, "response", None)
    status_code = getattr(response, "status_code", None)
    if isinstance(status_code, int):
        return str(status_code)
    return "n/a"


def _to_food_base(payload: dict[str, object]) -> FoodBase:
    """Map an FDC food (search hit or detail) to base nutrition per 100g."""
    values = _extract_macros(payload.get("foodNutrients", []))
    category = payload.get("foodCategory")
    if isinstance(category, dict):
        category = category.get("description")
    return FoodBase(
        id=f"{FDC_ID_PREFIX}{payload['fdcId']}",
        name=str(payload.get("description", "")),
        category=str(category or payload.get("dataType") or ""),
        calories_per_100=values["calories"],
        protein_per_100=values["protein"],
        carbs_per_100=values["carbs"],
        fat_per_100=values["fat"],
    )


def _extract_macros(food_nutrients: list[dict[str, object]]) -> dict[str, float]:
    """Extract calories, protein, fat, carbs from FDC nutrients."""
    values: dict[str, float] = {
        "calories": 0.0,
        "protein": 0.0,
        "fat": 0.0,
        "carbs": 0.0,
    }
    for nutrient in food_nutrients:
        nutrient_info = nutrient.get("nutrient") or {}
        nutrient_id = nutrient_info.get("id") or nutrient.get("nutrientId")
        amount = nutrient.get("amount", nutrient.get("value"))
        if amount is None:
            continue
        for key, expected_id in _NUTRIENT_IDS.items():
            if nutrient_id == expected_id:
                values[key] = max(float(amount), 0.0)
    return values
