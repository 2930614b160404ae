"""AI food analysis for images and food names."""

import base64
import logging
from dataclasses import dataclass
from typing import Protocol

from pydantic import ValidationError

from nutrition_engine.domain.analysis import FoodAnalysis, FoodCandidate

_logger = logging.getLogger(__name__)

_NULLABLE_NUMBER = {"anyOf": [{"type": "number", "minimum": 0}, {"type": "null"}]}

ANALYSIS_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "foods": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "name": {"type": "string"},
                    "confidence": {"type": "number", "minimum": 0.0, "maximum": 1.0},
                    "calories_per_100": _NULLABLE_NUMBER,
                    "protein_per_100": _NULLABLE_NUMBER,
                    "carbs_per_100": _NULLABLE_NUMBER,
                    "fat_per_100": _NULLABLE_NUMBER,
                    "estimated_grams": _NULLABLE_NUMBER,
                    "calories_estimate": _NULLABLE_NUMBER,
                },
                "required": [
                    "name",
                    "confidence",
                    "calories_per_100",
                    "protein_per_100",
                    "carbs_per_100",
                    "fat_per_100",
                    "estimated_grams",
                    "calories_estimate",
                ],
                "additionalProperties": False,
            },
        }
    },
    "required": ["foods"],
    "additionalProperties": False,
}

IMAGE_PROMPT = (
    "Identify each food in the image. For every food return its name, "
    "confidence (0-1), nutrition per 100g or 100ml if known, the estimated "
    "grams visible and the calories for that visible portion."
)

NAME_PROMPT = (
    "Give nutrition for the food named below. Return its name, confidence "
    "(0-1), nutrition per 100g or 100ml, a typical portion in grams and the "
    "calories for that portion.\n\nFood: {name}"
)


class AnalysisUnavailableError(Exception):
    """The analysis service failed or returned unusable output."""

    retryable = True


class AnalysisClient(Protocol):
    """Interface for LLM food analysis."""

    async def analyze(  # noqa: PLR0913
        self,
        *,
        model: str,
        reasoning_effort: str | None,
        store: bool,
        prompt: str,
        schema: dict[str, object],
        image_data_url: str | None = None,
    ) -> dict[str, object]:
        """Return structured analysis data."""


@dataclass
class FoodAnalysisService:
    """Service that prepares analysis prompts and validates results."""

    client: AnalysisClient
    model: str
    reasoning_effort: str | None
    store: bool
    debug: bool = False

    async def analyze_image(self, image_bytes: bytes) -> list[FoodCandidate]:
        """Identify foods in an image."""
        if not image_bytes:
            raise ValueError("Image is empty")
        return await self._analyze(IMAGE_PROMPT, image_data_url=_to_data_url(image_bytes))

    async def analyze_name(self, name: str) -> list[FoodCandidate]:
        """Estimate nutrition for a food by name."""
        cleaned = name.strip()
        if not cleaned:
            raise ValueError("Food name is empty")
        return await self._analyze(NAME_PROMPT.format(name=cleaned))

    async def _analyze(
        self, prompt: str, image_data_url: str | None = None
    ) -> list[FoodCandidate]:
        try:
            raw = await self.client.analyze(
                model=self.model,
                reasoning_effort=self.reasoning_effort,
                store=self.store,
                prompt=prompt,
                schema=ANALYSIS_SCHEMA,
                image_data_url=image_data_url,
            )
        except Exception as exc:
            _logger.warning("Food analysis request failed: %s", exc)
            raise AnalysisUnavailableError("Food analysis is unavailable") from exc
        try:
            analysis = FoodAnalysis.model_validate(raw)
        except ValidationError as exc:
            _logger.warning("Food analysis returned invalid data: %s", exc.errors()[:1])
            raise AnalysisUnavailableError("Food analysis returned invalid data") from exc
        if self.debug:
            _logger.info(
                "Food analysis: image=%s foods=%s",
                image_data_url is not None,
                [food.name for food in analysis.foods],
            )
        return analysis.foods


def _to_data_url(image_bytes: bytes) -> str:
    """Convert bytes to a base64 data URL for image input."""
    mime_type = _detect_mime_type(image_bytes)
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"


def _detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    return "image/jpeg"
