"""Models for AI food analysis results."""

from pydantic import BaseModel, Field

from nutrition_engine.domain.nutrition import FoodBase, SmartPortion


class FoodCandidate(BaseModel):
    """Single food identified by the analysis service."""

    name: str = Field(min_length=1)
    confidence: float = Field(ge=0.0, le=1.0)
    calories_per_100: float | None = Field(default=None, ge=0)
    protein_per_100: float | None = Field(default=None, ge=0)
    carbs_per_100: float | None = Field(default=None, ge=0)
    fat_per_100: float | None = Field(default=None, ge=0)
    estimated_grams: float | None = Field(default=None, ge=0)
    calories_estimate: float | None = Field(default=None, ge=0)

    def to_food_base(self) -> FoodBase:
        """Build a synthetic catalog entry from the candidate."""
        calories = self.calories_per_100
        if calories is None and self.calories_estimate and self.estimated_grams:
            calories = self.calories_estimate / self.estimated_grams * 100
        return FoodBase(
            id=f"ai:{self.name.strip().lower()}",
            name=self.name.strip(),
            category="AI Detected",
            calories_per_100=calories or 0.0,
            protein_per_100=self.protein_per_100 or 0.0,
            carbs_per_100=self.carbs_per_100 or 0.0,
            fat_per_100=self.fat_per_100 or 0.0,
        )

    def smart_portion(self) -> SmartPortion | None:
        """Return the detected portion when the model estimated one."""
        if not self.estimated_grams or not self.calories_estimate:
            return None
        return SmartPortion(
            grams=self.estimated_grams,
            calories=self.calories_estimate,
            confidence=self.confidence,
        )


class FoodAnalysis(BaseModel):
    """Structured output for food analysis."""

    foods: list[FoodCandidate]
