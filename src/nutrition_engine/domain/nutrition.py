"""Nutrition domain models."""

from dataclasses import dataclass, field
from typing import Literal

Confidence = Literal["high", "medium", "low"]


@dataclass(frozen=True)
class MacroProfile:
    """Macronutrient profile for a food item or portion."""

    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float


@dataclass(frozen=True)
class FoodBase:
    """Reference nutrition per 100g or 100ml of a food."""

    id: str
    name: str
    category: str
    calories_per_100: float
    protein_per_100: float
    carbs_per_100: float
    fat_per_100: float

    @property
    def macros(self) -> MacroProfile:
        """Return the per-100 values as a macro profile."""
        return MacroProfile(
            calories=self.calories_per_100,
            protein_g=self.protein_per_100,
            carbs_g=self.carbs_per_100,
            fat_g=self.fat_per_100,
        )


@dataclass(frozen=True)
class UnitResolution:
    """Multiplier for one unit relative to a 100g/ml base."""

    multiplier: float
    resolved_grams: float
    confidence: Confidence
    source: str


@dataclass(frozen=True)
class UnitSuggestion:
    """Default unit and quantity to offer for a food."""

    unit_label: str
    quantity: float
    options: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class SmartPortion:
    """AI-detected reference portion for a food."""

    grams: float
    calories: float
    protein_g: float | None = None
    carbs_g: float | None = None
    fat_g: float | None = None
    confidence: float | None = None


@dataclass(frozen=True)
class PortionNutrients:
    """Concrete nutrition for a resolved portion."""

    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float
    total_grams: float
    used_smart_portion: bool = False

    @property
    def gram_equivalent(self) -> str:
        """Approximate weight label such as ``~150g``."""
        if self.total_grams < 1:
            return f"~{self.total_grams:g}g"
        return f"~{int(self.total_grams + 0.5)}g"

    @property
    def macros(self) -> MacroProfile:
        """Return the portion values as a macro profile."""
        return MacroProfile(
            calories=self.calories,
            protein_g=self.protein_g,
            carbs_g=self.carbs_g,
            fat_g=self.fat_g,
        )


@dataclass(frozen=True)
class CalorieCheck:
    """Advisory result of a calorie density check."""

    is_valid: bool
    warning: str | None = None
