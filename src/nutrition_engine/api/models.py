"""Request and response models for the HTTP API."""

from datetime import date, datetime

from pydantic import BaseModel, Field, model_validator

from nutrition_engine.domain.meals import DailySummaryRecord, MealEntry
from nutrition_engine.domain.nutrition import (
    CalorieCheck,
    FoodBase,
    MacroProfile,
    PortionNutrients,
    SmartPortion,
    UnitResolution,
    UnitSuggestion,
)
from nutrition_engine.domain.trends import TrendPoint


class UnitResolveRequest(BaseModel):
    """Unit label to resolve for a food."""

    food_name: str = ""
    unit_label: str = ""
    category: str = ""


class UnitResolutionModel(BaseModel):
    """Resolved unit multiplier."""

    multiplier: float
    resolved_grams: float
    confidence: str
    source: str

    @classmethod
    def from_domain(cls, resolution: UnitResolution) -> "UnitResolutionModel":
        return cls(
            multiplier=resolution.multiplier,
            resolved_grams=resolution.resolved_grams,
            confidence=resolution.confidence,
            source=resolution.source,
        )


class UnitSuggestionModel(BaseModel):
    """Default unit offered for a food."""

    unit_label: str
    quantity: float
    options: list[str]

    @classmethod
    def from_domain(cls, suggestion: UnitSuggestion) -> "UnitSuggestionModel":
        return cls(
            unit_label=suggestion.unit_label,
            quantity=suggestion.quantity,
            options=list(suggestion.options),
        )


class FoodBaseModel(BaseModel):
    """Base nutrition per 100g or 100ml supplied by the caller."""

    id: str = "custom"
    name: str = Field(min_length=1)
    category: str = ""
    calories_per_100: float
    protein_per_100: float = 0.0
    carbs_per_100: float = 0.0
    fat_per_100: float = 0.0

    def to_domain(self) -> FoodBase:
        return FoodBase(
            id=self.id,
            name=self.name,
            category=self.category,
            calories_per_100=self.calories_per_100,
            protein_per_100=self.protein_per_100,
            carbs_per_100=self.carbs_per_100,
            fat_per_100=self.fat_per_100,
        )


class SmartPortionModel(BaseModel):
    """AI-detected reference portion."""

    grams: float
    calories: float
    protein_g: float | None = None
    carbs_g: float | None = None
    fat_g: float | None = None
    confidence: float | None = None

    def to_domain(self) -> SmartPortion:
        return SmartPortion(
            grams=self.grams,
            calories=self.calories,
            protein_g=self.protein_g,
            carbs_g=self.carbs_g,
            fat_g=self.fat_g,
            confidence=self.confidence,
        )


class PortionRequest(BaseModel):
    """Portion of a food to compute."""

    food: FoodBaseModel
    unit_label: str
    quantity: float = Field(default=1.0, ge=0)
    smart_portion: SmartPortionModel | None = None


class PortionModel(BaseModel):
    """Computed portion with its unit resolution and calorie check."""

    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float
    total_grams: float
    gram_equivalent: str
    used_smart_portion: bool
    resolution: UnitResolutionModel
    is_valid: bool
    warning: str | None = None
    display: str

    @classmethod
    def from_domain(
        cls,
        nutrients: PortionNutrients,
        resolution: UnitResolution,
        check: CalorieCheck,
        display: str,
    ) -> "PortionModel":
        return cls(
            calories=nutrients.calories,
            protein_g=nutrients.protein_g,
            carbs_g=nutrients.carbs_g,
            fat_g=nutrients.fat_g,
            total_grams=nutrients.total_grams,
            gram_equivalent=nutrients.gram_equivalent,
            used_smart_portion=nutrients.used_smart_portion,
            resolution=UnitResolutionModel.from_domain(resolution),
            is_valid=check.is_valid,
            warning=check.warning,
            display=display,
        )


class MealEntryModel(BaseModel):
    """Logged meal entry with its frozen nutrition."""

    id: str = Field(min_length=1)
    food_ref: str | None = None
    food_name: str
    quantity: float
    unit_label: str
    calories: float = 0.0
    protein_g: float = 0.0
    carbs_g: float = 0.0
    fat_g: float = 0.0
    added_at: datetime | None = None

    @classmethod
    def from_domain(cls, entry: MealEntry) -> "MealEntryModel":
        snapshot = entry.nutrient_snapshot
        return cls(
            id=entry.id,
            food_ref=entry.food_ref,
            food_name=entry.food_name_snapshot,
            quantity=entry.quantity,
            unit_label=entry.unit_label,
            calories=snapshot.calories,
            protein_g=snapshot.protein_g,
            carbs_g=snapshot.carbs_g,
            fat_g=snapshot.fat_g,
            added_at=entry.added_at,
        )

    def to_domain(self) -> MealEntry:
        return MealEntry(
            id=self.id,
            food_ref=self.food_ref,
            food_name_snapshot=self.food_name,
            quantity=self.quantity,
            unit_label=self.unit_label,
            nutrient_snapshot=MacroProfile(
                calories=self.calories,
                protein_g=self.protein_g,
                carbs_g=self.carbs_g,
                fat_g=self.fat_g,
            ),
            added_at=self.added_at,
        )


class DailySummaryModel(BaseModel):
    """Daily summary record."""

    session_id: str
    date: date
    total_calories: float
    total_protein: float
    total_carbs: float
    total_fat: float
    calories_burned: float
    net_calories: float
    meal_data: list[MealEntryModel]

    @classmethod
    def from_domain(cls, record: DailySummaryRecord) -> "DailySummaryModel":
        return cls(
            session_id=record.session_id,
            date=record.date,
            total_calories=record.total_calories,
            total_protein=record.total_protein,
            total_carbs=record.total_carbs,
            total_fat=record.total_fat,
            calories_burned=record.calories_burned,
            net_calories=record.net_calories,
            meal_data=[MealEntryModel.from_domain(entry) for entry in record.meal_data],
        )

    @classmethod
    def empty(cls, session_id: str, day: date) -> "DailySummaryModel":
        return cls(
            session_id=session_id,
            date=day,
            total_calories=0,
            total_protein=0,
            total_carbs=0,
            total_fat=0,
            calories_burned=0,
            net_calories=0,
            meal_data=[],
        )


class AddMealRequest(BaseModel):
    """Food to add by catalog id or inline base nutrition."""

    food_id: str | None = None
    food: FoodBaseModel | None = None
    quantity: float = Field(default=1.0, gt=0)
    unit_label: str
    smart_portion: SmartPortionModel | None = None
    entry_id: str | None = None

    @model_validator(mode="after")
    def require_food(self) -> "AddMealRequest":
        if self.food is None and not self.food_id:
            raise ValueError("Either food or food_id is required")
        return self


class AddMealResponse(BaseModel):
    """Updated day with the entry that was added."""

    summary: DailySummaryModel
    entry: MealEntryModel
    portion: PortionModel


class ReplaceMealsRequest(BaseModel):
    """Complete meal data for a day."""

    entries: list[MealEntryModel]


class RemoveMealResponse(BaseModel):
    """Outcome of removing an entry."""

    removed: bool
    summary: DailySummaryModel


class TrendPointModel(BaseModel):
    """One row of the trend series."""

    date: date
    calories: float
    protein: float
    calories_burned: float
    weight: float | None
    target_calories: float
    target_protein: float

    @classmethod
    def from_domain(cls, point: TrendPoint) -> "TrendPointModel":
        return cls(
            date=point.date,
            calories=point.calories,
            protein=point.protein,
            calories_burned=point.calories_burned,
            weight=point.weight,
            target_calories=point.target_calories,
            target_protein=point.target_protein,
        )


class AnalyzeNameRequest(BaseModel):
    """Food name to analyze."""

    name: str = Field(min_length=1)
