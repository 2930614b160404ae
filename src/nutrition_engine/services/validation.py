"""Advisory calorie density checks."""

import math
import re
from dataclasses import dataclass, field

from nutrition_engine.domain.nutrition import CalorieCheck
from nutrition_engine.services.unit_tables import keyword_pattern


@dataclass(frozen=True)
class CalorieBand:
    """Plausible calories per 100g for a family of foods."""

    name: str
    low: float
    high: float
    pattern: re.Pattern[str] | None = None


DEFAULT_BAND = CalorieBand(name="default", low=0, high=900)

DEFAULT_BANDS = (
    CalorieBand(
        name="oils",
        low=800,
        high=950,
        pattern=keyword_pattern("oil", "oils", "ghee", "lard", "margarine"),
    ),
    CalorieBand(
        name="nuts",
        low=400,
        high=700,
        pattern=keyword_pattern(
            "nut",
            "nuts",
            "almond",
            "almonds",
            "cashew",
            "cashews",
            "peanut",
            "peanuts",
            "walnut",
            "walnuts",
            "pistachio",
            "pistachios",
            "seeds",
        ),
    ),
    CalorieBand(
        name="beverages",
        low=0,
        high=150,
        pattern=keyword_pattern(
            "beverage",
            "beverages",
            "drink",
            "drinks",
            "juice",
            "tea",
            "coffee",
            "milk",
            "soda",
            "cola",
            "lassi",
            "shake",
            "smoothie",
            "beer",
            "wine",
            "water",
        ),
    ),
    CalorieBand(
        name="grains",
        low=100,
        high=400,
        pattern=keyword_pattern(
            "grain",
            "grains",
            "cereal",
            "cereals",
            "rice",
            "bread",
            "roti",
            "chapati",
            "naan",
            "paratha",
            "oats",
            "pasta",
            "noodles",
            "wheat",
            "poha",
            "quinoa",
        ),
    ),
    CalorieBand(
        name="fruits",
        low=20,
        high=100,
        pattern=keyword_pattern(
            "fruit",
            "fruits",
            "apple",
            "banana",
            "orange",
            "mango",
            "grapes",
            "berries",
            "papaya",
            "watermelon",
            "melon",
            "pineapple",
            "guava",
            "pomegranate",
            "kiwi",
            "pear",
        ),
    ),
    CalorieBand(
        name="vegetables",
        low=10,
        high=80,
        pattern=keyword_pattern(
            "vegetable",
            "vegetables",
            "salad",
            "spinach",
            "broccoli",
            "cabbage",
            "carrot",
            "cucumber",
            "tomato",
            "lettuce",
            "cauliflower",
            "okra",
            "bhindi",
            "palak",
            "gobi",
        ),
    ),
)


@dataclass
class CalorieValidator:
    """Compare calorie density against a band picked by name or category."""

    bands: tuple[CalorieBand, ...] = field(default_factory=lambda: DEFAULT_BANDS)
    default_band: CalorieBand = DEFAULT_BAND

    def validate(
        self, name: str, calories: float, total_grams: float, category: str = ""
    ) -> CalorieCheck:
        """Return an advisory check; the values themselves are never changed."""
        label = name.strip() or "Food"
        if not _finite(calories) or not _finite(total_grams):
            return CalorieCheck(is_valid=False, warning=f"{label}: calories are not a number.")
        if calories < 0:
            return CalorieCheck(
                is_valid=False,
                warning=f"{label}: calories cannot be negative ({calories:g}).",
            )
        if total_grams <= 0:
            if calories > 0:
                return CalorieCheck(
                    is_valid=False,
                    warning=f"{label}: {calories:g} cal reported for a 0g portion.",
                )
            return CalorieCheck(is_valid=True)

        band = self.band_for(name, category)
        density = calories / total_grams * 100
        if density > band.high:
            return CalorieCheck(
                is_valid=False,
                warning=(
                    f"{label}: calories seem too high ({density:.0f} cal/100g). "
                    f"Expected {band.low:g}-{band.high:g} cal/100g."
                ),
            )
        if density < band.low:
            return CalorieCheck(
                is_valid=False,
                warning=(
                    f"{label}: calories seem too low ({density:.0f} cal/100g). "
                    f"Expected {band.low:g}-{band.high:g} cal/100g."
                ),
            )
        return CalorieCheck(is_valid=True)

    def band_for(self, name: str, category: str = "") -> CalorieBand:
        """Pick the band from name keywords first, then category keywords."""
        for text in (name.lower(), (category or "").lower()):
            if not text:
                continue
            for band in self.bands:
                if band.pattern is not None and band.pattern.search(text):
                    return band
        return self.default_band


_DEFAULT_VALIDATOR = CalorieValidator()


def validate_calories(
    name: str, calories: float, total_grams: float, category: str = ""
) -> CalorieCheck:
    """Check calorie density with the default bands."""
    return _DEFAULT_VALIDATOR.validate(name, calories, total_grams, category)


def _finite(value: float) -> bool:
    return isinstance(value, int | float) and math.isfinite(value)
