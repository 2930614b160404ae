"""Portion calculation from per-100 base nutrition."""

import math
from decimal import ROUND_HALF_UP, Decimal

from nutrition_engine.domain.nutrition import (
    MacroProfile,
    PortionNutrients,
    SmartPortion,
)

_WHOLE = Decimal("1")
_TENTH = Decimal("0.1")


def compute_portion(
    base: MacroProfile, multiplier: float | None, quantity: float | None
) -> PortionNutrients:
    """Scale per-100 values to ``quantity`` units of ``multiplier`` each.

    Calories are rounded to whole numbers and macros to one decimal, half up.
    Negative, missing or non-finite inputs count as zero.
    """
    factor = _clean(multiplier) * _clean(quantity)
    return PortionNutrients(
        calories=round_calories(_clean(base.calories) * factor),
        protein_g=round_macro(_clean(base.protein_g) * factor),
        carbs_g=round_macro(_clean(base.carbs_g) * factor),
        fat_g=round_macro(_clean(base.fat_g) * factor),
        total_grams=factor * 100,
    )


def compute_smart_portion(
    base: MacroProfile,
    smart: SmartPortion | None,
    multiplier: float | None,
    quantity: float | None,
) -> PortionNutrients:
    """Scale an AI-detected reference portion to the resolved weight.

    Calories follow the detected calorie density. Macros use the detected
    values when present and the base values otherwise. Without a usable
    reference portion this is the same as ``compute_portion``.
    """
    if smart is None or _clean(smart.grams) <= 0 or _clean(smart.calories) <= 0:
        return compute_portion(base, multiplier, quantity)

    total_grams = _clean(multiplier) * _clean(quantity) * 100
    ratio = total_grams / smart.grams
    base_factor = total_grams / 100

    def scaled(detected: float | None, per_100: float) -> float:
        if detected is not None and math.isfinite(detected) and detected >= 0:
            return round_macro(detected * ratio)
        return round_macro(_clean(per_100) * base_factor)

    return PortionNutrients(
        calories=round_calories(smart.calories * ratio),
        protein_g=scaled(smart.protein_g, base.protein_g),
        carbs_g=scaled(smart.carbs_g, base.carbs_g),
        fat_g=scaled(smart.fat_g, base.fat_g),
        total_grams=total_grams,
        used_smart_portion=True,
    )


def format_portion(quantity: float, unit_label: str, nutrients: PortionNutrients) -> str:
    """Render a portion like ``2 medium roti (~100g) = 240 cal``."""
    unit = unit_label.split("(", 1)[0].strip() or unit_label.strip()
    return f"{quantity:g} {unit} ({nutrients.gram_equivalent}) = {nutrients.calories:.0f} cal"


def round_calories(value: float) -> float:
    """Round calories to a whole number, half up."""
    return _round_half_up(value, _WHOLE)


def round_macro(value: float) -> float:
    """Round a macro amount to one decimal, half up."""
    return _round_half_up(value, _TENTH)


def _round_half_up(value: float, step: Decimal) -> float:
    if not math.isfinite(value):
        return 0.0
    return float(Decimal(repr(value)).quantize(step, rounding=ROUND_HALF_UP))


def _clean(value: float | None) -> float:
    """Coerce missing, negative or non-finite numbers to zero."""
    if value is None:
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number) or number < 0:
        return 0.0
    return number
