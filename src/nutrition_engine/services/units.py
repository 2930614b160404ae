"""Resolve free-text portion labels into multipliers of a 100g/ml base."""

import re
from collections.abc import Mapping
from dataclasses import dataclass, field

from nutrition_engine.domain.nutrition import Confidence, UnitResolution, UnitSuggestion
from nutrition_engine.services.unit_tables import DEFAULT_UNIT_TABLE, UnitGroup, UnitTable

DEFAULT_SUGGESTION_UNIT = "serving (100g)"

_WATER = "water"
_THOUSANDS_SEPARATOR = re.compile(r"(?<=\d),(?=\d{3}(?!\d))")
_EXPLICIT_AMOUNT = re.compile(r"(\d+(?:\.\d+)?)\s*(kg|ml|l|g)(?:rams?|ms?|s)?\b")
_AMOUNT_TO_BASE_UNITS = {"kg": 1000.0, "l": 1000.0, "ml": 1.0, "g": 1.0}
_PARENTHETICAL = re.compile(r"\([^)]*\)")
_WHITESPACE = re.compile(r"\s+")
_PIECE = re.compile(r"\bpieces?\b")


@dataclass
class UnitResolver:
    """Apply the ordered unit rules of a ``UnitTable``.

    Rules, first match wins:

    1. food names containing ``water`` resolve to zero;
    2. an explicit amount in the label (``650ml``, ``200 g``, ``1,000 mls``);
    3. known literal container labels (``glass (250ml)``, ``pint``);
    4. per-species piece weights for nuts and meat;
    5. the first keyword group matching the name, else the category;
    6. generic unit words (``serving``, ``large``, ``cup``);
    7. one 100g/ml unit with low confidence.

    The resolver never raises: blank or missing input degrades to the
    fallback instead.
    """

    table: UnitTable = field(default_factory=lambda: DEFAULT_UNIT_TABLE)

    def resolve(
        self, food_name: str | None, unit_label: str | None, category: str | None = ""
    ) -> UnitResolution:
        """Return the multiplier for one ``unit_label`` of ``food_name``."""
        name = _normalise(food_name)
        label = _normalise(unit_label)
        category_text = _normalise(category)

        if _WATER in name:
            return _resolution(0.0, "high", "name_override")

        amount = _explicit_amount(label)
        if amount is not None:
            return _resolution(amount / 100, "high", "explicit")

        literal = self.table.literals.get(label)
        if literal is not None:
            return _resolution(literal, "high", "literal")

        if _PIECE.search(label):
            for species in self.table.species_pieces:
                grams = species.grams_for(name)
                if grams is not None:
                    return _resolution(grams / 100, "medium", "species_piece")

        group = self.match_group(name, category_text)
        if group is not None:
            multiplier = self._lookup(group.multipliers, label)
            if multiplier is None:
                multiplier = self._sized_food_lookup(group.multipliers, label, name)
            if multiplier is not None:
                return _resolution(multiplier, "medium", "heuristic")

        generic = _exact_lookup(self.table.generic, label)
        if generic is not None:
            return _resolution(generic, "medium", "generic")
        generic = self._contained_lookup(self.table.generic, label)
        if generic is not None:
            return _resolution(generic, "low", "generic")

        return _resolution(1.0, "low", "fallback")

    def suggest(self, food_name: str | None, category: str | None = "") -> UnitSuggestion:
        """Return the default unit, quantity and unit options for a food."""
        group = self.match_group(_normalise(food_name), _normalise(category))
        if group is None:
            return UnitSuggestion(
                unit_label=DEFAULT_SUGGESTION_UNIT,
                quantity=1,
                options=tuple(self.table.generic),
            )
        return UnitSuggestion(
            unit_label=group.default_unit,
            quantity=group.default_quantity,
            options=tuple(group.multipliers),
        )

    def match_group(self, name: str, category: str) -> UnitGroup | None:
        """Return the first group matching the name, else the category."""
        for group in self.table.groups:
            if group.matches_name(name):
                return group
        if not category:
            return None
        for group in self.table.groups:
            if group.matches_category(category):
                return group
        return None

    def _lookup(self, multipliers: Mapping[str, float], label: str) -> float | None:
        exact = _exact_lookup(multipliers, label)
        if exact is not None:
            return exact
        return self._contained_lookup(multipliers, label)

    def _contained_lookup(self, multipliers: Mapping[str, float], label: str) -> float | None:
        """Find a unit noun inside a longer label, scaled by any size word.

        ``large glass`` becomes the ``glass`` multiplier times the ``large``
        modifier. Size words alone never count as the noun.
        """
        tokens = _singular(_strip_parenthetical(label)).split()
        if not tokens:
            return None
        modifiers = self.table.size_modifiers
        best_key: str | None = None
        for key in multipliers:
            if key in modifiers:
                continue
            if _contains_phrase(tokens, key.split()) and (
                best_key is None or len(key) > len(best_key)
            ):
                best_key = key
        if best_key is None:
            return None
        scale = 1.0
        remaining = _remove_phrase(tokens, best_key.split())
        for modifier in sorted(modifiers, key=len, reverse=True):
            if _contains_phrase(remaining, modifier.split()):
                scale = modifiers[modifier]
                break
        return multipliers[best_key] * scale

    def _sized_food_lookup(
        self, multipliers: Mapping[str, float], label: str, name: str
    ) -> float | None:
        """Read ``medium apple`` as the group's own ``medium`` entry.

        Applies only when every word besides the size word also appears in
        the food name.
        """
        tokens = _singular(_strip_parenthetical(label)).split()
        name_tokens = set(_singular(name).split())
        for size in sorted(self.table.size_modifiers, key=len, reverse=True):
            if size not in multipliers or not _contains_phrase(tokens, size.split()):
                continue
            remaining = _remove_phrase(tokens, size.split())
            if remaining and name_tokens.issuperset(remaining):
                return multipliers[size]
        return None


_DEFAULT_RESOLVER = UnitResolver()


def resolve_unit(
    food_name: str | None, unit_label: str | None, category: str | None = ""
) -> UnitResolution:
    """Resolve a unit label with the default unit table."""
    return _DEFAULT_RESOLVER.resolve(food_name, unit_label, category)


def suggest_unit(food_name: str | None, category: str | None = "") -> UnitSuggestion:
    """Suggest a default unit with the default unit table."""
    return _DEFAULT_RESOLVER.suggest(food_name, category)


def _resolution(multiplier: float, confidence: Confidence, source: str) -> UnitResolution:
    return UnitResolution(
        multiplier=multiplier,
        resolved_grams=multiplier * 100,
        confidence=confidence,
        source=source,
    )


def _normalise(value: str | None) -> str:
    if not value:
        return ""
    return _WHITESPACE.sub(" ", value).strip().lower()


def _explicit_amount(label: str) -> float | None:
    """Return the amount in grams or ml written in the label, if any."""
    match = _EXPLICIT_AMOUNT.search(_THOUSANDS_SEPARATOR.sub("", label))
    if match is None:
        return None
    return float(match.group(1)) * _AMOUNT_TO_BASE_UNITS[match.group(2)]


def _exact_lookup(multipliers: Mapping[str, float], label: str) -> float | None:
    """Match the label as written, without its parenthetical, then singular."""
    if not label:
        return None
    stripped = _strip_parenthetical(label)
    for candidate in (label, stripped, _singular(stripped)):
        if candidate in multipliers:
            return multipliers[candidate]
    return None


def _strip_parenthetical(label: str) -> str:
    return _WHITESPACE.sub(" ", _PARENTHETICAL.sub(" ", label)).strip()


def _singular(label: str) -> str:
    return " ".join(_singular_word(word) for word in label.split())


def _singular_word(word: str) -> str:
    if len(word) <= 3:
        return word
    if word.endswith("ies"):
        return f"{word[:-3]}y"
    if word.endswith(("sses", "ches", "shes")):
        return word[:-2]
    if word.endswith("s") and not word.endswith("ss"):
        return word[:-1]
    return word


def _contains_phrase(tokens: list[str], phrase: list[str]) -> bool:
    size = len(phrase)
    return any(tokens[index : index + size] == phrase for index in range(len(tokens) - size + 1))


def _remove_phrase(tokens: list[str], phrase: list[str]) -> list[str]:
    size = len(phrase)
    for index in range(len(tokens) - size + 1):
        if tokens[index : index + size] == phrase:
            return tokens[:index] + tokens[index + size :]
    return tokens
