"""Versioned unit multiplier tables used by the unit resolver.

Multipliers are relative to a 100g/ml base, so a 50g roti is ``0.5`` and a
250ml glass is ``2.5``. Group order matters: the first group whose keywords
appear in the food name wins, so dishes are listed before their ingredients
(``chicken biryani`` is rice, ``potato chips`` is a packaged snack).
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass, field

UNIT_TABLE_VERSION = "2024.2"


def keyword_pattern(*keywords: str) -> re.Pattern[str]:
    """Compile a whole-word alternation for the given keywords."""
    escaped = sorted((re.escape(keyword) for keyword in keywords), key=len, reverse=True)
    return re.compile(r"\b(?:" + "|".join(escaped) + r")\b")


@dataclass(frozen=True)
class UnitGroup:
    """Keyword group with a default unit and its own multipliers."""

    name: str
    pattern: re.Pattern[str]
    default_unit: str
    multipliers: Mapping[str, float]
    default_quantity: float = 1.0
    categories: tuple[str, ...] = ()

    def matches_name(self, food_name: str) -> bool:
        """Return True when the (lower-cased) name has one of the keywords."""
        return self.pattern.search(food_name) is not None

    def matches_category(self, category: str) -> bool:
        """Return True when the (lower-cased) category names this group."""
        return any(keyword in category for keyword in self.categories)


@dataclass(frozen=True)
class SpeciesPieces:
    """Literal gram weight of one piece, keyed by species keyword."""

    pattern: re.Pattern[str]
    grams: Mapping[str, float]
    default_grams: float | None = None

    def grams_for(self, food_name: str) -> float | None:
        """Return the piece weight for the name, if it names a known species."""
        if self.pattern.search(food_name) is None:
            return None
        for keyword, grams in self.grams.items():
            if re.search(rf"\b{re.escape(keyword)}", food_name):
                return grams
        return self.default_grams


@dataclass(frozen=True)
class UnitTable:
    """All data the unit resolver needs, loaded once and passed around."""

    version: str
    literals: Mapping[str, float]
    species_pieces: tuple[SpeciesPieces, ...]
    groups: tuple[UnitGroup, ...]
    generic: Mapping[str, float]
    size_modifiers: Mapping[str, float] = field(default_factory=dict)


NUT_PIECES = SpeciesPieces(
    pattern=keyword_pattern(
        "nut",
        "nuts",
        "mixed nuts",
        "trail mix",
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
        "hazelnut",
        "hazelnuts",
        "pecan",
        "pecans",
    ),
    grams={
        "cashew": 1.5,
        "almond": 1.2,
        "peanut": 0.8,
        "walnut": 2.5,
        "pistachio": 0.7,
    },
    default_grams=1.5,
)

MEAT_PIECES = SpeciesPieces(
    pattern=keyword_pattern("chicken", "fish", "pork", "beef"),
    grams={
        "chicken": 80.0,
        "fish": 100.0,
        "pork": 75.0,
        "beef": 90.0,
    },
)


_BEVERAGE_GROUPS = (
    UnitGroup(
        name="tea_coffee",
        pattern=keyword_pattern(
            "tea", "chai", "coffee", "latte", "cappuccino", "espresso", "mocha"
        ),
        default_unit="cup (240ml)",
        multipliers={
            "cup": 2.4,
            "small cup": 1.5,
            "large cup": 3.5,
            "mug": 2.5,
            "glass": 2.5,
            "shot": 0.3,
        },
    ),
    UnitGroup(
        name="soft_drink",
        pattern=keyword_pattern(
            "cola",
            "coke",
            "coca-cola",
            "pepsi",
            "sprite",
            "fanta",
            "soda",
            "soft drink",
            "ginger ale",
            "thums up",
            "limca",
        ),
        default_unit="can (330ml)",
        multipliers={
            "can": 3.3,
            "bottle": 5.0,
            "small bottle": 2.5,
            "large bottle": 7.5,
            "glass": 2.5,
            "cup": 2.4,
        },
    ),
    UnitGroup(
        name="juice",
        pattern=keyword_pattern("juice", "smoothie", "lemonade", "nimbu pani"),
        default_unit="glass (250ml)",
        multipliers={
            "glass": 2.5,
            "small glass": 1.5,
            "large glass": 3.5,
            "cup": 2.4,
            "bottle": 5.0,
        },
    ),
    UnitGroup(
        name="dairy_drink",
        pattern=keyword_pattern(
            "milk", "lassi", "buttermilk", "chaas", "milkshake", "shake"
        ),
        default_unit="glass (250ml)",
        multipliers={
            "glass": 2.5,
            "small glass": 1.5,
            "large glass": 3.5,
            "cup": 2.4,
            "bottle": 5.0,
        },
    ),
    UnitGroup(
        name="beer",
        pattern=keyword_pattern("beer", "lager", "ale", "stout"),
        default_unit="bottle (650ml)",
        multipliers={
            "bottle": 6.5,
            "small bottle": 3.3,
            "can": 3.3,
            "pint": 5.68,
            "half pint": 2.84,
            "glass": 3.0,
            "mug": 5.0,
        },
    ),
    UnitGroup(
        name="wine",
        pattern=keyword_pattern("wine", "champagne", "prosecco", "sangria"),
        default_unit="glass (150ml)",
        multipliers={
            "glass": 1.5,
            "small glass": 1.0,
            "large glass": 2.5,
            "bottle": 7.5,
        },
    ),
    UnitGroup(
        name="spirits",
        pattern=keyword_pattern(
            "whiskey", "whisky", "vodka", "rum", "gin", "brandy", "tequila", "scotch"
        ),
        default_unit="shot (30ml)",
        multipliers={
            "shot": 0.3,
            "peg": 0.3,
            "small peg": 0.3,
            "large peg": 0.6,
            "double": 0.6,
            "glass": 0.6,
        },
    ),
    UnitGroup(
        name="beverage",
        pattern=keyword_pattern("drink", "beverage"),
        default_unit="glass (250ml)",
        multipliers={
            "glass": 2.5,
            "cup": 2.4,
            "mug": 2.5,
            "bottle": 5.0,
            "can": 3.3,
        },
        categories=("beverage", "drink"),
    ),
)

_GRAIN_GROUPS = (
    UnitGroup(
        name="special_rice",
        pattern=keyword_pattern("biryani", "pulao", "pilaf", "fried rice", "khichdi"),
        default_unit="medium portion (200g)",
        multipliers={
            "small portion": 1.5,
            "medium portion": 2.0,
            "large portion": 3.0,
            "serving": 2.0,
            "bowl": 2.0,
            "plate": 3.0,
            "cup": 1.6,
        },
    ),
    UnitGroup(
        name="rice",
        pattern=keyword_pattern(
            "rice", "poha", "upma", "quinoa", "oats", "oatmeal", "porridge"
        ),
        default_unit="medium portion (150g)",
        multipliers={
            "small portion": 1.0,
            "medium portion": 1.5,
            "large portion": 2.0,
            "serving": 1.5,
            "bowl": 1.5,
            "plate": 2.5,
            "cup": 1.6,
        },
        categories=("grain", "cereal"),
    ),
)

_CURRY_GROUPS = (
    UnitGroup(
        name="dal",
        pattern=keyword_pattern(
            "dal", "daal", "dhal", "sambhar", "sambar", "rasam", "kadhi"
        ),
        default_unit="medium bowl (200g)",
        multipliers={
            "small bowl": 1.5,
            "medium bowl": 2.0,
            "large bowl": 3.0,
            "bowl": 2.0,
            "katori": 1.5,
            "cup": 2.4,
            "serving": 2.0,
        },
    ),
    UnitGroup(
        name="soup",
        pattern=keyword_pattern("soup", "broth"),
        default_unit="bowl (250ml)",
        multipliers={
            "bowl": 2.5,
            "small bowl": 1.5,
            "large bowl": 3.5,
            "cup": 2.4,
            "mug": 2.5,
        },
    ),
    UnitGroup(
        name="curry",
        pattern=keyword_pattern(
            "curry", "sabzi", "sabji", "gravy", "masala", "korma", "stew"
        ),
        default_unit="serving (150g)",
        multipliers={
            "serving": 1.5,
            "small serving": 1.0,
            "large serving": 2.25,
            "bowl": 2.0,
            "small bowl": 1.5,
            "katori": 1.5,
            "plate": 2.5,
        },
        categories=("curry", "main course"),
    ),
)

_BREAD_GROUPS = (
    UnitGroup(
        name="roti",
        pattern=keyword_pattern("roti", "chapati", "chapatti", "phulka"),
        default_unit="medium roti (50g)",
        default_quantity=2,
        multipliers={
            "roti": 0.5,
            "chapati": 0.5,
            "small roti": 0.35,
            "medium roti": 0.5,
            "large roti": 0.7,
            "piece": 0.5,
        },
    ),
    UnitGroup(
        name="naan",
        pattern=keyword_pattern("naan", "paratha", "kulcha", "bhatura"),
        default_unit="piece (80g)",
        multipliers={
            "piece": 0.8,
            "half": 0.4,
            "small": 0.6,
            "medium": 0.8,
            "large": 1.2,
        },
    ),
    UnitGroup(
        name="idli",
        pattern=keyword_pattern("idli", "idly", "vada", "medu vada"),
        default_unit="piece (30g)",
        default_quantity=3,
        multipliers={
            "piece": 0.3,
            "small": 0.2,
            "large": 0.45,
            "plate": 1.2,
        },
    ),
    UnitGroup(
        name="dosa",
        pattern=keyword_pattern("dosa", "uttapam", "appam", "cheela"),
        default_unit="piece (100g)",
        multipliers={
            "piece": 1.0,
            "small": 0.7,
            "medium": 1.0,
            "large": 1.5,
        },
    ),
    UnitGroup(
        name="bread",
        pattern=keyword_pattern(
            "bread", "toast", "bun", "bagel", "croissant", "pav", "baguette"
        ),
        default_unit="slice (25g)",
        default_quantity=2,
        multipliers={
            "slice": 0.25,
            "bread slice": 0.25,
            "toast": 0.25,
            "thin slice": 0.15,
            "thick slice": 0.4,
            "piece": 0.25,
            "bun": 0.5,
        },
        categories=("bread", "bakery"),
    ),
)

_FAST_FOOD_GROUPS = (
    UnitGroup(
        name="pizza",
        pattern=keyword_pattern("pizza"),
        default_unit="slice (120g)",
        multipliers={
            "slice": 1.2,
            "small slice": 0.8,
            "large slice": 1.6,
            "piece": 1.2,
            "whole": 7.2,
        },
    ),
    UnitGroup(
        name="burger",
        pattern=keyword_pattern("burger", "hamburger", "cheeseburger", "whopper"),
        default_unit="piece (150g)",
        multipliers={
            "piece": 1.5,
            "small": 1.1,
            "medium": 1.5,
            "large": 2.2,
        },
    ),
    UnitGroup(
        name="sandwich",
        pattern=keyword_pattern(
            "sandwich", "sub", "wrap", "frankie", "shawarma", "burrito"
        ),
        default_unit="piece (150g)",
        multipliers={
            "piece": 1.5,
            "half": 0.75,
            "small": 1.0,
            "large": 2.2,
            "footlong": 3.0,
        },
    ),
    UnitGroup(
        name="hot_dog",
        pattern=keyword_pattern("hot dog", "hotdog"),
        default_unit="piece (75g)",
        multipliers={"piece": 0.75},
    ),
    UnitGroup(
        name="fries",
        pattern=keyword_pattern("fries", "french fries"),
        default_unit="medium portion (115g)",
        multipliers={
            "small portion": 0.7,
            "medium portion": 1.15,
            "large portion": 1.5,
            "small": 0.7,
            "medium": 1.15,
            "large": 1.5,
        },
    ),
)

_PACKAGED_GROUPS = (
    UnitGroup(
        name="packaged_snack",
        pattern=keyword_pattern(
            "chips",
            "crisps",
            "crackers",
            "biscuit",
            "biscuits",
            "cookie",
            "cookies",
            "namkeen",
            "bhujia",
            "popcorn",
            "nachos",
            "pretzels",
        ),
        default_unit="small pack",
        multipliers={
            "small pack": 0.3,
            "medium pack": 0.5,
            "large pack": 0.9,
            "pack": 0.5,
            "packet": 0.5,
            "piece": 0.06,
            "handful": 0.21,
            "cup": 0.3,
            "bowl": 0.5,
        },
        categories=("snack", "packaged"),
    ),
)

_SNACK_AND_SWEET_GROUPS = (
    UnitGroup(
        name="samosa",
        pattern=keyword_pattern("samosa", "samosas", "kachori"),
        default_unit="piece (100g)",
        multipliers={"piece": 1.0, "small": 0.6, "large": 1.5},
    ),
    UnitGroup(
        name="fried_snack",
        pattern=keyword_pattern(
            "pakora",
            "pakoda",
            "bhaji",
            "bajji",
            "cutlet",
            "tikki",
            "momo",
            "momos",
            "spring roll",
            "nuggets",
        ),
        default_unit="piece",
        default_quantity=2,
        multipliers={
            "piece": 0.25,
            "plate": 1.5,
            "small plate": 1.0,
            "serving": 1.0,
        },
    ),
    UnitGroup(
        name="ice_cream",
        pattern=keyword_pattern("ice cream", "kulfi", "gelato"),
        default_unit="scoop",
        multipliers={
            "scoop": 0.65,
            "small scoop": 0.45,
            "large scoop": 0.9,
            "cone": 0.8,
            "stick": 0.6,
            "cup": 1.3,
            "bowl": 1.3,
        },
    ),
    UnitGroup(
        name="cake",
        pattern=keyword_pattern(
            "cake", "pastry", "brownie", "muffin", "cupcake", "pie"
        ),
        default_unit="slice",
        multipliers={
            "slice": 0.8,
            "small slice": 0.5,
            "large slice": 1.2,
            "piece": 0.8,
        },
    ),
    UnitGroup(
        name="sweets",
        pattern=keyword_pattern(
            "sweet",
            "sweets",
            "laddu",
            "ladoo",
            "gulab jamun",
            "rasgulla",
            "barfi",
            "burfi",
            "jalebi",
            "halwa",
            "kheer",
            "mithai",
            "dessert",
            "chocolate",
            "candy",
        ),
        default_unit="piece",
        multipliers={
            "piece": 0.4,
            "small piece": 0.25,
            "large piece": 0.6,
            "bar": 0.45,
            "bowl": 1.5,
            "serving": 1.0,
        },
        categories=("sweet", "dessert"),
    ),
)

_PASTA_GROUPS = (
    UnitGroup(
        name="pasta",
        pattern=keyword_pattern(
            "pasta",
            "spaghetti",
            "macaroni",
            "noodles",
            "maggi",
            "ramen",
            "chowmein",
            "hakka",
        ),
        default_unit="bowl (200g)",
        multipliers={
            "bowl": 2.0,
            "small bowl": 1.5,
            "large bowl": 3.0,
            "plate": 2.5,
            "cup": 1.4,
            "serving": 2.0,
            "packet": 0.7,
        },
    ),
)

_PROTEIN_GROUPS = (
    UnitGroup(
        name="egg",
        pattern=keyword_pattern("egg", "eggs", "omelette", "omelet", "bhurji"),
        default_unit="piece (50g)",
        multipliers={
            "piece": 0.5,
            "egg": 0.5,
            "small": 0.4,
            "medium": 0.5,
            "large": 0.6,
            "serving": 1.0,
        },
    ),
    UnitGroup(
        name="paneer",
        pattern=keyword_pattern("paneer", "tofu", "cottage cheese"),
        default_unit="serving (100g)",
        multipliers={
            "serving": 1.0,
            "small serving": 0.5,
            "cube": 0.2,
            "piece": 0.25,
            "slice": 0.3,
            "bowl": 1.5,
        },
    ),
    UnitGroup(
        name="yogurt",
        pattern=keyword_pattern("dahi", "yogurt", "yoghurt", "curd", "raita"),
        default_unit="bowl (150g)",
        multipliers={
            "bowl": 1.5,
            "small bowl": 1.0,
            "katori": 1.0,
            "cup": 2.4,
            "tablespoon": 0.15,
        },
        categories=("dairy",),
    ),
    UnitGroup(
        name="meat",
        pattern=keyword_pattern(
            "chicken",
            "fish",
            "mutton",
            "lamb",
            "pork",
            "beef",
            "prawn",
            "prawns",
            "shrimp",
            "salmon",
            "tuna",
            "turkey",
            "kebab",
            "tikka",
            "keema",
        ),
        default_unit="serving (120g)",
        multipliers={
            "serving": 1.2,
            "small serving": 0.8,
            "large serving": 1.8,
            "piece": 0.8,
            "leg": 1.0,
            "breast": 1.5,
            "fillet": 1.2,
            "bowl": 2.0,
            "plate": 2.5,
        },
        categories=("meat", "seafood", "poultry"),
    ),
)

_NUT_GROUPS = (
    UnitGroup(
        name="nuts",
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
            "hazelnut",
            "pecan",
            "raisin",
            "raisins",
            "dates",
            "figs",
            "anjeer",
            "makhana",
            "dry fruits",
            "dried fruit",
            "trail mix",
        ),
        default_unit="handful",
        multipliers={
            "handful": 0.3,
            "small handful": 0.2,
            "large handful": 0.45,
            "piece": 0.05,
            "tablespoon": 0.1,
            "cup": 1.4,
            "serving": 0.3,
        },
        categories=("nut", "dry fruit"),
    ),
)

_FRUIT_GROUPS = (
    UnitGroup(
        name="apple",
        pattern=keyword_pattern("apple", "apples"),
        default_unit="medium (180g)",
        multipliers={
            "small": 1.3,
            "medium": 1.8,
            "large": 2.4,
            "piece": 1.8,
            "whole": 1.8,
            "slice": 0.2,
            "cup": 1.25,
            "bowl": 2.0,
        },
    ),
    UnitGroup(
        name="orange",
        pattern=keyword_pattern("orange", "oranges", "mosambi", "sweet lime"),
        default_unit="medium (180g)",
        multipliers={
            "small": 1.3,
            "medium": 1.8,
            "large": 2.4,
            "piece": 1.8,
            "whole": 1.8,
            "segment": 0.1,
            "cup": 1.8,
        },
    ),
    UnitGroup(
        name="banana",
        pattern=keyword_pattern("banana", "bananas"),
        default_unit="medium (120g)",
        multipliers={
            "small": 0.9,
            "medium": 1.2,
            "large": 1.5,
            "piece": 1.2,
            "whole": 1.2,
            "slice": 0.1,
            "cup": 1.5,
        },
    ),
    UnitGroup(
        name="mango",
        pattern=keyword_pattern("mango", "mangoes"),
        default_unit="medium (200g)",
        multipliers={
            "small": 1.5,
            "medium": 2.0,
            "large": 3.0,
            "piece": 2.0,
            "whole": 2.0,
            "slice": 0.4,
            "cup": 1.65,
            "bowl": 2.0,
        },
    ),
    UnitGroup(
        name="berries",
        pattern=keyword_pattern(
            "grapes",
            "berries",
            "strawberry",
            "strawberries",
            "blueberries",
            "cherries",
            "cherry",
        ),
        default_unit="handful",
        multipliers={
            "handful": 0.75,
            "cup": 1.5,
            "bowl": 2.0,
            "piece": 0.05,
        },
    ),
    UnitGroup(
        name="fruit",
        pattern=keyword_pattern(
            "fruit",
            "fruits",
            "papaya",
            "watermelon",
            "melon",
            "pineapple",
            "guava",
            "pomegranate",
            "kiwi",
            "pear",
            "peach",
            "plum",
            "chikoo",
        ),
        default_unit="medium piece",
        multipliers={
            "piece": 1.5,
            "small": 1.0,
            "medium": 1.5,
            "large": 2.0,
            "medium piece": 1.5,
            "slice": 0.8,
            "cup": 1.5,
            "bowl": 2.0,
            "handful": 0.5,
        },
        categories=("fruit",),
    ),
)

_VEGETABLE_GROUPS = (
    UnitGroup(
        name="leafy_vegetable",
        pattern=keyword_pattern(
            "lettuce",
            "spinach",
            "cabbage",
            "kale",
            "palak",
            "methi",
            "leafy",
            "greens",
            "salad",
        ),
        default_unit="cup",
        multipliers={
            "cup": 0.3,
            "bowl": 0.8,
            "handful": 0.2,
            "plate": 1.0,
            "serving": 1.0,
        },
    ),
    UnitGroup(
        name="root_vegetable",
        pattern=keyword_pattern(
            "potato",
            "potatoes",
            "aloo",
            "sweet potato",
            "carrot",
            "carrots",
            "beetroot",
            "radish",
            "onion",
            "onions",
            "tomato",
            "tomatoes",
        ),
        default_unit="serving (100g)",
        multipliers={
            "piece": 1.2,
            "small": 0.8,
            "medium": 1.2,
            "large": 2.0,
            "cup": 1.3,
            "bowl": 1.5,
            "serving": 1.0,
        },
    ),
    UnitGroup(
        name="vegetable",
        pattern=keyword_pattern(
            "vegetable",
            "vegetables",
            "veg",
            "broccoli",
            "cauliflower",
            "gobi",
            "beans",
            "peas",
            "capsicum",
            "okra",
            "bhindi",
            "mushroom",
            "mushrooms",
            "corn",
            "zucchini",
            "eggplant",
            "brinjal",
        ),
        default_unit="serving (100g)",
        multipliers={
            "serving": 1.0,
            "small serving": 0.7,
            "large serving": 1.5,
            "cup": 1.0,
            "bowl": 1.5,
            "handful": 0.4,
        },
        categories=("vegetable",),
    ),
)


DEFAULT_UNIT_TABLE = UnitTable(
    version=UNIT_TABLE_VERSION,
    literals={
        "glass (250ml)": 2.5,
        "bottle (500ml)": 5.0,
        "bottle (650ml)": 6.5,
        "bottle (330ml)": 3.3,
        "can (330ml)": 3.3,
        "cup (240ml)": 2.4,
        "pint": 5.68,
        "half pint": 2.84,
        "shot": 0.3,
        "mug": 2.5,
    },
    species_pieces=(NUT_PIECES, MEAT_PIECES),
    groups=(
        *_BEVERAGE_GROUPS,
        *_GRAIN_GROUPS,
        *_CURRY_GROUPS,
        *_BREAD_GROUPS,
        *_FAST_FOOD_GROUPS,
        *_PACKAGED_GROUPS,
        *_SNACK_AND_SWEET_GROUPS,
        *_PASTA_GROUPS,
        *_PROTEIN_GROUPS,
        *_NUT_GROUPS,
        *_FRUIT_GROUPS,
        *_VEGETABLE_GROUPS,
    ),
    generic={
        "serving": 1.0,
        "half serving": 0.5,
        "quarter": 0.25,
        "small": 0.7,
        "medium": 1.0,
        "large": 1.4,
        "extra large": 1.8,
        "piece": 0.8,
        "slice": 0.6,
        "scoop": 0.5,
        "cup": 2.4,
        "glass": 2.5,
        "bowl": 2.0,
        "bottle": 5.0,
        "can": 3.3,
        "small portion": 0.7,
        "medium portion": 1.0,
        "large portion": 1.5,
        "handful": 0.3,
        "tablespoon": 0.15,
        "tbsp": 0.15,
        "teaspoon": 0.05,
        "tsp": 0.05,
        "ml": 0.01,
        "gram": 0.01,
        "grams": 0.01,
        "g": 0.01,
    },
    size_modifiers={
        "small": 0.7,
        "medium": 1.0,
        "large": 1.4,
        "extra large": 1.8,
        "half": 0.5,
        "quarter": 0.25,
    },
)
