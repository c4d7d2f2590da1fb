"""Keyword-based menu categories."""

import re

from howl2go.domain.combos import FoodCategory
from howl2go.domain.foods import FoodItem

_KEYWORDS: dict[FoodCategory, tuple[str, ...]] = {
    FoodCategory.DRINK: (
        "cola",
        "coke",
        "soda",
        "sprite",
        "pepsi",
        "drink",
        "shake",
        "milkshake",
        "smoothie",
        "coffee",
        "latte",
        "tea",
        "juice",
        "lemonade",
        "water",
        "frappe",
        "mocha",
    ),
    FoodCategory.DESSERT: (
        "pie",
        "sundae",
        "mcflurry",
        "cookie",
        "brownie",
        "cake",
        "ice cream",
        "cone",
        "donut",
        "churro",
        "blizzard",
    ),
    FoodCategory.SIDE: (
        "fries",
        "side",
        "onion rings",
        "hash brown",
        "tots",
        "coleslaw",
        "slaw",
        "side salad",
        "mashed",
        "corn",
        "bread",
        "biscuit",
        "apple slices",
    ),
}

# Checked in this order so "apple pie shake" is a drink and "side salad" a side.
_PRIORITY = (FoodCategory.DRINK, FoodCategory.DESSERT, FoodCategory.SIDE)

_PATTERNS = {
    category: re.compile(
        r"\b(?:" + "|".join(re.escape(keyword) for keyword in keywords) + r")s?\b"
    )
    for category, keywords in _KEYWORDS.items()
}

COMPLEMENTS: dict[FoodCategory, tuple[FoodCategory, ...]] = {
    FoodCategory.MAIN: (FoodCategory.SIDE, FoodCategory.DRINK, FoodCategory.DESSERT),
    FoodCategory.SIDE: (FoodCategory.MAIN, FoodCategory.DRINK),
    FoodCategory.DRINK: (FoodCategory.MAIN, FoodCategory.SIDE, FoodCategory.DESSERT),
    FoodCategory.DESSERT: (FoodCategory.DRINK, FoodCategory.MAIN),
}


def classify(item: FoodItem) -> FoodCategory:
    """Return the menu category for an item, defaulting to a main."""
    name = item.name.lower()
    for category in _PRIORITY:
        if _PATTERNS[category].search(name):
            return category
    return FoodCategory.MAIN


def is_complementary(main: FoodItem, candidate: FoodItem) -> bool:
    """Return whether the candidate's category complements the main item."""
    return classify(candidate) in COMPLEMENTS[classify(main)]
