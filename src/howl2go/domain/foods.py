"""Domain models for the food catalogue."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class FoodItem:
    """A menu item with price, nutrients and ingredients."""

    id: str
    company: str
    name: str
    price: float | None = None
    calories: float | None = None
    calories_from_fat: float | None = None
    total_fat: float | None = None
    saturated_fat: float | None = None
    trans_fat: float | None = None
    cholesterol: float | None = None
    sodium: float | None = None
    carbs: float | None = None
    fiber: float | None = None
    sugars: float | None = None
    protein: float | None = None
    weight_watchers_points: float | None = None
    ingredients: frozenset[str] = field(default_factory=frozenset)


@dataclass(frozen=True)
class ScoredFood:
    """A food item annotated with its ingredient match score."""

    item: FoodItem
    match_score: int


@dataclass(frozen=True)
class IngredientQuery:
    """Normalized include/exclude filter with pagination."""

    include: tuple[str, ...] = ()
    exclude: tuple[str, ...] = ()
    page: int = 1
    limit: int = 20


@dataclass(frozen=True)
class IngredientPage:
    """One page of ingredient matches plus the total match count."""

    items: list[ScoredFood]
    total: int
    page: int
    limit: int


NUTRIENT_FIELDS = (
    "calories",
    "calories_from_fat",
    "total_fat",
    "saturated_fat",
    "trans_fat",
    "cholesterol",
    "sodium",
    "carbs",
    "fiber",
    "sugars",
    "protein",
    "weight_watchers_points",
)


def normalize_ingredient(value: str) -> str:
    """Return the canonical (trimmed, lower-cased) ingredient name."""
    return value.strip().lower()


def normalize_ingredients(values: object) -> frozenset[str]:
    """Normalize a raw ingredient list into a set, dropping blanks."""
    if not isinstance(values, (list, tuple, set, frozenset)):
        return frozenset()
    return frozenset(
        normalize_ingredient(value)
        for value in values
        if isinstance(value, str) and value.strip()
    )


def serialize_food(item: FoodItem) -> dict[str, object]:
    """Render a food item as a JSON-friendly dict."""
    payload: dict[str, object] = {
        "id": item.id,
        "company": item.company,
        "restaurant": item.company,
        "item": item.name,
        "price": item.price,
        "ingredients": sorted(item.ingredients),
    }
    for name in NUTRIENT_FIELDS:
        payload[name] = getattr(item, name)
    return payload
