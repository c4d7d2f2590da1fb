"""Domain models for combo suggestions."""

from dataclasses import dataclass, field
from enum import Enum

from howl2go.domain.foods import FoodItem


class NutritionalFocus(str, Enum):
    """Nutritional goal used to bias combo ranking."""

    LOW_CALORIE = "low-calorie"
    HIGH_PROTEIN = "high-protein"
    LOW_SUGAR = "low-sugar"
    LOW_SODIUM = "low-sodium"

    @classmethod
    def parse(cls, raw: str) -> "NutritionalFocus | None":
        """Parse a focus tag, accepting `_` or `-` separators."""
        normalized = raw.strip().lower().replace("_", "-")
        for focus in cls:
            if focus.value == normalized:
                return focus
        return None


class FoodCategory(str, Enum):
    """Coarse menu category used to pick complementary items."""

    MAIN = "main"
    SIDE = "side"
    DRINK = "drink"
    DESSERT = "dessert"


@dataclass(frozen=True)
class ComboPreferences:
    """Validated caller preferences for combo suggestions."""

    low_sugar: bool = False
    low_sodium: bool = False
    low_calorie: bool = False
    high_protein: bool = False
    max_calories: float | None = None
    exclude_ingredients: frozenset[str] = field(default_factory=frozenset)

    def foci(self) -> set[NutritionalFocus]:
        """Return the nutritional foci implied by the boolean flags."""
        active = set()
        if self.low_sugar:
            active.add(NutritionalFocus.LOW_SUGAR)
        if self.low_sodium:
            active.add(NutritionalFocus.LOW_SODIUM)
        if self.low_calorie:
            active.add(NutritionalFocus.LOW_CALORIE)
        if self.high_protein:
            active.add(NutritionalFocus.HIGH_PROTEIN)
        return active


@dataclass(frozen=True)
class ComboRequest:
    """Request for complementary items to a main item."""

    main_item_id: str
    limit: int = 5
    focus: NutritionalFocus | None = None
    preferences: ComboPreferences = field(default_factory=ComboPreferences)


@dataclass(frozen=True)
class ComboSuggestion:
    """A suggested complementary item with its ranking signals."""

    item: FoodItem
    reason: str
    frequency: int
    popularity: int
    popularity_score: float
    nutritional_score: float
    score: float
