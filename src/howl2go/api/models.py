"""Pydantic models for request payloads."""

import json
import logging

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    ValidationError,
)

from howl2go.domain.combos import ComboPreferences
from howl2go.domain.errors import InvalidQuery
from howl2go.domain.foods import normalize_ingredients

_logger = logging.getLogger(__name__)


class ComboPreferencesPayload(BaseModel):
    """Recognized combo preference keys; unknown keys are ignored."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    low_sugar: StrictBool = Field(default=False, alias="lowSugar")
    low_sodium: StrictBool = Field(default=False, alias="lowSodium")
    low_calorie: StrictBool = Field(default=False, alias="lowCalorie")
    high_protein: StrictBool = Field(default=False, alias="highProtein")
    max_calories: float | None = Field(default=None, gt=0, alias="maxCalories")
    exclude_ingredients: list[str] = Field(
        default_factory=list, alias="excludeIngredients"
    )

    def to_domain(self) -> ComboPreferences:
        """Convert to the domain preferences struct."""
        return ComboPreferences(
            low_sugar=self.low_sugar,
            low_sodium=self.low_sodium,
            low_calorie=self.low_calorie,
            high_protein=self.high_protein,
            max_calories=self.max_calories,
            exclude_ingredients=normalize_ingredients(self.exclude_ingredients),
        )


def parse_preferences(raw: str | None) -> ComboPreferences:
    """Parse the JSON `preferences` query value."""
    if raw is None or not raw.strip():
        return ComboPreferences()
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise InvalidQuery("preferences must be a JSON object") from exc
    if not isinstance(data, dict):
        raise InvalidQuery("preferences must be a JSON object")
    known = set()
    for name, field_info in ComboPreferencesPayload.model_fields.items():
        known.add(name)
        if field_info.alias:
            known.add(field_info.alias)
    ignored = sorted(key for key in data if key not in known)
    if ignored:
        _logger.debug("Ignoring unknown preference keys: %s", ignored)
    try:
        return ComboPreferencesPayload.model_validate(data).to_domain()
    except ValidationError as exc:
        raise InvalidQuery(f"Invalid preferences: {_first_error(exc)}") from exc


def _first_error(exc: ValidationError) -> str:
    error = exc.errors()[0]
    location = ".".join(str(part) for part in error.get("loc", ()))
    return f"{location}: {error.get('msg', 'invalid value')}"


class AddCartItemPayload(BaseModel):
    """Payload for adding an item to the cart."""

    model_config = ConfigDict(populate_by_name=True)

    food_item_id: str = Field(alias="foodItemId", min_length=1)
    quantity: int


class UpdateCartItemPayload(BaseModel):
    """Payload for changing a cart line quantity."""

    quantity: int


class ReviewPayload(BaseModel):
    """Payload for submitting a review."""

    model_config = ConfigDict(populate_by_name=True)

    food_item_id: str = Field(alias="foodItemId", min_length=1)
    rating: int
    comment: str | None = None


class FoodPayload(BaseModel):
    """Admin payload for creating or updating a food item."""

    company: str | None = None
    item: str | None = None
    price: float | None = Field(default=None, ge=0)
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
    ingredients: list[str] | None = None


class ReviewUpdatePayload(BaseModel):
    """Payload for editing a review; omitted fields stay unchanged."""

    rating: int | None = None
    comment: str | None = None


class BugReportPayload(BaseModel):
    """Payload for filing a bug report."""

    model_config = ConfigDict(populate_by_name=True)

    title: str
    description: str
    severity: str = "medium"
    page_url: str | None = Field(default=None, alias="pageUrl")


class BugStatusPayload(BaseModel):
    """Admin payload for moving a bug report to a new status."""

    status: str
