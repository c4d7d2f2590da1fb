"""Combo suggestions: items that go well with a main item."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Protocol

from howl2go.domain.combos import ComboPreferences, ComboRequest, ComboSuggestion
from howl2go.domain.errors import InvalidQuery, NotFound
from howl2go.domain.foods import FoodItem
from howl2go.services.catalog import FoodRepository
from howl2go.services.categories import is_complementary
from howl2go.services.nutrition import nutritional_score

DEFAULT_FREQUENCY_WEIGHT = 0.5
DEFAULT_POPULARITY_WEIGHT = 0.3
DEFAULT_NUTRITION_WEIGHT = 0.2

# Same-company items scanned when there is no co-purchase history.
FALLBACK_POOL_SIZE = 200

REASON_FREQUENCY = "Frequently ordered together"
REASON_POPULARITY = "Popular with other customers"
REASON_NUTRITION = "Good nutritional match"
REASON_FALLBACK = "Popular pick to complete your meal"

_logger = logging.getLogger(__name__)


class OrderHistory(Protocol):
    """Read interface over historical order line items."""

    def co_occurrence_counts(self, food_id: str) -> dict[str, int]:
        """Return, per other item, the number of orders shared with `food_id`."""

    def popularity(self, food_ids: Sequence[str]) -> dict[str, int]:
        """Return the number of orders containing each listed item."""


@dataclass(frozen=True)
class ComboWeights:
    """Weights of the three ranking signals."""

    frequency: float = DEFAULT_FREQUENCY_WEIGHT
    popularity: float = DEFAULT_POPULARITY_WEIGHT
    nutrition: float = DEFAULT_NUTRITION_WEIGHT


@dataclass
class ComboService:
    """Ranks complementary items for a main item."""

    food_repository: FoodRepository
    order_history: OrderHistory
    weights: ComboWeights = field(default_factory=ComboWeights)

    def suggest(self, request: ComboRequest) -> list[ComboSuggestion]:
        """Return up to `request.limit` suggestions, best first."""
        if request.limit < 1:
            raise InvalidQuery("limit must be a positive integer")
        main = self.food_repository.get_food(request.main_item_id)
        if main is None:
            raise NotFound("Main item not found")

        counts = {
            food_id: count
            for food_id, count in self.order_history.co_occurrence_counts(
                main.id
            ).items()
            if food_id != main.id and count > 0
        }
        candidates = []
        if counts:
            candidates = _eligible(
                self.food_repository.list_foods_by_ids(sorted(counts)),
                main,
                request.preferences,
            )
        if not candidates:
            return self._fallback(main, request)

        popularity = self.order_history.popularity([item.id for item in candidates])
        max_frequency = max(counts.get(item.id, 0) for item in candidates)
        max_popularity = max(popularity.get(item.id, 0) for item in candidates)

        ranked = []
        for item in candidates:
            frequency = counts.get(item.id, 0)
            orders = popularity.get(item.id, 0)
            frequency_term = self.weights.frequency * _ratio(frequency, max_frequency)
            popularity_score = _ratio(orders, max_popularity)
            popularity_term = self.weights.popularity * popularity_score
            nutrition = nutritional_score(
                main, item, request.preferences, request.focus
            )
            nutrition_term = self.weights.nutrition * nutrition
            ranked.append(
                ComboSuggestion(
                    item=item,
                    reason=_dominant_reason(
                        frequency_term, popularity_term, nutrition_term
                    ),
                    frequency=frequency,
                    popularity=orders,
                    popularity_score=popularity_score,
                    nutritional_score=nutrition,
                    score=frequency_term + popularity_term + nutrition_term,
                )
            )
        ranked.sort(key=lambda suggestion: (-suggestion.score, suggestion.item.id))
        return ranked[: request.limit]

    def _fallback(
        self, main: FoodItem, request: ComboRequest
    ) -> list[ComboSuggestion]:
        """Rank complementary same-company items by popularity alone."""
        pool = self.food_repository.list_foods_by_company(
            main.company, FALLBACK_POOL_SIZE
        )
        candidates = [
            item
            for item in _eligible(pool, main, request.preferences)
            if is_complementary(main, item)
        ]
        _logger.debug(
            "Combo fallback for %s: pool=%s complementary=%s",
            main.id,
            len(pool),
            len(candidates),
        )
        if not candidates:
            return []
        popularity = self.order_history.popularity([item.id for item in candidates])
        max_popularity = max(popularity.get(item.id, 0) for item in candidates)
        candidates.sort(key=lambda item: (-popularity.get(item.id, 0), item.id))
        suggestions = []
        for item in candidates[: request.limit]:
            orders = popularity.get(item.id, 0)
            popularity_score = _ratio(orders, max_popularity)
            suggestions.append(
                ComboSuggestion(
                    item=item,
                    reason=REASON_FALLBACK,
                    frequency=0,
                    popularity=orders,
                    popularity_score=popularity_score,
                    nutritional_score=nutritional_score(
                        main, item, request.preferences, request.focus
                    ),
                    score=popularity_score,
                )
            )
        return suggestions


def _eligible(
    items: Sequence[FoodItem], main: FoodItem, preferences: ComboPreferences
) -> list[FoodItem]:
    """Drop the main item, duplicates and items the preferences rule out."""
    seen: set[str] = set()
    eligible = []
    for item in items:
        if item.id == main.id or item.id in seen:
            continue
        if item.ingredients & preferences.exclude_ingredients:
            continue
        if (
            preferences.max_calories is not None
            and item.calories is not None
            and item.calories > preferences.max_calories
        ):
            continue
        seen.add(item.id)
        eligible.append(item)
    return eligible


def _ratio(value: int, maximum: int) -> float:
    if maximum <= 0:
        return 0.0
    return value / maximum


def _dominant_reason(frequency: float, popularity: float, nutrition: float) -> str:
    if frequency >= popularity and frequency >= nutrition:
        return REASON_FREQUENCY
    if popularity >= nutrition:
        return REASON_POPULARITY
    return REASON_NUTRITION
