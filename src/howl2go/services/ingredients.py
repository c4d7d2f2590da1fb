"""Ingredient-based recommendations.

An item qualifies when it contains every included ingredient and none of the
excluded ones. Matching is exact on normalized (trimmed, lower-cased) names.
Qualifying items are ranked by how many included ingredients they contain,
ties broken by item id so that repeated calls page identically.
"""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from howl2go.domain.errors import InvalidQuery
from howl2go.domain.foods import (
    FoodItem,
    IngredientPage,
    IngredientQuery,
    ScoredFood,
    normalize_ingredient,
)
from howl2go.services.catalog import FoodRepository

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 20

_logger = logging.getLogger(__name__)


def build_query(
    include: object = (),
    exclude: object = (),
    page: object = DEFAULT_PAGE,
    limit: object = DEFAULT_LIMIT,
) -> IngredientQuery:
    """Validate raw filter parameters and return a normalized query."""
    if not _is_positive_int(page):
        raise InvalidQuery("page must be a positive integer")
    if not _is_positive_int(limit):
        raise InvalidQuery("limit must be a positive integer")
    include_names = _normalize_list(include, "include")
    exclude_names = [
        name
        for name in _normalize_list(exclude, "exclude")
        if name not in include_names
    ]
    return IngredientQuery(
        include=tuple(include_names),
        exclude=tuple(exclude_names),
        page=page,
        limit=limit,
    )


def filter_items(
    items: Iterable[FoodItem], query: IngredientQuery
) -> tuple[list[ScoredFood], int]:
    """Filter, rank and paginate items; return the page and total matches."""
    include = set(query.include)
    exclude = set(query.exclude)
    matches = [
        ScoredFood(item=item, match_score=len(item.ingredients & include))
        for item in items
        if include <= item.ingredients and not exclude & item.ingredients
    ]
    matches.sort(key=lambda scored: (-scored.match_score, scored.item.id))
    offset = (query.page - 1) * query.limit
    return matches[offset : offset + query.limit], len(matches)


@dataclass
class IngredientRecommendationService:
    """Application service for ingredient include/exclude recommendations."""

    repository: FoodRepository

    def recommend(self, query: IngredientQuery) -> IngredientPage:
        """Return one page of items matching the ingredient query."""
        candidates = self.repository.find_by_ingredients(query.include, query.exclude)
        page_items, total = filter_items(_unique(candidates), query)
        _logger.debug(
            "Ingredient query include=%s exclude=%s candidates=%s total=%s",
            query.include,
            query.exclude,
            len(candidates),
            total,
        )
        return IngredientPage(
            items=page_items, total=total, page=query.page, limit=query.limit
        )


def _is_positive_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 1


def _normalize_list(values: object, label: str) -> list[str]:
    """Normalize and deduplicate ingredient names, keeping first-seen order."""
    if isinstance(values, str) or not isinstance(values, Sequence):
        raise InvalidQuery(f"{label} must be a list of ingredient names")
    seen: list[str] = []
    for value in values:
        if not isinstance(value, str):
            raise InvalidQuery(f"{label} must be a list of ingredient names")
        name = normalize_ingredient(value)
        if name and name not in seen:
            seen.append(name)
    return seen


def _unique(items: Iterable[FoodItem]) -> list[FoodItem]:
    by_id: dict[str, FoodItem] = {}
    for item in items:
        by_id.setdefault(item.id, item)
    return list(by_id.values())
