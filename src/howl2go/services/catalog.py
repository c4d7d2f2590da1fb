"""Services for the food catalogue."""

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from howl2go.domain.errors import InvalidQuery, NotFound
from howl2go.domain.foods import NUTRIENT_FIELDS, FoodItem, normalize_ingredients

_logger = logging.getLogger(__name__)

_WRITABLE_FIELDS = {"company", "item", "price", "ingredients", *NUTRIENT_FIELDS}

# Candidate rows read per store round trip while collecting search matches.
SEARCH_PAGE_SIZE = 200

_KEYWORD_NOISE = re.compile(r"[^\w'&-]")


class FoodRepository(Protocol):
    """Persistence interface for food items."""

    def get_food(self, food_id: str) -> FoodItem | None:
        """Return a food item by id, if present."""

    def list_foods_by_ids(self, food_ids: Sequence[str]) -> list[FoodItem]:
        """Return the food items whose ids are listed."""

    def list_foods_by_company(self, company: str, limit: int) -> list[FoodItem]:
        """Return up to `limit` items served by a company."""

    def find_by_ingredients(
        self, include: Sequence[str], exclude: Sequence[str]
    ) -> list[FoodItem]:
        """Return candidate items for an ingredient filter.

        Implementations may prefilter; callers re-apply the exact rules.
        """

    def search_foods(
        self, keyword: str | None, offset: int, limit: int
    ) -> list[FoodItem]:
        """Return one id-ordered page of items that may match `keyword`.

        Implementations may prefilter; callers re-apply the exact rules.
        """

    def create_food(self, payload: dict[str, object]) -> FoodItem:
        """Create a food item and return it."""

    def update_food(self, food_id: str, payload: dict[str, object]) -> FoodItem | None:
        """Update a food item and return it, or None when it does not exist."""

    def delete_food(self, food_id: str) -> bool:
        """Delete a food item, returning whether it existed."""


@dataclass
class CatalogService:
    """Application service for reading and curating food items."""

    repository: FoodRepository

    def get_food(self, food_id: str) -> FoodItem:
        """Return a food item or raise NotFound."""
        food = self.repository.get_food(food_id)
        if food is None:
            raise NotFound("Food item not found")
        return food

    def search(self, query: str | None, limit: int) -> list[FoodItem]:
        """Return up to `limit` items matching every keyword, ordered by id."""
        if limit < 1:
            raise InvalidQuery("limit must be a positive integer")
        keywords = parse_keywords(query)
        anchor = keywords[0] if keywords else None
        matches: list[FoodItem] = []
        offset = 0
        while len(matches) < limit:
            page = self.repository.search_foods(anchor, offset, SEARCH_PAGE_SIZE)
            matches.extend(item for item in page if matches_keywords(item, keywords))
            if len(page) < SEARCH_PAGE_SIZE:
                break
            offset += SEARCH_PAGE_SIZE
        _logger.debug("Keyword search %s matched %s items", keywords, len(matches))
        return matches[:limit]

    def create_food(self, payload: dict[str, object]) -> FoodItem:
        """Create a food item from an admin payload."""
        cleaned = _clean_payload(payload)
        if not cleaned.get("company") or not cleaned.get("item"):
            raise InvalidQuery("company and item are required")
        food = self.repository.create_food(cleaned)
        _logger.info("Created food item %s (%s)", food.id, food.name)
        return food

    def update_food(self, food_id: str, payload: dict[str, object]) -> FoodItem:
        """Apply a partial update to a food item."""
        cleaned = _clean_payload(payload)
        if not cleaned:
            raise InvalidQuery("No updatable fields supplied")
        food = self.repository.update_food(food_id, cleaned)
        if food is None:
            raise NotFound("Food item not found")
        _logger.info("Updated food item %s fields=%s", food_id, sorted(cleaned))
        return food

    def delete_food(self, food_id: str) -> None:
        """Remove a food item."""
        if not self.repository.delete_food(food_id):
            raise NotFound("Food item not found")
        _logger.info("Deleted food item %s", food_id)


def _clean_payload(payload: dict[str, object]) -> dict[str, object]:
    """Keep writable fields and normalize the ingredient list."""
    cleaned = {
        key: value
        for key, value in payload.items()
        if key in _WRITABLE_FIELDS and value is not None
    }
    if "ingredients" in cleaned:
        cleaned["ingredients"] = sorted(normalize_ingredients(cleaned["ingredients"]))
    return cleaned


def parse_keywords(query: str | None) -> list[str]:
    """Split a search string into lower-cased keywords."""
    if not query:
        return []
    keywords = (_KEYWORD_NOISE.sub("", word) for word in query.lower().split())
    return [keyword for keyword in keywords if keyword]


def matches_keywords(item: FoodItem, keywords: Sequence[str]) -> bool:
    """Return whether every keyword appears in the name, company or ingredients."""
    name = item.name.lower()
    company = item.company.lower()
    return all(
        keyword in name or keyword in company or keyword in item.ingredients
        for keyword in keywords
    )
