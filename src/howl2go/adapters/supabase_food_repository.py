"""Supabase implementation for the food catalogue."""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from supabase import Client

from howl2go.adapters.supabase_support import execute, optional_float
from howl2go.domain.errors import UpstreamFailure
from howl2go.domain.foods import NUTRIENT_FIELDS, FoodItem, normalize_ingredients
from howl2go.services.catalog import FoodRepository

_TABLE = "food_items"

# PostgREST caps unbounded selects, so large reads go through ranged pages.
PAGE_SIZE = 1000


@dataclass
class SupabaseFoodRepository(FoodRepository):
    """Supabase-backed repository for food items."""

    client: Client

    def get_food(self, food_id: str) -> FoodItem | None:
        """Return a food item by id, if present."""
        response = execute(
            self.client.table(_TABLE).select("*").eq("id", food_id).limit(1),
            "get_food",
        )
        if not response.data:
            return None
        return parse_food(response.data[0])

    def list_foods_by_ids(self, food_ids: Sequence[str]) -> list[FoodItem]:
        """Return the food items whose ids are listed."""
        if not food_ids:
            return []
        response = execute(
            self.client.table(_TABLE).select("*").in_("id", list(food_ids)),
            "list_foods_by_ids",
        )
        return [parse_food(row) for row in response.data or []]

    def list_foods_by_company(self, company: str, limit: int) -> list[FoodItem]:
        """Return up to `limit` items served by a company."""
        response = execute(
            self.client.table(_TABLE)
            .select("*")
            .eq("company", company)
            .order("id", desc=False)
            .limit(limit),
            "list_foods_by_company",
        )
        return [parse_food(row) for row in response.data or []]

    def find_by_ingredients(
        self, include: Sequence[str], exclude: Sequence[str]
    ) -> list[FoodItem]:
        """Read every candidate row, page by page, without excluded ingredients.

        Inclusion is left to the caller: array containment in the store is
        case-sensitive and would drop rows the caller should match.
        """
        rows: list[dict[str, object]] = []
        while True:
            query = self.client.table(_TABLE).select("*")
            if exclude:
                query = query.not_.overlaps("ingredients", list(exclude))
            page = self._read_page(query, len(rows), PAGE_SIZE, "find_by_ingredients")
            rows.extend(page)
            if len(page) < PAGE_SIZE:
                break
        return [parse_food(row) for row in rows]

    def search_foods(
        self, keyword: str | None, offset: int, limit: int
    ) -> list[FoodItem]:
        """Return one page of items whose name or company mentions `keyword`,
        or whose ingredients include it."""
        query = self.client.table(_TABLE).select("*")
        if keyword:
            query = query.or_(
                f"item.ilike.*{keyword}*,company.ilike.*{keyword}*,"
                f"ingredients.cs.{{{keyword}}}"
            )
        page = self._read_page(query, offset, limit, "search_foods")
        return [parse_food(row) for row in page]

    def _read_page(
        self, query: Any, offset: int, limit: int, action: str
    ) -> list[dict[str, object]]:
        response = execute(
            query.order("id", desc=False).range(offset, offset + limit - 1), action
        )
        return response.data or []

    def create_food(self, payload: dict[str, object]) -> FoodItem:
        """Create a food item and return it."""
        response = execute(self.client.table(_TABLE).insert(payload), "create_food")
        if not response.data:
            raise UpstreamFailure("Failed to create food item")
        return parse_food(response.data[0])

    def update_food(self, food_id: str, payload: dict[str, object]) -> FoodItem | None:
        """Update a food item and return it."""
        response = execute(
            self.client.table(_TABLE).update(payload).eq("id", food_id),
            "update_food",
        )
        if not response.data:
            return None
        return parse_food(response.data[0])

    def delete_food(self, food_id: str) -> bool:
        """Delete a food item."""
        response = execute(
            self.client.table(_TABLE).delete().eq("id", food_id), "delete_food"
        )
        return bool(response.data)


def parse_food(row: dict[str, object]) -> FoodItem:
    """Parse a food row into a domain model."""
    nutrients = {name: optional_float(row.get(name)) for name in NUTRIENT_FIELDS}
    return FoodItem(
        id=str(row["id"]),
        company=str(row.get("company") or row.get("restaurant") or ""),
        name=str(row.get("item", "")),
        price=optional_float(row.get("price")),
        ingredients=normalize_ingredients(row.get("ingredients") or []),
        **nutrients,
    )
