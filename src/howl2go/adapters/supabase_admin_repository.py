"""Supabase repository for admin reporting."""

from collections import defaultdict
from dataclasses import dataclass

from supabase import Client

from howl2go.adapters.supabase_order_repository import (
    ORDER_ITEMS_TABLE,
    ORDERS_TABLE,
    parse_order,
)
from howl2go.adapters.supabase_support import execute
from howl2go.domain.orders import OrderRecord
from howl2go.services.admin import AdminRepository


@dataclass
class SupabaseAdminRepository(AdminRepository):
    """Supabase implementation for admin queries."""

    client: Client

    def list_recent_orders(self, limit: int) -> list[OrderRecord]:
        """Return the most recent orders across all users."""
        response = execute(
            self.client.table(ORDERS_TABLE)
            .select("*")
            .order("created_at", desc=True)
            .limit(limit),
            "list_recent_orders",
        )
        return [parse_order(row) for row in response.data or []]

    def order_totals(self) -> tuple[int, float]:
        """Return the number of orders and the summed revenue."""
        response = execute(
            self.client.table(ORDERS_TABLE).select("total"), "order_totals"
        )
        rows = response.data or []
        return len(rows), sum(float(row.get("total") or 0.0) for row in rows)

    def top_items(self, limit: int) -> list[tuple[str, int]]:
        """Return the most ordered items by distinct order count."""
        response = execute(
            self.client.table(ORDER_ITEMS_TABLE).select("order_id, food_item_id"),
            "top_items",
        )
        orders: dict[str, set[str]] = defaultdict(set)
        for row in response.data or []:
            orders[str(row["food_item_id"])].add(str(row["order_id"]))
        ranked = sorted(orders.items(), key=lambda entry: (-len(entry[1]), entry[0]))
        return [(food_id, len(ids)) for food_id, ids in ranked[:limit]]
