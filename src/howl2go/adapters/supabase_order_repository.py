"""Supabase repository for orders and order history queries."""

from collections import defaultdict
from collections.abc import Sequence
from dataclasses import asdict, dataclass

from supabase import Client

from howl2go.adapters.supabase_support import execute, optional_float, parse_timestamp
from howl2go.domain.errors import UpstreamFailure
from howl2go.domain.orders import OrderLine, OrderRecord, OrderTotals
from howl2go.services.combos import OrderHistory
from howl2go.services.orders import OrderRepository

ORDERS_TABLE = "orders"
ORDER_ITEMS_TABLE = "order_items"


@dataclass
class SupabaseOrderRepository(OrderRepository, OrderHistory):
    """Supabase implementation for orders and co-purchase statistics."""

    client: Client

    def create_order(  # noqa: PLR0913
        self,
        user_id: str,
        order_number: str,
        lines: list[OrderLine],
        totals: OrderTotals,
        status: str,
    ) -> OrderRecord:
        """Insert the order row, then one order_items row per line."""
        response = execute(
            self.client.table(ORDERS_TABLE).insert(
                {
                    "user_id": user_id,
                    "order_number": order_number,
                    "items": [asdict(line) for line in lines],
                    "subtotal": totals.subtotal,
                    "tax": totals.tax,
                    "delivery_fee": totals.delivery_fee,
                    "total": totals.total,
                    "status": status,
                }
            ),
            "create_order",
        )
        if not response.data:
            raise UpstreamFailure("Failed to create order")
        order = parse_order(response.data[0])
        try:
            execute(
                self.client.table(ORDER_ITEMS_TABLE).insert(
                    [
                        {
                            "order_id": order.id,
                            "food_item_id": line.food_id,
                            "quantity": line.quantity,
                        }
                        for line in lines
                    ]
                ),
                "create_order_items",
            )
        except UpstreamFailure:
            # An order without item rows would skew co-purchase statistics.
            execute(
                self.client.table(ORDERS_TABLE).delete().eq("id", order.id),
                "rollback_order",
            )
            raise
        return order

    def get_order(self, order_id: str) -> OrderRecord | None:
        """Return an order by id, if present."""
        response = execute(
            self.client.table(ORDERS_TABLE).select("*").eq("id", order_id).limit(1),
            "get_order",
        )
        if not response.data:
            return None
        return parse_order(response.data[0])

    def order_number_exists(self, order_number: str) -> bool:
        """Return whether an order number is already taken."""
        response = execute(
            self.client.table(ORDERS_TABLE)
            .select("id")
            .eq("order_number", order_number)
            .limit(1),
            "order_number_exists",
        )
        return bool(response.data)

    def list_orders(self, user_id: str, offset: int, limit: int) -> list[OrderRecord]:
        """Return a user's orders, newest first."""
        response = execute(
            self.client.table(ORDERS_TABLE)
            .select("*")
            .eq("user_id", user_id)
            .order("created_at", desc=True)
            .range(offset, offset + limit - 1),
            "list_orders",
        )
        return [parse_order(row) for row in response.data or []]

    def count_orders(self, user_id: str) -> int:
        """Return the number of orders a user has placed."""
        response = execute(
            self.client.table(ORDERS_TABLE)
            .select("id", count="exact")
            .eq("user_id", user_id),
            "count_orders",
        )
        if response.count is not None:
            return int(response.count)
        return len(response.data or [])

    def co_occurrence_counts(self, food_id: str) -> dict[str, int]:
        """Count, per other item, the orders that also contain `food_id`."""
        response = execute(
            self.client.table(ORDER_ITEMS_TABLE)
            .select("order_id")
            .eq("food_item_id", food_id),
            "co_occurrence_orders",
        )
        order_ids = sorted({str(row["order_id"]) for row in response.data or []})
        if not order_ids:
            return {}
        lines_response = execute(
            self.client.table(ORDER_ITEMS_TABLE)
            .select("order_id, food_item_id")
            .in_("order_id", order_ids),
            "co_occurrence_lines",
        )
        counts = _distinct_orders_per_item(lines_response.data or [])
        counts.pop(food_id, None)
        return counts

    def popularity(self, food_ids: Sequence[str]) -> dict[str, int]:
        """Return the number of orders containing each listed item."""
        if not food_ids:
            return {}
        response = execute(
            self.client.table(ORDER_ITEMS_TABLE)
            .select("order_id, food_item_id")
            .in_("food_item_id", list(food_ids)),
            "popularity",
        )
        return _distinct_orders_per_item(response.data or [])


def _distinct_orders_per_item(rows: list[dict[str, object]]) -> dict[str, int]:
    orders: dict[str, set[str]] = defaultdict(set)
    for row in rows:
        orders[str(row["food_item_id"])].add(str(row["order_id"]))
    return {food_id: len(ids) for food_id, ids in orders.items()}


def parse_order(row: dict[str, object]) -> OrderRecord:
    """Parse an order row (with its embedded item snapshots)."""
    raw_items = row.get("items") or []
    lines = tuple(
        _parse_line(item) for item in raw_items if isinstance(item, dict)
    )
    return OrderRecord(
        id=str(row["id"]),
        order_number=str(row.get("order_number", "")),
        user_id=str(row.get("user_id", "")),
        lines=lines,
        totals=OrderTotals(
            subtotal=float(row.get("subtotal", 0.0)),
            tax=float(row.get("tax", 0.0)),
            delivery_fee=float(row.get("delivery_fee", 0.0)),
            total=float(row.get("total", 0.0)),
        ),
        status=str(row.get("status", "")),
        created_at=parse_timestamp(row.get("created_at")),
    )


def _parse_line(item: dict[str, object]) -> OrderLine:
    return OrderLine(
        food_id=str(item.get("food_id", "")),
        company=str(item.get("company", "")),
        name=str(item.get("name", "")),
        price=float(item.get("price", 0.0)),
        quantity=int(item.get("quantity", 1)),
        calories=float(item.get("calories") or 0.0),
        total_fat=optional_float(item.get("total_fat")),
        saturated_fat=optional_float(item.get("saturated_fat")),
        trans_fat=optional_float(item.get("trans_fat")),
        protein=optional_float(item.get("protein")),
        carbs=optional_float(item.get("carbs")),
        fiber=optional_float(item.get("fiber")),
        sugars=optional_float(item.get("sugars")),
        sodium=optional_float(item.get("sodium")),
        cholesterol=optional_float(item.get("cholesterol")),
    )
