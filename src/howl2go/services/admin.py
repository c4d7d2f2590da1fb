"""Admin service for reporting."""

from dataclasses import dataclass
from typing import Protocol

from howl2go.domain.orders import OrderRecord
from howl2go.services.catalog import FoodRepository


class AdminRepository(Protocol):
    """Persistence interface for admin data."""

    def list_recent_orders(self, limit: int) -> list[OrderRecord]:
        """Return the most recent orders across all users."""

    def order_totals(self) -> tuple[int, float]:
        """Return the number of orders and the summed revenue."""

    def top_items(self, limit: int) -> list[tuple[str, int]]:
        """Return `(food_id, order_count)` for the most ordered items."""


@dataclass
class AdminService:
    """Service for admin dashboards."""

    admin_repository: AdminRepository
    food_repository: FoodRepository

    def dashboard(self, top_limit: int = 10) -> dict[str, object]:
        """Return order volume, revenue and the most ordered items."""
        order_count, revenue = self.admin_repository.order_totals()
        top = self.admin_repository.top_items(top_limit)
        names = {
            food.id: food
            for food in self.food_repository.list_foods_by_ids(
                [food_id for food_id, _ in top]
            )
        }
        return {
            "order_count": order_count,
            "revenue": round(revenue, 2),
            "average_order_value": round(revenue / order_count, 2)
            if order_count
            else 0.0,
            "top_items": [
                {
                    "food_item_id": food_id,
                    "item": names[food_id].name if food_id in names else None,
                    "restaurant": names[food_id].company if food_id in names else None,
                    "order_count": count,
                }
                for food_id, count in top
            ],
        }

    def list_orders(self, limit: int = 20) -> list[dict[str, object]]:
        """Return recent orders in summary form."""
        return [
            _serialize_order_summary(order)
            for order in self.admin_repository.list_recent_orders(limit)
        ]


def _serialize_order_summary(order: OrderRecord) -> dict[str, object]:
    return {
        "id": order.id,
        "order_number": order.order_number,
        "user_id": order.user_id,
        "items": sum(line.quantity for line in order.lines),
        "total": order.totals.total,
        "status": order.status,
        "created_at": order.created_at.isoformat(),
    }
