"""Domain models for orders."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class OrderLine:
    """Snapshot of an ordered item."""

    food_id: str
    company: str
    name: str
    price: float
    quantity: int
    calories: float = 0.0
    total_fat: float | None = None
    saturated_fat: float | None = None
    trans_fat: float | None = None
    protein: float | None = None
    carbs: float | None = None
    fiber: float | None = None
    sugars: float | None = None
    sodium: float | None = None
    cholesterol: float | None = None


@dataclass(frozen=True)
class OrderTotals:
    """Monetary totals for an order."""

    subtotal: float
    tax: float
    delivery_fee: float
    total: float


@dataclass(frozen=True)
class OrderRecord:
    """A placed order."""

    id: str
    order_number: str
    user_id: str
    lines: tuple[OrderLine, ...]
    totals: OrderTotals
    status: str
    created_at: datetime


def serialize_order(order: OrderRecord) -> dict[str, object]:
    """Render an order as a JSON-friendly dict."""
    return {
        "id": order.id,
        "order_number": order.order_number,
        "user_id": order.user_id,
        "items": [
            {
                "food_item_id": line.food_id,
                "restaurant": line.company,
                "item": line.name,
                "price": line.price,
                "quantity": line.quantity,
                "calories": line.calories,
                "total_fat": line.total_fat,
                "saturated_fat": line.saturated_fat,
                "trans_fat": line.trans_fat,
                "protein": line.protein,
                "carbohydrates": line.carbs,
                "fiber": line.fiber,
                "sugars": line.sugars,
                "sodium": line.sodium,
                "cholesterol": line.cholesterol,
            }
            for line in order.lines
        ],
        "subtotal": order.totals.subtotal,
        "tax": order.totals.tax,
        "delivery_fee": order.totals.delivery_fee,
        "total": order.totals.total,
        "status": order.status,
        "created_at": order.created_at.isoformat(),
    }
