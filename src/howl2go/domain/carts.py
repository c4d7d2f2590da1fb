"""Domain models for shopping carts."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class CartLine:
    """A food item in a cart with its unit price and quantity."""

    food_id: str
    company: str
    name: str
    calories: float
    total_fat: float
    protein: float
    carbs: float
    price: float
    quantity: int


@dataclass(frozen=True)
class Cart:
    """A session-scoped cart."""

    session_id: str
    user_id: str | None = None
    lines: tuple[CartLine, ...] = ()
    updated_at: datetime | None = field(default=None, compare=False)

    @property
    def total_items(self) -> int:
        return sum(line.quantity for line in self.lines)

    @property
    def total_price(self) -> float:
        return round(sum(line.price * line.quantity for line in self.lines), 2)

    @property
    def total_calories(self) -> float:
        return sum(line.calories * line.quantity for line in self.lines)


def serialize_cart(cart: Cart) -> dict[str, object]:
    """Render a cart as a JSON-friendly dict."""
    return {
        "session_id": cart.session_id,
        "user_id": cart.user_id,
        "items": [
            {
                "food_item_id": line.food_id,
                "restaurant": line.company,
                "item": line.name,
                "calories": line.calories,
                "total_fat": line.total_fat,
                "protein": line.protein,
                "carbohydrates": line.carbs,
                "price": line.price,
                "quantity": line.quantity,
            }
            for line in cart.lines
        ],
        "total_items": cart.total_items,
        "total_price": cart.total_price,
        "total_calories": cart.total_calories,
    }
