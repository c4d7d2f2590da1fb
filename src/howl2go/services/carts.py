"""Services for session-scoped shopping carts."""

from dataclasses import dataclass, replace
from datetime import UTC, datetime
from typing import Protocol

from howl2go.domain.carts import Cart, CartLine
from howl2go.domain.errors import InvalidQuery, NotFound
from howl2go.domain.foods import FoodItem
from howl2go.domain.sessions import SessionContext
from howl2go.services.catalog import FoodRepository

MIN_DERIVED_PRICE = 2.0
MAX_DERIVED_PRICE = 15.0
PRICE_PER_CALORIE = 0.01


class CartRepository(Protocol):
    """Persistence interface for carts."""

    def get_cart(self, session_id: str) -> Cart | None:
        """Return the cart for a session, if present."""

    def save_cart(self, cart: Cart) -> Cart:
        """Create or replace the cart for its session and return it."""


@dataclass
class CartService:
    """Application service for cart operations."""

    repository: CartRepository
    food_repository: FoodRepository

    def get_cart(self, session: SessionContext) -> Cart:
        """Return the session's cart, creating an empty one if needed."""
        cart = self.repository.get_cart(session.session_id)
        if cart is None:
            return self.repository.save_cart(
                Cart(
                    session_id=session.session_id,
                    user_id=session.user_id,
                    updated_at=datetime.now(tz=UTC),
                )
            )
        if session.user_id and not cart.user_id:
            cart = self.repository.save_cart(replace(cart, user_id=session.user_id))
        return cart

    def add_item(self, session: SessionContext, food_id: str, quantity: int) -> Cart:
        """Add a food item, merging quantities with an existing line."""
        if quantity < 1:
            raise InvalidQuery("Valid quantity is required")
        food = self.food_repository.get_food(food_id)
        if food is None:
            raise NotFound("Food item not found")
        cart = self.get_cart(session)
        lines = list(cart.lines)
        for index, line in enumerate(lines):
            if line.food_id == food.id:
                lines[index] = replace(
                    line, quantity=line.quantity + quantity, price=unit_price(food)
                )
                break
        else:
            lines.append(_line_for(food, quantity))
        return self._save(cart, lines)

    def update_quantity(
        self, session: SessionContext, food_id: str, quantity: int
    ) -> Cart:
        """Set a line's quantity; zero or less removes the line."""
        cart = self.get_cart(session)
        if not any(line.food_id == food_id for line in cart.lines):
            raise NotFound("Item not found in cart")
        if quantity <= 0:
            return self.remove_item(session, food_id)
        lines = [
            replace(line, quantity=quantity) if line.food_id == food_id else line
            for line in cart.lines
        ]
        return self._save(cart, lines)

    def remove_item(self, session: SessionContext, food_id: str) -> Cart:
        """Remove a food item from the cart."""
        cart = self.get_cart(session)
        lines = [line for line in cart.lines if line.food_id != food_id]
        return self._save(cart, lines)

    def clear(self, session: SessionContext) -> Cart:
        """Remove every line from the cart."""
        return self._save(self.get_cart(session), [])

    def _save(self, cart: Cart, lines: list[CartLine]) -> Cart:
        return self.repository.save_cart(
            replace(cart, lines=tuple(lines), updated_at=datetime.now(tz=UTC))
        )


def unit_price(food: FoodItem) -> float:
    """Return the item's price, deriving one from calories when unset."""
    if food.price is not None:
        return float(food.price)
    if not food.calories or food.calories <= 0:
        return MIN_DERIVED_PRICE
    derived = food.calories * PRICE_PER_CALORIE
    return round(min(max(derived, MIN_DERIVED_PRICE), MAX_DERIVED_PRICE), 2)


def _line_for(food: FoodItem, quantity: int) -> CartLine:
    return CartLine(
        food_id=food.id,
        company=food.company,
        name=food.name,
        calories=food.calories or 0.0,
        total_fat=food.total_fat or 0.0,
        protein=food.protein or 0.0,
        carbs=food.carbs or 0.0,
        price=unit_price(food),
        quantity=quantity,
    )
