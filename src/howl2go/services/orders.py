"""Order placement and history."""

import logging
import secrets
import string
import time
from dataclasses import dataclass
from typing import Protocol

from howl2go.domain.carts import Cart
from howl2go.domain.errors import (
    AuthenticationRequired,
    Forbidden,
    InvalidQuery,
    NotFound,
)
from howl2go.domain.orders import OrderLine, OrderRecord, OrderTotals
from howl2go.domain.sessions import SessionContext
from howl2go.services.carts import CartService
from howl2go.services.catalog import FoodRepository

TAX_RATE = 0.08
DELIVERY_FEE = 3.99
FREE_DELIVERY_THRESHOLD = 30.0
ORDER_STATUS_COMPLETED = "completed"

_BASE36 = string.digits + string.ascii_uppercase

_logger = logging.getLogger(__name__)


class OrderRepository(Protocol):
    """Persistence interface for orders."""

    def create_order(  # noqa: PLR0913
        self,
        user_id: str,
        order_number: str,
        lines: list[OrderLine],
        totals: OrderTotals,
        status: str,
    ) -> OrderRecord:
        """Create an order with its line items and return it."""

    def get_order(self, order_id: str) -> OrderRecord | None:
        """Return an order by id, if present."""

    def order_number_exists(self, order_number: str) -> bool:
        """Return whether an order number is already taken."""

    def list_orders(self, user_id: str, offset: int, limit: int) -> list[OrderRecord]:
        """Return a user's orders, newest first."""

    def count_orders(self, user_id: str) -> int:
        """Return the number of orders a user has placed."""


@dataclass
class OrderService:
    """Application service for placing and reading orders."""

    repository: OrderRepository
    cart_service: CartService
    food_repository: FoodRepository

    def place_order(self, session: SessionContext) -> OrderRecord:
        """Turn the session's cart into a completed order and clear the cart."""
        if not session.user_id:
            raise AuthenticationRequired("Authentication required")
        cart = self.cart_service.get_cart(session)
        if not cart.lines:
            raise InvalidQuery("Cart is empty")

        lines = self._snapshot_lines(cart)
        if not lines:
            raise InvalidQuery("No valid items in cart to create order")
        totals = calculate_totals(sum(line.price * line.quantity for line in lines))
        order = self.repository.create_order(
            user_id=session.user_id,
            order_number=self._unique_order_number(),
            lines=lines,
            totals=totals,
            status=ORDER_STATUS_COMPLETED,
        )
        self.cart_service.clear(session)
        _logger.info(
            "Placed order %s for user %s: items=%s total=%.2f",
            order.order_number,
            session.user_id,
            len(lines),
            totals.total,
        )
        return order

    def list_orders(
        self, user_id: str | None, page: int = 1, limit: int = 10
    ) -> tuple[list[OrderRecord], int]:
        """Return one page of the user's orders and the total count."""
        if not user_id:
            raise AuthenticationRequired("Authentication required")
        if page < 1 or limit < 1:
            raise InvalidQuery("page and limit must be positive integers")
        orders = self.repository.list_orders(user_id, (page - 1) * limit, limit)
        return orders, self.repository.count_orders(user_id)

    def get_order(self, user_id: str | None, order_id: str) -> OrderRecord:
        """Return one of the user's orders."""
        if not user_id:
            raise AuthenticationRequired("Authentication required")
        order = self.repository.get_order(order_id)
        if order is None:
            raise NotFound("Order not found")
        if order.user_id != user_id:
            raise Forbidden("Not authorized to view this order")
        return order

    def _snapshot_lines(self, cart: Cart) -> list[OrderLine]:
        """Copy cart lines with full nutrients, skipping items that vanished."""
        foods = {
            food.id: food
            for food in self.food_repository.list_foods_by_ids(
                [line.food_id for line in cart.lines]
            )
        }
        lines = []
        for line in cart.lines:
            food = foods.get(line.food_id)
            if food is None:
                _logger.warning("Skipping cart line with missing food %s", line.food_id)
                continue
            lines.append(
                OrderLine(
                    food_id=line.food_id,
                    company=line.company,
                    name=line.name,
                    price=line.price,
                    quantity=line.quantity,
                    calories=food.calories or line.calories,
                    total_fat=food.total_fat,
                    saturated_fat=food.saturated_fat,
                    trans_fat=food.trans_fat,
                    protein=food.protein,
                    carbs=food.carbs,
                    fiber=food.fiber,
                    sugars=food.sugars,
                    sodium=food.sodium,
                    cholesterol=food.cholesterol,
                )
            )
        return lines

    def _unique_order_number(self) -> str:
        while True:
            candidate = generate_order_number()
            if not self.repository.order_number_exists(candidate):
                return candidate


def calculate_totals(subtotal: float) -> OrderTotals:
    """Apply tax and the delivery fee to a subtotal."""
    tax = subtotal * TAX_RATE
    delivery_fee = 0.0 if subtotal > FREE_DELIVERY_THRESHOLD else DELIVERY_FEE
    return OrderTotals(
        subtotal=round(subtotal, 2),
        tax=round(tax, 2),
        delivery_fee=delivery_fee,
        total=round(subtotal + tax + delivery_fee, 2),
    )


def generate_order_number(now_ms: int | None = None) -> str:
    """Return an order number like `ORD-<base36 millis>-<6 random chars>`."""
    millis = now_ms if now_ms is not None else int(time.time() * 1000)
    suffix = "".join(secrets.choice(_BASE36) for _ in range(6))
    return f"ORD-{_to_base36(millis)}-{suffix}"


def _to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36[remainder])
    return "".join(reversed(digits))
