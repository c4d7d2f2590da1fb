"""Tests for admin service."""

from howl2go.services.admin import AdminService
from tests.fakes import (
    InMemoryAdminRepository,
    InMemoryFoodRepository,
    InMemoryOrderRepository,
    make_food,
)


def test_dashboard_on_empty_store() -> None:
    service = AdminService(
        admin_repository=InMemoryAdminRepository(InMemoryOrderRepository()),
        food_repository=InMemoryFoodRepository(),
    )

    data = service.dashboard()

    assert data == {
        "order_count": 0,
        "revenue": 0,
        "average_order_value": 0.0,
        "top_items": [],
    }


def test_dashboard_names_top_items() -> None:
    orders = InMemoryOrderRepository()
    orders.add_history(["a", "b"], ["b"], ["gone"])
    foods = InMemoryFoodRepository()
    foods.add(make_food("a", "Nuggets"), make_food("b", "Cola"))
    service = AdminService(
        admin_repository=InMemoryAdminRepository(orders), food_repository=foods
    )

    top = service.dashboard(top_limit=3)["top_items"]

    assert [entry["food_item_id"] for entry in top] == ["b", "a", "gone"]
    assert top[0]["item"] == "Cola"
    assert top[2]["item"] is None
