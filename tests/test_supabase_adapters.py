"""Tests for Supabase adapter implementations."""

from dataclasses import dataclass, field
from datetime import UTC, datetime

import pytest

from howl2go.adapters import supabase_food_repository
from howl2go.adapters.supabase_admin_repository import SupabaseAdminRepository
from howl2go.adapters.supabase_bug_report_repository import (
    SupabaseBugReportRepository,
)
from howl2go.adapters.supabase_cart_repository import SupabaseCartRepository
from howl2go.adapters.supabase_food_repository import (
    SupabaseFoodRepository,
    parse_food,
)
from howl2go.adapters.supabase_order_repository import SupabaseOrderRepository
from howl2go.adapters.supabase_review_repository import SupabaseReviewRepository
from howl2go.domain.bugs import BugSeverity, BugStatus
from howl2go.domain.carts import Cart, CartLine
from howl2go.domain.errors import UpstreamFailure
from howl2go.domain.orders import OrderLine, OrderTotals
from howl2go.services.ingredients import IngredientRecommendationService, build_query


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None
    count: int | None = None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {
            "select": [],
            "insert": [],
            "update": [],
            "upsert": [],
            "delete": [],
        }
    )
    last_payload: object | None = None
    last_filters: list[tuple[str, str, object]] = field(default_factory=list)
    last_options: dict[str, object] = field(default_factory=dict)
    actions: list[str] = field(default_factory=list)
    fail: bool = False
    count: int | None = None

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def select(self, *_args: str, count: str | None = None) -> "FakeTable":
        self._action = "select"
        self.actions.append("select")
        self.last_options = {"count": count} if count else {}
        return self

    def insert(self, payload: object) -> "FakeTable":
        self._action = "insert"
        self.actions.append("insert")
        self.last_payload = payload
        return self

    def update(self, payload: object) -> "FakeTable":
        self._action = "update"
        self.actions.append("update")
        self.last_payload = payload
        return self

    def upsert(self, payload: object, on_conflict: str = "") -> "FakeTable":
        self._action = "upsert"
        self.actions.append("upsert")
        self.last_payload = payload
        self.last_options = {"on_conflict": on_conflict}
        return self

    def delete(self) -> "FakeTable":
        self._action = "delete"
        self.actions.append("delete")
        return self

    @property
    def not_(self) -> "FakeTable":
        self._negate = True
        return self

    def _filter(self, op: str, column: str, value: object) -> "FakeTable":
        if getattr(self, "_negate", False):
            op = f"not.{op}"
            self._negate = False
        self.last_filters.append((op, column, value))
        return self

    def eq(self, column: str, value: object) -> "FakeTable":
        return self._filter("eq", column, value)

    def in_(self, column: str, value: object) -> "FakeTable":
        return self._filter("in", column, value)

    def overlaps(self, column: str, value: object) -> "FakeTable":
        return self._filter("ov", column, value)

    def or_(self, filters: str) -> "FakeTable":
        return self._filter("or", "", filters)

    def limit(self, _count: int) -> "FakeTable":
        return self

    def order(self, _column: str, desc: bool = False) -> "FakeTable":
        return self

    def range(self, start: int, end: int) -> "FakeTable":
        self.last_options = {**self.last_options, "range": (start, end)}
        return self

    def execute(self) -> FakeResponse:
        if self.fail:
            raise RuntimeError("connection reset")
        action = getattr(self, "_action", "select")
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        return FakeResponse(data=data, count=self.count)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


FOOD_ROW = {
    "id": "42",
    "restaurant": "McDonald's",
    "item": "Big Mac",
    "calories": "550",
    "protein": 25,
    "sodium": None,
    "ingredients": ["Beef", " bun ", "", 7],
}


def test_parse_food_normalizes_row() -> None:
    food = parse_food(FOOD_ROW)

    assert food.company == "McDonald's"
    assert food.name == "Big Mac"
    assert food.calories == 550.0
    assert food.sodium is None
    assert food.ingredients == frozenset({"beef", "bun"})


def test_food_repository_ingredient_prefilter_only_excludes() -> None:
    client = FakeSupabaseClient()
    table = client.table("food_items")
    table.queue("select", [FOOD_ROW])

    repository = SupabaseFoodRepository(client)
    foods = repository.find_by_ingredients(["beef"], ["pickle"])

    assert [food.id for food in foods] == ["42"]
    assert table.last_filters == [("not.ov", "ingredients", ["pickle"])]
    assert table.last_options["range"] == (0, 999)


def test_mixed_case_ingredients_still_match_include() -> None:
    client = FakeSupabaseClient()
    client.table("food_items").queue(
        "select", [{"id": "7", "item": "Salad", "ingredients": ["Lettuce", "Tomato"]}]
    )
    service = IngredientRecommendationService(SupabaseFoodRepository(client))

    result = service.recommend(
        build_query(include=["lettuce"], exclude=[], page=1, limit=10)
    )

    assert result.total == 1
    assert result.items[0].item.id == "7"


def test_ingredient_read_pages_past_row_cap(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(supabase_food_repository, "PAGE_SIZE", 2)
    client = FakeSupabaseClient()
    table = client.table("food_items")
    table.queue("select", [{**FOOD_ROW, "id": "1"}, {**FOOD_ROW, "id": "2"}])
    table.queue("select", [{**FOOD_ROW, "id": "3"}])

    foods = SupabaseFoodRepository(client).find_by_ingredients(["beef"], [])

    assert [food.id for food in foods] == ["1", "2", "3"]
    assert table.actions == ["select", "select"]
    assert table.last_options["range"] == (2, 3)


def test_food_repository_search_page() -> None:
    client = FakeSupabaseClient()
    table = client.table("food_items")
    table.queue("select", [FOOD_ROW])

    repository = SupabaseFoodRepository(client)
    foods = repository.search_foods("mac", offset=200, limit=200)

    assert [food.id for food in foods] == ["42"]
    assert table.last_filters == [
        ("or", "", "item.ilike.*mac*,company.ilike.*mac*,ingredients.cs.{mac}")
    ]
    assert table.last_options["range"] == (200, 399)

    repository.search_foods(None, offset=0, limit=200)
    assert len(table.last_filters) == 1


def test_food_repository_crud() -> None:
    client = FakeSupabaseClient()
    table = client.table("food_items")
    table.queue("insert", [FOOD_ROW])
    table.queue("update", [])
    table.queue("delete", [FOOD_ROW])

    repository = SupabaseFoodRepository(client)
    created = repository.create_food({"company": "McDonald's", "item": "Big Mac"})
    updated = repository.update_food("missing", {"calories": 1})
    deleted = repository.delete_food("42")

    assert created.id == "42"
    assert updated is None
    assert deleted is True
    assert repository.list_foods_by_ids([]) == []


def test_store_errors_become_upstream_failures() -> None:
    client = FakeSupabaseClient()
    client.table("food_items").fail = True

    repository = SupabaseFoodRepository(client)

    with pytest.raises(UpstreamFailure):
        repository.get_food("42")


def test_order_repository_create_and_page() -> None:
    client = FakeSupabaseClient()
    orders_table = client.table("orders")
    items_table = client.table("order_items")
    created_at = datetime(2024, 5, 1, tzinfo=UTC).isoformat()
    line = OrderLine(food_id="42", company="Grill", name="Big Mac", price=5, quantity=2)
    orders_table.queue(
        "insert",
        [
            {
                "id": "order-1",
                "order_number": "ORD-X-ABCDEF",
                "user_id": "user-1",
                "items": [{"food_id": "42", "price": 5, "quantity": 2}],
                "subtotal": 10,
                "tax": 0.8,
                "delivery_fee": 3.99,
                "total": 14.79,
                "status": "completed",
                "created_at": created_at,
            }
        ],
    )

    repository = SupabaseOrderRepository(client)
    order = repository.create_order(
        user_id="user-1",
        order_number="ORD-X-ABCDEF",
        lines=[line],
        totals=OrderTotals(subtotal=10, tax=0.8, delivery_fee=3.99, total=14.79),
        status="completed",
    )
    repository.list_orders("user-1", offset=20, limit=10)
    orders_table.count = 7

    assert order.id == "order-1"
    assert order.lines[0].quantity == 2
    assert order.created_at.year == 2024
    assert items_table.last_payload == [
        {"order_id": "order-1", "food_item_id": "42", "quantity": 2}
    ]
    assert orders_table.last_options["range"] == (20, 29)
    assert repository.count_orders("user-1") == 7


def test_order_repository_co_occurrence() -> None:
    client = FakeSupabaseClient()
    items_table = client.table("order_items")
    items_table.queue("select", [{"order_id": "o1"}, {"order_id": "o2"}])
    items_table.queue(
        "select",
        [
            {"order_id": "o1", "food_item_id": "burger"},
            {"order_id": "o1", "food_item_id": "fries"},
            {"order_id": "o1", "food_item_id": "fries"},
            {"order_id": "o2", "food_item_id": "burger"},
            {"order_id": "o2", "food_item_id": "fries"},
            {"order_id": "o2", "food_item_id": "cola"},
        ],
    )

    repository = SupabaseOrderRepository(client)

    assert repository.co_occurrence_counts("burger") == {"fries": 2, "cola": 1}
    assert repository.popularity([]) == {}


def test_cart_repository_upserts_by_session() -> None:
    client = FakeSupabaseClient()
    table = client.table("carts")
    line = CartLine(
        food_id="42",
        company="Grill",
        name="Big Mac",
        calories=550,
        total_fat=30,
        protein=25,
        carbs=45,
        price=5.5,
        quantity=1,
    )
    table.queue(
        "upsert",
        [
            {
                "session_id": "session-1",
                "user_id": None,
                "items": [
                    {"food_id": "42", "name": "Big Mac", "price": 5.5, "quantity": 1}
                ],
            }
        ],
    )

    repository = SupabaseCartRepository(client)
    saved = repository.save_cart(Cart(session_id="session-1", lines=(line,)))

    assert table.last_options == {"on_conflict": "session_id"}
    assert table.last_payload["items"][0]["food_id"] == "42"
    assert saved.lines[0].price == 5.5
    assert repository.get_cart("session-2") is None


def test_review_and_admin_repositories() -> None:
    client = FakeSupabaseClient()
    client.table("reviews").queue("select", [{"rating": 5}, {"rating": 3}])
    client.table("orders").queue("select", [{"total": 10.5}, {"total": None}])
    client.table("order_items").queue(
        "select",
        [
            {"order_id": "o1", "food_item_id": "b"},
            {"order_id": "o2", "food_item_id": "b"},
            {"order_id": "o2", "food_item_id": "a"},
        ],
    )

    reviews = SupabaseReviewRepository(client)
    admin = SupabaseAdminRepository(client)

    assert reviews.list_ratings("42") == [5, 3]
    assert admin.order_totals() == (2, 10.5)
    assert admin.top_items(5) == [("b", 2), ("a", 1)]


def test_order_rows_are_rolled_back_when_items_fail() -> None:
    client = FakeSupabaseClient()
    orders_table = client.table("orders")
    orders_table.queue("insert", [{"id": "order-1", "order_number": "ORD-X"}])
    client.table("order_items").fail = True
    line = OrderLine(food_id="42", company="Grill", name="Big Mac", price=5, quantity=1)

    repository = SupabaseOrderRepository(client)
    with pytest.raises(UpstreamFailure):
        repository.create_order(
            user_id="user-1",
            order_number="ORD-X",
            lines=[line],
            totals=OrderTotals(subtotal=5, tax=0.4, delivery_fee=3.99, total=9.39),
            status="completed",
        )

    assert orders_table.actions == ["insert", "delete"]
    assert orders_table.last_filters == [("eq", "id", "order-1")]


def test_review_repository_lookup_and_edits() -> None:
    client = FakeSupabaseClient()
    table = client.table("reviews")
    row = {
        "id": "r1",
        "food_item_id": "42",
        "user_id": "user-1",
        "rating": 4,
        "helpful_user_ids": ["user-2", "user-3"],
    }
    table.queue("select", [row])
    table.queue("update", [{**row, "rating": 2}])
    table.queue("delete", [])

    repository = SupabaseReviewRepository(client)
    found = repository.find_review("user-1", "42")

    assert found is not None
    assert found.helpful_count == 2
    assert table.last_filters == [
        ("eq", "user_id", "user-1"),
        ("eq", "food_item_id", "42"),
    ]
    assert repository.update_review("r1", {"rating": 2}).rating == 2
    assert table.last_payload == {"rating": 2}
    assert repository.delete_review("r1") is False
    assert repository.get_review("r1") is None


def test_bug_report_repository() -> None:
    client = FakeSupabaseClient()
    table = client.table("bug_reports")
    row = {
        "id": "b1",
        "user_id": "user-1",
        "title": "Cart empties",
        "description": "Cart empties after refresh",
        "severity": "high",
        "status": "open",
        "created_at": datetime(2024, 5, 1, tzinfo=UTC).isoformat(),
    }
    table.queue("insert", [row])
    table.queue("select", [row])
    table.queue("update", [{**row, "status": "resolved"}])

    repository = SupabaseBugReportRepository(client)
    created = repository.create_report(
        user_id="user-1",
        title="Cart empties",
        description="Cart empties after refresh",
        severity=BugSeverity.HIGH,
        page_url=None,
    )

    assert created.severity is BugSeverity.HIGH
    assert table.last_payload["status"] == "open"
    assert table.last_payload["severity"] == "high"

    reports = repository.list_reports(BugStatus.OPEN, 10)
    assert [report.id for report in reports] == ["b1"]
    assert ("eq", "status", "open") in table.last_filters

    updated = repository.update_status("b1", BugStatus.RESOLVED)
    assert updated.status is BugStatus.RESOLVED
    assert table.last_payload == {"status": "resolved"}
    assert repository.update_status("missing", BugStatus.CLOSED) is None
