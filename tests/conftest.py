"""Shared test fixtures."""

import pytest

from howl2go.config import Settings
from howl2go.containers import AppContainer, combo_weights
from howl2go.services.admin import AdminService
from howl2go.services.bugs import BugReportService
from howl2go.services.carts import CartService
from howl2go.services.catalog import CatalogService
from howl2go.services.combos import ComboService
from howl2go.services.ingredients import IngredientRecommendationService
from howl2go.services.orders import OrderService
from howl2go.services.reviews import ReviewService
from tests.fakes import (
    InMemoryAdminRepository,
    InMemoryBugReportRepository,
    InMemoryCartRepository,
    InMemoryFoodRepository,
    InMemoryOrderRepository,
    InMemoryReviewRepository,
)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
        admin_token="admin-token",
    )


@pytest.fixture
def food_repository() -> InMemoryFoodRepository:
    return InMemoryFoodRepository()


@pytest.fixture
def order_repository() -> InMemoryOrderRepository:
    return InMemoryOrderRepository()


@pytest.fixture
def cart_repository() -> InMemoryCartRepository:
    return InMemoryCartRepository()


@pytest.fixture
def review_repository() -> InMemoryReviewRepository:
    return InMemoryReviewRepository()


@pytest.fixture
def bug_repository() -> InMemoryBugReportRepository:
    return InMemoryBugReportRepository()


@pytest.fixture
def cart_service(
    cart_repository: InMemoryCartRepository,
    food_repository: InMemoryFoodRepository,
) -> CartService:
    return CartService(repository=cart_repository, food_repository=food_repository)


@pytest.fixture
def order_service(
    order_repository: InMemoryOrderRepository,
    cart_service: CartService,
    food_repository: InMemoryFoodRepository,
) -> OrderService:
    return OrderService(
        repository=order_repository,
        cart_service=cart_service,
        food_repository=food_repository,
    )


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    food_repository: InMemoryFoodRepository,
    order_repository: InMemoryOrderRepository,
    review_repository: InMemoryReviewRepository,
    bug_repository: InMemoryBugReportRepository,
    cart_service: CartService,
    order_service: OrderService,
) -> AppContainer:
    return AppContainer(
        settings=settings,
        catalog_service=CatalogService(food_repository),
        ingredient_service=IngredientRecommendationService(food_repository),
        combo_service=ComboService(
            food_repository=food_repository,
            order_history=order_repository,
            weights=combo_weights(settings),
        ),
        cart_service=cart_service,
        order_service=order_service,
        review_service=ReviewService(
            repository=review_repository, food_repository=food_repository
        ),
        admin_service=AdminService(
            admin_repository=InMemoryAdminRepository(order_repository),
            food_repository=food_repository,
        ),
        bug_report_service=BugReportService(bug_repository),
    )
