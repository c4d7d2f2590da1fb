"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from howl2go.adapters.supabase_admin_repository import SupabaseAdminRepository
from howl2go.adapters.supabase_bug_report_repository import (
    SupabaseBugReportRepository,
)
from howl2go.adapters.supabase_cart_repository import SupabaseCartRepository
from howl2go.adapters.supabase_food_repository import SupabaseFoodRepository
from howl2go.adapters.supabase_order_repository import SupabaseOrderRepository
from howl2go.adapters.supabase_review_repository import SupabaseReviewRepository
from howl2go.config import Settings
from howl2go.services.admin import AdminService
from howl2go.services.bugs import BugReportService
from howl2go.services.carts import CartService
from howl2go.services.catalog import CatalogService
from howl2go.services.combos import ComboService, ComboWeights
from howl2go.services.ingredients import IngredientRecommendationService
from howl2go.services.orders import OrderService
from howl2go.services.reviews import ReviewService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    catalog_service: CatalogService
    ingredient_service: IngredientRecommendationService
    combo_service: ComboService
    cart_service: CartService
    order_service: OrderService
    review_service: ReviewService
    admin_service: AdminService
    bug_report_service: BugReportService


def combo_weights(settings: Settings) -> ComboWeights:
    """Build combo ranking weights from settings."""
    return ComboWeights(
        frequency=settings.combo_frequency_weight,
        popularity=settings.combo_popularity_weight,
        nutrition=settings.combo_nutrition_weight,
    )


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    food_repository = SupabaseFoodRepository(supabase_client)
    order_repository = SupabaseOrderRepository(supabase_client)
    cart_repository = SupabaseCartRepository(supabase_client)
    review_repository = SupabaseReviewRepository(supabase_client)
    admin_repository = SupabaseAdminRepository(supabase_client)

    cart_service = CartService(
        repository=cart_repository, food_repository=food_repository
    )
    order_service = OrderService(
        repository=order_repository,
        cart_service=cart_service,
        food_repository=food_repository,
    )
    combo_service = ComboService(
        food_repository=food_repository,
        order_history=order_repository,
        weights=combo_weights(resolved_settings),
    )

    return AppContainer(
        settings=resolved_settings,
        catalog_service=CatalogService(food_repository),
        ingredient_service=IngredientRecommendationService(food_repository),
        combo_service=combo_service,
        cart_service=cart_service,
        order_service=order_service,
        review_service=ReviewService(
            repository=review_repository, food_repository=food_repository
        ),
        admin_service=AdminService(
            admin_repository=admin_repository, food_repository=food_repository
        ),
        bug_report_service=BugReportService(
            SupabaseBugReportRepository(supabase_client)
        ),
    )
