"""Tests for combo suggestions."""

import pytest

from howl2go.domain.combos import ComboPreferences, ComboRequest, NutritionalFocus
from howl2go.domain.errors import InvalidQuery, NotFound
from howl2go.services.combos import (
    REASON_FALLBACK,
    REASON_FREQUENCY,
    REASON_NUTRITION,
    ComboService,
    ComboWeights,
)
from howl2go.services.nutrition import nutritional_score
from tests.fakes import InMemoryFoodRepository, InMemoryOrderRepository, make_food


@pytest.fixture
def menu(food_repository: InMemoryFoodRepository) -> InMemoryFoodRepository:
    food_repository.add(
        make_food("1", "Cheeseburger", calories=550, protein=28, carbs=40),
        make_food("2", "Fries", calories=320, carbs=42, ingredients=["potato"]),
        make_food("3", "Cola", calories=400, sugars=100),
        make_food("4", "Apple Pie", calories=240, sugars=13),
        make_food("5", "Chicken Sandwich", calories=500, protein=25),
        make_food("9", "Fries", company="Other Diner", calories=300),
    )
    return food_repository


@pytest.fixture
def service(
    menu: InMemoryFoodRepository, order_repository: InMemoryOrderRepository
) -> ComboService:
    return ComboService(food_repository=menu, order_history=order_repository)


def test_ranks_by_co_purchase_frequency(
    service: ComboService, order_repository: InMemoryOrderRepository
) -> None:
    order_repository.add_history(["1", "2"], ["1", "2"], ["1", "2"], ["1", "3"])

    suggestions = service.suggest(ComboRequest(main_item_id="1"))

    assert [entry.item.id for entry in suggestions] == ["2", "3"]
    top = suggestions[0]
    assert top.frequency == 3
    assert top.popularity == 3
    assert top.popularity_score == 1.0
    assert top.reason == REASON_FREQUENCY
    main = service.food_repository.get_food("1")
    assert top.score == pytest.approx(
        0.5 + 0.3 + 0.2 * nutritional_score(main, top.item)
    )


def test_main_item_is_never_suggested(
    service: ComboService, order_repository: InMemoryOrderRepository
) -> None:
    order_repository.add_history(["1", "1", "2"], ["1", "2"])

    suggestions = service.suggest(ComboRequest(main_item_id="1"))

    assert "1" not in {entry.item.id for entry in suggestions}
    assert len({entry.item.id for entry in suggestions}) == len(suggestions)


def test_limit_truncates_results(
    service: ComboService, order_repository: InMemoryOrderRepository
) -> None:
    order_repository.add_history(["1", "2", "3", "4"])

    assert len(service.suggest(ComboRequest(main_item_id="1", limit=2))) == 2


def test_rejects_non_positive_limit(service: ComboService) -> None:
    with pytest.raises(InvalidQuery):
        service.suggest(ComboRequest(main_item_id="1", limit=0))


def test_unknown_main_item_raises_not_found(service: ComboService) -> None:
    with pytest.raises(NotFound):
        service.suggest(ComboRequest(main_item_id="missing"))


def test_falls_back_to_popular_complementary_items(
    service: ComboService, order_repository: InMemoryOrderRepository
) -> None:
    order_repository.add_history(["2"], ["3"], ["3"])

    suggestions = service.suggest(ComboRequest(main_item_id="1"))

    assert [entry.item.id for entry in suggestions] == ["3", "2", "4"]
    assert all(entry.reason == REASON_FALLBACK for entry in suggestions)
    assert [entry.score for entry in suggestions] == [1.0, 0.5, 0.0]
    assert all(entry.frequency == 0 for entry in suggestions)


def test_fallback_without_any_history_orders_by_id(service: ComboService) -> None:
    suggestions = service.suggest(ComboRequest(main_item_id="1"))

    assert [entry.item.id for entry in suggestions] == ["2", "3", "4"]


def test_fallback_is_empty_when_nothing_complements(
    food_repository: InMemoryFoodRepository,
    order_repository: InMemoryOrderRepository,
) -> None:
    food_repository.add(make_food("1", "Cheeseburger"), make_food("2", "Hamburger"))
    service = ComboService(food_repository, order_repository)

    assert service.suggest(ComboRequest(main_item_id="1")) == []


def test_preferences_exclude_ingredients_and_calories(
    service: ComboService, order_repository: InMemoryOrderRepository
) -> None:
    order_repository.add_history(["1", "2", "3", "4"])
    preferences = ComboPreferences(
        max_calories=300, exclude_ingredients=frozenset({"potato"})
    )

    suggestions = service.suggest(
        ComboRequest(main_item_id="1", preferences=preferences)
    )

    assert [entry.item.id for entry in suggestions] == ["4"]


def test_skips_history_items_missing_from_catalogue(
    service: ComboService, order_repository: InMemoryOrderRepository
) -> None:
    order_repository.add_history(["1", "gone"], ["1", "gone"], ["1", "4"])

    suggestions = service.suggest(ComboRequest(main_item_id="1"))

    assert [entry.item.id for entry in suggestions] == ["4"]


def test_nutrition_only_weights_use_nutritional_reason(
    menu: InMemoryFoodRepository, order_repository: InMemoryOrderRepository
) -> None:
    order_repository.add_history(["1", "2"], ["1", "4"])
    service = ComboService(
        menu, order_repository, ComboWeights(frequency=0, popularity=0, nutrition=1)
    )

    suggestions = service.suggest(
        ComboRequest(main_item_id="1", focus=NutritionalFocus.LOW_SUGAR)
    )

    assert all(entry.reason == REASON_NUTRITION for entry in suggestions)
    assert all(entry.score == entry.nutritional_score for entry in suggestions)
    scores = [entry.score for entry in suggestions]
    assert scores == sorted(scores, reverse=True)


def test_suggestions_are_deterministic(
    service: ComboService, order_repository: InMemoryOrderRepository
) -> None:
    order_repository.add_history(["1", "2", "3"], ["1", "3", "4"], ["1", "2", "4"])
    request = ComboRequest(main_item_id="1", limit=3)

    assert service.suggest(request) == service.suggest(request)


def test_fallback_respects_limit(service: ComboService) -> None:
    suggestions = service.suggest(ComboRequest(main_item_id="1", limit=2))

    assert [entry.item.id for entry in suggestions] == ["2", "3"]
