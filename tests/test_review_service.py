"""Tests for review service."""

import pytest

from howl2go.domain.errors import (
    AuthenticationRequired,
    Conflict,
    Forbidden,
    InvalidQuery,
    NotFound,
)
from howl2go.services.reviews import ReviewService
from tests.fakes import InMemoryFoodRepository, InMemoryReviewRepository, make_food


@pytest.fixture
def service(
    food_repository: InMemoryFoodRepository,
    review_repository: InMemoryReviewRepository,
) -> ReviewService:
    food_repository.add(make_food("burger", "Burger"))
    return ReviewService(repository=review_repository, food_repository=food_repository)


def test_add_review_and_summary(service: ReviewService) -> None:
    service.add_review("user-1", "burger", 5, "  Great!  ")
    service.add_review("user-2", "burger", 4, "   ")
    service.add_review("user-3", "burger", 4, None)

    reviews = service.list_reviews("burger")
    summary = service.summary("burger")

    assert [review.comment for review in reviews] == [None, None, "Great!"]
    assert summary.count == 3
    assert summary.average_rating == 4.33


def test_summary_without_reviews(service: ReviewService) -> None:
    summary = service.summary("burger")

    assert summary.count == 0
    assert summary.average_rating is None


@pytest.mark.parametrize("rating", [0, 6])
def test_rejects_out_of_range_rating(service: ReviewService, rating: int) -> None:
    with pytest.raises(InvalidQuery):
        service.add_review("user-1", "burger", rating, None)


def test_rejects_long_comment(service: ReviewService) -> None:
    with pytest.raises(InvalidQuery):
        service.add_review("user-1", "burger", 3, "x" * 1001)


def test_requires_user_and_existing_food(service: ReviewService) -> None:
    with pytest.raises(AuthenticationRequired):
        service.add_review(None, "burger", 3, None)
    with pytest.raises(NotFound):
        service.add_review("user-1", "missing", 3, None)


def test_repeat_reviews_do_not_inflate_summary(
    food_repository: InMemoryFoodRepository,
    review_repository: InMemoryReviewRepository,
) -> None:
    food_repository.add(make_food("1", "Burger"))
    service = ReviewService(
        repository=review_repository, food_repository=food_repository
    )

    service.add_review("u1", "1", 1, None)
    for _ in range(2):
        with pytest.raises(Conflict, match="already reviewed"):
            service.add_review("u1", "1", 1, None)
    service.add_review("u2", "1", 5, None)

    summary = service.summary("1")
    assert summary.count == 2
    assert summary.average_rating == 3.0


def test_update_and_delete_own_review(service: ReviewService) -> None:
    review = service.add_review("user-1", "burger", 2, "meh")

    updated = service.update_review("user-1", review.id, rating=5, comment=" Better ")

    assert updated.rating == 5
    assert updated.comment == "Better"
    assert service.update_review("user-1", review.id).rating == 5

    service.delete_review("user-1", review.id)

    assert service.summary("burger").count == 0
    with pytest.raises(NotFound):
        service.delete_review("user-1", review.id)


def test_cannot_edit_someone_elses_review(service: ReviewService) -> None:
    review = service.add_review("user-1", "burger", 4, None)

    with pytest.raises(Forbidden):
        service.update_review("user-2", review.id, rating=1)
    with pytest.raises(Forbidden):
        service.delete_review("user-2", review.id)
    with pytest.raises(InvalidQuery):
        service.update_review("user-1", review.id, rating=9)


def test_list_my_reviews(service: ReviewService) -> None:
    service.add_review("user-1", "burger", 4, "first")

    assert [review.comment for review in service.list_my_reviews("user-1")] == [
        "first"
    ]
    assert service.list_my_reviews("user-2") == []
    with pytest.raises(AuthenticationRequired):
        service.list_my_reviews(None)


def test_mark_helpful_counts_each_user_once(service: ReviewService) -> None:
    review = service.add_review("user-1", "burger", 4, None)

    service.mark_helpful("user-2", review.id)
    service.mark_helpful("user-2", review.id)
    marked = service.mark_helpful("user-3", review.id)

    assert marked.helpful_count == 2
    with pytest.raises(NotFound):
        service.mark_helpful("user-2", "missing")
