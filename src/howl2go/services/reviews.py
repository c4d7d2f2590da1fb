"""Services for item reviews."""

import logging
from dataclasses import dataclass
from typing import Protocol

from howl2go.domain.errors import (
    AuthenticationRequired,
    Conflict,
    Forbidden,
    InvalidQuery,
    NotFound,
)
from howl2go.domain.reviews import Review, ReviewSummary
from howl2go.services.catalog import FoodRepository

MIN_RATING = 1
MAX_RATING = 5
MAX_COMMENT_LENGTH = 1000

_logger = logging.getLogger(__name__)


class ReviewRepository(Protocol):
    """Persistence interface for reviews."""

    def create_review(
        self, food_id: str, user_id: str, rating: int, comment: str | None
    ) -> Review:
        """Create a review and return it."""

    def get_review(self, review_id: str) -> Review | None:
        """Return a review by id, if present."""

    def find_review(self, user_id: str, food_id: str) -> Review | None:
        """Return the user's review of a food item, if any."""

    def update_review(
        self, review_id: str, fields: dict[str, object]
    ) -> Review | None:
        """Update a review and return it, or None when it does not exist."""

    def delete_review(self, review_id: str) -> bool:
        """Delete a review, returning whether it existed."""

    def list_reviews(self, food_id: str, limit: int) -> list[Review]:
        """Return recent reviews for a food item."""

    def list_user_reviews(self, user_id: str, limit: int) -> list[Review]:
        """Return a user's reviews, newest first."""

    def list_ratings(self, food_id: str) -> list[int]:
        """Return every rating given to a food item."""


@dataclass
class ReviewService:
    """Application service for reviews."""

    repository: ReviewRepository
    food_repository: FoodRepository

    def add_review(
        self, user_id: str | None, food_id: str, rating: int, comment: str | None
    ) -> Review:
        """Record a user's rating for a food item, once per user and item."""
        user_id = _require_user(user_id)
        _check_rating(rating)
        _check_comment(comment)
        if self.food_repository.get_food(food_id) is None:
            raise NotFound("Food item not found")
        if self.repository.find_review(user_id, food_id) is not None:
            raise Conflict("You have already reviewed this item")
        return self.repository.create_review(
            food_id, user_id, rating, _clean_comment(comment)
        )

    def update_review(
        self,
        user_id: str | None,
        review_id: str,
        rating: int | None = None,
        comment: str | None = None,
    ) -> Review:
        """Change the rating or comment of the caller's own review."""
        review = self._owned_review(user_id, review_id, "update")
        fields: dict[str, object] = {}
        if rating is not None:
            _check_rating(rating)
            fields["rating"] = rating
        if comment is not None:
            _check_comment(comment)
            fields["comment"] = _clean_comment(comment)
        if not fields:
            return review
        updated = self.repository.update_review(review_id, fields)
        if updated is None:
            raise NotFound("Review not found")
        return updated

    def delete_review(self, user_id: str | None, review_id: str) -> None:
        """Remove the caller's own review."""
        self._owned_review(user_id, review_id, "delete")
        if not self.repository.delete_review(review_id):
            raise NotFound("Review not found")
        _logger.info("Deleted review %s", review_id)

    def mark_helpful(self, user_id: str | None, review_id: str) -> Review:
        """Record that a user found a review helpful; repeat votes are ignored."""
        user_id = _require_user(user_id)
        review = self.repository.get_review(review_id)
        if review is None:
            raise NotFound("Review not found")
        if user_id in review.helpful_user_ids:
            return review
        voters = sorted(review.helpful_user_ids | {user_id})
        updated = self.repository.update_review(
            review_id, {"helpful_user_ids": voters}
        )
        if updated is None:
            raise NotFound("Review not found")
        return updated

    def list_reviews(self, food_id: str, limit: int = 20) -> list[Review]:
        """Return recent reviews for a food item."""
        return self.repository.list_reviews(food_id, limit)

    def list_my_reviews(self, user_id: str | None, limit: int = 20) -> list[Review]:
        """Return the caller's reviews, newest first."""
        return self.repository.list_user_reviews(_require_user(user_id), limit)

    def summary(self, food_id: str) -> ReviewSummary:
        """Return the review count and average rating."""
        ratings = self.repository.list_ratings(food_id)
        if not ratings:
            return ReviewSummary(count=0, average_rating=None)
        return ReviewSummary(
            count=len(ratings), average_rating=round(sum(ratings) / len(ratings), 2)
        )

    def _owned_review(
        self, user_id: str | None, review_id: str, action: str
    ) -> Review:
        user_id = _require_user(user_id)
        review = self.repository.get_review(review_id)
        if review is None:
            raise NotFound("Review not found")
        if review.user_id != user_id:
            raise Forbidden(f"You do not have permission to {action} this review")
        return review


def _require_user(user_id: str | None) -> str:
    if not user_id:
        raise AuthenticationRequired("Authentication required")
    return user_id


def _check_rating(rating: int) -> None:
    if isinstance(rating, bool) or not MIN_RATING <= rating <= MAX_RATING:
        raise InvalidQuery("rating must be between 1 and 5")


def _check_comment(comment: str | None) -> None:
    if comment is not None and len(comment) > MAX_COMMENT_LENGTH:
        raise InvalidQuery("comment is too long")


def _clean_comment(comment: str | None) -> str | None:
    cleaned = comment.strip() if comment else None
    return cleaned or None
