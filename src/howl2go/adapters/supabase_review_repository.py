"""Supabase implementation for item reviews."""

from dataclasses import dataclass

from supabase import Client

from howl2go.adapters.supabase_support import execute, parse_timestamp
from howl2go.domain.errors import UpstreamFailure
from howl2go.domain.reviews import Review
from howl2go.services.reviews import ReviewRepository

_TABLE = "reviews"


@dataclass
class SupabaseReviewRepository(ReviewRepository):
    """Supabase-backed review storage.

    The table carries a unique constraint on (user_id, food_item_id); the
    service checks first, the constraint settles concurrent submissions.
    """

    client: Client

    def create_review(
        self, food_id: str, user_id: str, rating: int, comment: str | None
    ) -> Review:
        """Create a review and return it."""
        response = execute(
            self.client.table(_TABLE).insert(
                {
                    "food_item_id": food_id,
                    "user_id": user_id,
                    "rating": rating,
                    "comment": comment,
                }
            ),
            "create_review",
        )
        if not response.data:
            raise UpstreamFailure("Failed to create review")
        return _parse_review(response.data[0])

    def get_review(self, review_id: str) -> Review | None:
        """Return a review by id, if present."""
        response = execute(
            self.client.table(_TABLE).select("*").eq("id", review_id).limit(1),
            "get_review",
        )
        if not response.data:
            return None
        return _parse_review(response.data[0])

    def find_review(self, user_id: str, food_id: str) -> Review | None:
        """Return the user's review of a food item, if any."""
        response = execute(
            self.client.table(_TABLE)
            .select("*")
            .eq("user_id", user_id)
            .eq("food_item_id", food_id)
            .limit(1),
            "find_review",
        )
        if not response.data:
            return None
        return _parse_review(response.data[0])

    def update_review(
        self, review_id: str, fields: dict[str, object]
    ) -> Review | None:
        """Update a review and return it."""
        response = execute(
            self.client.table(_TABLE).update(fields).eq("id", review_id),
            "update_review",
        )
        if not response.data:
            return None
        return _parse_review(response.data[0])

    def delete_review(self, review_id: str) -> bool:
        """Delete a review, returning whether a row was removed."""
        response = execute(
            self.client.table(_TABLE).delete().eq("id", review_id),
            "delete_review",
        )
        return bool(response.data)

    def list_reviews(self, food_id: str, limit: int) -> list[Review]:
        """Return recent reviews for a food item."""
        response = execute(
            self.client.table(_TABLE)
            .select("*")
            .eq("food_item_id", food_id)
            .order("created_at", desc=True)
            .limit(limit),
            "list_reviews",
        )
        return [_parse_review(row) for row in response.data or []]

    def list_user_reviews(self, user_id: str, limit: int) -> list[Review]:
        """Return a user's reviews, newest first."""
        response = execute(
            self.client.table(_TABLE)
            .select("*")
            .eq("user_id", user_id)
            .order("created_at", desc=True)
            .limit(limit),
            "list_user_reviews",
        )
        return [_parse_review(row) for row in response.data or []]

    def list_ratings(self, food_id: str) -> list[int]:
        """Return every rating given to a food item."""
        response = execute(
            self.client.table(_TABLE).select("rating").eq("food_item_id", food_id),
            "list_ratings",
        )
        return [int(row["rating"]) for row in response.data or []]


def _parse_review(row: dict[str, object]) -> Review:
    return Review(
        id=str(row["id"]),
        food_id=str(row.get("food_item_id", "")),
        user_id=str(row.get("user_id", "")),
        rating=int(row.get("rating", 0)),
        comment=row.get("comment"),
        created_at=parse_timestamp(row.get("created_at")),
        helpful_user_ids=frozenset(str(v) for v in row.get("helpful_user_ids") or []),
    )
