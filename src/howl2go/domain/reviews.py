"""Domain models for item reviews."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class Review:
    """A user's rating of a food item."""

    id: str
    food_id: str
    user_id: str
    rating: int
    comment: str | None
    created_at: datetime
    helpful_user_ids: frozenset[str] = field(default_factory=frozenset)

    @property
    def helpful_count(self) -> int:
        return len(self.helpful_user_ids)


@dataclass(frozen=True)
class ReviewSummary:
    """Aggregate rating for a food item."""

    count: int
    average_rating: float | None
