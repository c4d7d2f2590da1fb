"""Review endpoints."""

from fastapi import APIRouter, Depends, Request, status

from howl2go.api.dependencies import get_user_id
from howl2go.api.models import ReviewPayload, ReviewUpdatePayload
from howl2go.containers import AppContainer
from howl2go.domain.reviews import Review

router = APIRouter(prefix="/api/reviews", tags=["reviews"])


@router.post("", status_code=status.HTTP_201_CREATED)
def create_review(
    payload: ReviewPayload,
    request: Request,
    user_id: str | None = Depends(get_user_id),
) -> dict[str, object]:
    """Submit a rating for a food item."""
    container: AppContainer = request.app.state.container
    review = container.review_service.add_review(
        user_id, payload.food_item_id, payload.rating, payload.comment
    )
    return {"success": True, "review": _serialize_review(review)}


@router.get("/mine")
def list_my_reviews(
    request: Request,
    limit: int = 20,
    user_id: str | None = Depends(get_user_id),
) -> dict[str, object]:
    """Return the caller's reviews, newest first."""
    container: AppContainer = request.app.state.container
    reviews = container.review_service.list_my_reviews(user_id, limit)
    return {
        "success": True,
        "reviews": [_serialize_review(review) for review in reviews],
        "count": len(reviews),
    }


@router.get("/food/{food_id}")
def list_reviews(food_id: str, request: Request, limit: int = 20) -> dict[str, object]:
    """Return recent reviews and the rating summary for a food item."""
    container: AppContainer = request.app.state.container
    reviews = container.review_service.list_reviews(food_id, limit)
    summary = container.review_service.summary(food_id)
    return {
        "success": True,
        "reviews": [_serialize_review(review) for review in reviews],
        "summary": {
            "count": summary.count,
            "average_rating": summary.average_rating,
        },
    }


@router.patch("/{review_id}")
def update_review(
    review_id: str,
    payload: ReviewUpdatePayload,
    request: Request,
    user_id: str | None = Depends(get_user_id),
) -> dict[str, object]:
    """Edit the caller's own review."""
    container: AppContainer = request.app.state.container
    review = container.review_service.update_review(
        user_id, review_id, rating=payload.rating, comment=payload.comment
    )
    return {"success": True, "review": _serialize_review(review)}


@router.delete("/{review_id}")
def delete_review(
    review_id: str,
    request: Request,
    user_id: str | None = Depends(get_user_id),
) -> dict[str, object]:
    """Remove the caller's own review."""
    container: AppContainer = request.app.state.container
    container.review_service.delete_review(user_id, review_id)
    return {"success": True}


@router.post("/{review_id}/helpful")
def mark_helpful(
    review_id: str,
    request: Request,
    user_id: str | None = Depends(get_user_id),
) -> dict[str, object]:
    """Record that the caller found a review helpful."""
    container: AppContainer = request.app.state.container
    review = container.review_service.mark_helpful(user_id, review_id)
    return {"success": True, "review": _serialize_review(review)}


def _serialize_review(review: Review) -> dict[str, object]:
    return {
        "id": review.id,
        "food_item_id": review.food_id,
        "user_id": review.user_id,
        "rating": review.rating,
        "comment": review.comment,
        "helpful_count": review.helpful_count,
        "created_at": review.created_at.isoformat(),
    }
