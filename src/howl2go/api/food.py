"""Food, ingredient recommendation and combo suggestion endpoints."""

from fastapi import APIRouter, Query, Request
from fastapi.responses import JSONResponse

from howl2go.api.models import parse_preferences
from howl2go.config import parse_csv_list
from howl2go.containers import AppContainer
from howl2go.domain.combos import ComboRequest, ComboSuggestion, NutritionalFocus
from howl2go.domain.errors import Howl2GoError, InvalidQuery
from howl2go.domain.foods import ScoredFood, serialize_food
from howl2go.services.catalog import parse_keywords
from howl2go.services.ingredients import DEFAULT_LIMIT, DEFAULT_PAGE, build_query

DEFAULT_SEARCH_LIMIT = 20

router = APIRouter(prefix="/api", tags=["food"])


@router.get("/recommendations/ingredients")
def recommend_by_ingredients(
    request: Request,
    include: str | None = None,
    exclude: str | None = None,
    page: int = DEFAULT_PAGE,
    limit: int = DEFAULT_LIMIT,
) -> dict[str, object]:
    """Return items containing every included and no excluded ingredient."""
    container: AppContainer = request.app.state.container
    query = build_query(
        include=parse_csv_list(include),
        exclude=parse_csv_list(exclude),
        page=page,
        limit=min(limit, container.settings.ingredient_max_limit),
    )
    result = container.ingredient_service.recommend(query)
    return {
        "success": True,
        "criteria": {"include": list(query.include), "exclude": list(query.exclude)},
        "results": [_serialize_scored(scored) for scored in result.items],
        "count": len(result.items),
        "total": result.total,
        "page": result.page,
        "limit": result.limit,
    }


@router.get("/food/search")
def search_food(
    request: Request, q: str | None = None, limit: int = DEFAULT_SEARCH_LIMIT
) -> dict[str, object]:
    """Return items whose name, company or ingredients match every keyword."""
    container: AppContainer = request.app.state.container
    results = container.catalog_service.search(
        q, min(limit, container.settings.ingredient_max_limit)
    )
    return {
        "success": True,
        "query": q or "",
        "keywords": parse_keywords(q),
        "results": [serialize_food(item) for item in results],
        "count": len(results),
    }


@router.get("/food/combo-suggestions", response_model=None)
def combo_suggestions(  # noqa: PLR0913
    request: Request,
    main_item_id: str | None = Query(default=None, alias="mainItemId"),
    limit: str | None = None,
    nutritional_focus: str | None = None,
    preferences: str | None = None,
) -> dict[str, object] | JSONResponse:
    """Return items that go well with the main item."""
    container: AppContainer = request.app.state.container
    if not main_item_id:
        return _combo_failure(400, "mainItemId is required")
    try:
        combo_request = ComboRequest(
            main_item_id=main_item_id,
            limit=_parse_limit(limit, container.settings.combo_default_limit),
            focus=_parse_focus(nutritional_focus),
            preferences=parse_preferences(preferences),
        )
        suggestions = container.combo_service.suggest(combo_request)
    except Howl2GoError as exc:
        return _combo_failure(exc.status_code, exc.message)
    return {
        "success": True,
        "count": len(suggestions),
        "suggestions": [_serialize_suggestion(entry) for entry in suggestions],
    }


@router.get("/food/{food_id}")
def food_detail(food_id: str, request: Request) -> dict[str, object]:
    """Return a single food item."""
    container: AppContainer = request.app.state.container
    food = container.catalog_service.get_food(food_id)
    return {"success": True, "item": serialize_food(food)}


def _parse_limit(raw: str | None, default: int) -> int:
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise InvalidQuery("limit must be a positive integer") from exc


def _parse_focus(raw: str | None) -> NutritionalFocus | None:
    if raw is None or not raw.strip():
        return None
    focus = NutritionalFocus.parse(raw)
    if focus is None:
        allowed = ", ".join(value.value for value in NutritionalFocus)
        raise InvalidQuery(f"nutritional_focus must be one of: {allowed}")
    return focus


def _combo_failure(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message, "suggestions": []},
    )


def _serialize_scored(scored: ScoredFood) -> dict[str, object]:
    return {**serialize_food(scored.item), "match_score": scored.match_score}


def _serialize_suggestion(suggestion: ComboSuggestion) -> dict[str, object]:
    return {
        "item": serialize_food(suggestion.item),
        "reason": suggestion.reason,
        "frequency": suggestion.frequency,
        "popularity": suggestion.popularity,
        "popularity_score": round(suggestion.popularity_score, 4),
        "nutritional_score": round(suggestion.nutritional_score, 4),
        "score": round(suggestion.score, 4),
    }
