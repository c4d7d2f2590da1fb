"""Order endpoints."""

from fastapi import APIRouter, Depends, Request, status

from howl2go.api.dependencies import get_session, get_user_id
from howl2go.containers import AppContainer
from howl2go.domain.orders import serialize_order
from howl2go.domain.sessions import SessionContext

router = APIRouter(prefix="/api/orders", tags=["orders"])


@router.post("", status_code=status.HTTP_201_CREATED)
def place_order(
    request: Request, session: SessionContext = Depends(get_session)
) -> dict[str, object]:
    """Place an order from the session's cart."""
    container: AppContainer = request.app.state.container
    order = container.order_service.place_order(session)
    return {
        "success": True,
        "message": "Order placed successfully",
        "order": serialize_order(order),
    }


@router.get("")
def order_history(
    request: Request,
    page: int = 1,
    limit: int = 10,
    user_id: str | None = Depends(get_user_id),
) -> dict[str, object]:
    """Return the caller's orders, newest first."""
    container: AppContainer = request.app.state.container
    orders, total = container.order_service.list_orders(user_id, page, limit)
    return {
        "success": True,
        "orders": [serialize_order(order) for order in orders],
        "total": total,
        "page": page,
        "limit": limit,
    }


@router.get("/{order_id}")
def order_detail(
    order_id: str, request: Request, user_id: str | None = Depends(get_user_id)
) -> dict[str, object]:
    """Return one of the caller's orders."""
    container: AppContainer = request.app.state.container
    order = container.order_service.get_order(user_id, order_id)
    return {"success": True, "order": serialize_order(order)}
