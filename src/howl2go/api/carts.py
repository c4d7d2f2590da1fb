"""Cart endpoints scoped to the caller's session."""

from fastapi import APIRouter, Depends, Request

from howl2go.api.dependencies import get_session
from howl2go.api.models import AddCartItemPayload, UpdateCartItemPayload
from howl2go.containers import AppContainer
from howl2go.domain.carts import serialize_cart
from howl2go.domain.sessions import SessionContext

router = APIRouter(prefix="/api/cart", tags=["cart"])


@router.get("")
def get_cart(
    request: Request, session: SessionContext = Depends(get_session)
) -> dict[str, object]:
    """Return the current cart."""
    container: AppContainer = request.app.state.container
    cart = container.cart_service.get_cart(session)
    return {"success": True, "cart": serialize_cart(cart)}


@router.post("/items")
def add_item(
    payload: AddCartItemPayload,
    request: Request,
    session: SessionContext = Depends(get_session),
) -> dict[str, object]:
    """Add a food item to the cart."""
    container: AppContainer = request.app.state.container
    cart = container.cart_service.add_item(
        session, payload.food_item_id, payload.quantity
    )
    return {"success": True, "cart": serialize_cart(cart)}


@router.patch("/items/{food_id}")
def update_item(
    food_id: str,
    payload: UpdateCartItemPayload,
    request: Request,
    session: SessionContext = Depends(get_session),
) -> dict[str, object]:
    """Change a line's quantity; zero removes it."""
    container: AppContainer = request.app.state.container
    cart = container.cart_service.update_quantity(session, food_id, payload.quantity)
    return {"success": True, "cart": serialize_cart(cart)}


@router.delete("/items/{food_id}")
def remove_item(
    food_id: str, request: Request, session: SessionContext = Depends(get_session)
) -> dict[str, object]:
    """Remove a food item from the cart."""
    container: AppContainer = request.app.state.container
    cart = container.cart_service.remove_item(session, food_id)
    return {"success": True, "cart": serialize_cart(cart)}


@router.delete("")
def clear_cart(
    request: Request, session: SessionContext = Depends(get_session)
) -> dict[str, object]:
    """Empty the cart."""
    container: AppContainer = request.app.state.container
    cart = container.cart_service.clear(session)
    return {"success": True, "cart": serialize_cart(cart)}
