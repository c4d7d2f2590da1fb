"""Supabase implementation for carts."""

from dataclasses import asdict, dataclass

from supabase import Client

from howl2go.adapters.supabase_support import execute, parse_timestamp
from howl2go.domain.carts import Cart, CartLine
from howl2go.domain.errors import UpstreamFailure
from howl2go.services.carts import CartRepository

_TABLE = "carts"


@dataclass
class SupabaseCartRepository(CartRepository):
    """Supabase-backed cart storage keyed by session id."""

    client: Client

    def get_cart(self, session_id: str) -> Cart | None:
        """Return the cart for a session, if present."""
        response = execute(
            self.client.table(_TABLE)
            .select("*")
            .eq("session_id", session_id)
            .limit(1),
            "get_cart",
        )
        if not response.data:
            return None
        return _parse_cart(response.data[0])

    def save_cart(self, cart: Cart) -> Cart:
        """Upsert the cart row for its session."""
        response = execute(
            self.client.table(_TABLE).upsert(
                {
                    "session_id": cart.session_id,
                    "user_id": cart.user_id,
                    "items": [asdict(line) for line in cart.lines],
                    "updated_at": cart.updated_at.isoformat()
                    if cart.updated_at
                    else None,
                },
                on_conflict="session_id",
            ),
            "save_cart",
        )
        if not response.data:
            raise UpstreamFailure("Failed to save cart")
        return _parse_cart(response.data[0])


def _parse_cart(row: dict[str, object]) -> Cart:
    raw_lines = row.get("items") or []
    return Cart(
        session_id=str(row["session_id"]),
        user_id=row.get("user_id"),
        lines=tuple(
            CartLine(
                food_id=str(line["food_id"]),
                company=str(line.get("company", "")),
                name=str(line.get("name", "")),
                calories=float(line.get("calories") or 0.0),
                total_fat=float(line.get("total_fat") or 0.0),
                protein=float(line.get("protein") or 0.0),
                carbs=float(line.get("carbs") or 0.0),
                price=float(line.get("price") or 0.0),
                quantity=int(line.get("quantity") or 1),
            )
            for line in raw_lines
            if isinstance(line, dict)
        ),
        updated_at=parse_timestamp(row.get("updated_at"))
        if row.get("updated_at")
        else None,
    )
