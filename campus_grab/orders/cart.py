"""
Session cart.

The cart lives in the signed session cookie as a list of plain dicts;
these helpers convert to and from ``CartItem``.
"""
from __future__ import annotations

from typing import Any

from .models import CartItem, CartResponse

_SESSION_KEY = "cart"


def load_cart(session: dict[str, Any]) -> list[CartItem]:
    raw = session.get(_SESSION_KEY) or []
    try:
        return [CartItem(**entry) for entry in raw]
    except (TypeError, ValueError):
        session.pop(_SESSION_KEY, None)
        return []


def save_cart(session: dict[str, Any], items: list[CartItem]) -> None:
    session[_SESSION_KEY] = [item.model_dump() for item in items]


def add_to_cart(items: list[CartItem], item: CartItem) -> list[CartItem]:
    """Add one unit of *item*; an item already in the cart gets its quantity bumped."""
    if any(i.id == item.id for i in items):
        return [
            i.model_copy(update={"quantity": i.quantity + 1}) if i.id == item.id else i
            for i in items
        ]
    return [*items, item.model_copy(update={"quantity": 1})]


def remove_from_cart(items: list[CartItem], item_id: str) -> list[CartItem]:
    return [i for i in items if i.id != item_id]


def update_quantity(items: list[CartItem], item_id: str, quantity: int) -> list[CartItem]:
    if quantity <= 0:
        return remove_from_cart(items, item_id)
    return [i.model_copy(update={"quantity": quantity}) if i.id == item_id else i for i in items]


def cart_total(items: list[CartItem]) -> float:
    return sum(i.price * i.quantity for i in items)


def cart_count(items: list[CartItem]) -> int:
    return sum(i.quantity for i in items)


def max_eta(items: list[CartItem]) -> int:
    return max((i.eta_minutes for i in items), default=0)


def summarize(items: list[CartItem]) -> CartResponse:
    return CartResponse(
        items=items,
        cart_total=cart_total(items),
        cart_count=cart_count(items),
        max_eta=max_eta(items),
    )
