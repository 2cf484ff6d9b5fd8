"""
Student layout payload.

The student app renders a header, the banner for the student's active
order and a bottom navigation bar on every page. This module builds the
data for all three so the client only has to draw it.
"""
from __future__ import annotations

from typing import Any

from ..orders.models import Order, OrderStatus

STATUS_STEPS = (OrderStatus.pending, OrderStatus.preparing, OrderStatus.ready)

STATUS_LABELS: dict[OrderStatus, str] = {
    OrderStatus.pending: "Order Received",
    OrderStatus.preparing: "Preparing",
    OrderStatus.ready: "Ready for Pickup",
    OrderStatus.completed: "Completed",
}

NAV_TABS = (
    {"href": "/canteens", "label": "Home", "badge": False},
    {"href": "/cart", "label": "Cart", "badge": True},
    {"href": "/orders", "label": "Orders", "badge": False},
    {"href": "/profile", "label": "Profile", "badge": False},
)


def badge_text(count: int) -> str | None:
    if count <= 0:
        return None
    return "9+" if count > 9 else str(count)


def build_header(user: dict[str, Any] | None, cart_count: int) -> dict[str, Any]:
    return {
        "user": {"name": user.get("name"), "role": user.get("role")} if user else None,
        "cart_count": cart_count,
    }


def build_banner(order: Order | None) -> dict[str, Any] | None:
    """Banner for the active order; ``None`` when there is nothing in flight."""
    if order is None:
        return None

    current = STATUS_STEPS.index(order.status) if order.status in STATUS_STEPS else -1
    return {
        "order_id": order.id,
        "token_number": order.token_number or f"Order #{order.id}",
        "status": order.status.value,
        "label": STATUS_LABELS[order.status],
        "item_count": len(order.items),
        "total": order.total,
        "steps": [
            {"status": step.value, "active": current >= idx}
            for idx, step in enumerate(STATUS_STEPS)
        ],
    }


def build_nav(cart_count: int, active_path: str | None = None) -> list[dict[str, Any]]:
    tabs = []
    for tab in NAV_TABS:
        href = tab["href"]
        active = bool(active_path) and (active_path == href or active_path.startswith(href + "/"))
        tabs.append({
            "href": href,
            "label": tab["label"],
            "active": active,
            "badge": badge_text(cart_count) if tab["badge"] else None,
        })
    return tabs


def student_layout(
    user: dict[str, Any] | None,
    cart_count: int,
    order: Order | None,
    active_path: str | None = None,
) -> dict[str, Any]:
    return {
        "header": build_header(user, cart_count),
        "banner": build_banner(order),
        "nav": build_nav(cart_count, active_path),
    }
