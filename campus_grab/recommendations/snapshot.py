from __future__ import annotations

from collections import Counter
from collections.abc import Callable

from ..menu.models import MenuItem
from ..orders.models import Order
from .models import MenuItemRecord


def pending_counts(orders: list[Order]) -> Counter[str]:
    """Number of open orders that include each menu item."""
    counts: Counter[str] = Counter()
    for order in orders:
        for item_id in {line.item_id for line in order.items}:
            counts[item_id] += 1
    return counts


def build_records(
    menu_items: list[MenuItem],
    open_orders: list[Order],
    canteen_name: Callable[[str | None], str],
) -> list[MenuItemRecord]:
    """Turn available menu items into wait-estimation records."""
    pending = pending_counts(open_orders)
    return [
        MenuItemRecord(
            id=item.id,
            name=item.name,
            prep_time=item.eta_minutes,
            pending_orders=pending[item.id],
            canteen=canteen_name(item.admin_id),
        )
        for item in menu_items
        if item.available
    ]
