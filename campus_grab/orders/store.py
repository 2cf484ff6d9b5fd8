from __future__ import annotations

import logging
import threading
import uuid
from datetime import date, datetime

from .models import Order, OrderLine, OrderStatus

logger = logging.getLogger(__name__)

_orders: list[Order] = []  # newest first
_token_counters: dict[date, int] = {}
_lock = threading.Lock()


def _next_token(day: date) -> str:
    """Daily sequential token: the first order of each day is ``#0001``."""
    _token_counters[day] = _token_counters.get(day, 0) + 1
    return f"#{_token_counters[day]:04d}"


def add_order(
    items: list[OrderLine],
    *,
    estimated_time: int,
    admin_id: str | None = None,
    user_id: str | None = None,
    payment_method: str = "cash",
    status: OrderStatus = OrderStatus.pending,
    created_at: datetime | None = None,
) -> Order:
    created = created_at or datetime.now()
    total = sum(line.price * line.quantity for line in items)
    with _lock:
        order = Order(
            id="ORD-" + uuid.uuid4().hex[:10].upper(),
            token_number=_next_token(created.date()),
            items=items,
            total=total,
            status=status,
            created_at=created,
            estimated_time=estimated_time,
            admin_id=admin_id,
            user_id=user_id,
            payment_method=payment_method,
        )
        _orders.insert(0, order)
    logger.info("Order %s placed (%s, admin=%s)", order.id, order.token_number, admin_id)
    return order


def get_order(order_id: str) -> Order:
    with _lock:
        for order in _orders:
            if order.id == order_id:
                return order
    raise KeyError(order_id)


def list_orders(admin_id: str | None = None, user_id: str | None = None) -> list[Order]:
    with _lock:
        orders = list(_orders)
    if admin_id is not None:
        orders = [o for o in orders if o.admin_id == admin_id]
    if user_id is not None:
        orders = [o for o in orders if o.user_id == user_id]
    return orders


def active_orders(admin_id: str | None = None) -> list[Order]:
    return [o for o in list_orders(admin_id=admin_id) if o.status != OrderStatus.completed]


def update_order_status(
    order_id: str,
    status: OrderStatus,
    now: datetime | None = None,
) -> Order:
    """Set an order's status. ``completed_at`` is stamped only the first time."""
    with _lock:
        for i, order in enumerate(_orders):
            if order.id != order_id:
                continue
            updates: dict = {"status": status}
            if status == OrderStatus.completed and order.completed_at is None:
                updates["completed_at"] = now or datetime.now()
            updated = order.model_copy(update=updates)
            _orders[i] = updated
            break
        else:
            raise KeyError(order_id)
    logger.info("Order %s -> %s", order_id, status.value)
    return updated


def current_order(user_id: str | None = None) -> Order | None:
    """Most recent order that is not completed yet."""
    for order in list_orders(user_id=user_id):
        if order.status != OrderStatus.completed:
            return order
    return None


def clear_orders() -> None:
    with _lock:
        _orders.clear()
        _token_counters.clear()
