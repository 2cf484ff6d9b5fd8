from __future__ import annotations

import calendar
from collections import defaultdict
from datetime import date, datetime
from typing import Any

from .models import Order, OrderStatus

HISTORY_LIMIT = 100


def _period_bounds(month: int | None, year: int | None) -> tuple[date, date] | None:
    """Inclusive date range for a month of a year, or a whole year."""
    if month and year:
        last_day = calendar.monthrange(year, month)[1]
        return date(year, month, 1), date(year, month, last_day)
    if year:
        return date(year, 1, 1), date(year, 12, 31)
    return None


def _in_period(order: Order, bounds: tuple[date, date] | None) -> bool:
    if bounds is None:
        return True
    start, end = bounds
    return start <= order.created_at.date() <= end


def _group_by_day(orders: list[Order]) -> dict[str, list[Order]]:
    grouped: dict[str, list[Order]] = defaultdict(list)
    for order in orders:
        grouped[order.created_at.date().isoformat()].append(order)
    return grouped


def order_history(
    orders: list[Order],
    month: int | None = None,
    year: int | None = None,
) -> dict[str, Any]:
    """Group a student's orders by day, newest day first."""
    bounds = _period_bounds(month, year)
    selected = sorted(
        (o for o in orders if _in_period(o, bounds)),
        key=lambda o: o.created_at,
        reverse=True,
    )[:HISTORY_LIMIT]

    days = [
        {
            "date": day,
            "orders": [o.model_dump(mode="json") for o in day_orders],
            "order_count": len(day_orders),
            "total_revenue": sum(o.total for o in day_orders),
        }
        for day, day_orders in sorted(_group_by_day(selected).items(), reverse=True)
    ]
    return {"days": days}


def vendor_summary(
    orders: list[Order],
    month: int | None = None,
    year: int | None = None,
    day: date | None = None,
    today: date | None = None,
) -> dict[str, Any]:
    """Revenue summary for a canteen. Pending (unpaid) orders are excluded.

    With *day*, returns that day's orders. Otherwise returns per-day totals
    for the month (defaulting to the current month).
    """
    paid = [o for o in orders if o.status != OrderStatus.pending]

    if day is not None:
        day_orders = sorted(
            (o for o in paid if o.created_at.date() == day),
            key=lambda o: o.created_at,
            reverse=True,
        )
        return {
            "date": day.isoformat(),
            "orders": [o.model_dump(mode="json") for o in day_orders],
            "order_count": len(day_orders),
            "total_revenue": sum(o.total for o in day_orders),
        }

    today = today or datetime.now().date()
    year = year or today.year
    month = month or today.month
    bounds = _period_bounds(month, year)
    in_month = [o for o in paid if _in_period(o, bounds)]

    days = [
        {
            "date": d,
            "order_count": len(day_orders),
            "total_revenue": sum(o.total for o in day_orders),
        }
        for d, day_orders in sorted(_group_by_day(in_month).items(), reverse=True)
    ]
    return {
        "month": month,
        "year": year,
        "days": days,
        "month_total": sum(o.total for o in in_month),
        "total_orders": len(in_month),
    }
